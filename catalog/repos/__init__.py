from catalog.core.config import Settings

from .base import ServiceStore
from .json_store import JsonServiceStore
from .sql_store import SqlServiceStore


def build_store(settings: Settings) -> ServiceStore:
    """Pick the store implementation named by ``settings.store_backend``."""
    backend = settings.store_backend.lower()
    if backend == "json":
        return JsonServiceStore(settings.services_file)
    if backend == "sql":
        from catalog.database import build_engine

        return SqlServiceStore(build_engine(settings.database_url))
    raise ValueError(f"Unknown STORE_BACKEND: {settings.store_backend!r}")


__all__ = [
    "ServiceStore",
    "JsonServiceStore",
    "SqlServiceStore",
    "build_store",
]

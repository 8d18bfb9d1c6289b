import os
from dataclasses import dataclass


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Service Catalog")
    api_version: str = os.getenv("API_VERSION", "0.1.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))

    # "json" keeps the catalog in a flat file, "sql" in DATABASE_URL
    store_backend: str = os.getenv("STORE_BACKEND", "json")
    services_file: str = os.getenv("SERVICES_FILE", "services.json")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./services.db")

    # Re-read the store before rendering /view
    reload_on_view: bool = _env_flag("RELOAD_ON_VIEW")


settings = Settings()

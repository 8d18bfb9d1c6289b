from .services import ServiceRow

__all__ = ["ServiceRow"]

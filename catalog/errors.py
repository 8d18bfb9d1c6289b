from typing import List, Optional


class CatalogError(Exception):
    """Base class for service catalog errors."""


class ServiceValidationError(CatalogError):
    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems) or "Invalid service")


class ServiceNotFoundError(CatalogError):
    def __init__(self, service_id: int):
        self.service_id = service_id
        super().__init__(f"Service {service_id} not found")


class MalformedInputError(CatalogError):
    def __init__(self, message: str, value: Optional[str] = None):
        self.value = value
        super().__init__(message)


class StorageError(CatalogError):
    """Raised when the backing file can't be read, parsed or written."""

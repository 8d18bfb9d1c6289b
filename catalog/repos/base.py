from abc import ABC, abstractmethod
from typing import List, Optional

from catalog.schemas.services import ServiceCreate, ServiceRead, ServiceUpdate
from catalog.services.search import filter_services


class ServiceStore(ABC):
    """
    Storage seam for the catalog.

    Handlers only talk to this interface, so the flat-file store can be
    swapped for a database without touching them. Writers serialize on the
    store's own lock; reads are not synchronized.
    """

    @abstractmethod
    def load(self) -> None:
        """Bring the store up from its backing medium."""

    @abstractmethod
    def add(self, fields: ServiceCreate) -> ServiceRead:
        """Validate, assign the next id and persist. Raises ServiceValidationError."""

    @abstractmethod
    def update(self, service_id: int, fields: ServiceUpdate) -> ServiceRead:
        """Overwrite every field of one record. Raises ServiceNotFoundError or ServiceValidationError."""

    @abstractmethod
    def all(self) -> List[ServiceRead]:
        """All records in insertion order."""

    @abstractmethod
    def find_by_id(self, service_id: int) -> Optional[ServiceRead]:
        pass

    def search(self, query: Optional[str]) -> List[ServiceRead]:
        return filter_services(query, self.all())

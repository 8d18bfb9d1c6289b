from typing import Iterable, List, Optional

from catalog.schemas.services import SERVICE_FIELDS, ServiceRead


def matches(record: ServiceRead, needle: str) -> bool:
    """True if any text field of the record contains the lowercased needle."""
    return any(needle in str(getattr(record, name)).lower() for name in SERVICE_FIELDS)


def filter_services(query: Optional[str], records: Iterable[ServiceRead]) -> List[ServiceRead]:
    """
    Case-insensitive substring search over every service field.

    An empty query matches everything. Order of ``records`` is preserved.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return list(records)
    return [record for record in records if matches(record, needle)]

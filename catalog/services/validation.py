from typing import Iterable, List, Optional

from catalog.schemas.services import FIELD_LABELS, SERVICE_FIELDS, ServiceFields, ServiceRead


def collect_problems(
    candidate: ServiceFields,
    existing: Iterable[ServiceRead],
    exclude_id: Optional[int] = None,
) -> List[str]:
    """
    Check a candidate service against the current catalog.

    Args:
        candidate: Fields being added or written over an existing record
        existing: Records currently in the catalog
        exclude_id: Id of the record being edited, so it may keep its own app_code

    Returns:
        Human-readable problems; empty when the candidate is acceptable
    """
    problems = []

    for name in SERVICE_FIELDS:
        value = getattr(candidate, name)
        if not isinstance(value, str) or not value.strip():
            problems.append(f"{FIELD_LABELS[name]} is required")

    code = candidate.app_code
    if code and code.strip():
        for record in existing:
            if exclude_id is not None and record.id == exclude_id:
                continue
            if record.app_code == code:
                problems.append(f"App Code '{code}' is already in use")
                break

    return problems


def validate_service(
    candidate: ServiceFields,
    existing: Iterable[ServiceRead],
    exclude_id: Optional[int] = None,
) -> bool:
    return not collect_problems(candidate, existing, exclude_id=exclude_id)

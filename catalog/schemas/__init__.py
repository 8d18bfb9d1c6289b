from .services import (
    FIELD_LABELS,
    SERVICE_FIELDS,
    ServiceCreate,
    ServiceFields,
    ServiceRead,
    ServiceUpdate,
)

__all__ = [
    "FIELD_LABELS",
    "SERVICE_FIELDS",
    "ServiceCreate",
    "ServiceFields",
    "ServiceRead",
    "ServiceUpdate",
]

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status

from catalog.api.deps import get_store
from catalog.errors import ServiceNotFoundError, ServiceValidationError
from catalog.repos.base import ServiceStore
from catalog.schemas.services import ServiceCreate, ServiceRead, ServiceUpdate


router = APIRouter(prefix="/api/v1/services", tags=["Services"])


def _validation_failed(error: ServiceValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=str(error),
        headers={"Content-Type": "application/problem+json"},
    )


@router.get("", response_model=List[ServiceRead])
def list_services(
    query: Optional[str] = Query(None),
    store: ServiceStore = Depends(get_store),
):
    """List services, optionally narrowed by a case-insensitive search."""
    return store.search(query)


@router.post("", response_model=ServiceRead, status_code=status.HTTP_201_CREATED)
def create_service(
    service_data: ServiceCreate,
    store: ServiceStore = Depends(get_store),
):
    try:
        return store.add(service_data)
    except ServiceValidationError as e:
        raise _validation_failed(e)


@router.get("/{service_id}", response_model=ServiceRead)
def get_service(
    service_id: int,
    store: ServiceStore = Depends(get_store),
):
    service = store.find_by_id(service_id)
    if not service:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Service not found",
        )
    return service


@router.put("/{service_id}", response_model=ServiceRead)
def update_service(
    service_id: int,
    service_data: ServiceUpdate,
    store: ServiceStore = Depends(get_store),
):
    """Overwrite every field of a service. The id never changes."""
    try:
        return store.update(service_id, service_data)
    except ServiceNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Service not found",
        )
    except ServiceValidationError as e:
        raise _validation_failed(e)

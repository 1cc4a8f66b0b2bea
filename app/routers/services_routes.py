# app/routers/services_routes.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from app.deps import require_admin
from app.models import Service, User
from app.schemas import ServiceCreate, ServicePublic, ServiceUpdate
from app.storage import Storage, get_storage

router = APIRouter(
    prefix="/services",
    tags=["services"],
)


@router.get("", response_model=List[ServicePublic])
def list_services(store: Storage = Depends(get_storage)):
    return store.list_services()


@router.post("", response_model=ServicePublic, status_code=201)
def create_service(
    service: ServiceCreate,
    store: Storage = Depends(get_storage),
    _: User = Depends(require_admin),
):
    data = service.model_dump()
    data["category"] = service.category.value
    return store.insert_service(Service(**data))


@router.patch("/{service_id}", response_model=ServicePublic)
def update_service(
    service_id: int,
    changes: ServiceUpdate,
    store: Storage = Depends(get_storage),
    _: User = Depends(require_admin),
):
    # Existing bookings keep referencing the service, so a new duration
    # applies to their conflict checks from now on
    data = changes.model_dump(exclude_unset=True)
    if data.get("category") is not None:
        data["category"] = data["category"].value
    updated = store.update_service(service_id, data)
    if updated is None:
        raise HTTPException(status_code=404, detail="Service not found")
    return updated


@router.delete("/{service_id}", status_code=204)
def delete_service(
    service_id: int,
    store: Storage = Depends(get_storage),
    _: User = Depends(require_admin),
):
    # 1) Active bookings still need this service's duration for conflict checks
    if store.get_service(service_id) is not None and store.count_active_bookings_for_service(service_id):
        raise HTTPException(status_code=409, detail="Service has active bookings")

    # 2) Delete
    if not store.delete_service(service_id):
        raise HTTPException(status_code=404, detail="Service not found")
    return Response(status_code=204)

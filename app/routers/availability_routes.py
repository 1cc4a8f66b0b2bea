# app/routers/availability_routes.py

from datetime import date as Date, datetime
from typing import List

from fastapi import APIRouter, Depends, Query

from app.availability import compute_available_slots, occupied_slots
from app.clock import get_now
from app.schemas import OccupiedSlot
from app.storage import Storage, get_storage

router = APIRouter(
    prefix="/availability",
    tags=["availability"],
)


@router.get("", response_model=List[str])
def available_slots(
    date: Date,
    service_id: int = Query(alias="serviceId"),
    store: Storage = Depends(get_storage),
    now: datetime = Depends(get_now),
):
    # 1) Unknown service has no slots
    services = {s.id: s for s in store.list_services()}
    service = services.get(service_id)
    if service is None:
        return []

    # 2) Fresh reads for the day, then compute
    day = date.isoformat()
    return compute_available_slots(
        day,
        service,
        store.get_shop_settings(),
        store.list_bookings_on_date(day),
        store.list_blocked_times_on_date(day),
        now,
        services,
    )


@router.get("/occupied", response_model=List[OccupiedSlot])
def busy_slots(store: Storage = Depends(get_storage)):
    services = {s.id: s for s in store.list_services()}
    return occupied_slots(store.list_bookings(), services)

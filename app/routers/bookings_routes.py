# app/routers/bookings_routes.py

from datetime import datetime
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from app.admission import admit_booking, check_status_transition
from app.clock import get_now
from app.config import settings
from app.deps import require_admin
from app.models import Booking, User
from app.notifications import NotificationDispatcher, get_dispatcher
from app.rate_limiter import limit_booking_attempts
from app.schemas import BookingCreate, BookingPublic, BookingStatusUpdate
from app.storage import Storage, get_storage

router = APIRouter(
    prefix="/bookings",
    tags=["bookings"],
)


def _public(booking: Booking, service_names: dict) -> dict:
    data = booking.model_dump()
    data["service_name"] = service_names.get(booking.service_id)
    return data


@router.post(
    "",
    response_model=BookingPublic,
    status_code=201,
    dependencies=[Depends(limit_booking_attempts)],
)
def create_booking(
    booking: BookingCreate,
    background_tasks: BackgroundTasks,
    store: Storage = Depends(get_storage),
    now: datetime = Depends(get_now),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    # Notification is delivered after the response, never blocking admission
    created = admit_booking(
        store,
        booking,
        now,
        notify=lambda event: background_tasks.add_task(dispatcher.booking_created, event),
    )
    service = store.get_service(created.service_id)
    service_names = {service.id: service.name} if service else {}
    return _public(created, service_names)


@router.get("", response_model=List[BookingPublic])
def list_bookings(
    store: Storage = Depends(get_storage),
    _: User = Depends(require_admin),
):
    service_names = {s.id: s.name for s in store.list_services()}
    return [_public(b, service_names) for b in store.list_bookings()]


@router.patch("/{booking_id}/status", response_model=BookingPublic)
def update_booking_status(
    booking_id: int,
    update: BookingStatusUpdate,
    store: Storage = Depends(get_storage),
    _: User = Depends(require_admin),
):
    # 1) Find the booking
    target = store.get_booking(booking_id)
    if target is None:
        raise HTTPException(status_code=404, detail="Booking not found")

    # 2) Transition check (permissive unless strict mode is on)
    check_status_transition(target.status, update.status.value, settings.strict_status_transitions)

    # 3) Persist
    updated = store.update_booking_status(booking_id, update.status.value)
    service = store.get_service(updated.service_id)
    service_names = {service.id: service.name} if service else {}
    return _public(updated, service_names)

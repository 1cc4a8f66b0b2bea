# app/admission.py
"""
Booking admission.

The availability list a customer picked from may be stale by the time the
booking arrives, so every request is re-checked against freshly read
bookings, blocks and shop hours right before it is persisted.
"""

import logging
from datetime import date as Date, datetime
from typing import Callable, Iterable, Mapping, Optional

from app.availability import busy_intervals
from app.blackouts import has_full_day_block
from app.clock import today_and_minutes
from app.core import LEAD_TIME_MINUTES, occupied_interval, overlaps, time_to_minutes
from app.models import BlockedTime, Booking, BookingStatus, Service, ShopSettings
from app.notifications import BookingCreatedEvent
from app.schemas import BookingCreate

logger = logging.getLogger(__name__)


class AdmissionError(Exception):
    status_code = 400
    code = "admission_error"
    message = "Agendamento inválido"
    field: Optional[str] = None

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        if message is not None:
            self.message = message
        if field is not None:
            self.field = field
        super().__init__(self.message)


class InvalidService(AdmissionError):
    code = "invalid_service"
    message = "Serviço inválido"
    field = "serviceId"


class OutOfHours(AdmissionError):
    code = "out_of_hours"
    message = "Horário fora do expediente"
    field = "time"


class PastDate(AdmissionError):
    code = "past_date"
    message = "Não é possível agendar para uma data passada"
    field = "date"


class InsufficientLeadTime(AdmissionError):
    code = "insufficient_lead_time"
    message = "Agendamentos para hoje exigem 2 horas de antecedência"
    field = "time"


class BookingConflict(AdmissionError):
    status_code = 409
    code = "booking_conflict"
    message = "Este horário já está reservado"
    field = "time"


class BlockedConflict(AdmissionError):
    status_code = 409
    code = "blocked_conflict"
    message = "Este horário está bloqueado"
    field = "time"


class InvalidStatusTransition(AdmissionError):
    status_code = 409
    code = "invalid_status_transition"
    message = "Transição de estado inválida"
    field = "status"


def validate_admission(
    request: BookingCreate,
    service: Optional[Service],
    shop_settings: ShopSettings,
    bookings_on_date: Iterable[Booking],
    blocks_on_date: Iterable[BlockedTime],
    now: datetime,
    services: Mapping[int, Service],
) -> None:
    """Raise the first failing AdmissionError for a single requested start."""
    # 1) Service must exist
    if service is None:
        raise InvalidService()

    # 2) Whole occupied interval inside shop hours
    start, end = occupied_interval(time_to_minutes(request.time), service.duration)
    open_minutes = time_to_minutes(shop_settings.open_time)
    close_minutes = time_to_minutes(shop_settings.close_time)
    if start < open_minutes or end > close_minutes:
        raise OutOfHours()

    # 3) No past dates
    today, now_minutes = today_and_minutes(now)
    target = Date.fromisoformat(request.date)
    if target < today:
        raise PastDate()

    # 4) Lead time for same-day bookings
    if target == today and start < now_minutes + LEAD_TIME_MINUTES:
        raise InsufficientLeadTime()

    blocks_on_date = list(blocks_on_date)
    booked, blocked = busy_intervals(bookings_on_date, blocks_on_date, services)

    # 5) Existing bookings
    if any(overlaps(start, end, s, e) for s, e in booked):
        raise BookingConflict()

    # 6) Blocks, whole-day or sub-range
    if has_full_day_block(blocks_on_date):
        raise BlockedConflict()
    if any(overlaps(start, end, s, e) for s, e in blocked):
        raise BlockedConflict()


def admit_booking(
    store,
    request: BookingCreate,
    now: datetime,
    notify: Optional[Callable[[BookingCreatedEvent], None]] = None,
) -> Booking:
    """
    Re-check `request` against fresh data and persist it as pending.

    `notify` receives the "booking created" event after the booking is
    stored; it must not block (the HTTP layer hands it to a background task).
    """
    services = {s.id: s for s in store.list_services()}
    service = services.get(request.service_id)
    shop_settings = store.get_shop_settings()
    bookings_on_date = store.list_bookings_on_date(request.date)
    blocks_on_date = store.list_blocked_times_on_date(request.date)

    try:
        validate_admission(
            request, service, shop_settings, bookings_on_date, blocks_on_date, now, services,
        )
    except AdmissionError as exc:
        logger.info(
            "Rejected booking for %s %s (service %s): %s",
            request.date, request.time, request.service_id, exc.code,
        )
        raise

    booking = store.insert_booking(
        Booking(
            customer_name=request.customer_name,
            customer_phone=request.customer_phone,
            customer_email=request.customer_email,
            service_id=service.id,
            date=request.date,
            time=request.time,
            status=BookingStatus.pending.value,
        )
    )
    logger.info("Admitted booking %s for %s %s", booking.id, booking.date, booking.time)

    if notify is not None:
        notify(BookingCreatedEvent.from_booking(booking, service))
    return booking


# pending -> confirmed/cancelled, confirmed -> completed/cancelled
ALLOWED_TRANSITIONS = {
    BookingStatus.pending: {BookingStatus.confirmed, BookingStatus.cancelled},
    BookingStatus.confirmed: {BookingStatus.completed, BookingStatus.cancelled},
    BookingStatus.completed: set(),
    BookingStatus.cancelled: set(),
}


def check_status_transition(current: str, target: str, strict: bool) -> None:
    """Permissive unless `strict`; then only the legal transitions pass."""
    if not strict:
        return
    try:
        allowed = ALLOWED_TRANSITIONS[BookingStatus(current)]
    except ValueError:
        raise InvalidStatusTransition(f"Estado atual desconhecido: {current}")
    if BookingStatus(target) not in allowed:
        raise InvalidStatusTransition(f"Não é possível mudar de {current} para {target}")

# app/availability.py
"""
Availability calculator.

Given a date, a service, shop hours, the day's bookings and blocks and the
current shop-local time, produce the start times a new booking can take.
The same rules are re-checked at write time by app.admission.
"""

import logging
from datetime import date as Date, datetime
from typing import Iterable, Mapping, Optional

from app.blackouts import block_interval, has_full_day_block
from app.clock import today_and_minutes
from app.core import (
    LEAD_TIME_MINUTES,
    SLOT_STEP_MINUTES,
    minutes_to_time,
    occupied_interval,
    overlaps,
    time_to_minutes,
)
from app.models import BlockedTime, Booking, BookingStatus, Service, ShopSettings

logger = logging.getLogger(__name__)


def active_bookings(bookings: Iterable[Booking]) -> list[Booking]:
    """Cancelled bookings are soft-voided and never occupy time."""
    return [b for b in bookings if b.status != BookingStatus.cancelled.value]


def booking_interval(booking: Booking, services: Mapping[int, Service]) -> Optional[tuple[int, int]]:
    service = services.get(booking.service_id)
    if service is None:
        logger.warning(
            "Booking %s references missing service %s, ignoring it",
            booking.id, booking.service_id,
        )
        return None
    return occupied_interval(time_to_minutes(booking.time), service.duration)


def busy_intervals(
    bookings_on_date: Iterable[Booking],
    blocks_on_date: Iterable[BlockedTime],
    services: Mapping[int, Service],
) -> tuple[list[tuple[int, int]], list[tuple[int, int]]]:
    """Occupied intervals of active bookings and of sub-range blocks."""
    booked = []
    for b in active_bookings(bookings_on_date):
        interval = booking_interval(b, services)
        if interval is not None:
            booked.append(interval)

    blocked = []
    for block in blocks_on_date:
        interval = block_interval(block)
        if interval is not None:
            blocked.append(interval)

    return booked, blocked


def compute_available_slots(
    date: str,
    service: Service,
    shop_settings: ShopSettings,
    bookings_on_date: Iterable[Booking],
    blocks_on_date: Iterable[BlockedTime],
    now: datetime,
    services: Mapping[int, Service],
) -> list[str]:
    """
    Ordered "HH:MM" start times for `service` on `date`.

    `services` resolves the duration of each existing booking. Nothing
    passed in is mutated.
    """
    blocks_on_date = list(blocks_on_date)
    if has_full_day_block(blocks_on_date):
        return []

    today, now_minutes = today_and_minutes(now)
    target = Date.fromisoformat(date)
    if target < today:
        return []
    is_today = target == today

    open_minutes = time_to_minutes(shop_settings.open_time)
    close_minutes = time_to_minutes(shop_settings.close_time)
    booked, blocked = busy_intervals(bookings_on_date, blocks_on_date, services)

    available = []
    for candidate in range(open_minutes, close_minutes, SLOT_STEP_MINUTES):
        slot_start, slot_end = occupied_interval(candidate, service.duration)

        # 1) Would run past closing
        if slot_end > close_minutes:
            continue

        # 2) Lead time for same-day bookings
        if is_today and candidate < now_minutes + LEAD_TIME_MINUTES:
            continue

        # 3) Existing bookings
        if any(overlaps(slot_start, slot_end, s, e) for s, e in booked):
            continue

        # 4) Blocked sub-ranges
        if any(overlaps(slot_start, slot_end, s, e) for s, e in blocked):
            continue

        available.append(minutes_to_time(candidate))

    return available


def occupied_slots(bookings: Iterable[Booking], services: Mapping[int, Service]) -> list[dict]:
    """
    Busy 15-minute ticks of every active booking, as {"date", "time"} pairs.

    Kept for callers that want a busy set instead of an available set.
    """
    ticks = []
    for b in active_bookings(bookings):
        interval = booking_interval(b, services)
        if interval is None:
            continue
        start, end = interval
        for tick in range(start, end, SLOT_STEP_MINUTES):
            ticks.append({"date": b.date, "time": minutes_to_time(tick)})
    return ticks

# tests/test_availability.py

from app.admission import validate_admission
from app.availability import compute_available_slots, occupied_slots
from app.blackouts import block_interval, blocks_on_date, has_full_day_block, is_full_day
from app.models import BlockedTime, Booking, Service, ShopSettings
from app.schemas import BookingCreate

from tests.conftest import NOW, TODAY, TOMORROW, YESTERDAY

CUT = Service(id=1, name="Precision Cut", description="", price=4500, duration=45)
BEARD = Service(id=2, name="Beard Sculpt", description="", price=3500, duration=30)
SERVICES = {1: CUT, 2: BEARD}
HOURS = ShopSettings(id=1, open_time="09:00", close_time="19:00")


def booking(time, service_id=1, date=TOMORROW, status="pending"):
    return Booking(
        id=1, customer_name="Ana", customer_phone="1199", customer_email="ana@example.com",
        service_id=service_id, date=date, time=time, status=status,
    )


def slots(date=TOMORROW, service=CUT, bookings=(), blocks=(), hours=HOURS, now=NOW):
    return compute_available_slots(date, service, hours, list(bookings), list(blocks), now, SERVICES)


def test_empty_day_runs_from_open_until_service_fits():
    result = slots()
    assert result[0] == "09:00"
    # 18:00 + 45 + 5 == 18:50 fits, 18:15 would end at 19:05
    assert result[-1] == "18:00"
    assert len(result) == 37
    assert result == sorted(set(result))


def test_close_time_includes_cleanup_buffer():
    hours = ShopSettings(id=1, open_time="09:00", close_time="10:00")
    assert slots(hours=hours, service=BEARD) == ["09:00", "09:15"]
    # 45 + 5 minutes only fit once in a one hour day
    assert slots(hours=hours) == ["09:00"]


def test_same_day_lead_time():
    result = slots(date=TODAY)
    assert result[0] == "12:00"
    assert "11:45" not in result


def test_past_date_has_no_slots():
    assert slots(date=YESTERDAY) == []


def test_existing_booking_blocks_overlapping_candidates():
    result = slots(bookings=[booking("10:00")])
    assert "09:00" in result
    # 09:15 + 50 runs into the booking that starts at 10:00
    assert "09:15" not in result
    assert "10:00" not in result
    assert "10:45" not in result
    assert "11:00" in result


def test_existing_booking_uses_its_own_service_duration():
    # beard booking at 10:00 occupies [600, 635)
    result = slots(bookings=[booking("10:00", service_id=2)])
    assert "10:30" not in result
    assert "10:45" in result


def test_cancelled_booking_frees_its_interval():
    assert "10:00" not in slots(bookings=[booking("10:00")])
    assert "10:00" in slots(bookings=[booking("10:00", status="cancelled")])


def test_booking_for_deleted_service_is_ignored():
    assert "10:00" in slots(bookings=[booking("10:00", service_id=99)])


def test_full_day_block_empties_the_day():
    block = BlockedTime(id=1, date=TOMORROW, reason="Feriado")
    assert slots(blocks=[block]) == []
    assert slots(blocks=[block], service=BEARD, hours=ShopSettings(id=1, open_time="06:00", close_time="23:00")) == []


def test_sub_range_block_only_removes_overlapping_slots():
    block = BlockedTime(id=1, date=TOMORROW, start_time="12:00", end_time="13:00")
    result = slots(blocks=[block])
    unblocked = slots()
    removed = [t for t in unblocked if t not in result]
    assert removed == ["11:15", "11:30", "11:45", "12:00", "12:15", "12:30", "12:45"]
    assert "11:00" in result
    assert "13:00" in result


def test_calculation_does_not_mutate_inputs():
    bookings = [booking("10:00")]
    blocks = [BlockedTime(id=1, date=TOMORROW, start_time="15:00", end_time="16:00")]
    slots(bookings=bookings, blocks=blocks)
    assert bookings[0].time == "10:00" and bookings[0].status == "pending"
    assert blocks[0].start_time == "15:00"
    assert HOURS.open_time == "09:00"


def test_every_available_slot_is_admissible():
    bookings = [booking("10:00"), booking("14:30", service_id=2)]
    blocks = [BlockedTime(id=1, date=TODAY, start_time="16:00", end_time="16:45")]
    for date, day_bookings, day_blocks in ((TODAY, [], blocks), (TOMORROW, bookings, [])):
        for service in (CUT, BEARD):
            for t in slots(date=date, service=service, bookings=day_bookings, blocks=day_blocks):
                request = BookingCreate(
                    customer_name="Ana", customer_phone="1199", customer_email="ana@example.com",
                    service_id=service.id, date=date, time=t,
                )
                validate_admission(request, service, HOURS, day_bookings, day_blocks, NOW, SERVICES)


def test_occupied_slots_expands_active_bookings():
    ticks = occupied_slots(
        [booking("10:00"), booking("15:00", status="cancelled")],
        SERVICES,
    )
    assert ticks == [
        {"date": TOMORROW, "time": "10:00"},
        {"date": TOMORROW, "time": "10:15"},
        {"date": TOMORROW, "time": "10:30"},
        {"date": TOMORROW, "time": "10:45"},
    ]


def test_occupied_ticks_match_unavailable_starts_for_short_service():
    # a 10 minute service (15 with cleanup) can start on any tick not occupied
    quick = Service(id=3, name="Quick", description="", price=1000, duration=10)
    services = {**SERVICES, 3: quick}
    bookings = [booking("10:00")]
    busy = {t["time"] for t in occupied_slots(bookings, services)}
    free = set(compute_available_slots(TOMORROW, quick, HOURS, bookings, [], NOW, services))
    assert busy.isdisjoint(free)
    assert busy | free == set(slots(service=quick))


def test_blackout_registry_helpers():
    full = BlockedTime(id=1, date=TOMORROW)
    partial = BlockedTime(id=2, date=TOMORROW, start_time="12:00", end_time="13:30")
    other = BlockedTime(id=3, date=TODAY)

    assert blocks_on_date([full, partial, other], TOMORROW) == [full, partial]
    assert is_full_day(full)
    assert not is_full_day(partial)
    assert block_interval(full) is None
    assert block_interval(partial) == (720, 810)
    assert has_full_day_block([partial, full])
    assert not has_full_day_block([partial])

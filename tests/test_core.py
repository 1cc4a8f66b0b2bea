# tests/test_core.py

import pytest

from app.core import (
    CLEANUP_MINUTES,
    is_valid_time,
    minutes_to_time,
    occupied_interval,
    overlaps,
    time_to_minutes,
)


def test_time_to_minutes():
    assert time_to_minutes("00:00") == 0
    assert time_to_minutes("09:00") == 540
    assert time_to_minutes("10:50") == 650
    assert time_to_minutes("23:59") == 1439
    assert time_to_minutes("9:05") == 545


def test_minutes_to_time_zero_pads():
    assert minutes_to_time(0) == "00:00"
    assert minutes_to_time(545) == "09:05"
    assert minutes_to_time(1439) == "23:59"


def test_round_trip_every_minute_of_the_day():
    for total in range(24 * 60):
        t = minutes_to_time(total)
        assert is_valid_time(t)
        assert minutes_to_time(time_to_minutes(t)) == t


@pytest.mark.parametrize("value", ["24:00", "12:60", "1200", "ab:cd", "", "12:5"])
def test_invalid_time_strings(value):
    assert not is_valid_time(value)


def test_occupied_interval_adds_cleanup():
    assert CLEANUP_MINUTES == 5
    assert occupied_interval(600, 45) == (600, 650)
    assert occupied_interval(600, 45, cleanup=0) == (600, 645)


def test_overlaps():
    assert overlaps(600, 650, 620, 700)
    assert overlaps(620, 700, 600, 650)
    assert overlaps(600, 700, 620, 630)


def test_touching_intervals_do_not_overlap():
    assert not overlaps(600, 650, 650, 700)
    assert not overlaps(650, 700, 600, 650)

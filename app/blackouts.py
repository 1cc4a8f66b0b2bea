# app/blackouts.py
"""
Administrator blackout windows.

A block is either a whole day (no start/end) or a sub-range of one date.
There is no recurrence and no date ranges: one block, one explicit date.
"""

from typing import Iterable, Optional

from app.core import time_to_minutes
from app.models import BlockedTime


def blocks_on_date(blocks: Iterable[BlockedTime], date: str) -> list[BlockedTime]:
    return [b for b in blocks if b.date == date]


def is_full_day(block: BlockedTime) -> bool:
    # half-specified blocks are rejected at creation; treat any leftovers as full day
    return block.start_time is None or block.end_time is None


def block_interval(block: BlockedTime) -> Optional[tuple[int, int]]:
    """Minute interval of a sub-range block, None for a whole-day block."""
    if is_full_day(block):
        return None
    return time_to_minutes(block.start_time), time_to_minutes(block.end_time)


def has_full_day_block(blocks: Iterable[BlockedTime]) -> bool:
    return any(is_full_day(b) for b in blocks)

# app/clock.py

from datetime import date, datetime
from zoneinfo import ZoneInfo

from app.config import settings


def shop_now() -> datetime:
    """Current time projected into the shop's timezone."""
    return datetime.now(ZoneInfo(settings.shop_timezone))


def today_and_minutes(now: datetime) -> tuple[date, int]:
    return now.date(), now.hour * 60 + now.minute


# Dependency: overridden in tests to freeze time
def get_now() -> datetime:
    return shop_now()

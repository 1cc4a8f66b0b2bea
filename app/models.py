# app/models.py

from typing import Optional
from datetime import datetime, timezone
from enum import Enum

from sqlmodel import SQLModel, Field


class ServiceCategory(str, Enum):
    main = "main"
    sporadic = "sporadic"


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    completed = "completed"
    cancelled = "cancelled"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Service(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    name: str
    description: str
    price: int  # in cents
    duration: int  # in minutes
    image: Optional[str] = None
    category: str = ServiceCategory.main.value


class Booking(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    customer_name: str
    customer_phone: str
    customer_email: str
    # bookings reference the service; its current duration is used for conflicts
    service_id: int = Field(index=True)
    date: str = Field(index=True)  # YYYY-MM-DD
    time: str  # HH:MM
    status: str = BookingStatus.pending.value
    created_at: datetime = Field(default_factory=_utcnow)


class BlockedTime(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    date: str = Field(index=True)
    start_time: Optional[str] = None  # both None means the whole day
    end_time: Optional[str] = None
    reason: Optional[str] = None


class ShopSettings(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    open_time: str = "09:00"
    close_time: str = "19:00"


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(index=True, unique=True)
    password_hash: str
    name: str
    is_admin: bool = True

# app/schemas.py

from datetime import date as Date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from app.core import is_valid_time, minutes_to_time, time_to_minutes
from app.models import BookingStatus, ServiceCategory


class CamelModel(BaseModel):
    # camelCase on the wire, snake_case accepted too
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _check_date(value: str) -> str:
    try:
        return Date.fromisoformat(value).isoformat()
    except ValueError:
        raise PydanticCustomError("invalid_date", "Data inválida (AAAA-MM-DD)")


def _check_time(value: str) -> str:
    if not is_valid_time(value):
        raise PydanticCustomError("invalid_time", "Formato inválido (HH:MM)")
    # normalize "9:00" to "09:00"
    return minutes_to_time(time_to_minutes(value))


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    name: str
    is_admin: bool


class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=8, max_length=72)
    name: str = Field(min_length=1, max_length=100)


class ServiceCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(max_length=500)
    price: int = Field(ge=0)  # cents, never float
    duration: int = Field(gt=0)
    image: Optional[str] = Field(default=None, max_length=255)
    category: ServiceCategory = ServiceCategory.main


class ServiceUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    price: Optional[int] = Field(default=None, ge=0)
    duration: Optional[int] = Field(default=None, gt=0)
    image: Optional[str] = Field(default=None, max_length=255)
    category: Optional[ServiceCategory] = None


class ServicePublic(CamelModel):
    id: int
    name: str
    description: str
    price: int
    duration: int
    image: Optional[str] = None
    category: ServiceCategory


class BookingCreate(CamelModel):
    customer_name: str = Field(min_length=1, max_length=100)
    customer_phone: str = Field(min_length=1, max_length=20)
    customer_email: EmailStr
    service_id: int
    date: str
    time: str

    @field_validator("date")
    @classmethod
    def valid_date(cls, v: str) -> str:
        return _check_date(v)

    @field_validator("time")
    @classmethod
    def valid_time(cls, v: str) -> str:
        return _check_time(v)


class BookingPublic(CamelModel):
    id: int
    customer_name: str
    customer_phone: str
    customer_email: str
    service_id: int
    service_name: Optional[str] = None
    date: str
    time: str
    status: BookingStatus
    created_at: datetime


class BookingStatusUpdate(CamelModel):
    status: BookingStatus


class BlockedTimeCreate(CamelModel):
    date: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    reason: Optional[str] = Field(default=None, max_length=255)

    @field_validator("date")
    @classmethod
    def valid_date(cls, v: str) -> str:
        return _check_date(v)

    @field_validator("start_time", "end_time")
    @classmethod
    def valid_time(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _check_time(v)

    @model_validator(mode="after")
    def whole_day_or_range(self):
        if (self.start_time is None) != (self.end_time is None):
            raise PydanticCustomError(
                "incomplete_range", "Informe início e fim, ou nenhum para bloquear o dia inteiro",
            )
        if self.start_time is not None and time_to_minutes(self.start_time) >= time_to_minutes(self.end_time):
            raise PydanticCustomError("invalid_range", "O início deve ser antes do fim")
        return self


class BlockedTimePublic(CamelModel):
    id: int
    date: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    reason: Optional[str] = None


class ShopSettingsUpdate(CamelModel):
    open_time: str
    close_time: str

    @field_validator("open_time", "close_time")
    @classmethod
    def valid_time(cls, v: str) -> str:
        return _check_time(v)

    @model_validator(mode="after")
    def open_before_close(self):
        if time_to_minutes(self.open_time) >= time_to_minutes(self.close_time):
            raise PydanticCustomError("invalid_hours", "A abertura deve ser antes do fecho")
        return self


class ShopSettingsPublic(CamelModel):
    open_time: str
    close_time: str


class OccupiedSlot(BaseModel):
    date: str
    time: str

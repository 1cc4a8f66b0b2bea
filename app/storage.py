# app/storage.py

from typing import Optional

from fastapi import Depends
from sqlmodel import Session, func, select

from app.blackouts import blocks_on_date
from app.db import get_session
from app.models import BlockedTime, Booking, BookingStatus, Service, ShopSettings, User

SETTINGS_ID = 1


class Storage:
    """Persistence store for services, bookings, blocks, settings and admins."""

    def __init__(self, session: Session):
        self.session = session

    def _save(self, obj):
        self.session.add(obj)
        self.session.commit()
        self.session.refresh(obj)
        return obj

    # Services

    def list_services(self) -> list[Service]:
        return list(self.session.exec(select(Service).order_by(Service.id)).all())

    def get_service(self, service_id: int) -> Optional[Service]:
        return self.session.get(Service, service_id)

    def insert_service(self, service: Service) -> Service:
        return self._save(service)

    def update_service(self, service_id: int, changes: dict) -> Optional[Service]:
        service = self.session.get(Service, service_id)
        if service is None:
            return None
        for key, value in changes.items():
            setattr(service, key, value)
        return self._save(service)

    def delete_service(self, service_id: int) -> bool:
        service = self.session.get(Service, service_id)
        if service is None:
            return False
        self.session.delete(service)
        self.session.commit()
        return True

    # Bookings

    def list_bookings(self) -> list[Booking]:
        stmt = select(Booking).order_by(Booking.created_at.desc(), Booking.id.desc())
        return list(self.session.exec(stmt).all())

    def list_bookings_on_date(self, date: str) -> list[Booking]:
        stmt = select(Booking).where(Booking.date == date).order_by(Booking.time)
        return list(self.session.exec(stmt).all())

    def count_active_bookings_for_service(self, service_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(Booking)
            .where(Booking.service_id == service_id)
            .where(Booking.status != BookingStatus.cancelled.value)
        )
        return self.session.exec(stmt).one()

    def get_booking(self, booking_id: int) -> Optional[Booking]:
        return self.session.get(Booking, booking_id)

    def insert_booking(self, booking: Booking) -> Booking:
        return self._save(booking)

    def update_booking_status(self, booking_id: int, status: str) -> Optional[Booking]:
        booking = self.session.get(Booking, booking_id)
        if booking is None:
            return None
        booking.status = status
        return self._save(booking)

    # Blocked times

    def list_blocked_times(self) -> list[BlockedTime]:
        stmt = select(BlockedTime).order_by(BlockedTime.date, BlockedTime.start_time)
        return list(self.session.exec(stmt).all())

    def list_blocked_times_on_date(self, date: str) -> list[BlockedTime]:
        return blocks_on_date(self.list_blocked_times(), date)

    def insert_blocked_time(self, block: BlockedTime) -> BlockedTime:
        return self._save(block)

    def delete_blocked_time(self, block_id: int) -> bool:
        block = self.session.get(BlockedTime, block_id)
        if block is None:
            return False
        self.session.delete(block)
        self.session.commit()
        return True

    # Shop settings (singleton)

    def get_shop_settings(self) -> ShopSettings:
        shop_settings = self.session.get(ShopSettings, SETTINGS_ID)
        if shop_settings is None:
            # lazily created with 09:00-19:00 on first read
            shop_settings = self._save(ShopSettings(id=SETTINGS_ID))
        return shop_settings

    def upsert_shop_settings(self, open_time: str, close_time: str) -> ShopSettings:
        shop_settings = self.get_shop_settings()
        shop_settings.open_time = open_time
        shop_settings.close_time = close_time
        return self._save(shop_settings)

    # Administrators

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.username == username)).first()

    def insert_user(self, user: User) -> User:
        return self._save(user)


# Dependency: one store per request, sharing the request's session
def get_storage(session: Session = Depends(get_session)) -> Storage:
    return Storage(session)

# app/config.py

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    database_url: str = "sqlite:///./barbershop.db"

    secret_key: str = "change-me-later"
    access_token_expire_minutes: int = 30

    # fixed shop timezone (UTC-3, no DST)
    shop_timezone: str = "America/Sao_Paulo"

    # reject illegal booking status transitions instead of accepting any target
    strict_status_transitions: bool = False

    booking_rate_limit: int = 3
    booking_rate_window_seconds: int = 3600

    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    email_from_name: str = "Barbearia Pereira"

    webhook_url: Optional[str] = None
    webhook_timeout_seconds: float = 10.0

    admin_username: Optional[str] = None
    admin_password: Optional[str] = None
    admin_name: str = "Administrador"
    seed_services: bool = True

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

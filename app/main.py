# app/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlmodel import Session

from app.admission import AdmissionError
from app.auth import hash_password
from app.config import settings
from app.data import SERVICES
from app.db import create_db_and_tables, engine
from app.models import Service, User
from app.routers import (
    auth_routes,
    availability_routes,
    blocked_times_routes,
    bookings_routes,
    services_routes,
    settings_routes,
    users_routes,
)
from app.storage import Storage

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def seed_database(store: Storage) -> None:
    if settings.seed_services and not store.list_services():
        logger.info("Seeding services...")
        for data in SERVICES:
            store.insert_service(Service(**data))

    if settings.admin_username and settings.admin_password:
        if store.get_user_by_username(settings.admin_username) is None:
            logger.info("Creating admin user %s", settings.admin_username)
            store.insert_user(
                User(
                    username=settings.admin_username,
                    password_hash=hash_password(settings.admin_password),
                    name=settings.admin_name,
                    is_admin=True,
                )
            )

    # make sure the settings singleton exists
    store.get_shop_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    with Session(engine) as session:
        seed_database(Storage(session))
    yield


app = FastAPI(title="Barbershop Booking API", lifespan=lifespan)


@app.exception_handler(AdmissionError)
def admission_error_handler(request: Request, exc: AdmissionError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code, "field": exc.field},
    )


@app.exception_handler(RequestValidationError)
def validation_error_handler(request: Request, exc: RequestValidationError):
    # report the first problem only, as field + message
    error = exc.errors()[0]
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    return JSONResponse(
        status_code=400,
        content={"detail": error.get("msg", "Invalid input"), "field": ".".join(loc)},
    )


@app.get("/health")
def health_check():
    return {"status": "ok"}


app.include_router(auth_routes.router)
app.include_router(users_routes.router)
app.include_router(services_routes.router)
app.include_router(availability_routes.router)
app.include_router(bookings_routes.router)
app.include_router(blocked_times_routes.router)
app.include_router(settings_routes.router)

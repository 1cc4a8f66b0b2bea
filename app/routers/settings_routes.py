# app/routers/settings_routes.py

from fastapi import APIRouter, Depends

from app.deps import require_admin
from app.models import User
from app.schemas import ShopSettingsPublic, ShopSettingsUpdate
from app.storage import Storage, get_storage

router = APIRouter(
    prefix="/settings",
    tags=["settings"],
)


@router.get("", response_model=ShopSettingsPublic)
def get_shop_settings(store: Storage = Depends(get_storage)):
    return store.get_shop_settings()


@router.post("", response_model=ShopSettingsPublic)
def update_shop_settings(
    update: ShopSettingsUpdate,
    store: Storage = Depends(get_storage),
    _: User = Depends(require_admin),
):
    return store.upsert_shop_settings(update.open_time, update.close_time)

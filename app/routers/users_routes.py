# app/routers/users_routes.py

from fastapi import APIRouter, Depends, HTTPException

from app.auth import hash_password
from app.deps import require_admin
from app.models import User
from app.schemas import UserCreate, UserPublic
from app.storage import Storage, get_storage

router = APIRouter(
    tags=["users"],
)


@router.get("/me", response_model=UserPublic)
def me(current_user: User = Depends(require_admin)):
    return current_user


@router.post("/users", status_code=201, response_model=UserPublic)
def create_user(
    user: UserCreate,
    store: Storage = Depends(get_storage),
    _: User = Depends(require_admin),
):
    # 1) Check if username already exists
    if store.get_user_by_username(user.username) is not None:
        raise HTTPException(status_code=409, detail="Username already registered")

    # 2) Create administrator
    db_user = User(
        username=user.username,
        password_hash=hash_password(user.password),
        name=user.name,
        is_admin=True,
    )
    return store.insert_user(db_user)

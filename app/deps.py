# app/deps.py

from fastapi import Depends, HTTPException

from app.auth import get_current_user
from app.models import User


# Authorization gate for every administrator-only route
def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user

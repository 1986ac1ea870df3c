# nailbook/deps.py

from datetime import datetime

from fastapi import Depends, HTTPException
from sqlmodel import Session

from .auth import get_current_user
from .db import get_session
from .store import SqlStore


def require_role(user: dict, role: str):
    if user["role"] != role:
        raise HTTPException(status_code=403, detail="Forbidden")


def get_store(session: Session = Depends(get_session)) -> SqlStore:
    return SqlStore(session)


def admin_user(current_user: dict = Depends(get_current_user)) -> dict:
    require_role(current_user, "admin")
    return current_user


def get_now() -> datetime:
    # naive local time; overridden in tests
    return datetime.now()

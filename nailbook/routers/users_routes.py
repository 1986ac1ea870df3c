# nailbook/routers/users_routes.py

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlmodel import Session, select

from nailbook.config import get_settings
from nailbook.db import get_session
from nailbook.models import User
from nailbook.schemas import UserCreate, UserPublic, ProfileUpdate
from nailbook.auth import get_current_user, hash_password

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["users"],
)


def _public(user: User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "role": user.role,
        "display_name": user.display_name,
        "phone": user.phone,
    }


@router.get("/me", response_model=UserPublic)
def me(current_user: dict = Depends(get_current_user)):
    return current_user


@router.patch("/me", response_model=UserPublic)
def update_me(
    changes: ProfileUpdate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    user = session.get(User, current_user["id"])
    for key, value in changes.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(user, key, value)
    session.add(user)
    session.commit()
    session.refresh(user)
    return _public(user)


@router.post("/users", status_code=201, response_model=UserPublic)
def create_user(
    user: UserCreate,
    session: Session = Depends(get_session),
):
    email = user.email.strip().lower()

    # 1) Check if email already exists
    existing = session.exec(
        select(User).where(func.lower(User.email) == email)
    ).first()
    if existing is not None:
        raise HTTPException(status_code=409, detail="Email already registered")

    # 2) Role: configured admin email, or the very first account
    admin_email = get_settings().admin_email
    user_count = session.exec(select(func.count()).select_from(User)).one()
    if admin_email:
        role = "admin" if email == admin_email.strip().lower() else "client"
    else:
        role = "admin" if user_count == 0 else "client"

    # 3) Create user in DB
    db_user = User(
        email=email,
        password_hash=hash_password(user.password),
        role=role,
        display_name=user.display_name,
        phone=user.phone,
    )

    session.add(db_user)
    session.commit()
    session.refresh(db_user)  # fills db_user.id
    logger.info("Registered %s as %s", db_user.email, role)

    return _public(db_user)

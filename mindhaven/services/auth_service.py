"""Auth service."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mindhaven.core.errors import ValidationError
from mindhaven.core.security import hash_password, verify_password
from mindhaven.db.session import commit_or_raise
from mindhaven.models.user import User
from mindhaven.schemas.auth import RegisterRequest

logger = logging.getLogger(__name__)

USERNAME_TAKEN = "Username already taken"


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get user by username."""
    return db.execute(select(User).where(User.username == username)).scalar_one_or_none()


def create_user(db: Session, data: RegisterRequest, is_admin: bool = False) -> User:
    """Create a new user. Raises ValidationError if the username is in use."""
    if get_user_by_username(db, data.username):
        raise ValidationError(USERNAME_TAKEN)

    user = User(
        username=data.username,
        hashed_password=hash_password(data.password),
        is_admin=is_admin,
    )
    db.add(user)
    try:
        db.flush()
    except IntegrityError as exc:
        # Another registration took the name after the lookup.
        db.rollback()
        logger.info("Registration for %s lost a race on the username", data.username)
        raise ValidationError(USERNAME_TAKEN) from exc
    commit_or_raise(db, "create user")
    db.refresh(user)
    return user


def authenticate_user(db: Session, username: str, password: str) -> User | None:
    """Authenticate user by username and password."""
    user = get_user_by_username(db, username)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user

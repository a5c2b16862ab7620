"""FastAPI dependencies and the authorization gate."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from mindhaven.core.errors import Forbidden, Unauthenticated
from mindhaven.core.security import decode_access_token
from mindhaven.db.session import get_db
from mindhaven.models.user import User
from mindhaven.services.auth_service import get_user_by_username

security = HTTPBearer(auto_error=False)


def ensure_authenticated(user: User | None) -> User:
    """Raise Unauthenticated unless a user is present."""
    if user is None:
        raise Unauthenticated("Not authenticated")
    return user


def ensure_admin(user: User | None) -> User:
    """Raise unless the user is an authenticated admin."""
    user = ensure_authenticated(user)
    if not user.is_admin:
        raise Forbidden("Admin access required")
    return user


def ensure_owner_or_admin(user: User | None, owner_id: int) -> User:
    user = ensure_authenticated(user)
    if user.id != owner_id and not user.is_admin:
        raise Forbidden("Only the author or an admin can do this")
    return user


def _user_from_credentials(
    db: Session, credentials: HTTPAuthorizationCredentials | None
) -> User | None:
    if not credentials:
        return None
    payload = decode_access_token(credentials.credentials)
    if not payload or "sub" not in payload:
        raise Unauthenticated("Invalid or expired token")
    # sub is the username
    user = get_user_by_username(db, payload["sub"])
    if not user:
        raise Unauthenticated("User not found")
    return user


def get_current_user(
    db: Annotated[Session, Depends(get_db)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> User:
    """Require authenticated user. Raises 401 if not authenticated."""
    return ensure_authenticated(_user_from_credentials(db, credentials))


def get_optional_user(
    db: Annotated[Session, Depends(get_db)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> User | None:
    """Current user if a token was sent, None for anonymous requests."""
    return _user_from_credentials(db, credentials)


def require_admin(current_user: Annotated[User, Depends(get_current_user)]) -> User:
    """Require current user to be an admin."""
    return ensure_admin(current_user)

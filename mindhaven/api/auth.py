"""Auth endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from mindhaven.core.deps import get_current_user
from mindhaven.core.errors import Unauthenticated
from mindhaven.core.security import create_access_token
from mindhaven.db.session import get_db
from mindhaven.models.user import User
from mindhaven.schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserMe
from mindhaven.services.auth_service import authenticate_user, create_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserMe, status_code=status.HTTP_201_CREATED)
def register(
    data: RegisterRequest,
    db: Session = Depends(get_db),
):
    """Register a new regular (non-admin) user."""
    return create_user(db, data)


@router.post("/login", response_model=TokenResponse)
def login(
    data: LoginRequest,
    db: Session = Depends(get_db),
):
    """Login and return access token."""
    user = authenticate_user(db, data.username, data.password)
    if not user:
        raise Unauthenticated("Invalid username or password")
    token = create_access_token(subject=user.username)
    return TokenResponse(access_token=token)


@router.get("/me", response_model=UserMe)
def me(current_user: User = Depends(get_current_user)):
    """Get current authenticated user."""
    return current_user

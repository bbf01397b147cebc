"""Endpoints for authentication and account administration."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from schoolhub.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    create_user as create_user_uc,
    list_users as list_users_uc,
    reset_password as reset_password_uc,
)
from schoolhub.domain.entities import User
from schoolhub.infrastructure.database import get_db
from schoolhub.infrastructure.security import create_user_token
from schoolhub.interfaces.api.dependencies import get_current_user, require_admin
from schoolhub.interfaces.api.routes_helpers import DOMAIN_ERRORS, to_http_exception
from schoolhub.interfaces.api.schemas import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ResetPasswordRequest,
    Token,
    UserCreate,
    UserRead,
)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


def _authenticate(db: Session, email: str, password: str) -> User:
    user, auth_status = authenticate_user(db, email, password)
    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS or user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    """Authenticate with e-mail and password and return a token with the user."""

    user = _authenticate(db, payload.email, payload.password)
    logger.info("User %s logged in", user.id)
    return LoginResponse(access_token=create_user_token(user), user=UserRead.from_entity(user))


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
) -> Token:
    """OAuth2 password flow; ``username`` carries the e-mail address."""

    user = _authenticate(db, form_data.username, form_data.password)
    return Token(access_token=create_user_token(user))


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)) -> UserRead:
    return UserRead.from_entity(current_user)


@router.get("/users", response_model=list[UserRead])
def list_users(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[UserRead]:
    return [UserRead.from_entity(user) for user in list_users_uc(db)]


@router.post("/users", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> UserRead:
    try:
        user = create_user_uc(db, email=payload.email, password=payload.password, role=payload.role)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return UserRead.from_entity(user)


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(
    payload: ResetPasswordRequest,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> MessageResponse:
    """Set a new password for ``user_id``; existing tokens of that user stop working."""

    try:
        reset_password_uc(db, user_id=payload.user_id, new_password=payload.new_password)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return MessageResponse(message="Password reset successfully")


@router.post("/logout", response_model=MessageResponse)
def logout(_: User = Depends(get_current_user)) -> MessageResponse:
    """Tokens are stateless; the client discards its copy."""

    return MessageResponse(message="Logged out successfully")

"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from schoolhub.domain.entities import User
from schoolhub.infrastructure.database import get_db
from schoolhub.infrastructure.repositories import UserRepository
from schoolhub.infrastructure.security import (
    decode_access_token,
    password_signature,
    refresh_access_token,
)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")


def _credentials_error(detail: str = "Invalid token") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_error() from exc

    subject = payload.get("sub")
    signature_claim = payload.get("pwd_sig")
    if not isinstance(subject, str) or not subject.isdigit():
        raise _credentials_error()
    if not isinstance(signature_claim, str):
        raise _credentials_error()

    user = UserRepository(db).get(int(subject))
    if user is None:
        raise _credentials_error("User not found")

    # A password reset changes the signature and revokes older tokens.
    if signature_claim != password_signature(user):
        raise _credentials_error()

    return user


def get_current_user(
    request: Request,
    response: Response,
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user and attach a refreshed token to the response."""

    user = resolve_current_user(token, db)

    try:
        refreshed_token = refresh_access_token(token)
    except ValueError as exc:
        raise _credentials_error() from exc

    response.headers["X-Refreshed-Token"] = refreshed_token
    request.state.refreshed_token = refreshed_token

    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )
    return current_user

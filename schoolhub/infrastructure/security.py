"""Security helpers for hashing and token generation."""

from datetime import datetime, timedelta, timezone
from hashlib import sha256

from jose import JWTError, jwt
from passlib.context import CryptContext

from schoolhub.config import get_settings
from schoolhub.domain.entities import User

_ALGORITHM = "HS256"

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def password_signature(user: User) -> str:
    """Fingerprint of the stored hash; changes whenever the password is reset."""

    return sha256(f"{user.id}:{user.password}".encode()).hexdigest()


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(tz=timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=_ALGORITHM)


def create_user_token(user: User) -> str:
    """Issue a token identifying ``user`` by id and role."""

    return create_access_token(
        {
            "sub": str(user.id),
            "role": user.role.value,
            "pwd_sig": password_signature(user),
        }
    )


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=[_ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def refresh_access_token(token: str) -> str:
    """Re-sign the claims of ``token`` with a fresh expiration."""

    payload = decode_access_token(token)
    payload.pop("exp", None)
    return create_access_token(payload)


__all__ = [
    "create_access_token",
    "create_user_token",
    "decode_access_token",
    "get_password_hash",
    "password_signature",
    "refresh_access_token",
    "verify_password",
]

"""Authentication schemas."""

from pydantic import BaseModel, EmailStr, Field

from .user import UserRead


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class LoginResponse(Token):
    user: UserRead


class ResetPasswordRequest(BaseModel):
    user_id: int = Field(..., ge=1)
    new_password: str


class MessageResponse(BaseModel):
    message: str

"""User and teacher profile schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from schoolhub.domain.entities import TeacherStatus, User, UserRole


class TeacherProfileRead(BaseModel):
    id: int
    name: str
    department: str
    position: str
    phone: str | None = None
    status: TeacherStatus

    model_config = ConfigDict(from_attributes=True)


class UserRead(BaseModel):
    id: int
    email: str
    role: UserRole
    name: str
    created_at: datetime | None = None
    teacher_profile: TeacherProfileRead | None = None

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_entity(cls, user: User) -> "UserRead":
        return cls(
            id=user.id,
            email=user.email,
            role=user.role,
            name=user.display_name,
            created_at=user.created_at,
            teacher_profile=(
                TeacherProfileRead.model_validate(user.teacher_profile)
                if user.teacher_profile
                else None
            ),
        )


class UserSummaryRead(BaseModel):
    """Compact user reference embedded in other resources."""

    id: int
    email: str
    name: str
    role: UserRole
    department: str | None = None

    @classmethod
    def from_entity(cls, user: User) -> "UserSummaryRead":
        profile = user.teacher_profile
        return cls(
            id=user.id,
            email=user.email,
            name=user.display_name,
            role=user.role,
            department=profile.department if profile else None,
        )


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    role: UserRole = UserRole.TEACHER

    model_config = ConfigDict(extra="forbid")

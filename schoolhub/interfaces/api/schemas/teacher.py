"""Teacher profile schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from schoolhub.domain.entities import Teacher, TeacherStatus, User


class TeacherCreate(BaseModel):
    user_id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1, max_length=120)
    department: str = Field(..., min_length=1, max_length=120)
    position: str = Field(..., min_length=1, max_length=120)
    phone: str | None = Field(default=None, max_length=40)
    status: TeacherStatus = TeacherStatus.ACTIVE


class TeacherUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=120)
    department: str | None = Field(default=None, max_length=120)
    position: str | None = Field(default=None, max_length=120)
    phone: str | None = Field(default=None, max_length=40)
    status: TeacherStatus | None = None

    model_config = ConfigDict(extra="forbid")


class TeacherRead(BaseModel):
    id: int
    user_id: int
    email: str
    name: str
    department: str
    position: str
    phone: str | None = None
    status: TeacherStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entities(cls, teacher: Teacher, user: User) -> "TeacherRead":
        return cls(
            id=teacher.id,
            user_id=teacher.user_id,
            email=user.email,
            name=teacher.name,
            department=teacher.department,
            position=teacher.position,
            phone=teacher.phone,
            status=teacher.status,
            created_at=teacher.created_at,
            updated_at=teacher.updated_at,
        )

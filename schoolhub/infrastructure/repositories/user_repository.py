"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from schoolhub.domain.entities import Teacher, User, UserRole
from schoolhub.domain.errors import NotFoundError
from schoolhub.infrastructure.models import TeacherModel, UserModel
from schoolhub.utils import ensure_utc


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, *, roles: Sequence[UserRole] | None = None) -> Sequence[User]:
        query = self.session.query(UserModel)
        if roles:
            query = query.filter(UserModel.role.in_(list(roles)))
        query = query.order_by(UserModel.created_at.asc(), UserModel.id.asc())
        return [self.to_entity(model) for model in query.all()]

    def list_messaging_contacts(self, user_id: int) -> Sequence[User]:
        """Return every teacher or administrator other than ``user_id``."""

        query = (
            self.session.query(UserModel)
            .filter(UserModel.id != user_id)
            .filter(UserModel.role.in_([UserRole.TEACHER, UserRole.ADMIN]))
            .order_by(UserModel.email.asc())
        )
        return [self.to_entity(model) for model in query.all()]

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self.to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(func.lower(UserModel.email) == email.strip().lower())
            .first()
        )
        return self.to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel(
            email=user.email,
            password=user.password,
            role=user.role,
        )
        if user.created_at is not None:
            model.created_at = user.created_at
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self.to_entity(model)

    def update_password(self, user_id: int, hashed_password: str) -> User:
        model = self.session.get(UserModel, user_id)
        if model is None:
            msg = f"User with id {user_id} not found"
            raise NotFoundError(msg)
        model.password = hashed_password
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self.to_entity(model)

    def list_ids_by_role(self, role: UserRole, *, exclude_id: int | None = None) -> list[int]:
        query = self.session.query(UserModel.id).filter(UserModel.role == role)
        if exclude_id is not None:
            query = query.filter(UserModel.id != exclude_id)
        return [user_id for (user_id,) in query.all()]

    def count(self) -> int:
        return self.session.query(func.count(UserModel.id)).scalar() or 0

    @staticmethod
    def to_entity(model: UserModel) -> User:
        profile: Teacher | None = None
        if model.teacher_profile is not None:
            profile = UserRepository.profile_to_entity(model.teacher_profile)
        return User(
            id=model.id,
            email=model.email,
            password=model.password,
            role=model.role,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
            teacher_profile=profile,
        )

    @staticmethod
    def profile_to_entity(model: TeacherModel) -> Teacher:
        return Teacher(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            department=model.department,
            position=model.position,
            phone=model.phone,
            status=model.status,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )


__all__ = ["UserRepository"]

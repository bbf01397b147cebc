"""Persistence layer for teacher profiles."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from schoolhub.domain.entities import Teacher, TeacherStatus, User
from schoolhub.domain.errors import NotFoundError
from schoolhub.infrastructure.models import TeacherModel

from .user_repository import UserRepository


class TeacherRepository:
    """Provide CRUD operations for :class:`Teacher` profiles."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self) -> Sequence[tuple[Teacher, User]]:
        query = (
            self.session.query(TeacherModel)
            .options(joinedload(TeacherModel.user))
            .order_by(TeacherModel.created_at.desc(), TeacherModel.id.desc())
        )
        return [(self._to_entity(model), UserRepository.to_entity(model.user)) for model in query.all()]

    def get(self, teacher_id: int) -> tuple[Teacher, User] | None:
        model = (
            self.session.query(TeacherModel)
            .options(joinedload(TeacherModel.user))
            .filter(TeacherModel.id == teacher_id)
            .first()
        )
        if model is None:
            return None
        return self._to_entity(model), UserRepository.to_entity(model.user)

    def get_by_user_id(self, user_id: int) -> Teacher | None:
        model = self.session.query(TeacherModel).filter_by(user_id=user_id).first()
        return self._to_entity(model) if model else None

    def create(self, teacher: Teacher) -> Teacher:
        model = TeacherModel(user_id=teacher.user_id)
        self._apply_entity_to_model(model, teacher)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, teacher: Teacher) -> Teacher:
        model = self.session.get(TeacherModel, teacher.id)
        if model is None:
            msg = f"Teacher with id {teacher.id} not found"
            raise NotFoundError(msg)
        self._apply_entity_to_model(model, teacher)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, teacher_id: int) -> None:
        model = self.session.get(TeacherModel, teacher_id)
        if model is None:
            msg = f"Teacher with id {teacher_id} not found"
            raise NotFoundError(msg)
        self.session.delete(model)
        self.session.commit()

    def list_user_ids_by_department(self, department: str) -> list[int]:
        query = self.session.query(TeacherModel.user_id).filter(
            TeacherModel.department == department
        )
        return [user_id for (user_id,) in query.all()]

    def count(self, *, status: TeacherStatus | None = None) -> int:
        query = self.session.query(func.count(TeacherModel.id))
        if status is not None:
            query = query.filter(TeacherModel.status == status)
        return query.scalar() or 0

    @staticmethod
    def _apply_entity_to_model(model: TeacherModel, teacher: Teacher) -> None:
        model.name = teacher.name
        model.department = teacher.department
        model.position = teacher.position
        model.phone = teacher.phone
        model.status = teacher.status

    @staticmethod
    def _to_entity(model: TeacherModel) -> Teacher:
        return UserRepository.profile_to_entity(model)


__all__ = ["TeacherRepository"]

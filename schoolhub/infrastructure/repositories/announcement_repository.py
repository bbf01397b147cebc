"""Persistence helpers for announcements and their recipient rows."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
import logging

from sqlalchemy import and_, delete, exists, func, insert, or_, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from schoolhub.domain.entities import (
    Announcement,
    AnnouncementRecipient,
    AnnouncementVisibility,
)
from schoolhub.domain.errors import NotFoundError
from schoolhub.infrastructure.models import AnnouncementModel, AnnouncementRecipientModel
from schoolhub.utils import ensure_utc, ensure_utc_naive, now_utc_naive

from .user_repository import UserRepository

logger = logging.getLogger(__name__)


class AnnouncementRepository:
    """Provide CRUD, visibility queries and read tracking for announcements."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, announcement_id: int, *, with_recipients: bool = False) -> Announcement | None:
        query = self.session.query(AnnouncementModel).filter(
            AnnouncementModel.id == announcement_id
        )
        if with_recipients:
            query = query.options(selectinload(AnnouncementModel.recipients))
        model = query.first()
        if model is None:
            return None
        return self._to_entity(model, recipients=model.recipients if with_recipients else ())

    def list_all(self, *, limit: int | None = None, pinned_first: bool = True) -> Sequence[Announcement]:
        query = self.session.query(AnnouncementModel).options(
            selectinload(AnnouncementModel.recipients)
        )
        query = query.order_by(*self._ordering(pinned_first))
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model, recipients=model.recipients) for model in query.all()]

    def list_visible_to(
        self,
        user_id: int,
        *,
        limit: int | None = None,
        pinned_first: bool = True,
    ) -> Sequence[Announcement]:
        """Return announcements for everyone plus department ones addressed to ``user_id``.

        Each result carries only the caller's own recipient row, if any.
        """

        has_recipient_row = exists().where(
            and_(
                AnnouncementRecipientModel.announcement_id == AnnouncementModel.id,
                AnnouncementRecipientModel.user_id == user_id,
            )
        )
        query = (
            self.session.query(AnnouncementModel)
            .filter(
                or_(
                    AnnouncementModel.visibility == AnnouncementVisibility.ALL,
                    and_(
                        AnnouncementModel.visibility == AnnouncementVisibility.DEPARTMENT,
                        has_recipient_row,
                    ),
                )
            )
            .order_by(*self._ordering(pinned_first))
        )
        if limit is not None:
            query = query.limit(limit)
        models = query.all()
        own_rows = self._recipient_rows_for_user(user_id, [model.id for model in models])
        return [
            self._to_entity(
                model,
                recipients=[own_rows[model.id]] if model.id in own_rows else (),
            )
            for model in models
        ]

    def list_created_since(self, since: datetime, *, limit: int) -> Sequence[Announcement]:
        query = (
            self.session.query(AnnouncementModel)
            .filter(AnnouncementModel.created_at >= ensure_utc_naive(since))
            .order_by(AnnouncementModel.created_at.desc(), AnnouncementModel.id.desc())
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def count(self) -> int:
        return self.session.query(func.count(AnnouncementModel.id)).scalar() or 0

    def create(self, announcement: Announcement, recipient_ids: Iterable[int]) -> Announcement:
        """Insert ``announcement`` and one unread recipient row per id, atomically."""

        model = AnnouncementModel()
        self._apply_entity_to_model(model, announcement)
        model.created_by = announcement.created_by
        model.created_at = ensure_utc_naive(announcement.created_at) or now_utc_naive()
        self.session.add(model)
        try:
            self.session.flush()
            rows = [
                {"announcement_id": model.id, "user_id": user_id, "read": False, "read_at": None}
                for user_id in dict.fromkeys(recipient_ids)
            ]
            if rows:
                self.session.execute(insert(AnnouncementRecipientModel), rows)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        logger.info(
            "Announcement %s created with %s recipient rows", model.id, len(rows)
        )
        self.session.refresh(model)
        return self._to_entity(model)

    def update(
        self,
        announcement: Announcement,
        *,
        recipient_ids: Iterable[int] | None = None,
        keep_user_ids: Iterable[int] = (),
    ) -> Announcement:
        """Save ``announcement``; with ``recipient_ids`` also resync its recipient rows.

        Rows for users outside ``recipient_ids`` (and ``keep_user_ids``) are
        deleted, missing ones are inserted unread and the rest keep their read
        state. Everything is committed together.
        """

        model = self.session.get(AnnouncementModel, announcement.id)
        if model is None:
            msg = f"Announcement with id {announcement.id} not found"
            raise NotFoundError(msg)
        self._apply_entity_to_model(model, announcement)
        self.session.add(model)
        try:
            if recipient_ids is not None:
                added, removed = self._sync_recipients(
                    announcement.id, recipient_ids, keep_user_ids
                )
                logger.info(
                    "Recipients of announcement %s resynced: %s added, %s removed",
                    announcement.id,
                    added,
                    removed,
                )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, announcement_id: int) -> None:
        model = self.session.get(AnnouncementModel, announcement_id)
        if model is None:
            msg = f"Announcement with id {announcement_id} not found"
            raise NotFoundError(msg)
        self.session.delete(model)
        self.session.commit()

    def _sync_recipients(
        self,
        announcement_id: int,
        user_ids: Iterable[int],
        keep_user_ids: Iterable[int],
    ) -> tuple[int, int]:
        targeted = list(dict.fromkeys(user_ids))
        retained = set(targeted) | set(keep_user_ids)
        existing = {
            user_id
            for (user_id,) in self.session.query(AnnouncementRecipientModel.user_id)
            .filter(AnnouncementRecipientModel.announcement_id == announcement_id)
            .all()
        }
        stale = existing - retained
        if stale:
            self.session.execute(
                delete(AnnouncementRecipientModel)
                .where(AnnouncementRecipientModel.announcement_id == announcement_id)
                .where(AnnouncementRecipientModel.user_id.in_(sorted(stale)))
                .execution_options(synchronize_session=False)
            )
        rows = [
            {"announcement_id": announcement_id, "user_id": user_id, "read": False, "read_at": None}
            for user_id in targeted
            if user_id not in existing
        ]
        if rows:
            self.session.execute(insert(AnnouncementRecipientModel), rows)
        return len(rows), len(stale)

    def get_recipient(self, announcement_id: int, user_id: int) -> AnnouncementRecipient | None:
        model = self.session.get(AnnouncementRecipientModel, (announcement_id, user_id))
        return self._recipient_to_entity(model) if model else None

    def list_recipients(self, announcement_id: int) -> Sequence[AnnouncementRecipient]:
        query = (
            self.session.query(AnnouncementRecipientModel)
            .filter(AnnouncementRecipientModel.announcement_id == announcement_id)
            .order_by(AnnouncementRecipientModel.read_at.desc().nulls_last())
        )
        return [self._recipient_to_entity(model) for model in query.all()]

    def mark_read(self, announcement_id: int, user_id: int, *, read_at: datetime) -> bool:
        """Record that ``user_id`` read the announcement.

        Runs an insert-if-absent on the composite key followed by an update
        guarded by ``read = false`` in one transaction, so concurrent calls
        never produce a second row and never move ``read_at`` forward.
        Returns ``True`` if this call performed the unread to read transition.
        """

        stamp = ensure_utc_naive(read_at)
        values = {
            "announcement_id": announcement_id,
            "user_id": user_id,
            "read": True,
            "read_at": stamp,
        }
        try:
            inserted = self._insert_recipient_if_absent(values)
            result = self.session.execute(
                update(AnnouncementRecipientModel)
                .where(AnnouncementRecipientModel.announcement_id == announcement_id)
                .where(AnnouncementRecipientModel.user_id == user_id)
                .where(AnnouncementRecipientModel.read.is_(False))
                .values(read=True, read_at=stamp)
                .execution_options(synchronize_session=False)
            )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return inserted or bool(result.rowcount)

    def _insert_recipient_if_absent(self, values: dict[str, object]) -> bool:
        dialect = self.session.get_bind().dialect.name
        keys = ["announcement_id", "user_id"]
        if dialect == "postgresql":
            statement = (
                postgresql.insert(AnnouncementRecipientModel)
                .values(**values)
                .on_conflict_do_nothing(index_elements=keys)
            )
        elif dialect == "sqlite":
            statement = (
                sqlite.insert(AnnouncementRecipientModel)
                .values(**values)
                .on_conflict_do_nothing(index_elements=keys)
            )
        else:
            try:
                with self.session.begin_nested():
                    self.session.execute(insert(AnnouncementRecipientModel).values(**values))
            except IntegrityError:
                logger.debug(
                    "Recipient row for announcement %s and user %s already exists",
                    values["announcement_id"],
                    values["user_id"],
                )
                return False
            return True
        return bool(self.session.execute(statement).rowcount)

    def _recipient_rows_for_user(
        self, user_id: int, announcement_ids: Sequence[int]
    ) -> dict[int, AnnouncementRecipientModel]:
        if not announcement_ids:
            return {}
        query = self.session.query(AnnouncementRecipientModel).filter(
            AnnouncementRecipientModel.user_id == user_id,
            AnnouncementRecipientModel.announcement_id.in_(list(announcement_ids)),
        )
        return {model.announcement_id: model for model in query.all()}

    @staticmethod
    def _ordering(pinned_first: bool) -> list:
        ordering = [AnnouncementModel.created_at.desc(), AnnouncementModel.id.desc()]
        if pinned_first:
            ordering.insert(0, AnnouncementModel.pinned.desc())
        return ordering

    @staticmethod
    def _apply_entity_to_model(model: AnnouncementModel, announcement: Announcement) -> None:
        model.title = announcement.title
        model.body = announcement.body
        model.visibility = announcement.visibility
        model.department = announcement.department
        model.pinned = announcement.pinned
        model.attachment = announcement.attachment
        model.link = announcement.link

    @staticmethod
    def _recipient_to_entity(model: AnnouncementRecipientModel) -> AnnouncementRecipient:
        return AnnouncementRecipient(
            announcement_id=model.announcement_id,
            user_id=model.user_id,
            read=model.read,
            read_at=ensure_utc(model.read_at),
            user=UserRepository.to_entity(model.user) if model.user else None,
        )

    @classmethod
    def _to_entity(
        cls,
        model: AnnouncementModel,
        *,
        recipients: Iterable[AnnouncementRecipientModel] = (),
    ) -> Announcement:
        return Announcement(
            id=model.id,
            title=model.title,
            body=model.body,
            visibility=model.visibility,
            department=model.department,
            pinned=model.pinned,
            attachment=model.attachment,
            link=model.link,
            created_by=model.created_by,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
            creator=UserRepository.to_entity(model.creator) if model.creator else None,
            recipients=[cls._recipient_to_entity(recipient) for recipient in recipients],
        )


__all__ = ["AnnouncementRepository"]

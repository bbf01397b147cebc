"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from schoolhub.config import get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


settings = get_settings()

logger = logging.getLogger(__name__)


def _build_engine(database_url: str) -> Engine:
    """Create the engine, enabling foreign keys when running on SQLite."""

    connect_args: dict[str, object] = {}
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        # TestClient and uvicorn workers use the connection from other threads.
        connect_args["check_same_thread"] = False

    new_engine = create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)

    if is_sqlite:

        @event.listens_for(new_engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    logger.debug("Database engine created for dialect %s", new_engine.dialect.name)
    return new_engine


engine = _build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database() -> None:
    """Ensure all ORM models have corresponding database tables."""

    from schoolhub.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

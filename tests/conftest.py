"""Shared fixtures: a throwaway SQLite database and upload directory per session."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

import pytest

_TMP_DIR = Path(tempfile.mkdtemp(prefix="schoolhub-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'test.db'}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["STORAGE_BACKEND"] = "local"
os.environ["UPLOAD_DIR"] = str(_TMP_DIR / "uploads")
os.environ["MAX_FILE_SIZE"] = str(64 * 1024)

from schoolhub.config import get_settings  # noqa: E402

get_settings.cache_clear()

from schoolhub.application.use_cases.teachers import create_teacher  # noqa: E402
from schoolhub.application.use_cases.users import create_user  # noqa: E402
from schoolhub.domain.entities import User, UserRole  # noqa: E402
from schoolhub.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from schoolhub.infrastructure.repositories import UserRepository  # noqa: E402
from schoolhub.infrastructure.security import create_user_token  # noqa: E402

DEFAULT_PASSWORD = "Password123"


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure every test starts from empty tables and an empty upload directory."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    shutil.rmtree(_TMP_DIR / "uploads", ignore_errors=True)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def client():
    from fastapi.testclient import TestClient

    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture()
def db_session():
    with SessionLocal() as session:
        yield session


@pytest.fixture()
def make_user():
    """Create an account, with a teacher profile when ``name`` is given."""

    def _make_user(
        email: str,
        *,
        role: UserRole = UserRole.TEACHER,
        password: str = DEFAULT_PASSWORD,
        name: str | None = None,
        department: str | None = None,
        position: str = "Teacher",
    ) -> User:
        with SessionLocal() as session:
            user = create_user(session, email=email, password=password, role=role)
            if name is not None:
                create_teacher(
                    session,
                    user_id=user.id,
                    name=name,
                    department=department or "General",
                    position=position,
                )
            return UserRepository(session).get(user.id)

    return _make_user


@pytest.fixture()
def auth_headers():
    def _auth_headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_user_token(user)}"}

    return _auth_headers


@pytest.fixture()
def admin(make_user) -> User:
    return make_user("admin@school.org", role=UserRole.ADMIN)

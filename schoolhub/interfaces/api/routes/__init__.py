from fastapi import APIRouter, FastAPI

from .announcements import router as announcements_router
from .auth import router as auth_router
from .dashboard import router as dashboard_router
from .documents import router as documents_router
from .folders import router as folders_router
from .health import router as health_router
from .messages import router as messages_router
from .teachers import router as teachers_router

API_PREFIX = "/api"


def register_routes(app: FastAPI) -> None:
    """Register every API router under the ``/api`` prefix."""

    api = APIRouter(prefix=API_PREFIX)
    api.include_router(auth_router)
    api.include_router(teachers_router)
    api.include_router(announcements_router)
    api.include_router(documents_router)
    api.include_router(folders_router)
    api.include_router(messages_router)
    api.include_router(dashboard_router)
    api.include_router(health_router)
    app.include_router(api)

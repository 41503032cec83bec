# File: cms_backend/api/deps.py

from collections.abc import Generator

from fastapi import Request
from sqlalchemy.orm import Session

from cms_backend.core.config import Settings
from cms_backend.db.session import session_scope
from cms_backend.services.upload_service import ImageStore


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a SQLAlchemy session.

    Usage in route functions:
        db: Session = Depends(get_db)
    """
    yield from session_scope(request.app.state.session_factory)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_image_store(request: Request) -> ImageStore:
    return request.app.state.image_store

# File: tests/conftest.py

"""
Shared fixtures.

The environment is pointed at throwaway locations before anything imports
``cms_backend.main``, which builds its module-level app from the environment.
Each test then gets its own application on a fresh SQLite file.
"""

import os
import tempfile

os.environ.setdefault("UPLOAD_PATH", tempfile.mkdtemp(prefix="cms-uploads-"))
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CREATE_TABLES", "false")

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from cms_backend.core.config import Settings
from cms_backend.main import create_application
from cms_backend.models.area import Area

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        upload_path=str(tmp_path / "uploads"),
        max_image_size=1024,
        news_max_image_size=2048,
        max_field_size=4096,
        max_project_images=3,
    )


@pytest.fixture
def app(settings):
    return create_application(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def upload_dir(settings) -> Path:
    return Path(settings.upload_path)


@pytest.fixture
def db_session(client):
    session = client.app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def area_tree(db_session):
    """
    1
    ├── 2
    │   └── 4
    └── 3
    5
    """
    db_session.add_all(
        [
            Area(id=1, parent_id=None),
            Area(id=5, parent_id=None),
        ]
    )
    db_session.flush()
    db_session.add_all(
        [
            Area(id=2, parent_id=1),
            Area(id=3, parent_id=1),
        ]
    )
    db_session.flush()
    db_session.add(Area(id=4, parent_id=2))
    db_session.commit()
    return db_session


def image(name: str = "photo.png", data: bytes = PNG_BYTES, content_type: str = "image/png"):
    return (name, data, content_type)

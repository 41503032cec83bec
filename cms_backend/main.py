# cms_backend/main.py

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from cms_backend.api.v1.api import api_router
from cms_backend.api.v1.routes_health import router as health_router
from cms_backend.core.config import Settings, get_settings
from cms_backend.core.errors import register_exception_handlers
from cms_backend.core.logging_config import configure_logging
from cms_backend.db.init_db import init_db
from cms_backend.db.session import build_engine, build_session_factory
from cms_backend.services.upload_service import ImageStore

logger = logging.getLogger(__name__)


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    engine = build_engine(settings)
    image_store = ImageStore(settings.upload_path)
    image_store.ensure_directory()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.create_tables:
            init_db(engine)
        logger.info("Upload directory: %s", Path(settings.upload_path).resolve())
        yield
        engine.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.image_store = image_store

    # ---------- CORS ----------
    origins = list(settings.backend_cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------- ERRORS ----------
    register_exception_handlers(app)

    # ---------- STATIC FILES ----------
    # Uploaded images are served as /uploads/<filename>
    app.mount("/uploads", StaticFiles(directory=settings.upload_path), name="uploads")

    # ---------- ROUTERS ----------
    app.include_router(health_router)
    app.include_router(api_router, prefix="/api")

    return app


app = create_application()

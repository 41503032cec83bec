from collections.abc import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from cms_backend.core.config import Settings


def build_engine(settings: Settings) -> Engine:
    url = settings.database_url
    return create_engine(
        url,
        connect_args={"check_same_thread": False} if "sqlite" in url else {},
    )


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def session_scope(factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    db: Session = factory()
    try:
        yield db
    finally:
        db.close()

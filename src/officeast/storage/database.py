"""SQLAlchemy database setup and session management."""

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import Engine, MetaData, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from officeast.config import settings


# Naming convention for constraints
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    metadata = MetaData(naming_convention=convention)


# Built on first use from the current settings, reset by close_db()
_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def get_engine() -> Engine:
    """Engine for the SQLite file under the cache directory."""
    global _engine, _session_factory
    if _engine is None:
        _engine = create_engine(
            settings.database_url,
            echo=settings.log_level == "DEBUG",
        )
        _session_factory = sessionmaker(
            _engine,
            class_=Session,
            expire_on_commit=False,
        )
    return _engine


def get_session_factory() -> sessionmaker:
    """Session factory bound to the cache engine."""
    get_engine()
    return _session_factory


@contextmanager
def get_session(factory: Optional[sessionmaker] = None) -> Generator[Session, None, None]:
    """Get a database session, committed on success and rolled back on error."""
    with (factory or get_session_factory())() as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise


def init_db(bind: Optional[Engine] = None) -> None:
    """Initialize database tables."""
    if bind is None:
        settings.cache_dir.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind or get_engine())


def close_db() -> None:
    """Close database connections."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None

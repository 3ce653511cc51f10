"""Storage layer for the Office AST renderer.

Provides a SQLite-backed cache of rendered text via SQLAlchemy.
"""

from .cache import (
    DEFAULT_MAX_CACHE_AGE,
    cache_stats,
    clear_cache,
    compute_cache_key,
    read_document_lines,
)
from .database import (
    Base,
    close_db,
    get_engine,
    get_session,
    get_session_factory,
    init_db,
)
from .orm_models import RenderedTextORM
from .repositories import RenderCacheRepository

__all__ = [
    # Database
    "Base",
    "get_engine",
    "get_session_factory",
    "get_session",
    "init_db",
    "close_db",
    # ORM Models
    "RenderedTextORM",
    # Repositories
    "RenderCacheRepository",
    # Cache
    "DEFAULT_MAX_CACHE_AGE",
    "cache_stats",
    "clear_cache",
    "compute_cache_key",
    "read_document_lines",
]

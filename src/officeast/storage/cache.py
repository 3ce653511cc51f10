"""Rendered-text cache for search consumers.

Search reads documents as lists of lines. Rendering is cheap compared to
parsing, but large workbooks still add up, so lines are cached per file
version: the key changes whenever the file's size or mtime changes.
"""

import hashlib
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from sqlalchemy.orm import Session

from officeast.config import settings
from officeast.loader import load_document
from officeast.logger import get_logger
from officeast.renderers import render_to_text

from .database import get_session, init_db
from .repositories import RenderCacheRepository

LOGGER = get_logger(__name__)

DEFAULT_MAX_CACHE_AGE = timedelta(days=7)


def compute_cache_key(path: Path, version: Optional[str] = None) -> str:
    """Cache key from version, path, size, and modification time (ms)."""
    path = Path(path).resolve()
    stat = path.stat()
    mtime_ms = stat.st_mtime_ns / 1_000_000
    raw = f"{version or settings.cache_version}|{path}|{stat.st_size}|{mtime_ms}"
    return hashlib.md5(raw.encode("utf-8")).hexdigest()


def read_document_lines(
    path: Path,
    session: Optional[Session] = None,
) -> list[str]:
    """Render a ParsedDocument JSON file to search lines.

    Args:
        path: Path to the ParsedDocument JSON file.
        session: Cache session; without one the cache is bypassed.

    Returns:
        Rendered text split on newlines.
    """
    path = Path(path).resolve()
    if not path.exists():
        raise FileNotFoundError(f"Document not found: {path}")

    repository = RenderCacheRepository(session) if session is not None else None
    cache_key = compute_cache_key(path) if repository is not None else None

    if repository is not None:
        cached = repository.get(cache_key)
        if cached is not None:
            LOGGER.debug("Cache hit for %s", path.name)
            return cached

    document = load_document(path)
    lines = render_to_text(document).split("\n")

    if repository is not None:
        repository.put(cache_key, str(path), lines, document_type=document.type)
        LOGGER.debug("Cached %d lines for %s", len(lines), path.name)

    return lines


def clear_cache(
    max_age: timedelta = DEFAULT_MAX_CACHE_AGE,
    session: Optional[Session] = None,
) -> int:
    """Delete cached renderings older than ``max_age``.

    Args:
        max_age: Maximum entry age, seven days by default.
        session: Cache session; without one the default cache database is used.

    Returns:
        Number of entries removed.
    """
    if session is None:
        init_db()
        with get_session() as session:
            return clear_cache(max_age, session)

    # CURRENT_TIMESTAMP is stored as naive UTC
    cutoff = datetime.now(timezone.utc).replace(tzinfo=None) - max_age
    removed = RenderCacheRepository(session).delete_older_than(cutoff)
    LOGGER.info("Removed %d cache entries older than %s", removed, max_age)
    return removed


def cache_stats(session: Optional[Session] = None) -> dict[str, int]:
    """Number of cached renderings and the lines they hold."""
    if session is None:
        init_db()
        with get_session() as session:
            return cache_stats(session)
    return RenderCacheRepository(session).stats()

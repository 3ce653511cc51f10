"""Repository layer for rendered-text cache operations."""

import json
from datetime import datetime
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from .orm_models import RenderedTextORM


class RenderCacheRepository:
    """Repository for cached rendered lines."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, cache_key: str) -> Optional[list[str]]:
        """Get cached lines by key, None on a miss."""
        entry = self.session.get(RenderedTextORM, cache_key)
        if entry is None:
            return None
        return entry.lines

    def put(
        self,
        cache_key: str,
        source_path: str,
        lines: list[str],
        document_type: Optional[str] = None,
    ) -> RenderedTextORM:
        """Store lines for a key, replacing stale entries for the same file."""
        self.session.execute(
            delete(RenderedTextORM).where(
                RenderedTextORM.source_path == source_path,
                RenderedTextORM.cache_key != cache_key,
            )
        )
        entry = self.session.merge(
            RenderedTextORM(
                cache_key=cache_key,
                source_path=source_path,
                document_type=document_type,
                lines_json=json.dumps(lines, ensure_ascii=False),
                line_count=len(lines),
            )
        )
        self.session.flush()
        return entry

    def delete(self, cache_key: str) -> bool:
        """Delete an entry, True if one existed."""
        entry = self.session.get(RenderedTextORM, cache_key)
        if entry is None:
            return False
        self.session.delete(entry)
        self.session.flush()
        return True

    def count_all(self) -> int:
        """Count cached entries."""
        result = self.session.execute(
            select(func.count()).select_from(RenderedTextORM)
        )
        return result.scalar_one()

    def delete_older_than(self, cutoff: datetime) -> int:
        """Delete entries created before ``cutoff``, returning how many."""
        keys = self.session.scalars(
            select(RenderedTextORM.cache_key).where(RenderedTextORM.created_at < cutoff)
        ).all()
        if keys:
            self.session.execute(
                delete(RenderedTextORM).where(RenderedTextORM.cache_key.in_(keys))
            )
        return len(keys)

    def stats(self) -> dict[str, int]:
        """Entry count and total cached lines."""
        entries, total_lines = self.session.execute(
            select(
                func.count(),
                func.coalesce(func.sum(RenderedTextORM.line_count), 0),
            ).select_from(RenderedTextORM)
        ).one()
        return {"entries": entries, "total_lines": total_lines}

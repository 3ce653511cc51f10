"""SQLAlchemy ORM models for the rendered-text cache."""

import json
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base


class RenderedTextORM(Base):
    """Rendered search lines for one version of a source file."""

    __tablename__ = "rendered_text"

    # md5 of "<cache version>|<path>|<size>|<mtime>"
    cache_key: Mapped[str] = mapped_column(String(32), primary_key=True)

    source_path: Mapped[str] = mapped_column(String(1024), nullable=False)
    document_type: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    lines_json: Mapped[str] = mapped_column(Text, nullable=False)
    line_count: Mapped[int] = mapped_column(Integer, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        Index("ix_rendered_text_source_path", "source_path"),
    )

    @property
    def lines(self) -> list[str]:
        """Decoded cached lines."""
        return json.loads(self.lines_json)

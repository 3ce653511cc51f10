"""JSON projection models returned by ``render_to_json``."""

from typing import Any, Optional, Union

from pydantic import Field

from .base import BaseASTModel


class SheetData(BaseASTModel):
    """One worksheet as a dense grid of cell strings."""

    name: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    rows: list[list[str]] = Field(default_factory=list)
    total_columns: int = Field(default=0, ge=0, alias="totalColumns")


class ExcelJson(BaseASTModel):
    """Excel workbook projection."""

    type: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    sheets: list[SheetData] = Field(default_factory=list)
    attachments: list[dict[str, Any]] = Field(default_factory=list)


class SlideElement(BaseASTModel):
    """Title, paragraph, list, table, or image on a slide."""

    type: str
    content: Union[str, list[list[str]]]
    metadata: Optional[dict[str, Any]] = None


class SlideData(BaseASTModel):
    """Elements of one slide in document order."""

    elements: list[SlideElement] = Field(default_factory=list)


class PowerPointJson(BaseASTModel):
    """PowerPoint presentation projection."""

    type: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    slides: list[SlideData] = Field(default_factory=list)
    attachments: list[dict[str, Any]] = Field(default_factory=list)


class GenericJson(BaseASTModel):
    """Fallback projection: one flattened text entry per top-level node."""

    type: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    content: list[str] = Field(default_factory=list)
    attachments: list[dict[str, Any]] = Field(default_factory=list)

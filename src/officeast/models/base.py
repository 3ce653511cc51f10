"""Base models and common tags for the Office AST renderer."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class DocumentType(str, Enum):
    """Document formats produced by the office parser."""

    DOCX = "docx"
    XLSX = "xlsx"
    PPTX = "pptx"
    PDF = "pdf"
    ODT = "odt"
    ODS = "ods"
    ODP = "odp"
    RTF = "rtf"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Optional[str]) -> "DocumentType":
        """Map a raw type tag to a DocumentType, unknown tags become OTHER."""
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


class NodeType(str, Enum):
    """Types of content nodes in the parsed tree."""

    PAGE = "page"
    SLIDE = "slide"
    SHEET = "sheet"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"
    TABLE = "table"
    ROW = "row"
    CELL = "cell"
    TEXT = "text"
    IMAGE = "image"


class ListType(str, Enum):
    """List numbering style."""

    ORDERED = "ordered"
    UNORDERED = "unordered"


class SlideElementType(str, Enum):
    """Element kinds in the PowerPoint JSON projection."""

    TITLE = "title"
    TABLE = "table"
    PARAGRAPH = "paragraph"
    LIST = "list"
    IMAGE = "image"


class BaseASTModel(BaseModel):
    """Base class for all AST models.

    Models are immutable once built and accept both the parser's camelCase
    keys and the snake_case field names.
    """

    class Config:
        frozen = True
        populate_by_name = True
        extra = "allow"

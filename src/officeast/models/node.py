"""Content node models - the recursive unit of the parsed tree."""

from typing import Any, Optional

from pydantic import Field, field_validator

from .base import BaseASTModel


class Formatting(BaseASTModel):
    """Inline formatting attached to a node."""

    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[bool] = None
    strikethrough: Optional[bool] = None
    size: Optional[str] = Field(None, description="Font size such as '14pt'")

    @field_validator("size", mode="before")
    @classmethod
    def _size_as_string(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return str(value)


class NodeMetadata(BaseASTModel):
    """Node-specific metadata. Which fields are set depends on the node type."""

    # Headings
    level: Optional[int] = None

    # List items
    list_type: Optional[str] = Field(None, alias="listType")
    indentation: Optional[int] = None
    item_index: Optional[int] = Field(None, alias="itemIndex")

    # Spreadsheet cells and sheets (col is 0-indexed)
    col: Optional[int] = None
    sheet_name: Optional[str] = Field(None, alias="sheetName")

    # Inline content
    link: Optional[str] = None
    attachment_name: Optional[str] = Field(None, alias="attachmentName")

    # Word paragraph style id
    style: Optional[str] = None

    @field_validator("style", mode="before")
    @classmethod
    def _style_as_string(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return str(value)


_EMPTY_METADATA = NodeMetadata()
_EMPTY_FORMATTING = Formatting()


class ContentNode(BaseASTModel):
    """
    Single node of the parsed document tree.

    A node is either a leaf (``text`` set, ``children`` is None) or a
    container (``children`` is a list, ``text`` is ignored). Child order is
    document order.
    """

    type: str
    text: Optional[str] = None
    children: Optional[list["ContentNode"]] = None
    formatting: Optional[Formatting] = None
    metadata: Optional[NodeMetadata] = None
    raw_content: Optional[str] = Field(
        None,
        alias="rawContent",
        description="Raw XML fragment, only present with includeRawContent",
    )

    @property
    def is_container(self) -> bool:
        """True when the node carries a children list (even an empty one)."""
        return self.children is not None

    @property
    def child_nodes(self) -> list["ContentNode"]:
        """Children as a list, empty for leaves."""
        return self.children or []

    @property
    def meta(self) -> NodeMetadata:
        """Metadata, or an empty NodeMetadata when absent."""
        return self.metadata or _EMPTY_METADATA

    @property
    def fmt(self) -> Formatting:
        """Formatting, or an empty Formatting when absent."""
        return self.formatting or _EMPTY_FORMATTING

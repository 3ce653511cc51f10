"""Document-level models produced by the external office parser."""

from typing import Any, Optional

from pydantic import Field

from .base import BaseASTModel, DocumentType
from .node import ContentNode


class Attachment(BaseASTModel):
    """Image or embedded object extracted from the document."""

    name: str
    type: Optional[str] = None
    mime_type: Optional[str] = Field(None, alias="mimeType")
    extension: Optional[str] = None
    data: Optional[str] = Field(None, description="Base64 payload")
    ocr_text: Optional[str] = Field(None, alias="ocrText")
    alt_text: Optional[str] = Field(None, alias="altText")
    chart_data: Optional[Any] = Field(None, alias="chartData")


class ParsedDocument(BaseASTModel):
    """
    Top-level parsed document.

    Built once by the parser and only read by the renderers. ``type`` is kept
    as the raw tag so unknown formats still validate and pass through.
    """

    type: str = DocumentType.OTHER.value
    metadata: dict[str, Any] = Field(default_factory=dict)
    content: list[ContentNode] = Field(default_factory=list)
    attachments: list[Attachment] = Field(default_factory=list)

    @property
    def document_type(self) -> DocumentType:
        """Closed document type used for renderer dispatch."""
        return DocumentType.parse(self.type)

    def find_attachment(self, name: Optional[str]) -> Optional[Attachment]:
        """Return the first attachment with the given name."""
        if not name:
            return None
        for attachment in self.attachments:
            if attachment.name == name:
                return attachment
        return None

    def count_nodes(self) -> int:
        """Count every node in the content tree."""
        total = 0
        stack = list(self.content)
        while stack:
            node = stack.pop()
            total += 1
            stack.extend(node.child_nodes)
        return total

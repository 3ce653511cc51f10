"""AST models for the Office document renderer.

This module defines the Pydantic models for the tree produced by the external
office parser and for the JSON projections produced by the renderers. All
models are immutable and accept the parser's camelCase keys.

Model Hierarchy:
- ParsedDocument → ContentNode (recursive) → Formatting / NodeMetadata
- ParsedDocument → Attachments
- ExcelJson → SheetData, PowerPointJson → SlideData → SlideElement
"""

from .base import (
    BaseASTModel,
    DocumentType,
    ListType,
    NodeType,
    SlideElementType,
)
from .document import (
    Attachment,
    ParsedDocument,
)
from .node import (
    ContentNode,
    Formatting,
    NodeMetadata,
)
from .output import (
    ExcelJson,
    GenericJson,
    PowerPointJson,
    SheetData,
    SlideData,
    SlideElement,
)

__all__ = [
    # Base types
    "BaseASTModel",
    "DocumentType",
    "ListType",
    "NodeType",
    "SlideElementType",
    # Document
    "Attachment",
    "ParsedDocument",
    # Node
    "ContentNode",
    "Formatting",
    "NodeMetadata",
    # Output
    "ExcelJson",
    "GenericJson",
    "PowerPointJson",
    "SheetData",
    "SlideData",
    "SlideElement",
]

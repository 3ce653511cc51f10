"""Office AST renderer.

Converts the document tree produced by an office parser (docx, xlsx, pptx,
pdf, OpenDocument, rtf) into Markdown-flavored text or a JSON projection.
"""

from officeast.models import Attachment, ContentNode, ParsedDocument
from officeast.renderers import render_to_json, render_to_text

__version__ = "0.1.0"

__all__ = [
    "Attachment",
    "ContentNode",
    "ParsedDocument",
    "render_to_json",
    "render_to_text",
]

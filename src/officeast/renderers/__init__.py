"""Renderers converting a ParsedDocument to Markdown text or JSON.

Dispatch is on the document type:
- xlsx → ExcelRenderer (text and JSON)
- pptx → PowerPointRenderer (text and JSON)
- docx → WordRenderer (text, generic JSON)
- pdf → PdfRenderer (text, generic JSON)
- anything else → GenericRenderer

Rendering is a pure function of the document: no I/O, no state kept
between calls, and no exceptions for malformed or unknown content.
"""

from typing import Any, Optional

from officeast.logger import get_logger
from officeast.models import DocumentType, ParsedDocument

from .base import BaseRenderer, plain_text, walk
from .excel import ExcelRenderer, format_excel_date
from .generic import GenericRenderer
from .pdf import PdfRenderer
from .powerpoint import PowerPointRenderer
from .word import WordRenderer, check_if_heading_by_formatting

LOGGER = get_logger(__name__)

RENDERERS: dict[DocumentType, type[BaseRenderer]] = {
    DocumentType.XLSX: ExcelRenderer,
    DocumentType.PPTX: PowerPointRenderer,
    DocumentType.DOCX: WordRenderer,
    DocumentType.PDF: PdfRenderer,
}


def get_renderer_class(document: ParsedDocument) -> type[BaseRenderer]:
    """Pick the renderer for a document, GenericRenderer by default."""
    return RENDERERS.get(document.document_type, GenericRenderer)


def render_to_text(
    document: ParsedDocument,
    delimiter: Optional[str] = None,
    max_depth: Optional[int] = None,
) -> str:
    """Render a document to Markdown-flavored text.

    Args:
        document: Parsed document.
        delimiter: Block separator (default "\\n").
        max_depth: Nesting limit, deeper nodes are skipped.

    Returns:
        Rendered text.
    """
    renderer_class = get_renderer_class(document)
    LOGGER.debug("Rendering %s document as text with %s", document.type, renderer_class.__name__)
    return renderer_class(document, delimiter=delimiter, max_depth=max_depth).render_text()


def render_to_json(document: ParsedDocument, max_depth: Optional[int] = None) -> dict[str, Any]:
    """Render a document to its JSON projection (a plain, serializable dict)."""
    renderer_class = get_renderer_class(document)
    LOGGER.debug("Rendering %s document as JSON with %s", document.type, renderer_class.__name__)
    return renderer_class(document, max_depth=max_depth).render_json()


__all__ = [
    "RENDERERS",
    "BaseRenderer",
    "ExcelRenderer",
    "GenericRenderer",
    "PdfRenderer",
    "PowerPointRenderer",
    "WordRenderer",
    "check_if_heading_by_formatting",
    "format_excel_date",
    "get_renderer_class",
    "plain_text",
    "render_to_json",
    "render_to_text",
    "walk",
]

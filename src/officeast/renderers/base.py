"""Shared rendering machinery for all document renderers.

Every renderer is a pure tree transform: it reads a ParsedDocument and
returns new values. A renderer instance holds per-call state only (counters,
list tracking) and is created fresh for each render.
"""

import re
from typing import Any, Callable, Iterator, Optional

from officeast.config import settings
from officeast.logger import get_logger
from officeast.models import (
    ContentNode,
    GenericJson,
    ListType,
    NodeType,
    ParsedDocument,
)

LOGGER = get_logger(__name__)

# Caption-less images fall back to this alt text
IMAGE_PLACEHOLDER = "图片"
ATTACHMENTS_HEADING = "附件"

_LINE_BREAKS = re.compile(r"\s*[\r\n]+\s*")


def walk(node: ContentNode) -> Iterator[ContentNode]:
    """Yield the node and all descendants in document (pre-)order.

    Iterative, so arbitrarily deep trees cannot exhaust the stack.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.child_nodes))


def plain_text(node: ContentNode) -> str:
    """Concatenate the text of every leaf under ``node`` in order."""
    return "".join(n.text or "" for n in walk(node) if not n.is_container)


def dump_attachments(document: ParsedDocument) -> list[dict[str, Any]]:
    """Attachments as plain dicts keyed the way the parser emits them."""
    return [
        attachment.model_dump(by_alias=True, exclude_none=True)
        for attachment in document.attachments
    ]


class BaseRenderer:
    """Base class for document renderers.

    Subclasses implement ``render_text``; ``render_json`` defaults to the
    generic projection (one flattened text entry per top-level node).
    """

    def __init__(
        self,
        document: ParsedDocument,
        delimiter: Optional[str] = None,
        max_depth: Optional[int] = None,
    ):
        """Initialize renderer.

        Args:
            document: Parsed document to render.
            delimiter: Block separator (default from settings, "\\n").
            max_depth: Deepest node level rendered (default from settings).
        """
        self.document = document
        self.delimiter = settings.default_delimiter if delimiter is None else delimiter
        self.max_depth = settings.max_depth if max_depth is None else max_depth
        self._truncated = False

    def render_text(self) -> str:
        """Render the document to Markdown-flavored text."""
        raise NotImplementedError

    def render_json(self) -> dict[str, Any]:
        """Render the generic JSON projection."""
        content = [
            text for text in (self.generic_text(node) for node in self.document.content)
            if text != ""
        ]
        return GenericJson(
            type=self.document.type,
            metadata=self.document.metadata,
            content=content,
            attachments=dump_attachments(self.document),
        ).model_dump(by_alias=True)

    # ------------------------------------------------------------------
    # Traversal helpers
    # ------------------------------------------------------------------

    def too_deep(self, depth: int) -> bool:
        """Check the depth guard, warning once per render when it trips."""
        if depth <= self.max_depth:
            return False
        if not self._truncated:
            LOGGER.warning(
                "Skipped content nested deeper than %d levels in %s document",
                self.max_depth,
                self.document.type,
            )
            self._truncated = True
        return True

    def join_children(
        self,
        node: ContentNode,
        render: Callable[[ContentNode, int], str],
        depth: int,
    ) -> str:
        """Render children and join them.

        Block-level children (the first child is itself a container) are
        joined with the delimiter, inline runs are concatenated directly.
        Empty renderings are dropped before joining.
        """
        children = node.child_nodes
        parts = []
        for child in children:
            part = render(child, depth + 1)
            if part != "":
                parts.append(part)
        separator = self.delimiter if children and children[0].is_container else ""
        return separator.join(parts)

    def join_top_level(self, render: Callable[[ContentNode, int], str]) -> str:
        """Render each top-level node and join non-empty results with the delimiter."""
        parts = [render(node, 0) for node in self.document.content]
        return self.delimiter.join(part for part in parts if part != "")

    def generic_text(self, node: ContentNode, depth: int = 0) -> str:
        """Flatten a node to text with the generic join rule."""
        if self.too_deep(depth):
            return ""
        if node.is_container:
            return self.join_children(node, self.generic_text, depth)
        return node.text or ""

    # ------------------------------------------------------------------
    # Markdown helpers shared by Word and PDF
    # ------------------------------------------------------------------

    def format_run(self, node: ContentNode) -> str:
        """Apply bold, italic, underline, strikethrough, then link, to a leaf."""
        text = node.text or ""
        if text.strip():
            fmt = node.fmt
            if fmt.bold:
                text = f"**{text}**"
            if fmt.italic:
                text = f"*{text}*"
            if fmt.underline:
                text = f"<u>{text}</u>"
            if fmt.strikethrough:
                text = f"~~{text}~~"
        link = node.meta.link
        if link and text:
            text = f"[{text}]({link})"
        return text

    def inline_text(self, node: ContentNode, depth: int = 0) -> str:
        """Render a node as inline Markdown (runs concatenated, no separators)."""
        if self.too_deep(depth):
            return ""
        if node.type == NodeType.IMAGE:
            return self.image_markdown(node)
        if not node.is_container:
            return self.format_run(node)
        return "".join(self.inline_text(child, depth + 1) for child in node.child_nodes)

    def image_markdown(self, node: ContentNode) -> str:
        """``![alt](attachmentName)`` for an image node."""
        name = node.meta.attachment_name or ""
        attachment = self.document.find_attachment(name)
        alt = (attachment.alt_text if attachment else None) or node.text or name or IMAGE_PLACEHOLDER
        return f"![{alt}]({name})"

    def image_block(self, node: ContentNode, indent: str = "") -> str:
        """Image line, optional italic caption line, then a blank line."""
        d = self.delimiter
        out = indent + self.image_markdown(node) + d
        caption = (node.text or "").strip()
        if caption:
            out += f"{indent}*{caption}*{d}"
        return out + d

    def list_item(self, node: ContentNode, depth: int = 0, indent: str = "") -> str:
        """Single list item line, ``N.`` for ordered lists and ``-`` otherwise."""
        meta = node.meta
        level = max(meta.indentation or 0, 0)
        if meta.list_type == ListType.ORDERED:
            prefix = f"{(meta.item_index or 0) + 1}."
        else:
            prefix = "-"
        text = self.inline_text(node, depth).strip()
        return f"{indent}{'  ' * level}{prefix} {text}{self.delimiter}"

    def cell_text(self, cell: ContentNode, depth: int = 0) -> str:
        """Inline text of a table cell, safe to place between pipes."""
        if cell.is_container:
            children = cell.child_nodes
            parts = [self.inline_text(child, depth + 1) for child in children]
            separator = " " if children and children[0].is_container else ""
            text = separator.join(part for part in parts if part != "")
        else:
            text = self.format_run(cell)
        text = _LINE_BREAKS.sub(" ", text.strip())
        return text.replace("|", "\\|")

    def markdown_table(self, node: ContentNode, depth: int = 0, indent: str = "") -> str:
        """GitHub-flavored Markdown table: header row, separator, data rows."""
        rows = [
            [self.cell_text(cell, depth + 2) for cell in row.child_nodes if cell.type == NodeType.CELL]
            for row in node.child_nodes
            if row.type == NodeType.ROW
        ]
        # Rows without cells cannot act as the header
        while rows and not rows[0]:
            rows.pop(0)
        if not rows:
            return ""
        d = self.delimiter
        width = len(rows[0])
        lines = [self._table_line(rows[0]), self._table_line(["---"] * width)]
        for cells in rows[1:]:
            if len(cells) < width:
                cells = cells + [""] * (width - len(cells))
            lines.append(self._table_line(cells))
        return "".join(f"{indent}{line}{d}" for line in lines) + d

    @staticmethod
    def _table_line(cells: list[str]) -> str:
        return "| " + " | ".join(cells) + " |"

    def attachments_section(self) -> str:
        """Trailing ``# 附件`` section listing attachments, empty when none."""
        attachments = self.document.attachments
        if not attachments:
            return ""
        d = self.delimiter
        out = f"# {ATTACHMENTS_HEADING}{d}{d}"
        for index, attachment in enumerate(attachments, start=1):
            line = f"{index}. **{attachment.name}**"
            if attachment.mime_type:
                line += f" ({attachment.mime_type})"
            out += line + d
            if attachment.ocr_text:
                out += f"   *OCR: {attachment.ocr_text.strip()}*{d}"
        return out

    def with_attachments(self, body: str) -> str:
        """Append the attachments section to a rendered body and trim."""
        body = body.strip()
        section = self.attachments_section()
        if section:
            body = f"{body}{self.delimiter}{self.delimiter}{section}" if body else section
        return body.strip()

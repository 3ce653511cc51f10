"""Word (docx) renderer - Markdown with headings, lists, tables, and images.

Word documents often mark section titles with ad hoc bold and large fonts
instead of heading styles, so paragraphs go through a heading inference
step before being rendered as plain paragraphs.
"""

import re
from typing import Optional

from officeast.models import ContentNode, ListType, NodeType

from .base import BaseRenderer, plain_text, walk

# Paragraph style ids that always denote a heading
HEADING_STYLE_IDS = frozenset({"2", "3"})

# Minimum font size (pt) for a bold paragraph to count as a heading
HEADING_MIN_FONT_SIZE = 14.0

# Short keyword-led titles: 示例, 标题, 章节, 第N章/节/条/页, "1."
HEADING_TEXT_PATTERN = re.compile(r"^(示例|标题|章节|第[一二三四五六七八九十]+[章节条页]|\d+\.)")
HEADING_MAX_TEXT_LENGTH = 20

INFERRED_HEADING_LEVEL = 2

_FONT_SIZE = re.compile(r"\s*(\d+(?:\.\d+)?)")


def parse_font_size(size: Optional[str]) -> Optional[float]:
    """Parse a size such as '14pt' into points."""
    if not size:
        return None
    match = _FONT_SIZE.match(size)
    if match is None:
        return None
    return float(match.group(1))


def check_if_heading_by_formatting(node: ContentNode) -> bool:
    """Decide whether a paragraph should be rendered as a heading.

    Signals are checked in order, first match wins:
    1. empty text is never a heading
    2. style id "2" or "3"
    3. every text run bold and some font size >= 14pt
    4. short keyword-led text with every run bold
    """
    nodes = list(walk(node))
    runs = [n for n in nodes if not n.is_container]
    text = "".join(run.text or "" for run in runs).strip()
    if not text:
        return False

    if node.meta.style in HEADING_STYLE_IDS:
        return True

    inherited_bold = bool(node.fmt.bold)
    text_runs = [run for run in runs if (run.text or "").strip()]
    all_bold = all(inherited_bold or run.fmt.bold for run in text_runs)

    if all_bold:
        sizes = (parse_font_size(n.fmt.size) for n in nodes)
        if any(size is not None and size >= HEADING_MIN_FONT_SIZE for size in sizes):
            return True

    if 0 < len(text) < HEADING_MAX_TEXT_LENGTH and HEADING_TEXT_PATTERN.match(text) and all_bold:
        return True

    return False


def clamp_heading_level(level: Optional[int]) -> int:
    """Clamp a heading level into 1..6, missing levels become 1."""
    return min(max(level if level is not None else 1, 1), 6)


class WordRenderer(BaseRenderer):
    """Render a Word document tree to Markdown."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # (indentation, list type) of the previous list item, None outside lists
        self._list_state: Optional[tuple[int, str]] = None

    def render_text(self) -> str:
        self._list_state = None
        body = "".join(self.render_node(node, 0) for node in self.document.content)
        return self.with_attachments(body)

    def render_node(self, node: ContentNode, depth: int) -> str:
        """Render one block-level node, including its trailing blank line."""
        if self.too_deep(depth):
            return ""
        d = self.delimiter

        if node.type == NodeType.HEADING:
            lead = self._close_list()
            text = self._heading_text(node)
            if not text:
                return lead
            level = clamp_heading_level(node.meta.level)
            return f"{lead}{'#' * level} {text}{d}{d}"

        if node.type == NodeType.LIST:
            return self._render_list_item(node, depth)

        if node.type == NodeType.TABLE:
            return self._close_list() + self.markdown_table(node, depth)

        if node.type == NodeType.IMAGE:
            return self._close_list() + self.image_block(node)

        if node.type in (NodeType.PARAGRAPH, NodeType.TEXT) or not node.is_container:
            return self._render_paragraph(node, depth)

        # Transparent container: inline runs form a paragraph, blocks recurse
        children = node.child_nodes
        if children and not children[0].is_container:
            return self._render_paragraph(node, depth)
        return "".join(self.render_node(child, depth + 1) for child in children)

    def _render_paragraph(self, node: ContentNode, depth: int) -> str:
        d = self.delimiter
        lead = self._close_list()
        if node.type == NodeType.PARAGRAPH and check_if_heading_by_formatting(node):
            text = plain_text(node).strip()
            return f"{lead}{'#' * INFERRED_HEADING_LEVEL} {text}{d}{d}"
        text = self.inline_text(node, depth).strip()
        if not text:
            return lead
        return f"{lead}{text}{d}{d}"

    def _render_list_item(self, node: ContentNode, depth: int) -> str:
        meta = node.meta
        state = (max(meta.indentation or 0, 0), meta.list_type or ListType.UNORDERED.value)
        lead = ""
        if self._list_state is not None and self._list_state != state:
            lead = self.delimiter
        self._list_state = state
        return lead + self.list_item(node, depth)

    def _close_list(self) -> str:
        """End any open list run, returning the blank line that closes it."""
        if self._list_state is None:
            return ""
        self._list_state = None
        return self.delimiter

    @staticmethod
    def _heading_text(node: ContentNode) -> str:
        if node.is_container:
            return plain_text(node).strip()
        return (node.text or "").strip()

"""PDF renderer - page-structured Markdown with indented nesting."""

from officeast.models import ContentNode, NodeType

from .base import BaseRenderer, plain_text

PAGE_HEADING = "第 {number} 页"
INDENT = "  "


class PdfRenderer(BaseRenderer):
    """Render pages as ``## 第 N 页`` sections.

    Headings sit one level below their nominal level because the page header
    already occupies level 2. Each nesting level indents by two spaces.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._page_counter = 0

    def render_text(self) -> str:
        self._page_counter = 0
        body = "".join(self.render_node(node, 0) for node in self.document.content)
        return self.with_attachments(body)

    def render_node(self, node: ContentNode, depth: int) -> str:
        """Render a block-level node at ``depth`` levels of indentation."""
        if self.too_deep(depth):
            return ""
        d = self.delimiter
        indent = INDENT * depth

        if node.type == NodeType.PAGE:
            self._page_counter += 1
            out = f"{indent}## {PAGE_HEADING.format(number=self._page_counter)}{d}{d}"
            out += "".join(self.render_node(child, depth + 1) for child in node.child_nodes)
            return out + d

        if node.type == NodeType.HEADING:
            # Children repeat the heading text, so only the text itself is used
            text = (node.text or "").strip() if not node.is_container else plain_text(node).strip()
            if not text:
                return ""
            level = min(max(node.meta.level or 1, 1) + 1, 6)
            return f"{indent}{'#' * level} {text}{d}{d}"

        if node.type == NodeType.IMAGE:
            return self.image_block(node, indent)

        if node.type == NodeType.LIST:
            return self.list_item(node, depth, indent)

        if node.type == NodeType.TABLE:
            return self.markdown_table(node, depth, indent)

        children = node.child_nodes
        if node.type in (NodeType.PARAGRAPH, NodeType.TEXT) or not children or not children[0].is_container:
            text = self.inline_text(node, depth).strip()
            return f"{indent}{text}{d}{d}" if text else ""

        return "".join(self.render_node(child, depth + 1) for child in children)

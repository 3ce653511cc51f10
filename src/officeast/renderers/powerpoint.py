"""PowerPoint (pptx) renderer - slides of titles, text, lists, tables, images."""

from typing import Any, Optional

from officeast.models import (
    ContentNode,
    NodeType,
    PowerPointJson,
    SlideData,
    SlideElement,
    SlideElementType,
)

from .base import IMAGE_PLACEHOLDER, BaseRenderer, dump_attachments, plain_text

SLIDE_HEADING = "幻灯片"
TABLE_HEADING = "表格"
ROW_LABEL = "行"

# Top-level containers that hold exactly one slide
SLIDE_CONTAINER_TYPES = (NodeType.SLIDE, NodeType.PAGE)


class PowerPointRenderer(BaseRenderer):
    """Render presentations slide by slide."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._slide_counter = 0

    # ------------------------------------------------------------------
    # JSON
    # ------------------------------------------------------------------

    def build_json(self) -> PowerPointJson:
        """Group top-level content into slides and extract their elements.

        A slide container node is one slide. Outside containers a level-1
        heading opens a new slide and other nodes join the current one.
        """
        slides: list[list[SlideElement]] = []
        current: Optional[list[SlideElement]] = None
        for node in self.document.content:
            if node.type in SLIDE_CONTAINER_TYPES and node.is_container:
                elements: list[SlideElement] = []
                for child in node.child_nodes:
                    self._collect(child, elements, 1)
                slides.append(elements)
                current = None
                continue
            if current is None or (node.type == NodeType.HEADING and node.meta.level == 1):
                current = []
                slides.append(current)
            self._collect(node, current, 0)

        return PowerPointJson(
            type=self.document.type,
            metadata=self.document.metadata,
            slides=[SlideData(elements=elements) for elements in slides],
            attachments=dump_attachments(self.document),
        )

    def render_json(self) -> dict[str, Any]:
        return self.build_json().model_dump(by_alias=True)

    def _collect(self, node: ContentNode, elements: list[SlideElement], depth: int) -> None:
        if self.too_deep(depth):
            return

        if node.type == NodeType.HEADING:
            title = node.text if node.text is not None else plain_text(node)
            elements.append(
                SlideElement(
                    type=SlideElementType.TITLE.value,
                    content=title,
                    metadata={"level": node.meta.level or 1},
                )
            )
            return

        if node.type == NodeType.TABLE:
            rows = self._table_rows(node)
            columns = max((len(row) for row in rows), default=0)
            elements.append(
                SlideElement(
                    type=SlideElementType.TABLE.value,
                    content=rows,
                    metadata={"rows": len(rows), "columns": columns},
                )
            )
            return

        if node.type == NodeType.PARAGRAPH:
            text = plain_text(node)
            if text.strip():
                elements.append(SlideElement(type=SlideElementType.PARAGRAPH.value, content=text))
            return

        if node.type == NodeType.LIST:
            items = self._list_items(node)
            if items:
                elements.append(SlideElement(type=SlideElementType.LIST.value, content="\n".join(items)))
            return

        if node.type == NodeType.IMAGE:
            metadata = node.metadata.model_dump(by_alias=True, exclude_none=True) if node.metadata else None
            elements.append(
                SlideElement(
                    type=SlideElementType.IMAGE.value,
                    content=node.text or IMAGE_PLACEHOLDER,
                    metadata=metadata,
                )
            )
            return

        for child in node.child_nodes:
            self._collect(child, elements, depth + 1)

    @staticmethod
    def _table_rows(node: ContentNode) -> list[list[str]]:
        rows = []
        for row in node.child_nodes:
            if row.type != NodeType.ROW:
                continue
            cells = []
            for cell in row.child_nodes:
                if cell.type != NodeType.CELL:
                    continue
                if cell.is_container:
                    parts = (plain_text(child) for child in cell.child_nodes)
                    cells.append(" ".join(part for part in parts if part))
                else:
                    cells.append(cell.text or "")
            rows.append(cells)
        return rows

    @staticmethod
    def _list_items(node: ContentNode) -> list[str]:
        paragraphs = [child for child in node.child_nodes if child.type == NodeType.PARAGRAPH]
        if not paragraphs:
            # List without paragraph children is a single item
            text = plain_text(node)
            return [text] if text.strip() else []
        items = (plain_text(paragraph) for paragraph in paragraphs)
        return [item for item in items if item.strip()]

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def render_text(self) -> str:
        self._slide_counter = 0
        return self.join_top_level(self.render_node)

    def render_node(self, node: ContentNode, depth: int) -> str:
        """Render a node, numbering slides by their level-1 titles."""
        if self.too_deep(depth):
            return ""
        d = self.delimiter

        if node.type == NodeType.HEADING and node.meta.level == 1:
            self._slide_counter += 1
            title = node.text if node.text is not None else plain_text(node)
            return f"## {SLIDE_HEADING} {self._slide_counter}: {title}{d}"

        if node.type == NodeType.TABLE and node.is_container:
            out = f"### {TABLE_HEADING}{d}"
            for row_index, row in enumerate(node.child_nodes, start=1):
                if row.type != NodeType.ROW or not row.is_container:
                    continue
                cells = [
                    self.render_node(cell, depth + 2)
                    for cell in row.child_nodes
                    if cell.type == NodeType.CELL
                ]
                out += f"{ROW_LABEL} {row_index}: [{', '.join(cells)}]{d}"
            return out + d

        if node.is_container:
            return self.join_children(node, self.render_node, depth)
        return node.text or ""

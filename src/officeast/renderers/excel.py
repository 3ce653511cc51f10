"""Excel (xlsx) renderer - sheets as dense row grids.

The text rendering is derived from the JSON projection so both outputs agree
by construction. Column counts and date styles are not exposed structurally
by the parser; they are recovered from each node's raw XML fragment.
"""

import math
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from officeast.models import ContentNode, ExcelJson, NodeType, SheetData

from .base import BaseRenderer, dump_attachments, plain_text

# <dimension ref="A1:D20"/> - captures the end column letters
DIMENSION_PATTERN = re.compile(r'dimension ref="[A-Z]+\d+:([A-Z]+)\d+"')

# <row spans="1:4"> - 1-based start and end columns
SPANS_PATTERN = re.compile(r'spans="(\d+):(\d+)"')

# <c s="1">, <c s='1'> or s=1; not the tail of another attribute like spans=
STYLE_PATTERN = re.compile(r"""(?<![\w-])s=["']?(\d+)["']?""")

# Cell style indices known to carry a date format
DATE_STYLE_INDICES = frozenset({1, 3})

# Excel serial day 0 (Windows 1900 date system)
EXCEL_EPOCH = datetime(1899, 12, 30, tzinfo=timezone.utc)

# Plain decimal or exponent notation, no digit separators or hex
NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

DEFAULT_SHEET_NAME = "工作表{index}"
ROW_HEADING = "行"


def column_count(letters: str) -> int:
    """Convert column letters to a 1-based column count (A=1, Z=26, AA=27)."""
    count = 0
    for char in letters:
        count = count * 26 + (ord(char) - ord("A") + 1)
    return count


def sheet_total_columns(raw_content: Optional[str]) -> int:
    """Column count from a sheet's dimension ref, 0 when unknown."""
    if not raw_content:
        return 0
    match = DIMENSION_PATTERN.search(raw_content)
    if match is None:
        return 0
    return column_count(match.group(1))


def row_total_columns(raw_content: Optional[str], default: int) -> int:
    """Column count from a row's spans attribute, ``default`` when unknown."""
    if not raw_content:
        return default
    match = SPANS_PATTERN.search(raw_content)
    if match is None:
        return default
    return int(match.group(2))


def cell_style_index(raw_content: Optional[str]) -> Optional[int]:
    """Style index of a cell from its raw XML, None when absent."""
    if not raw_content:
        return None
    match = STYLE_PATTERN.search(raw_content)
    if match is None:
        return None
    return int(match.group(1))


def format_excel_date(text: str, raw_content: Optional[str]) -> str:
    """Render numeric cells with a known date style as YYYY-MM-DD.

    Anything else, including numbers outside the representable date range,
    is returned unchanged.
    """
    if not NUMBER_PATTERN.fullmatch(text.strip()):
        return text
    value = float(text)
    if not math.isfinite(value):
        return text
    if cell_style_index(raw_content) not in DATE_STYLE_INDICES:
        return text
    try:
        date = EXCEL_EPOCH + timedelta(days=value)
    except OverflowError:
        return text
    return f"{date.year:04d}-{date.month:02d}-{date.day:02d}"


class ExcelRenderer(BaseRenderer):
    """Render workbooks as named sheets of bracketed rows."""

    def build_json(self) -> ExcelJson:
        """Build the typed workbook projection."""
        sheets = []
        sheet_nodes = [node for node in self.document.content if node.type == NodeType.SHEET]
        for index, sheet in enumerate(sheet_nodes, start=1):
            sheets.append(self._build_sheet(sheet, index))
        return ExcelJson(
            type=self.document.type,
            metadata=self.document.metadata,
            sheets=sheets,
            attachments=dump_attachments(self.document),
        )

    def render_json(self) -> dict[str, Any]:
        return self.build_json().model_dump(by_alias=True)

    def render_text(self) -> str:
        d = self.delimiter
        out = ""
        for sheet in self.build_json().sheets:
            out += f"## {sheet.name}{d}"
            for row_index, row in enumerate(sheet.rows, start=1):
                out += f"### {ROW_HEADING} {row_index}{d}"
                out += f"[{', '.join(row)}]{d}"
            out += d
        return out

    def _build_sheet(self, sheet: ContentNode, index: int) -> SheetData:
        name = sheet.meta.sheet_name or DEFAULT_SHEET_NAME.format(index=index)
        total_columns = sheet_total_columns(sheet.raw_content)
        rows = [
            self._build_row(row, total_columns)
            for row in sheet.child_nodes
            if row.type == NodeType.ROW
        ]
        metadata = sheet.metadata.model_dump(by_alias=True, exclude_none=True) if sheet.metadata else {}
        return SheetData(name=name, metadata=metadata, rows=rows, total_columns=total_columns)

    def _build_row(self, row: ContentNode, total_columns: int) -> list[str]:
        width = row_total_columns(row.raw_content, total_columns)
        values = [""] * width
        for cell in row.child_nodes:
            if cell.type != NodeType.CELL:
                continue
            col = cell.meta.col
            # Cells without a column or outside the row span are dropped
            if col is None or not 0 <= col < width:
                continue
            values[col] = format_excel_date(plain_text(cell), cell.raw_content)
        return values

"""Tests for the Excel (xlsx) renderer."""

import json

import pytest

from officeast.models import ParsedDocument
from officeast.renderers import format_excel_date, render_to_json, render_to_text
from officeast.renderers.excel import (
    cell_style_index,
    column_count,
    row_total_columns,
    sheet_total_columns,
)


def cell(col, text, raw=None):
    node = {"type": "cell", "metadata": {"col": col}, "children": [{"type": "text", "text": text}]}
    if raw is not None:
        node["rawContent"] = raw
    return node


def sheet(cells, name=None, dimension="A1:B2", spans=None):
    node = {
        "type": "sheet",
        "rawContent": f'<dimension ref="{dimension}"/>' if dimension else None,
        "children": [
            {"type": "row", "rawContent": f'<row spans="{spans}">' if spans else None, "children": cells}
        ],
    }
    if name:
        node["metadata"] = {"sheetName": name}
    return node


class TestRawContentExtraction:
    """Tests for raw XML attribute recovery."""

    @pytest.mark.parametrize("letters,expected", [("A", 1), ("B", 2), ("Z", 26), ("AA", 27), ("AB", 28)])
    def test_column_count(self, letters, expected):
        """Column letters convert to a 1-based count."""
        assert column_count(letters) == expected

    def test_sheet_total_columns(self):
        """End column of the dimension ref gives the sheet width."""
        assert sheet_total_columns('<dimension ref="A1:D20"/>') == 4
        assert sheet_total_columns('<dimension ref="A1"/>') == 0
        assert sheet_total_columns(None) == 0

    def test_row_total_columns(self):
        """Row spans override the sheet width."""
        assert row_total_columns('<row r="1" spans="1:5">', 2) == 5
        assert row_total_columns("<row r=\"1\">", 2) == 2
        assert row_total_columns(None, 3) == 3

    @pytest.mark.parametrize(
        "raw,expected",
        [('<c r="A1" s="1">', 1), ("<c r='A1' s='3'>", 3), ("<c s=12>", 12), ('<c r="A1">', None), ('<row spans="1:2">', None)],
    )
    def test_cell_style_index(self, raw, expected):
        """Style index is read from s= only."""
        assert cell_style_index(raw) == expected


class TestExcelDates:
    """Tests for the date-serial heuristic."""

    def test_date_style_converts(self):
        """Style 1 turns a serial into an ISO date."""
        assert format_excel_date("44562", 's="1"') == "2022-01-01"

    def test_style_three_converts(self):
        """Style 3 is also a date style."""
        assert format_excel_date("1", "s=3") == "1899-12-31"

    def test_fractional_serial(self):
        """Time of day does not change the date."""
        assert format_excel_date("44562.75", 's="1"') == "2022-01-01"

    def test_other_style_unchanged(self):
        """Styles outside the allowlist keep the number."""
        assert format_excel_date("44562", 's="5"') == "44562"

    def test_no_style_unchanged(self):
        """Cells without raw content keep the number."""
        assert format_excel_date("44562", None) == "44562"

    @pytest.mark.parametrize("text", ["abc", "", "nan", "inf", "1e308", "1_0", "0x10", "1,5"])
    def test_non_dates_unchanged(self, text):
        """Non-numeric, non-finite, and out-of-range values are left alone."""
        assert format_excel_date(text, 's="1"') == text


class TestExcelRendering:
    """Tests for sheet rendering."""

    def test_scenario_text(self, excel_scenario):
        """Sheet name, row heading, and bracketed row."""
        text = render_to_text(ParsedDocument.model_validate(excel_scenario))
        assert "## Q1" in text
        assert "### 行 1" in text
        assert "[Name, Age]" in text
        assert text == "## Q1\n### 行 1\n[Name, Age]\n\n"

    def test_custom_delimiter(self, excel_scenario):
        """Sheet, row heading and row lines end with the delimiter."""
        text = render_to_text(ParsedDocument.model_validate(excel_scenario), delimiter="\r\n")
        assert text == "## Q1\r\n### 行 1\r\n[Name, Age]\r\n\r\n"

    def test_scenario_json(self, excel_scenario):
        """JSON projection carries the dense grid and column count."""
        result = render_to_json(ParsedDocument.model_validate(excel_scenario))
        assert result["type"] == "xlsx"
        assert result["metadata"] == {"sheetCount": 1}
        assert result["sheets"] == [
            {"name": "Q1", "metadata": {"sheetName": "Q1"}, "rows": [["Name", "Age"]], "totalColumns": 2}
        ]
        assert result["attachments"] == []
        json.dumps(result)

    def test_date_cells_in_rows(self, make_doc):
        """Date-styled cells render as dates inside rows."""
        doc = make_doc("xlsx", [sheet([cell(0, "44562", '<c s="1">'), cell(1, "44562", '<c s="5">')], "S")])
        assert render_to_json(doc)["sheets"][0]["rows"] == [["2022-01-01", "44562"]]

    def test_digit_separators_not_dates(self, make_doc):
        """Text that only Python would read as a number stays text."""
        doc = make_doc("xlsx", [sheet([cell(0, "1_0", '<c s="1">'), cell(1, "44562", '<c s="3">')], "S")])
        assert render_to_json(doc)["sheets"][0]["rows"] == [["1_0", "2022-01-01"]]

    def test_row_spans_widen_row(self, make_doc):
        """Row spans set the row width and missing cells stay empty."""
        doc = make_doc("xlsx", [sheet([cell(0, "x")], "S", spans="1:3")])
        assert "[x, , ]" in render_to_text(doc)

    def test_unknown_width_gives_empty_row(self, make_doc):
        """Without dimension or spans the row has no columns."""
        doc = make_doc("xlsx", [sheet([cell(0, "x")], "S", dimension=None)])
        result = render_to_json(doc)["sheets"][0]
        assert result["totalColumns"] == 0
        assert result["rows"] == [[]]
        assert "[]" in render_to_text(doc)

    def test_out_of_range_and_columnless_cells_dropped(self, make_doc):
        """Cells outside the span or without a column contribute nothing."""
        stray = {"type": "cell", "children": [{"type": "text", "text": "nocol"}]}
        doc = make_doc("xlsx", [sheet([cell(5, "far"), cell(-1, "neg"), stray, cell(1, "b")], "S")])
        assert render_to_json(doc)["sheets"][0]["rows"] == [["", "b"]]

    def test_default_sheet_names(self, make_doc):
        """Unnamed sheets are numbered by position."""
        doc = make_doc("xlsx", [sheet([cell(0, "a")], "First"), sheet([cell(0, "b")])])
        text = render_to_text(doc)
        assert "## First\n" in text
        assert "## 工作表2\n" in text

    def test_multiple_rows_numbered(self, make_doc):
        """Rows are numbered in order within a sheet."""
        rows = [
            {"type": "row", "children": [cell(0, str(i))]}
            for i in range(3)
        ]
        doc = make_doc("xlsx", [{"type": "sheet", "metadata": {"sheetName": "S"}, "rawContent": 'dimension ref="A1:A3"', "children": rows}])
        assert render_to_text(doc) == "## S\n### 行 1\n[0]\n### 行 2\n[1]\n### 行 3\n[2]\n\n"

    def test_text_consistent_with_json(self, make_doc):
        """Every JSON row appears in the text rendering."""
        doc = make_doc("xlsx", [sheet([cell(0, "a"), cell(1, "b")], "S"), sheet([cell(0, "c")], "T")])
        result = render_to_json(doc)
        text = render_to_text(doc)
        for sheet_data in result["sheets"]:
            assert f"## {sheet_data['name']}" in text
            for row in sheet_data["rows"]:
                assert f"[{', '.join(row)}]" in text

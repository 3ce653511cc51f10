"""Pytest configuration and fixtures."""

import json

import pytest

from officeast.config import settings
from officeast.models import ParsedDocument
from officeast.storage import close_db


@pytest.fixture
def make_doc():
    """Build a ParsedDocument from parser-style (camelCase) dicts."""

    def _make(doc_type, content, attachments=None, metadata=None):
        return ParsedDocument.model_validate(
            {
                "type": doc_type,
                "metadata": metadata or {},
                "content": content,
                "attachments": attachments or [],
            }
        )

    return _make


@pytest.fixture
def excel_scenario():
    """Single sheet Q1 with one header row (Name, Age)."""
    return {
        "type": "xlsx",
        "metadata": {"sheetCount": 1},
        "content": [
            {
                "type": "sheet",
                "metadata": {"sheetName": "Q1"},
                "rawContent": '<dimension ref="A1:B2"/>',
                "children": [
                    {
                        "type": "row",
                        "rawContent": '<row r="1" spans="1:2">',
                        "children": [
                            {"type": "cell", "metadata": {"col": 0}, "children": [{"type": "text", "text": "Name"}]},
                            {"type": "cell", "metadata": {"col": 1}, "children": [{"type": "text", "text": "Age"}]},
                        ],
                    }
                ],
            }
        ],
        "attachments": [],
    }


@pytest.fixture
def document_file(tmp_path, excel_scenario):
    """Write the Excel scenario to a ParsedDocument JSON file."""
    path = tmp_path / "workbook.json"
    path.write_text(json.dumps(excel_scenario, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def cache_dir(tmp_path, monkeypatch):
    """Point the default cache database at a temporary directory."""
    monkeypatch.setattr(settings, "cache_dir", tmp_path / "cache")
    close_db()
    yield settings.cache_dir
    close_db()

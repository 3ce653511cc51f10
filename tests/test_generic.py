"""Tests for the generic renderer and its join rule."""

import json

from officeast.renderers import GenericRenderer, render_to_json, render_to_text


def paragraph(*texts):
    return {"type": "paragraph", "children": [{"type": "text", "text": t} for t in texts]}


class TestGenericText:
    """Tests for generic text extraction."""

    def test_inline_runs_concatenate(self, make_doc):
        """Leaf runs inside one block join with no separator."""
        doc = make_doc("odt", [paragraph("Hello ", "world"), paragraph("Second")])
        assert render_to_text(doc) == "Hello world\nSecond"

    def test_block_children_use_delimiter(self, make_doc):
        """Children that are containers are separated by the delimiter."""
        section = {"type": "section", "children": [paragraph("a"), paragraph("b")]}
        doc = make_doc("rtf", [section])
        assert render_to_text(doc) == "a\nb"

    def test_custom_delimiter(self, make_doc):
        """The caller's delimiter is used for block joins only."""
        section = {"type": "section", "children": [paragraph("a", "b"), paragraph("c")]}
        doc = make_doc("odp", [section, paragraph("d")])
        assert render_to_text(doc, delimiter="<br>") == "ab<br>c<br>d"

    def test_empty_children_filtered(self, make_doc):
        """Empty renderings leave no blank artifacts."""
        section = {"type": "section", "children": [paragraph("a"), paragraph(""), paragraph("b")]}
        doc = make_doc("ods", [section, paragraph("")])
        assert render_to_text(doc) == "a\nb"

    def test_join_decided_by_first_child(self, make_doc):
        """A leaf first child makes the whole join inline."""
        mixed = {"type": "section", "children": [{"type": "text", "text": "x"}, paragraph("y")]}
        doc = make_doc("odt", [mixed])
        assert render_to_text(doc) == "xy"

    def test_order_preserved(self, make_doc):
        """Output order matches child order."""
        section = {"type": "section", "children": [paragraph(str(i)) for i in range(10)]}
        doc = make_doc("odt", [section])
        assert render_to_text(doc).split("\n") == [str(i) for i in range(10)]

    def test_renderer_class_directly(self, make_doc):
        """GenericRenderer can be used on any document type."""
        doc = make_doc("docx", [paragraph("plain")])
        assert GenericRenderer(doc).render_text() == "plain"


class TestGenericJson:
    """Tests for the generic JSON projection."""

    def test_flattened_content(self, make_doc):
        """One text entry per top-level node, empties dropped."""
        doc = make_doc(
            "odt",
            [paragraph("Hello ", "world"), paragraph(""), paragraph("Second")],
            attachments=[{"name": "a.png", "mimeType": "image/png"}],
            metadata={"title": "T"},
        )
        result = render_to_json(doc)
        assert result == {
            "type": "odt",
            "metadata": {"title": "T"},
            "content": ["Hello world", "Second"],
            "attachments": [{"name": "a.png", "mimeType": "image/png"}],
        }

    def test_serializable(self, make_doc):
        """The projection is plain JSON."""
        doc = make_doc("rtf", [paragraph("x")])
        assert json.loads(json.dumps(render_to_json(doc)))["content"] == ["x"]

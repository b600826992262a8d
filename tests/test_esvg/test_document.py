"""Tests for page-sized SVG documents."""

from pathlib import Path

import pytest

from esvg.document import SVG_NAMESPACE, XLINK_NAMESPACE, Document
from esvg.page import Page
from esvg.shapes import circle
from esvg.shared.errors import UnknownPaperError
from esvg.shared.point import Point
from esvg.tree import PREAMBLE, Element, TreeBuilder

A4_EXPECTED = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.0//EN" '
    '"http://www.w3.org/TR/2001/REC-SVG-20010904/DTD/svg10.dtd">\n'
    '<svg height="297.1270833333333mm" viewBox="0, 0, 794, 1123" '
    'width="210.07916666666668mm" xmlns="http://www.w3.org/2000/svg" '
    'xmlns:xlink="http://www.w3.org/1999/xlink">\n'
    "\t<g>\n"
    '\t\t<circle cx="100" cy="100" fill="none" r="50" />\n'
    "\t</g>\n"
    "</svg>\n"
)


@pytest.fixture
def a4_document() -> Document:
    document = Document(Page.a4(96))
    group = Element.group()
    group.add_child(circle(Point(100, 100), 50))
    document.add(group)
    return document


class TestDocumentRoot:
    """Test root element setup."""

    def test_root_attributes(self) -> None:
        root = Document(Page.a4(96)).root
        assert root.tag == "svg"
        assert root.get_attribute("xmlns") == SVG_NAMESPACE
        assert root.get_attribute("xmlns:xlink") == XLINK_NAMESPACE
        assert root.get_attribute("viewBox") == "0, 0, 794, 1123"
        assert root.get_attribute("width") == "210.07916666666668mm"
        assert root.get_attribute("height") == "297.1270833333333mm"

    def test_new_document_has_no_children(self) -> None:
        assert Document(Page.a4(96)).children == []

    def test_add_appends_to_root(self) -> None:
        document = Document(Page.a5(96))
        first, second = Element("g"), Element("rect")
        document.add(first)
        document.add(second)
        assert document.children == [first, second]
        assert document.root.children is document.children

    def test_landscape_page(self) -> None:
        document = Document(Page.a4(96).rotate())
        assert document.root.get_attribute("viewBox") == "0, 0, 1123, 794"

    def test_from_paper(self) -> None:
        document = Document.from_paper("A4", 96)
        assert document.page == Page.build("a4", 96)
        assert document.root.get_attribute("viewBox") == "0, 0, 794, 1123"

    def test_from_unknown_paper(self) -> None:
        with pytest.raises(UnknownPaperError):
            Document.from_paper("B7")


class TestDocumentSerialization:
    """Test document output."""

    def test_pretty_output_matches_expected(self, a4_document: Document) -> None:
        assert a4_document.to_pretty_string() == A4_EXPECTED

    def test_compact_output(self, a4_document: Document) -> None:
        output = a4_document.to_string()
        assert output.startswith(PREAMBLE + "<svg ")
        assert output.endswith(
            '><g><circle cx="100" cy="100" fill="none" r="50" /></g></svg>\n'
        )
        assert "\t" not in output

    def test_empty_document_self_closes(self) -> None:
        output = Document(Page.a4(96)).to_pretty_string()
        assert output.startswith(PREAMBLE)
        assert output.endswith(' xmlns:xlink="http://www.w3.org/1999/xlink" />\n')

    def test_output_parses_back(self, a4_document: Document) -> None:
        result = TreeBuilder().build(a4_document.to_pretty_string())
        assert result.declaration == '<?xml version="1.0" encoding="UTF-8"?>'
        assert result.doctype is not None
        assert result.root.find("circle") == circle(Point(100, 100), 50)

    def test_save_pretty(self, a4_document: Document, tmp_path: Path) -> None:
        target = a4_document.save(tmp_path / "drawing.svg")
        assert target == tmp_path / "drawing.svg"
        assert target.read_text(encoding="utf-8") == A4_EXPECTED

    def test_save_compact(self, a4_document: Document, tmp_path: Path) -> None:
        target = a4_document.save(str(tmp_path / "drawing.svg"), pretty=False)
        assert target.read_text(encoding="utf-8") == a4_document.to_string()

"""Tests for building element trees from markup."""

import time

import pytest

from esvg.shared.config import ParserConfig
from esvg.shared.errors import (
    ContentOutsideRootError,
    EmptyDocumentError,
    MalformedAttributeError,
    MismatchedClosingTagError,
    NestingTooDeepError,
    ParseError,
    UnclosedElementError,
    UnexpectedEofError,
    UnterminatedCommentError,
)
from esvg.shared.result import DiagnosticSeverity
from esvg.tree import Comment, Element, ParseResult, Text, TreeBuilder


def build(text: str, **config) -> ParseResult:
    return TreeBuilder(ParserConfig(**config)).build(text)


class TestTreeConstruction:
    """Test the shape of built trees."""

    def test_nested_elements(self) -> None:
        root = build('<svg><g id="layer"><circle r="5"/></g></svg>').root
        assert root.tag == "svg"
        group = root.children[0]
        assert isinstance(group, Element)
        assert group.get_attribute("id") == "layer"
        assert group.children == [Element("circle", {"r": "5"})]

    def test_self_closing_equivalent_to_explicit_close(self) -> None:
        short = build('<circle r="5"/>').root
        explicit = build('<circle r="5"></circle>').root
        assert short == explicit
        assert explicit.children == []

    def test_attribute_order_follows_markup(self) -> None:
        root = build('<g z="1" a="2" m="3"/>').root
        assert root.attribute_items() == (("z", "1"), ("a", "2"), ("m", "3"))

    def test_whitespace_preserved_exactly(self) -> None:
        root = build("<svg>\n\t<g/>\n</svg>").root
        assert root.children == [Text("\n\t"), Element("g"), Text("\n")]

    def test_comment_preserved(self) -> None:
        root = build("<svg><!--hi--></svg>").root
        assert root.children == [Comment("hi")]

    def test_text_content_not_decoded(self) -> None:
        root = build("<text>a &amp; b</text>").root
        assert root.children == [Text("a &amp; b")]

    def test_cdata_kept_as_raw_text(self) -> None:
        root = build("<style><![CDATA[a > b]]></style>").root
        assert root.children == [Text("<![CDATA[a > b]]>")]

    def test_text_runs_merged_across_processing_instruction(self) -> None:
        root = build("<text>a<?pi x?>b</text>").root
        assert root.children == [Text("ab")]

    def test_preamble_captured(self) -> None:
        markup = (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.0//EN" "x.dtd">\n'
            "<svg/>\n"
        )
        result = build(markup)
        assert result.declaration == '<?xml version="1.0" encoding="UTF-8"?>'
        assert result.doctype == '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.0//EN" "x.dtd">'
        assert result.root == Element("svg")

    def test_element_count(self) -> None:
        result = build("<svg><g><circle/><circle/></g></svg>")
        assert result.element_count == 4
        assert result.processing_time_ms >= 0.0


class TestDiagnostics:
    """Test non-fatal observations."""

    def test_duplicate_attribute_overwrites_and_warns(self) -> None:
        result = build('<g a="1" b="2" a="3"/>')
        assert result.root.attribute_items() == (("a", "3"), ("b", "2"))
        assert result.has_warnings
        assert result.diagnostics[0].severity is DiagnosticSeverity.WARNING

    def test_comment_outside_root_dropped(self) -> None:
        result = build("<!-- header --><svg/>")
        assert result.root.children == []
        assert result.diagnostics[0].severity is DiagnosticSeverity.INFO
        assert not result.has_warnings


class TestConfiguration:
    """Test parser configuration options."""

    def test_whitespace_runs_dropped(self) -> None:
        root = build("<svg>\n\t<g>\n\t\t<circle/>\n\t</g>\n</svg>", preserve_whitespace=False).root
        assert root == Element("svg", children=[Element("g", children=[Element("circle")])])

    def test_non_whitespace_text_kept_when_dropping(self) -> None:
        root = build("<text> hi </text>", preserve_whitespace=False).root
        assert root.children == [Text(" hi ")]

    def test_comments_dropped(self) -> None:
        root = build("<svg>a<!--x-->b</svg>", keep_comments=False).root
        assert root.children == [Text("ab")]

    def test_max_depth(self) -> None:
        with pytest.raises(NestingTooDeepError):
            build("<a><b><c/></b></a>", max_depth=1)
        assert build("<a><b/></a>", max_depth=1).root.tag == "a"


class TestParseErrors:
    """Test structural errors."""

    def test_mismatched_closing_tag(self) -> None:
        with pytest.raises(MismatchedClosingTagError) as excinfo:
            build("<g><circle/></h>")
        assert excinfo.value.expected == "g"
        assert excinfo.value.found == "h"
        assert excinfo.value.offset == 12

    def test_closing_tag_without_open_element(self) -> None:
        with pytest.raises(MismatchedClosingTagError) as excinfo:
            build("</g>")
        assert excinfo.value.expected is None
        assert excinfo.value.found == "g"

    def test_unclosed_element(self) -> None:
        with pytest.raises(UnclosedElementError) as excinfo:
            build("<svg><g>")
        assert excinfo.value.tag == "g"
        assert excinfo.value.offset == 8

    def test_unterminated_comment(self) -> None:
        with pytest.raises(UnterminatedCommentError):
            build("<svg><!--")

    def test_unexpected_eof(self) -> None:
        with pytest.raises(UnexpectedEofError):
            build("<svg><g")

    def test_malformed_attribute(self) -> None:
        with pytest.raises(MalformedAttributeError):
            build('<svg width="10></svg>')

    def test_invalid_attribute_name_becomes_parse_error(self) -> None:
        with pytest.raises(MalformedAttributeError):
            build('<svg a&b="1"/>')

    @pytest.mark.parametrize("markup", ["", "   \n", "<!-- only a comment -->"])
    def test_empty_document(self, markup: str) -> None:
        with pytest.raises(EmptyDocumentError):
            build(markup)

    def test_second_root(self) -> None:
        with pytest.raises(ContentOutsideRootError):
            build("<a/><b/>")

    def test_text_outside_root(self) -> None:
        with pytest.raises(ContentOutsideRootError):
            build("<a/>trailing")

    def test_all_errors_are_parse_errors(self) -> None:
        with pytest.raises(ParseError):
            build("<g></h>")


class TestScaling:
    """Test build time against input size."""

    @staticmethod
    def _best_build_time(siblings: int) -> float:
        markup = "<svg>" + "<circle/>" * siblings + "</svg>"
        timings = []
        for _ in range(3):
            start = time.perf_counter()
            result = build(markup)
            timings.append(time.perf_counter() - start)
        assert len(result.root.children) == siblings
        return min(timings)

    def test_wide_element_builds_in_linear_time(self) -> None:
        small = self._best_build_time(2000)
        large = self._best_build_time(16000)
        # 8x the input; quadratic sibling handling would be about 64x
        assert large < small * 24

    def test_deep_nesting_within_default_limit(self) -> None:
        depth = 300
        markup = "<g>" * depth + "</g>" * depth
        root = build(markup).root
        assert TreeBuilder().build(root.to_string()).root == root

"""Tree building for SVG markup.

Converts the token stream produced by ``MarkupTokenizer`` into an ``Element``
tree using an explicit stack of open elements. Building is strict: the first
structural problem raises a ``ParseError`` and no partial tree is returned.

Text handling:
    Whitespace is preserved byte for byte. Adjacent character data runs are
    merged, so a built tree never contains two neighbouring Text nodes (runs can
    only be split by a processing instruction, which is dropped).
"""

import time
from dataclasses import dataclass, field
from typing import List, Optional

from esvg.shared.config import ParserConfig
from esvg.shared.errors import (
    ContentOutsideRootError,
    EmptyDocumentError,
    InvalidAttributeNameError,
    InvalidTagError,
    MalformedAttributeError,
    MalformedTagError,
    MismatchedClosingTagError,
    NestingTooDeepError,
    UnclosedElementError,
)
from esvg.shared.logging import get_logger
from esvg.shared.result import DiagnosticEntry, DiagnosticSeverity
from esvg.tokenization import MarkupTokenizer, Token, TokenPosition, TokenType
from esvg.tree.node import Comment, Element, Text

MS_PER_SECOND = 1000


@dataclass
class ParseResult:
    """Result of building a tree from markup.

    Attributes:
        root: The single root element
        declaration: Raw ``<?xml ...?>`` declaration, if present
        doctype: Raw ``<!DOCTYPE ...>`` declaration, if present
        diagnostics: Non-fatal observations made while building
        element_count: Number of elements in the tree
        processing_time_ms: Time spent tokenizing and building
    """

    root: Element
    declaration: Optional[str] = None
    doctype: Optional[str] = None
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    element_count: int = 0
    processing_time_ms: float = 0.0

    @property
    def has_warnings(self) -> bool:
        return any(d.severity is DiagnosticSeverity.WARNING for d in self.diagnostics)


class TreeBuilder:
    """Builds an element tree from markup text.

    Example:
        >>> result = TreeBuilder().build('<svg><circle r="5"/></svg>')
        >>> result.root.children[0].get_attribute("r")
        '5'
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id
        self.tokenizer = MarkupTokenizer(correlation_id)
        self.logger = get_logger(__name__, correlation_id, "tree_builder")

    def build(self, text: str) -> ParseResult:
        """Parse markup text into a tree.

        Raises:
            ParseError: On the first tokenization or structural error
        """
        start_time = time.time()
        tokens = self.tokenizer.tokenize(text)

        stack: List[Element] = []
        root: Optional[Element] = None
        declaration: Optional[str] = None
        doctype: Optional[str] = None
        diagnostics: List[DiagnosticEntry] = []
        element_count = 0

        for token in tokens:
            if token.type is TokenType.START_TAG:
                element = self._create_element(token, diagnostics)
                element_count += 1
                if stack:
                    stack[-1].add_child(element)
                elif root is not None:
                    raise self._error(
                        ContentOutsideRootError,
                        f"Second root element <{token.value}>",
                        token.position,
                    )
                else:
                    root = element
                if not token.self_closing:
                    if len(stack) >= self.config.max_depth:
                        raise self._error(
                            NestingTooDeepError,
                            f"Nesting exceeds {self.config.max_depth} open elements",
                            token.position,
                        )
                    stack.append(element)

            elif token.type is TokenType.END_TAG:
                where = token.position
                if not stack:
                    raise MismatchedClosingTagError(
                        None, token.value, where.offset, where.line, where.column
                    )
                if stack[-1].tag != token.value:
                    raise MismatchedClosingTagError(
                        stack[-1].tag, token.value, where.offset, where.line, where.column
                    )
                stack.pop()

            elif token.type in (TokenType.TEXT, TokenType.CDATA):
                if stack:
                    self._append_text(stack[-1], token.value)
                elif token.value.strip():
                    raise self._error(
                        ContentOutsideRootError,
                        "Text outside the root element",
                        token.position,
                    )

            elif token.type is TokenType.COMMENT:
                if stack:
                    if self.config.keep_comments:
                        stack[-1].add_child(Comment(token.value))
                else:
                    diagnostics.append(DiagnosticEntry(
                        severity=DiagnosticSeverity.INFO,
                        message="Comment outside the root element dropped",
                        component="tree_builder",
                        position=token.position.to_dict(),
                    ))

            elif token.type is TokenType.PROCESSING_INSTRUCTION:
                if token.value.startswith("<?xml") and declaration is None and root is None:
                    declaration = token.value

            elif token.type is TokenType.DOCTYPE:
                if doctype is None and root is None:
                    doctype = token.value

        if stack:
            where = self.tokenizer.position(len(text))
            raise UnclosedElementError(stack[-1].tag, where.offset, where.line, where.column)
        if root is None:
            where = self.tokenizer.position(len(text))
            raise EmptyDocumentError(
                "Input contains no root element", where.offset, where.line, where.column
            )

        if not self.config.preserve_whitespace:
            _strip_whitespace_text(root)

        processing_time = (time.time() - start_time) * MS_PER_SECOND
        self.logger.debug(
            "Tree building completed",
            extra={
                "root_tag": root.tag,
                "element_count": element_count,
                "processing_time_ms": processing_time,
            }
        )
        return ParseResult(
            root=root,
            declaration=declaration,
            doctype=doctype,
            diagnostics=diagnostics,
            element_count=element_count,
            processing_time_ms=processing_time,
        )

    def _create_element(self, token: Token, diagnostics: List[DiagnosticEntry]) -> Element:
        where = token.position
        try:
            element = Element(token.value)
        except InvalidTagError as e:
            raise MalformedTagError(str(e), where.offset, where.line, where.column) from e
        for name, value in token.attributes:
            if element.has_attribute(name):
                diagnostics.append(DiagnosticEntry(
                    severity=DiagnosticSeverity.WARNING,
                    message=f"Duplicate attribute {name!r} on <{token.value}> overwritten",
                    component="tree_builder",
                    position=where.to_dict(),
                ))
            try:
                element.set_attribute(name, value)
            except InvalidAttributeNameError as e:
                raise MalformedAttributeError(
                    str(e), where.offset, where.line, where.column
                ) from e
        return element

    @staticmethod
    def _append_text(parent: Element, content: str) -> None:
        if parent.children and isinstance(parent.children[-1], Text):
            parent.children[-1].content += content
        else:
            parent.add_child(Text(content))

    @staticmethod
    def _error(error_class: type, message: str, where: TokenPosition) -> Exception:
        return error_class(message, where.offset, where.line, where.column)


def _strip_whitespace_text(element: Element) -> None:
    element.children = [
        child for child in element.children
        if not (isinstance(child, Text) and child.is_whitespace)
    ]
    for child in element.children:
        if isinstance(child, Element):
            _strip_whitespace_text(child)

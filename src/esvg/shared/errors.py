"""Exception hierarchy for esvg.

Tree errors are local precondition violations reported to the caller. Parse
errors are terminal for a parse call and carry the position where the problem
was detected.
"""

from typing import Optional


class EsvgError(Exception):
    """Base exception for all esvg errors."""


class TreeError(EsvgError):
    """Base exception for misuse of the node API."""


class InvalidTagError(TreeError):
    """Raised when an element tag is empty or contains reserved characters."""


class InvalidAttributeNameError(TreeError):
    """Raised when an attribute name is empty or contains reserved characters."""


class UnsupportedOperationError(TreeError):
    """Raised when an element-only operation is used on a Text or Comment node."""


class MalformedStyleError(TreeError):
    """Raised when a style attribute entry has no ``key:value`` separator."""


class ParseError(EsvgError):
    """Base exception for markup parse failures.

    Attributes:
        offset: Character offset where the problem was detected
        line: 1-based line number of the offset
        column: 1-based column number of the offset
    """

    def __init__(
        self,
        message: str,
        offset: int = 0,
        line: int = 1,
        column: int = 1
    ) -> None:
        super().__init__(f"{message} (line {line}, column {column})")
        self.reason = message
        self.offset = offset
        self.line = line
        self.column = column


class UnexpectedEofError(ParseError):
    """Raised when input ends in the middle of a tag or declaration."""


class UnterminatedCommentError(ParseError):
    """Raised when a comment has no closing ``-->``."""


class MalformedAttributeError(ParseError):
    """Raised when an attribute list violates quoting or ``=`` syntax."""


class MalformedTagError(ParseError):
    """Raised when a tag has no usable name."""


class EmptyDocumentError(ParseError):
    """Raised when the input contains no root element."""


class ContentOutsideRootError(ParseError):
    """Raised on a second root element or text outside the root element."""


class NestingTooDeepError(ParseError):
    """Raised when open elements exceed the configured maximum depth."""


class InvalidEncodingError(ParseError):
    """Raised when file content is not valid UTF-8."""


class UnclosedElementError(ParseError):
    """Raised when input ends while an element is still open."""

    def __init__(self, tag: str, offset: int = 0, line: int = 1, column: int = 1) -> None:
        super().__init__(f"Element <{tag}> is never closed", offset, line, column)
        self.tag = tag


class MismatchedClosingTagError(ParseError):
    """Raised when a closing tag does not match the innermost open element.

    ``expected`` is None when nothing was open.
    """

    def __init__(
        self,
        expected: Optional[str],
        found: str,
        offset: int = 0,
        line: int = 1,
        column: int = 1
    ) -> None:
        if expected is None:
            message = f"Unexpected closing tag </{found}>"
        else:
            message = f"Expected </{expected}> but found </{found}>"
        super().__init__(message, offset, line, column)
        self.expected = expected
        self.found = found


class PageError(EsvgError):
    """Base exception for page and unit conversion failures."""


class UnknownPaperError(PageError):
    """Raised for a paper name that is neither a preset nor ``WxH``."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown paper size: {name!r}")
        self.name = name


class ConversionError(PageError):
    """Raised when a numeric value cannot be parsed."""


class AngleOutOfRangeError(PageError):
    """Raised when an angle is outside 0 to 360 degrees."""

    def __init__(self, angle: float) -> None:
        super().__init__(f"Angle {angle} is not between 0 and 360 degrees")
        self.angle = angle


class ColourError(PageError):
    """Raised for a hex colour that is too short or not hexadecimal."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid hex colour: {value!r}")
        self.value = value

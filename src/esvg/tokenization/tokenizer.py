"""Markup tokenizer implemented as a character-level state machine.

The tokenizer turns SVG markup text into positioned tokens. It is strict about
tag structure: any syntax violation raises a ``ParseError`` subclass carrying
the offset, line and column where the problem was detected. Character data,
comment content and attribute values are passed through verbatim; entities are
not decoded.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Dict, List, Optional, Tuple, Type

from esvg.shared.errors import (
    MalformedAttributeError,
    MalformedTagError,
    ParseError,
    UnexpectedEofError,
    UnterminatedCommentError,
)
from esvg.shared.logging import get_logger

_WHITESPACE = " \t\r\n"
_NAME_TERMINATORS = _WHITESPACE + "/>"
_ATTR_NAME_TERMINATORS = _WHITESPACE + "=/>"

COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"
CDATA_OPEN = "<![CDATA["
CDATA_CLOSE = "]]>"


class TokenType(Enum):
    """Markup token types."""

    TEXT = auto()                    # Character data between tags
    CDATA = auto()                   # CDATA section, markers included
    COMMENT = auto()                 # <!-- ... -->, content only
    START_TAG = auto()               # <name attr="v"> or <name attr="v"/>
    END_TAG = auto()                 # </name>
    PROCESSING_INSTRUCTION = auto()  # <?xml ... ?> and other <? ... ?>
    DOCTYPE = auto()                 # <!DOCTYPE ...>


class TokenizerState(Enum):
    """State machine states."""

    TEXT_CONTENT = auto()
    TAG_OPEN = auto()
    TAG_NAME = auto()
    ATTRIBUTES = auto()
    CLOSE_TAG = auto()
    COMMENT = auto()
    CDATA = auto()
    PROCESSING_INSTRUCTION = auto()
    DOCTYPE = auto()
    DONE = auto()


@dataclass(frozen=True)
class TokenPosition:
    """Position of a token in the input."""

    line: int
    column: int
    offset: int

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "column": self.column, "offset": self.offset}


@dataclass
class Token:
    """A single markup token.

    ``value`` holds the tag name for tag tokens and the raw content otherwise.
    """

    type: TokenType
    value: str
    position: TokenPosition
    attributes: List[Tuple[str, str]] = field(default_factory=list)
    self_closing: bool = False


class MarkupTokenizer:
    """Strict tokenizer for SVG markup.

    A tokenizer instance can be reused; each ``tokenize`` call starts fresh.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "tokenizer")
        self._handlers: Dict[TokenizerState, Callable[[], TokenizerState]] = {
            TokenizerState.TEXT_CONTENT: self._scan_text,
            TokenizerState.TAG_OPEN: self._scan_tag_open,
            TokenizerState.TAG_NAME: self._scan_tag_name,
            TokenizerState.ATTRIBUTES: self._scan_attributes,
            TokenizerState.CLOSE_TAG: self._scan_close_tag,
            TokenizerState.COMMENT: self._scan_comment,
            TokenizerState.CDATA: self._scan_cdata,
            TokenizerState.PROCESSING_INSTRUCTION: self._scan_processing_instruction,
            TokenizerState.DOCTYPE: self._scan_doctype,
        }
        self._reset_state("")

    def _reset_state(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.tokens: List[Token] = []
        self.state = TokenizerState.TEXT_CONTENT
        self._token_start = 0
        self._pending: Optional[Token] = None
        self._line_starts: List[int] = [0]
        for index, char in enumerate(text):
            if char == "\n":
                self._line_starts.append(index + 1)

    def tokenize(self, text: str) -> List[Token]:
        """Convert markup text into a list of tokens.

        Raises:
            ParseError: On the first syntax violation
        """
        self._reset_state(text)
        while self.state is not TokenizerState.DONE:
            self.state = self._handlers[self.state]()

        self.logger.debug(
            "Tokenization completed",
            extra={"token_count": len(self.tokens), "characters": len(text)}
        )
        return self.tokens

    # Position helpers

    def position(self, offset: int) -> TokenPosition:
        """Translate a character offset into line and column."""
        low, high = 0, len(self._line_starts) - 1
        while low < high:
            middle = (low + high + 1) // 2
            if self._line_starts[middle] <= offset:
                low = middle
            else:
                high = middle - 1
        return TokenPosition(low + 1, offset - self._line_starts[low] + 1, offset)

    def _error(self, error_class: Type[ParseError], message: str, offset: int) -> ParseError:
        where = self.position(offset)
        return error_class(message, where.offset, where.line, where.column)

    def _emit(self, token_type: TokenType, value: str, start: int) -> Token:
        token = Token(token_type, value, self.position(start))
        self.tokens.append(token)
        return token

    def _at_end(self) -> bool:
        return self.pos >= len(self.text)

    def _skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos] in _WHITESPACE:
            self.pos += 1

    def _read_until(self, terminators: str) -> str:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] not in terminators:
            self.pos += 1
        return self.text[start:self.pos]

    # State handlers

    def _scan_text(self) -> TokenizerState:
        start = self.pos
        index = self.text.find("<", start)
        end = len(self.text) if index == -1 else index
        if end > start:
            self._emit(TokenType.TEXT, self.text[start:end], start)
        self.pos = end
        if index == -1:
            return TokenizerState.DONE
        self._token_start = index
        return TokenizerState.TAG_OPEN

    def _scan_tag_open(self) -> TokenizerState:
        if self.text.startswith(COMMENT_OPEN, self.pos):
            return TokenizerState.COMMENT
        if self.text.startswith(CDATA_OPEN, self.pos):
            return TokenizerState.CDATA
        if self.text.startswith("<?", self.pos):
            return TokenizerState.PROCESSING_INSTRUCTION
        if self.text.startswith("<!", self.pos):
            return TokenizerState.DOCTYPE
        if self.text.startswith("</", self.pos):
            self.pos += 2
            return TokenizerState.CLOSE_TAG
        self.pos += 1
        if self._at_end():
            raise self._error(UnexpectedEofError, "Input ends after '<'", self._token_start)
        return TokenizerState.TAG_NAME

    def _scan_tag_name(self) -> TokenizerState:
        name = self._read_until(_NAME_TERMINATORS)
        if self._at_end():
            raise self._error(UnexpectedEofError, "Input ends inside a tag name", self._token_start)
        if not name:
            raise self._error(MalformedTagError, "Tag has no name", self._token_start)
        self._pending = Token(TokenType.START_TAG, name, self.position(self._token_start))
        return TokenizerState.ATTRIBUTES

    def _scan_attributes(self) -> TokenizerState:
        token = self._pending
        if token is None:
            raise self._error(MalformedTagError, "Attribute list without a tag name", self.pos)

        while True:
            had_separator = self._skip_and_report()
            if self._at_end():
                raise self._error(
                    UnexpectedEofError, f"Input ends inside <{token.value}>", self._token_start
                )

            char = self.text[self.pos]
            if char == ">":
                self.pos += 1
                break
            if char == "/":
                if self.text.startswith("/>", self.pos):
                    self.pos += 2
                    token.self_closing = True
                    break
                raise self._error(MalformedAttributeError, "Expected '/>' after '/'", self.pos)
            if not had_separator:
                raise self._error(
                    MalformedAttributeError, "Attributes must be separated by whitespace", self.pos
                )

            name_start = self.pos
            name = self._read_until(_ATTR_NAME_TERMINATORS)
            if not name:
                raise self._error(MalformedAttributeError, "Attribute has no name", name_start)
            self._skip_whitespace()
            if self._at_end():
                raise self._error(
                    UnexpectedEofError, f"Input ends after attribute {name!r}", name_start
                )
            if self.text[self.pos] != "=":
                raise self._error(
                    MalformedAttributeError, f"Attribute {name!r} is not followed by '='", self.pos
                )
            self.pos += 1
            self._skip_whitespace()
            if self._at_end():
                raise self._error(
                    UnexpectedEofError, f"Input ends before value of {name!r}", name_start
                )

            quote = self.text[self.pos]
            if quote not in "\"'":
                raise self._error(
                    MalformedAttributeError, f"Value of {name!r} must be quoted", self.pos
                )
            value_start = self.pos + 1
            value_end = self.text.find(quote, value_start)
            if value_end == -1:
                raise self._error(
                    MalformedAttributeError, f"Unterminated quote in value of {name!r}", self.pos
                )
            value = self.text[value_start:value_end]
            self.pos = value_end + 1

            token.attributes.append((name, value))

        self.tokens.append(token)
        self._pending = None
        return TokenizerState.TEXT_CONTENT

    def _skip_and_report(self) -> bool:
        start = self.pos
        self._skip_whitespace()
        return self.pos > start

    def _scan_close_tag(self) -> TokenizerState:
        name = self._read_until(_NAME_TERMINATORS)
        self._skip_whitespace()
        if self._at_end():
            raise self._error(UnexpectedEofError, "Input ends inside a closing tag", self._token_start)
        if not name or self.text[self.pos] != ">":
            raise self._error(MalformedTagError, "Malformed closing tag", self._token_start)
        self.pos += 1
        self._emit(TokenType.END_TAG, name, self._token_start)
        return TokenizerState.TEXT_CONTENT

    def _scan_delimited(
        self,
        opener: str,
        closer: str,
        error_class: Type[ParseError],
        message: str
    ) -> str:
        content_start = self.pos + len(opener)
        end = self.text.find(closer, content_start)
        if end == -1:
            raise self._error(error_class, message, self._token_start)
        self.pos = end + len(closer)
        return self.text[content_start:end]

    def _scan_comment(self) -> TokenizerState:
        content = self._scan_delimited(
            COMMENT_OPEN, COMMENT_CLOSE, UnterminatedCommentError, "Comment is never closed"
        )
        self._emit(TokenType.COMMENT, content, self._token_start)
        return TokenizerState.TEXT_CONTENT

    def _scan_cdata(self) -> TokenizerState:
        start = self._token_start
        self._scan_delimited(
            CDATA_OPEN, CDATA_CLOSE, UnexpectedEofError, "CDATA section is never closed"
        )
        self._emit(TokenType.CDATA, self.text[start:self.pos], start)
        return TokenizerState.TEXT_CONTENT

    def _scan_processing_instruction(self) -> TokenizerState:
        start = self._token_start
        self._scan_delimited(
            "<?", "?>", UnexpectedEofError, "Processing instruction is never closed"
        )
        self._emit(TokenType.PROCESSING_INSTRUCTION, self.text[start:self.pos], start)
        return TokenizerState.TEXT_CONTENT

    def _scan_doctype(self) -> TokenizerState:
        # Internal subsets ([...]) and quoted literals may contain '>'
        start = self._token_start
        self.pos += 2
        depth = 0
        quote: Optional[str] = None
        while not self._at_end():
            char = self.text[self.pos]
            self.pos += 1
            if quote:
                if char == quote:
                    quote = None
            elif char in "\"'":
                quote = char
            elif char == "[":
                depth += 1
            elif char == "]":
                depth = max(depth - 1, 0)
            elif char == ">" and depth == 0:
                self._emit(TokenType.DOCTYPE, self.text[start:self.pos], start)
                return TokenizerState.TEXT_CONTENT
        raise self._error(UnexpectedEofError, "Declaration is never closed", start)


def tokenize(text: str, correlation_id: Optional[str] = None) -> List[Token]:
    """Tokenize markup text with a fresh ``MarkupTokenizer``."""
    return MarkupTokenizer(correlation_id).tokenize(text)

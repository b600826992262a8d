"""Parsing and file helpers.

Module-level functions for the common cases: parse markup text, read and save
files, and render nodes. The tree core never touches the filesystem; file
access lives here.
"""

from pathlib import Path
from typing import Optional, Union

from esvg.document import Document
from esvg.shared.config import EsvgConfig
from esvg.shared.errors import InvalidEncodingError, ParseError
from esvg.shared.logging import get_logger
from esvg.tree.builder import ParseResult, TreeBuilder
from esvg.tree.node import Element, Node
from esvg.tree.serializer import OutputMode, Serializer

PathLike = Union[str, Path]

# Max length for content preview in logs
PREVIEW_LENGTH = 80


def parse(
    text: str,
    config: Optional[EsvgConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Parse markup text into a tree with diagnostics.

    Args:
        text: SVG markup
        config: Optional configuration, defaults to ``EsvgConfig()``
        correlation_id: Optional correlation ID for log tracking

    Returns:
        ParseResult with the root element, preamble and diagnostics

    Raises:
        ParseError: If the markup is not well formed

    Examples:
        >>> result = parse('<svg><!--hi--></svg>')
        >>> result.root.children[0].content
        'hi'
    """
    config = config or EsvgConfig()
    logger = get_logger(__name__, correlation_id, "parse")
    builder = TreeBuilder(config.parser, correlation_id)
    try:
        return builder.build(text)
    except ParseError as e:
        logger.warning(
            "Parse failed",
            extra={
                "error_type": type(e).__name__,
                "offset": e.offset,
                "preview": text[:PREVIEW_LENGTH],
            }
        )
        raise


def parse_string(text: str, config: Optional[EsvgConfig] = None) -> Element:
    """Parse markup text and return the root element."""
    return parse(text, config).root


def parse_file(
    path: PathLike,
    config: Optional[EsvgConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Read a UTF-8 file and parse it.

    Raises:
        OSError: If the file cannot be read
        InvalidEncodingError: If the file is not valid UTF-8
        ParseError: If the markup is not well formed
    """
    file_path = Path(path)
    logger = get_logger(__name__, correlation_id, "parse_file")
    logger.debug("Reading file", extra={"path": str(file_path)})
    return parse(_decode(file_path.read_bytes()), config, correlation_id)


def _decode(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        # The bytes before the bad sequence are valid, so positions are in characters
        prefix = data[:e.start].decode("utf-8")
        line = prefix.count("\n") + 1
        column = len(prefix) - (prefix.rfind("\n") + 1) + 1
        raise InvalidEncodingError(
            f"Invalid UTF-8 byte 0x{data[e.start]:02x}", len(prefix), line, column
        ) from e


def read(path: PathLike, config: Optional[EsvgConfig] = None) -> Element:
    """Read an SVG file and return its root element."""
    return parse_file(path, config).root


def to_string(node: Node, config: Optional[EsvgConfig] = None) -> str:
    """Compact markup for a node."""
    config = config or EsvgConfig()
    return Serializer(config.serializer).serialize(node, OutputMode.COMPACT)


def to_pretty_string(node: Node, config: Optional[EsvgConfig] = None) -> str:
    """Pretty markup for a node; an ``svg`` element gets the preamble."""
    config = config or EsvgConfig()
    return Serializer(config.serializer).to_pretty_string(node)


def save(
    path: PathLike,
    node: Union[Node, Document],
    pretty: bool = True,
    config: Optional[EsvgConfig] = None
) -> Path:
    """Write a document or node to a file, returning the path written."""
    if isinstance(node, Document):
        return node.save(path, pretty)

    target = Path(path)
    output = to_pretty_string(node, config) if pretty else to_string(node, config)
    target.write_text(output, encoding="utf-8")
    return target

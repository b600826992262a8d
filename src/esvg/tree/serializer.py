"""Markup serialization for SVG trees.

Two modes are supported:

- compact: no whitespace is inserted between tags; text is emitted raw.
- pretty: one node per line, indented one unit per depth level. Layout
  whitespace around text is not reproduced: whitespace-only Text nodes are
  skipped and other text is stripped before it is placed on its own line, so
  pretty output parses back to a tree that pretty-prints identically. The
  cost is that leading and trailing spaces of text are lost in pretty mode,
  so ``<text> a </text>`` pretty-prints its content as ``a``. Use compact
  mode when such spaces matter.

Attributes are emitted sorted by name in both modes. Nothing is escaped: text,
comments and attribute values are written as stored. A value containing a
double quote is wrapped in single quotes instead.
"""

from enum import Enum
from typing import List, Optional, Tuple

from esvg.shared.config import SerializerConfig
from esvg.shared.logging import get_logger
from esvg.tree.node import Comment, Element, Node, Text

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
SVG_DOCTYPE = (
    '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.0//EN" '
    '"http://www.w3.org/TR/2001/REC-SVG-20010904/DTD/svg10.dtd">'
)
PREAMBLE = f"{XML_DECLARATION}\n{SVG_DOCTYPE}\n"


class OutputMode(Enum):
    """Serialization modes."""

    COMPACT = "compact"
    PRETTY = "pretty"


def quote_value(value: str) -> str:
    """Quote an attribute value, switching to single quotes when needed."""
    if '"' in value:
        return f"'{value}'"
    return f'"{value}"'


class Serializer:
    """Renders nodes to markup text.

    Example:
        >>> circle = Element("circle").set_attribute("r", 5)
        >>> Serializer().to_string(circle)
        '<circle r="5" />'
    """

    def __init__(
        self,
        config: Optional[SerializerConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or SerializerConfig()
        self.logger = get_logger(__name__, correlation_id, "serializer")

    def serialize(
        self,
        node: Node,
        mode: OutputMode = OutputMode.COMPACT,
        preamble: bool = False
    ) -> str:
        """Render a node.

        Args:
            node: Root of the subtree to render
            mode: Compact or pretty output
            preamble: Prepend the XML declaration and SVG doctype and end the
                output with a newline

        Returns:
            Markup text
        """
        parts: List[str] = []
        if mode is OutputMode.PRETTY:
            self._write_pretty(node, 0, parts)
        else:
            self._write_compact(node, parts)
        body = "".join(parts)

        if preamble:
            body = PREAMBLE + body
            if not body.endswith("\n"):
                body += "\n"

        self.logger.debug(
            "Serialization completed",
            extra={"mode": mode.value, "output_length": len(body)}
        )
        return body

    def to_string(self, node: Node) -> str:
        """Compact rendering without a preamble."""
        return self.serialize(node, OutputMode.COMPACT)

    def to_pretty_string(self, node: Node) -> str:
        """Pretty rendering; an ``svg`` root element also gets the preamble."""
        with_preamble = isinstance(node, Element) and node.tag == "svg"
        return self.serialize(node, OutputMode.PRETTY, preamble=with_preamble)

    def _attribute_text(self, element: Element) -> str:
        items: List[Tuple[str, str]]
        if self.config.sort_attributes:
            items = element.attributes.sorted_items()
        else:
            items = list(element.attributes.items())
        return "".join(f" {name}={quote_value(value)}" for name, value in items)

    def _write_compact(self, node: Node, parts: List[str]) -> None:
        if isinstance(node, Text):
            parts.append(node.content)
        elif isinstance(node, Comment):
            parts.append(f"<!--{node.content}-->")
        elif isinstance(node, Element):
            parts.append(f"<{node.tag}{self._attribute_text(node)}")
            if not node.children:
                parts.append(" />")
                return
            parts.append(">")
            for child in node.children:
                self._write_compact(child, parts)
            parts.append(f"</{node.tag}>")
        else:
            raise TypeError(f"Cannot serialize {type(node).__name__}")

    def _write_pretty(self, node: Node, depth: int, parts: List[str]) -> None:
        indent = self.config.indent * depth
        if isinstance(node, Text):
            content = node.content.strip()
            if content:
                parts.append(f"{indent}{content}\n")
        elif isinstance(node, Comment):
            parts.append(f"{indent}<!--{node.content}-->\n")
        elif isinstance(node, Element):
            opening = f"{indent}<{node.tag}{self._attribute_text(node)}"
            children = [
                child for child in node.children
                if not (isinstance(child, Text) and child.is_whitespace)
            ]
            if not children:
                parts.append(f"{opening} />\n")
                return
            parts.append(f"{opening}>\n")
            for child in children:
                self._write_pretty(child, depth + 1, parts)
            parts.append(f"{indent}</{node.tag}>\n")
        else:
            raise TypeError(f"Cannot serialize {type(node).__name__}")


def to_string(node: Node) -> str:
    """Compact markup for a node."""
    return Serializer().to_string(node)


def to_pretty_string(node: Node) -> str:
    """Pretty markup for a node."""
    return Serializer().to_pretty_string(node)

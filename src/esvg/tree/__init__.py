"""SVG document tree.

Key Components:
    Element, Text, Comment: Node variants forming the tree
    AttributeStore: Insertion-ordered attribute mapping owned by an Element
    TreeBuilder: Builds a tree from markup text
    Serializer: Renders a tree as compact or pretty markup
"""

from .builder import ParseResult, TreeBuilder
from .node import (
    AttributeStore,
    Comment,
    Element,
    Node,
    NodeType,
    Text,
    format_value,
)
from .serializer import (
    PREAMBLE,
    SVG_DOCTYPE,
    XML_DECLARATION,
    OutputMode,
    Serializer,
)

__all__ = [
    "ParseResult",
    "TreeBuilder",
    "AttributeStore",
    "Comment",
    "Element",
    "Node",
    "NodeType",
    "Text",
    "format_value",
    "PREAMBLE",
    "SVG_DOCTYPE",
    "XML_DECLARATION",
    "OutputMode",
    "Serializer",
]

"""esvg: a document object model for SVG.

Build SVG trees in memory, parse markup into trees and serialize trees back to
deterministic markup.

Progressive API Disclosure:
- Level 1: Simple functions - parse_string(), read(), save()
- Level 2: Documents and nodes - Document, Element, Text, Comment
- Level 3: Configured components - TreeBuilder, Serializer, EsvgConfig
"""

__version__ = "0.1.0"
__author__ = "esvg developers"

from .api import parse, parse_file, parse_string, read, save, to_pretty_string, to_string
from .document import Document
from .page import Borders, Page
from .shared.config import EsvgConfig, ParserConfig, SerializerConfig
from .shared.errors import EsvgError, ParseError, TreeError
from .shared.point import Point
from .tree import (
    AttributeStore,
    Comment,
    Element,
    Node,
    OutputMode,
    ParseResult,
    Serializer,
    Text,
    TreeBuilder,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "parse",
    "parse_file",
    "parse_string",
    "read",
    "save",
    "to_pretty_string",
    "to_string",

    # Level 2: Documents and nodes
    "Document",
    "Element",
    "Text",
    "Comment",
    "Node",
    "AttributeStore",
    "Page",
    "Borders",
    "Point",

    # Level 3: Configured components
    "TreeBuilder",
    "Serializer",
    "OutputMode",
    "ParseResult",
    "EsvgConfig",
    "ParserConfig",
    "SerializerConfig",

    # Errors
    "EsvgError",
    "ParseError",
    "TreeError",
]

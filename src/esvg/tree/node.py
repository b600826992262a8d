"""Node types for the SVG document tree.

A tree is built from three variants: ``Element`` owns an ordered attribute
store and an ordered list of children, while ``Text`` and ``Comment`` hold raw
string content and cannot have children. Ownership is strict: nodes keep no
parent references and a node belongs to exactly one parent.
"""

import math
import re
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum, auto
from typing import Any, Dict, Iterator, List, MutableMapping, Optional, Set, Tuple

from esvg.shared.errors import (
    InvalidAttributeNameError,
    InvalidTagError,
    MalformedStyleError,
    UnsupportedOperationError,
)

# Characters that would break the markup if they appeared in a name
_RESERVED_NAME_CHARS = re.compile(r"[\s<>&\"'=/]")


class NodeType(Enum):
    """Variant tag for tree nodes."""

    ELEMENT = auto()
    TEXT = auto()
    COMMENT = auto()


def format_value(value: Any) -> str:
    """Convert a programmatic attribute value to its markup string.

    Integral floats drop the fractional part, other floats use the shortest
    decimal that round-trips (never exponent notation), booleans are lowercase.

    >>> format_value(100.0), format_value(2.5), format_value(True)
    ('100', '2.5', 'true')
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        text = repr(value)
        if math.isfinite(value) and "e" in text:
            return format(Decimal(text), "f")
        return text
    return str(value)


def validate_name(name: str) -> bool:
    """Check that a tag or attribute name is non-empty and markup-safe."""
    return isinstance(name, str) and bool(name) and not _RESERVED_NAME_CHARS.search(name)


class AttributeStore(MutableMapping[str, str]):
    """Insertion-ordered mapping of attribute names to string values.

    Overwriting an existing name keeps its original position.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._values: Dict[str, str] = {}
        if initial:
            for name, value in initial.items():
                self[name] = value

    def __setitem__(self, name: str, value: Any) -> None:
        if not validate_name(name):
            raise InvalidAttributeNameError(f"Invalid attribute name: {name!r}")
        self._values[name] = format_value(value)

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def __delitem__(self, name: str) -> None:
        del self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"AttributeStore({self._values!r})"

    def sorted_items(self) -> List[Tuple[str, str]]:
        """Attribute pairs ordered by name."""
        return sorted(self._values.items())


class Node:
    """Base class for tree nodes.

    Element-only operations raise ``UnsupportedOperationError`` here and are
    overridden by ``Element``.
    """

    node_type: NodeType

    def _unsupported(self, operation: str) -> UnsupportedOperationError:
        return UnsupportedOperationError(
            f"{operation} is not supported on {type(self).__name__} nodes"
        )

    def set_attribute(self, name: str, value: Any) -> "Node":
        raise self._unsupported("set_attribute")

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        raise self._unsupported("get_attribute")

    def add_child(self, node: "Node") -> None:
        raise self._unsupported("add_child")

    @property
    def is_element(self) -> bool:
        return self.node_type is NodeType.ELEMENT


@dataclass
class Text(Node):
    """Raw character data. Content is never parsed or escaped."""

    content: str
    node_type = NodeType.TEXT

    @property
    def is_whitespace(self) -> bool:
        return not self.content.strip()


@dataclass
class Comment(Node):
    """Comment content, without the ``<!--`` and ``-->`` delimiters."""

    content: str
    node_type = NodeType.COMMENT


@dataclass(eq=False)
class Element(Node):
    """A tagged markup node with attributes and ordered children.

    Equality is structural: tag, attributes compared as an unordered set of
    pairs, and children compared recursively in order.
    """

    tag: str
    attributes: AttributeStore = field(default_factory=AttributeStore)
    children: List[Node] = field(default_factory=list)
    # ids of nodes added through the child methods; a hit is confirmed by identity
    _child_ids: Set[int] = field(default_factory=set, init=False, repr=False)
    node_type = NodeType.ELEMENT

    def __post_init__(self) -> None:
        """Validate the tag and normalize initial attributes and children."""
        if not validate_name(self.tag):
            raise InvalidTagError(f"Invalid element tag: {self.tag!r}")
        if not isinstance(self.attributes, AttributeStore):
            self.attributes = AttributeStore(dict(self.attributes))
        initial_children = list(self.children)
        self.children = []
        for child in initial_children:
            self.add_child(child)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return (
            self.tag == other.tag
            and dict(self.attributes) == dict(other.attributes)
            and self.children == other.children
        )

    __hash__ = None  # type: ignore[assignment]

    @classmethod
    def group(cls) -> "Element":
        """Create an empty ``g`` element."""
        return cls("g")

    def set_attribute(self, name: str, value: Any) -> "Element":
        """Set an attribute, overwriting any previous value.

        Returns the element so calls can be chained.
        """
        self.attributes[name] = value
        return self

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.attributes.get(name, default)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def remove_attribute(self, name: str) -> bool:
        """Remove an attribute; returns False when it was not set."""
        if name in self.attributes:
            del self.attributes[name]
            return True
        return False

    def attribute_items(self) -> Tuple[Tuple[str, str], ...]:
        """Attribute pairs in insertion order."""
        return tuple(self.attributes.items())

    def _check_child(self, node: Node) -> None:
        if not isinstance(node, Node):
            raise TypeError("Child must be a Node instance")
        if node is self:
            raise UnsupportedOperationError("An element cannot contain itself")
        if id(node) in self._child_ids and any(child is node for child in self.children):
            raise UnsupportedOperationError("Node is already a child of this element")

    def add_child(self, node: Node) -> None:
        """Append a node to the end of the children."""
        self._check_child(node)
        self.children.append(node)
        self._child_ids.add(id(node))

    def insert_child(self, index: int, node: Node) -> None:
        """Insert a node at a specific position."""
        self._check_child(node)
        if not (0 <= index <= len(self.children)):
            raise IndexError("Child index out of range")
        self.children.insert(index, node)
        self._child_ids.add(id(node))

    def remove_child(self, node: Node) -> bool:
        """Remove a child by identity; returns False when it is not a child."""
        for index, child in enumerate(self.children):
            if child is node:
                del self.children[index]
                self._child_ids.discard(id(node))
                return True
        return False

    def add_style(self, key: str, value: Any) -> "Element":
        """Append a ``key:value`` declaration to the ``style`` attribute."""
        declaration = f"{key}:{format_value(value)}"
        existing = self.attributes.get("style")
        self.attributes["style"] = f"{existing};{declaration}" if existing else declaration
        return self

    def style_map(self) -> Dict[str, str]:
        """Parse the ``style`` attribute into a dictionary.

        Empty declarations (such as a trailing ``;``) are skipped rather than
        rejected, so strings built by the style helpers, which all end in
        ``;``, parse back.

        Raises:
            MalformedStyleError: If a declaration has no ``:``
        """
        result: Dict[str, str] = {}
        for entry in self.attributes.get("style", "").split(";"):
            if not entry.strip():
                continue
            key, sep, value = entry.partition(":")
            if not sep:
                raise MalformedStyleError(f"Style declaration without ':': {entry!r}")
            result[key] = value
        return result

    def shallow_copy(self) -> "Element":
        """Copy of this element with its attributes but no children."""
        return Element(self.tag, AttributeStore(dict(self.attributes)))

    def iter(self) -> Iterator["Element"]:
        """Walk this element and all descendant elements in document order."""
        yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter()

    def find(self, tag: str) -> Optional["Element"]:
        """First descendant element with a matching tag."""
        return next((e for e in self.iter() if e is not self and e.tag == tag), None)

    def find_all(self, tag: str) -> List["Element"]:
        """All descendant elements with a matching tag."""
        return [e for e in self.iter() if e is not self and e.tag == tag]

    def to_string(self) -> str:
        """Compact markup for this element."""
        from esvg.tree.serializer import Serializer

        return Serializer().to_string(self)

    def to_pretty_string(self) -> str:
        """Indented markup; an ``svg`` element also gets the XML preamble."""
        from esvg.tree.serializer import Serializer

        return Serializer().to_pretty_string(self)

    def __str__(self) -> str:
        return self.to_string()

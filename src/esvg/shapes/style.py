"""Style strings and text elements."""

from dataclasses import dataclass
from typing import Union

from esvg.shared.point import Point
from esvg.tree.node import Element, Text, format_value


def style_stroke_colour(stroke: str) -> str:
    return f"stroke:{stroke};"


def style_fill(fill: str) -> str:
    return f"fill:{fill};"


def style_stroke(stroke: str, width: float, opacity: float) -> str:
    """Stroke colour, width and opacity declarations.

    >>> style_stroke("black", 1.0, 1.0)
    'stroke:black;stroke-width:1;stroke-opacity:1;'
    """
    return (
        f"stroke:{stroke};stroke-width:{format_value(width)};"
        f"stroke-opacity:{format_value(opacity)};"
    )


@dataclass
class TextStyle:
    """Font and stroke settings rendered as a ``style`` attribute value."""

    font_family: str
    font_size: int
    font_weight: str = "normal"
    stroke_width: float = 0.0
    fill: str = "black"
    stroke: str = "none"
    stroke_opacity: float = 1.0

    def __str__(self) -> str:
        return (
            f"font-family:{self.font_family};"
            f"font-size:{format_value(self.font_size)};"
            f"font-weight:{self.font_weight};"
            f"stroke-width:{format_value(self.stroke_width)};"
            f"fill:{self.fill};"
            f"stroke:{self.stroke};"
            f"stroke-opacity:{format_value(self.stroke_opacity)};"
        )


def create_text(text: str, location: Point, style: Union[str, TextStyle]) -> Element:
    """Create a ``text`` element holding ``text`` at ``location``."""
    element = Element("text")
    element.add_child(Text(text))
    element.set_attribute("x", location.x)
    element.set_attribute("y", location.y)
    element.set_attribute("style", str(style))
    return element

"""Shape construction helpers built on the public node API."""

from .basic import circle, many_circles
from .path import PathData, create, create_closed, create_polygon
from .style import (
    TextStyle,
    create_text,
    style_fill,
    style_stroke,
    style_stroke_colour,
)

__all__ = [
    "circle",
    "many_circles",
    "PathData",
    "create",
    "create_closed",
    "create_polygon",
    "TextStyle",
    "create_text",
    "style_fill",
    "style_stroke",
    "style_stroke_colour",
]

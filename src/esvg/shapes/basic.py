"""Helpers for building common shape elements."""

from typing import Iterable

from esvg.shared.point import Number, Point
from esvg.tree.node import Element


def circle(center: Point, radius: Number) -> Element:
    """Create an unfilled ``circle`` element."""
    element = Element("circle")
    element.set_attribute("cx", center.x)
    element.set_attribute("cy", center.y)
    element.set_attribute("r", radius)
    element.set_attribute("fill", "none")
    return element


def many_circles(points: Iterable[Point], radius: Number) -> Element:
    """Create a circle at every point, wrapped in a ``g`` element."""
    group = Element.group()
    for point in points:
        group.add_child(circle(point, radius))
    return group

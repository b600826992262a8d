"""Coordinate value type shared by the page and shape helpers."""

from typing import NamedTuple, Union

Number = Union[int, float]


class Point(NamedTuple):
    """A position in device units (pixels)."""

    x: Number
    y: Number

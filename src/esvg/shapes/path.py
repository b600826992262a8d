"""Builder for the ``d`` attribute of ``path`` elements.

Only string building is done here; no geometry is computed.
"""

from typing import List, Sequence

from esvg.shared.point import Number, Point
from esvg.tree.node import Element


class PathData:
    """Accumulates path commands.

    Coordinates are written with three decimals.

    Example:
        >>> PathData().move_to(Point(0, 0)).line_to(Point(10, 5)).close().build()
        'M0.000 0.000 L10.000 5.000 z'
    """

    def __init__(self) -> None:
        self.segments: List[str] = []

    @classmethod
    def from_points(cls, points: Sequence[Point]) -> "PathData":
        """Move to the first point and draw lines through the rest.

        Fewer than two points produce empty data.
        """
        data = cls()
        if len(points) > 1:
            data.move_to(points[0])
            for point in points[1:]:
                data.line_to(point)
        return data

    def move_to(self, point: Point) -> "PathData":
        self.segments.append(f"M{point.x:.3f} {point.y:.3f}")
        return self

    def line_to(self, point: Point) -> "PathData":
        self.segments.append(f"L{point.x:.3f} {point.y:.3f}")
        return self

    def arc_to(
        self,
        point: Point,
        rx: Number,
        ry: Number,
        rotation: float,
        large: bool,
        sweep: bool
    ) -> "PathData":
        """Add an elliptical arc ending at ``point``."""
        self.segments.append(
            f"A{rx} {ry} {rotation:.3f} {int(large)} {int(sweep)} "
            f"{point.x:.3f} {point.y:.3f}"
        )
        return self

    def close(self) -> "PathData":
        self.segments.append("z")
        return self

    def build(self) -> str:
        return " ".join(self.segments)

    def to_path(self) -> Element:
        """An unfilled ``path`` element using this data."""
        element = Element("path")
        element.set_attribute("fill", "none")
        element.set_attribute("d", self.build())
        return element


def create(points: Sequence[Point]) -> Element:
    """Open path through the points."""
    return PathData.from_points(points).to_path()


def create_closed(points: Sequence[Point]) -> Element:
    """Closed path through the points."""
    return PathData.from_points(points).close().to_path()


def create_polygon(vertices: Sequence[Point]) -> Element:
    """Closed path around a polygon's vertices."""
    return create_closed(vertices)

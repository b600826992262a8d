"""Page sizes, borders and reference points.

Pages are measured in pixels at a given dpi. Borders only record the margin a
drawing should keep clear of; nothing prevents drawing over them.
"""

from dataclasses import dataclass
from typing import Dict, NamedTuple, Optional, Tuple

from esvg.page import convert
from esvg.shared.errors import UnknownPaperError
from esvg.shared.point import Point

DEFAULT_DPI = 96
DEFAULT_MARGIN_INCHES = 0.5

# Preset sizes in inches, portrait orientation
PAPER_SIZES: Dict[str, Tuple[float, float]] = {
    "a5": (5.8, 8.27),
    "a4": (8.27, 11.7),
    "a3": (11.7, 16.5),
    "letter": (8.5, 11.0),
}


class PageDimensions(NamedTuple):
    """Page size in pixels and millimeters."""

    width_px: int
    height_px: int
    width_mm: float
    height_mm: float


@dataclass(frozen=True)
class Borders:
    """Margins around the page edge, in pixels."""

    top: int
    bottom: int
    left: int
    right: int

    @classmethod
    def default(cls, dpi: int) -> "Borders":
        """Half an inch on every side."""
        return cls.even(DEFAULT_MARGIN_INCHES, dpi)

    @classmethod
    def even(cls, size: float, dpi: int) -> "Borders":
        """The same margin, in inches, on all four sides."""
        px = convert.inches_to_pixels(size, dpi)
        return cls(top=px, bottom=px, left=px, right=px)

    def rotate(self) -> "Borders":
        return Borders(top=self.left, bottom=self.right, left=self.bottom, right=self.top)


@dataclass(frozen=True)
class Page:
    """Size of an SVG drawing.

    Attributes:
        dpi: Pixels per inch used for conversions
        width: Width in pixels
        height: Height in pixels
        borders: Margins to keep clear of
    """

    dpi: int
    width: int
    height: int
    borders: Borders

    def __post_init__(self) -> None:
        """Validate page values."""
        if self.dpi <= 0:
            raise ValueError("dpi must be > 0")
        if self.width < 0 or self.height < 0:
            raise ValueError("Page dimensions must be >= 0")

    @classmethod
    def preset(cls, name: str, dpi: int = DEFAULT_DPI, borders: Optional[Borders] = None) -> "Page":
        """Create a preset paper size (``A5``, ``A4``, ``A3`` or ``letter``).

        Raises:
            UnknownPaperError: If the name is not a preset
        """
        try:
            width_in, height_in = PAPER_SIZES[name.lower()]
        except KeyError as e:
            raise UnknownPaperError(name) from e
        return cls(
            dpi=dpi,
            width=convert.inches_to_pixels(width_in, dpi),
            height=convert.inches_to_pixels(height_in, dpi),
            borders=borders if borders is not None else Borders.default(dpi),
        )

    @classmethod
    def a5(cls, dpi: int = DEFAULT_DPI) -> "Page":
        return cls.preset("a5", dpi)

    @classmethod
    def a4(cls, dpi: int = DEFAULT_DPI) -> "Page":
        return cls.preset("a4", dpi)

    @classmethod
    def a3(cls, dpi: int = DEFAULT_DPI) -> "Page":
        return cls.preset("a3", dpi)

    @classmethod
    def letter(cls, dpi: int = DEFAULT_DPI) -> "Page":
        return cls.preset("letter", dpi)

    @classmethod
    def build(
        cls,
        name: str,
        dpi: int = DEFAULT_DPI,
        margin: float = DEFAULT_MARGIN_INCHES
    ) -> "Page":
        """Create a page from a preset name or an explicit ``<width>x<height>``.

        Explicit sizes accept any length understood by ``parse_length``, for
        example ``200mmx300mm`` or ``8 1/2x11``. The margin is in inches.

        Raises:
            UnknownPaperError: If the name cannot be interpreted
            ConversionError: If an explicit length cannot be parsed
        """
        borders = Borders.even(margin, dpi)
        if "x" in name:
            parts = name.split("x")
            if len(parts) != 2:
                raise UnknownPaperError(name)
            return cls(
                dpi=dpi,
                width=convert.parse_length(parts[0], dpi),
                height=convert.parse_length(parts[1], dpi),
                borders=borders,
            )
        return cls.preset(name, dpi, borders)

    def rotate(self) -> "Page":
        """Swap portrait and landscape."""
        return Page(
            dpi=self.dpi,
            width=self.height,
            height=self.width,
            borders=self.borders.rotate(),
        )

    @property
    def is_portrait(self) -> bool:
        """True when taller than wide; a square page is neither."""
        return self.height > self.width

    @property
    def is_landscape(self) -> bool:
        return self.width > self.height

    @property
    def width_mm(self) -> float:
        return convert.pixels_to_mm(self.width, self.dpi)

    @property
    def height_mm(self) -> float:
        return convert.pixels_to_mm(self.height, self.dpi)

    def dimensions(self) -> PageDimensions:
        return PageDimensions(self.width, self.height, self.width_mm, self.height_mm)

    @property
    def display_width_px(self) -> int:
        """Width inside the borders."""
        return self.width - self.borders.right - self.borders.left

    @property
    def display_height_px(self) -> int:
        """Height inside the borders."""
        return self.height - self.borders.top - self.borders.bottom

    def _middle_x(self) -> int:
        return self.borders.left + self.display_width_px // 2

    def _middle_y(self) -> int:
        return self.borders.top + self.display_height_px // 2

    def top_left(self) -> Point:
        return Point(self.borders.left, self.borders.top)

    def top_right(self) -> Point:
        return Point(self.width - self.borders.right, self.borders.top)

    def bottom_left(self) -> Point:
        return Point(self.borders.left, self.height - self.borders.bottom)

    def bottom_right(self) -> Point:
        return Point(self.width - self.borders.right, self.height - self.borders.bottom)

    def center(self) -> Point:
        return Point(self._middle_x(), self._middle_y())

    def center_left(self) -> Point:
        return Point(self.borders.left, self._middle_y())

    def center_right(self) -> Point:
        return Point(self.width - self.borders.right, self._middle_y())

    def center_top(self) -> Point:
        return Point(self._middle_x(), self.borders.top)

    def center_bottom(self) -> Point:
        return Point(self._middle_x(), self.height - self.borders.bottom)

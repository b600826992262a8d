"""Page sizes and unit conversion.

Supplies the physical page information a ``Document`` needs: pixel size at a
given dpi, the matching millimeter size and the drawing borders.
"""

from . import convert
from .paper import (
    DEFAULT_DPI,
    PAPER_SIZES,
    Borders,
    Page,
    PageDimensions,
)

__all__ = [
    "convert",
    "DEFAULT_DPI",
    "PAPER_SIZES",
    "Borders",
    "Page",
    "PageDimensions",
]

"""Unit conversions between physical lengths and device pixels.

Pixel values are integers; physical values are floats. Rounding from inches to
pixels is half away from zero.
"""

import math
from typing import Tuple

from esvg.shared.errors import AngleOutOfRangeError, ColourError, ConversionError

MM_PER_INCH = 25.4

DEG_30 = math.radians(30.0)
DEG_45 = math.radians(45.0)
DEG_60 = math.radians(60.0)
DEG_90 = math.radians(90.0)
DEG_120 = math.radians(120.0)
DEG_180 = math.radians(180.0)
DEG_270 = math.radians(270.0)
DEG_360 = math.radians(360.0)


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _to_float(text: str) -> float:
    try:
        return float(text.strip())
    except ValueError as e:
        raise ConversionError(f"Not a number: {text!r}") from e


def inches_to_pixels(value: float, dpi: int) -> int:
    return _round_half_away(value * dpi)


def cm_to_pixels(value: float, dpi: int) -> int:
    return inches_to_pixels(cm_to_inches(value), dpi)


def mm_to_pixels(value: float, dpi: int) -> int:
    return inches_to_pixels(mm_to_inches(value), dpi)


def cm_to_inches(value: float) -> float:
    return (value * 10.0) / MM_PER_INCH


def mm_to_inches(value: float) -> float:
    return value / MM_PER_INCH


def inches_to_mm(value: float) -> float:
    return value * MM_PER_INCH


def inches_to_cm(value: float) -> float:
    return (value * MM_PER_INCH) / 10.0


def pixels_to_mm(value: int, dpi: int) -> float:
    """Convert pixels to millimeters given the dpi.

    >>> pixels_to_mm(794, 96)
    210.07916666666668
    """
    return inches_to_mm(value / dpi)


def pixels_to_cm(value: int, dpi: int) -> float:
    return inches_to_cm(value / dpi)


def pixels_to_inches(value: int, dpi: int) -> float:
    return value / dpi


def extract_unit(value: str) -> str:
    """Return the two-letter unit suffix of a length, or ``""`` when there is none."""
    if len(value) > 2 and not any(char.isdigit() for char in value[-2:]):
        return value[-2:]
    return ""


def parse_length(value: str, dpi: int) -> int:
    """Parse a length with an optional unit suffix into pixels.

    Supported suffixes are ``mm``, ``cm``, ``in`` and ``px``. A length without
    a suffix is taken to be in inches, and inches may be written as fractions.

    >>> parse_length("27in", 96), parse_length("2.5mm", 96), parse_length("2 4/16in", 96)
    (2592, 9, 216)

    Raises:
        ConversionError: If the numeric part cannot be parsed
    """
    unit = extract_unit(value)
    if unit == "mm":
        return mm_to_pixels(_to_float(value[:-2]), dpi)
    if unit == "cm":
        return cm_to_pixels(_to_float(value[:-2]), dpi)
    if unit == "px":
        try:
            return int(value[:-2])
        except ValueError as e:
            raise ConversionError(f"Pixel length must be an integer: {value!r}") from e
    return _parse_inches(value, dpi)


def _parse_inches(value: str, dpi: int) -> int:
    # Accepts "1.5", "5/8", "7 1/4" with an optional "in" suffix
    numeric = value[:-2] if value.endswith("in") else value

    if " " in numeric or "/" in numeric:
        whole, _, remainder = numeric.strip().rpartition(" ")
        inches = _to_float(whole) if whole.strip() else 0.0
        top, slash, bottom = remainder.partition("/")
        if slash:
            denominator = _to_float(bottom)
            if denominator == 0:
                raise ConversionError(f"Zero denominator in {value!r}")
            inches += _to_float(top) / denominator
        else:
            inches += _to_float(top)
    else:
        inches = _to_float(numeric)

    return inches_to_pixels(inches, dpi)


def px_to_length(value: int, unit: str, dpi: int) -> str:
    """Format a pixel length in ``mm``, ``cm``, ``in`` or ``px``.

    Unknown units fall back to inches.
    """
    if unit == "mm":
        return f"{pixels_to_mm(value, dpi):.2f}mm"
    if unit == "cm":
        return f"{pixels_to_cm(value, dpi):.2f}cm"
    if unit == "px":
        return f"{value}px"
    return f"{pixels_to_inches(value, dpi):.2f}in"


def parse_angle(value: str) -> float:
    """Parse an angle in degrees (0 to 360) into radians."""
    angle = _to_float(value)
    if not (0.0 <= angle <= 360.0):
        raise AngleOutOfRangeError(angle)
    return math.radians(angle)


def parse_colour(value: str) -> Tuple[float, float, float, float]:
    """Parse ``#RRGGBB`` or ``#RRGGBBAA`` into channels between 0 and 1.

    The ``#`` is optional and alpha defaults to 1.0. Three character codes are
    not supported.

    >>> parse_colour("#FF00AA33")
    (1.0, 0.0, 0.6666666666666666, 0.2)
    """
    if len(value) < 6:
        raise ColourError(value)
    digits = value[1:] if value.startswith("#") else value
    if len(digits) < 6:
        raise ColourError(value)

    try:
        red = int(digits[0:2], 16)
        green = int(digits[2:4], 16)
        blue = int(digits[4:6], 16)
        alpha = int(digits[6:], 16) if len(digits) > 6 else 255
    except ValueError as e:
        raise ColourError(value) from e

    return (red / 255.0, green / 255.0, blue / 255.0, alpha / 255.0)

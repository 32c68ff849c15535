"""
Color primitives - HSL conversion, hue categories, luminance ordering.

Colors are grouped into eight hue buckets plus a neutral bucket for
low-saturation colors. Within a bucket, colors are ordered from lightest
to darkest so that scale position 100 is always the lightest.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass

from chuk_mcp_tokens.constants import NEUTRAL, NEUTRAL_SATURATION

_NON_HEX_PUNCTUATION = re.compile(r"[#;\s]")
_HEX_DIGITS = re.compile(r"^[0-9a-fA-F]{6}")

logger = logging.getLogger(__name__)

# (exclusive upper bound, category); red wraps around 0/360
_HUE_BUCKETS: tuple[tuple[int, str], ...] = (
    (15, "red"),
    (45, "orange"),
    (75, "yellow"),
    (165, "green"),
    (195, "cyan"),
    (255, "blue"),
    (285, "purple"),
    (345, "pink"),
    (360, "red"),
)


def _round(value: float) -> int:
    """Round half up, so 0.5 always goes to 1."""
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class HSL:
    """
    A color in HSL space.

    hue is 0-359 degrees, saturation and lightness are 0-100 percent,
    all rounded to whole numbers.
    """

    hue: int
    saturation: int
    lightness: int


@dataclass(frozen=True)
class ColorEntry:
    """A hex color with its HSL lightness (0-100)."""

    hex: str
    luminance: int


ColorGroups = dict[str, list[ColorEntry]]


def hex_to_hsl(hex_color: str) -> HSL:
    """
    Convert a hex color string to HSL.

    Accepts '#rgb', '#rrggbb' and '#rrggbbaa' (with or without '#').
    Only the first six digits are read, so any alpha channel is ignored.

    Args:
        hex_color: Hex color string

    Returns:
        HSL with rounded components

    Raises:
        ValueError: If the first six digits are not hexadecimal
    """
    digits = _NON_HEX_PUNCTUATION.sub("", hex_color)
    if 3 <= len(digits) < 6:
        digits = "".join(ch * 2 for ch in digits)
    if not _HEX_DIGITS.match(digits):
        raise ValueError(f"Invalid hex color: {hex_color!r}")

    red = int(digits[0:2], 16) / 255
    green = int(digits[2:4], 16) / 255
    blue = int(digits[4:6], 16) / 255

    maximum = max(red, green, blue)
    minimum = min(red, green, blue)
    lightness = (maximum + minimum) / 2

    if maximum == minimum:
        hue = saturation = 0.0
    else:
        delta = maximum - minimum
        if lightness > 0.5:
            saturation = delta / (2 - maximum - minimum)
        else:
            saturation = delta / (maximum + minimum)

        if maximum == red:
            hue = ((green - blue) / delta + (6 if green < blue else 0)) / 6
        elif maximum == green:
            hue = ((blue - red) / delta + 2) / 6
        else:
            hue = ((red - green) / delta + 4) / 6

    return HSL(
        hue=_round(hue * 360) % 360,
        saturation=_round(saturation * 100),
        lightness=_round(lightness * 100),
    )


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    """
    Convert HSL components to a lowercase '#rrggbb' string.

    Args:
        hue: Hue in degrees (0-360)
        saturation: Saturation percent (0-100)
        lightness: Lightness percent (0-100)
    """
    s = saturation / 100
    light = lightness / 100

    chroma = (1 - abs(2 * light - 1)) * s
    x = chroma * (1 - abs((hue / 60) % 2 - 1))
    m = light - chroma / 2

    if hue < 60:
        r, g, b = chroma, x, 0.0
    elif hue < 120:
        r, g, b = x, chroma, 0.0
    elif hue < 180:
        r, g, b = 0.0, chroma, x
    elif hue < 240:
        r, g, b = 0.0, x, chroma
    elif hue < 300:
        r, g, b = x, 0.0, chroma
    else:
        r, g, b = chroma, 0.0, x

    return "#" + "".join(f"{_round((c + m) * 255):02x}" for c in (r, g, b))


def hue_category(hue: float) -> str:
    """Bucket a hue angle into one of the eight named categories."""
    hue = hue % 360
    for upper, category in _HUE_BUCKETS:
        if hue < upper:
            return category
    return "red"


def categorize(hex_color: str) -> str:
    """
    Categorize a hex color.

    Returns 'neutral' when saturation is below 10%, otherwise the hue bucket.
    """
    return _category(hex_to_hsl(hex_color))


def _category(hsl: HSL) -> str:
    if hsl.saturation < NEUTRAL_SATURATION:
        return NEUTRAL
    return hue_category(hsl.hue)


def is_hex_color(color: str) -> bool:
    """Check the length filter used before grouping (no digit validation)."""
    return isinstance(color, str) and color.startswith("#") and len(color) >= 7


def group_colors(colors: list[str]) -> ColorGroups:
    """
    Group hex colors by hue category, lightest first.

    Categories appear in order of first occurrence. Sorting is stable, so
    colors with equal lightness keep their input order.

    Args:
        colors: Color strings; anything not shaped like '#rrggbb[aa]' is
            skipped, as is anything with non-hex digits (with a warning)

    Returns:
        Mapping of category to luminance-descending entries
    """
    groups: ColorGroups = {}
    for color in colors:
        if not is_hex_color(color):
            continue
        try:
            hsl = hex_to_hsl(color)
        except ValueError:
            logger.warning(f"Skipping malformed color: {color!r}")
            continue
        entry = ColorEntry(hex=color, luminance=hsl.lightness)
        groups.setdefault(_category(hsl), []).append(entry)

    for entries in groups.values():
        entries.sort(key=lambda e: e.luminance, reverse=True)

    return groups


def relative_luminance(hex_color: str) -> float:
    """WCAG relative luminance (0-1)."""
    digits = hex_color.replace("#", "")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)

    def linear(channel: float) -> float:
        return channel / 12.92 if channel <= 0.03928 else ((channel + 0.055) / 1.055) ** 2.4

    r, g, b = (int(digits[i : i + 2], 16) / 255 for i in (0, 2, 4))
    return 0.2126 * linear(r) + 0.7152 * linear(g) + 0.0722 * linear(b)


def contrast_ratio(first: str, second: str) -> float:
    """WCAG contrast ratio between two hex colors (1-21)."""
    a = relative_luminance(first)
    b = relative_luminance(second)
    lighter, darker = max(a, b), min(a, b)
    return (lighter + 0.05) / (darker + 0.05)

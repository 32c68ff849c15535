"""
Scale generators - quantize raw scanned values into named or numeric scales.

All generators are pure: the same input list always yields the same scale,
in the same key order.

Scales:
- spacing_scale: px values snapped to multiples of a base unit
- type_scale: px/rem font sizes paired with size names by rank
- named_scale: values paired with names by position
- color_scale: luminance-ordered colors spread over 100-950
- font_families / font_weights: fixed naming conventions
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Sequence
from typing import TypeVar

from chuk_mcp_tokens.constants import FONT_WEIGHT_NAMES, REM_PX
from chuk_mcp_tokens.core.color import ColorEntry

T = TypeVar("T")

_LEADING_FLOAT = re.compile(r"^\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_LEADING_INT = re.compile(r"^\s*[-+]?\d+")

FAMILY_SLOTS = 5


def parse_number(value: str) -> float | None:
    """Read the leading number of a CSS value ('16px' -> 16.0); None if absent."""
    match = _LEADING_FLOAT.match(value)
    return float(match.group()) if match else None


def format_number(value: float) -> str:
    """Format a number without a trailing '.0' (16.0 -> '16', 0.5 -> '0.5')."""
    if value == int(value):
        return str(int(value))
    return repr(value)


def to_px_string(value: float) -> str:
    """Format a pixel magnitude as a CSS px value."""
    return f"{format_number(value)}px"


def is_px(value: str) -> bool:
    return value.endswith("px")


def is_rem(value: str) -> bool:
    return value.endswith("rem")


def is_size(value: str) -> bool:
    """Check for a px or rem value."""
    return is_px(value) or is_rem(value)


def to_pixels(value: str) -> float | None:
    """Convert a px or rem value to pixels."""
    number = parse_number(value)
    if number is None:
        return None
    return number * REM_PX if is_rem(value) else number


def _unique_sorted(values: Iterable[float]) -> list[float]:
    return sorted(set(values))


def _in_range(value: float | None, low: float, high: float) -> bool:
    return value is not None and low <= value <= high


def spacing_scale(values: Iterable[str], base: float = 4) -> dict[int, str]:
    """
    Build a spacing scale keyed by multiples of a base unit.

    Only px values between 1 and 200 are kept. Each value is assigned to
    step round(value / base); steps outside 1-50 are dropped. When two values
    round to the same step the larger one wins.

    Args:
        values: Raw CSS values
        base: Base spacing unit in px

    Returns:
        Mapping of step number to px string, ascending
    """
    magnitudes = [parse_number(v) for v in values if is_px(v)]
    kept = _unique_sorted(m for m in magnitudes if _in_range(m, 1, 200))

    scale: dict[int, str] = {}
    for magnitude in kept:
        step = math.floor(magnitude / base + 0.5)
        if 1 <= step <= 50:
            scale[step] = to_px_string(magnitude)
    return scale


def type_scale(sizes: Iterable[str], names: Sequence[str]) -> dict[str, str]:
    """
    Build a font-size scale by pairing sorted sizes with names.

    px and rem sizes are converted to px and kept between 10 and 96. The
    smallest size gets the first name; sizes beyond the name list are dropped.
    """
    pixels = [to_pixels(s) for s in sizes if is_size(s)]
    kept = _unique_sorted(p for p in pixels if _in_range(p, 10, 96))
    return {name: to_px_string(size) for name, size in zip(names, kept)}


def named_scale(values: Sequence[T], names: Sequence[str]) -> dict[str, T]:
    """Pair names with values by position, skipping missing values."""
    return {name: value for name, value in zip(names, values) if value is not None}


def color_scale(entries: Sequence[ColorEntry]) -> dict[int, str]:
    """
    Spread luminance-ordered colors across the 100-950 scale.

    Index 0 (the lightest) gets 100; later colors step by
    floor(900 / (n - 1)), capped at 950. A clamped key overwrites
    whatever already sits at 950.
    """
    step = 900 // max(len(entries) - 1, 1)
    scale: dict[int, str] = {}
    for index, entry in enumerate(entries):
        scale[min(100 + index * step, 950)] = entry.hex
    return scale


def family_name(index: int) -> str:
    """Name for the index-th font family."""
    if index == 0:
        return "primary"
    if index == 1:
        return "secondary"
    return f"family{index + 1}"


def font_families(families: Sequence[str]) -> dict[str, str]:
    """Name up to five font families: primary, secondary, family3..."""
    return {family_name(i): family for i, family in enumerate(families[:FAMILY_SLOTS])}


def font_weights(weights: Iterable[str]) -> dict[str, str]:
    """
    Name numeric font weights via the 100-900 weight table.

    Keywords ('bold') and numbers outside the table are dropped.
    """
    scale: dict[str, str] = {}
    for weight in weights:
        match = _LEADING_INT.match(weight)
        if not match:
            continue
        name = FONT_WEIGHT_NAMES.get(int(match.group()))
        if name:
            scale[name] = weight
    return scale

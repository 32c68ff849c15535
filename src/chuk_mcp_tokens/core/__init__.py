"""
Core token primitives - the algorithmic layer.

These are the pure functions everything else composes on:
- Color classification: hex -> HSL, hue categories, luminance grouping
- Scale generation: spacing, type, named, color, font scales
- References: the '{a.b.c}' path syntax
"""

from chuk_mcp_tokens.core.color import (
    HSL,
    ColorEntry,
    ColorGroups,
    categorize,
    contrast_ratio,
    group_colors,
    hex_to_hsl,
    hsl_to_hex,
    hue_category,
    relative_luminance,
)
from chuk_mcp_tokens.core.reference import Reference, is_reference, parse_reference, ref
from chuk_mcp_tokens.core.scale import (
    color_scale,
    font_families,
    font_weights,
    named_scale,
    spacing_scale,
    type_scale,
)

__all__ = [
    # Color
    "HSL",
    "ColorEntry",
    "ColorGroups",
    "categorize",
    "contrast_ratio",
    "group_colors",
    "hex_to_hsl",
    "hsl_to_hex",
    "hue_category",
    "relative_luminance",
    # Scale
    "color_scale",
    "font_families",
    "font_weights",
    "named_scale",
    "spacing_scale",
    "type_scale",
    # Reference
    "Reference",
    "is_reference",
    "parse_reference",
    "ref",
]

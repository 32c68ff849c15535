"""
Primitive builder - scanned values to the literal base tier.

The primitive tier holds no references. Its shape:

    color.<category>.<100-950>
    spacing.<step>
    typography.{fontFamily,fontSize,fontWeight,lineHeight,letterSpacing}
    border.{radius,width}
    shadow.<name>
    zIndex.<name>

Scale names (xs..5xl, none..full, ...) are fixed conventions of this
builder; only the values come from the scan.
"""

from __future__ import annotations

import logging
import re

from chuk_mcp_tokens.constants import (
    BORDER_WIDTH_NAMES,
    LETTER_SPACING_NAMES,
    LINE_HEIGHT_NAMES,
    RADIUS_NAMES,
    SHADOW_NAMES,
    TYPE_SCALE_NAMES,
    Z_INDEX_NAMES,
    TokenType,
)
from chuk_mcp_tokens.core.color import group_colors
from chuk_mcp_tokens.core.scale import (
    color_scale,
    font_families,
    font_weights,
    is_px,
    is_size,
    named_scale,
    spacing_scale,
    type_scale,
)
from chuk_mcp_tokens.models.scan import ScannedValues
from chuk_mcp_tokens.models.token import TokenTree, TreeBuilder

logger = logging.getLogger(__name__)

_NUMERIC = re.compile(r"^\s*-?\d+(?:\.\d+)?\s*$")


def _z_index_values(raw: list[str]) -> list[int | float]:
    """Numeric z-indices in ascending order; non-numeric entries are dropped."""
    numbers: list[int | float] = []
    for value in raw:
        if not _NUMERIC.match(value):
            continue
        number = float(value)
        numbers.append(int(number) if number.is_integer() else number)
    return sorted(numbers)


def build_primitives(scan: ScannedValues, spacing_base: float = 4) -> TokenTree:
    """
    Build the primitive tier from scanned values.

    Args:
        scan: The scanned-values document
        spacing_base: Base unit for the spacing scale in px

    Returns:
        Primitive token tree (literal values only)
    """
    builder = TreeBuilder()

    builder.group("color")
    for category, entries in group_colors(scan.colors).items():
        builder.set_scale(f"color.{category}", color_scale(entries), TokenType.COLOR)

    builder.set_scale("spacing", spacing_scale(scan.spacing, spacing_base), TokenType.DIMENSION)

    builder.set_scale(
        "typography.fontFamily", font_families(scan.font_families), TokenType.FONT_FAMILY
    )
    builder.set_scale(
        "typography.fontSize", type_scale(scan.font_sizes, TYPE_SCALE_NAMES), TokenType.DIMENSION
    )
    builder.set_scale(
        "typography.fontWeight", font_weights(scan.font_weights), TokenType.FONT_WEIGHT
    )
    builder.set_scale(
        "typography.lineHeight",
        named_scale(scan.line_heights, LINE_HEIGHT_NAMES),
        TokenType.NUMBER,
    )
    builder.set_scale(
        "typography.letterSpacing",
        named_scale(scan.letter_spacings, LETTER_SPACING_NAMES),
        TokenType.DIMENSION,
    )

    radii = [r for r in scan.border_radii if is_size(r)]
    builder.set_scale("border.radius", named_scale(radii, RADIUS_NAMES), TokenType.DIMENSION)
    widths = [w for w in scan.border_widths if is_px(w)]
    builder.set_scale("border.width", named_scale(widths, BORDER_WIDTH_NAMES), TokenType.DIMENSION)

    builder.set_scale("shadow", named_scale(scan.shadows, SHADOW_NAMES), TokenType.SHADOW)
    builder.set_scale(
        "zIndex", named_scale(_z_index_values(scan.z_indices), Z_INDEX_NAMES), TokenType.NUMBER
    )

    tree = builder.build()
    logger.debug(
        f"Built primitives: {len(tree['color'])} color groups, "
        f"{len(tree['spacing'])} spacing steps, "
        f"{len(tree['typography']['fontSize'])} font sizes"
    )
    return tree

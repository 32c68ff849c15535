"""
Semantic builder - intent-named tokens referencing the primitive tier.

Color intents pick positions from the sorted numeric keys of each color
scale in the primitive tree:

- surface / text / border use the neutral scale (lightest, darkest, mid,
  second-lightest, second-darkest)
- interactive.primary (and .secondary) use the first (and second)
  non-neutral hue
- feedback maps green/red/yellow/orange/blue to success/error/warning/
  caution/info for whichever hues are present

typography, spacing, elevation, radius and layer are fixed templates
pointing at primitive names.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from chuk_mcp_tokens.constants import DEFAULT_PRIMARY_HUE, FEEDBACK_MAP, NEUTRAL, TokenType
from chuk_mcp_tokens.core.reference import ref
from chuk_mcp_tokens.models.token import TokenTree, TreeBuilder, ordered_keys, sorted_scale_keys

logger = logging.getLogger(__name__)

# Fixed reference templates: section -> [(path, target, type)]
TYPOGRAPHY_TEMPLATE: list[tuple[str, str, TokenType]] = [
    ("body.fontFamily", "typography.fontFamily.primary", TokenType.FONT_FAMILY),
    ("body.fontSize", "typography.fontSize.base", TokenType.DIMENSION),
    ("body.lineHeight", "typography.lineHeight.normal", TokenType.NUMBER),
    ("body.fontWeight", "typography.fontWeight.normal", TokenType.FONT_WEIGHT),
    ("heading.fontFamily", "typography.fontFamily.primary", TokenType.FONT_FAMILY),
    ("heading.fontWeight", "typography.fontWeight.bold", TokenType.FONT_WEIGHT),
    ("caption.fontFamily", "typography.fontFamily.primary", TokenType.FONT_FAMILY),
    ("caption.fontSize", "typography.fontSize.sm", TokenType.DIMENSION),
    ("caption.lineHeight", "typography.lineHeight.tight", TokenType.NUMBER),
]

SPACING_STEPS: dict[str, int] = {"xs": 1, "sm": 2, "md": 4, "lg": 6, "xl": 8}
SPACING_GROUPS: dict[str, list[str]] = {
    "inset": ["xs", "sm", "md", "lg", "xl"],
    "stack": ["xs", "sm", "md", "lg", "xl"],
    "inline": ["xs", "sm", "md", "lg"],
}

ELEVATION_TEMPLATE: dict[str, str] = {"low": "shadow.sm", "medium": "shadow.md", "high": "shadow.lg"}
RADIUS_TEMPLATE: dict[str, str] = {
    "small": "border.radius.sm",
    "medium": "border.radius.md",
    "large": "border.radius.lg",
    "pill": "border.radius.full",
}
LAYER_NAMES = ["base", "dropdown", "sticky", "modal", "tooltip"]


def key_at(keys: list[int], index: int, fallback: int | None = None) -> int | None:
    """
    Pick keys[index], else the fallback, else the first key.

    Negative indices do not wrap; they fall back like out-of-range ones.
    Returns None only when keys is empty and no fallback is given.
    """
    if 0 <= index < len(keys):
        return keys[index]
    if fallback is not None:
        return fallback
    return keys[0] if keys else None


def middle_index(keys: list[int]) -> int:
    return len(keys) // 2


class ColorScale:
    """Sorted keys of one color category with position helpers."""

    def __init__(self, category: str, scale: Mapping[str, Any] | None):
        self.category = category
        self.keys = sorted_scale_keys(scale)

    def __bool__(self) -> bool:
        return bool(self.keys)

    @property
    def first(self) -> int | None:
        return key_at(self.keys, 0)

    @property
    def last(self) -> int | None:
        return key_at(self.keys, len(self.keys) - 1)

    @property
    def mid(self) -> int | None:
        return key_at(self.keys, middle_index(self.keys))

    def at(self, index: int, fallback: int | None = None) -> int | None:
        return key_at(self.keys, index, fallback)

    def ref(self, step: int | None) -> str | None:
        """Reference to color.<category>.<step>, or None without a step."""
        return None if step is None else ref(f"color.{self.category}.{step}")


def _set_color(builder: TreeBuilder, path: str, target: str | None) -> None:
    # Intents whose scale is empty are left out rather than pointing nowhere
    if target is not None:
        builder.set(path, target, TokenType.COLOR)


def _interactive_states(
    builder: TreeBuilder, path: str, scale: ColorScale, neutral: ColorScale
) -> None:
    mid = middle_index(scale.keys)
    _set_color(builder, f"{path}.default", scale.ref(scale.at(mid)))
    _set_color(builder, f"{path}.hover", scale.ref(scale.at(mid + 1, scale.last)))
    _set_color(builder, f"{path}.active", scale.ref(scale.last))
    _set_color(builder, f"{path}.disabled", neutral.ref(neutral.mid))


def color_categories(primitives: TokenTree) -> list[str]:
    """Non-neutral color categories in primitive iteration order."""
    colors = primitives.get("color") or {}
    if not isinstance(colors, Mapping):
        return []
    return [c for c in ordered_keys(colors) if c != NEUTRAL]


def _color_scale(primitives: TokenTree, category: str) -> ColorScale:
    colors = primitives.get("color") or {}
    scale = colors.get(category) if isinstance(colors, Mapping) else None
    return ColorScale(category, scale if isinstance(scale, Mapping) else None)


def build_semantic(primitives: TokenTree) -> TokenTree:
    """
    Build the semantic tier from a primitive tree.

    Only the shape of the primitive tree is read (which color categories
    exist and their step keys); values are never copied.

    Args:
        primitives: Normalized primitive token tree

    Returns:
        Semantic token tree whose leaves reference primitive paths
    """
    builder = TreeBuilder()

    neutral = _color_scale(primitives, NEUTRAL)
    lightest, darkest, mid = neutral.first, neutral.last, neutral.mid
    second_darkest = neutral.at(len(neutral.keys) - 2, darkest)

    categories = color_categories(primitives)
    primary = _color_scale(primitives, categories[0] if categories else DEFAULT_PRIMARY_HUE)
    primary_mid = primary.ref(primary.mid)

    _set_color(builder, "surface.default", neutral.ref(lightest))
    _set_color(builder, "surface.secondary", neutral.ref(neutral.at(1, lightest)))
    _set_color(builder, "surface.tertiary", neutral.ref(neutral.at(2, mid)))
    _set_color(builder, "surface.inverse", neutral.ref(darkest))

    _set_color(builder, "text.primary", neutral.ref(darkest))
    _set_color(builder, "text.secondary", neutral.ref(second_darkest))
    _set_color(builder, "text.tertiary", neutral.ref(mid))
    _set_color(builder, "text.inverse", neutral.ref(lightest))
    _set_color(builder, "text.disabled", neutral.ref(mid))
    _set_color(builder, "text.link", primary_mid)

    _set_color(builder, "border.default", neutral.ref(neutral.at(2, mid)))
    _set_color(builder, "border.subtle", neutral.ref(neutral.at(1, lightest)))
    _set_color(builder, "border.strong", neutral.ref(second_darkest))
    _set_color(builder, "border.focus", primary_mid)

    _interactive_states(builder, "interactive.primary", primary, neutral)
    if len(categories) > 1:
        _interactive_states(
            builder, "interactive.secondary", _color_scale(primitives, categories[1]), neutral
        )

    builder.group("feedback")
    for hue, intent in FEEDBACK_MAP.items():
        scale = _color_scale(primitives, hue)
        if not scale:
            continue
        size = len(scale.keys)
        _set_color(builder, f"feedback.{intent}.bg", scale.ref(scale.first))
        _set_color(builder, f"feedback.{intent}.border", scale.ref(scale.at(size // 3)))
        _set_color(builder, f"feedback.{intent}.text", scale.ref(scale.last))

    for path, target, token_type in TYPOGRAPHY_TEMPLATE:
        builder.set(f"typography.{path}", ref(target), token_type)

    for group, names in SPACING_GROUPS.items():
        for name in names:
            builder.set(
                f"spacing.{group}.{name}", ref(f"spacing.{SPACING_STEPS[name]}"), TokenType.DIMENSION
            )

    builder.set("elevation.none", "none", TokenType.SHADOW)
    for name, target in ELEVATION_TEMPLATE.items():
        builder.set(f"elevation.{name}", ref(target), TokenType.SHADOW)

    builder.set("radius.none", "0", TokenType.DIMENSION)
    for name, target in RADIUS_TEMPLATE.items():
        builder.set(f"radius.{name}", ref(target), TokenType.DIMENSION)

    for name in LAYER_NAMES:
        builder.set(f"layer.{name}", ref(f"zIndex.{name}"), TokenType.NUMBER)

    tree = builder.build()
    logger.debug(
        f"Built semantic tokens: primary hue '{primary.category}', "
        f"categories {categories}, {len(tree['feedback'])} feedback intents"
    )
    return tree

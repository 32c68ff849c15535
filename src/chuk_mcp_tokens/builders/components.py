"""
Component builder - UI element tokens referencing the semantic tier.

The catalog is static: it depends only on the semantic path contract
(surface.*, text.*, interactive.*, feedback.*, spacing.inset.*, ...),
never on the shape of scanned data.
"""

from __future__ import annotations

import logging

from chuk_mcp_tokens.constants import TokenType
from chuk_mcp_tokens.core.reference import ref
from chuk_mcp_tokens.models.token import TokenTree, TreeBuilder

logger = logging.getLogger(__name__)

COLOR = TokenType.COLOR
DIMENSION = TokenType.DIMENSION
SHADOW = TokenType.SHADOW
NUMBER = TokenType.NUMBER
FONT_WEIGHT = TokenType.FONT_WEIGHT
STROKE_STYLE = TokenType.STROKE_STYLE

# (name relative to the component, value or reference, type)
Template = list[tuple[str, str, TokenType]]

BUTTON_VARIANTS: dict[str, Template] = {
    "primary": [
        ("background", ref("interactive.primary.default"), COLOR),
        ("backgroundHover", ref("interactive.primary.hover"), COLOR),
        ("backgroundActive", ref("interactive.primary.active"), COLOR),
        ("backgroundDisabled", ref("interactive.primary.disabled"), COLOR),
        ("text", ref("text.inverse"), COLOR),
        ("textDisabled", ref("text.disabled"), COLOR),
        ("border", "transparent", COLOR),
        ("borderRadius", ref("radius.medium"), DIMENSION),
        ("paddingX", ref("spacing.inline.md"), DIMENSION),
        ("paddingY", ref("spacing.inset.sm"), DIMENSION),
        ("fontSize", ref("typography.body.fontSize"), DIMENSION),
        ("fontWeight", ref("typography.heading.fontWeight"), FONT_WEIGHT),
    ],
    "secondary": [
        ("background", "transparent", COLOR),
        ("backgroundHover", ref("surface.secondary"), COLOR),
        ("backgroundActive", ref("surface.tertiary"), COLOR),
        ("text", ref("interactive.primary.default"), COLOR),
        ("textHover", ref("interactive.primary.hover"), COLOR),
        ("textDisabled", ref("text.disabled"), COLOR),
        ("border", ref("border.default"), COLOR),
        ("borderHover", ref("interactive.primary.default"), COLOR),
        ("borderRadius", ref("radius.medium"), DIMENSION),
        ("paddingX", ref("spacing.inline.md"), DIMENSION),
        ("paddingY", ref("spacing.inset.sm"), DIMENSION),
    ],
    "ghost": [
        ("background", "transparent", COLOR),
        ("backgroundHover", ref("surface.secondary"), COLOR),
        ("text", ref("text.primary"), COLOR),
        ("textHover", ref("interactive.primary.default"), COLOR),
        ("border", "transparent", COLOR),
        ("borderRadius", ref("radius.medium"), DIMENSION),
        ("paddingX", ref("spacing.inline.sm"), DIMENSION),
        ("paddingY", ref("spacing.inset.sm"), DIMENSION),
    ],
}

INPUT: Template = [
    ("background", ref("surface.default"), COLOR),
    ("backgroundDisabled", ref("surface.secondary"), COLOR),
    ("text", ref("text.primary"), COLOR),
    ("textPlaceholder", ref("text.tertiary"), COLOR),
    ("textDisabled", ref("text.disabled"), COLOR),
    ("border", ref("border.default"), COLOR),
    ("borderHover", ref("border.strong"), COLOR),
    ("borderFocus", ref("border.focus"), COLOR),
    ("borderError", ref("feedback.error.border"), COLOR),
    ("borderRadius", ref("radius.small"), DIMENSION),
    ("paddingX", ref("spacing.inline.md"), DIMENSION),
    ("paddingY", ref("spacing.inset.sm"), DIMENSION),
    ("fontSize", ref("typography.body.fontSize"), DIMENSION),
]

CARD: Template = [
    ("background", ref("surface.default"), COLOR),
    ("backgroundHover", ref("surface.secondary"), COLOR),
    ("border", ref("border.subtle"), COLOR),
    ("borderRadius", ref("radius.large"), DIMENSION),
    ("shadow", ref("elevation.low"), SHADOW),
    ("shadowHover", ref("elevation.medium"), SHADOW),
    ("padding", ref("spacing.inset.lg"), DIMENSION),
    ("gap", ref("spacing.stack.md"), DIMENSION),
]

MODAL: Template = [
    ("overlay", "rgba(0, 0, 0, 0.5)", COLOR),
    ("background", ref("surface.default"), COLOR),
    ("border", ref("border.subtle"), COLOR),
    ("borderRadius", ref("radius.large"), DIMENSION),
    ("shadow", ref("elevation.high"), SHADOW),
    ("padding", ref("spacing.inset.xl"), DIMENSION),
    ("gap", ref("spacing.stack.lg"), DIMENSION),
    ("zIndex", ref("layer.modal"), NUMBER),
]

TOOLTIP: Template = [
    ("background", ref("surface.inverse"), COLOR),
    ("text", ref("text.inverse"), COLOR),
    ("borderRadius", ref("radius.small"), DIMENSION),
    ("padding", ref("spacing.inset.sm"), DIMENSION),
    ("shadow", ref("elevation.medium"), SHADOW),
    ("zIndex", ref("layer.tooltip"), NUMBER),
    ("fontSize", ref("typography.caption.fontSize"), DIMENSION),
]

BADGE: Template = [
    ("default.background", ref("surface.tertiary"), COLOR),
    ("default.text", ref("text.primary"), COLOR),
    ("success.background", ref("feedback.success.bg"), COLOR),
    ("success.text", ref("feedback.success.text"), COLOR),
    ("error.background", ref("feedback.error.bg"), COLOR),
    ("error.text", ref("feedback.error.text"), COLOR),
    ("warning.background", ref("feedback.warning.bg"), COLOR),
    ("warning.text", ref("feedback.warning.text"), COLOR),
    ("info.background", ref("feedback.info.bg"), COLOR),
    ("info.text", ref("feedback.info.text"), COLOR),
    ("borderRadius", ref("radius.pill"), DIMENSION),
    ("paddingX", ref("spacing.inline.sm"), DIMENSION),
    ("paddingY", ref("spacing.inset.xs"), DIMENSION),
    ("fontSize", ref("typography.caption.fontSize"), DIMENSION),
    ("fontWeight", ref("typography.heading.fontWeight"), FONT_WEIGHT),
]

LINK: Template = [
    ("text", ref("text.link"), COLOR),
    ("textHover", ref("interactive.primary.hover"), COLOR),
    ("textActive", ref("interactive.primary.active"), COLOR),
    ("underline", "none", STROKE_STYLE),
    ("underlineHover", "underline", STROKE_STYLE),
]

AVATAR: Template = [
    ("background", ref("surface.tertiary"), COLOR),
    ("text", ref("text.secondary"), COLOR),
    ("border", ref("border.subtle"), COLOR),
    ("borderRadius", ref("radius.pill"), DIMENSION),
    ("sizes.sm", "24px", DIMENSION),
    ("sizes.md", "32px", DIMENSION),
    ("sizes.lg", "48px", DIMENSION),
    ("sizes.xl", "64px", DIMENSION),
]

DROPDOWN: Template = [
    ("background", ref("surface.default"), COLOR),
    ("border", ref("border.default"), COLOR),
    ("borderRadius", ref("radius.medium"), DIMENSION),
    ("shadow", ref("elevation.medium"), SHADOW),
    ("zIndex", ref("layer.dropdown"), NUMBER),
    ("item.background", "transparent", COLOR),
    ("item.backgroundHover", ref("surface.secondary"), COLOR),
    ("item.backgroundActive", ref("surface.tertiary"), COLOR),
    ("item.text", ref("text.primary"), COLOR),
    ("item.textDisabled", ref("text.disabled"), COLOR),
    ("item.padding", ref("spacing.inset.sm"), DIMENSION),
]

TABS: Template = [
    ("border", ref("border.subtle"), COLOR),
    ("tab.text", ref("text.secondary"), COLOR),
    ("tab.textHover", ref("text.primary"), COLOR),
    ("tab.textActive", ref("interactive.primary.default"), COLOR),
    ("tab.borderActive", ref("interactive.primary.default"), COLOR),
    ("tab.padding", ref("spacing.inset.md"), DIMENSION),
    ("panel.padding", ref("spacing.inset.lg"), DIMENSION),
]

ALERT: Template = [
    *(
        (f"{intent}.{part}", ref(f"feedback.{intent}.{source}"), COLOR)
        for intent in ("success", "error", "warning", "info")
        for part, source in (("background", "bg"), ("border", "border"), ("text", "text"))
    ),
    ("borderRadius", ref("radius.medium"), DIMENSION),
    ("padding", ref("spacing.inset.md"), DIMENSION),
]

CATALOG: dict[str, Template] = {
    **{f"button.{variant}": template for variant, template in BUTTON_VARIANTS.items()},
    "input": INPUT,
    "card": CARD,
    "modal": MODAL,
    "tooltip": TOOLTIP,
    "badge": BADGE,
    "link": LINK,
    "avatar": AVATAR,
    "dropdown": DROPDOWN,
    "tabs": TABS,
    "alert": ALERT,
}


def build_components() -> TokenTree:
    """
    Build the component tier.

    Returns:
        Component token tree; reference leaves point at semantic paths
    """
    builder = TreeBuilder()
    for component, template in CATALOG.items():
        for name, value, token_type in template:
            builder.set(f"{component}.{name}", value, token_type)

    tree = builder.build()
    logger.debug(f"Built component tokens: {', '.join(tree)}")
    return tree

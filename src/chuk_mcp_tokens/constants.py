"""
Constants and enums for the token system.

No magic strings - use enums and Literal types for constrained values.
"""

from enum import Enum
from typing import Literal


class Tier(str, Enum):
    """
    The three token tiers, leaves first.

    Primitives hold literal values, semantic tokens reference primitives,
    component tokens reference semantic tokens.
    """

    PRIMITIVE = "primitive"
    SEMANTIC = "semantic"
    COMPONENT = "component"


class TokenType(str, Enum):
    """Known token type tags (DTCG taxonomy)."""

    COLOR = "color"
    DIMENSION = "dimension"
    FONT_FAMILY = "fontFamily"
    FONT_WEIGHT = "fontWeight"
    DURATION = "duration"
    CUBIC_BEZIER = "cubicBezier"
    NUMBER = "number"
    STROKE_STYLE = "strokeStyle"
    BORDER = "border"
    TRANSITION = "transition"
    SHADOW = "shadow"
    GRADIENT = "gradient"
    TYPOGRAPHY = "typography"
    FONT_STYLE = "fontStyle"


KNOWN_TYPES: frozenset[str] = frozenset(t.value for t in TokenType)

# Hue categories plus the achromatic bucket
HueCategory = Literal["red", "orange", "yellow", "green", "cyan", "blue", "purple", "pink"]
NEUTRAL = "neutral"

# Colors below this HSL saturation are neutral
NEUTRAL_SATURATION = 10

# Upper bound on reference hops before resolution gives up
MAX_REFERENCE_DEPTH = 32

# Prefix for metadata keys ($schema, $name, ...) that are never tokens
METADATA_PREFIX = "$"

# Pixels per rem
REM_PX = 16

# Fixed scale names (builder conventions, not data-derived)
TYPE_SCALE_NAMES = ["xs", "sm", "base", "md", "lg", "xl", "2xl", "3xl", "4xl", "5xl"]
LINE_HEIGHT_NAMES = ["tight", "snug", "normal", "relaxed", "loose", "spacious"]
LETTER_SPACING_NAMES = ["tight", "normal", "wide", "wider"]
RADIUS_NAMES = ["none", "sm", "md", "lg", "xl", "full"]
BORDER_WIDTH_NAMES = ["thin", "medium", "thick"]
SHADOW_NAMES = ["sm", "md", "lg", "xl", "2xl"]
Z_INDEX_NAMES = ["base", "dropdown", "sticky", "modal", "tooltip"]

FONT_WEIGHT_NAMES: dict[int, str] = {
    100: "thin",
    200: "extralight",
    300: "light",
    400: "normal",
    500: "medium",
    600: "semibold",
    700: "bold",
    800: "extrabold",
    900: "black",
}

# Hue category -> feedback intent
FEEDBACK_MAP: dict[str, str] = {
    "green": "success",
    "red": "error",
    "yellow": "warning",
    "orange": "caution",
    "blue": "info",
}

DEFAULT_PRIMARY_HUE = "blue"

# Dependency graph between tiers
TIER_DEPENDENCIES: dict[Tier, list[Tier]] = {
    Tier.PRIMITIVE: [],
    Tier.SEMANTIC: [Tier.PRIMITIVE],
    Tier.COMPONENT: [Tier.SEMANTIC],
}

# Artifact file names
SCAN_FILE = "base.json"
TIER_FILES: dict[Tier, str] = {
    Tier.PRIMITIVE: "primitives.json",
    Tier.SEMANTIC: "semantic.json",
    Tier.COMPONENT: "components.json",
}
TIER_STEMS: dict[Tier, str] = {
    Tier.PRIMITIVE: "primitives",
    Tier.SEMANTIC: "semantic",
    Tier.COMPONENT: "components",
}

# Reference file names used by the diff engine
REFERENCE_FILES: dict[Tier, str] = {
    Tier.PRIMITIVE: "primitive.tokens.json",
    Tier.SEMANTIC: "semantics.tokens.json",
    Tier.COMPONENT: "component.tokens.json",
}

OutputFormat = Literal["json", "scss", "css"]
LeafFormat = Literal["dtcg", "legacy"]

# Stylesheet extensions that trigger a rebuild in watch mode
WATCHED_EXTENSIONS = (".css", ".scss", ".sass")


class ErrorMessages:
    """Standardized error messages."""

    NO_SCAN = "Scanned values not found at {path}. Run the scan stage first."
    MISSING_DEPENDENCY = "Missing dependency for {tier}: {dependency}. Generate it first."
    UNKNOWN_TIER = "Unknown tier: '{tier}'. Expected one of: primitive, semantic, component."
    ARTIFACT_NOT_FOUND = "No {tier} artifact found. Generate it first."
    NO_REFS_DIR = "Reference directory is required. Pass refs_dir or set it in config."
    INPUT_NOT_FOUND = "Input file not found: {path}"


class SuccessMessages:
    """Standardized success messages."""

    TIERS_GENERATED = "Generated {tiers}."
    NOTHING_TO_DO = "All requested tiers already exist. Use force to regenerate."
    TOKENS_CONVERTED = "Converted {count} tokens to {shape} format."

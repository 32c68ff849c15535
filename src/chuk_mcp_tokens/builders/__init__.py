"""
Tier builders - one pure function per tier.

- build_primitives: scanned values -> literal base tier
- build_semantic: primitive tree -> intent references
- build_components: static catalog of semantic references
"""

from chuk_mcp_tokens.builders.components import CATALOG, build_components
from chuk_mcp_tokens.builders.primitives import build_primitives
from chuk_mcp_tokens.builders.semantic import build_semantic, color_categories, key_at

__all__ = [
    "CATALOG",
    "build_components",
    "build_primitives",
    "build_semantic",
    "color_categories",
    "key_at",
]

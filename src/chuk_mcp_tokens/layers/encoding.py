"""
Tier artifact encodings.

A tier tree can be written three interchangeable ways:
- json: nested mapping of leaves in the configured leaf shape
- scss: flat `$name: value;` declarations, references pointing at the
  upstream tier's module namespace
- css: flat `--name: value;` custom properties inside `:root`, references
  rewritten to `var(--name)`

Names are dash-joined token paths in tree iteration order.
"""

from __future__ import annotations

import json
from collections.abc import Callable

from chuk_mcp_tokens.constants import TIER_STEMS, OutputFormat, Tier
from chuk_mcp_tokens.models.token import LeafShape, TokenLeaf, TokenTree, iter_leaves, tree_to_dict

# Per tier: (scss header, module namespace for references, css header)
_HEADERS: dict[Tier, tuple[str, str | None, str]] = {
    Tier.PRIMITIVE: (
        "// Auto-generated primitives\n\n",
        None,
        "/* Auto-generated primitives */\n",
    ),
    Tier.SEMANTIC: (
        '// Auto-generated semantic tokens\n@use "primitives" as p;\n\n',
        "p",
        "/* Auto-generated semantic tokens */\n",
    ),
    Tier.COMPONENT: (
        '// Auto-generated component tokens\n@use "semantic" as s;\n\n',
        "s",
        "/* Auto-generated component tokens */\n",
    ),
}


def _dash(path: str) -> str:
    return path.replace(".", "-")


def format_value(value: object) -> str:
    """Render a literal leaf value for declaration text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)


def scss_value(leaf: TokenLeaf, namespace: str | None) -> str:
    reference = leaf.reference
    if reference is None:
        return format_value(leaf.value)
    prefix = f"{namespace}." if namespace else ""
    return f"{prefix}${reference.dashed}"


def css_value(leaf: TokenLeaf) -> str:
    reference = leaf.reference
    if reference is None:
        return format_value(leaf.value)
    return f"var(--{reference.dashed})"


def to_json(tree: TokenTree, shape: LeafShape = LeafShape.DTCG) -> str:
    """Encode a tree as indented JSON."""
    return json.dumps(tree_to_dict(tree, shape), indent=2, ensure_ascii=False)


def to_scss(tree: TokenTree, tier: Tier) -> str:
    """Encode a tree as variable declarations."""
    header, namespace, _ = _HEADERS[tier]
    lines = [f"${_dash(path)}: {scss_value(leaf, namespace)};\n" for path, leaf in iter_leaves(tree)]
    return header + "".join(lines)


def to_css(tree: TokenTree, tier: Tier) -> str:
    """Encode a tree as custom properties on :root."""
    _, _, header = _HEADERS[tier]
    lines = [f"  --{_dash(path)}: {css_value(leaf)};\n" for path, leaf in iter_leaves(tree)]
    return f"{header}:root {{\n{''.join(lines)}}}\n"


def artifact_name(tier: Tier, output_format: OutputFormat) -> str:
    """File name of a tier artifact in the given encoding."""
    stem = TIER_STEMS[tier]
    if output_format == "json":
        return f"{stem}.json"
    if output_format == "scss":
        return f"_{stem}.scss"
    return f"{stem}.css"


def encode(
    tree: TokenTree,
    tier: Tier,
    output_format: OutputFormat,
    shape: LeafShape = LeafShape.DTCG,
) -> str:
    """Encode a tier tree in one output format."""
    encoders: dict[str, Callable[[], str]] = {
        "json": lambda: to_json(tree, shape),
        "scss": lambda: to_scss(tree, tier),
        "css": lambda: to_css(tree, tier),
    }
    if output_format not in encoders:
        raise ValueError(f"Unknown output format: {output_format}")
    return encoders[output_format]()

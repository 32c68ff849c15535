"""
Leaf-shape conversion - migrate token documents between DTCG and legacy keys.

Unlike normalize_tree, conversion is lossless for everything that is not a
shape key: group metadata ('$schema', '$description'), leaf extensions
('$extensions', custom keys) and key order all survive. Only the value, type
and description keys are renamed.

Reference normalization optionally rewrites other reference spellings to
the '{a.b.c}' form:
- '$color.primary'          -> '{color.primary}'
- 'var(--color-primary)'    -> '{color.primary}'
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from chuk_mcp_tokens.models.token import LeafShape, is_leaf_node

_BRACED = re.compile(r"^\{[^}]+\}$")
_CSS_VAR = re.compile(r"^var\(--([^)]+)\)$")

SHAPE_KEYS = frozenset({"$value", "$type", "$description", "value", "type", "description"})


def normalize_reference(value: Any) -> Any:
    """
    Rewrite '$a.b' and 'var(--a-b)' references as '{a.b}'.

    Values already in brace form and anything that is not a string are
    returned unchanged. Dashes in a custom-property name become dots, so
    'var(--space-inline-md)' maps to '{space.inline.md}'.
    """
    if not isinstance(value, str):
        return value
    if _BRACED.match(value):
        return value
    if value.startswith("$") and len(value) > 1 and not value.startswith("$value"):
        return "{" + value[1:] + "}"
    match = _CSS_VAR.match(value.strip())
    if match:
        return "{" + match.group(1).replace("-", ".") + "}"
    return value


def _pick(node: Mapping[str, Any], dtcg_key: str, legacy_key: str) -> Any:
    value = node.get(dtcg_key)
    return node.get(legacy_key) if value is None else value


def convert_leaf(
    node: Mapping[str, Any], shape: LeafShape, normalize_refs: bool = False
) -> dict[str, Any]:
    """Rewrite one leaf's shape keys; DTCG keys win when both shapes are present."""
    value = _pick(node, "$value", "value")
    token_type = _pick(node, "$type", "type")
    description = _pick(node, "$description", "description")

    if normalize_refs:
        value = normalize_reference(value)

    result: dict[str, Any] = {shape.value_key: value}
    if token_type is not None:
        result[shape.type_key] = token_type
    if description:
        result[shape.description_key] = description
    for key, extra in node.items():
        if key not in SHAPE_KEYS:
            result[key] = extra
    return result


def convert_document(document: Any, shape: LeafShape | str, normalize_refs: bool = False) -> Any:
    """
    Convert every leaf of a raw token document to the given shape.

    Args:
        document: Parsed JSON token document
        shape: Target leaf shape ('dtcg' or 'legacy')
        normalize_refs: Also rewrite '$a.b' / 'var(--a-b)' values as '{a.b}'

    Returns:
        A new document; the input is not modified
    """
    shape = LeafShape(shape)
    if not isinstance(document, Mapping):
        return document
    if is_leaf_node(document):
        return convert_leaf(document, shape, normalize_refs)
    return {
        key: convert_document(node, shape, normalize_refs) for key, node in document.items()
    }


def count_tokens(document: Any) -> int:
    """Number of leaves (in either shape) in a raw document."""
    if not isinstance(document, Mapping):
        return 0
    if is_leaf_node(document):
        return 1
    return sum(count_tokens(node) for node in document.values())


def converted_path(input_path: Path, shape: LeafShape | str) -> Path:
    """Default output path: 'tokens.json' becomes 'tokens.dtcg.json' / 'tokens.legacy.json'."""
    suffix = f".{LeafShape(shape).value}.json"
    name = input_path.name
    stem = name[: -len(".json")] if name.endswith(".json") else name
    return input_path.with_name(stem + suffix)

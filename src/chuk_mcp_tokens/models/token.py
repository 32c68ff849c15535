"""
Token model - leaves, trees, and the two on-disk leaf shapes.

A token tree is a nested mapping from path segment to either a subtree or a
TokenLeaf. On disk a leaf is written either in DTCG shape
({"$value", "$type", "$description"}) or legacy shape
({"value", "type", "description"}). Both are accepted on read and normalized
to TokenLeaf immediately; nothing downstream looks at the shape again.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, Field

from chuk_mcp_tokens.constants import METADATA_PREFIX, TokenType
from chuk_mcp_tokens.core.reference import Reference, parse_reference

_INDEX_KEY = re.compile(r"^(?:0|[1-9]\d*)$")


class LeafShape(str, Enum):
    """Key-naming convention of a token leaf."""

    DTCG = "dtcg"
    LEGACY = "legacy"

    @property
    def value_key(self) -> str:
        return "$value" if self is LeafShape.DTCG else "value"

    @property
    def type_key(self) -> str:
        return "$type" if self is LeafShape.DTCG else "type"

    @property
    def description_key(self) -> str:
        return "$description" if self is LeafShape.DTCG else "description"


class TokenLeaf(BaseModel):
    """
    A single token: a literal or reference value plus a type tag.

    This is the only leaf representation used after ingestion.
    """

    value: Any = Field(..., description="Literal value or '{a.b.c}' reference")
    token_type: str | None = Field(None, alias="type", description="Token type tag")
    description: str | None = Field(None, description="Optional description")

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def reference(self) -> Reference | None:
        """The parsed reference, if the value is one."""
        return parse_reference(self.value)

    @property
    def is_reference(self) -> bool:
        return self.reference is not None

    def to_dict(self, shape: LeafShape = LeafShape.DTCG) -> dict[str, Any]:
        """Serialize in the given leaf shape."""
        data: dict[str, Any] = {shape.value_key: self.value}
        if self.token_type is not None:
            data[shape.type_key] = self.token_type
        if self.description:
            data[shape.description_key] = self.description
        return data


TokenTree = dict[str, Union["TokenTree", TokenLeaf]]


def is_leaf_node(node: Any) -> bool:
    """A node is a leaf once it exposes a value in either shape."""
    if isinstance(node, TokenLeaf):
        return True
    return isinstance(node, Mapping) and ("$value" in node or "value" in node)


def _first_present(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def normalize_leaf(raw: Mapping[str, Any]) -> TokenLeaf:
    """Normalize a leaf in either shape; DTCG keys win when both are present."""
    return TokenLeaf(
        value=_first_present(raw, "$value", "value"),
        token_type=_first_present(raw, "$type", "type"),
        description=_first_present(raw, "$description", "description"),
    )


def ordered_keys(mapping: Mapping[str, Any]) -> list[str]:
    """
    Keys in token iteration order.

    Integer-looking keys come first in ascending numeric order, then all
    other keys in insertion order.
    """
    numeric = sorted((k for k in mapping if _INDEX_KEY.match(str(k))), key=lambda k: int(k))
    named = [k for k in mapping if not _INDEX_KEY.match(str(k))]
    return numeric + named


def normalize_tree(raw: Mapping[str, Any]) -> TokenTree:
    """
    Normalize a raw token document into a TokenTree.

    Metadata keys ('$schema', ...) are dropped. Bare scalars become
    untyped leaves.
    """
    tree: TokenTree = {}
    for key in ordered_keys(raw):
        if str(key).startswith(METADATA_PREFIX):
            continue
        node = raw[key]
        if is_leaf_node(node):
            tree[str(key)] = node if isinstance(node, TokenLeaf) else normalize_leaf(node)
        elif isinstance(node, Mapping):
            tree[str(key)] = normalize_tree(node)
        else:
            tree[str(key)] = TokenLeaf(value=node)
    return tree


def tree_to_dict(tree: TokenTree, shape: LeafShape = LeafShape.DTCG) -> dict[str, Any]:
    """Serialize a TokenTree to plain nested dicts in the given leaf shape."""
    result: dict[str, Any] = {}
    for key in ordered_keys(tree):
        node = tree[key]
        if isinstance(node, TokenLeaf):
            result[key] = node.to_dict(shape)
        else:
            result[key] = tree_to_dict(node, shape)
    return result


def iter_leaves(tree: TokenTree, prefix: str = "") -> Iterator[tuple[str, TokenLeaf]]:
    """Walk a TokenTree depth-first, yielding (path, leaf)."""
    for key in ordered_keys(tree):
        path = f"{prefix}.{key}" if prefix else key
        node = tree[key]
        if isinstance(node, TokenLeaf):
            yield path, node
        else:
            yield from iter_leaves(node, path)


def get_node(tree: TokenTree, path: str) -> TokenTree | TokenLeaf | None:
    """Look up a subtree or leaf by dot-path."""
    node: Any = tree
    for segment in path.split("."):
        if not isinstance(node, dict) or segment not in node:
            return None
        node = node[segment]
    return node


def sorted_scale_keys(scale: Mapping[str, Any] | None) -> list[int]:
    """Numeric keys of a scale group, ascending. Non-numeric keys are ignored."""
    if not scale:
        return []
    return sorted(int(k) for k in scale if _INDEX_KEY.match(str(k)))


class TreeBuilder:
    """
    Accumulates leaves into a TokenTree.

    Each builder owns its tree; callers thread one builder through their
    construction steps and call build() once at the end.

    Example:
        builder = TreeBuilder()
        builder.set("color.blue.500", "#3b82f6", TokenType.COLOR)
        tree = builder.build()
    """

    def __init__(self) -> None:
        self._root: TokenTree = {}

    def group(self, path: str) -> TokenTree:
        """Ensure a (possibly empty) group exists at path and return it."""
        node = self._root
        for segment in path.split("."):
            child = node.setdefault(segment, {})
            if isinstance(child, TokenLeaf):
                raise ValueError(f"Cannot nest tokens under leaf '{segment}' in {path}")
            node = child
        return node

    def set(
        self,
        path: str,
        value: Any,
        token_type: TokenType | str | None,
        description: str | None = None,
    ) -> TreeBuilder:
        """Set a leaf at path, replacing any existing leaf there."""
        parent_path, _, name = path.rpartition(".")
        parent = self.group(parent_path) if parent_path else self._root
        if isinstance(parent.get(name), dict):
            raise ValueError(f"Cannot replace group '{path}' with a leaf")
        tag = token_type.value if isinstance(token_type, TokenType) else token_type
        parent[name] = TokenLeaf(value=value, token_type=tag, description=description)
        return self

    def set_scale(
        self,
        path: str,
        scale: Mapping[Any, Any],
        token_type: TokenType | str,
    ) -> TreeBuilder:
        """Add every step of a scale under path (an empty scale leaves an empty group)."""
        self.group(path)
        for step, value in scale.items():
            self.set(f"{path}.{step}", value, token_type)
        return self

    def build(self) -> TokenTree:
        """Return the accumulated tree."""
        return self._root

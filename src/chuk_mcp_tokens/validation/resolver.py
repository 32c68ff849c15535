"""
Reference resolution over flattened token documents.

flatten() walks a raw token document (either leaf shape) or a normalized
TokenTree and yields (path, FlatToken) pairs in iteration order. A
PathIndex is built once per validation or diff pass over the union of all
documents; references are looked up in it rather than re-walking trees.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from chuk_mcp_tokens.constants import MAX_REFERENCE_DEPTH, METADATA_PREFIX
from chuk_mcp_tokens.core.reference import Reference, parse_reference
from chuk_mcp_tokens.errors import (
    CircularReferenceError,
    ReferenceDepthError,
    UnresolvedReferenceError,
)
from chuk_mcp_tokens.models.token import TokenLeaf, is_leaf_node, ordered_keys

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlatToken:
    """
    A flattened token with the key layout it was written in.

    raw is the leaf mapping as found on disk, or None for a bare scalar
    sitting where a group was expected.
    """

    value: Any
    token_type: str | None
    raw: Mapping[str, Any] | None = None

    @classmethod
    def from_leaf(cls, node: Mapping[str, Any] | TokenLeaf) -> FlatToken:
        raw = node.to_dict() if isinstance(node, TokenLeaf) else node
        value = raw.get("$value")
        if value is None:
            value = raw.get("value")
        token_type = raw.get("$type")
        if token_type is None:
            token_type = raw.get("type")
        return cls(value=value, token_type=token_type, raw=raw)

    @property
    def bare(self) -> bool:
        return self.raw is None

    def has_key(self, key: str) -> bool:
        return self.raw is not None and key in self.raw

    @property
    def reference(self) -> Reference | None:
        return parse_reference(self.value)

    @property
    def diff_type(self) -> str | None:
        """Type as reported by the diff engine; bare scalars are 'unknown'."""
        return "unknown" if self.bare else self.token_type

    def to_dict(self) -> dict[str, Any]:
        return {"value": self.value, "type": self.diff_type}


def flatten(document: Any, prefix: str = "") -> list[tuple[str, FlatToken]]:
    """
    Flatten a token document to an ordered list of (path, token).

    A node is a leaf once it exposes '$value' or 'value'. Keys starting
    with '$' are skipped. Paths may repeat when a dotted key collides with
    a nested group; callers that care (duplicate detection) see both.
    """
    return list(_walk(document, prefix))


def _walk(node: Any, prefix: str) -> Iterator[tuple[str, FlatToken]]:
    if is_leaf_node(node):
        yield prefix, FlatToken.from_leaf(node)
        return
    if not isinstance(node, Mapping):
        return
    for key in ordered_keys(node):
        if str(key).startswith(METADATA_PREFIX):
            continue
        path = f"{prefix}.{key}" if prefix else str(key)
        child = node[key]
        if is_leaf_node(child) or isinstance(child, Mapping):
            yield from _walk(child, path)
        else:
            yield path, FlatToken(value=child, token_type=None)


class PathIndex:
    """
    Union of token paths across documents.

    The first definition of a path wins; bare scalars are not
    addressable by references and are left out.
    """

    def __init__(self) -> None:
        self.tokens: dict[str, FlatToken] = {}
        self.sources: dict[str, str] = {}

    @classmethod
    def build(cls, documents: Mapping[str, Any]) -> PathIndex:
        """Build an index from named documents (name -> parsed document)."""
        index = cls()
        for name, document in documents.items():
            index.add(document, name)
        return index

    def add(self, document: Any, source: str = "") -> None:
        for path, token in flatten(document):
            if token.bare or path in self.tokens:
                continue
            self.tokens[path] = token
            self.sources[path] = source

    def __contains__(self, path: object) -> bool:
        return path in self.tokens

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    def get(self, path: str) -> FlatToken | None:
        return self.tokens.get(path)


class ReferenceResolver:
    """
    Follows reference chains to literal values.

    Example:
        resolver = ReferenceResolver(PathIndex.build({"semantic.json": tree}))
        resolver.resolve("text.primary")  # "#000000"
    """

    def __init__(self, index: PathIndex, max_depth: int = MAX_REFERENCE_DEPTH):
        self.index = index
        self.max_depth = max_depth

    def chain(self, path: str) -> list[str]:
        """
        The paths visited from path to its literal, inclusive.

        Raises:
            UnresolvedReferenceError: A path on the chain does not exist
            CircularReferenceError: The chain revisits a path
            ReferenceDepthError: The chain is longer than max_depth hops
        """
        visited = [path]
        token = self.index.get(path)
        if token is None:
            raise UnresolvedReferenceError(path, path)

        reference = token.reference
        while reference is not None:
            target = reference.path
            if target in visited:
                raise CircularReferenceError(path, [*visited, target])
            if len(visited) > self.max_depth:
                raise ReferenceDepthError(path, self.max_depth)
            token = self.index.get(target)
            if token is None:
                raise UnresolvedReferenceError(visited[-1], target)
            visited.append(target)
            reference = token.reference
        return visited

    def resolve_token(self, path: str) -> FlatToken:
        """The literal token a path ultimately points at."""
        return self.index.tokens[self.chain(path)[-1]]

    def resolve(self, path: str) -> Any:
        """The literal value a path ultimately points at."""
        return self.resolve_token(path).value

    def resolve_all(self) -> dict[str, Any]:
        """Resolve every indexed path; failures are logged and left out."""
        resolved: dict[str, Any] = {}
        for path in self.index:
            try:
                resolved[path] = self.resolve(path)
            except (UnresolvedReferenceError, CircularReferenceError, ReferenceDepthError) as e:
                logger.debug(f"Skipping {path}: {e}")
        return resolved


def find_cycle(index: PathIndex, start: str) -> list[str] | None:
    """
    Follow references from start and return the chain if a path repeats.

    The chain ends at the first repeated path, e.g. ['a', 'b', 'a']. A
    chain that reaches a literal or a missing path yields None.
    """
    visited: list[str] = []
    current = start
    while True:
        if current in visited:
            return [*visited, current]
        token = index.get(current)
        reference = token.reference if token is not None else None
        if reference is None:
            return None
        visited.append(current)
        current = reference.path


def detect_cycles(index: PathIndex, paths: Iterable[str] | None = None) -> dict[str, list[str]]:
    """
    Find circular chains, tracked independently per starting path.

    Every start whose chain runs into a loop is reported, including paths
    that lead into a loop without being part of it.

    Returns:
        Mapping of starting path to its truncated chain
    """
    cycles: dict[str, list[str]] = {}
    for path in paths if paths is not None else index:
        chain = find_cycle(index, path)
        if chain is not None:
            cycles[path] = chain
    return cycles

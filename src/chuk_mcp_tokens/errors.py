"""
Exception hierarchy for token generation.

Generation and orchestration raise these and stop; validation and
diffing collect issues instead.
"""

from __future__ import annotations


class TokenizeError(Exception):
    """Base class for all token pipeline errors."""


class InputError(TokenizeError):
    """A required input document or artifact is absent or unreadable."""


class MissingDependencyError(InputError):
    """A tier's dependency artifact does not exist."""

    def __init__(self, tier: str, dependency: str):
        self.tier = tier
        self.dependency = dependency
        super().__init__(f"Missing dependency for {tier}: {dependency}")


class OrchestrationError(TokenizeError):
    """The tier dependency graph was used incorrectly."""


class TokenReferenceError(TokenizeError):
    """A reference could not be followed to a literal value."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(message)


class UnresolvedReferenceError(TokenReferenceError):
    """A reference points at a path that does not exist."""

    def __init__(self, path: str, target: str):
        self.target = target
        super().__init__(path, f"Unresolved reference: {path} -> {{{target}}}")


class CircularReferenceError(TokenReferenceError):
    """A reference chain loops back on itself."""

    def __init__(self, path: str, chain: list[str]):
        self.chain = chain
        super().__init__(path, f"Circular reference detected: {' -> '.join(chain)}")


class ReferenceDepthError(TokenReferenceError):
    """A reference chain exceeded the hop limit."""

    def __init__(self, path: str, depth: int):
        self.depth = depth
        super().__init__(path, f"Reference chain from {path} exceeds {depth} hops")

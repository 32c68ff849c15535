"""
Token references - the '{dot.separated.path}' syntax.

Grammar:
    Reference ::= '{' Path '}'
    Path      ::= Segment ('.' Segment)*
    Segment   ::= one or more characters other than '.', '{', '}' or whitespace

A reference is the whole string; references embedded in longer values
are treated as literals.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

_SEGMENT = r"[^.{}\s]+"
_REFERENCE = re.compile(rf"^\{{({_SEGMENT}(?:\.{_SEGMENT})*)\}}$")


@dataclass(frozen=True)
class Reference:
    """A parsed reference to another token path."""

    path: str

    @property
    def segments(self) -> list[str]:
        return self.path.split(".")

    @property
    def dashed(self) -> str:
        """The path joined with dashes, as used for variable names."""
        return self.path.replace(".", "-")

    def __str__(self) -> str:
        return f"{{{self.path}}}"


def ref(path: str) -> str:
    """Build a reference string for a token path."""
    return str(Reference(path))


def looks_like_reference(value: Any) -> bool:
    """Check whether a value is brace-wrapped, well-formed or not."""
    return isinstance(value, str) and value.startswith("{") and value.endswith("}")


def parse_reference(value: Any) -> Reference | None:
    """
    Parse a reference string.

    Returns None for anything that is not exactly one well-formed reference.
    """
    if not isinstance(value, str):
        return None
    match = _REFERENCE.match(value)
    return Reference(match.group(1)) if match else None


def is_reference(value: Any) -> bool:
    """Check whether a value is a well-formed reference."""
    return parse_reference(value) is not None

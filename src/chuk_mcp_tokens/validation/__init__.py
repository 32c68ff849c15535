"""
Validation and diffing of token artifacts.

This module provides:
- flatten / PathIndex / ReferenceResolver: reference resolution
- TokenValidator: per-leaf and per-file checks
- diff_trees / diff_directories: comparison against reference files
"""

from chuk_mcp_tokens.validation.diff import (
    DiffCode,
    DiffEntry,
    DiffReport,
    TierDiff,
    diff_directories,
    diff_trees,
)
from chuk_mcp_tokens.validation.resolver import (
    FlatToken,
    PathIndex,
    ReferenceResolver,
    detect_cycles,
    find_cycle,
    flatten,
)
from chuk_mcp_tokens.validation.validator import (
    ParseFailure,
    TokenValidator,
    ValidationIssue,
    ValidationReport,
    ValidationResult,
    ValidationSeverity,
    validate_directory,
)

__all__ = [
    # Resolver
    "FlatToken",
    "PathIndex",
    "ReferenceResolver",
    "detect_cycles",
    "find_cycle",
    "flatten",
    # Validator
    "ParseFailure",
    "TokenValidator",
    "ValidationIssue",
    "ValidationReport",
    "ValidationResult",
    "ValidationSeverity",
    "validate_directory",
    # Diff
    "DiffCode",
    "DiffEntry",
    "DiffReport",
    "TierDiff",
    "diff_directories",
    "diff_trees",
]

"""
Token Validator - checks token documents for shape and reference problems.

Per leaf:
- MISSING_VALUE: no '$value' or 'value' (error)
- MISSING_TYPE: no '$type' or 'type' (warning)
- MIXED_FORMAT: DTCG and legacy keys side by side (warning)
- LEGACY_FORMAT: value only under the legacy key (info)
- UNKNOWN_TYPE: type outside the DTCG taxonomy (warning)
- EMPTY_VALUE: value is empty or null (error)
- INVALID_REF: brace-wrapped value that is not a valid reference (error,
  reported together with UNRESOLVED_REF since such a value resolves nowhere)
- UNRESOLVED_REF: reference to a path no document defines (error)

Per file:
- DUPLICATE: the same path defined twice (warning)
- CIRCULAR_REF: the reference chain from a path loops (error)
- PARSE_ERROR: the file is not a JSON object (error)

Issues are collected, never raised. References resolve against the union
of every document in the pass.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from chuk_mcp_tokens.constants import KNOWN_TYPES, SCAN_FILE
from chuk_mcp_tokens.core.reference import looks_like_reference
from chuk_mcp_tokens.validation.resolver import FlatToken, PathIndex, detect_cycles, flatten

logger = logging.getLogger(__name__)


class ValidationSeverity(str, Enum):
    """Severity level for validation issues."""

    ERROR = "error"  # Fails validation
    WARNING = "warning"  # Fails only in strict mode
    INFO = "info"  # Informational only


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: ValidationSeverity
    code: str
    message: str
    path: str = ""
    file: str | None = None

    def __str__(self) -> str:
        prefix = f"[{self.severity.value.upper()}]"
        location = f" at {self.path or '(root)'}"
        source = f" in {self.file}" if self.file else ""
        return f"{prefix} {self.code}: {self.message}{location}{source}"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "path": self.path,
            "code": self.code,
            "severity": self.severity.value,
            "message": self.message,
        }
        if self.file is not None:
            data["file"] = self.file
        return data


class ValidationReport:
    """Issues found in one token file."""

    def __init__(self, file: str) -> None:
        self.file = file
        self.issues: list[ValidationIssue] = []
        self.token_count = 0

    def add(
        self, severity: ValidationSeverity, code: str, message: str, path: str = ""
    ) -> None:
        self.issues.append(ValidationIssue(severity, code, message, path, self.file))

    def add_error(self, code: str, message: str, path: str = "") -> None:
        """Add an error issue."""
        self.add(ValidationSeverity.ERROR, code, message, path)

    def add_warning(self, code: str, message: str, path: str = "") -> None:
        """Add a warning issue."""
        self.add(ValidationSeverity.WARNING, code, message, path)

    def add_info(self, code: str, message: str, path: str = "") -> None:
        """Add an info issue."""
        self.add(ValidationSeverity.INFO, code, message, path)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    @property
    def info(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.INFO]

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "valid": self.is_valid,
            "token_count": self.token_count,
            "stats": {
                "errors": len(self.errors),
                "warnings": len(self.warnings),
                "info": len(self.info),
            },
            "issues": [i.to_dict() for i in self.issues],
        }


class ValidationResult:
    """Aggregate result over every validated file."""

    def __init__(self, reports: list[ValidationReport] | None = None) -> None:
        self.reports: list[ValidationReport] = reports or []

    @property
    def issues(self) -> list[ValidationIssue]:
        return [issue for report in self.reports for issue in report.issues]

    @property
    def errors(self) -> list[ValidationIssue]:
        """Get all error issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        """Get all warning issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    @property
    def is_valid(self) -> bool:
        """Return True if no errors anywhere (warnings/info are OK)."""
        return all(report.is_valid for report in self.reports)

    def passes(self, strict: bool = False) -> bool:
        """Strict mode additionally fails on any warning."""
        return self.is_valid and not (strict and self.warnings)

    def report(self, file: str) -> ValidationReport | None:
        return next((r for r in self.reports if r.file == file), None)

    def codes(self) -> list[str]:
        return [i.code for i in self.issues]

    def __bool__(self) -> bool:
        """Boolean conversion returns is_valid."""
        return self.is_valid

    def __str__(self) -> str:
        if not self.issues:
            return "Validation passed: no issues found"
        return "\n".join(str(issue) for issue in self.issues)

    def to_dict(self, strict: bool = False) -> dict[str, Any]:
        return {
            "valid": self.is_valid,
            "passes": self.passes(strict),
            "strict": strict,
            "reports": [r.to_dict() for r in self.reports],
        }


@dataclass
class ParseFailure:
    """Placeholder for a document that could not be parsed."""

    message: str


def check_token(path: str, token: FlatToken, index: PathIndex, report: ValidationReport) -> None:
    """Run the per-leaf checks for one token."""
    has_dtcg_value = token.has_key("$value")
    has_legacy_value = token.has_key("value")
    has_dtcg_type = token.has_key("$type")
    has_legacy_type = token.has_key("type")

    if not has_dtcg_value and not has_legacy_value:
        report.add_error("MISSING_VALUE", "Token is missing a value ($value or value)", path)

    if not has_dtcg_type and not has_legacy_type:
        report.add_warning("MISSING_TYPE", "Token is missing a type ($type or type)", path)

    if (has_dtcg_value and has_legacy_value) or (has_dtcg_type and has_legacy_type):
        report.add_warning(
            "MIXED_FORMAT",
            "Token mixes DTCG ($value/$type) and legacy (value/type) formats",
            path,
        )

    if has_legacy_value and not has_dtcg_value:
        report.add_info(
            "LEGACY_FORMAT",
            "Token uses legacy format. Consider migrating to DTCG ($value/$type)",
            path,
        )

    token_type = token.token_type
    if isinstance(token_type, str) and token_type and token_type not in KNOWN_TYPES:
        report.add_warning(
            "UNKNOWN_TYPE",
            f"Unknown token type \"{token_type}\". Valid types: {', '.join(sorted(KNOWN_TYPES))}",
            path,
        )

    value = token.value
    if value is None or value == "":
        report.add_error("EMPTY_VALUE", "Token has an empty or null value", path)

    if looks_like_reference(value):
        reference = token.reference
        if reference is None:
            report.add_error("INVALID_REF", f"Malformed reference: {value}", path)
        if reference is None or reference.path not in index:
            report.add_error("UNRESOLVED_REF", f"Unresolved reference: {value}", path)


class TokenValidator:
    """
    Validates a set of token documents as one reference universe.

    Example:
        validator = TokenValidator()
        result = validator.validate_directory(Path("dist"))
        if not result.passes(strict=True):
            print(result)
    """

    def validate_documents(self, documents: Mapping[str, Any]) -> ValidationResult:
        """
        Validate named documents (file name -> parsed JSON or ParseFailure).

        Args:
            documents: Documents in report order

        Returns:
            ValidationResult with one report per document
        """
        parsed = {
            name: doc
            for name, doc in documents.items()
            if not isinstance(doc, ParseFailure) and isinstance(doc, Mapping)
        }
        index = PathIndex.build(parsed)
        cycles = detect_cycles(index)

        result = ValidationResult()
        for name, document in documents.items():
            report = ValidationReport(name)
            result.reports.append(report)
            if isinstance(document, ParseFailure):
                report.add_error("PARSE_ERROR", document.message)
                continue
            if not isinstance(document, Mapping):
                report.add_error("PARSE_ERROR", "Token document must be a JSON object")
                continue
            self._validate_document(document, index, cycles, report)

        logger.debug(
            f"Validated {len(result.reports)} files: "
            f"{len(result.errors)} errors, {len(result.warnings)} warnings"
        )
        return result

    def _validate_document(
        self,
        document: Mapping[str, Any],
        index: PathIndex,
        cycles: dict[str, list[str]],
        report: ValidationReport,
    ) -> None:
        seen: set[str] = set()
        for path, token in flatten(document):
            if token.bare:
                continue
            report.token_count += 1
            check_token(path, token, index, report)

            if path in seen:
                report.add_warning("DUPLICATE", f"Duplicate token definition: {path}", path)
            seen.add(path)

        # Cycles are reported once, by the file that owns the starting path
        for path, chain in cycles.items():
            if index.sources.get(path) == report.file:
                report.add_error(
                    "CIRCULAR_REF", f"Circular reference detected: {' -> '.join(chain)}", path
                )

    def validate_files(self, paths: list[Path]) -> ValidationResult:
        """Read and validate token files; unreadable files become PARSE_ERROR."""
        documents: dict[str, Any] = {}
        for path in paths:
            try:
                with open(path, encoding="utf-8") as f:
                    documents[path.name] = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Could not parse {path}: {e}")
                documents[path.name] = ParseFailure(f"Failed to parse JSON: {e}")
        return self.validate_documents(documents)

    def validate_directory(self, directory: Path) -> ValidationResult:
        """
        Validate every token JSON file in a directory.

        The scanned-values document (base.json) is not a token file and is
        skipped.
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise FileNotFoundError(f"Input directory not found: {directory}")
        paths = sorted(p for p in directory.glob("*.json") if p.name != SCAN_FILE)
        return self.validate_files(paths)


def validate_directory(directory: Path | str) -> ValidationResult:
    """
    Convenience function to validate a directory of token files.

    Args:
        directory: Directory holding *.json token files

    Returns:
        ValidationResult with any issues found
    """
    return TokenValidator().validate_directory(Path(directory))

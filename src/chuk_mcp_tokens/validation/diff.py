"""
Diff Engine - compares generated tiers against reference token files.

Both sides are flattened to path -> {value, type}. For every reference
path the generated side is either missing it, disagrees on type
(type-mismatch), disagrees on value (mismatch), or matches. Generated
paths the reference does not know are extra.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from chuk_mcp_tokens.constants import REFERENCE_FILES, TIER_FILES, Tier
from chuk_mcp_tokens.layers.store import read_json
from chuk_mcp_tokens.validation.resolver import FlatToken, flatten
from chuk_mcp_tokens.validation.validator import ValidationSeverity

logger = logging.getLogger(__name__)


class DiffCode(str, Enum):
    """Classification of a per-path difference."""

    MISSING = "missing"
    EXTRA = "extra"
    MISMATCH = "mismatch"
    TYPE_MISMATCH = "type-mismatch"


DIFF_SEVERITY: dict[DiffCode, ValidationSeverity] = {
    DiffCode.MISSING: ValidationSeverity.WARNING,
    DiffCode.EXTRA: ValidationSeverity.INFO,
    DiffCode.MISMATCH: ValidationSeverity.WARNING,
    DiffCode.TYPE_MISMATCH: ValidationSeverity.ERROR,
}


@dataclass
class DiffEntry:
    """One differing path."""

    path: str
    code: DiffCode
    expected: FlatToken | None = None
    actual: FlatToken | None = None

    @property
    def severity(self) -> ValidationSeverity:
        return DIFF_SEVERITY[self.code]

    @property
    def message(self) -> str:
        if self.code is DiffCode.MISSING:
            return "Defined in reference but not generated"
        if self.code is DiffCode.EXTRA:
            return "Generated but not in reference"
        expected = self.expected.to_dict() if self.expected else {}
        actual = self.actual.to_dict() if self.actual else {}
        if self.code is DiffCode.TYPE_MISMATCH:
            return f"Type differs: expected {expected.get('type')}, got {actual.get('type')}"
        return f"Value differs: expected {expected.get('value')!r}, got {actual.get('value')!r}"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "path": self.path,
            "code": self.code.value,
            "severity": self.severity.value,
            "message": self.message,
        }
        if self.expected is not None:
            data["expected"] = self.expected.to_dict()
        if self.actual is not None:
            data["actual"] = self.actual.to_dict()
        return data


@dataclass
class TierDiff:
    """Differences for one tier."""

    tier: str
    total: int = 0
    matched: int = 0
    entries: list[DiffEntry] = field(default_factory=list)

    def _with(self, *codes: DiffCode) -> list[DiffEntry]:
        return [e for e in self.entries if e.code in codes]

    @property
    def missing(self) -> list[DiffEntry]:
        return self._with(DiffCode.MISSING)

    @property
    def extra(self) -> list[DiffEntry]:
        return self._with(DiffCode.EXTRA)

    @property
    def mismatched(self) -> list[DiffEntry]:
        return self._with(DiffCode.MISMATCH, DiffCode.TYPE_MISMATCH)

    @property
    def match_rate(self) -> float | None:
        return self.matched / self.total if self.total else None

    def stats(self) -> dict[str, int]:
        return {
            "total": self.total,
            "matched": self.matched,
            "missing": len(self.missing),
            "extra": len(self.extra),
            "mismatched": len(self.mismatched),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "tier": self.tier,
            "stats": self.stats(),
            "match_rate": self.match_rate,
            "entries": [e.to_dict() for e in self.entries],
        }


@dataclass
class DiffReport:
    """Differences across every compared tier."""

    tiers: list[TierDiff] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return all(not t.entries for t in self.tiers)

    @property
    def match_rate(self) -> float | None:
        """Matched share of all reference paths; None when nothing was compared."""
        total = sum(t.total for t in self.tiers)
        return sum(t.matched for t in self.tiers) / total if total else None

    def stats(self) -> dict[str, int]:
        totals = {"total": 0, "matched": 0, "missing": 0, "extra": 0, "mismatched": 0}
        for tier in self.tiers:
            for key, value in tier.stats().items():
                totals[key] += value
        return totals

    def to_dict(self) -> dict[str, Any]:
        return {
            "clean": self.is_clean,
            "stats": self.stats(),
            "match_rate": self.match_rate,
            "tiers": [t.to_dict() for t in self.tiers],
        }


def _canonical(value: Any) -> str:
    # Structural equality that still tells 1 from true
    return json.dumps(value, sort_keys=True, default=str)


def token_map(document: Any) -> dict[str, FlatToken]:
    """Flatten a document to path -> token; a repeated path keeps its last definition."""
    return dict(flatten(document))


def diff_trees(generated: Any, reference: Any, tier: str | Tier = "") -> TierDiff:
    """
    Compare a generated tree against a reference tree.

    Args:
        generated: Generated document (raw JSON or TokenTree)
        reference: Reference document (raw JSON or TokenTree)
        tier: Label for the report

    Returns:
        TierDiff with counts and per-path entries
    """
    label = tier.value if isinstance(tier, Tier) else tier
    generated_tokens = token_map(generated)
    reference_tokens = token_map(reference)
    result = TierDiff(tier=label, total=len(reference_tokens))

    for path, expected in reference_tokens.items():
        actual = generated_tokens.get(path)
        if actual is None:
            result.entries.append(DiffEntry(path, DiffCode.MISSING, expected=expected))
        elif expected.diff_type != actual.diff_type:
            result.entries.append(DiffEntry(path, DiffCode.TYPE_MISMATCH, expected, actual))
        elif _canonical(expected.value) != _canonical(actual.value):
            result.entries.append(DiffEntry(path, DiffCode.MISMATCH, expected, actual))
        else:
            result.matched += 1

    for path, actual in generated_tokens.items():
        if path not in reference_tokens:
            result.entries.append(DiffEntry(path, DiffCode.EXTRA, actual=actual))

    logger.debug(f"Diffed {label or 'tree'}: {result.stats()}")
    return result


def diff_directories(generated_dir: Path | str, refs_dir: Path | str) -> DiffReport:
    """
    Diff each tier artifact against its reference file.

    Pairs primitives.json / primitive.tokens.json, semantic.json /
    semantics.tokens.json and components.json / component.tokens.json.
    Pairs with either side absent are skipped.

    Raises:
        InputError: If a present file is not valid JSON
    """
    generated_dir, refs_dir = Path(generated_dir), Path(refs_dir)
    report = DiffReport()
    for tier in Tier:
        generated_path = generated_dir / TIER_FILES[tier]
        reference_path = refs_dir / REFERENCE_FILES[tier]
        if not generated_path.exists() or not reference_path.exists():
            logger.debug(f"Skipping {tier.value}: no pair for {generated_path.name}")
            continue
        report.tiers.append(
            diff_trees(read_json(generated_path), read_json(reference_path), tier)
        )
    return report

"""
Tests for the diff engine.
"""

import json
from pathlib import Path
from typing import Any

from chuk_mcp_tokens.constants import Tier
from chuk_mcp_tokens.validation import DiffCode, diff_directories, diff_trees
from chuk_mcp_tokens.validation.validator import ValidationSeverity


def token(value: Any, token_type: str = "color") -> dict[str, Any]:
    return {"$value": value, "$type": token_type}


class TestDiffTrees:
    """Tests for diff_trees."""

    def test_missing_and_extra(self) -> None:
        """Reference {a, b} against generated {a, c}."""
        diff = diff_trees({"a": 1, "c": 3}, {"a": 1, "b": 2})
        assert diff.stats() == {
            "total": 2,
            "matched": 1,
            "missing": 1,
            "extra": 1,
            "mismatched": 0,
        }
        assert [e.path for e in diff.missing] == ["b"]
        assert [e.path for e in diff.extra] == ["c"]
        assert diff.match_rate == 0.5

    def test_value_mismatch(self) -> None:
        diff = diff_trees({"a": token("#000")}, {"a": token("#fff")})
        entry = diff.entries[0]
        assert entry.code is DiffCode.MISMATCH
        assert entry.severity is ValidationSeverity.WARNING
        assert "'#fff'" in entry.message
        assert entry.to_dict()["actual"] == {"value": "#000", "type": "color"}

    def test_type_mismatch(self) -> None:
        """Differing types are reported even when values agree."""
        diff = diff_trees({"x": token("4px", "dimension")}, {"x": token("4px", "number")})
        assert [e.code for e in diff.entries] == [DiffCode.TYPE_MISMATCH]
        assert diff.entries[0].severity is ValidationSeverity.ERROR
        assert len(diff.mismatched) == 1

    def test_shapes_compare_equal(self) -> None:
        """A legacy leaf matches the same DTCG leaf."""
        diff = diff_trees(
            {"a": {"value": "4px", "type": "dimension"}}, {"a": token("4px", "dimension")}
        )
        assert diff.matched == 1
        assert diff.entries == []

    def test_structured_values(self) -> None:
        """Structured values compare by content, not key order."""
        generated = {"s": token({"x": 1, "y": 2}, "shadow")}
        reference = {"s": token({"y": 2, "x": 1}, "shadow")}
        assert diff_trees(generated, reference).matched == 1

    def test_number_is_not_bool(self) -> None:
        diff = diff_trees({"n": token(1, "number")}, {"n": token(True, "number")})
        assert [e.code for e in diff.entries] == [DiffCode.MISMATCH]

    def test_tier_label(self) -> None:
        assert diff_trees({}, {}, Tier.SEMANTIC).tier == "semantic"
        assert diff_trees({}, {}).match_rate is None


class TestDiffDirectories:
    """Tests for diff_directories."""

    def test_pairs_files(self, temp_dir: Path) -> None:
        generated = temp_dir / "dist"
        refs = temp_dir / "refs"
        generated.mkdir()
        refs.mkdir()
        (generated / "primitives.json").write_text(json.dumps({"a": token("#fff")}))
        (refs / "primitive.tokens.json").write_text(json.dumps({"a": token("#fff")}))
        (generated / "semantic.json").write_text(json.dumps({"b": token("{a}")}))
        (refs / "semantics.tokens.json").write_text(json.dumps({"c": token("{a}")}))
        # No reference for components: skipped
        (generated / "components.json").write_text(json.dumps({"d": token("{b}")}))

        report = diff_directories(generated, refs)
        assert [t.tier for t in report.tiers] == ["primitive", "semantic"]
        assert report.tiers[0].entries == []
        assert report.stats() == {
            "total": 2,
            "matched": 1,
            "missing": 1,
            "extra": 1,
            "mismatched": 0,
        }
        assert not report.is_clean
        assert report.to_dict()["clean"] is False
        assert report.match_rate == 0.5
        assert report.to_dict()["match_rate"] == 0.5
        assert report.to_dict()["tiers"][0]["match_rate"] == 1.0

    def test_nothing_to_compare(self, temp_dir: Path) -> None:
        report = diff_directories(temp_dir, temp_dir)
        assert report.tiers == []
        assert report.is_clean
        assert report.match_rate is None

"""
Tests for encodings, the artifact store and the layer orchestrator.
"""

import json
from pathlib import Path

import pytest

from chuk_mcp_tokens.config import TokenizeConfig
from chuk_mcp_tokens.constants import Tier
from chuk_mcp_tokens.errors import InputError, MissingDependencyError, OrchestrationError
from chuk_mcp_tokens.layers import (
    ArtifactStore,
    LayerOrchestrator,
    artifact_name,
    dependency_order,
    encode,
    parse_tier,
    to_css,
    to_json,
    to_scss,
)
from chuk_mcp_tokens.models import LeafShape, ScannedValues, TokenLeaf, normalize_tree


def semantic_tree() -> dict:
    return normalize_tree(
        {
            "text": {
                "primary": {"$value": "{color.neutral.950}", "$type": "color"},
                "size": {"$value": "16px", "$type": "dimension"},
            }
        }
    )


class TestEncoding:
    """Tests for the JSON, SCSS and CSS encodings."""

    def test_scss_semantic(self) -> None:
        """Semantic references point into the primitives module."""
        assert to_scss(semantic_tree(), Tier.SEMANTIC) == (
            "// Auto-generated semantic tokens\n"
            '@use "primitives" as p;\n'
            "\n"
            "$text-primary: p.$color-neutral-950;\n"
            "$text-size: 16px;\n"
        )

    def test_scss_primitive(self) -> None:
        tree = normalize_tree({"color": {"blue": {"100": {"$value": "#3b82f6"}}}})
        assert to_scss(tree, Tier.PRIMITIVE) == (
            "// Auto-generated primitives\n\n$color-blue-100: #3b82f6;\n"
        )

    def test_scss_component(self) -> None:
        tree = normalize_tree({"button": {"text": {"$value": "{text.inverse}"}}})
        assert to_scss(tree, Tier.COMPONENT).endswith("$button-text: s.$text-inverse;\n")

    def test_css(self) -> None:
        assert to_css(semantic_tree(), Tier.SEMANTIC) == (
            "/* Auto-generated semantic tokens */\n"
            ":root {\n"
            "  --text-primary: var(--color-neutral-950);\n"
            "  --text-size: 16px;\n"
            "}\n"
        )

    def test_numeric_order(self) -> None:
        """Integer keys are emitted in numeric order."""
        tree = normalize_tree({"spacing": {"10": {"value": "40px"}, "2": {"value": "8px"}}})
        css = to_css(tree, Tier.PRIMITIVE)
        assert css.index("--spacing-2:") < css.index("--spacing-10:")

    def test_json_shapes(self) -> None:
        tree = semantic_tree()
        assert json.loads(to_json(tree))["text"]["primary"] == {
            "$value": "{color.neutral.950}",
            "$type": "color",
        }
        legacy = json.loads(to_json(tree, LeafShape.LEGACY))
        assert legacy["text"]["size"] == {"value": "16px", "type": "dimension"}

    def test_artifact_names(self) -> None:
        assert artifact_name(Tier.PRIMITIVE, "json") == "primitives.json"
        assert artifact_name(Tier.SEMANTIC, "scss") == "_semantic.scss"
        assert artifact_name(Tier.COMPONENT, "css") == "components.css"

    def test_unknown_format(self) -> None:
        with pytest.raises(ValueError):
            encode(semantic_tree(), Tier.SEMANTIC, "yaml")  # type: ignore[arg-type]


class TestArtifactStore:
    """Tests for ArtifactStore."""

    def test_scan_round_trip(self, temp_dir: Path) -> None:
        store = ArtifactStore(temp_dir)
        scan = ScannedValues(colors=["#ffffff"], z_indices=["10"])
        store.write_scan(scan)
        assert store.read_scan() == scan

    def test_missing_scan(self, temp_dir: Path) -> None:
        with pytest.raises(InputError, match="Scanned values not found"):
            ArtifactStore(temp_dir).read_scan()

    def test_malformed_scan(self, temp_dir: Path) -> None:
        (temp_dir / "base.json").write_text("{not json")
        with pytest.raises(InputError, match="Invalid JSON"):
            ArtifactStore(temp_dir).read_scan()

    def test_non_object_scan(self, temp_dir: Path) -> None:
        (temp_dir / "base.json").write_text("[]")
        with pytest.raises(InputError):
            ArtifactStore(temp_dir).read_scan()

    def test_write_and_read_tier(self, temp_dir: Path) -> None:
        store = ArtifactStore(temp_dir)
        paths = store.write(Tier.SEMANTIC, semantic_tree(), ["json", "scss", "css"])
        assert [p.name for p in paths] == ["semantic.json", "_semantic.scss", "semantic.css"]
        assert store.read(Tier.SEMANTIC) == semantic_tree()

    def test_read_legacy_artifact(self, temp_dir: Path) -> None:
        """Legacy leaves normalize to the same tree."""
        store = ArtifactStore(temp_dir)
        store.write(Tier.SEMANTIC, semantic_tree(), shape=LeafShape.LEGACY)
        assert store.read(Tier.SEMANTIC) == semantic_tree()

    def test_missing_artifact(self, temp_dir: Path) -> None:
        with pytest.raises(InputError, match="No primitive artifact"):
            ArtifactStore(temp_dir).read(Tier.PRIMITIVE)

    def test_list_artifacts(self, temp_dir: Path) -> None:
        store = ArtifactStore(temp_dir)
        store.write(Tier.PRIMITIVE, {})
        assert store.list_artifacts() == {
            "primitive": True,
            "semantic": False,
            "component": False,
        }


class TestTierParsing:
    """Tests for tier names and dependency order."""

    def test_aliases(self) -> None:
        assert parse_tier("primitives") is Tier.PRIMITIVE
        assert parse_tier("Semantic") is Tier.SEMANTIC
        assert parse_tier("components") is Tier.COMPONENT
        assert parse_tier(Tier.COMPONENT) is Tier.COMPONENT

    def test_unknown(self) -> None:
        with pytest.raises(OrchestrationError, match="Unknown tier"):
            parse_tier("tokens")

    def test_dependency_order(self) -> None:
        assert dependency_order([Tier.COMPONENT]) == [
            Tier.PRIMITIVE,
            Tier.SEMANTIC,
            Tier.COMPONENT,
        ]
        assert dependency_order([Tier.SEMANTIC, Tier.PRIMITIVE]) == [
            Tier.PRIMITIVE,
            Tier.SEMANTIC,
        ]


class TestLayerOrchestrator:
    """Tests for LayerOrchestrator."""

    def test_component_pulls_dependencies(self, scanned_dir: Path) -> None:
        """Requesting only components generates all three tiers in order."""
        orchestrator = LayerOrchestrator(TokenizeConfig(out_dir=scanned_dir))
        result = orchestrator.run(["component"])

        assert result.generated == [Tier.PRIMITIVE, Tier.SEMANTIC, Tier.COMPONENT]
        for name in [
            "primitives.json",
            "_primitives.scss",
            "primitives.css",
            "semantic.json",
            "_semantic.scss",
            "semantic.css",
            "components.json",
            "_components.scss",
            "components.css",
        ]:
            assert (scanned_dir / name).exists(), name

    def test_existing_dependencies_skipped(self, scanned_dir: Path) -> None:
        orchestrator = LayerOrchestrator(TokenizeConfig(out_dir=scanned_dir))
        orchestrator.run(["component"])

        result = orchestrator.run(["component"])
        assert result.generated == [Tier.COMPONENT]
        assert result.skipped == [Tier.PRIMITIVE, Tier.SEMANTIC]

    def test_force(self, scanned_dir: Path) -> None:
        orchestrator = LayerOrchestrator(TokenizeConfig(out_dir=scanned_dir))
        orchestrator.run(["component"])
        result = orchestrator.run(["component"], force=True)
        assert result.generated == [Tier.PRIMITIVE, Tier.SEMANTIC, Tier.COMPONENT]

    def test_dry_run(self, scanned_dir: Path) -> None:
        """A dry run plans but writes nothing."""
        orchestrator = LayerOrchestrator(TokenizeConfig(out_dir=scanned_dir))
        result = orchestrator.run(["semantic"], dry_run=True)
        assert result.plan.to_run == [Tier.PRIMITIVE, Tier.SEMANTIC]
        assert result.generated == []
        assert not (scanned_dir / "primitives.json").exists()

    def test_json_only_config(self, scanned_dir: Path) -> None:
        config = TokenizeConfig(out_dir=scanned_dir, output_formats=["json"])
        LayerOrchestrator(config).run_all()
        assert (scanned_dir / "components.json").exists()
        assert not (scanned_dir / "components.css").exists()

    def test_legacy_leaf_format(self, scanned_dir: Path) -> None:
        """Legacy artifacts still feed the next tier."""
        config = TokenizeConfig(out_dir=scanned_dir, leaf_format="legacy")
        LayerOrchestrator(config).run_all()
        data = json.loads((scanned_dir / "semantic.json").read_text())
        assert data["text"]["inverse"] == {"value": "{color.neutral.100}", "type": "color"}

    def test_missing_scan(self, temp_dir: Path) -> None:
        orchestrator = LayerOrchestrator(TokenizeConfig(out_dir=temp_dir))
        with pytest.raises(InputError):
            orchestrator.run(["primitive"])

    def test_missing_dependency_aborts(self, scanned_dir: Path) -> None:
        """A dependency that never reached disk stops the run before its dependent."""

        class DroppingStore(ArtifactStore):
            def write(self, tier, tree, formats=("json",), shape=LeafShape.DTCG):
                return []

        config = TokenizeConfig(out_dir=scanned_dir)
        orchestrator = LayerOrchestrator(config, DroppingStore(scanned_dir))
        with pytest.raises(MissingDependencyError) as exc_info:
            orchestrator.run(["semantic"])
        assert exc_info.value.tier == "semantic"
        assert exc_info.value.dependency == "primitive"

    def test_semantic_built_from_persisted_primitives(self, scanned_dir: Path) -> None:
        """The semantic tier reads the primitive artifact, not in-memory state."""
        orchestrator = LayerOrchestrator(TokenizeConfig(out_dir=scanned_dir))
        orchestrator.run(["primitive"])
        store = ArtifactStore(scanned_dir)
        store.write(
            Tier.PRIMITIVE,
            {"color": {"teal": {"100": TokenLeaf(value="#ccfbf1", token_type="color")}}},
        )
        orchestrator.run(["semantic"])
        semantic = store.read(Tier.SEMANTIC)
        assert semantic["interactive"]["primary"]["default"].value == "{color.teal.100}"

    def test_deterministic(self, scanned_dir: Path) -> None:
        """Regenerating from the same scan is byte-identical."""
        orchestrator = LayerOrchestrator(TokenizeConfig(out_dir=scanned_dir))
        orchestrator.run_all(force=True)
        first = {p.name: p.read_bytes() for p in scanned_dir.iterdir()}
        orchestrator.run_all(force=True)
        second = {p.name: p.read_bytes() for p in scanned_dir.iterdir()}
        assert first == second

"""
Tests for token models, scanned values and configuration.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from chuk_mcp_tokens.config import TokenizeConfig, load_config
from chuk_mcp_tokens.constants import TokenType
from chuk_mcp_tokens.models import (
    LeafShape,
    ScannedValues,
    TokenLeaf,
    TreeBuilder,
    convert_document,
    converted_path,
    count_tokens,
    get_node,
    is_leaf_node,
    iter_leaves,
    normalize_leaf,
    normalize_reference,
    normalize_tree,
    ordered_keys,
    sorted_scale_keys,
    tree_to_dict,
)


class TestTokenLeaf:
    """Tests for TokenLeaf and leaf normalization."""

    def test_dtcg_shape(self) -> None:
        leaf = normalize_leaf({"$value": "#fff", "$type": "color"})
        assert leaf.value == "#fff"
        assert leaf.token_type == "color"

    def test_legacy_shape(self) -> None:
        leaf = normalize_leaf({"value": "4px", "type": "dimension", "description": "Gap"})
        assert leaf.value == "4px"
        assert leaf.token_type == "dimension"
        assert leaf.description == "Gap"

    def test_dtcg_wins(self) -> None:
        """When both shapes are present the DTCG keys take precedence."""
        leaf = normalize_leaf({"$value": "a", "value": "b", "type": "number"})
        assert leaf.value == "a"
        assert leaf.token_type == "number"

    def test_reference(self) -> None:
        leaf = TokenLeaf(value="{color.blue.100}", token_type="color")
        assert leaf.is_reference
        assert leaf.reference.path == "color.blue.100"
        assert not TokenLeaf(value="#fff").is_reference

    def test_to_dict_shapes(self) -> None:
        leaf = TokenLeaf(value="4px", token_type="dimension")
        assert leaf.to_dict() == {"$value": "4px", "$type": "dimension"}
        assert leaf.to_dict(LeafShape.LEGACY) == {"value": "4px", "type": "dimension"}

    def test_frozen(self) -> None:
        leaf = TokenLeaf(value="4px")
        with pytest.raises(ValidationError):
            leaf.value = "8px"

    def test_is_leaf_node(self) -> None:
        assert is_leaf_node({"$value": 1})
        assert is_leaf_node({"value": 1})
        assert not is_leaf_node({"$type": "color"})
        assert not is_leaf_node("plain")


class TestTrees:
    """Tests for tree normalization and iteration."""

    def test_ordered_keys(self) -> None:
        """Integer keys first in numeric order, then the rest in insertion order."""
        assert ordered_keys({"b": 1, "10": 2, "2": 3, "a": 4}) == ["2", "10", "b", "a"]

    def test_ordered_keys_leading_zero(self) -> None:
        """'01' is not an integer index."""
        assert ordered_keys({"01": 1, "1": 2}) == ["1", "01"]

    def test_normalize_tree(self) -> None:
        """Metadata keys are dropped and bare scalars become untyped leaves."""
        tree = normalize_tree(
            {
                "$schema": "https://example.com/schema.json",
                "color": {"blue": {"100": {"$value": "#dbeafe", "$type": "color"}}},
                "opacity": 0.5,
            }
        )
        assert list(tree) == ["color", "opacity"]
        assert tree["opacity"] == TokenLeaf(value=0.5)
        assert get_node(tree, "color.blue.100").value == "#dbeafe"

    def test_iter_leaves(self) -> None:
        tree = normalize_tree(
            {"spacing": {"10": {"value": "40px"}, "2": {"value": "8px"}}, "x": {"$value": 1}}
        )
        assert [path for path, _ in iter_leaves(tree)] == ["spacing.2", "spacing.10", "x"]

    def test_tree_to_dict_round_trip(self) -> None:
        raw = {"a": {"b": {"$value": "1px", "$type": "dimension"}}}
        assert tree_to_dict(normalize_tree(raw)) == raw

    def test_get_node_missing(self) -> None:
        assert get_node({}, "a.b") is None

    def test_sorted_scale_keys(self) -> None:
        assert sorted_scale_keys({"950": 1, "100": 2, "label": 3}) == [100, 950]
        assert sorted_scale_keys(None) == []


class TestTreeBuilder:
    """Tests for TreeBuilder."""

    def test_set_and_build(self) -> None:
        builder = TreeBuilder()
        builder.set("color.blue.100", "#dbeafe", TokenType.COLOR)
        tree = builder.build()
        assert tree["color"]["blue"]["100"] == TokenLeaf(value="#dbeafe", token_type="color")

    def test_set_scale(self) -> None:
        tree = TreeBuilder().set_scale("spacing", {1: "4px", 2: "8px"}, "dimension").build()
        assert list(tree["spacing"]) == ["1", "2"]

    def test_empty_scale_leaves_group(self) -> None:
        tree = TreeBuilder().set_scale("shadow", {}, TokenType.SHADOW).build()
        assert tree == {"shadow": {}}

    def test_cannot_nest_under_leaf(self) -> None:
        builder = TreeBuilder().set("a", "1px", TokenType.DIMENSION)
        with pytest.raises(ValueError):
            builder.set("a.b", "2px", TokenType.DIMENSION)

    def test_cannot_replace_group(self) -> None:
        builder = TreeBuilder().set("a.b", "1px", TokenType.DIMENSION)
        with pytest.raises(ValueError):
            builder.set("a", "2px", TokenType.DIMENSION)


class TestScannedValues:
    """Tests for the scanned-values document."""

    def test_camel_case_aliases(self) -> None:
        scan = ScannedValues.from_json_dict({"fontFamilies": ["Inter"], "zIndices": ["10"]})
        assert scan.font_families == ["Inter"]
        assert scan.z_indices == ["10"]

    def test_coercion(self) -> None:
        """Numbers become strings and null becomes an empty list."""
        scan = ScannedValues.from_json_dict({"zIndices": [1, 10], "shadows": None})
        assert scan.z_indices == ["1", "10"]
        assert scan.shadows == []

    def test_variable_values_coerced(self) -> None:
        """Numeric variable values become strings; null becomes an empty map."""
        scan = ScannedValues.from_json_dict({"variables": {"$gap": 8, "$ratio": 1.5}})
        assert scan.variables == {"$gap": "8", "$ratio": "1.5"}
        assert ScannedValues.from_json_dict({"variables": None}).variables == {}

    def test_round_trip(self) -> None:
        scan = ScannedValues(colors=["#fff"], font_sizes=["16px"])
        data = scan.to_json_dict()
        assert data["fontSizes"] == ["16px"]
        assert ScannedValues.from_json_dict(data) == scan


class TestConfig:
    """Tests for TokenizeConfig and load_config."""

    def test_defaults(self) -> None:
        config = TokenizeConfig()
        assert config.out_dir == Path("./dist")
        assert config.spacing_base == 4
        assert config.output_formats == ["json", "scss", "css"]
        assert config.leaf_shape is LeafShape.DTCG
        assert config.strict is False

    def test_json_always_written(self) -> None:
        config = TokenizeConfig(output_formats=["css", "css"])
        assert config.output_formats == ["json", "css"]

    def test_invalid_spacing_base(self) -> None:
        with pytest.raises(ValidationError):
            TokenizeConfig(spacing_base=0)

    def test_load_missing_file(self, temp_dir: Path) -> None:
        """A missing file yields defaults."""
        assert load_config(temp_dir / "nope.yaml") == TokenizeConfig()

    def test_load_camel_case_yaml(self, temp_dir: Path) -> None:
        path = temp_dir / "tokenize.config.yaml"
        path.write_text(
            "outDir: build/tokens\n"
            "refsDir: refs\n"
            "spacingBase: 8\n"
            "outputFormats: [scss]\n"
            "leafFormat: legacy\n"
            "strict: true\n"
            "scanCommand: make scan\n"
        )
        config = load_config(path)
        assert config.out_dir == Path("build/tokens")
        assert config.refs_dir == Path("refs")
        assert config.spacing_base == 8
        assert config.output_formats == ["json", "scss"]
        assert config.leaf_shape is LeafShape.LEGACY
        assert config.strict is True
        assert config.scan_command == "make scan"

    def test_load_empty_yaml(self, temp_dir: Path) -> None:
        path = temp_dir / "empty.yaml"
        path.write_text("")
        assert load_config(path) == TokenizeConfig()


class TestConvertDocument:
    """Tests for DTCG <-> legacy document conversion."""

    LEGACY = {
        "$schema": "https://example.com/tokens.schema.json",
        "color": {
            "$description": "Brand palette",
            "brand": {
                "value": "#3b82f6",
                "type": "color",
                "description": "Primary brand",
                "$extensions": {"com.figma": {"id": "1:2"}},
            },
            "link": {"value": "{color.brand}", "type": "color"},
        },
        "ratios": [1, 2],
    }

    def test_to_dtcg(self) -> None:
        converted = convert_document(self.LEGACY, LeafShape.DTCG)
        assert converted["color"]["brand"] == {
            "$value": "#3b82f6",
            "$type": "color",
            "$description": "Primary brand",
            "$extensions": {"com.figma": {"id": "1:2"}},
        }
        assert converted["color"]["link"] == {"$value": "{color.brand}", "$type": "color"}

    def test_metadata_and_scalars_kept(self) -> None:
        """Group metadata, top-level keys and non-token values pass through."""
        converted = convert_document(self.LEGACY, "dtcg")
        assert list(converted) == ["$schema", "color", "ratios"]
        assert converted["$schema"] == self.LEGACY["$schema"]
        assert converted["color"]["$description"] == "Brand palette"
        assert converted["ratios"] == [1, 2]

    def test_round_trip_to_legacy(self) -> None:
        """DTCG back to legacy restores the original document."""
        dtcg = convert_document(self.LEGACY, LeafShape.DTCG)
        assert convert_document(dtcg, LeafShape.LEGACY) == self.LEGACY

    def test_dtcg_keys_win(self) -> None:
        mixed = {"a": {"$value": "1px", "value": "2px", "type": "dimension"}}
        assert convert_document(mixed, LeafShape.LEGACY) == {
            "a": {"value": "1px", "type": "dimension"}
        }

    def test_missing_type_and_empty_description_omitted(self) -> None:
        converted = convert_document({"a": {"value": "4px", "description": ""}}, "dtcg")
        assert converted == {"a": {"$value": "4px"}}

    def test_input_not_modified(self) -> None:
        document = {"a": {"value": "$b.c", "type": "color"}}
        convert_document(document, LeafShape.DTCG, normalize_refs=True)
        assert document == {"a": {"value": "$b.c", "type": "color"}}

    def test_normalize_refs(self) -> None:
        document = {
            "a": {"value": "$color.brand", "type": "color"},
            "b": {"value": "var(--space-inline-md)", "type": "dimension"},
            "c": {"value": "{color.brand}", "type": "color"},
        }
        converted = convert_document(document, LeafShape.DTCG, normalize_refs=True)
        assert [converted[k]["$value"] for k in "abc"] == [
            "{color.brand}",
            "{space.inline.md}",
            "{color.brand}",
        ]
        assert convert_document(document, LeafShape.DTCG)["a"]["$value"] == "$color.brand"

    def test_invalid_shape(self) -> None:
        with pytest.raises(ValueError):
            convert_document({}, "yaml")

    def test_count_tokens(self) -> None:
        assert count_tokens(self.LEGACY) == 2
        assert count_tokens({"a": {"b": {"$value": 1}}, "c": 3}) == 1
        assert count_tokens([]) == 0

    def test_converted_path(self) -> None:
        assert converted_path(Path("t/tokens.json"), "dtcg") == Path("t/tokens.dtcg.json")
        assert converted_path(Path("tokens.json"), LeafShape.LEGACY) == Path("tokens.legacy.json")


class TestNormalizeReference:
    """Tests for reference-syntax normalization."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("{color.primary}", "{color.primary}"),
            ("$color.primary", "{color.primary}"),
            ("var(--color-primary)", "{color.primary}"),
            ("#3b82f6", "#3b82f6"),
            ("$", "$"),
            ("$value", "$value"),
            ("1px solid var(--border)", "1px solid var(--border)"),
        ],
    )
    def test_spellings(self, value: str, expected: str) -> None:
        assert normalize_reference(value) == expected

    def test_non_strings_unchanged(self) -> None:
        assert normalize_reference(4) == 4
        assert normalize_reference(None) is None

"""
Scanned values - the raw style values extracted from stylesheets.

This document is produced by an external scan stage (base.json) and is
treated as immutable input to the primitive builder.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class ScannedValues(BaseModel):
    """
    Raw values grouped by kind.

    The scan stage writes sets as sorted JSON arrays; order is preserved
    here so generation stays deterministic.
    """

    colors: list[str] = Field(default_factory=list, description="Color literals")
    spacing: list[str] = Field(default_factory=list, description="Length values")
    font_families: list[str] = Field(default_factory=list, alias="fontFamilies")
    font_sizes: list[str] = Field(default_factory=list, alias="fontSizes")
    font_weights: list[str] = Field(default_factory=list, alias="fontWeights")
    line_heights: list[str] = Field(default_factory=list, alias="lineHeights")
    letter_spacings: list[str] = Field(default_factory=list, alias="letterSpacings")
    border_radii: list[str] = Field(default_factory=list, alias="borderRadii")
    border_widths: list[str] = Field(default_factory=list, alias="borderWidths")
    shadows: list[str] = Field(default_factory=list, description="Shadow declarations")
    z_indices: list[str] = Field(default_factory=list, alias="zIndices")
    variables: dict[str, str] = Field(default_factory=dict, description="Declared variables")
    sources: list[str] = Field(default_factory=list, description="Scanned file paths")

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator(
        "colors",
        "spacing",
        "font_families",
        "font_sizes",
        "font_weights",
        "line_heights",
        "letter_spacings",
        "border_radii",
        "border_widths",
        "shadows",
        "z_indices",
        mode="before",
    )
    @classmethod
    def coerce_values(cls, v: Any) -> Any:
        """Accept sets and numbers from hand-written documents."""
        if v is None:
            return []
        if isinstance(v, set):
            v = sorted(v, key=str)
        if isinstance(v, (list, tuple)):
            return [str(item) for item in v]
        return v

    @field_validator("variables", mode="before")
    @classmethod
    def coerce_variables(cls, v: Any) -> Any:
        """Stringify numeric variable values, e.g. '$gap: 8' -> '8'."""
        if v is None:
            return {}
        if isinstance(v, dict):
            return {str(name): str(value) for name, value in v.items()}
        return v

    @classmethod
    def from_json_dict(cls, data: dict[str, Any]) -> ScannedValues:
        """Create from the scan stage's camelCase JSON document."""
        return cls.model_validate(data)

    def to_json_dict(self) -> dict[str, Any]:
        """Convert to the camelCase JSON document."""
        return self.model_dump(by_alias=True)

"""
Configuration - generation settings loaded from tokenize.config.yaml.

Keys may be written in snake_case or in the camelCase used by older
config files (outDir, spacingBase, outputFormats, ...).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from chuk_mcp_tokens.constants import LeafFormat, OutputFormat
from chuk_mcp_tokens.models.token import LeafShape

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "tokenize.config.yaml"


class TokenizeConfig(BaseModel):
    """Settings for token generation, validation, and diffing."""

    out_dir: Path = Field(Path("./dist"), alias="outDir", description="Artifact directory")
    refs_dir: Path | None = Field(None, alias="refsDir", description="Reference token files")
    spacing_base: float = Field(4, gt=0, alias="spacingBase", description="Spacing unit in px")
    output_formats: list[OutputFormat] = Field(
        default_factory=lambda: ["json", "scss", "css"],
        alias="outputFormats",
        description="Encodings written per tier",
    )
    leaf_format: LeafFormat = Field("dtcg", alias="leafFormat", description="Leaf shape on write")
    strict: bool = Field(False, description="Treat validation warnings as failures")
    watch_debounce_ms: int = Field(300, ge=0, alias="watchDebounceMs")
    scan_command: str | None = Field(
        None, alias="scanCommand", description="External scan run before each watch rebuild"
    )

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("output_formats")
    @classmethod
    def ensure_json(cls, v: list[str]) -> list[str]:
        """JSON is always written; the next tier reads it back."""
        formats = list(dict.fromkeys(v))
        if "json" not in formats:
            formats.insert(0, "json")
        return formats

    @property
    def leaf_shape(self) -> LeafShape:
        return LeafShape(self.leaf_format)

    @classmethod
    def from_yaml_dict(cls, data: dict[str, Any] | None) -> TokenizeConfig:
        """Create a config from a YAML-parsed dict (unknown keys are ignored)."""
        return cls.model_validate(data or {})


def load_config(path: Path | str | None = None) -> TokenizeConfig:
    """
    Load configuration from a YAML file.

    Args:
        path: Config file path (default: ./tokenize.config.yaml)

    Returns:
        The loaded config, or defaults when the file does not exist
    """
    config_path = Path(path) if path else Path(DEFAULT_CONFIG_FILE)
    if not config_path.exists():
        logger.debug(f"No config at {config_path}, using defaults")
        return TokenizeConfig()

    with open(config_path) as f:
        data = yaml.safe_load(f)

    logger.debug(f"Loaded config from {config_path}")
    return TokenizeConfig.from_yaml_dict(data)

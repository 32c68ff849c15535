"""
Artifact store - tier artifacts and the scanned-values document on disk.

Layout of the output directory:

    base.json                              scanned values (input)
    primitives.json  _primitives.scss  primitives.css
    semantic.json    _semantic.scss    semantic.css
    components.json  _components.scss  components.css

The JSON artifact of each tier is authoritative; the next tier reads it
back through read().
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from chuk_mcp_tokens.constants import SCAN_FILE, ErrorMessages, OutputFormat, Tier
from chuk_mcp_tokens.errors import InputError
from chuk_mcp_tokens.layers.encoding import artifact_name, encode
from chuk_mcp_tokens.models.scan import ScannedValues
from chuk_mcp_tokens.models.token import LeafShape, TokenTree, normalize_tree

logger = logging.getLogger(__name__)


def read_json(path: Path) -> Any:
    """Read a JSON document, raising InputError if it cannot be parsed."""
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise InputError(f"Invalid JSON in {path}: {e}") from e


class ArtifactStore:
    """
    Reads and writes token artifacts in one output directory.

    Writes replace whole files; nothing is patched in place.
    """

    def __init__(self, out_dir: Path):
        """
        Initialize the store.

        Args:
            out_dir: Directory holding base.json and the tier artifacts
        """
        self.out_dir = Path(out_dir)

    @property
    def scan_path(self) -> Path:
        return self.out_dir / SCAN_FILE

    def path(self, tier: Tier, output_format: OutputFormat = "json") -> Path:
        """Path of a tier artifact in the given encoding."""
        return self.out_dir / artifact_name(tier, output_format)

    def exists(self, tier: Tier) -> bool:
        """Check whether a tier's JSON artifact exists."""
        return self.path(tier).exists()

    def read_scan(self) -> ScannedValues:
        """
        Load the scanned-values document.

        Raises:
            InputError: If the document is missing or malformed
        """
        if not self.scan_path.exists():
            raise InputError(ErrorMessages.NO_SCAN.format(path=self.scan_path))
        data = read_json(self.scan_path)
        if not isinstance(data, dict):
            raise InputError(f"Scanned values in {self.scan_path} must be an object")
        try:
            return ScannedValues.from_json_dict(data)
        except ValidationError as e:
            raise InputError(f"Invalid scanned values in {self.scan_path}: {e}") from e

    def write_scan(self, scan: ScannedValues) -> Path:
        """Persist a scanned-values document."""
        self.out_dir.mkdir(parents=True, exist_ok=True)
        with open(self.scan_path, "w", encoding="utf-8") as f:
            json.dump(scan.to_json_dict(), f, indent=2)
        return self.scan_path

    def read(self, tier: Tier) -> TokenTree:
        """
        Load a tier artifact as a normalized tree.

        Raises:
            InputError: If the artifact is missing or malformed
        """
        path = self.path(tier)
        if not path.exists():
            raise InputError(ErrorMessages.ARTIFACT_NOT_FOUND.format(tier=tier.value))
        data = read_json(path)
        if not isinstance(data, dict):
            raise InputError(f"Token artifact {path} must be an object")
        return normalize_tree(data)

    def write(
        self,
        tier: Tier,
        tree: TokenTree,
        formats: Sequence[OutputFormat] = ("json",),
        shape: LeafShape = LeafShape.DTCG,
    ) -> list[Path]:
        """
        Write a tier in each requested encoding.

        Args:
            tier: Tier being written
            tree: The tier's token tree
            formats: Encodings to write
            shape: Leaf shape for the JSON encoding

        Returns:
            Paths written, in format order
        """
        self.out_dir.mkdir(parents=True, exist_ok=True)
        written = []
        for output_format in formats:
            path = self.path(tier, output_format)
            path.write_text(encode(tree, tier, output_format, shape), encoding="utf-8")
            written.append(path)
        logger.debug(f"Wrote {tier.value}: {', '.join(p.name for p in written)}")
        return written

    def list_artifacts(self) -> dict[str, bool]:
        """Existence of each tier's JSON artifact, keyed by tier name."""
        return {tier.value: self.exists(tier) for tier in Tier}

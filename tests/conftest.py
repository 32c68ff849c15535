"""
Pytest configuration and shared fixtures.
"""

import json
import tempfile
from pathlib import Path
from typing import Any

import pytest

from chuk_mcp_tokens.models import ScannedValues


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def basic_scan() -> dict[str, Any]:
    """Five colors: one each of blue, green, red, and two neutrals."""
    return {"colors": ["#3b82f6", "#10b981", "#ef4444", "#ffffff", "#000000"]}


@pytest.fixture
def full_scan() -> dict[str, Any]:
    """A scan rich enough that every semantic and component reference resolves."""
    return {
        "colors": [
            "#3b82f6",
            "#93c5fd",
            "#10b981",
            "#ef4444",
            "#facc15",
            "#ffffff",
            "#f5f5f5",
            "#737373",
            "#171717",
            "#000000",
        ],
        "spacing": ["4px", "8px", "16px", "24px", "32px", "auto"],
        "fontFamilies": ["Inter, sans-serif", "Georgia, serif"],
        "fontSizes": ["12px", "14px", "1rem", "20px", "2rem"],
        "fontWeights": ["400", "700", "bold"],
        "lineHeights": ["1.25", "1.375", "1.5"],
        "letterSpacings": ["-0.02em", "0"],
        "borderRadii": ["0px", "2px", "4px", "8px", "16px", "9999px"],
        "borderWidths": ["1px", "2px"],
        "shadows": [
            "0 1px 2px rgba(0, 0, 0, 0.05)",
            "0 4px 6px rgba(0, 0, 0, 0.1)",
            "0 10px 15px rgba(0, 0, 0, 0.1)",
        ],
        "zIndices": ["0", "10", "20", "30", "40"],
        "variables": {"$brand": "#3b82f6"},
        "sources": ["styles/main.scss"],
    }


@pytest.fixture
def full_scan_values(full_scan: dict[str, Any]) -> ScannedValues:
    return ScannedValues.from_json_dict(full_scan)


@pytest.fixture
def scanned_dir(temp_dir: Path, full_scan: dict[str, Any]) -> Path:
    """Output directory holding a base.json from the full scan."""
    (temp_dir / "base.json").write_text(json.dumps(full_scan))
    return temp_dir

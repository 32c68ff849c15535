"""
Tier layering - persistence, encodings, orchestration, and watch mode.
"""

from chuk_mcp_tokens.layers.encoding import artifact_name, encode, to_css, to_json, to_scss
from chuk_mcp_tokens.layers.orchestrator import (
    GenerationPlan,
    LayerOrchestrator,
    RunResult,
    dependency_order,
    parse_tier,
)
from chuk_mcp_tokens.layers.store import ArtifactStore
from chuk_mcp_tokens.layers.watch import (
    ChangePoller,
    RebuildScheduler,
    is_watched,
    rebuild_pipeline,
    scan_runner,
)

__all__ = [
    "ArtifactStore",
    "ChangePoller",
    "GenerationPlan",
    "LayerOrchestrator",
    "RebuildScheduler",
    "RunResult",
    "artifact_name",
    "dependency_order",
    "encode",
    "is_watched",
    "parse_tier",
    "rebuild_pipeline",
    "scan_runner",
    "to_css",
    "to_json",
    "to_scss",
]

"""
Generation tools - MCP tools for producing token tiers.

Tools for loading scanned values, generating tiers in dependency order,
and reading generated tiers back.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_tokens.constants import SuccessMessages, Tier
from chuk_mcp_tokens.layers import LayerOrchestrator, parse_tier
from chuk_mcp_tokens.models.scan import ScannedValues
from chuk_mcp_tokens.models.token import iter_leaves, tree_to_dict

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_generation_tools(
    mcp: ChukMCPServer,
    orchestrator: LayerOrchestrator,
) -> dict[str, Any]:
    """
    Register token generation tools with the MCP server.

    Args:
        mcp: The MCP server instance
        orchestrator: The layer orchestrator

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}
    store = orchestrator.store
    config = orchestrator.config

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_load_scan(scan: dict[str, Any]) -> str:
        """
        Store a scanned-values document as the input for generation.

        The document holds the raw values extracted from stylesheets:
        colors, spacing, fontFamilies, fontSizes, fontWeights,
        lineHeights, letterSpacings, borderRadii, borderWidths, shadows,
        zIndices, variables and sources.

        Args:
            scan: Scanned-values document (camelCase keys)

        Returns:
            JSON string with the stored path and value counts

        Example:
            tokens_load_scan(scan={"colors": ["#3b82f6", "#ffffff"], "spacing": ["8px"]})
        """
        try:
            values = ScannedValues.from_json_dict(scan)
            path = store.write_scan(values)
            counts = {
                key: len(items)
                for key, items in values.to_json_dict().items()
                if key not in ("variables", "sources")
            }
            return json.dumps(
                {
                    "status": "success",
                    "path": str(path),
                    "counts": counts,
                    "message": f"Stored scanned values at {path}",
                }
            )
        except Exception as e:
            logger.exception("Failed to load scanned values")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_load_scan"] = tokens_load_scan

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_generate(
        layers: list[str] | None = None,
        all_layers: bool = False,
        force: bool = False,
        dry_run: bool = False,
    ) -> str:
        """
        Generate token tiers in dependency order.

        Requesting a tier also generates whatever it depends on if that
        artifact does not exist yet: component needs semantic, semantic
        needs primitive. Explicitly requested tiers are always
        regenerated.

        Args:
            layers: Tiers to generate ('primitive', 'semantic', 'component')
            all_layers: Generate every tier
            force: Regenerate dependencies even if their artifacts exist
            dry_run: Only report what would be generated

        Returns:
            JSON string with the plan, generated tiers, and written files

        Example:
            tokens_generate(layers=["component"])
            tokens_generate(all_layers=True, force=True)
        """
        try:
            requested: list[str | Tier] = list(Tier) if all_layers else list(layers or [])
            if not requested:
                return json.dumps(
                    {
                        "status": "error",
                        "message": "No layers specified. Pass layers or use all_layers.",
                    }
                )

            result = orchestrator.run(requested, force=force, dry_run=dry_run)
            if not result.plan.to_run:
                message = SuccessMessages.NOTHING_TO_DO
            elif dry_run:
                message = f"Would generate {', '.join(t.value for t in result.plan.to_run)}."
            else:
                message = SuccessMessages.TIERS_GENERATED.format(
                    tiers=", ".join(t.value for t in result.generated)
                )
            return json.dumps({"status": "success", **result.to_dict(), "message": message})
        except Exception as e:
            logger.exception("Failed to generate tokens")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_generate"] = tokens_generate

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_get(layer: str) -> str:
        """
        Get a generated tier.

        Args:
            layer: Tier name ('primitive', 'semantic', 'component')

        Returns:
            JSON string with the tier's token tree and token count

        Example:
            tokens_get(layer="semantic")
        """
        try:
            tier = parse_tier(layer)
            tree = store.read(tier)
            return json.dumps(
                {
                    "status": "success",
                    "tier": tier.value,
                    "token_count": sum(1 for _ in iter_leaves(tree)),
                    "tokens": tree_to_dict(tree, config.leaf_shape),
                }
            )
        except Exception as e:
            logger.exception("Failed to get tokens")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_get"] = tokens_get

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_status() -> str:
        """
        Show which tier artifacts exist.

        Returns:
            JSON string with the output directory and per-tier existence

        Example:
            tokens_status()
        """
        try:
            return json.dumps(
                {
                    "status": "success",
                    "out_dir": str(store.out_dir),
                    "scan": store.scan_path.exists(),
                    "tiers": store.list_artifacts(),
                    "output_formats": list(config.output_formats),
                }
            )
        except Exception as e:
            logger.exception("Failed to get token status")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_status"] = tokens_status

    return tools

"""
Audit tools - MCP tools for checking generated tokens.

Tools for resolving references, validating artifacts, diffing them
against reference token files, and converting token files between the
DTCG and legacy leaf shapes.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from chuk_mcp_tokens.config import TokenizeConfig
from chuk_mcp_tokens.constants import TIER_FILES, ErrorMessages, SuccessMessages
from chuk_mcp_tokens.layers.store import read_json
from chuk_mcp_tokens.models import LeafShape, convert_document, converted_path, count_tokens
from chuk_mcp_tokens.validation import (
    PathIndex,
    ReferenceResolver,
    TokenValidator,
    diff_directories,
)

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _tier_index(out_dir: Path) -> PathIndex:
    documents = {
        name: read_json(out_dir / name)
        for name in TIER_FILES.values()
        if (out_dir / name).exists()
    }
    return PathIndex.build(documents)


def register_audit_tools(
    mcp: ChukMCPServer,
    config: TokenizeConfig,
    validator: TokenValidator | None = None,
) -> dict[str, Any]:
    """
    Register resolve, validation, diff and format tools with the MCP server.

    Args:
        mcp: The MCP server instance
        config: Generation settings (output and reference directories)
        validator: Validator to use (default: a fresh TokenValidator)

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}
    validator = validator or TokenValidator()

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_resolve(path: str | None = None) -> str:
        """
        Resolve a token path to its literal value.

        Follows references across all generated tiers, e.g.
        button.primary.text -> text.inverse -> color.neutral.100.
        Without a path, every resolvable path is returned.

        Args:
            path: Dot-separated token path (default: all paths)

        Returns:
            JSON string with the resolved value, type, and reference chain,
            or a path -> value map when no path is given

        Example:
            tokens_resolve(path="button.primary.text")
        """
        try:
            resolver = ReferenceResolver(_tier_index(config.out_dir))
            if path is None:
                values = resolver.resolve_all()
                return json.dumps({"status": "success", "count": len(values), "values": values})

            chain = resolver.chain(path)
            token = resolver.resolve_token(path)
            return json.dumps(
                {
                    "status": "success",
                    "path": path,
                    "value": token.value,
                    "type": token.token_type,
                    "chain": chain,
                }
            )
        except Exception as e:
            logger.exception("Failed to resolve token")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_resolve"] = tokens_resolve

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_validate(strict: bool | None = None) -> str:
        """
        Validate the generated token files.

        Checks leaf shape (DTCG vs legacy), known types, empty values,
        unresolved or circular references, and duplicate definitions
        across every JSON token file in the output directory.

        Args:
            strict: Fail on warnings too (default: from config)

        Returns:
            JSON string with per-file reports and overall validity

        Example:
            tokens_validate(strict=True)
        """
        try:
            strict_mode = config.strict if strict is None else strict
            result = validator.validate_directory(config.out_dir)
            return json.dumps(
                {
                    "status": "success",
                    **result.to_dict(strict=strict_mode),
                    "error_count": len(result.errors),
                    "warning_count": len(result.warnings),
                }
            )
        except Exception as e:
            logger.exception("Failed to validate tokens")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_validate"] = tokens_validate

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_diff(refs_dir: str | None = None) -> str:
        """
        Compare generated tiers against reference token files.

        Pairs primitives.json with primitive.tokens.json, semantic.json
        with semantics.tokens.json, and components.json with
        component.tokens.json.

        Args:
            refs_dir: Directory of reference files (default: from config)

        Returns:
            JSON string with per-tier counts and differing paths

        Example:
            tokens_diff(refs_dir="tokens/_refs")
        """
        try:
            directory = Path(refs_dir) if refs_dir else config.refs_dir
            if directory is None:
                return json.dumps({"status": "error", "message": ErrorMessages.NO_REFS_DIR})

            report = diff_directories(config.out_dir, directory)
            return json.dumps({"status": "success", **report.to_dict()})
        except Exception as e:
            logger.exception("Failed to diff tokens")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_diff"] = tokens_diff

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_format(
        input_path: str,
        output_path: str | None = None,
        to_legacy: bool = False,
        normalize_refs: bool = False,
        dry_run: bool = False,
    ) -> str:
        """
        Convert a token file between DTCG ($value/$type) and legacy (value/type).

        Extension keys and group metadata are kept as they are; only the
        value, type and description keys are renamed.

        Args:
            input_path: Token JSON file to convert
            output_path: Destination (default: input with .dtcg.json or .legacy.json)
            to_legacy: Write legacy keys instead of DTCG keys
            normalize_refs: Rewrite '$a.b' and 'var(--a-b)' values as '{a.b}'
            dry_run: Return the converted document without writing it

        Returns:
            JSON string with the token count and output path (and the
            document itself on a dry run)

        Example:
            tokens_format(input_path="figma-export.json", normalize_refs=True)
        """
        try:
            source = Path(input_path)
            if not source.exists():
                message = ErrorMessages.INPUT_NOT_FOUND.format(path=source)
                return json.dumps({"status": "error", "message": message})

            shape = LeafShape.LEGACY if to_legacy else LeafShape.DTCG
            target = Path(output_path) if output_path else converted_path(source, shape)
            document = read_json(source)
            converted = convert_document(document, shape, normalize_refs=normalize_refs)
            count = count_tokens(document)

            result: dict[str, Any] = {
                "status": "success",
                "message": SuccessMessages.TOKENS_CONVERTED.format(count=count, shape=shape.value),
                "token_count": count,
                "input": str(source),
                "output": str(target),
                "dry_run": dry_run,
            }
            if dry_run:
                result["document"] = converted
                return json.dumps(result)

            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(json.dumps(converted, indent=2, ensure_ascii=False))
            logger.info(f"Converted {count} tokens: {source} -> {target}")
            return json.dumps(result)
        except Exception as e:
            logger.exception("Failed to convert tokens")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_format"] = tokens_format

    return tools

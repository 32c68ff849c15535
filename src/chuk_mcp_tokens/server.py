#!/usr/bin/env python3
"""
Entry point for the CHUK Tokens MCP Server.

This module provides the main entry point for the MCP server,
supporting multiple transport modes (stdio, http), plus a watch mode
that regenerates every tier when stylesheets or base.json change.
"""

import argparse
import asyncio
import logging
from pathlib import Path

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def watch(paths: list[Path], config_path: str | None, interval: float = 0.5) -> None:
    """
    Poll stylesheet and base.json modification times and rebuild.

    With scanCommand configured, each rebuild runs the scan first so that
    stylesheet edits reach base.json. Without it, an external scanner is
    expected to rewrite base.json, which triggers the rebuild by itself.
    """
    from chuk_mcp_tokens.config import load_config
    from chuk_mcp_tokens.layers import (
        ChangePoller,
        LayerOrchestrator,
        RebuildScheduler,
        rebuild_pipeline,
        scan_runner,
    )

    config = load_config(config_path)
    orchestrator = LayerOrchestrator(config)
    scan = scan_runner(config.scan_command) if config.scan_command else None
    scheduler = RebuildScheduler(
        rebuild_pipeline(orchestrator, scan), debounce_ms=config.watch_debounce_ms
    )
    poller = ChangePoller([*paths, orchestrator.store.scan_path], scheduler)

    logger.info(f"Watching {', '.join(str(p) for p in poller.paths)} (Ctrl+C to stop)")
    if scan is None:
        logger.info("No scanCommand configured; rebuilding when base.json changes")
    while True:
        await asyncio.sleep(interval)
        poller.poll()


def main() -> None:
    """Main entry point with transport detection."""
    parser = argparse.ArgumentParser(description="CHUK Tokens MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--watch",
        nargs="+",
        type=Path,
        metavar="PATH",
        help="Watch stylesheet paths and regenerate tokens instead of serving",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Config file (default: ./tokenize.config.yaml)",
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.watch:
        try:
            asyncio.run(watch(args.watch, args.config))
        except KeyboardInterrupt:
            logger.info("Stopped watching")
        return

    # Import after argument parsing to avoid issues
    from chuk_mcp_tokens.async_server import mcp

    if args.transport == "stdio":
        logger.info("Starting CHUK Tokens MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting CHUK Tokens MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()

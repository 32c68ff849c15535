#!/usr/bin/env python3
"""
Async Design Token MCP Server using chuk-mcp-server

This server compiles scanned style values into a three-tier design-token
graph: primitives (literal values), semantic tokens (intent, referencing
primitives) and component tokens (UI elements, referencing semantic
tokens).

The server provides tools for:
- Loading the scanned-values document
- Generating tiers in dependency order (JSON, SCSS, CSS)
- Resolving token references across tiers
- Validating artifacts and diffing them against reference files
- Converting token files between DTCG and legacy leaf shapes
"""

import logging

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_tokens.config import load_config
from chuk_mcp_tokens.layers import LayerOrchestrator
from chuk_mcp_tokens.tools import register_audit_tools, register_generation_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-tokens")

# Settings from ./tokenize.config.yaml (defaults when absent)
config = load_config()

orchestrator = LayerOrchestrator(config)

# Register all tools
generation_tools = register_generation_tools(mcp, orchestrator)
audit_tools = register_audit_tools(mcp, config)

# Export tool functions for direct access
tokens_load_scan = generation_tools["tokens_load_scan"]
tokens_generate = generation_tools["tokens_generate"]
tokens_get = generation_tools["tokens_get"]
tokens_status = generation_tools["tokens_status"]

tokens_resolve = audit_tools["tokens_resolve"]
tokens_validate = audit_tools["tokens_validate"]
tokens_diff = audit_tools["tokens_diff"]
tokens_format = audit_tools["tokens_format"]

logger.info("CHUK Tokens MCP Server initialized")
logger.info(f"  Output dir: {config.out_dir}")
logger.info(f"  Output formats: {', '.join(config.output_formats)}")

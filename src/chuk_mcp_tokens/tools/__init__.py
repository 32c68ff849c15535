"""
MCP tool implementations.

Tools are organized by domain:
- generation - Scanned values in, token tiers out
- audit - Reference resolution, validation, and diffing
"""

from chuk_mcp_tokens.tools.audit import register_audit_tools
from chuk_mcp_tokens.tools.generation import register_generation_tools

__all__ = [
    "register_audit_tools",
    "register_generation_tools",
]

"""
chuk-mcp-tokens - three-tier design token compiler with an MCP surface.

Scanned style values become primitive tokens (literals), semantic tokens
(intent, referencing primitives) and component tokens (UI elements,
referencing semantic tokens).
"""

__version__ = "0.1.0"

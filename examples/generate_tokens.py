#!/usr/bin/env python3
"""
Example: Generate all three token tiers from scanned values.

This demonstrates the full pipeline from a scanned-values document to
primitive, semantic and component tokens.

Usage:
    python examples/generate_tokens.py
    # Creates: examples/output/{primitives,semantic,components}.{json,css} + _*.scss

This is the "Hello World" for chuk-mcp-tokens - proving that:
1. Scanned values are grouped into primitive scales
2. Semantic intents reference the primitive tier
3. Component tokens reference the semantic tier
4. Every reference resolves back to a literal value
"""

from pathlib import Path

from chuk_mcp_tokens.config import TokenizeConfig
from chuk_mcp_tokens.constants import Tier
from chuk_mcp_tokens.core import contrast_ratio
from chuk_mcp_tokens.layers import LayerOrchestrator
from chuk_mcp_tokens.models import ScannedValues
from chuk_mcp_tokens.validation import PathIndex, ReferenceResolver, TokenValidator

SCAN = {
    "colors": [
        "#3b82f6",
        "#1d4ed8",
        "#10b981",
        "#ef4444",
        "#facc15",
        "#ffffff",
        "#737373",
        "#000000",
    ],
    "spacing": ["4px", "8px", "16px", "24px", "32px"],
    "fontFamilies": ["Inter, sans-serif"],
    "fontSizes": ["12px", "14px", "16px", "20px"],
    "fontWeights": ["400", "700"],
    "lineHeights": ["1.25", "1.375", "1.5"],
    "borderRadii": ["0px", "2px", "4px", "8px", "16px", "9999px"],
    "shadows": [
        "0 1px 2px rgba(0, 0, 0, 0.05)",
        "0 4px 6px rgba(0, 0, 0, 0.1)",
        "0 10px 15px rgba(0, 0, 0, 0.1)",
    ],
    "zIndices": ["0", "10", "20", "30", "40"],
}


def main() -> None:
    """Generate, validate and resolve the demo tokens."""
    output_dir = Path(__file__).parent / "output"
    config = TokenizeConfig(out_dir=output_dir)
    orchestrator = LayerOrchestrator(config)

    print("CHUK Design Token Compiler")
    print("=" * 40)
    print(f"Output: {output_dir}")
    print()

    orchestrator.store.write_scan(ScannedValues.from_json_dict(SCAN))

    # Requesting components pulls in primitives and semantic tokens
    print("Generating tiers...")
    result = orchestrator.run(["component"], force=True)
    for path in result.files:
        print(f"  {path.name}")
    print()

    print("Validating...")
    validation = TokenValidator().validate_directory(output_dir)
    print(f"  {validation}")
    print()

    print("Resolving:")
    index = PathIndex.build({tier.value: orchestrator.store.read(tier) for tier in Tier})
    resolver = ReferenceResolver(index)
    for path in ["button.primary.background", "button.primary.text", "alert.error.border"]:
        chain = " -> ".join(resolver.chain(path))
        print(f"  {chain} = {resolver.resolve(path)}")
    print()

    # WCAG AA asks for 4.5:1 on body text
    print("Contrast:")
    pairs = [
        ("button.primary.text", "button.primary.background"),
        ("text.primary", "surface.default"),
        ("text.secondary", "surface.secondary"),
    ]
    for foreground, background in pairs:
        ratio = contrast_ratio(resolver.resolve(foreground), resolver.resolve(background))
        verdict = "ok" if ratio >= 4.5 else "low"
        print(f"  {foreground} on {background}: {ratio:.2f}:1 {verdict}")
    print()

    print(f"Resolved {len(resolver.resolve_all())} of {len(index)} paths")


if __name__ == "__main__":
    main()

"""
Pydantic models for the token system.

This module provides:
- TokenLeaf: canonical token (value, type, description)
- LeafShape: DTCG vs legacy key naming on disk
- TreeBuilder: accumulates leaves into a token tree
- ScannedValues: raw values from the scan stage
- convert_document: DTCG <-> legacy migration of raw documents
"""

from chuk_mcp_tokens.models.convert import (
    convert_document,
    converted_path,
    count_tokens,
    normalize_reference,
)
from chuk_mcp_tokens.models.scan import ScannedValues
from chuk_mcp_tokens.models.token import (
    LeafShape,
    TokenLeaf,
    TokenTree,
    TreeBuilder,
    get_node,
    is_leaf_node,
    iter_leaves,
    normalize_leaf,
    normalize_tree,
    ordered_keys,
    sorted_scale_keys,
    tree_to_dict,
)

__all__ = [
    "LeafShape",
    "ScannedValues",
    "TokenLeaf",
    "TokenTree",
    "TreeBuilder",
    "convert_document",
    "converted_path",
    "count_tokens",
    "get_node",
    "is_leaf_node",
    "iter_leaves",
    "normalize_leaf",
    "normalize_reference",
    "normalize_tree",
    "ordered_keys",
    "sorted_scale_keys",
    "tree_to_dict",
]

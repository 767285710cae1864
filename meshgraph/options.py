"""
Construction options for `meshgraph.Graph`.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class GraphOptions:
    # Check every triangle/edge index against the vertex count before
    # building. Off by default: out-of-range indices are a caller error.
    validate_indices: bool = False

"""
Helpers for reading a connected-component label vector.

`Graph.connected_components()` returns one integer label per vertex. Code that
reports on a mesh, or seeds one sample per component, usually wants counts and
member lists rather than the raw labels; these functions provide them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

import numpy as np

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


@dataclass
class ComponentSummary:
    count: int
    sizes: np.ndarray  # (count,) vertices per component, indexed by label
    largest: int  # size of the largest component (0 when empty)
    isolated: int  # number of single-vertex components

    def as_dict(self) -> Dict[str, Any]:
        return {
            "count": int(self.count),
            "sizes": [int(s) for s in self.sizes],
            "largest": int(self.largest),
            "isolated": int(self.isolated),
        }


def _as_labels(labels: Any) -> np.ndarray:
    arr = np.asarray(labels, dtype=np.int64)
    if arr.ndim != 1:
        raise ValueError(f"labels must be a 1-D array, got shape {arr.shape}")
    return arr


def num_components(labels: Any) -> int:
    """Number of components, assuming labels are 0..C-1."""
    arr = _as_labels(labels)
    if arr.size == 0:
        return 0
    return int(arr.max()) + 1


def component_sizes(labels: Any) -> np.ndarray:
    """Vertex count of each component, indexed by label."""
    arr = _as_labels(labels)
    return np.bincount(arr, minlength=num_components(arr))


def component_members(labels: Any) -> List[np.ndarray]:
    """Sorted vertex indices of each component, indexed by label."""
    arr = _as_labels(labels)
    order = np.argsort(arr, kind="stable")
    bounds = np.cumsum(component_sizes(arr))[:-1]
    return np.split(order, bounds) if arr.size else []


def summarize_components(labels: Any) -> ComponentSummary:
    sizes = component_sizes(labels)
    summary = ComponentSummary(
        count=int(sizes.shape[0]),
        sizes=sizes,
        largest=int(sizes.max()) if sizes.size else 0,
        isolated=int(np.count_nonzero(sizes == 1)),
    )
    logger.debug(
        "Components: count=%d, largest=%d, isolated=%d",
        summary.count,
        summary.largest,
        summary.isolated,
    )
    return summary

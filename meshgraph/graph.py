"""
Weighted vertex graph of a triangle mesh.

A `Graph` turns the topology of a triangulated surface into an undirected,
weighted graph whose nodes are the mesh vertices and whose edges are the mesh
edges, weighted by the Euclidean length of the edge. It is the structure that
sampling and remeshing code walks over when approximating geodesic distances.

Important terminology:
- "Vertex": a 3D position, identified by its row index in the vertex array.
    Index and identity are the same thing; there are no node objects.
- "Directed pair": a (source, target) vertex index pair. Every undirected edge
    is stored as two directed pairs so that either endpoint can enumerate it.
- "Canonical pair": an undirected edge written as (min, max), used as the
    deduplication key for explicit edge input.
- "Compressed adjacency": three flat arrays. `offsets` has length N+1 and the
    neighbors of vertex i live in `neighbors[offsets[i]:offsets[i+1]]`, with the
    matching edge lengths in `weights[offsets[i]:offsets[i+1]]`. Slices are
    sorted by neighbor index. A vertex with no edges has an empty slice.

Construction paths:

1. `Graph.from_mesh(vertices, triangles)`: each triangle emits its three edges
    in both directions, then exact duplicates are removed by sorting the full
    directed pair list and compacting equal rows. Triangles that share an edge,
    repeated triangles and non-manifold fans all collapse to a single edge.
2. `Graph.from_edges(vertices, edges)`: any iterable of vertex pairs, with
    duplicates and either orientation allowed.
3. `Graph.from_edge_set(vertices, edges)`: a set of vertex pairs.

All three feed the same compression step (`build_adjacency`) and yield the
same neighbor sets and weights for the same logical edge set.

Pairs whose two endpoints coincide are dropped, so a degenerate triangle such as
(a, a, b) contributes only the edge a-b. Distinct vertices sitting at the same
position produce a zero-weight edge, which is kept.

Index validity is a caller precondition. Out-of-range triangle or edge indices
are not checked unless `GraphOptions.validate_indices` is set, and
`get_adjacent(i, k)` does not check `k` against the degree of `i`.

Once built, a `Graph` is read-only: the backing arrays are flagged
non-writeable and there is no mutation API. Copies are deep.
"""

from __future__ import annotations

import collections.abc
import logging
from collections import deque
from typing import AbstractSet, Any, Dict, Iterable, Optional, Sequence, Tuple

import networkx as nx
import numpy as np
import trimesh

from .options import GraphOptions

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

# (neighbor index, edge length)
WeightedEdge = Tuple[int, float]


# ============================================================================
# Input normalization
# ============================================================================


def _as_vertices(vertices: Any) -> np.ndarray:
    """Return vertex positions as an (N,3) float64 array.

    Extra columns beyond the first three are ignored.
    """
    V = np.asarray(vertices, dtype=float)
    if V.ndim == 1 and V.size == 0:
        V = V.reshape(0, 3)
    if V.ndim != 2 or V.shape[1] < 3:
        raise ValueError(f"vertices must be an (N,3) array, got shape {V.shape}")
    return V[:, :3]


def _as_triangles(triangles: Any) -> np.ndarray:
    F = np.asarray(triangles)
    if F.size == 0:
        return np.empty((0, 3), dtype=np.int64)
    if F.ndim != 2 or F.shape[1] != 3:
        raise ValueError(f"triangles must be a (T,3) array, got shape {F.shape}")
    return _as_indices(F, "triangles")


def _as_indices(values: np.ndarray, what: str) -> np.ndarray:
    """Cast to int64, rejecting values that are not whole numbers."""
    if values.dtype.kind in "iu":
        return values.astype(np.int64, copy=False)
    if values.dtype.kind != "f" or not np.all(np.mod(values, 1) == 0):
        raise ValueError(f"{what} must hold integer vertex indices, got dtype {values.dtype}")
    return values.astype(np.int64)


def _check_indices(indices: np.ndarray, n_vertices: int, what: str) -> None:
    if indices.size == 0:
        return
    lo = int(indices.min())
    hi = int(indices.max())
    if lo < 0 or hi >= n_vertices:
        raise ValueError(
            f"{what} reference vertex indices outside [0, {n_vertices}): "
            f"min={lo}, max={hi}"
        )


# ============================================================================
# Directed pair sources
# ============================================================================


def triangle_directed_pairs(triangles: np.ndarray) -> np.ndarray:
    """
    Return the sorted, duplicate-free (M,2) array of directed pairs induced by
    the edges of `triangles`.

    Six directed pairs are generated per triangle (three edges, both
    directions); pairs with equal endpoints are discarded, then the list is
    sorted lexicographically and adjacent duplicates are removed.
    """
    F = _as_triangles(triangles)
    a, b, c = F[:, 0], F[:, 1], F[:, 2]
    src = np.concatenate([a, b, c, b, c, a])
    dst = np.concatenate([b, c, a, a, b, c])
    pairs = np.column_stack([src, dst])
    pairs = pairs[pairs[:, 0] != pairs[:, 1]]
    if pairs.shape[0] == 0:
        return np.empty((0, 2), dtype=np.int64)
    return np.unique(pairs, axis=0)


def canonical_edge_set(edges: Iterable[Sequence[int]]) -> set:
    """
    Collapse an iterable of vertex pairs into a set of canonical (min, max)
    tuples. Self-pairs are dropped.
    """
    canonical = set()
    for e in edges:
        try:
            u, v = e
        except (TypeError, ValueError) as exc:
            raise ValueError(f"edge {e!r} is not a vertex pair") from exc
        if int(u) != u or int(v) != v:
            raise ValueError(f"edge {e!r} does not hold integer vertex indices")
        u, v = int(u), int(v)
        if u == v:
            continue
        canonical.add((u, v) if u < v else (v, u))
    return canonical


def edge_directed_pairs(canonical: AbstractSet[Tuple[int, int]]) -> np.ndarray:
    """Expand canonical undirected pairs into sorted directed pairs."""
    if not canonical:
        return np.empty((0, 2), dtype=np.int64)
    und = np.array(sorted(canonical), dtype=np.int64)
    pairs = np.concatenate([und, und[:, ::-1]])
    order = np.lexsort((pairs[:, 1], pairs[:, 0]))
    return pairs[order]


# ============================================================================
# Compression
# ============================================================================


def build_adjacency(
    vertices: np.ndarray, pairs: np.ndarray
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Compress sorted, duplicate-free directed pairs into offsets/neighbors/weights.

    Args:
        vertices: (N,3) vertex positions.
        pairs: (M,2) directed pairs sorted by source then target.

    Returns:
        (offsets, neighbors, weights) with shapes (N+1,), (M,), (M,).
        Every vertex gets an offset slot, including vertices with no edges.
    """
    n = int(vertices.shape[0])
    src = pairs[:, 0]
    dst = pairs[:, 1]

    degree = np.bincount(src, minlength=n)
    offsets = np.zeros(n + 1, dtype=np.int64)
    np.cumsum(degree, out=offsets[1:])

    neighbors = dst.astype(np.int64, copy=True)
    weights = np.linalg.norm(vertices[src] - vertices[dst], axis=1)
    return offsets, neighbors, weights.astype(float, copy=False)


def _frozen(a: np.ndarray, dtype: Any) -> np.ndarray:
    out = np.array(a, dtype=dtype, copy=True)
    out.setflags(write=False)
    return out


# ============================================================================
# Graph
# ============================================================================


class Graph:
    """
    Read-only weighted graph over mesh vertices with compressed adjacency.

    Prefer the `from_mesh`, `from_edges`, `from_edge_set` and `from_trimesh`
    constructors. The initializer takes already-compressed arrays and copies
    them.

    Attributes:
        offsets: (N+1,) int64, start of each vertex's slice in the flat arrays.
        neighbors: (2E,) int64 neighbor indices.
        weights: (2E,) float64 edge lengths, parallel to `neighbors`.
    """

    def __init__(
        self,
        vertices: np.ndarray,
        offsets: np.ndarray,
        neighbors: np.ndarray,
        weights: np.ndarray,
    ):
        self._vertices = _frozen(_as_vertices(vertices), float)
        self._offsets = _frozen(offsets, np.int64)
        self._neighbors = _frozen(neighbors, np.int64)
        self._weights = _frozen(weights, float)

        n = self._vertices.shape[0]
        if self._offsets.shape != (n + 1,):
            raise ValueError(
                f"offsets must have length n_vertices + 1 = {n + 1}, "
                f"got shape {self._offsets.shape}"
            )
        if self._offsets[0] != 0:
            raise ValueError(f"offsets[0] must be 0, got {int(self._offsets[0])}")
        if self._neighbors.shape != self._weights.shape or self._neighbors.ndim != 1:
            raise ValueError(
                "neighbors and weights must be 1-D arrays of equal length, got "
                f"{self._neighbors.shape} and {self._weights.shape}"
            )
        if int(self._offsets[-1]) != self._neighbors.shape[0]:
            raise ValueError(
                f"offsets[-1] must equal len(neighbors): "
                f"{int(self._offsets[-1])} != {self._neighbors.shape[0]}"
            )

    # ---------------------------------------------------------------------
    # Construction
    # ---------------------------------------------------------------------
    @classmethod
    def from_mesh(
        cls,
        vertices: Any,
        triangles: Any,
        *,
        options: Optional[GraphOptions] = None,
    ) -> "Graph":
        """
        Build the graph of a triangle mesh.

        Args:
            vertices: (N,3) vertex positions.
            triangles: (T,3) vertex indices, one row per triangle.
            options: Construction options.

        Returns:
            Graph with one node per vertex and one edge per distinct mesh edge.
        """
        if options is None:
            options = GraphOptions()
        V = _as_vertices(vertices)
        F = _as_triangles(triangles)
        if options.validate_indices:
            _check_indices(F, V.shape[0], "triangles")

        pairs = triangle_directed_pairs(F)
        graph = cls(V, *build_adjacency(V, pairs))
        logger.debug(
            "Built graph from %d triangles: %d vertices, %d edges",
            F.shape[0],
            graph.num_vertices(),
            graph.num_edges(),
        )
        return graph

    @classmethod
    def from_edges(
        cls,
        vertices: Any,
        edges: Iterable[Sequence[int]],
        *,
        options: Optional[GraphOptions] = None,
    ) -> "Graph":
        """
        Build a graph from an explicit sequence of vertex pairs.

        Pairs may repeat and may appear in either orientation; each distinct
        undirected pair becomes one edge.
        """
        if options is None:
            options = GraphOptions()
        V = _as_vertices(vertices)
        canonical = canonical_edge_set(edges)
        pairs = edge_directed_pairs(canonical)
        if options.validate_indices:
            _check_indices(pairs, V.shape[0], "edges")

        graph = cls(V, *build_adjacency(V, pairs))
        logger.debug(
            "Built graph from %d distinct edges: %d vertices",
            len(canonical),
            graph.num_vertices(),
        )
        return graph

    @classmethod
    def from_edge_set(
        cls,
        vertices: Any,
        edges: AbstractSet[Tuple[int, int]],
        *,
        options: Optional[GraphOptions] = None,
    ) -> "Graph":
        """Build a graph from a set of vertex pairs (orientation ignored)."""
        if not isinstance(edges, collections.abc.Set):
            raise TypeError(f"edges must be a set, got {type(edges).__name__}")
        return cls.from_edges(vertices, edges, options=options)

    @classmethod
    def from_trimesh(
        cls,
        mesh: trimesh.Trimesh,
        *,
        options: Optional[GraphOptions] = None,
    ) -> "Graph":
        """Build the graph of a `trimesh.Trimesh` using its vertices and faces."""
        if not isinstance(mesh, trimesh.Trimesh):
            raise TypeError("mesh must be a trimesh.Trimesh")
        return cls.from_mesh(mesh.vertices, mesh.faces, options=options)

    # ---------------------------------------------------------------------
    # Queries
    # ---------------------------------------------------------------------
    def num_vertices(self) -> int:
        return int(self._vertices.shape[0])

    def num_edges(self) -> int:
        """Number of undirected edges."""
        return int(self._neighbors.shape[0] // 2)

    def num_adjacents(self, i: int) -> int:
        """Degree of vertex `i`."""
        return int(self._offsets[i + 1] - self._offsets[i])

    def get_vertex(self, i: int) -> np.ndarray:
        """Read-only (3,) view of the position of vertex `i`."""
        return self._vertices[i]

    def get_vertices(self) -> np.ndarray:
        """Read-only (N,3) array of all vertex positions."""
        return self._vertices

    def get_adjacent(self, i: int, k: int) -> WeightedEdge:
        """
        Return the `k`-th (neighbor, weight) pair of vertex `i`.

        `k` must satisfy 0 <= k < num_adjacents(i); this is not checked.
        """
        idx = self._offsets[i] + k
        return int(self._neighbors[idx]), float(self._weights[idx])

    def adjacents(self, i: int) -> Tuple[np.ndarray, np.ndarray]:
        """Read-only (neighbors, weights) views of the slice of vertex `i`."""
        lo, hi = self._offsets[i], self._offsets[i + 1]
        return self._neighbors[lo:hi], self._weights[lo:hi]

    def degrees(self) -> np.ndarray:
        """(N,) int64 array of vertex degrees."""
        return np.diff(self._offsets)

    def _sources(self) -> np.ndarray:
        return np.repeat(np.arange(self.num_vertices(), dtype=np.int64), self.degrees())

    def edges(self) -> np.ndarray:
        """(E,2) array of undirected edges written as (u, v) with u < v."""
        src = self._sources()
        keep = src < self._neighbors
        return np.column_stack([src[keep], self._neighbors[keep]])

    def edge_weights(self) -> np.ndarray:
        """(E,) edge lengths, aligned with `edges()`."""
        keep = self._sources() < self._neighbors
        return self._weights[keep]

    @property
    def offsets(self) -> np.ndarray:
        return self._offsets

    @property
    def neighbors(self) -> np.ndarray:
        return self._neighbors

    @property
    def weights(self) -> np.ndarray:
        return self._weights

    # ---------------------------------------------------------------------
    # Connected components
    # ---------------------------------------------------------------------
    def connected_components(self) -> np.ndarray:
        """
        Label every vertex with the index of its connected component.

        Components are numbered 0..C-1 in the order their lowest-indexed vertex
        appears. Each component is explored breadth-first from that vertex. A
        vertex may sit in the queue several times; it is marked visited when it
        is dequeued and later copies are skipped.

        Returns:
            (N,) int64 array of component labels.
        """
        n = self.num_vertices()
        offsets = self._offsets.tolist()
        neighbors = self._neighbors.tolist()
        labels = np.zeros(n, dtype=np.int64)
        visited = [False] * n

        current = 0
        for root in range(n):
            if visited[root]:
                continue
            queue = deque([root])
            while queue:
                node = queue.popleft()
                if visited[node]:
                    continue
                visited[node] = True
                labels[node] = current
                queue.extend(neighbors[offsets[node] : offsets[node + 1]])
            current += 1

        logger.debug("Labelled %d connected components over %d vertices", current, n)
        return labels

    # ---------------------------------------------------------------------
    # Conversion and copying
    # ---------------------------------------------------------------------
    def to_networkx(self) -> nx.Graph:
        """
        Return an equivalent `networkx.Graph`.

        Every vertex is a node (isolated ones included) with a `position`
        attribute; edges carry their length as `weight`.
        """
        G = nx.Graph()
        for i in range(self.num_vertices()):
            G.add_node(i, position=self._vertices[i].copy())
        E = self.edges()
        W = self.edge_weights()
        G.add_weighted_edges_from(
            (int(u), int(v), float(w)) for (u, v), w in zip(E, W)
        )
        return G

    def copy(self) -> "Graph":
        return Graph(self._vertices, self._offsets, self._neighbors, self._weights)

    def __copy__(self) -> "Graph":
        return self.copy()

    def __deepcopy__(self, memo: Dict[int, Any]) -> "Graph":
        g = self.copy()
        memo[id(self)] = g
        return g

    def __len__(self) -> int:
        return self.num_vertices()

    def __repr__(self) -> str:
        return f"Graph(n_vertices={self.num_vertices()}, n_edges={self.num_edges()})"

"""
Plotting for mesh graphs.

Draws the graph edges as 3D line segments and the vertices as markers colored
by connected component, which makes multi-component inputs and isolated
vertices easy to spot.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

import numpy as np

from .graph import Graph

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def plot_graph(
    graph: Graph,
    labels: Optional[np.ndarray] = None,
    *,
    backend: str = "matplotlib",
    title: str = "Mesh graph",
    ax: Any = None,
    figsize: Optional[Tuple[float, float]] = None,
    node_size: float = 12.0,
    edge_color: str = "0.6",
    cmap: str = "tab10",
) -> Any:
    """
    Plot a graph in 3D with vertices colored by component label.

    Args:
        graph: Graph to draw.
        labels: Optional (N,) component labels. Computed with
            `graph.connected_components()` when omitted.
        backend: "matplotlib" or "plotly".
        title: Plot title.
        ax: matplotlib 3D Axes to draw into (matplotlib backend only). A new
            figure is created when None.
        figsize: Figure size in inches for a new matplotlib figure.
        node_size: Marker size.
        edge_color: Color of the edge segments.
        cmap: Colormap name used for component colors.

    Returns:
        The matplotlib Axes, or a plotly Figure.
    """
    if labels is None:
        labels = graph.connected_components()
    labels = np.asarray(labels)
    if labels.shape != (graph.num_vertices(),):
        raise ValueError(
            f"labels must have shape ({graph.num_vertices()},), got {labels.shape}"
        )

    backend = backend.lower()
    if backend == "matplotlib":
        return _plot_matplotlib(
            graph, labels, title, ax, figsize, node_size, edge_color, cmap
        )
    elif backend == "plotly":
        return _plot_plotly(graph, labels, title, node_size, edge_color, cmap)
    else:
        raise ValueError(f"Unknown backend: {backend}")


def _edge_segments(graph: Graph) -> np.ndarray:
    """(E,2,3) array of edge endpoint positions."""
    V = graph.get_vertices()
    E = graph.edges()
    return V[E] if len(E) else np.empty((0, 2, 3), dtype=float)


def _plot_matplotlib(
    graph: Graph,
    labels: np.ndarray,
    title: str,
    ax: Any,
    figsize: Optional[Tuple[float, float]],
    node_size: float,
    edge_color: str,
    cmap: str,
) -> Any:
    import matplotlib.pyplot as plt
    from mpl_toolkits.mplot3d.art3d import Line3DCollection

    if ax is None:
        fig = plt.figure(figsize=figsize or (8, 6))
        ax = fig.add_subplot(111, projection="3d")

    V = graph.get_vertices()
    segments = _edge_segments(graph)
    if len(segments):
        ax.add_collection3d(
            Line3DCollection(segments, colors=edge_color, linewidths=0.5)
        )
    if len(V):
        ax.scatter(V[:, 0], V[:, 1], V[:, 2], c=labels, cmap=cmap, s=node_size)
        lo = V.min(axis=0)
        hi = V.max(axis=0)
        pad = 0.05 * max(float(np.max(hi - lo)), 1e-12)
        ax.set_xlim(lo[0] - pad, hi[0] + pad)
        ax.set_ylim(lo[1] - pad, hi[1] + pad)
        ax.set_zlim(lo[2] - pad, hi[2] + pad)

    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    ax.set_zlabel("Z")
    ax.set_title(title)
    logger.debug("Drew %d vertices and %d edges", len(V), len(segments))
    return ax


def _plot_plotly(
    graph: Graph,
    labels: np.ndarray,
    title: str,
    node_size: float,
    edge_color: str,
    cmap: str,
) -> Any:
    import plotly.graph_objects as go

    line_color = _plotly_color(edge_color)
    colorscale = _plotly_colorscale(cmap)
    V = graph.get_vertices()
    segments = _edge_segments(graph)

    # One polyline trace for all edges; None breaks the line between edges
    xs, ys, zs = [], [], []
    for a, b in segments:
        xs += [a[0], b[0], None]
        ys += [a[1], b[1], None]
        zs += [a[2], b[2], None]

    fig = go.Figure(
        data=[
            go.Scatter3d(
                x=xs,
                y=ys,
                z=zs,
                mode="lines",
                line=dict(color=line_color, width=2),
                name="Edges",
                hoverinfo="skip",
            ),
            go.Scatter3d(
                x=V[:, 0],
                y=V[:, 1],
                z=V[:, 2],
                mode="markers",
                marker=dict(
                    size=max(1.0, node_size / 4.0),
                    color=labels,
                    colorscale=colorscale,
                ),
                text=[f"vertex {i}, component {int(c)}" for i, c in enumerate(labels)],
                name="Vertices",
            ),
        ]
    )
    fig.update_layout(
        title=title,
        scene=dict(xaxis_title="X", yaxis_title="Y", zaxis_title="Z", aspectmode="data"),
    )
    return fig


def _plotly_color(color: str) -> str:
    # plotly has no "0.6"-style gray strings
    try:
        gray = float(color)
    except ValueError:
        return color
    level = int(round(255 * min(max(gray, 0.0), 1.0)))
    return f"rgb({level},{level},{level})"


# Matplotlib colormap names with a plotly builtin counterpart
_PLOTLY_COLORSCALES = {
    "tab10": "Turbo",
    "viridis": "Viridis",
    "plasma": "Plasma",
    "inferno": "Inferno",
    "magma": "Magma",
    "cividis": "Cividis",
    "turbo": "Turbo",
    "jet": "Jet",
    "hot": "Hot",
    "rainbow": "Rainbow",
}


def _plotly_colorscale(cmap: str) -> str:
    try:
        return _PLOTLY_COLORSCALES[cmap]
    except KeyError:
        raise ValueError(
            f"Colormap {cmap!r} has no plotly equivalent; "
            f"use one of {sorted(_PLOTLY_COLORSCALES)}"
        ) from None

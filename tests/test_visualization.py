"""
Smoke tests for `meshgraph.visualization.plot_graph` on both backends.
"""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest

from meshgraph import Graph, create_disjoint_triangles_mesh, plot_graph


@pytest.fixture
def graph():
    return Graph.from_trimesh(create_disjoint_triangles_mesh())


def test_matplotlib_backend(graph):
    ax = plot_graph(graph, title="two triangles")
    assert ax.get_title() == "two triangles"
    assert ax.name == "3d"
    plt.close("all")


def test_matplotlib_into_existing_axes(graph):
    fig = plt.figure()
    ax = fig.add_subplot(111, projection="3d")
    out = plot_graph(graph, graph.connected_components(), ax=ax)
    assert out is ax
    plt.close(fig)


def test_plotly_backend(graph):
    fig = plot_graph(graph, backend="plotly")
    edges, vertices = fig.data
    # three points (two ends + break) per edge
    assert len(edges.x) == 3 * graph.num_edges()
    assert len(vertices.x) == graph.num_vertices()
    np.testing.assert_array_equal(np.asarray(vertices.marker.color), [0, 0, 0, 1, 1, 1])


def test_plotly_gray_edge_color_is_clamped(graph):
    fig = plot_graph(graph, backend="plotly", edge_color="1.5")
    assert fig.data[0].line.color == "rgb(255,255,255)"
    fig = plot_graph(graph, backend="plotly", edge_color="0.6")
    assert fig.data[0].line.color == "rgb(153,153,153)"


def test_plotly_rejects_unmapped_colormap(graph):
    with pytest.raises(ValueError, match="tab20"):
        plot_graph(graph, backend="plotly", cmap="tab20")
    fig = plot_graph(graph, backend="plotly", cmap="viridis")
    assert fig.data[1].marker.colorscale is not None


def test_bad_arguments(graph):
    with pytest.raises(ValueError, match="Unknown backend"):
        plot_graph(graph, backend="vtk")
    with pytest.raises(ValueError, match="labels"):
        plot_graph(graph, labels=np.zeros(2, dtype=int))

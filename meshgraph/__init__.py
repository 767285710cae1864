"""
meshgraph: weighted vertex graphs of triangle meshes

A Python package that turns a triangulated surface into a compact, read-only
weighted graph over its vertices, with adjacency queries and connected-component
labeling for sampling and remeshing algorithms built on top of it.
"""

__version__ = "0.1.0"

# Component reporting
from .components import (
    ComponentSummary,
    component_members,
    component_sizes,
    num_components,
    summarize_components,
)

# Demo mesh functions from demo module
from .demo import (
    create_disjoint_triangles_mesh,
    create_icosphere_mesh,
    create_mesh_with_isolated_vertex,
    create_torus_mesh,
    create_triangle_mesh,
    create_two_spheres_mesh,
    create_unit_square_mesh,
)

# Graph (primary data structure)
from .graph import Graph, build_adjacency
from .options import GraphOptions

# Visualization
from .visualization import plot_graph

__all__ = [
    # Graph
    "Graph",
    "GraphOptions",
    "build_adjacency",
    # Components
    "ComponentSummary",
    "num_components",
    "component_sizes",
    "component_members",
    "summarize_components",
    # Visualization
    "plot_graph",
    # Demo mesh functions
    "create_triangle_mesh",
    "create_unit_square_mesh",
    "create_disjoint_triangles_mesh",
    "create_mesh_with_isolated_vertex",
    "create_icosphere_mesh",
    "create_torus_mesh",
    "create_two_spheres_mesh",
]

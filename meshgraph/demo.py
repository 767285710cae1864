"""
Demo mesh generation functions for meshgraph.

Provides small triangle meshes with known graph structure (edge counts,
degrees, number of components) for tutorials, tests and quick sanity checks,
plus a few closed surfaces built with `trimesh.creation`.

All meshes are created with `process=False` so vertex order and unreferenced
vertices are preserved exactly as written.
"""

from typing import Optional, Tuple

import numpy as np
import trimesh


def create_triangle_mesh(
    center: Tuple[float, float, float] = (0.0, 0.0, 0.0),
) -> trimesh.Trimesh:
    """
    Create a single right triangle with unit legs in the xy-plane.

    Graph: 3 vertices, 3 edges, every vertex of degree 2, one component.
    """
    vertices = np.array(
        [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]], dtype=float
    ) + np.asarray(center, dtype=float)
    faces = np.array([[0, 1, 2]], dtype=np.int64)
    mesh = trimesh.Trimesh(vertices=vertices, faces=faces, process=False)
    mesh.metadata["shape"] = "triangle"
    mesh.metadata["n_edges"] = 3
    mesh.metadata["n_components"] = 1
    return mesh


def create_unit_square_mesh() -> trimesh.Trimesh:
    """
    Create the unit square split into two triangles along the 0-2 diagonal.

    Graph: 4 vertices, 5 edges (4 sides + diagonal). Vertices 0 and 2 have
    degree 3, vertices 1 and 3 have degree 2.
    """
    vertices = np.array(
        [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [1.0, 1.0, 0.0], [0.0, 1.0, 0.0]],
        dtype=float,
    )
    faces = np.array([[0, 1, 2], [0, 2, 3]], dtype=np.int64)
    mesh = trimesh.Trimesh(vertices=vertices, faces=faces, process=False)
    mesh.metadata["shape"] = "unit_square"
    mesh.metadata["n_edges"] = 5
    mesh.metadata["n_components"] = 1
    return mesh


def create_disjoint_triangles_mesh(separation: float = 5.0) -> trimesh.Trimesh:
    """
    Create two triangles that share no vertices, offset along x.

    Graph: 6 vertices, 6 edges, two components of three vertices each.
    """
    a = create_triangle_mesh()
    b = create_triangle_mesh(center=(float(separation), 0.0, 0.0))
    vertices = np.vstack([a.vertices, b.vertices])
    faces = np.vstack([a.faces, b.faces + len(a.vertices)])
    mesh = trimesh.Trimesh(vertices=vertices, faces=faces, process=False)
    mesh.metadata["shape"] = "disjoint_triangles"
    mesh.metadata["n_edges"] = 6
    mesh.metadata["n_components"] = 2
    return mesh


def create_mesh_with_isolated_vertex(
    position: Tuple[float, float, float] = (3.0, 3.0, 3.0),
    index: Optional[int] = None,
) -> trimesh.Trimesh:
    """
    Create the single triangle plus one vertex that no face references.

    Args:
        position: Position of the isolated vertex.
        index: Where to insert the isolated vertex in the vertex array
            (default: appended last). Face indices are shifted accordingly.

    Graph: 4 vertices, 3 edges, the isolated vertex has degree 0 and forms its
    own component.
    """
    tri = create_triangle_mesh()
    n = len(tri.vertices)
    if index is None:
        index = n
    if not 0 <= index <= n:
        raise ValueError(f"index must be in [0, {n}], got {index}")
    vertices = np.insert(
        np.asarray(tri.vertices, dtype=float), index, np.asarray(position, dtype=float), axis=0
    )
    faces = np.asarray(tri.faces, dtype=np.int64).copy()
    faces[faces >= index] += 1
    mesh = trimesh.Trimesh(vertices=vertices, faces=faces, process=False)
    mesh.metadata["shape"] = "isolated_vertex"
    mesh.metadata["isolated_index"] = int(index)
    mesh.metadata["n_edges"] = 3
    mesh.metadata["n_components"] = 2
    return mesh


def create_icosphere_mesh(
    subdivisions: int = 2,
    radius: float = 1.0,
    center: Tuple[float, float, float] = (0.0, 0.0, 0.0),
) -> trimesh.Trimesh:
    """
    Create a closed icosphere.

    Args:
        subdivisions: Number of loop subdivisions of the base icosahedron
        radius: Sphere radius
        center: Center position (x, y, z)

    Returns:
        Trimesh icosphere. For a closed genus-0 triangle mesh
        E = 3F/2 and V - E + F = 2.
    """
    sphere = trimesh.creation.icosphere(subdivisions=subdivisions, radius=radius)
    if center != (0.0, 0.0, 0.0):
        sphere.apply_translation(center)
    sphere.metadata["shape"] = "icosphere"
    sphere.metadata["radius"] = radius
    sphere.metadata["n_edges"] = len(sphere.faces) * 3 // 2
    sphere.metadata["n_components"] = 1
    return sphere


def create_torus_mesh(
    major_radius: float = 2.0,
    minor_radius: float = 0.5,
    major_segments: int = 24,
    minor_segments: int = 12,
) -> trimesh.Trimesh:
    """
    Create a closed torus (genus 1, so V - E + F = 0).

    Args:
        major_radius: Radius from center of torus to center of tube
        minor_radius: Radius of the tube itself
        major_segments: Number of segments around the major radius
        minor_segments: Number of segments around the tube
    """
    # Keyword names differ across trimesh versions
    torus = None
    candidate_kwargs = [
        {
            "major_radius": major_radius,
            "minor_radius": minor_radius,
            "major_sections": major_segments,
            "minor_sections": minor_segments,
        },
        {
            "radius": major_radius,
            "tube_radius": minor_radius,
            "major_sections": major_segments,
            "minor_sections": minor_segments,
        },
    ]

    last_err: Optional[BaseException] = None
    for kwargs in candidate_kwargs:
        try:
            torus = trimesh.creation.torus(**kwargs)
            break
        except TypeError as e:
            last_err = e
            continue

    if torus is None:
        raise TypeError(
            f"Failed to construct torus with trimesh.creation.torus: {last_err}"
        )

    torus.metadata["shape"] = "torus"
    torus.metadata["n_edges"] = len(torus.faces) * 3 // 2
    torus.metadata["n_components"] = 1
    return torus


def create_two_spheres_mesh(
    subdivisions: int = 1, separation: float = 4.0
) -> trimesh.Trimesh:
    """
    Concatenate two icospheres that do not touch into one mesh.

    Graph: two components of equal size.
    """
    a = create_icosphere_mesh(subdivisions=subdivisions)
    b = create_icosphere_mesh(subdivisions=subdivisions, center=(separation, 0.0, 0.0))
    vertices = np.vstack([a.vertices, b.vertices])
    faces = np.vstack([a.faces, b.faces + len(a.vertices)])
    mesh = trimesh.Trimesh(vertices=vertices, faces=faces, process=False)
    mesh.metadata["shape"] = "two_spheres"
    mesh.metadata["n_edges"] = a.metadata["n_edges"] + b.metadata["n_edges"]
    mesh.metadata["n_components"] = 2
    return mesh

"""
Dual mesh reconstruction.

Every vertex of the subdivided triangulation becomes a polygon whose corners
("face points") are the normalized centroids of its incident leaf triangles.
The face points are ordered into a simple cycle, wound counter-clockwise as
seen from outside the sphere and emitted as a triangle fan around the polygon
center. On the icosahedral base this yields 12 pentagons and hexagons elsewhere.
"""

import logging
import numpy as np
from numpy.linalg import norm
from tqdm import tqdm
from typing import List, Tuple

from .VertexStructures import SourceVertex, GpuVertex
from .vertex_index import VertexIndex
from .utils import normalize, triangle_centroid

logger = logging.getLogger(__name__)

ORDERINGS = ("nearest", "angular")


def compute_face_points(vertex: SourceVertex, index: VertexIndex) -> List[np.ndarray]:
    face_points = []
    for tri in vertex.adjacent_triangles:
        face_points.append(normalize(triangle_centroid(
            index[tri.i0].position, index[tri.i1].position, index[tri.i2].position
        )))
    return face_points


def order_face_points_nearest(face_points: List[np.ndarray]) -> List[np.ndarray]:
    """
    Chain the face points greedily, each followed by its nearest unplaced neighbour.

    Point 0 is the anchor. The last point needs no choice and stays where the
    swaps leave it. Ties go to the earliest candidate.
    """
    points = list(face_points)
    for i in range(1, len(points) - 1):
        previous = points[i - 1]
        distances = [norm(p - previous) for p in points[i:]]
        nearest = i + int(np.argmin(distances))
        points[i], points[nearest] = points[nearest], points[i]
    return points


def order_face_points_angular(face_points: List[np.ndarray], center: np.ndarray) -> List[np.ndarray]:
    """
    Sort the face points by angle around the center in its tangent plane.

    Gives a valid polygon like the nearest neighbour chain, but not necessarily
    starting from the same point or visiting in the same direction.
    """
    normal = normalize(center)
    ref_vec = face_points[0] - center
    tangent = normalize(ref_vec - np.dot(ref_vec, normal) * normal)
    bitangent = np.cross(normal, tangent)

    angles = []
    for i, p in enumerate(face_points):
        vec = p - center
        angles.append((np.arctan2(np.dot(vec, bitangent), np.dot(vec, tangent)), i))
    angles.sort()
    return [face_points[i] for _, i in angles]


def build_dual_polygon(vertex: SourceVertex, index: VertexIndex,
                       ordering: str = "nearest") -> Tuple[np.ndarray, np.ndarray, List[np.ndarray]]:
    """
    Build the dual polygon around one source vertex.

    Args:
        vertex (SourceVertex): Vertex with its incident leaf triangles.
        index (VertexIndex): Source vertex table the triangles refer to.
        ordering (str): "nearest" for the greedy nearest neighbour chain,
            "angular" for an angle sort around the normal.

    Returns:
        Tuple[np.ndarray, np.ndarray, List[np.ndarray]]: polygon center, unit
        outward normal and the face points wound counter-clockwise around it.
    """
    assert vertex.adjacent_triangles, "dual polygon requested for a vertex without adjacent triangles"

    face_points = compute_face_points(vertex, index)
    assert len(face_points) >= 3, f"degenerate dual polygon with {len(face_points)} face points"
    center = np.mean(face_points, axis=0)

    if ordering == "nearest":
        face_points = order_face_points_nearest(face_points)
    elif ordering == "angular":
        face_points = order_face_points_angular(face_points, center)
    else:
        raise ValueError(f"Unknown face point ordering '{ordering}', expected one of {ORDERINGS}")

    center = np.mean(face_points, axis=0)
    normal = normalize(center)

    # flip if wound clockwise as seen from outside
    r = np.cross(face_points[0] - center, face_points[1] - center)
    if np.dot(r, normal) < 0:
        face_points.reverse()

    return center, normal, face_points


def emit_polygon_fan(center: np.ndarray, normal: np.ndarray, face_points: List[np.ndarray]) -> List[GpuVertex]:
    """One triangle (center, p[i], p[i + 1]) per polygon edge, all sharing ``normal``."""
    vertices = []
    k = len(face_points)
    for i in range(k):
        vertices.append(GpuVertex(center, normal))
        vertices.append(GpuVertex(face_points[i], normal))
        vertices.append(GpuVertex(face_points[(i + 1) % k], normal))
    return vertices


def initialize_dual(index: VertexIndex, ordering: str = "nearest",
                    progress: bool = False) -> Tuple[List[GpuVertex], List[int]]:
    """
    Emit the dual mesh of the subdivided triangulation.

    Vertices without adjacent triangles are skipped.

    Returns:
        Tuple[List[GpuVertex], List[int]]: the flat triangle list and the
        number of face points of each emitted polygon, in vertex order.
    """
    vertices: List[GpuVertex] = []
    polygon_sizes: List[int] = []
    for source_vertex in tqdm(index.vertices, desc="Building dual polygons", disable=not progress):
        if not source_vertex.adjacent_triangles:
            continue
        center, normal, face_points = build_dual_polygon(source_vertex, index, ordering)
        vertices.extend(emit_polygon_fan(center, normal, face_points))
        polygon_sizes.append(len(face_points))

    logger.debug(f"Built {len(polygon_sizes)} dual polygons ({ordering} ordering)")
    return vertices, polygon_sizes

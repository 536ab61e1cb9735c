"""
Recursive subdivision of the base icosahedron.

Each base triangle is split into four children (three corner triangles and the
center triangle) until the configured depth is reached. The walk is driven by an
explicit work list instead of the call stack and hands every leaf triangle to a
sink, which decides what the leaf turns into:

- ``TriangleSink`` emits the flat shaded triangle straight away,
- ``LeafTriangleSink`` only records it, for the dual reconstruction.
"""

import logging
from typing import List, Iterable

from .VertexStructures import AdjacentTriangle, GpuVertex
from .vertex_index import VertexIndex
from .utils import midpoint, triangle_centroid

logger = logging.getLogger(__name__)


class LeafSink:
    """Receives the leaf triangles of the subdivision in depth-first order."""

    def add_leaf(self, index: VertexIndex, i0: int, i1: int, i2: int) -> None:
        raise NotImplementedError


class TriangleSink(LeafSink):
    """Emits three ``GpuVertex`` records per leaf, all carrying the triangle centroid."""

    def __init__(self):
        self.vertices: List[GpuVertex] = []

    def add_leaf(self, index, i0, i1, i2):
        v0 = index[i0].position
        v1 = index[i1].position
        v2 = index[i2].position
        vn = triangle_centroid(v0, v1, v2)
        self.vertices.append(GpuVertex(v0, vn))
        self.vertices.append(GpuVertex(v1, vn))
        self.vertices.append(GpuVertex(v2, vn))


class LeafTriangleSink(LeafSink):
    """Collects the leaf triangles without emitting anything."""

    def __init__(self):
        self.triangles: List[AdjacentTriangle] = []

    def add_leaf(self, index, i0, i1, i2):
        self.triangles.append(AdjacentTriangle(i0, i1, i2))


def subdivide_triangle(index: VertexIndex, i0: int, i1: int, i2: int,
                       max_subdivisions: int, sink: LeafSink, level: int = 0) -> None:
    """
    Subdivide one triangle down to ``max_subdivisions`` and feed its leaves to ``sink``.

    Args:
        index (VertexIndex): Source vertex table, extended with the new midpoints.
        i0, i1, i2 (int): Corner indices of the triangle.
        max_subdivisions (int): Depth at which triangles become leaves.
        sink (LeafSink): Consumer of the leaf triangles.
        level (int): Depth of the given triangle.
    """
    stack = [(i0, i1, i2, level)]
    while stack:
        i0, i1, i2, level = stack.pop()
        if level == max_subdivisions:
            sink.add_leaf(index, i0, i1, i2)
            continue

        v0 = index[i0].position
        v1 = index[i1].position
        v2 = index[i2].position

        i01 = index.maybe_add_vertex(midpoint(v0, v1, i0, i1))
        i12 = index.maybe_add_vertex(midpoint(v1, v2, i1, i2))
        i20 = index.maybe_add_vertex(midpoint(v2, v0, i2, i0))

        # Pushed in reverse so leaves pop in recursive depth-first order
        stack.append((i01, i12, i20, level + 1))
        stack.append((i20, i12, i2, level + 1))
        stack.append((i01, i1, i12, level + 1))
        stack.append((i0, i01, i20, level + 1))


def subdivide_mesh(index: VertexIndex, triangles: Iterable, max_subdivisions: int, sink: LeafSink) -> None:
    """Subdivide every (0-based) base triangle in order."""
    for triangle in triangles:
        i0, i1, i2 = (int(i) for i in triangle)
        subdivide_triangle(index, i0, i1, i2, max_subdivisions, sink)
    logger.debug(f"Subdivided to depth {max_subdivisions}: {len(index)} source vertices")


def collect_leaf_triangles(index: VertexIndex, triangles: Iterable, max_subdivisions: int) -> List[AdjacentTriangle]:
    """First pass of the dual construction: the ordered list of leaf triangles."""
    sink = LeafTriangleSink()
    subdivide_mesh(index, triangles, max_subdivisions, sink)
    return sink.triangles


def build_vertex_adjacency(index: VertexIndex, leaf_triangles: Iterable[AdjacentTriangle]) -> None:
    """
    Second pass of the dual construction: attach every leaf triangle to its corners.

    Triangles are appended in leaf order, so each adjacency list follows the
    depth-first order of the subdivision.
    """
    for triangle in leaf_triangles:
        index[triangle.i0].adjacent_triangles.append(triangle)
        index[triangle.i1].adjacent_triangles.append(triangle)
        index[triangle.i2].adjacent_triangles.append(triangle)

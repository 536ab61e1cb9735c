"""
Configuration handling and sphere generation orchestration.

This module validates the generation parameters, runs the base mesh ->
subdivision -> emission pipeline once and wraps the resulting flat vertex
buffer in a ``SphereGeometry``.
"""

import logging
import numpy as np
from collections import Counter
from typing import List, Dict, Any, Optional

from .VertexStructures import GpuVertex
from .vertex_index import VertexIndex
from .subdivision import TriangleSink, subdivide_mesh, collect_leaf_triangles, build_vertex_adjacency
from .dual import initialize_dual, ORDERINGS
from .utils import load_base_mesh

logger = logging.getLogger(__name__)

DEFAULT_MAX_SUBDIVISIONS = 3
DEFAULT_DUAL = True
DEFAULT_ORDERING = "nearest"


def validate_parameters(max_subdivisions, dual, ordering: str = DEFAULT_ORDERING,
                        precision: Optional[int] = None) -> None:
    """
    Reject invalid generation parameters before any work is done.

    Raises:
        ValueError: If any parameter is out of range or of the wrong type.
    """
    if isinstance(max_subdivisions, bool) or not isinstance(max_subdivisions, (int, np.integer)):
        raise ValueError(f"max_subdivisions must be an integer, got {max_subdivisions!r}")
    if max_subdivisions < 0:
        raise ValueError(f"max_subdivisions must be non-negative, got {max_subdivisions}")
    if not isinstance(dual, (bool, np.bool_)):
        raise ValueError(f"dual must be a boolean, got {dual!r}")
    if ordering not in ORDERINGS:
        raise ValueError(f"Unknown face point ordering '{ordering}', expected one of {ORDERINGS}")
    if precision is not None:
        if isinstance(precision, bool) or not isinstance(precision, (int, np.integer)) or precision < 0:
            raise ValueError(f"precision must be a non-negative integer or None, got {precision!r}")


class SphereGeometry:
    """
    Geodesic sphere as a flat, non-indexed triangle list.

    Generation runs once, on construction. Every 3 consecutive records of
    ``vertices`` form one triangle.

    Args:
        max_subdivisions (int): Recursion depth applied to each icosahedron face.
        dual (bool): Emit the hexagon/pentagon dual instead of the triangles.
        ordering (str): Face point ordering of the dual polygons.
        precision (Optional[int]): Vertex key quantization, None for exact keys.
        progress (bool): Show a progress bar while building dual polygons.
    """

    def __init__(self, max_subdivisions: int = DEFAULT_MAX_SUBDIVISIONS, dual: bool = DEFAULT_DUAL,
                 ordering: str = DEFAULT_ORDERING, precision: Optional[int] = None, progress: bool = False):
        validate_parameters(max_subdivisions, dual, ordering, precision)
        self.max_subdivisions = int(max_subdivisions)
        self.dual = bool(dual)
        self.ordering = ordering
        self.precision = precision

        self.vertices: List[GpuVertex] = []
        self.polygon_sizes: List[int] = []
        self.source_vertex_count = 0
        self.leaf_triangle_count = 0
        self._initialize_geometry(progress)

    def _initialize_geometry(self, progress: bool) -> None:
        base_vertices, base_triangles = load_base_mesh()

        index = VertexIndex(self.precision)
        for vertex in base_vertices:
            index.maybe_add_vertex(vertex)

        if self.dual:
            leaf_triangles = collect_leaf_triangles(index, base_triangles, self.max_subdivisions)
            self._check_vertex_count(index)
            build_vertex_adjacency(index, leaf_triangles)
            self.vertices, self.polygon_sizes = initialize_dual(index, self.ordering, progress)
            self.leaf_triangle_count = len(leaf_triangles)
        else:
            sink = TriangleSink()
            subdivide_mesh(index, base_triangles, self.max_subdivisions, sink)
            self._check_vertex_count(index)
            self.vertices = sink.vertices
            self.leaf_triangle_count = len(sink.vertices) // 3

        self.source_vertex_count = len(index)
        logger.info(f"Generated {'dual' if self.dual else 'triangulated'} sphere: "
                    f"depth={self.max_subdivisions}, source vertices={self.source_vertex_count}, "
                    f"leaf triangles={self.leaf_triangle_count}, gpu vertices={len(self.vertices)}")

    def _check_vertex_count(self, index: VertexIndex) -> None:
        # A key grid coarser than the edge length merges distinct vertices
        expected = 10 * 4 ** self.max_subdivisions + 2
        if len(index) != expected:
            raise ValueError(f"precision={self.precision} merged distinct vertices at depth "
                             f"{self.max_subdivisions}: {len(index)} source vertices, expected {expected}")

    def __len__(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.vertices) // 3

    @property
    def positions(self) -> np.ndarray:
        return np.array([v.position for v in self.vertices], dtype=float).reshape((-1, 3))

    @property
    def normals(self) -> np.ndarray:
        return np.array([v.normal for v in self.vertices], dtype=float).reshape((-1, 3))

    def to_array(self, dtype=np.float32) -> np.ndarray:
        """Interleaved (N, 2, 3) array of (position, normal) records, ready for upload."""
        return np.stack((self.positions, self.normals), axis=1).astype(dtype)

    def summary(self) -> Dict[str, Any]:
        summary = {
            "max_subdivisions": self.max_subdivisions,
            "dual": self.dual,
            "vertex_count": len(self.vertices),
            "triangle_count": self.triangle_count,
            "source_vertex_count": self.source_vertex_count,
            "leaf_triangle_count": self.leaf_triangle_count,
        }
        if self.dual:
            summary["ordering"] = self.ordering
            summary["polygon_count"] = len(self.polygon_sizes)
            summary["polygon_sizes"] = {str(k): v for k, v in sorted(Counter(self.polygon_sizes).items())}
        if self.precision is not None:
            summary["precision"] = self.precision
        return summary

    def __str__(self) -> str:
        return (f"SphereGeometry(max_subdivisions={self.max_subdivisions}, dual={self.dual}, "
                f"vertices={len(self.vertices)})")


def sphere_parameters(config: dict) -> Dict[str, Any]:
    """Read the generation parameters from the ``sphere`` section of a config."""
    sphere_config = config.get("sphere") or {}
    return {
        "max_subdivisions": sphere_config.get("max_subdivisions", DEFAULT_MAX_SUBDIVISIONS),
        "dual": sphere_config.get("dual", DEFAULT_DUAL),
        "ordering": sphere_config.get("ordering", DEFAULT_ORDERING),
        "precision": sphere_config.get("precision"),
    }


def generate_sphere_geometry(config: dict, progress: bool = False) -> SphereGeometry:
    """
    Generate a sphere from a configuration dictionary.

    Args:
        config (dict): Configuration with an optional ``sphere`` section holding
            ``max_subdivisions``, ``dual``, ``ordering`` and ``precision``.
        progress (bool): Show a progress bar while building dual polygons.

    Returns:
        SphereGeometry: The generated sphere.
    """
    params = sphere_parameters(config)
    logger.debug(f"Sphere parameters: {params}")
    return SphereGeometry(progress=progress, **params)


def sphere_to_dict(geometry: SphereGeometry) -> Dict[str, Any]:
    """
    Convert a sphere to a JSON serializable dictionary.

    Args:
        geometry (SphereGeometry): Generated sphere.

    Returns:
        dict: The ``summary()`` entries plus ``positions`` and ``normals`` as
              nested (N, 3) lists.
    """
    result_dict = geometry.summary()
    result_dict["positions"] = geometry.positions.tolist()
    result_dict["normals"] = geometry.normals.tolist()
    return result_dict

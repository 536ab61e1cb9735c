"""
Vertex deduplication for sphere subdivision.

Every point produced while subdividing goes through ``VertexIndex.maybe_add_vertex``,
which hands back the index of an existing vertex at the same position or appends
a new one. Shared edge midpoints of neighbouring triangles therefore collapse to
a single vertex and the mesh stays watertight.
"""

import numpy as np
from typing import Dict, List, Optional, Tuple

from .VertexStructures import SourceVertex


class VertexIndex:
    """
    Source vertex table with a coordinate -> index lookup.

    Args:
        precision (Optional[int]): None keys vertices by their exact float
            coordinates. An integer snaps coordinates to a grid of
            ``10 ** -precision`` before lookup, so points that differ only by
            rounding noise below the grid step resolve to the same vertex.
    """

    def __init__(self, precision: Optional[int] = None):
        if precision is not None and precision < 0:
            raise ValueError(f"Key precision must be non-negative, got {precision}")
        self.precision = precision
        self._scale = None if precision is None else 10.0 ** precision
        self.vertices: List[SourceVertex] = []
        self._indices: Dict[Tuple, int] = {}

    def key(self, position: np.ndarray) -> Tuple:
        if self._scale is None:
            return (float(position[0]), float(position[1]), float(position[2]))
        return tuple(np.rint(np.asarray(position) * self._scale).astype(np.int64).tolist())

    def maybe_add_vertex(self, position: np.ndarray) -> int:
        """
        Return the index of the vertex at ``position``, adding it if it is new.

        Args:
            position (np.ndarray): Point already projected onto the unit sphere.

        Returns:
            int: Index into ``self.vertices``.
        """
        key = self.key(position)
        index = self._indices.get(key)
        if index is not None:
            return index
        index = len(self.vertices)
        self.vertices.append(SourceVertex(np.array(position, dtype=float)))
        self._indices[key] = index
        return index

    def positions(self) -> np.ndarray:
        """(N, 3) array of all vertex positions in index order."""
        if not self.vertices:
            return np.zeros((0, 3))
        return np.array([v.position for v in self.vertices])

    def __len__(self) -> int:
        return len(self.vertices)

    def __getitem__(self, index: int) -> SourceVertex:
        return self.vertices[index]

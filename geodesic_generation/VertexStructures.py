from typing import Dict, Any, List, NamedTuple
import numpy as np


class AdjacentTriangle(NamedTuple):
    """Leaf triangle incident to a source vertex, as indices into the vertex table."""
    i0: int
    i1: int
    i2: int


class SourceVertex:
    """Vertex of the subdivided triangulation together with its incident leaf triangles."""

    def __init__(self, position: np.ndarray):
        self.position = position
        self.adjacent_triangles: List[AdjacentTriangle] = []

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "position": self.position.tolist(),
            "adjacent_triangles": [list(t) for t in self.adjacent_triangles],
        }

    def __str__(self) -> str:
        x, y, z = self.position
        return (f"SourceVertex(position=({x:.6f}, {y:.6f}, {z:.6f}), "
                f"adjacent_triangles={len(self.adjacent_triangles)})")


class GpuVertex(NamedTuple):
    """
    Vertex record handed to the renderer.

    For triangulated spheres ``normal`` is the un-normalized centroid of the
    triangle, for dual spheres it is the unit outward normal of the polygon.
    """
    position: np.ndarray
    normal: np.ndarray

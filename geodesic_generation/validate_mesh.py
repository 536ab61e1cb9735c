import json
import logging
import numpy as np
from scipy.spatial import KDTree

logger = logging.getLogger(__name__)


def expected_source_vertex_count(max_subdivisions: int) -> int:
    return 10 * 4 ** max_subdivisions + 2


def expected_leaf_triangle_count(max_subdivisions: int) -> int:
    return 20 * 4 ** max_subdivisions


def distinct_mesh_points(geometry) -> np.ndarray:
    """
    Distinct polygon corners of the emitted buffer.

    Triangulated spheres: the subdivided vertices. Dual spheres: the face
    points, i.e. every fan vertex except the polygon centers.
    """
    positions = geometry.positions
    if geometry.dual:
        positions = np.delete(positions, np.s_[::3], axis=0)
    return np.unique(positions, axis=0)


def mesh_debug_info(geometry) -> dict:
    """Collect counts and distance statistics of a generated sphere."""
    positions = geometry.positions
    points = distinct_mesh_points(geometry)
    lengths = np.linalg.norm(points, axis=1)

    tree = KDTree(points)
    distances, _ = tree.query(points, k=min(2, len(points)))
    nearest = distances[:, 1] if distances.ndim > 1 and distances.shape[1] > 1 else None

    return {
        "mesh_overview": geometry.summary(),
        "vertex_analysis": {
            "distinct_points": len(points),
            "coordinate_ranges": {
                "x": [float(np.min(positions[:, 0])), float(np.max(positions[:, 0]))],
                "y": [float(np.min(positions[:, 1])), float(np.max(positions[:, 1]))],
                "z": [float(np.min(positions[:, 2])), float(np.max(positions[:, 2]))],
            },
            "radius": {
                "min": float(np.min(lengths)),
                "max": float(np.max(lengths)),
            },
            "distance_statistics": {
                "min_distance": float(np.min(nearest)) if nearest is not None else None,
                "max_distance": float(np.max(nearest)) if nearest is not None else None,
                "mean_distance": float(np.mean(nearest)) if nearest is not None else None,
                "std_distance": float(np.std(nearest)) if nearest is not None else None,
            },
        },
    }


def save_mesh_debug(geometry, filename: str = "sphere_mesh_debug.json") -> str:
    """Save ``mesh_debug_info`` as JSON."""
    with open(filename, "w") as f:
        json.dump(mesh_debug_info(geometry), f, indent=2)
    logger.info(f"Mesh debug info saved to {filename}")
    return filename


def validate_mesh(geometry, tolerance: float = 1e-5, min_vertex_distance: float = 1e-6) -> bool:
    """
    Validate the structure and geometric invariants of a generated sphere.

    Args:
        geometry: A ``SphereGeometry``.
        tolerance: Allowed deviation from unit length and from zero for the
            winding test.
        min_vertex_distance: Smallest allowed distance between two distinct
            mesh points; anything closer is an undeduplicated seam.

    Returns:
        bool: True if the mesh is valid

    Raises:
        ValueError: If the mesh doesn't meet a requirement
    """
    logger.info(f"Validating {geometry}")
    positions = geometry.positions
    normals = geometry.normals

    _validate_mesh_structure(positions, normals)
    _validate_counts(geometry)
    _validate_unit_length(distinct_mesh_points(geometry), tolerance)
    _validate_vertex_uniqueness(geometry, min_vertex_distance)
    if geometry.dual:
        _validate_unit_length(normals, tolerance, what="normals")
        _validate_winding(positions, normals, tolerance)

    logger.info("All mesh validations passed.")
    return True


def _validate_mesh_structure(positions, normals):
    if len(positions) == 0:
        raise ValueError("Mesh data is empty")
    if positions.shape[1] != 3 or normals.shape[1] != 3:
        raise ValueError("Positions and normals must be 3D vectors")
    if positions.shape != normals.shape:
        raise ValueError("Every vertex record needs one position and one normal")
    if len(positions) % 3 != 0:
        raise ValueError(f"Vertex count {len(positions)} is not a multiple of 3")


def _validate_counts(geometry):
    d = geometry.max_subdivisions
    if geometry.source_vertex_count != expected_source_vertex_count(d):
        raise ValueError(f"Expected {expected_source_vertex_count(d)} source vertices at depth {d}, "
                         f"found {geometry.source_vertex_count}")
    if geometry.leaf_triangle_count != expected_leaf_triangle_count(d):
        raise ValueError(f"Expected {expected_leaf_triangle_count(d)} leaf triangles at depth {d}, "
                         f"found {geometry.leaf_triangle_count}")

    # 3 records per triangle; in the dual every leaf triangle shows up as a
    # fan triangle around each of its 3 corners
    triangles = expected_leaf_triangle_count(d)
    if geometry.dual:
        triangles *= 3
        if sum(geometry.polygon_sizes) != triangles:
            raise ValueError(f"Dual polygons have {sum(geometry.polygon_sizes)} face points, expected {triangles}")
        if len(geometry.polygon_sizes) != expected_source_vertex_count(d):
            raise ValueError(f"Expected one dual polygon per source vertex, found {len(geometry.polygon_sizes)}")

    if len(geometry) != 3 * triangles:
        raise ValueError(f"Found {len(geometry)} vertex records, expected {3 * triangles}")


def _validate_unit_length(points, tolerance, what="mesh points"):
    deviation = np.abs(np.linalg.norm(points, axis=1) - 1.0)
    if np.any(deviation > tolerance):
        raise ValueError(f"{int(np.sum(deviation > tolerance))} {what} are off the unit sphere "
                         f"(max deviation {float(np.max(deviation)):.3e})")


def _validate_vertex_uniqueness(geometry, min_distance):
    points = distinct_mesh_points(geometry)
    expected = geometry.source_vertex_count if not geometry.dual else geometry.leaf_triangle_count
    if len(points) != expected:
        raise ValueError(f"Found {len(points)} distinct mesh points, expected {expected}")

    tree = KDTree(points)
    distances, _ = tree.query(points, k=2)
    closest = float(np.min(distances[:, 1]))
    if closest < min_distance:
        problem_count = int(np.sum(distances[:, 1] < min_distance))
        raise ValueError(f"{problem_count} mesh points closer than {min_distance} to a neighbour "
                         f"(min: {closest:.3e})")
    logger.debug(f"Minimum distance between mesh points: {closest:.6f}")


def _validate_winding(positions, normals, tolerance):
    a = positions[0::3]
    b = positions[1::3]
    c = positions[2::3]
    winding = np.einsum("ij,ij->i", np.cross(b - a, c - a), normals[0::3])
    if np.any(winding < -tolerance):
        raise ValueError(f"{int(np.sum(winding < -tolerance))} dual fan triangles are wound clockwise")

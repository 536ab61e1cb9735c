import numpy as np
from numpy.linalg import norm
from typing import Tuple, Optional

# Base icosahedron, stored the way it is usually tabulated: coordinates
# rounded to 6 decimals and triangle corners numbered from 1.
ICOSAHEDRON_VERTICES = [
    [0.0, -0.525731, 0.850651], [0.850651, 0.0, 0.525731], [0.850651, 0.0, -0.525731],
    [-0.850651, 0.0, -0.525731], [-0.850651, 0.0, 0.525731], [-0.525731, 0.850651, 0.0],
    [0.525731, 0.850651, 0.0], [0.525731, -0.850651, 0.0], [-0.525731, -0.850651, 0.0],
    [0.0, -0.525731, -0.850651], [0.0, 0.525731, -0.850651], [0.0, 0.525731, 0.850651],
]
ICOSAHEDRON_TRIANGLES = [
    [2, 3, 7], [2, 8, 3], [4, 5, 6], [5, 4, 9], [7, 6, 12],
    [6, 7, 11], [10, 11, 3], [11, 10, 4], [8, 9, 10], [9, 8, 1],
    [12, 1, 2], [1, 12, 5], [7, 3, 11], [2, 7, 12], [4, 6, 11],
    [6, 5, 12], [3, 8, 10], [8, 2, 1], [4, 10, 9], [5, 9, 1],
]


# GENERAL UTILS
def load_yaml(filename: str):
    import yaml
    # Load the config from the specified path
    with open(filename, "r") as f:
        config = yaml.safe_load(f)
    return config or {}

def generate_sphere_file_code(max_subdivisions: int, dual: bool, ordering: str = "nearest",
                              precision: Optional[int] = None) -> str:
    file_code = f"geodesic_s{max_subdivisions}_{'dual' if dual else 'tri'}"
    if dual and ordering != "nearest":
        file_code += f"_{ordering}"
    if precision is not None:
        file_code += f"_p{precision}"
    return file_code

def gzip_file(filename: str) -> str:
    """ Compress a file using gzip and return the compressed file name.

    Args:
        filename (str): The name of the file to compress.

    Returns:
        str: The name of the compressed file.
    """
    import gzip
    import shutil

    compressed_filename = filename + '.gz'
    with open(filename, 'rb') as f_in:
        with gzip.open(compressed_filename, 'wb') as f_out:
            shutil.copyfileobj(f_in, f_out)
    return compressed_filename


# VECTOR UTILS
def normalize(v: np.ndarray) -> np.ndarray:
    """Project a single 3D vector onto the unit sphere."""
    return v / norm(v)

def to_sphere(vertices: np.ndarray, radius=1, center=(0, 0, 0)) -> np.ndarray:
    """Project an (N, 3) array of vertices onto a sphere."""
    length = norm(vertices, axis=1).reshape((-1, 1))
    return vertices / length * radius + center

def midpoint(vi: np.ndarray, vj: np.ndarray, i: int, j: int) -> np.ndarray:
    """
    Normalized midpoint of the edge between source vertices i and j.

    The endpoints are always summed in ascending index order, so both
    triangles sharing an edge produce a bit-identical point.
    """
    if j < i:
        vi, vj = vj, vi
    return normalize(0.5 * (vi + vj))

def triangle_centroid(v0: np.ndarray, v1: np.ndarray, v2: np.ndarray) -> np.ndarray:
    return (1.0 / 3) * (v0 + v1 + v2)


# BASE MESH
def get_icosahedron_geometry() -> Tuple[np.ndarray, np.ndarray]:
    """Get the tabulated icosahedron vertices and 1-based triangle corners."""
    vertices = np.array(ICOSAHEDRON_VERTICES, dtype=float)
    triangles = np.array(ICOSAHEDRON_TRIANGLES, dtype=int)
    return vertices, triangles

def load_base_mesh() -> Tuple[np.ndarray, np.ndarray]:
    """
    Load the icosahedron used as the subdivision seed.

    Returns:
        Tuple[np.ndarray, np.ndarray]: (12, 3) vertices projected onto the unit
        sphere and (20, 3) triangle corner indices converted to 0-based.
    """
    vertices, triangles = get_icosahedron_geometry()
    return to_sphere(vertices), triangles - 1

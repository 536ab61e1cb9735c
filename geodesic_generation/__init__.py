"""
Geodesic sphere generation module containing the core mesh generation functionality.

This module contains the following components:
- VertexStructures: SourceVertex, AdjacentTriangle and GpuVertex record types
- utils: Base icosahedron, vector helpers, YAML loading and file utilities
- vertex_index: Deduplicating source vertex table (maybe_add_vertex)
- subdivision: Iterative icosahedron subdivision feeding leaf triangles to sinks
- dual: Reconstruction of the hexagon/pentagon dual polygons
- process: Parameter validation and generation orchestration (SphereGeometry)
- validate_mesh: Functions for validating and debugging generated spheres
"""

from .VertexStructures import SourceVertex, AdjacentTriangle, GpuVertex
from .utils import (
    load_yaml, generate_sphere_file_code, gzip_file,
    normalize, to_sphere, midpoint, triangle_centroid,
    get_icosahedron_geometry, load_base_mesh
)
from .vertex_index import VertexIndex
from .subdivision import (
    LeafSink, TriangleSink, LeafTriangleSink,
    subdivide_triangle, subdivide_mesh, collect_leaf_triangles, build_vertex_adjacency
)
from .dual import (
    compute_face_points, order_face_points_nearest, order_face_points_angular,
    build_dual_polygon, emit_polygon_fan, initialize_dual
)
from .process import SphereGeometry, validate_parameters, generate_sphere_geometry, sphere_to_dict
from .validate_mesh import validate_mesh, mesh_debug_info, save_mesh_debug

__all__ = [
    'SourceVertex', 'AdjacentTriangle', 'GpuVertex',
    'load_yaml', 'generate_sphere_file_code', 'gzip_file',
    'normalize', 'to_sphere', 'midpoint', 'triangle_centroid',
    'get_icosahedron_geometry', 'load_base_mesh',
    'VertexIndex',
    'LeafSink', 'TriangleSink', 'LeafTriangleSink',
    'subdivide_triangle', 'subdivide_mesh', 'collect_leaf_triangles', 'build_vertex_adjacency',
    'compute_face_points', 'order_face_points_nearest', 'order_face_points_angular',
    'build_dual_polygon', 'emit_polygon_fan', 'initialize_dual',
    'SphereGeometry', 'validate_parameters', 'generate_sphere_geometry', 'sphere_to_dict',
    'validate_mesh', 'mesh_debug_info', 'save_mesh_debug'
]

"""
3D visualization of generated geodesic spheres.

Functions
---------
visualize_sphere_3d
    Shaded Matplotlib view of the flat triangle list
"""

from .visualize_sphere_3d import visualize_sphere_3d

__all__ = [
    'visualize_sphere_3d'
]

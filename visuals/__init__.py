"""
Visualization package for generated geodesic spheres.

Submodules
----------
d3 : module
    3D Matplotlib preview of the flat triangle list
utils : module
    Shading, collection building and figure helpers

Examples
--------
>>> from visuals.d3 import visualize_sphere_3d
>>> from visuals import utils
"""

from . import utils
from . import d3
from .d3 import visualize_sphere_3d

__all__ = [
    'utils',
    'd3',
    'visualize_sphere_3d'
]

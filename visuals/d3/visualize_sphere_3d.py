import numpy as np
import matplotlib.pyplot as plt

from ..utils import (
    shade_by_normal,
    create_3d_triangle_collection,
    setup_3d_axis_equal_aspect,
    save_figure_if_path_provided,
)


def visualize_sphere_3d(geometry, show_wireframe=True, alpha=1.0, color=(0.25, 0.41, 0.88),
                        rotation=(20, -60), show_axes=False, show_title=True, save_path=None, show=True):
    """
    Draw a generated sphere with Matplotlib.

    Each triangle is shaded from the normal stored in its first vertex record,
    so triangulated spheres shade per triangle and dual spheres per polygon.

    Parameters
    ----------
    geometry : SphereGeometry
        The sphere to draw.
    show_wireframe : bool, optional
        Whether to draw triangle edges, by default True.
    alpha : float, optional
        Transparency of the surface, by default 1.0.
    color : tuple, optional
        Base RGB color of the surface.
    rotation : tuple, optional
        (elevation, azimuth) of the camera in degrees.
    show_axes : bool, optional
        Whether to draw the axes, by default False.
    show_title : bool, optional
        Whether to set a figure title, by default True.
    save_path : str, optional
        Where to save the figure. If None, the figure is not saved.
    show : bool, optional
        Whether to call ``plt.show()``, by default True.

    Returns
    -------
    matplotlib.figure.Figure
        The figure.
    """
    positions = geometry.positions
    triangles = positions.reshape((-1, 3, 3))
    face_colors = shade_by_normal(geometry.normals[0::3], color=color)

    fig = plt.figure(figsize=(8, 8))
    ax = fig.add_subplot(111, projection='3d')

    collection = create_3d_triangle_collection(triangles, face_colors, show_wireframe, alpha)
    if collection is not None:
        ax.add_collection3d(collection)

    setup_3d_axis_equal_aspect(ax, positions if len(positions) else np.zeros((1, 3)))
    ax.view_init(elev=rotation[0], azim=rotation[1])
    if not show_axes:
        ax.set_axis_off()

    if show_title:
        kind = "Dual" if geometry.dual else "Triangulated"
        fig.suptitle(f"{kind} geodesic sphere (subdivisions: {geometry.max_subdivisions})",
                     fontsize=14, fontweight='bold')

    save_figure_if_path_provided(fig, save_path)
    if show:
        plt.show()
    return fig

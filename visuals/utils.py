import os
import logging
import numpy as np

logger = logging.getLogger(__name__)


def shade_by_normal(normals, color=(0.25, 0.41, 0.88), light_direction=(1.0, 1.0, 2.0), ambient=0.3):
    """
    Lambert shading of one RGB color per triangle.

    Parameters
    ----------
    normals : np.ndarray
        Array of shape (M, 3), one normal per triangle. Normals do not need to
        be unit length.
    color : tuple
        Base RGB color.
    light_direction : tuple
        Direction towards the light.
    ambient : float
        Minimum brightness of faces turned away from the light.

    Returns
    -------
    np.ndarray
        Array of shape (M, 3) with RGB face colors.
    """
    light = np.asarray(light_direction, dtype=float)
    light /= np.linalg.norm(light)
    lengths = np.linalg.norm(normals, axis=1, keepdims=True)
    unit = normals / np.where(lengths == 0, 1.0, lengths)
    intensity = ambient + (1.0 - ambient) * np.clip(unit @ light, 0.0, 1.0)
    return np.clip(intensity[:, None] * np.asarray(color)[None, :], 0.0, 1.0)


def create_3d_triangle_collection(triangles, face_colors, show_wireframe=True, alpha=1.0):
    """
    Create a 3D collection from a flat triangle list.

    Parameters
    ----------
    triangles : np.ndarray
        Array of shape (M, 3, 3): M triangles of 3 corner positions.
    face_colors : np.ndarray
        Array of shape (M, 3) with RGB colors.
    show_wireframe : bool, optional
        Whether to draw the triangle edges, by default True.
    alpha : float, optional
        Transparency of the faces, by default 1.0.

    Returns
    -------
    Poly3DCollection or None
        The collection, or None if there are no triangles.
    """
    from mpl_toolkits.mplot3d.art3d import Poly3DCollection

    if len(triangles) == 0:
        return None
    return Poly3DCollection(
        triangles,
        facecolors=face_colors,
        edgecolors=(0, 0, 0, 0.5) if show_wireframe else face_colors,
        linewidths=0.3 if show_wireframe else 0,
        alpha=alpha
    )


def setup_3d_axis_equal_aspect(ax, points):
    """Set equal x/y/z limits around the bounding box of ``points``."""
    max_range = (points.max(axis=0) - points.min(axis=0)).max() / 2.0
    mid = (points.max(axis=0) + points.min(axis=0)) * 0.5

    ax.set_xlim(mid[0] - max_range, mid[0] + max_range)
    ax.set_ylim(mid[1] - max_range, mid[1] + max_range)
    ax.set_zlim(mid[2] - max_range, mid[2] + max_range)
    ax.set_box_aspect([1, 1, 1])


def save_figure_if_path_provided(fig, save_path=None, dpi=150, bbox_inches='tight', create_dirs=True, **kwargs):
    """
    Save a matplotlib figure to a file if a save path is provided.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        The figure to save.
    save_path : str, optional
        Destination; the extension selects the format. Nothing is saved if None.
    dpi : int, optional
        Resolution in dots per inch, by default 150.
    create_dirs : bool, optional
        Whether to create missing parent directories, by default True.

    Returns
    -------
    str or None
        The path the figure was saved to, or None.
    """
    if save_path is None:
        return None

    if create_dirs:
        dir_path = os.path.dirname(save_path)
        if dir_path and not os.path.exists(dir_path):
            os.makedirs(dir_path, exist_ok=True)

    fig.savefig(save_path, dpi=dpi, bbox_inches=bbox_inches, **kwargs)
    logger.info(f"Figure saved to: {save_path}")
    return save_path

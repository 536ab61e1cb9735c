import numpy as np
import pytest

from geodesic_generation.vertex_index import VertexIndex


def test_maybe_add_vertex_is_idempotent() -> None:
    index = VertexIndex()
    p = np.array([0.0, 0.6, 0.8])

    first = index.maybe_add_vertex(p)
    second = index.maybe_add_vertex(p.copy())

    assert first == second == 0
    assert len(index) == 1


def test_new_points_get_consecutive_indices() -> None:
    index = VertexIndex()

    assert index.maybe_add_vertex(np.array([1.0, 0.0, 0.0])) == 0
    assert index.maybe_add_vertex(np.array([0.0, 1.0, 0.0])) == 1
    assert index.maybe_add_vertex(np.array([0.0, 0.0, 1.0])) == 2
    assert index.maybe_add_vertex(np.array([0.0, 1.0, 0.0])) == 1
    assert index.positions().shape == (3, 3)
    assert index[2].adjacent_triangles == []


def test_exact_keys_keep_rounding_noise_apart() -> None:
    index = VertexIndex()
    p = np.array([0.0, 0.6, 0.8])
    q = p.copy()
    q[1] = np.nextafter(q[1], 1.0)

    assert index.maybe_add_vertex(p) != index.maybe_add_vertex(q)


def test_quantized_keys_collapse_rounding_noise() -> None:
    index = VertexIndex(precision=9)
    p = np.array([0.0, 0.6, 0.8])
    q = p + 1e-13

    assert index.maybe_add_vertex(p) == index.maybe_add_vertex(q)
    assert len(index) == 1
    # the first position seen is the one stored
    assert index[0].position.tobytes() == p.tobytes()


def test_negative_precision_is_rejected() -> None:
    with pytest.raises(ValueError):
        VertexIndex(precision=-1)


def test_empty_index_positions() -> None:
    assert VertexIndex().positions().shape == (0, 3)

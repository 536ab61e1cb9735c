import json
import numpy as np
import pytest

from geodesic_generation.process import (
    SphereGeometry, validate_parameters, generate_sphere_geometry, sphere_parameters, sphere_to_dict
)


@pytest.mark.parametrize("max_subdivisions", [-1, -5, 1.5, "2", True, None])
def test_invalid_depth_is_rejected(max_subdivisions) -> None:
    with pytest.raises(ValueError):
        SphereGeometry(max_subdivisions, dual=False)


def test_invalid_parameters_are_rejected() -> None:
    with pytest.raises(ValueError):
        validate_parameters(1, dual="yes")
    with pytest.raises(ValueError):
        validate_parameters(1, dual=True, ordering="random")
    with pytest.raises(ValueError):
        validate_parameters(1, dual=True, precision=-2)
    validate_parameters(np.int64(2), dual=np.bool_(True), ordering="angular", precision=6)


def test_depth_zero_triangulated() -> None:
    sphere = SphereGeometry(0, dual=False)

    assert sphere.triangle_count == 20
    assert len(sphere) == 60
    assert sphere.source_vertex_count == 12


def test_depth_zero_dual() -> None:
    sphere = SphereGeometry(0, dual=True)

    assert sphere.polygon_sizes == [5] * 12
    assert sphere.triangle_count == 60
    assert len(sphere) == 180


def test_depth_one_triangulated() -> None:
    sphere = SphereGeometry(1, dual=False)

    assert sphere.leaf_triangle_count == 80
    assert len(sphere) == 240
    assert sphere.source_vertex_count == 42
    assert len(np.unique(sphere.positions, axis=0)) == 42


@pytest.mark.parametrize("dual", [False, True])
def test_quantized_keys_match_exact_keys(dual) -> None:
    exact = SphereGeometry(3, dual=dual)
    quantized = SphereGeometry(3, dual=dual, precision=9)

    assert quantized.source_vertex_count == exact.source_vertex_count
    assert len(quantized) == len(exact)


@pytest.mark.parametrize("dual", [False, True])
def test_collapsing_precision_is_rejected(dual) -> None:
    # a 1.0 grid step leaves at most 27 keys for 42 vertices
    with pytest.raises(ValueError, match="merged distinct vertices"):
        SphereGeometry(1, dual=dual, precision=0)


def test_generate_from_config_rejects_collapsing_precision() -> None:
    with pytest.raises(ValueError):
        generate_sphere_geometry({"sphere": {"max_subdivisions": 2, "precision": 0}})


def test_to_array_is_interleaved_float32() -> None:
    sphere = SphereGeometry(1, dual=True)
    buffer = sphere.to_array()

    assert buffer.shape == (len(sphere), 2, 3)
    assert buffer.dtype == np.float32
    np.testing.assert_allclose(buffer[:, 0], sphere.positions, atol=1e-6)
    np.testing.assert_allclose(buffer[:, 1], sphere.normals, atol=1e-6)
    # a fresh array every call
    buffer[0, 0] = 42.0
    assert not np.allclose(sphere.to_array()[0, 0], 42.0)


def test_dual_normals_are_unit_and_triangulated_are_not() -> None:
    dual = SphereGeometry(1, dual=True)
    triangulated = SphereGeometry(1, dual=False)

    np.testing.assert_allclose(np.linalg.norm(dual.normals, axis=1), 1.0, atol=1e-6)
    assert np.all(np.linalg.norm(triangulated.normals, axis=1) < 1.0)


def test_summary() -> None:
    summary = SphereGeometry(1, dual=True, ordering="angular").summary()

    assert summary["max_subdivisions"] == 1
    assert summary["dual"] is True
    assert summary["ordering"] == "angular"
    assert summary["polygon_count"] == 42
    assert summary["polygon_sizes"] == {"5": 12, "6": 30}
    assert summary["vertex_count"] == 3 * (12 * 5 + 30 * 6)
    assert "precision" not in summary


def test_config_defaults() -> None:
    assert sphere_parameters({}) == {
        "max_subdivisions": 3, "dual": True, "ordering": "nearest", "precision": None
    }
    assert sphere_parameters({"sphere": None})["max_subdivisions"] == 3


def test_generate_from_config() -> None:
    sphere = generate_sphere_geometry({"sphere": {"max_subdivisions": 2, "dual": False}})

    assert sphere.max_subdivisions == 2
    assert not sphere.dual
    assert len(sphere) == 20 * 16 * 3


def test_generate_from_config_rejects_negative_depth() -> None:
    with pytest.raises(ValueError):
        generate_sphere_geometry({"sphere": {"max_subdivisions": -1}})


def test_sphere_to_dict_is_json_serializable() -> None:
    sphere = SphereGeometry(0, dual=True)
    result = json.loads(json.dumps(sphere_to_dict(sphere)))

    assert len(result["positions"]) == 180
    assert len(result["normals"]) == 180
    assert result["source_vertex_count"] == 12
    assert result["polygon_sizes"] == {"5": 12}

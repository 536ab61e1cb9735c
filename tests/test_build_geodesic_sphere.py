import os
import yaml
import pytest

import build_geodesic_sphere
from build_geodesic_sphere import argparse_setup, prepare_config, load_sphere, main


def write_config(tmp_path, config, name="config.yaml"):
    path = tmp_path / name
    with open(path, "w") as f:
        yaml.safe_dump(config, f)
    return str(path)


def test_argparse_defaults() -> None:
    args = argparse_setup([])

    assert args["config_path"] == "./configs/config.yaml"
    assert args["subdivisions"] is None
    assert args["triangulated"] is False
    assert args["debug"] is False


def test_prepare_config_applies_overrides() -> None:
    args = argparse_setup(["-s", "4", "-t", "--outdir", "/tmp/spheres/"])
    config = prepare_config({"sphere": {"max_subdivisions": 1, "dual": True}}, args)

    assert config["sphere"] == {"max_subdivisions": 4, "dual": False}
    assert config["output"] == {"directory": "/tmp/spheres/"}


def test_main_writes_dual_sphere(tmp_path) -> None:
    config_path = write_config(tmp_path, {
        "sphere": {"max_subdivisions": 1, "dual": True},
        "output": {"directory": str(tmp_path / "out")},
    })

    [location] = main(["--config", config_path])

    assert location == os.path.join(str(tmp_path / "out"), "geodesic_s1_dual.json")
    sphere = load_sphere(location)
    assert sphere["vertex_count"] == len(sphere["positions"]) == 720
    assert sphere["polygon_sizes"] == {"5": 12, "6": 30}


def test_main_with_overrides_and_gzip(tmp_path) -> None:
    config_path = write_config(tmp_path, {
        "sphere": {"max_subdivisions": 3},
        "output": {"filename": "tiny", "gzip": True},
    })

    [location] = main(["--config", config_path, "-s", "0", "-t", "--outdir", str(tmp_path)])

    assert location == os.path.join(str(tmp_path), "tiny.json")
    assert os.path.exists(location + ".gz")
    sphere = load_sphere(location + ".gz")
    assert sphere["dual"] is False
    assert sphere["vertex_count"] == 60
    assert sphere == load_sphere(location)


def test_main_debug_writes_mesh_debug(tmp_path) -> None:
    config_path = write_config(tmp_path, {"sphere": {"max_subdivisions": 0}})

    main(["--config", config_path, "--outdir", str(tmp_path), "--debug"])

    assert os.path.exists(tmp_path / "geodesic_s0_dual_debug.json")


def test_main_writes_preview(tmp_path) -> None:
    preview = str(tmp_path / "preview.png")
    config_path = write_config(tmp_path, {
        "sphere": {"max_subdivisions": 1, "dual": False},
        "preview": preview,
    })

    import matplotlib.pyplot as plt
    plt.close("all")

    main(["--config", config_path, "--outdir", str(tmp_path)])

    assert os.path.getsize(preview) > 0
    assert plt.get_fignums() == []


def test_main_rejects_negative_depth(tmp_path) -> None:
    config_path = write_config(tmp_path, {"sphere": {"max_subdivisions": -1}})

    with pytest.raises(ValueError):
        main(["--config", config_path, "--outdir", str(tmp_path)])
    assert os.listdir(tmp_path) == ["config.yaml"]


def test_main_missing_config(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        main(["--config", str(tmp_path / "missing.yaml")])


def test_configs_all(tmp_path, monkeypatch) -> None:
    config_dir = tmp_path / "configs"
    config_dir.mkdir()
    write_config(config_dir, {"sphere": {"max_subdivisions": 0, "dual": False}}, "a.yaml")
    write_config(config_dir, {"sphere": {"max_subdivisions": 0, "dual": True}}, "b.yaml")
    monkeypatch.setattr(build_geodesic_sphere, "DEFAULT_CONFIG_DIR", str(config_dir))

    locations = main(["--configs_all", "--outdir", str(tmp_path / "out")])

    assert [os.path.basename(p) for p in locations] == ["geodesic_s0_tri.json", "geodesic_s0_dual.json"]

#!/usr/bin/env python3
import os
import json
import logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = "./configs/"


def argparse_setup(argv=None):
    import argparse
    parser = argparse.ArgumentParser(description="Generate the vertex buffer of a geodesic sphere.")
    parser.add_argument(
        "--config",
        default="./configs/config.yaml",
        dest="config_path",
        help="Path to the configuration file."
    )
    parser.add_argument(
        "--configs_all",
        action="store_true",
        default=False,
        help="If set, process all config files in the ./configs/ directory."
    )
    parser.add_argument(
        "--outdir",
        default=None,
        dest="outdir",
        help="Output directory for the generated sphere files."
    )
    parser.add_argument(
        "-s", "--subdivisions",
        type=int,
        default=None,
        dest="subdivisions",
        help="Override the number of subdivisions of the config."
    )
    parser.add_argument(
        "-t", "--triangulated",
        action="store_true",
        default=False,
        help="Emit the triangulated sphere instead of its dual."
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        default=False,
        help="Show a progress bar while building dual polygons."
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Enable debug logging and save mesh debug information."
    )
    return vars(parser.parse_args(argv))


def save_sphere(config: dict, sphere: dict, filename: str) -> str:
    from geodesic_generation.utils import gzip_file

    directory = config["output"].get("directory", "./spheres/")
    os.makedirs(directory, exist_ok=True, mode=0o755)
    location = os.path.join(directory, f"{filename}.json")
    with open(location, 'w') as f:
        json.dump(sphere, f)
    logger.info(f"Generated sphere saved to {location}")

    if config["output"].get("gzip", False):
        compressed = gzip_file(location)
        logger.info(f"Generated sphere saved to {compressed}")
    return location


def load_sphere(location: str) -> dict:
    import gzip
    with (gzip.open(location, 'rt') if location.endswith(".gz") else open(location, 'r')) as f:
        return json.load(f)


def prepare_config(config: dict, args: dict) -> dict:
    """Fill in missing sections and apply the command line overrides."""
    for section in ("sphere", "output"):
        if not config.get(section):
            config[section] = {}
    if args.get("outdir"):
        config["output"]["directory"] = args["outdir"]
    if args.get("subdivisions") is not None:
        config["sphere"]["max_subdivisions"] = args["subdivisions"]
    if args.get("triangulated"):
        config["sphere"]["dual"] = False
    return config


def execute_sphere_generation(config: dict, progress: bool = False, debug: bool = False):
    from geodesic_generation.process import generate_sphere_geometry, sphere_parameters, sphere_to_dict
    from geodesic_generation.utils import generate_sphere_file_code
    from geodesic_generation.validate_mesh import validate_mesh, save_mesh_debug

    file_code = generate_sphere_file_code(**sphere_parameters(config))
    geometry = generate_sphere_geometry(config, progress=progress)

    if config.get("validate", True):
        validate_mesh(geometry)
    if debug:
        directory = config["output"].get("directory", "./spheres/")
        os.makedirs(directory, exist_ok=True, mode=0o755)
        save_mesh_debug(geometry, os.path.join(directory, f"{file_code}_debug.json"))

    preview = config.get("preview")
    if preview:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        from visuals import visualize_sphere_3d
        fig = visualize_sphere_3d(geometry, save_path=preview, show=False)
        plt.close(fig)

    return geometry, sphere_to_dict(geometry), file_code


def main(argv=None):
    from geodesic_generation.utils import load_yaml

    args = argparse_setup(argv)
    level = logging.DEBUG if args["debug"] else logging.INFO
    logging.basicConfig(level=level)

    # Determine which config files to process
    configs = []
    if args["configs_all"]:
        configs = sorted(os.path.join(DEFAULT_CONFIG_DIR, f)
                         for f in os.listdir(DEFAULT_CONFIG_DIR) if f.endswith(".yaml"))
    else:
        if not os.path.exists(args["config_path"]):
            raise FileNotFoundError(f"Config file {args['config_path']} does not exist.")
        configs.append(args["config_path"])

    locations = []
    for config_path in configs:
        logger.info(f"Processing config {config_path}")
        config = prepare_config(load_yaml(config_path), args)

        _, sphere_dict, file_code = execute_sphere_generation(
            config, progress=args["progress"], debug=args["debug"]
        )
        filename = config["output"].get("filename") or file_code
        locations.append(save_sphere(config, sphere_dict, filename))
    return locations


if __name__ == "__main__":
    main()

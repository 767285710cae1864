"""
Command-line interface for meshgraph.

Loads a triangle mesh, builds its vertex graph and reports vertex, edge and
connected-component counts together with the time spent in each stage.

Usage:
    meshgraph input_mesh [--validate] [--json report.json] [-v]
    meshgraph -f config.json

A config file is a JSON object with the keys:
    input_mesh   (string, required)
    validate     (bool, optional)
    output_json  (string, optional)
    verbose      (bool, optional)
"""

import argparse
import json
import logging
import os
import sys
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import trimesh

from . import __version__
from .components import summarize_components
from .graph import Graph
from .options import GraphOptions

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


@dataclass
class RunConfig:
    input_mesh: str
    validate: bool = False
    output_json: Optional[str] = None
    verbose: bool = False


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="meshgraph",
        description="Build the weighted vertex graph of a triangle mesh and report its components",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"meshgraph {__version__}")
    parser.add_argument("input_mesh", nargs="?", help="Input mesh file path")
    parser.add_argument(
        "-f", "--file", dest="config_file", help="Read all arguments from a JSON config file"
    )
    parser.add_argument(
        "--validate", action="store_true", help="Check face indices against the vertex count"
    )
    parser.add_argument("--json", dest="output_json", help="Write the report to this JSON file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def load_config(path: str) -> RunConfig:
    """
    Read a `RunConfig` from a JSON file.

    Raises:
        OSError: if the file cannot be read.
        ValueError: if the content is not valid JSON or an attribute is
            missing or has the wrong type.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Config file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a JSON object")
    if "input_mesh" not in data:
        raise ValueError("Config file must contain the 'input_mesh' attribute")
    if not isinstance(data["input_mesh"], str):
        raise ValueError("'input_mesh' attribute must be a string")

    config = RunConfig(input_mesh=data["input_mesh"])
    for key in ("validate", "verbose"):
        if key in data:
            if not isinstance(data[key], bool):
                raise ValueError(f"When provided, '{key}' attribute must be boolean")
            setattr(config, key, data[key])
    if "output_json" in data:
        if not isinstance(data["output_json"], str):
            raise ValueError("When provided, 'output_json' attribute must be a string")
        config.output_json = data["output_json"]
    return config


def config_from_args(args: argparse.Namespace) -> RunConfig:
    if args.config_file:
        config = load_config(args.config_file)
        # Command-line switches can only turn options on
        config.validate = config.validate or bool(args.validate)
        config.verbose = config.verbose or bool(args.verbose)
        if args.output_json:
            config.output_json = args.output_json
        return config
    return RunConfig(
        input_mesh=args.input_mesh,
        validate=bool(args.validate),
        output_json=args.output_json,
        verbose=bool(args.verbose),
    )


def load_mesh(path: str) -> trimesh.Trimesh:
    """Load a triangle mesh without merging, splitting or reordering vertices."""
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Mesh file {path} does not exist")
    mesh = trimesh.load_mesh(path, process=False, maintain_order=True)
    if not isinstance(mesh, trimesh.Trimesh):
        raise ValueError(f"{path} does not contain a triangle mesh")
    return mesh


def build_report(config: RunConfig) -> Dict[str, Any]:
    """Run load -> build -> components and return the report dictionary."""
    timings: Dict[str, float] = {}

    logger.info("Loading mesh %s", config.input_mesh)
    t0 = time.perf_counter()
    mesh = load_mesh(config.input_mesh)
    timings["load"] = time.perf_counter() - t0
    logger.info("Number of vertices:  %d", len(mesh.vertices))
    logger.info("Number of triangles: %d", len(mesh.faces))

    t0 = time.perf_counter()
    graph = Graph.from_trimesh(mesh, options=GraphOptions(validate_indices=config.validate))
    timings["build"] = time.perf_counter() - t0
    logger.info("Built graph with %d edges in %.3f s", graph.num_edges(), timings["build"])

    t0 = time.perf_counter()
    labels = graph.connected_components()
    timings["components"] = time.perf_counter() - t0
    summary = summarize_components(labels)
    logger.info("Number of connected components: %d", summary.count)
    if summary.count > 1:
        logger.warning(
            "Mesh has %d connected components (%d isolated vertices)",
            summary.count,
            summary.isolated,
        )

    return {
        "input_mesh": config.input_mesh,
        "n_vertices": graph.num_vertices(),
        "n_triangles": int(len(mesh.faces)),
        "n_edges": graph.num_edges(),
        "components": summary.as_dict(),
        "timings": timings,
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    if not args.config_file and not args.input_mesh:
        parser.error("No input mesh given")

    try:
        config = config_from_args(args)
    except (OSError, ValueError) as e:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
        logger.error("Cannot read configuration: %s", e)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        report = build_report(config)
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        return 1

    if config.output_json:
        try:
            with open(config.output_json, "w", encoding="utf-8") as f:
                json.dump(report, f, indent=2)
        except OSError as e:
            logger.error("Cannot write report: %s", e)
            return 1
        logger.info("Report written to %s", config.output_json)
    return 0


if __name__ == "__main__":
    sys.exit(main())

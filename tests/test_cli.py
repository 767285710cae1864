"""
Tests for the `meshgraph` command-line interface.
"""

import json
import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import numpy as np
import pytest

from meshgraph import create_mesh_with_isolated_vertex, create_unit_square_mesh
from meshgraph.cli import (
    RunConfig,
    build_report,
    config_from_args,
    create_parser,
    load_config,
    load_mesh,
    main,
)

# ---- Fixtures ---------------------------------------------------------------


@pytest.fixture
def square_path(tmp_path):
    path = tmp_path / "square.ply"
    create_unit_square_mesh().export(str(path))
    return str(path)


@pytest.fixture
def isolated_path(tmp_path):
    path = tmp_path / "isolated.ply"
    create_mesh_with_isolated_vertex().export(str(path))
    return str(path)


def _write_json(path, data):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f)
    return str(path)


# ---- Tests ------------------------------------------------------------------


def test_report_for_square(square_path):
    report = build_report(RunConfig(input_mesh=square_path))
    assert report["n_vertices"] == 4
    assert report["n_triangles"] == 2
    assert report["n_edges"] == 5
    assert report["components"]["count"] == 1
    assert set(report["timings"]) == {"load", "build", "components"}


def test_multiple_components_logs_warning(isolated_path, caplog):
    with caplog.at_level(logging.WARNING, logger="meshgraph"):
        report = build_report(RunConfig(input_mesh=isolated_path, validate=True))
    assert report["components"]["count"] == 2
    assert report["components"]["isolated"] == 1
    assert "connected components" in caplog.text


def test_main_writes_json(square_path, tmp_path):
    out = tmp_path / "report.json"
    assert main([square_path, "--json", str(out)]) == 0
    with open(out, "r", encoding="utf-8") as f:
        report = json.load(f)
    assert report["n_edges"] == 5
    assert report["components"]["sizes"] == [4]


def test_main_from_config_file(square_path, tmp_path):
    out = tmp_path / "from_config.json"
    cfg = _write_json(
        tmp_path / "config.json",
        {"input_mesh": square_path, "validate": True, "output_json": str(out)},
    )
    assert main(["-f", cfg]) == 0
    assert out.exists()


def test_load_config_type_errors(tmp_path):
    with pytest.raises(ValueError, match="input_mesh"):
        load_config(_write_json(tmp_path / "a.json", {"num_samples": 3}))
    with pytest.raises(ValueError, match="string"):
        load_config(_write_json(tmp_path / "b.json", {"input_mesh": 3}))
    with pytest.raises(ValueError, match="boolean"):
        load_config(_write_json(tmp_path / "c.json", {"input_mesh": "m.ply", "validate": "yes"}))

    bad = tmp_path / "d.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="not valid JSON"):
        load_config(str(bad))


def test_load_config_defaults(tmp_path):
    cfg = load_config(_write_json(tmp_path / "ok.json", {"input_mesh": "m.ply"}))
    assert cfg == RunConfig(input_mesh="m.ply")


def test_main_error_exit_codes(tmp_path):
    assert main([str(tmp_path / "missing.ply")]) == 1
    cfg = _write_json(tmp_path / "bad.json", {"input_mesh": 1})
    assert main(["-f", cfg]) == 1
    assert main(["-f", str(tmp_path / "no_such_config.json")]) == 1


def test_main_requires_input():
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2


def test_main_unwritable_report_path(square_path, tmp_path, caplog):
    out = tmp_path / "no_dir" / "report.json"
    with caplog.at_level(logging.ERROR, logger="meshgraph"):
        assert main([square_path, "--json", str(out)]) == 1
    assert "Cannot write report" in caplog.text
    assert not out.exists()


UV_SEAM_OBJ = """\
v 0 0 0
v 1 0 0
v 0 1 0
v 1 1 0
vt 0 0
vt 1 0
vt 0 1
vt 1 1
vt 0.5 0.5
f 1/1 2/2 3/3
f 2/5 4/4 3/3
"""


def test_obj_with_uv_seam_keeps_file_indices(tmp_path):
    path = tmp_path / "seam.obj"
    path.write_text(UV_SEAM_OBJ, encoding="utf-8")

    mesh = load_mesh(str(path))
    np.testing.assert_array_equal(mesh.faces, [[0, 1, 2], [1, 3, 2]])

    report = build_report(RunConfig(input_mesh=str(path)))
    assert report["n_vertices"] == 4
    assert report["n_edges"] == 5
    assert report["components"]["count"] == 1


def test_command_line_switches_extend_config_file(square_path, tmp_path):
    cfg = _write_json(tmp_path / "config.json", {"input_mesh": square_path})
    out = tmp_path / "override.json"
    config = config_from_args(
        create_parser().parse_args(["-f", cfg, "-v", "--validate", "--json", str(out)])
    )
    assert config.verbose is True
    assert config.validate is True
    assert config.output_json == str(out)

    cfg = _write_json(tmp_path / "verbose.json", {"input_mesh": square_path, "verbose": True})
    config = config_from_args(create_parser().parse_args(["-f", cfg]))
    assert config.verbose is True
    assert config.validate is False

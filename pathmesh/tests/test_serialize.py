"""Tests for JSON serialization of paths."""

import json
import pytest

from pathmesh.core.path import Path
from pathmesh.io import save_json, load_json, load_params
from pathmesh.ops.patterns import nested_frame_path
from pathmesh.params import get_preset


def test_save_load_roundtrip(tmp_path):
    path = nested_frame_path(layers=2, radius=0.05)
    filepath = tmp_path / "frames.json"

    save_json(path, filepath)
    loaded = load_json(filepath)

    assert isinstance(loaded, Path)
    assert loaded.get_vertices() == path.get_vertices()
    assert loaded.current_radius == pytest.approx(0.05)
    assert load_params(filepath) is None


def test_save_vertex_list_with_params(tmp_path):
    vertices = nested_frame_path(layers=1).get_vertices()
    params = get_preset("debug")
    filepath = tmp_path / "frames.json"

    save_json(vertices, filepath, params=params)

    assert load_json(filepath).get_vertices() == vertices
    assert load_params(filepath) == params


def test_schema_version_written(tmp_path):
    filepath = tmp_path / "frames.json"
    save_json(nested_frame_path(layers=1), filepath)

    with open(filepath) as f:
        data = json.load(f)

    assert data["schema_version"] == "1.0"
    assert len(data["path"]["vertices"]) == 28


def test_unsupported_schema_version(tmp_path):
    filepath = tmp_path / "future.json"
    filepath.write_text(json.dumps({"schema_version": "2.0", "path": {"vertices": []}}))

    with pytest.raises(ValueError, match="Unsupported schema version"):
        load_json(filepath)

"""Tests for parameter presets and validation."""

import pytest
import numpy as np
from pathmesh.params import (
    MeshingParams,
    get_preset,
    list_presets,
    validate_params,
    validate_and_warn,
)


def test_list_presets():
    presets = list_presets()
    assert isinstance(presets, list)
    assert presets == ["debug", "preview", "standard", "fine"]


def test_get_preset():
    params = get_preset("preview")
    assert params.horizontal_resolution == 32
    assert params.vertical_resolution == 8
    assert params.threshold == 0.5


def test_get_unknown_preset():
    with pytest.raises(ValueError, match="Unknown preset"):
        get_preset("ultra")


@pytest.mark.parametrize("name", ["debug", "preview", "standard", "fine"])
def test_presets_are_valid(name):
    is_valid, warnings = validate_params(get_preset(name))
    assert is_valid is True
    assert warnings == []


def test_cube_size():
    params = MeshingParams(capture_size=(2.0, 1.0, 4.0), horizontal_resolution=8, vertical_resolution=4)
    assert np.allclose(params.cube_size(), [0.25, 0.25, 0.5])


def test_validate_flags_threshold_and_resolution():
    params = MeshingParams(threshold=0.0, horizontal_resolution=1)
    is_valid, warnings = validate_params(params)

    assert is_valid is False
    assert any("threshold" in w for w in warnings)
    assert any("horizontal_resolution" in w for w in warnings)


def test_validate_flags_bad_capture_size():
    is_valid, warnings = validate_params(MeshingParams(capture_size=(1.0, 0.0, 1.0)))
    assert is_valid is False
    assert any("capture_size" in w for w in warnings)


def test_validate_flags_elongated_cubes():
    params = MeshingParams(capture_size=(1.0, 20.0, 1.0), horizontal_resolution=64, vertical_resolution=16)
    is_valid, warnings = validate_params(params)
    assert is_valid is False
    assert any("aspect ratio" in w for w in warnings)


def test_validate_and_warn_prints(capsys):
    params = MeshingParams(threshold=1.5)
    assert validate_and_warn(params) is params
    out = capsys.readouterr().out
    assert "[validate_params]" in out
    assert "threshold" in out


def test_params_dict_roundtrip():
    params = get_preset("fine")
    restored = MeshingParams.from_dict(params.to_dict())
    assert restored == params


def test_from_dict_fills_defaults():
    params = MeshingParams.from_dict({"horizontal_resolution": 10})
    assert params.horizontal_resolution == 10
    assert params.vertical_resolution == MeshingParams().vertical_resolution


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

import pytest
import numpy as np
import matplotlib
from pathlib import Path
import tempfile

matplotlib.use("Agg")

from pathmesh.ops.patterns import nested_frame_path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def frame_path():
    """Two stacked layers of the nested frame pattern."""
    return nested_frame_path(layers=2)


@pytest.fixture
def ball_volume():
    """Density of a radius-3 ball centred in a 10^3 grid; positive inside."""
    radius = 3.0
    center = 4.5
    idx = np.arange(10, dtype=float)
    x, y, z = np.meshgrid(idx, idx, idx, indexing="ij")
    volume = radius - np.sqrt((x - center) ** 2 + (y - center) ** 2 + (z - center) ** 2)
    return volume, radius

import pytest
import numpy as np
import matplotlib.pyplot as plt

from pathmesh.core.field import ScalarField
from pathmesh.ops.sampler import sample_field
from pathmesh.ops.walker import march_volume
from pathmesh.visualization import (
    field_to_image,
    save_field_image,
    plot_field,
    plot_case_wireframe,
    plot_mesh,
)


def test_field_to_image_scales_and_clamps():
    field = ScalarField(values=np.array([[0.0, 0.5], [1.0, 2.0]]))

    image = field_to_image(field)

    assert image.dtype == np.uint8
    assert image.tolist() == [[0, 127], [255, 255]]


def test_field_to_image_rejects_3d():
    with pytest.raises(ValueError):
        field_to_image(np.zeros((2, 2, 2)))


def test_save_field_image(frame_path, temp_dir):
    field = sample_field(frame_path, (0.0, 0.0, 0.0), (1.0, 1.0), 32)
    output = temp_dir / "layer.png"

    save_field_image(field, str(output))

    assert output.exists()
    assert output.stat().st_size > 0


def test_plot_field(frame_path):
    field = sample_field(frame_path, (0.0, 0.0, 0.0), (1.0, 1.0), 32)
    ax = plot_field(field, threshold=0.5, show=False)
    assert ax is not None
    plt.close("all")


@pytest.mark.parametrize("mask", [0x01, 0x09, 0x0F, 0x00])
def test_plot_case_wireframe(mask):
    ax = plot_case_wireframe(mask, show=False)
    assert str(mask) in ax.get_title()
    plt.close("all")


def test_plot_mesh(ball_volume):
    volume, _ = ball_volume
    ax = plot_mesh(march_volume(volume, threshold=0.0), show=False, title="ball")
    assert ax.get_title() == "ball"
    plt.close("all")

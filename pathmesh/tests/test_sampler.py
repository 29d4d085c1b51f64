"""
Tests for coverage field sampling.
"""

import pytest
import numpy as np

from pathmesh.core.field import ScalarField
from pathmesh.core.path import Path
from pathmesh.ops.patterns import nested_frame_path, straight_segment_path
from pathmesh.ops.sampler import (
    distance_to_score,
    find_layer_segments,
    is_segment_near_rect,
    point_segment_distance,
    sample_field,
    score_points,
)


R = 1.0 / 16.0


@pytest.fixture
def x_segment():
    return straight_segment_path((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), radius=R)


def test_score_profile_across_segment(x_segment):
    """Test score is 1 on the segment, 0.5 at one radius and 0 at two."""
    assert float(score_points(x_segment, [0.5, 0.0, 0.0])) == pytest.approx(1.0)
    assert float(score_points(x_segment, [0.5, 0.0, R])) == pytest.approx(0.5)
    assert float(score_points(x_segment, [0.5, 0.0, 2 * R])) == pytest.approx(0.0)
    assert float(score_points(x_segment, [0.5, 0.0, 1.0])) == 0.0


def test_score_beyond_segment_end_uses_endpoint(x_segment):
    assert float(score_points(x_segment, [1.0 + R, 0.0, 0.0])) == pytest.approx(0.5)
    assert float(score_points(x_segment, [-R, 0.0, 0.0])) == pytest.approx(0.5)


def test_overlapping_segments_take_maximum():
    """Test overlapping coverage is a union, not a sum."""
    path = Path(current_radius=R)
    path.move_to(0.0, 0.0, 0.0)
    path.line_to(1.0, 0.0, 0.0)
    path.move_to(0.0, 0.0, 0.0)
    path.line_to(1.0, 0.0, 0.0)

    assert float(score_points(path, [0.5, 0.0, 0.0])) == pytest.approx(1.0)


def test_point_segment_distance():
    a = np.array([0.0, 0.0, 0.0])
    b = np.array([1.0, 0.0, 0.0])
    points = np.array([
        [0.5, 2.0, 0.0],
        [-3.0, 0.0, 4.0],
        [4.0, 4.0, 0.0],
    ])

    dist = point_segment_distance(points, a, b)

    assert np.allclose(dist, [2.0, 5.0, 5.0])


def test_zero_length_segment_measures_to_point():
    a = np.array([1.0, 1.0, 1.0])
    dist = point_segment_distance(np.array([[1.0, 1.0, 4.0]]), a, a)
    assert np.allclose(dist, [3.0])


def test_distance_to_score_clamps():
    scores = distance_to_score([0.0, R, 4 * R], R)
    assert np.allclose(scores, [1.0, 0.5, 0.0])


@pytest.mark.parametrize("vertices", [[], [(0.5, 0.0, 0.5)]])
def test_short_paths_give_zero_field(vertices):
    """Test fewer than two vertices leave the field at zero."""
    path = Path()
    for v in vertices:
        path.line_to(*v)

    field = sample_field(path, (0.0, 0.0, 0.0), (1.0, 1.0), 5)

    assert field.values.shape == (5, 5)
    assert np.all(field.values == 0.0)


def test_sample_layout_rows_follow_z():
    """Test values[row, col] sits at x = col * size / res, z = row * size / res."""
    path = straight_segment_path((0.0, 0.0, 0.5), (1.0, 0.0, 0.5), radius=R)

    field = sample_field(path, (0.0, 0.0, 0.0), (1.0, 1.0), 4)

    assert np.allclose(field.values[2], 1.0)
    assert np.allclose(field.values[0], 0.0)
    positions = field.sample_positions()
    assert np.allclose(positions[2, 3], [0.75, 0.0, 0.5])


def test_sample_field_writes_into_array_view():
    """Test an oversized flat buffer is filled through a view."""
    path = straight_segment_path((0.0, 0.0, 0.5), (1.0, 0.0, 0.5), radius=R)
    out = np.full(20, 7.0)

    field = sample_field(path, (0.0, 0.0, 0.0), (1.0, 1.0), 4, out=out)

    assert field.values.shape == (4, 4)
    assert np.allclose(out[:16], field.values.reshape(-1))
    assert np.allclose(out[16:], 7.0)


def test_sample_field_reuses_scalar_field():
    buffer = ScalarField.empty(4)
    buffer.values.fill(3.0)

    field = sample_field(Path(), (0.0, 0.25, 0.0), (1.0, 1.0), 4, out=buffer)

    assert field is buffer
    assert field.layer_height == pytest.approx(0.25)
    assert np.all(field.values == 0.0)


def test_sample_field_rejects_small_buffer():
    with pytest.raises(ValueError):
        sample_field(Path(), (0.0, 0.0, 0.0), (1.0, 1.0), 4, out=np.zeros(10))


def test_sample_field_rejects_zero_resolution():
    with pytest.raises(ValueError):
        sample_field(Path(), (0.0, 0.0, 0.0), (1.0, 1.0), 0)


def test_vertical_pruning_uses_start_radius(x_segment):
    """Test layers more than one radius away from both endpoints are skipped."""
    field = sample_field(x_segment, (0.0, 1.5 * R, -0.5), (1.0, 1.0), 16)

    assert np.all(field.values == 0.0)
    assert float(score_points(x_segment, [0.5, 1.5 * R, 0.0])) == pytest.approx(0.25)


def test_horizontal_pruning_does_not_change_values():
    """Test rectangle pruning only drops segments that score zero."""
    path = nested_frame_path(layers=2)
    origin = (0.3, R * 0.5, 0.3)

    pruned = sample_field(path, origin, (0.4, 0.4), 24, prune_horizontal=True)
    full = sample_field(path, origin, (0.4, 0.4), 24, prune_horizontal=False)

    assert np.array_equal(pruned.values, full.values)
    assert pruned.values.max() > 0.0


def test_find_layer_segments():
    path = nested_frame_path(layers=2)

    near_bottom = find_layer_segments(path.get_vertices(), -0.5 * R)
    far_above = find_layer_segments(path.get_vertices(), 10.0)

    assert len(near_bottom) == 25
    assert far_above == []


def test_is_segment_near_rect(x_segment):
    segment = x_segment.segments()[0]
    assert is_segment_near_rect(segment, (0.5, -0.1), (0.6, 0.1))
    assert not is_segment_near_rect(segment, (0.5, 0.5), (0.6, 0.6))
    assert not is_segment_near_rect(segment, (2.0, -0.1), (3.0, 0.1))

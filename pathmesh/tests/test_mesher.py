"""
Tests for the single-cube mesher.
"""

import pytest
import numpy as np

from pathmesh.core.mesh import MeshBuffer
from pathmesh.ops.case_table import CASE_TABLE
from pathmesh.ops.mesher import (
    VoxelMesher,
    case_index,
    case_indices,
    crossing_parameter,
)


ONE_CORNER = [1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0]


def test_case_index():
    """Test corner bits follow value >= threshold."""
    assert case_index(ONE_CORNER, 0.5) == 0x01
    assert case_index([0.5] * 8, 0.5) == 0xFF
    assert case_index([0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.9], 0.5) == 0x80


def test_case_indices_matches_scalar():
    """Test the vectorized mask matches the per-cube version."""
    rng = np.random.default_rng(0)
    corners = rng.random((5, 4, 8))

    masks = case_indices(corners, 0.5)

    assert masks.shape == (5, 4)
    for idx in np.ndindex(5, 4):
        assert masks[idx] == case_index(corners[idx], 0.5)


def test_crossing_parameter():
    """Test linear interpolation, clamping and degenerate edges."""
    assert crossing_parameter(1.0, 0.0, 0.5) == pytest.approx(0.5)
    assert crossing_parameter(1.0, 0.0, 0.25) == pytest.approx(0.75)
    assert crossing_parameter(0.5, 0.5, 0.5) == 0.0
    assert crossing_parameter(0.2, 0.0, 0.5) == 0.0
    assert crossing_parameter(1.0, 0.8, 0.5) == 1.0


@pytest.mark.parametrize("value", [0.0, 1.0])
def test_uniform_values_emit_nothing(value):
    """Test all corners on one side of the threshold give no triangles."""
    sink = MeshBuffer()
    case = VoxelMesher().write([value] * 8, 0.5, sink)

    assert case.is_empty
    assert sink.num_vertices == 0
    assert sink.num_triangles == 0


def test_single_corner_emits_one_triangle():
    """Test one inside corner gives 3 vertices and 1 triangle."""
    sink = MeshBuffer()
    case = VoxelMesher().write(ONE_CORNER, 0.5, sink)

    assert case is CASE_TABLE[0x01]
    assert sink.num_vertices == 3
    assert sink.num_triangles == 1


def test_triangle_faces_away_from_inside():
    """Test emitted winding points from inside to outside."""
    sink = MeshBuffer()
    VoxelMesher().write(ONE_CORNER, 0.5, sink)

    v = sink.vertices
    a, b, c = sink.faces[0]
    normal = np.cross(v[b] - v[a], v[c] - v[a])
    assert np.dot(normal, [1.0, 1.0, 1.0]) > 0


def test_vertices_are_interpolated_in_world_space():
    """Test crossings are placed at origin + (cube + local) * cube_size."""
    mesher = VoxelMesher(cube_size=(2.0, 2.0, 2.0), origin=(1.0, 1.0, 1.0))
    mesher.move_to_cube(1, 0, 0)
    sink = MeshBuffer()

    mesher.write(ONE_CORNER, 0.25, sink)

    verts = sink.vertices
    # edge 0->1 runs along x; t = 0.75
    assert any(np.allclose(v, [1.0 + 1.75 * 2.0, 1.0, 1.0]) for v in verts)
    assert mesher.cube_position == (3.0, 1.0, 1.0)


def test_neighbouring_cubes_share_crossings():
    """Test a crossing on a shared face lands on the same position from both cubes."""
    mesher = VoxelMesher(cube_size=(0.1, 0.1, 0.1))
    sink = MeshBuffer(weld_vertices=True)

    # corner 1 of cube (0,0,0) is corner 0 of cube (1,0,0)
    mesher.move_to_cube(0, 0, 0)
    mesher.write([0.0, 1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0], 0.5, sink)
    mesher.move_to_cube(1, 0, 0)
    mesher.write(ONE_CORNER, 0.5, sink)

    # 3 + 3 crossings, two of them on the shared x face
    assert sink.num_vertices == 4
    assert sink.num_triangles == 2


def test_write_rejects_wrong_corner_count():
    with pytest.raises(ValueError):
        VoxelMesher().write([1.0] * 7, 0.5, MeshBuffer())


def test_lookup_case():
    assert VoxelMesher().lookup_case(ONE_CORNER, 0.5).mask == 0x01


def test_wireframe():
    """Test boundary lines of a single-corner cube."""
    lines = VoxelMesher().wireframe(ONE_CORNER, 0.5)
    assert lines.shape == (3, 2, 3)

    empty = VoxelMesher().wireframe([0.0] * 8, 0.5)
    assert empty.shape == (0, 2, 3)

"""
Tests for core data structures.
"""

import pytest
import numpy as np

from pathmesh.core.types import Point3D, PathVertex, DEFAULT_RADIUS
from pathmesh.core.path import Path, build_segments, get_path_vertices
from pathmesh.core.field import ScalarField
from pathmesh.core.mesh import MeshBuffer
from pathmesh.core.result import OperationResult, OperationStatus, ErrorCode
from pathmesh.ops.patterns import nested_frame_path, rectangle_path


def test_path_vertex_defaults():
    v = PathVertex(position=(1, 2, 3))
    assert v.position == Point3D(1.0, 2.0, 3.0)
    assert v.radius == DEFAULT_RADIUS
    assert not v.is_segment_start


@pytest.mark.parametrize("radius", [0.0, -1.0, float("nan")])
def test_path_vertex_rejects_bad_radius(radius):
    with pytest.raises(ValueError):
        PathVertex(position=Point3D(0, 0, 0), radius=radius)


def test_move_to_and_line_to():
    path = Path(current_radius=0.1)
    path.move_to(0, 0, 0)
    path.line_to(1, 0, 0)
    path.current_radius = 0.2
    path.line_to(1, 0, 1)

    vertices = path.get_vertices()
    assert len(path) == 3
    assert [v.is_segment_start for v in vertices] == [True, False, False]
    assert [v.radius for v in vertices] == [0.1, 0.1, 0.2]


def test_get_vertices_returns_copy():
    path = rectangle_path(0, 0, 1, 1)
    vertices = path.get_vertices()
    vertices.clear()
    assert len(path) == 5


def test_segments_skip_edges_into_segment_starts():
    """Test each move_to opens a new sub-path with no edge into it."""
    path = Path()
    path.move_to(0, 0, 0)
    path.line_to(1, 0, 0)
    path.move_to(0, 0, 1)
    path.line_to(1, 0, 1)

    segments = path.segments()

    assert len(segments) == 2
    assert segments[0].a.position == Point3D(0, 0, 0)
    assert segments[1].a.position == Point3D(0, 0, 1)


def test_segments_wrap_around_without_start():
    """Test a path with no segment start closes back onto its first vertex."""
    vertices = [
        PathVertex(position=(0, 0, 0)),
        PathVertex(position=(1, 0, 0)),
        PathVertex(position=(1, 0, 1)),
    ]

    segments = build_segments(vertices)

    assert len(segments) == 3
    assert segments[0].a is vertices[2]
    assert segments[0].b is vertices[0]


def test_segment_radius_from_start_vertex():
    path = Path(current_radius=0.1)
    path.move_to(0, 0, 0)
    path.current_radius = 0.3
    path.line_to(2, 0, 0)

    segment = path.segments()[0]
    assert segment.radius == 0.1
    assert segment.length() == pytest.approx(2.0)


def test_short_paths_have_no_segments():
    assert build_segments([]) == []
    assert build_segments([PathVertex(position=(0, 0, 0))]) == []


def test_get_path_vertices_accepts_sequences():
    vertices = [PathVertex(position=(0, 0, 0)), PathVertex(position=(1, 0, 0))]
    assert get_path_vertices(vertices) == vertices
    assert get_path_vertices(Path(vertices)) == vertices


def test_path_bounds_include_radius():
    path = rectangle_path(0, 0, 1, 2, y=0.5, radius=0.1)
    lo, hi = path.bounds()
    assert np.allclose(lo, [-0.1, 0.4, -0.1])
    assert np.allclose(hi, [1.1, 0.6, 2.1])

    with pytest.raises(ValueError):
        Path().bounds()


def test_path_dict_roundtrip():
    path = nested_frame_path(layers=1)
    restored = Path.from_dict(path.to_dict())
    assert restored.get_vertices() == path.get_vertices()


def test_nested_frame_path_structure():
    path = nested_frame_path(layers=2)

    assert len(path) == 56
    assert len(path.segments()) == 50
    assert sum(v.is_segment_start for v in path.get_vertices()) == 6
    lo, hi = path.bounds()
    assert lo[1] == pytest.approx(-DEFAULT_RADIUS)
    assert hi[1] == pytest.approx(2 * DEFAULT_RADIUS)

    with pytest.raises(ValueError):
        nested_frame_path(layers=0)


def test_scalar_field_empty():
    field = ScalarField.empty(3)
    assert field.values.shape == (3, 3)
    assert field.resolution == 3
    with pytest.raises(ValueError):
        ScalarField.empty(0)


def test_mesh_buffer_basic():
    mesh = MeshBuffer()
    a = mesh.add_vertex((0, 0, 0))
    b = mesh.add_vertex((1, 0, 0))
    c = mesh.add_vertex((0, 1, 0))
    mesh.add_triangle(a, b, c)

    assert mesh.num_vertices == 3
    assert mesh.num_triangles == 1
    assert len(mesh) == 1
    assert mesh.indices == [0, 1, 2]
    assert mesh.faces.dtype == np.int64
    assert mesh.vertices.shape == (3, 3)

    mesh.clear()
    assert mesh.is_empty()
    assert mesh.bounds() is None
    assert mesh.vertices.shape == (0, 3)


def test_mesh_buffer_welds_coincident_vertices():
    mesh = MeshBuffer(weld_vertices=True)
    assert mesh.add_vertex((0.1, 0.2, 0.3)) == 0
    assert mesh.add_vertex((0.1, 0.2, 0.3 + 1e-13)) == 0
    assert mesh.add_vertex((0.1, 0.2, 0.4)) == 1

    loose = MeshBuffer()
    loose.add_vertex((0.1, 0.2, 0.3))
    assert loose.add_vertex((0.1, 0.2, 0.3)) == 1


def test_mesh_buffer_skips_collapsed_triangles_when_welding():
    mesh = MeshBuffer(weld_vertices=True)
    a = mesh.add_vertex((0.0, 0.0, 0.0))
    b = mesh.add_vertex((0.0, 0.0, 0.0))
    c = mesh.add_vertex((1.0, 0.0, 0.0))
    d = mesh.add_vertex((0.0, 1.0, 0.0))

    mesh.add_triangle(a, b, c)
    assert mesh.is_empty()
    mesh.add_triangle(a, c, d)
    assert mesh.faces.tolist() == [[0, 1, 2]]

    loose = MeshBuffer()
    for _ in range(2):
        loose.add_vertex((0.0, 0.0, 0.0))
    loose.add_triangle(0, 0, 1)
    assert loose.num_triangles == 1


def test_mesh_buffer_rejects_bad_index():
    mesh = MeshBuffer()
    mesh.add_vertex((0, 0, 0))
    with pytest.raises(ValueError):
        mesh.add_triangle(0, 0, 1)


def test_operation_result_to_dict_drops_objects():
    result = OperationResult.success("ok", metadata={"count": 3, "mesh": MeshBuffer()})
    result.add_error("bad", ErrorCode.EMPTY_MESH)

    d = result.to_dict()

    assert d["status"] == "success"
    assert d["metadata"] == {"count": 3}
    assert d["error_codes"] == ["EMPTY_MESH"]
    restored = OperationResult.from_dict(d)
    assert restored.status == OperationStatus.SUCCESS
    assert restored.is_success()

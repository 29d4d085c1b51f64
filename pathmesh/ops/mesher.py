"""
Single-cube marching cubes writer.
"""

import math
from typing import Optional, Protocol, Sequence, Tuple
import numpy as np

from .case_table import (
    CORNER_OFFSETS,
    NUM_CORNERS,
    CrossingVertex,
    MarchingCubesCase,
    get_case_table,
)


class MeshSink(Protocol):
    """Anything that can receive mesher output."""

    def add_vertex(self, position: Sequence[float]) -> int:
        ...

    def add_triangle(self, a: int, b: int, c: int) -> None:
        ...


def _as_corner_values(values) -> np.ndarray:
    arr = np.asarray(values, dtype=float)
    if arr.shape != (NUM_CORNERS,):
        raise ValueError(
            f"Expected {NUM_CORNERS} corner values, got array of shape {arr.shape}"
        )
    return arr


def case_index(values: Sequence[float], threshold: float) -> int:
    """Case mask for 8 corner values: bit ``i`` set iff ``values[i] >= threshold``."""
    arr = _as_corner_values(values)
    mask = 0
    for i in range(NUM_CORNERS):
        if arr[i] >= threshold:
            mask |= 1 << i
    return mask


def case_indices(corners: np.ndarray, threshold: float) -> np.ndarray:
    """Vectorized ``case_index`` over an array whose last axis holds 8 corner values."""
    if corners.shape[-1] != NUM_CORNERS:
        raise ValueError(
            f"Expected last axis of length {NUM_CORNERS}, got shape {corners.shape}"
        )
    weights = 1 << np.arange(NUM_CORNERS)
    return ((corners >= threshold) * weights).sum(axis=-1).astype(np.int64)


def crossing_parameter(value_a: float, value_b: float, threshold: float) -> float:
    """
    Fraction along the edge from corner A to corner B where the field hits ``threshold``.

    Equal or non-finite endpoint values give 0; the result is clamped to [0, 1].
    """
    denom = value_b - value_a
    if denom == 0.0:
        return 0.0
    t = (threshold - value_a) / denom
    if not math.isfinite(t):
        return 0.0
    return min(max(t, 0.0), 1.0)


def crossing_position(values: Sequence[float], threshold: float, vertex: CrossingVertex) -> Tuple[float, float, float]:
    """Cube-local position of a crossing vertex."""
    t = crossing_parameter(float(values[vertex.a]), float(values[vertex.b]), threshold)

    src = list(CORNER_OFFSETS[vertex.a])
    dst = CORNER_OFFSETS[vertex.b]
    axis = vertex.axis
    src[axis] = src[axis] + (dst[axis] - src[axis]) * t

    return float(src[0]), float(src[1]), float(src[2])


class VoxelMesher:
    """
    Writes the iso-surface patch of one cube at a time into a mesh sink.

    Positions are ``origin + (cube + local) * cube_size`` where ``cube`` is
    the integer cube index set with ``move_to_cube``. Computing from the
    integer index keeps crossings shared by neighbouring cubes bit-identical.

    Example
    -------
    >>> from pathmesh.core.mesh import MeshBuffer
    >>> mesher = VoxelMesher()
    >>> sink = MeshBuffer()
    >>> case = mesher.write([1, 0, 0, 0, 0, 0, 0, 0], 0.5, sink)
    >>> sink.num_vertices, sink.num_triangles
    (3, 1)
    """

    def __init__(
        self,
        cube_size: Sequence[float] = (1.0, 1.0, 1.0),
        origin: Sequence[float] = (0.0, 0.0, 0.0),
        table: Optional[Sequence[MarchingCubesCase]] = None,
    ):
        self.table = get_case_table(table)
        self.cube_size = tuple(float(c) for c in cube_size)
        self.origin = tuple(float(c) for c in origin)
        self.cube = (0, 0, 0)

    def move_to_cube(self, x: int, y: int, z: int) -> None:
        """Select the integer cube index subsequent writes are placed at."""
        self.cube = (int(x), int(y), int(z))

    @property
    def cube_position(self) -> Tuple[float, float, float]:
        """World position of the current cube's corner 0."""
        return tuple(
            self.origin[k] + self.cube[k] * self.cube_size[k] for k in range(3)
        )

    def lookup_case(self, values: Sequence[float], threshold: float) -> MarchingCubesCase:
        """Find the template matching the corner values."""
        return self.table[case_index(values, threshold)]

    def _to_world(self, local: Tuple[float, float, float]) -> Tuple[float, float, float]:
        return tuple(
            self.origin[k] + (self.cube[k] + local[k]) * self.cube_size[k]
            for k in range(3)
        )

    def write(self, values: Sequence[float], threshold: float, sink: MeshSink) -> MarchingCubesCase:
        """
        Emit the current cube's surface patch.

        Parameters
        ----------
        values : sequence of 8 floats
            Corner values in corner-index order
        threshold : float
            Iso value; corners with ``value >= threshold`` are inside
        sink : MeshSink
            Receives one vertex per crossing and one triangle per case triangle

        Returns
        -------
        MarchingCubesCase
            The case that was written

        Raises
        ------
        ValueError
            If ``values`` does not hold exactly 8 entries
        """
        arr = _as_corner_values(values)
        case = self.table[case_index(arr, threshold)]
        if case.is_empty:
            return case

        corner_values = arr.tolist()
        indices = [
            sink.add_vertex(self._to_world(crossing_position(corner_values, threshold, vertex)))
            for vertex in case.vertices
        ]
        for a, b, c in case.triangles:
            sink.add_triangle(indices[a], indices[b], indices[c])

        return case

    def wireframe(self, values: Sequence[float], threshold: float) -> np.ndarray:
        """
        Line segments along the traced boundary loops of the current cube.

        Returns
        -------
        np.ndarray
            Array of shape (n_edges, 2, 3) in world coordinates
        """
        arr = _as_corner_values(values)
        case = self.table[case_index(arr, threshold)]
        corner_values = arr.tolist()

        lines = [
            (
                self._to_world(crossing_position(corner_values, threshold, edge.a)),
                self._to_world(crossing_position(corner_values, threshold, edge.b)),
            )
            for edge in case.edges
        ]
        if not lines:
            return np.zeros((0, 2, 3), dtype=float)
        return np.array(lines, dtype=float)

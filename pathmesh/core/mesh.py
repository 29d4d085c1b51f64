"""
Append-only triangle mesh accumulator.
"""

from typing import Dict, List, Optional, Sequence, Tuple
import numpy as np


class MeshBuffer:
    """
    Mesh sink collecting vertices and triangles during one volume traversal.

    Implements the sink protocol used by the mesher:
    ``add_vertex(position) -> index`` and ``add_triangle(i, j, k)``.

    By default every added vertex is stored, so neighbouring cubes that cross
    the same edge each emit their own copy. With ``weld_vertices=True`` a
    vertex whose position matches an earlier one (after rounding to
    ``weld_digits`` decimals) reuses the earlier index, and triangles that
    collapse onto fewer than three vertices are skipped.
    """

    def __init__(self, weld_vertices: bool = False, weld_digits: int = 9):
        self.weld_vertices = weld_vertices
        self.weld_digits = weld_digits
        self._vertices: List[Tuple[float, float, float]] = []
        self._triangles: List[Tuple[int, int, int]] = []
        self._lookup: Dict[Tuple[float, float, float], int] = {}

    def __len__(self) -> int:
        return len(self._triangles)

    @property
    def num_vertices(self) -> int:
        return len(self._vertices)

    @property
    def num_triangles(self) -> int:
        return len(self._triangles)

    def is_empty(self) -> bool:
        return not self._triangles

    def clear(self) -> None:
        """Drop all vertices and triangles."""
        self._vertices.clear()
        self._triangles.clear()
        self._lookup.clear()

    def add_vertex(self, position: Sequence[float]) -> int:
        """Append a vertex and return its index."""
        vertex = (float(position[0]), float(position[1]), float(position[2]))

        if self.weld_vertices:
            key = tuple(round(c, self.weld_digits) for c in vertex)
            index = self._lookup.get(key)
            if index is not None:
                return index
            self._lookup[key] = len(self._vertices)

        self._vertices.append(vertex)
        return len(self._vertices) - 1

    def add_triangle(self, a: int, b: int, c: int) -> None:
        """
        Append a triangle referencing three existing vertex indices.

        When welding, a triangle whose corners were welded together is
        dropped. This happens when a sample equals the threshold exactly: every
        crossing leaving that corner lands on the corner itself.
        """
        count = len(self._vertices)
        for index in (a, b, c):
            if index < 0 or index >= count:
                raise ValueError(f"Triangle index {index} out of range for {count} vertices")
        if self.weld_vertices and (a == b or b == c or c == a):
            return
        self._triangles.append((int(a), int(b), int(c)))

    @property
    def vertices(self) -> np.ndarray:
        """Vertex positions, shape (n, 3)."""
        if not self._vertices:
            return np.zeros((0, 3), dtype=float)
        return np.array(self._vertices, dtype=float)

    @property
    def faces(self) -> np.ndarray:
        """Triangle indices, shape (m, 3)."""
        if not self._triangles:
            return np.zeros((0, 3), dtype=np.int64)
        return np.array(self._triangles, dtype=np.int64)

    @property
    def indices(self) -> List[int]:
        """Flat triangle index list."""
        return [i for tri in self._triangles for i in tri]

    def bounds(self) -> Optional[Tuple[np.ndarray, np.ndarray]]:
        """Min/max vertex corners, or None when there are no vertices."""
        if not self._vertices:
            return None
        verts = self.vertices
        return verts.min(axis=0), verts.max(axis=0)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "vertices": [list(v) for v in self._vertices],
            "triangles": [list(t) for t in self._triangles],
        }

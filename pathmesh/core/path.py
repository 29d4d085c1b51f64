"""
Path container: an ordered list of weighted vertices forming closed loops.
"""

from typing import Iterable, List, Optional, Sequence, Tuple, Union
import numpy as np

from .types import Point3D, PathVertex, Segment, DEFAULT_RADIUS


class Path:
    """
    Ordered sequence of path vertices.

    Built with ``move_to`` / ``line_to`` in the style of a 2D drawing API.
    Each ``move_to`` starts a new sub-loop; the list is treated as cyclic when
    segments are derived, so the last vertex connects back to the first one
    unless the first vertex is itself a segment start.

    Example
    -------
    >>> path = Path()
    >>> path.move_to(0, 0, 0)
    >>> path.line_to(1, 0, 0)
    >>> path.line_to(1, 0, 1)
    >>> len(path.segments())
    2
    """

    def __init__(
        self,
        vertices: Optional[Iterable[PathVertex]] = None,
        current_radius: float = DEFAULT_RADIUS,
    ):
        self.vertices: List[PathVertex] = list(vertices) if vertices is not None else []
        self.current_radius = current_radius

    def __len__(self) -> int:
        return len(self.vertices)

    def _add_vertex(self, x: float, y: float, z: float, is_segment_start: bool) -> PathVertex:
        vertex = PathVertex(
            position=Point3D(float(x), float(y), float(z)),
            radius=self.current_radius,
            is_segment_start=is_segment_start,
        )
        self.vertices.append(vertex)
        return vertex

    def move_to(self, x: float, y: float, z: float) -> PathVertex:
        """Append a vertex with no edge leading into it."""
        return self._add_vertex(x, y, z, True)

    def line_to(self, x: float, y: float, z: float) -> PathVertex:
        """Append a vertex connected to the previous one."""
        return self._add_vertex(x, y, z, False)

    def clear(self) -> None:
        """Remove all vertices."""
        self.vertices.clear()

    def get_vertices(self) -> List[PathVertex]:
        """Return a copy of the vertex list in path order."""
        return list(self.vertices)

    def segments(self) -> List[Segment]:
        """Derive the segment list (see ``build_segments``)."""
        return build_segments(self.vertices)

    def bounds(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Axis-aligned bounds of the path including vertex radii.

        Returns
        -------
        lo, hi : np.ndarray
            Minimum and maximum corners, shape (3,)
        """
        if not self.vertices:
            raise ValueError("Cannot compute bounds of an empty path")

        positions = np.array([v.position.to_tuple() for v in self.vertices])
        radii = np.array([v.radius for v in self.vertices])[:, None]
        return (positions - radii).min(axis=0), (positions + radii).max(axis=0)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "current_radius": self.current_radius,
            "vertices": [v.to_dict() for v in self.vertices],
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Path":
        """Create from dictionary."""
        return cls(
            vertices=[PathVertex.from_dict(v) for v in d.get("vertices", [])],
            current_radius=d.get("current_radius", DEFAULT_RADIUS),
        )


PathLike = Union[Path, Sequence[PathVertex]]


def get_path_vertices(path: PathLike) -> List[PathVertex]:
    """Accept a Path-like object (anything with get_vertices) or a plain vertex sequence."""
    if hasattr(path, "get_vertices"):
        return list(path.get_vertices())
    return list(path)


def build_segments(vertices: Sequence[PathVertex]) -> List[Segment]:
    """
    Walk the vertex list pairwise, treating it as cyclic.

    The edge into any segment-start vertex is skipped. With fewer than two
    vertices there are no segments.
    """
    if len(vertices) < 2:
        return []

    segments = []
    prev = vertices[-1]
    for vertex in vertices:
        if not vertex.is_segment_start:
            segments.append(Segment(prev, vertex))
        prev = vertex
    return segments

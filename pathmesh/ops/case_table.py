"""
Marching cubes case table.

Builds one triangulation template for each of the 256 ways the eight corners
of a unit cube can be split into inside / outside. Templates are derived from
the cube topology instead of being typed in:

1. every cube edge with exactly one inside endpoint gets a crossing vertex;
2. crossings are grouped by the cube faces they lie on, and each face
   contributes boundary edges joining its crossings;
3. the boundary edges are chained into closed loops with a consistent
   winding, and each loop is fan-triangulated.

Corner ``i`` sits at ``(i & 1, (i >> 1) & 1, (i >> 2) & 1)``.

Saddle faces (two diagonal corners inside, the other two outside) are resolved
by only joining crossings whose inside corners are identical or one cube edge
apart, so the inside corners on such a face are always kept separate. The
rule only depends on the face itself, so two cubes sharing a face always agree.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import numpy as np


NUM_CORNERS = 8
NUM_CASES = 256
AXIS_BITS = (0x1, 0x2, 0x4)

CORNER_OFFSETS: Tuple[Tuple[int, int, int], ...] = tuple(
    (i & 1, (i >> 1) & 1, (i >> 2) & 1) for i in range(NUM_CORNERS)
)

CUBE_CENTER = np.array([0.5, 0.5, 0.5])

# Inside-corner XORs allowed between two crossings joined on a saddle face:
# same corner, or corners sharing a cube edge. Diagonal pairs are never joined.
SADDLE_PAIRING_XOR = frozenset({0x0, 0x1, 0x2, 0x4})

_AXIS_OF_BIT = {0x1: 0, 0x2: 1, 0x4: 2}


def corner_to_string(index: int) -> str:
    """Format a corner index as ``x:y:z``."""
    return "{0}:{1}:{2}".format(index & 1, (index >> 1) & 1, (index >> 2) & 1)


def corner_mask(inside: Sequence[bool]) -> int:
    """Pack eight inside flags into a case index."""
    if len(inside) != NUM_CORNERS:
        raise ValueError(f"Expected {NUM_CORNERS} corner flags, got {len(inside)}")
    mask = 0
    for i, flag in enumerate(inside):
        if flag:
            mask |= 1 << i
    return mask


@dataclass(frozen=True)
class CrossingVertex:
    """Iso-surface crossing on the cube edge from inside corner ``a`` to outside corner ``b``."""

    a: int
    b: int

    @property
    def axis(self) -> int:
        """Axis (0=x, 1=y, 2=z) the cube edge runs along."""
        return _AXIS_OF_BIT[self.a ^ self.b]

    @property
    def faces(self) -> Tuple[int, int]:
        """
        The two cube faces containing this edge.

        Face ``2 * axis + bit`` is the plane where that axis equals ``bit``.
        """
        return tuple(
            2 * k + ((self.a >> k) & 1) for k in range(3) if k != self.axis
        )

    def midpoint(self) -> np.ndarray:
        """Midpoint of the cube edge in cube-local coordinates."""
        return (np.array(CORNER_OFFSETS[self.a], dtype=float)
                + np.array(CORNER_OFFSETS[self.b], dtype=float)) * 0.5

    def key(self) -> frozenset:
        """Undirected cube-edge identity, independent of which side is inside."""
        return frozenset((self.a, self.b))

    def __str__(self) -> str:
        return "{{{0}, {1}}}".format(corner_to_string(self.a), corner_to_string(self.b))


@dataclass(frozen=True)
class CaseEdge:
    """Directed boundary segment between two crossings on a shared cube face."""

    a: CrossingVertex
    b: CrossingVertex

    @property
    def is_valid(self) -> bool:
        return self.a != self.b

    def reversed(self) -> "CaseEdge":
        return CaseEdge(self.b, self.a)

    def __str__(self) -> str:
        return "({0}, {1})".format(self.a, self.b)


@dataclass(frozen=True)
class MarchingCubesCase:
    """
    Triangulation template for one corner configuration.

    ``triangles`` and ``loops`` index into ``vertices``. ``edges`` holds the
    traced loop boundaries in winding order, used for wireframe diagnostics.
    """

    mask: int
    vertices: Tuple[CrossingVertex, ...]
    edges: Tuple[CaseEdge, ...]
    triangles: Tuple[Tuple[int, int, int], ...]
    loops: Tuple[Tuple[int, ...], ...]

    @property
    def is_empty(self) -> bool:
        return not self.vertices

    def inside_corners(self) -> List[int]:
        return [i for i in range(NUM_CORNERS) if (self.mask >> i) & 1]


def should_flip(edge: CaseEdge) -> bool:
    """
    Decide whether a boundary edge must be reversed to wind outward.

    Uses the cube-edge midpoints ``a`` and ``b`` of the two crossings and the
    midpoint ``s`` of their inside corners, which always lies on the inside
    side of the segment within the face. The edge is flipped when
    ``((a - s) x (b - a)) . (mid(a, b) - center) >= 0``.
    """
    a = edge.a.midpoint()
    b = edge.b.midpoint()
    solid = (np.array(CORNER_OFFSETS[edge.a.a], dtype=float)
             + np.array(CORNER_OFFSETS[edge.b.a], dtype=float)) * 0.5

    cross = np.cross(a - solid, b - a)
    return float(np.dot(cross, (a + b) * 0.5 - CUBE_CENTER)) >= 0.0


def _find_crossings(mask: int) -> Tuple[List[CrossingVertex], List[List[CrossingVertex]]]:
    """Collect crossing vertices and bucket them by cube face."""
    vertices = []
    faces: List[List[CrossingVertex]] = [[] for _ in range(6)]

    for i in range(NUM_CORNERS):
        if not (mask >> i) & 1:
            continue
        for bit in AXIS_BITS:
            neighbor = i ^ bit
            if (mask >> neighbor) & 1:
                continue
            vertex = CrossingVertex(i, neighbor)
            vertices.append(vertex)
            for face in vertex.faces:
                faces[face].append(vertex)

    return vertices, faces


def _face_edges(faces: List[List[CrossingVertex]]) -> List[CaseEdge]:
    """Join crossings that share a face into undirected boundary edges."""
    edges = []
    for face in faces:
        if len(face) == 2:
            edges.append(CaseEdge(face[0], face[1]))
            continue

        for j in range(len(face) - 1):
            for k in range(j + 1, len(face)):
                first, second = face[j], face[k]
                if (first.a ^ second.a) in SADDLE_PAIRING_XOR:
                    edges.append(CaseEdge(first, second))
    return edges


def _trace_loops(vertices: List[CrossingVertex], edges: List[CaseEdge]):
    """
    Chain boundary edges into closed loops and fan-triangulate each loop.

    The first edge of every loop is oriented by ``should_flip``; the rest of
    the loop follows it. The edge closing a loop back onto its first vertex
    adds no triangle.
    """
    index_of = {vertex: k for k, vertex in enumerate(vertices)}
    remaining = list(edges)

    traced = []
    triangles = []
    loops = []

    while remaining:
        last = remaining.pop(0)
        if should_flip(last):
            last = last.reversed()
        traced.append(last)

        first = index_of[last.a]
        prev = index_of[last.b]
        loop = [first, prev]

        while remaining:
            nxt = next((e for e in remaining if e.a == last.b or e.b == last.b), None)
            if nxt is None:
                break

            remaining.remove(nxt)
            last = nxt if nxt.a == last.b else nxt.reversed()
            traced.append(last)

            new = index_of[last.b]
            if new == first:
                break

            triangles.append((first, prev, new))
            loop.append(new)
            prev = new

        loops.append(tuple(loop))

    return traced, triangles, loops


def build_case(mask: int) -> MarchingCubesCase:
    """
    Build the template for one corner mask.

    Parameters
    ----------
    mask : int
        Case index in [0, 255]; bit ``i`` set means corner ``i`` is inside

    Returns
    -------
    MarchingCubesCase
        Immutable case record
    """
    if not 0 <= mask < NUM_CASES:
        raise ValueError(f"Case mask must be in [0, {NUM_CASES - 1}], got {mask}")

    vertices, faces = _find_crossings(mask)
    edges = _face_edges(faces)
    traced, triangles, loops = _trace_loops(vertices, edges)

    return MarchingCubesCase(
        mask=mask,
        vertices=tuple(vertices),
        edges=tuple(traced),
        triangles=tuple(triangles),
        loops=tuple(loops),
    )


def build_case_table() -> Tuple[MarchingCubesCase, ...]:
    """Build all 256 case templates."""
    return tuple(build_case(mask) for mask in range(NUM_CASES))


CASE_TABLE: Tuple[MarchingCubesCase, ...] = build_case_table()


def get_case_table(table: Optional[Sequence[MarchingCubesCase]] = None) -> Sequence[MarchingCubesCase]:
    """Return ``table`` when given, otherwise the shared module-level table."""
    return CASE_TABLE if table is None else table


def saddle_faces(mask: int) -> List[int]:
    """Indices of the cube faces that carry four crossings for this mask."""
    _, faces = _find_crossings(mask)
    return [i for i, face in enumerate(faces) if len(face) == 4]

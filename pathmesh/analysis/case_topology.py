"""
Topology checks for marching cubes case templates.

Each non-empty case must describe a closed, consistently wound surface patch
whose boundary runs over the cube faces:

- every crossing vertex has one incoming and one outgoing boundary edge;
- the boundary edges form ``len(case.loops)`` simple cycles;
- the fan triangulation has ``V - 2L`` triangles;
- every boundary edge is used once by the triangles, in its own direction,
  and every interior edge twice, once in each direction.
"""

from collections import Counter
from typing import Dict, List, Optional, Sequence
import networkx as nx
import numpy as np

from ..ops.case_table import (
    NUM_CASES,
    MarchingCubesCase,
    get_case_table,
    saddle_faces,
)


def _boundary_graph(case: MarchingCubesCase) -> nx.MultiDiGraph:
    index_of = {vertex: k for k, vertex in enumerate(case.vertices)}
    graph = nx.MultiDiGraph()
    graph.add_nodes_from(range(len(case.vertices)))
    for edge in case.edges:
        graph.add_edge(index_of[edge.a], index_of[edge.b])
    return graph


def check_case(case: MarchingCubesCase) -> List[str]:
    """
    Check one case template.

    Returns
    -------
    list of str
        Problems found; empty when the case is well formed
    """
    problems = []
    n = len(case.vertices)

    if n == 0:
        if case.triangles or case.edges:
            problems.append("empty case has triangles or edges")
        return problems

    graph = _boundary_graph(case)

    for node in graph.nodes:
        if graph.in_degree(node) != 1 or graph.out_degree(node) != 1:
            problems.append(
                f"vertex {case.vertices[node]} has in/out degree "
                f"{graph.in_degree(node)}/{graph.out_degree(node)}"
            )

    num_cycles = nx.number_weakly_connected_components(graph)
    if num_cycles != len(case.loops):
        problems.append(f"{num_cycles} boundary cycles but {len(case.loops)} loops recorded")

    for loop in case.loops:
        if len(loop) < 3:
            problems.append(f"loop {loop} has fewer than 3 vertices")

    expected = n - 2 * len(case.loops)
    if len(case.triangles) != expected:
        problems.append(f"{len(case.triangles)} triangles, expected {expected}")

    directed = Counter()
    for a, b, c in case.triangles:
        for edge in ((a, b), (b, c), (c, a)):
            directed[edge] += 1

    boundary = set(graph.edges())
    for edge in boundary:
        if directed[edge] != 1:
            problems.append(f"boundary edge {edge} used {directed[edge]} times")
        if directed[(edge[1], edge[0])] != 0:
            problems.append(f"boundary edge {edge} used reversed")

    for edge, count in directed.items():
        if edge in boundary:
            continue
        if count != 1 or directed[(edge[1], edge[0])] != 1:
            problems.append(f"interior edge {edge} is not shared by exactly two triangles")

    return problems


def case_vector_area(case: MarchingCubesCase) -> np.ndarray:
    """
    Sum of triangle area vectors using cube-edge midpoints for the crossings.

    Points out of the inside region; zero for an empty case.
    """
    total = np.zeros(3)
    points = [vertex.midpoint() for vertex in case.vertices]
    for a, b, c in case.triangles:
        total += 0.5 * np.cross(points[b] - points[a], points[c] - points[a])
    return total


def check_complement(
    mask: int,
    table: Optional[Sequence[MarchingCubesCase]] = None,
    atol: float = 1e-12,
) -> List[str]:
    """
    Compare a case with its complement ``255 - mask``.

    Both must cross the same cube edges. For masks without saddle faces the
    complement's loops run the other way, so the vector areas negate.

    Masks with a saddle face only get the edge check. On a saddle face the
    two crossings around each inside corner are joined, which cuts the
    inside diagonal apart. The complement's inside corners are the other
    diagonal, so it joins the same four crossings into different pairs. The
    loops differ and the vector areas need not negate.
    """
    table = get_case_table(table)
    case = table[mask]
    other = table[(NUM_CASES - 1) ^ mask]
    problems = []

    if {v.key() for v in case.vertices} != {v.key() for v in other.vertices}:
        problems.append(f"case {mask} and its complement cross different cube edges")
        return problems

    if not saddle_faces(mask):
        total = case_vector_area(case) + case_vector_area(other)
        if not np.allclose(total, 0.0, atol=atol):
            problems.append(f"case {mask} and its complement do not have opposite orientation")

    return problems


def check_case_table(table: Optional[Sequence[MarchingCubesCase]] = None) -> Dict:
    """
    Run ``check_case`` and ``check_complement`` over a whole table.

    Returns
    -------
    dict
        ``num_cases``, ``num_valid``, ``problems`` (mask -> list of str),
        ``num_saddle_cases`` and ``max_triangles``
    """
    table = get_case_table(table)
    problems = {}

    for mask, case in enumerate(table):
        found = check_case(case)
        if case.mask != mask:
            found.append(f"case at index {mask} reports mask {case.mask}")
        if len(table) == NUM_CASES:
            found.extend(check_complement(mask, table))
        if found:
            problems[mask] = found

    return {
        "num_cases": len(table),
        "num_valid": len(table) - len(problems),
        "problems": problems,
        "num_saddle_cases": sum(1 for mask in range(len(table)) if saddle_faces(mask)),
        "max_triangles": max((len(case.triangles) for case in table), default=0),
    }

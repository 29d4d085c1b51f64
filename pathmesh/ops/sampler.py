"""
Coverage field sampling for weighted paths.

A path segment covers the points around it with a score that falls linearly
from 1 on the segment to 0 at twice the segment's radius. A sample's value is
the maximum score over all segments, so overlapping segments form a union
rather than a sum.
"""

from typing import List, Optional, Sequence, Union
import numpy as np

from ..core.types import PathVertex, Segment
from ..core.path import PathLike, build_segments, get_path_vertices
from ..core.field import ScalarField


def is_segment_near_layer(segment: Segment, layer_y: float) -> bool:
    """
    Cheap vertical rejection test.

    A segment is rejected when both endpoints, lowered by the start radius,
    lie above the layer, or both endpoints raised by it lie below.
    """
    radius = segment.a.radius
    ya = segment.a.position.y
    yb = segment.b.position.y

    if ya - radius > layer_y and yb - radius > layer_y:
        return False
    if ya + radius < layer_y and yb + radius < layer_y:
        return False
    return True


def is_segment_near_rect(
    segment: Segment,
    rect_min: Sequence[float],
    rect_max: Sequence[float],
) -> bool:
    """
    Horizontal rejection test against an xz rectangle.

    Uses the segment's xz bounding box grown by its full reach (twice the
    radius), beyond which the score is zero, so rejection never changes a
    sampled value.
    """
    reach = 2.0 * segment.a.radius
    pa = segment.a.position
    pb = segment.b.position

    if min(pa.x, pb.x) - reach > rect_max[0] or max(pa.x, pb.x) + reach < rect_min[0]:
        return False
    if min(pa.z, pb.z) - reach > rect_max[1] or max(pa.z, pb.z) + reach < rect_min[1]:
        return False
    return True


def find_layer_segments(
    vertices: Sequence[PathVertex],
    layer_y: float,
    rect_min: Optional[Sequence[float]] = None,
    rect_max: Optional[Sequence[float]] = None,
) -> List[Segment]:
    """
    Segments that can influence the layer at height ``layer_y``.

    Horizontal pruning is applied only when both ``rect_min`` and
    ``rect_max`` are given.
    """
    segments = [s for s in build_segments(vertices) if is_segment_near_layer(s, layer_y)]
    if rect_min is not None and rect_max is not None:
        segments = [s for s in segments if is_segment_near_rect(s, rect_min, rect_max)]
    return segments


def point_segment_distance(points: np.ndarray, a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    Distance from each point to the capped line ``a``-``b``.

    Points projecting before ``a`` measure to ``a``, points projecting past
    ``b`` measure to ``b``, the rest use the perpendicular distance
    ``|ap x bp| / |ab|``. A zero-length segment measures to ``a``.

    Parameters
    ----------
    points : np.ndarray
        Array of shape (..., 3)
    a, b : np.ndarray
        Segment endpoints, shape (3,)

    Returns
    -------
    np.ndarray
        Distances with shape ``points.shape[:-1]``
    """
    points = np.asarray(points, dtype=float)
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)

    ap = points - a
    bp = points - b
    ab = b - a
    ab_sq = float(np.dot(ab, ab))

    dist_a = np.linalg.norm(ap, axis=-1)
    if ab_sq == 0.0:
        return dist_a

    dist_b = np.linalg.norm(bp, axis=-1)
    cross = np.cross(ap, bp)
    dist_line = np.sqrt(np.sum(cross * cross, axis=-1) / ab_sq)

    before = ap @ ab < 0.0
    after = bp @ ab > 0.0
    return np.where(before, dist_a, np.where(after, dist_b, dist_line))


def distance_to_score(distance, radius: float):
    """Coverage score: 1 at distance 0, falling linearly to 0 at ``2 * radius``."""
    return np.clip(1.0 - np.asarray(distance, dtype=float) * 0.5 / radius, 0.0, 1.0)


def _accumulate_scores(points: np.ndarray, segments: Sequence[Segment], out: np.ndarray) -> np.ndarray:
    for segment in segments:
        dist = point_segment_distance(
            points,
            segment.a.position.to_array(),
            segment.b.position.to_array(),
        )
        np.maximum(out, distance_to_score(dist, segment.a.radius), out=out)
    return out


def score_points(path: PathLike, points) -> np.ndarray:
    """
    Coverage score at arbitrary points.

    No layer pruning is applied; every segment of the path is considered.

    Parameters
    ----------
    path : Path or sequence of PathVertex
        Source path
    points : array-like
        Shape (3,) or (..., 3)

    Returns
    -------
    np.ndarray
        Scores with shape ``points.shape[:-1]`` (a 0-d array for one point)
    """
    points = np.asarray(points, dtype=float)
    if points.shape[-1] != 3:
        raise ValueError(f"Expected points with a last axis of length 3, got shape {points.shape}")

    scores = np.zeros(points.shape[:-1], dtype=float)
    vertices = get_path_vertices(path)
    if len(vertices) < 2:
        return scores

    return _accumulate_scores(points, build_segments(vertices), scores)


def _prepare_output(out: Union[None, ScalarField, np.ndarray], resolution: int) -> ScalarField:
    if out is None:
        return ScalarField.empty(resolution)

    if isinstance(out, ScalarField):
        if out.values.shape == (resolution, resolution):
            return out
        buffer = out.values
    else:
        buffer = out

    if buffer.size < resolution * resolution:
        raise ValueError(
            f"Expected output buffer of at least {resolution * resolution} samples, "
            f"got {buffer.size}"
        )

    values = buffer.reshape(-1)[: resolution * resolution].reshape(resolution, resolution)
    if isinstance(out, ScalarField):
        out.values = values
        return out
    return ScalarField(values=values)


def sample_field(
    path: PathLike,
    origin: Sequence[float],
    size: Sequence[float],
    resolution: int,
    out: Union[None, ScalarField, np.ndarray] = None,
    prune_horizontal: bool = True,
) -> ScalarField:
    """
    Sample the coverage field of a path on one horizontal layer.

    Parameters
    ----------
    path : Path or sequence of PathVertex
        Source path
    origin : sequence of 3 floats
        Layer corner; ``origin[1]`` is the layer height
    size : sequence of 2 floats
        Extent along x and z
    resolution : int
        Samples per side
    out : ScalarField or np.ndarray, optional
        Buffer to fill instead of allocating; a plain array must hold at
        least ``resolution ** 2`` floats and is written through a view
    prune_horizontal : bool
        Skip segments whose reach misses the sampled rectangle

    Returns
    -------
    ScalarField
        Field of shape (resolution, resolution); all zero for paths with
        fewer than two vertices

    Raises
    ------
    ValueError
        If ``resolution < 1`` or ``out`` is too small
    """
    resolution = int(resolution)
    if resolution < 1:
        raise ValueError(f"Sampling resolution must be >= 1, got {resolution}")

    field = _prepare_output(out, resolution)
    field.origin = np.asarray(origin, dtype=float).reshape(3).copy()
    field.size = np.asarray(size, dtype=float).reshape(2).copy()
    field.clear()

    vertices = get_path_vertices(path)
    if len(vertices) < 2:
        return field

    layer_y = float(field.origin[1])
    rect_min = (field.origin[0], field.origin[2])
    rect_max = (field.origin[0] + field.size[0], field.origin[2] + field.size[1])

    if prune_horizontal:
        segments = find_layer_segments(vertices, layer_y, rect_min, rect_max)
    else:
        segments = find_layer_segments(vertices, layer_y)

    if segments:
        _accumulate_scores(field.sample_positions(), segments, field.values)

    return field

"""
Procedural test paths.
"""

from ..core.path import Path
from ..core.types import DEFAULT_RADIUS


def nested_frame_path(
    layers: int = 8,
    thickness: float = 0.125,
    radius: float = DEFAULT_RADIUS,
    layer_spacing: float = None,
) -> Path:
    """
    Stack of nested square frames with an inner zig-zag, inside the unit square.

    Each layer holds three sub-paths: an outer square frame, an inner frame
    with a diagonal notch, and a serpentine that fills the upper part of the
    square with alternating switchbacks. Layers are stacked along y.

    Parameters
    ----------
    layers : int
        Number of stacked copies
    thickness : float
        Inset between the outer and inner frames
    radius : float
        Radius of every vertex
    layer_spacing : float, optional
        Vertical distance between copies; defaults to ``radius``

    Returns
    -------
    Path
        The generated path
    """
    if layers < 1:
        raise ValueError(f"layers must be >= 1, got {layers}")

    spacing = radius if layer_spacing is None else layer_spacing
    path = Path(current_radius=radius)
    t = thickness

    for j in range(layers):
        y = j * spacing

        path.move_to(0.0, y, 0.0)
        path.line_to(1.0, y, 0.0)
        path.line_to(1.0, y, 1.0)
        path.line_to(0.0, y, 1.0)
        path.line_to(0.0, y, radius)

        path.move_to(t, y, t)
        path.line_to(1.0 - t, y, t)
        path.line_to(1.0 - t, y, 0.5)
        path.line_to(0.5, y, 0.5)
        path.line_to(t, y, 1.0 - t)
        path.line_to(t, y, t + radius)

        path.move_to(1.0 - t * 0.5, y, 0.5)
        path.line_to(1.0 - t * 0.5, y, t * 0.5)
        path.line_to(t * 0.5, y, t * 0.5)
        path.line_to(t * 0.5, y, 1.0 - t * 0.5)
        path.line_to(1.0 - t * 0.5, y, 1.0 - t * 0.5)

        for i in range(1, 4):
            path.line_to(1.0 - t * 0.5, y, 1.0 - i * t)
            path.line_to(i * t + t * 0.707, y, 1.0 - i * t)
            path.line_to((i + 0.5) * t + t * 0.707, y, 1.0 - (i + 0.5) * t)
            path.line_to(1.0 - t * 0.5, y, 1.0 - (i + 0.5) * t)

    return path


def straight_segment_path(
    start=(0.0, 0.0, 0.0),
    end=(1.0, 0.0, 0.0),
    radius: float = DEFAULT_RADIUS,
) -> Path:
    """Single open segment from ``start`` to ``end``."""
    path = Path(current_radius=radius)
    path.move_to(*start)
    path.line_to(*end)
    return path


def rectangle_path(
    x0: float,
    z0: float,
    x1: float,
    z1: float,
    y: float = 0.0,
    radius: float = DEFAULT_RADIUS,
) -> Path:
    """Closed axis-aligned rectangle in the plane at height ``y``."""
    path = Path(current_radius=radius)
    path.move_to(x0, y, z0)
    path.line_to(x1, y, z0)
    path.line_to(x1, y, z1)
    path.line_to(x0, y, z1)
    path.line_to(x0, y, z0)
    return path

"""Field and mesh plots for debugging and inspection."""

from typing import Optional, Union
import numpy as np
import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d.art3d import Line3DCollection, Poly3DCollection
import trimesh

from ..core.field import ScalarField
from ..core.mesh import MeshBuffer
from ..ops.case_table import CORNER_OFFSETS, MarchingCubesCase, get_case_table


def field_to_image(field: Union[ScalarField, np.ndarray]) -> np.ndarray:
    """
    Convert a layer of coverage scores to an 8-bit grayscale image.

    Scores are clamped to [0, 1] and scaled to [0, 255]. Image rows follow z
    and columns follow x, matching the field layout.
    """
    values = field.values if isinstance(field, ScalarField) else np.asarray(field, dtype=float)
    if values.ndim != 2:
        raise ValueError(f"Field must be 2D, got {values.ndim}D")
    return (np.clip(values, 0.0, 1.0) * 255.0).astype(np.uint8)


def save_field_image(field: Union[ScalarField, np.ndarray], filepath: str) -> None:
    """Write a field to an image file (format from the extension, e.g. PNG)."""
    image = field_to_image(field)
    plt.imsave(filepath, image, cmap="gray", vmin=0, vmax=255)


def plot_field(
    field: ScalarField,
    threshold: Optional[float] = None,
    ax: Optional[plt.Axes] = None,
    show: bool = True,
    title: Optional[str] = None,
) -> plt.Axes:
    """
    Show a sampled layer as an image, optionally with the iso contour.

    Parameters
    ----------
    field : ScalarField
        Layer to plot
    threshold : float, optional
        Draw the contour at this value
    ax : matplotlib Axes, optional
        Existing axes
    show : bool
        Whether to call plt.show()
    title : str, optional
        Plot title

    Returns
    -------
    ax : matplotlib Axes
        Axes object
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 6))

    x0, z0 = float(field.origin[0]), float(field.origin[2])
    extent = (x0, x0 + float(field.size[0]), z0, z0 + float(field.size[1]))

    ax.imshow(field.values, origin="lower", extent=extent, cmap="gray", vmin=0.0, vmax=1.0)

    if threshold is not None and field.resolution > 1:
        positions = field.sample_positions()
        ax.contour(positions[..., 0], positions[..., 2], field.values,
                   levels=[threshold], colors="red", linewidths=1)

    ax.set_xlabel('X')
    ax.set_ylabel('Z')
    ax.set_title(title or f"Layer y = {field.layer_height:.4g}")

    if show:
        plt.show()

    return ax


def plot_case_wireframe(
    case: Union[int, MarchingCubesCase],
    ax: Optional[plt.Axes] = None,
    show: bool = True,
) -> plt.Axes:
    """
    Draw one case template inside the unit cube.

    Inside corners are drawn in black, the traced boundary loops in red and
    the triangles as translucent patches.
    """
    if isinstance(case, int):
        case = get_case_table()[case]

    if ax is None:
        fig = plt.figure(figsize=(6, 6))
        ax = fig.add_subplot(111, projection='3d')

    corners = np.array(CORNER_OFFSETS, dtype=float)
    cube_edges = [
        (corners[i], corners[i ^ bit])
        for i in range(len(corners)) for bit in (1, 2, 4) if i < i ^ bit
    ]
    ax.add_collection3d(Line3DCollection(cube_edges, colors="lightgray", linewidths=1))

    inside = case.inside_corners()
    if inside:
        pts = corners[inside]
        ax.scatter(pts[:, 0], pts[:, 1], pts[:, 2], c='black', s=30)

    points = [vertex.midpoint() for vertex in case.vertices]
    if case.edges:
        index_of = {vertex: k for k, vertex in enumerate(case.vertices)}
        lines = [(points[index_of[e.a]], points[index_of[e.b]]) for e in case.edges]
        ax.add_collection3d(Line3DCollection(lines, colors="red", linewidths=2))
    if case.triangles:
        polys = [[points[a], points[b], points[c]] for a, b, c in case.triangles]
        ax.add_collection3d(Poly3DCollection(polys, alpha=0.3, facecolor="tab:blue"))

    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1)
    ax.set_zlim(0, 1)
    ax.set_xlabel('X')
    ax.set_ylabel('Y')
    ax.set_zlabel('Z')
    ax.set_title(f"Case {case.mask} ({len(case.triangles)} triangles)")

    if show:
        plt.show()

    return ax


def plot_mesh(
    mesh: Union[MeshBuffer, trimesh.Trimesh],
    ax: Optional[plt.Axes] = None,
    show: bool = True,
    title: Optional[str] = None,
    color: str = "tab:orange",
) -> plt.Axes:
    """Plot a triangle mesh in 3D."""
    if ax is None:
        fig = plt.figure(figsize=(10, 8))
        ax = fig.add_subplot(111, projection='3d')

    vertices = np.asarray(mesh.vertices, dtype=float)
    faces = np.asarray(mesh.faces, dtype=np.int64)

    if len(faces) > 0:
        ax.add_collection3d(Poly3DCollection(
            vertices[faces], facecolor=color, edgecolor="k", linewidths=0.1, alpha=0.8,
        ))
        lo = vertices.min(axis=0)
        hi = vertices.max(axis=0)
        ax.set_xlim(lo[0], hi[0])
        ax.set_ylim(lo[1], hi[1])
        ax.set_zlim(lo[2], hi[2])

    ax.set_xlabel('X')
    ax.set_ylabel('Y')
    ax.set_zlabel('Z')

    if title:
        ax.set_title(title)

    if show:
        plt.show()

    return ax

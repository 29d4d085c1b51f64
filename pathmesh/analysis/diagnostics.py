"""
Mesh health and surface quality metrics for generated meshes.
"""

from dataclasses import dataclass, asdict
from typing import List, Optional, Union
import numpy as np
import trimesh

from ..core.mesh import MeshBuffer


@dataclass
class MeshDiagnostics:
    watertight: bool
    euler_number: int
    num_vertices: int
    num_faces: int
    num_components: int
    non_manifold_edges: int
    boundary_edges: int
    degenerate_faces: int
    bounding_box_extents: List[float]
    volume: Optional[float]
    volume_source: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SurfaceQuality:
    min_face_area: float
    max_face_area: float
    mean_face_area: float
    min_edge_length: float
    max_edge_length: float
    mean_edge_length: float
    max_aspect_ratio: float
    frac_aspect_ratio_over_10: float

    def to_dict(self) -> dict:
        return asdict(self)


def as_trimesh(mesh: Union[MeshBuffer, trimesh.Trimesh], merge_vertices: bool = True) -> trimesh.Trimesh:
    """
    Wrap a MeshBuffer as trimesh.Trimesh.

    Unwelded buffers hold one copy of every shared crossing per cube, so
    vertices are merged by default to recover the connectivity.
    """
    if isinstance(mesh, trimesh.Trimesh):
        return mesh

    tm = trimesh.Trimesh(vertices=mesh.vertices, faces=mesh.faces, process=False)
    if merge_vertices:
        tm.merge_vertices()
    return tm


def count_degenerate_faces(mesh: trimesh.Trimesh, area_eps: float = 1e-18) -> int:
    """
    Count faces whose area is effectively zero.
    """
    areas = mesh.area_faces
    return int(np.sum(areas <= area_eps))


def count_edge_uses(mesh: trimesh.Trimesh) -> np.ndarray:
    """Number of faces using each unique edge."""
    if len(mesh.faces) == 0:
        return np.zeros(0, dtype=np.int64)
    return np.bincount(mesh.edges_unique_inverse)


def estimate_voxel_volume(mesh: trimesh.Trimesh, pitch: float) -> Optional[float]:
    """
    Estimate enclosed volume by voxelizing and filling the mesh.

    Returns None if voxelization fails.
    """
    try:
        vox = mesh.voxelized(pitch).fill()
        num_voxels = int(vox.matrix.astype(bool).sum())
        return float(num_voxels * (pitch ** 3))
    except Exception:
        return None


def compute_diagnostics(
    mesh: Union[MeshBuffer, trimesh.Trimesh],
    volume_pitch: Optional[float] = None,
) -> MeshDiagnostics:
    """
    Compute core mesh health/topology metrics.

    Parameters
    ----------
    mesh : MeshBuffer or trimesh.Trimesh
        Mesh to inspect; MeshBuffer input has its vertices merged first
    volume_pitch : float, optional
        Voxel size for a volume estimate on open meshes. Without it the
        volume of an open mesh is reported as None.

    Returns
    -------
    MeshDiagnostics
        Counts, manifoldness and volume
    """
    tm = as_trimesh(mesh)

    num_vertices = int(tm.vertices.shape[0])
    num_faces = int(tm.faces.shape[0])

    if num_faces == 0:
        return MeshDiagnostics(
            watertight=False,
            euler_number=0,
            num_vertices=num_vertices,
            num_faces=0,
            num_components=0,
            non_manifold_edges=0,
            boundary_edges=0,
            degenerate_faces=0,
            bounding_box_extents=[0.0, 0.0, 0.0],
            volume=None,
            volume_source="empty",
        )

    watertight = bool(tm.is_watertight)
    components = tm.split(only_watertight=False)

    counts = count_edge_uses(tm)
    non_manifold_edges = int(np.sum(counts > 2))
    boundary_edges = int(np.sum(counts == 1))

    # Volume: watertight meshes integrate exactly, open ones need voxels
    if watertight:
        volume = float(tm.volume)
        volume_source = "mesh"
    elif volume_pitch is not None:
        volume = estimate_voxel_volume(tm, volume_pitch)
        volume_source = "voxel_estimate"
    else:
        volume = None
        volume_source = "unavailable"

    return MeshDiagnostics(
        watertight=watertight,
        euler_number=int(tm.euler_number),
        num_vertices=num_vertices,
        num_faces=num_faces,
        num_components=len(components),
        non_manifold_edges=non_manifold_edges,
        boundary_edges=boundary_edges,
        degenerate_faces=count_degenerate_faces(tm),
        bounding_box_extents=tm.extents.tolist(),
        volume=volume,
        volume_source=volume_source,
    )


def compute_surface_quality(mesh: Union[MeshBuffer, trimesh.Trimesh]) -> SurfaceQuality:
    """
    Compute basic surface quality metrics:
      - face areas
      - edge lengths
      - triangle aspect ratios
    """
    tm = as_trimesh(mesh)
    if len(tm.faces) == 0:
        raise ValueError("Cannot compute surface quality of an empty mesh")

    v = tm.vertices
    f = tm.faces

    areas = tm.area_faces

    edges = tm.edges_unique
    lengths = np.linalg.norm(v[edges[:, 0]] - v[edges[:, 1]], axis=1)

    v0 = v[f[:, 0]]
    v1 = v[f[:, 1]]
    v2 = v[f[:, 2]]

    e01 = np.linalg.norm(v1 - v0, axis=1)
    e12 = np.linalg.norm(v2 - v1, axis=1)
    e20 = np.linalg.norm(v0 - v2, axis=1)

    longest_edge = np.maximum(e01, np.maximum(e12, e20))
    h = 2.0 * areas / (longest_edge + 1e-16)
    aspect_ratio = longest_edge / (h + 1e-16)

    return SurfaceQuality(
        min_face_area=float(areas.min()),
        max_face_area=float(areas.max()),
        mean_face_area=float(areas.mean()),
        min_edge_length=float(lengths.min()),
        max_edge_length=float(lengths.max()),
        mean_edge_length=float(lengths.mean()),
        max_aspect_ratio=float(aspect_ratio.max()),
        frac_aspect_ratio_over_10=float(np.mean(aspect_ratio > 10.0)),
    )

"""
Adapter for converting MeshBuffer output to trimesh.Trimesh.

Provides STL export with optional vertex merging and MeshFix repair.
"""

from typing import Union
import numpy as np
import trimesh
from pymeshfix import MeshFix

from ..core.mesh import MeshBuffer
from ..core.result import OperationResult, ErrorCode


def to_trimesh(
    mesh_buffer: MeshBuffer,
    merge_vertices: bool = False,
) -> OperationResult:
    """
    Convert a MeshBuffer to trimesh.Trimesh.

    Parameters
    ----------
    mesh_buffer : MeshBuffer
        Mesh produced by the volume walker
    merge_vertices : bool
        Merge coincident vertices so neighbouring cube patches share edges

    Returns
    -------
    OperationResult
        Result with mesh in metadata['mesh']
    """
    if mesh_buffer.is_empty():
        return OperationResult.failure(
            "Mesh buffer has no triangles",
            error_codes=[ErrorCode.EMPTY_MESH.value],
        )

    try:
        mesh = trimesh.Trimesh(
            vertices=mesh_buffer.vertices,
            faces=mesh_buffer.faces,
            process=False,
        )
        if merge_vertices:
            mesh.merge_vertices()

        return OperationResult.success(
            f"Converted {mesh_buffer.num_triangles} triangles",
            metadata={
                'mesh': mesh,
                'num_vertices': int(mesh.vertices.shape[0]),
                'num_faces': int(mesh.faces.shape[0]),
                'is_watertight': bool(mesh.is_watertight),
                'merged_vertices': merge_vertices,
            },
        )
    except Exception as e:
        return OperationResult.failure(
            f"Mesh conversion failed: {e}",
            error_codes=[ErrorCode.MESH_EXPORT_FAILED.value],
        )


def meshfix_repair(
    mesh: trimesh.Trimesh,
    keep_largest_component: bool = False,
) -> trimesh.Trimesh:
    """
    Run MeshFix to close holes left where the surface leaves the capture box.

    With ``keep_largest_component`` only the biggest connected piece is kept;
    path meshes usually have several legitimate pieces, so it is off by default.
    """
    v = np.asarray(mesh.vertices, dtype=float)
    f = np.asarray(mesh.faces, dtype=np.int64)

    fixer = MeshFix(v, f)
    fixer.repair(
        joincomp=False,
        remove_smallest_components=keep_largest_component,
    )

    repaired = trimesh.Trimesh(
        vertices=np.asarray(fixer.points, dtype=float),
        faces=np.asarray(fixer.faces, dtype=np.int64),
        process=False,
    )
    repaired.remove_unreferenced_vertices()
    return repaired


def export_stl(
    mesh: Union[MeshBuffer, trimesh.Trimesh],
    output_path: str,
    merge_vertices: bool = True,
    repair: bool = False,
) -> OperationResult:
    """
    Export a mesh to an STL file.

    Parameters
    ----------
    mesh : MeshBuffer or trimesh.Trimesh
        Mesh to export
    output_path : str
        Path to output STL file
    merge_vertices : bool
        Merge coincident vertices before export (MeshBuffer input only)
    repair : bool
        Run MeshFix when the mesh is not watertight

    Returns
    -------
    OperationResult
        Result of export operation
    """
    if isinstance(mesh, MeshBuffer):
        result = to_trimesh(mesh, merge_vertices=merge_vertices)
        if not result.is_success():
            return result
        tm = result.metadata['mesh']
    else:
        tm = mesh
        result = OperationResult.success(
            metadata={
                'mesh': tm,
                'num_vertices': int(tm.vertices.shape[0]),
                'num_faces': int(tm.faces.shape[0]),
                'is_watertight': bool(tm.is_watertight),
            },
        )

    if repair and not tm.is_watertight:
        try:
            tm = meshfix_repair(tm)
            result.add_warning("Mesh repaired with meshfix")
            result.metadata['mesh'] = tm
            result.metadata['was_repaired'] = True
            result.metadata['is_watertight'] = bool(tm.is_watertight)
        except Exception as e:
            result.add_warning(f"Mesh repair failed: {e}")
            result.metadata['repair_failed'] = True

    try:
        tm.export(str(output_path))
        result.message = f"Exported to {output_path}"
        result.metadata['output_path'] = str(output_path)
        return result
    except Exception as e:
        return OperationResult.failure(
            f"Export failed: {e}",
            error_codes=[ErrorCode.MESH_EXPORT_FAILED.value],
        )

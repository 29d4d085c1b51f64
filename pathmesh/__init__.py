"""
pathmesh - turn weighted 3D paths into triangle meshes.

A path is an ordered list of vertices, each carrying a radius. The path is
sampled layer by layer into a coverage field (1 on a segment, falling to 0
at twice its radius) and the iso-surface of that field is extracted with a
marching cubes sweep whose case table is derived from cube topology.

Example Usage:
    from pathmesh import Path, generate_mesh, get_preset

    path = Path()
    path.move_to(0.2, 0.1, 0.2)
    path.line_to(0.8, 0.1, 0.2)
    path.line_to(0.8, 0.1, 0.8)

    result = generate_mesh(path, get_preset("preview"))
    mesh = result.metadata['mesh']
"""

__version__ = "0.1.0"

from .core.types import Point3D, PathVertex, Segment, DEFAULT_RADIUS
from .core.path import Path, build_segments
from .core.field import ScalarField
from .core.mesh import MeshBuffer
from .core.result import OperationResult, OperationStatus, ErrorCode

from .ops.case_table import CASE_TABLE, MarchingCubesCase, build_case_table
from .ops.mesher import VoxelMesher
from .ops.sampler import sample_field, score_points
from .ops.walker import VolumeWalker, march_volume
from .ops.patterns import nested_frame_path

from .params import MeshingParams, get_preset, list_presets, validate_params, validate_and_warn

from .api.generate import generate_mesh, generate_stl
from .adapters.mesh_adapter import to_trimesh, export_stl

from .analysis.diagnostics import compute_diagnostics, MeshDiagnostics
from .analysis.case_topology import check_case_table

from .io.serialize import save_json, load_json

__all__ = [
    "Point3D",
    "PathVertex",
    "Segment",
    "DEFAULT_RADIUS",
    "Path",
    "build_segments",
    "ScalarField",
    "MeshBuffer",
    "OperationResult",
    "OperationStatus",
    "ErrorCode",
    "CASE_TABLE",
    "MarchingCubesCase",
    "build_case_table",
    "VoxelMesher",
    "sample_field",
    "score_points",
    "VolumeWalker",
    "march_volume",
    "nested_frame_path",
    "MeshingParams",
    "get_preset",
    "list_presets",
    "validate_params",
    "validate_and_warn",
    "generate_mesh",
    "generate_stl",
    "to_trimesh",
    "export_stl",
    "compute_diagnostics",
    "MeshDiagnostics",
    "check_case_table",
    "save_json",
    "load_json",
]

"""Core data structures for weighted paths and meshes."""

from .types import Point3D, PathVertex, Segment, DEFAULT_RADIUS
from .path import Path, build_segments, get_path_vertices
from .field import ScalarField
from .mesh import MeshBuffer
from .result import OperationResult, OperationStatus, ErrorCode

__all__ = [
    "Point3D",
    "PathVertex",
    "Segment",
    "DEFAULT_RADIUS",
    "Path",
    "build_segments",
    "get_path_vertices",
    "ScalarField",
    "MeshBuffer",
    "OperationResult",
    "OperationStatus",
    "ErrorCode",
]

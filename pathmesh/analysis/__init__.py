"""Mesh diagnostics and case table checks."""

from .diagnostics import (
    MeshDiagnostics,
    SurfaceQuality,
    as_trimesh,
    compute_diagnostics,
    compute_surface_quality,
    count_degenerate_faces,
)
from .case_topology import check_case, check_case_table, check_complement, case_vector_area
from .reference import reference_surface, compare_to_reference

__all__ = [
    "MeshDiagnostics",
    "SurfaceQuality",
    "as_trimesh",
    "compute_diagnostics",
    "compute_surface_quality",
    "count_degenerate_faces",
    "check_case",
    "check_case_table",
    "check_complement",
    "case_vector_area",
    "reference_surface",
    "compare_to_reference",
]

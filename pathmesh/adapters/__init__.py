"""Adapters for exporting meshes to external formats."""

from .mesh_adapter import to_trimesh, export_stl, meshfix_repair

__all__ = [
    "to_trimesh",
    "export_stl",
    "meshfix_repair",
]

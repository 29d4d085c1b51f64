"""High-level API for turning paths into meshes."""

from .generate import generate_mesh, generate_stl

__all__ = [
    "generate_mesh",
    "generate_stl",
]

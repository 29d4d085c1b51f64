"""Matplotlib plots for fields, case templates and meshes."""

from .plots import field_to_image, save_field_image, plot_field, plot_case_wireframe, plot_mesh

__all__ = [
    "field_to_image",
    "save_field_image",
    "plot_field",
    "plot_case_wireframe",
    "plot_mesh",
]

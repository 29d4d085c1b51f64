"""Mesh generation API: path in, triangle mesh out."""

from typing import Optional

from ..core.path import PathLike, get_path_vertices
from ..core.mesh import MeshBuffer
from ..core.result import OperationResult, ErrorCode
from ..ops.walker import VolumeWalker
from ..params.meshing import MeshingParams
from ..params.presets import standard
from ..params.validation import validate_params
from ..adapters.mesh_adapter import to_trimesh, export_stl
from ..utils import timed_stage


def generate_mesh(
    path: PathLike,
    params: Optional[MeshingParams] = None,
    verbose: bool = False,
) -> OperationResult:
    """
    Sample a path into a coverage volume and extract its iso-surface.

    Parameters
    ----------
    path : Path or sequence of PathVertex
        Source path
    params : MeshingParams, optional
        Capture box, resolutions and threshold; defaults to the
        ``standard`` preset
    verbose : bool
        Print stage timings

    Returns
    -------
    OperationResult
        ``metadata`` holds ``mesh_buffer`` (MeshBuffer), ``mesh``
        (trimesh.Trimesh, absent for empty output), ``num_vertices``,
        ``num_triangles`` and ``params``

    Example
    -------
    >>> from pathmesh import nested_frame_path, get_preset, generate_mesh
    >>> result = generate_mesh(nested_frame_path(), get_preset("preview"))
    >>> result.is_success()
    True
    """
    if params is None:
        params = standard()

    _, param_warnings = validate_params(params)

    vertices = get_path_vertices(path)
    if len(vertices) < 2:
        result = OperationResult.partial_success(
            f"Path has {len(vertices)} vertices, nothing to mesh",
            error_codes=[ErrorCode.INSUFFICIENT_PATH.value],
            metadata={
                'mesh_buffer': MeshBuffer(weld_vertices=params.weld_vertices),
                'num_vertices': 0,
                'num_triangles': 0,
                'params': params.to_dict(),
            },
        )
        result.add_warning("Path needs at least 2 vertices to form a segment")
        for warning in param_warnings:
            result.add_warning(warning)
        return result

    walker = VolumeWalker(
        weld_vertices=params.weld_vertices,
        show_progress=params.show_progress,
        prune_horizontal=params.prune_horizontal,
    )

    try:
        with timed_stage("generate_mesh", verbose=verbose):
            mesh_buffer = walker.build(
                vertices,
                origin=params.origin,
                capture_size=params.capture_size,
                horizontal_resolution=params.horizontal_resolution,
                vertical_resolution=params.vertical_resolution,
                threshold=params.threshold,
            )
    except ValueError as e:
        result = OperationResult.failure(
            f"Invalid meshing parameters: {e}",
            error_codes=[ErrorCode.INVALID_PARAMETER.value],
            metadata={'params': params.to_dict()},
        )
        result.add_error(str(e))
        for warning in param_warnings:
            result.add_warning(warning)
        return result

    metadata = {
        'mesh_buffer': mesh_buffer,
        'num_vertices': mesh_buffer.num_vertices,
        'num_triangles': mesh_buffer.num_triangles,
        'params': params.to_dict(),
    }

    if mesh_buffer.is_empty():
        result = OperationResult.partial_success(
            "No surface crosses the capture box",
            error_codes=[ErrorCode.EMPTY_MESH.value],
            metadata=metadata,
        )
        result.add_warning(
            "Mesh is empty; check that the capture box overlaps the path "
            "and the threshold lies inside (0, 1)"
        )
    else:
        conversion = to_trimesh(mesh_buffer)
        if conversion.is_success():
            metadata['mesh'] = conversion.metadata['mesh']
            metadata['is_watertight'] = conversion.metadata['is_watertight']
        result = OperationResult.success(
            f"Generated {mesh_buffer.num_triangles} triangles "
            f"from {len(vertices)} path vertices",
            metadata=metadata,
        )
        for warning in conversion.warnings + conversion.errors:
            result.add_warning(warning)

    for warning in param_warnings:
        result.add_warning(warning)

    if verbose:
        print(f"[generate_mesh] {result.message}")

    return result


def generate_stl(
    path: PathLike,
    output_path: str,
    params: Optional[MeshingParams] = None,
    repair: bool = False,
    verbose: bool = False,
) -> OperationResult:
    """
    Generate a mesh for ``path`` and write it to an STL file.

    Vertices are merged before export. Warnings from generation are carried
    over to the returned result.
    """
    result = generate_mesh(path, params, verbose=verbose)
    if result.is_failure():
        return result

    mesh_buffer = result.metadata['mesh_buffer']
    if mesh_buffer.is_empty():
        return result

    with timed_stage("export_stl", verbose=verbose):
        exported = export_stl(mesh_buffer, output_path, merge_vertices=True, repair=repair)

    for warning in result.warnings:
        exported.add_warning(warning)
    exported.metadata['num_triangles'] = mesh_buffer.num_triangles
    return exported

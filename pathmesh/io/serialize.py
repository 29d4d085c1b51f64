"""
JSON serialization for paths and their meshing parameters.
"""

import json
from pathlib import Path as FilePath
from typing import Optional, Union

from ..core.path import Path, PathLike, get_path_vertices
from ..params.meshing import MeshingParams

SCHEMA_VERSION = "1.0"


def save_json(
    path: PathLike,
    filepath: Union[str, FilePath],
    params: Optional[MeshingParams] = None,
    indent: int = 2,
) -> None:
    """
    Save a path (and optionally its meshing parameters) to a JSON file.

    Parameters
    ----------
    path : Path or sequence of PathVertex
        Path to save
    filepath : str or pathlib.Path
        Output file path
    params : MeshingParams, optional
        Parameters stored alongside the path
    indent : int
        JSON indentation level

    Example
    -------
    >>> from pathmesh import save_json, nested_frame_path
    >>> save_json(nested_frame_path(), "frames.json")
    """
    filepath = FilePath(filepath)

    if isinstance(path, Path):
        path_data = path.to_dict()
    else:
        path_data = Path(get_path_vertices(path)).to_dict()

    data = {
        "schema_version": SCHEMA_VERSION,
        "path": path_data,
    }
    if params is not None:
        data["params"] = params.to_dict()

    with open(filepath, 'w') as f:
        json.dump(data, f, indent=indent)


def _read(filepath: Union[str, FilePath]) -> dict:
    filepath = FilePath(filepath)

    with open(filepath, 'r') as f:
        data = json.load(f)

    schema_version = data.get("schema_version", SCHEMA_VERSION)
    if schema_version != SCHEMA_VERSION:
        raise ValueError(f"Unsupported schema version: {schema_version}")

    return data


def load_json(filepath: Union[str, FilePath]) -> Path:
    """
    Load a path from a JSON file written by ``save_json``.

    Raises
    ------
    ValueError
        If the file has an unsupported schema version
    """
    data = _read(filepath)
    return Path.from_dict(data.get("path", {}))


def load_params(filepath: Union[str, FilePath]) -> Optional[MeshingParams]:
    """Load the meshing parameters stored next to a path, if any."""
    data = _read(filepath)
    if "params" not in data:
        return None
    return MeshingParams.from_dict(data["params"])

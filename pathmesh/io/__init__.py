"""Input/output for paths."""

from .serialize import save_json, load_json, load_params, SCHEMA_VERSION

__all__ = [
    "save_json",
    "load_json",
    "load_params",
    "SCHEMA_VERSION",
]

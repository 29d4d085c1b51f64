"""Parameter presets and validation for path meshing."""

from .meshing import MeshingParams

from .presets import (
    debug,
    preview,
    standard,
    fine,
    get_preset,
    list_presets,
    PRESETS,
)

from .validation import (
    validate_params,
    validate_and_warn,
    PARAM_BOUNDS,
)

__all__ = [
    "MeshingParams",
    # Presets
    "debug",
    "preview",
    "standard",
    "fine",
    "get_preset",
    "list_presets",
    "PRESETS",
    # Validation
    "validate_params",
    "validate_and_warn",
    "PARAM_BOUNDS",
]

"""Parameter validation with bounds checking.

Catches settings that would produce no mesh, a degenerate grid, or a run
that is far too slow to be intentional.
"""

from typing import List, Tuple
import numpy as np

from .meshing import MeshingParams


PARAM_BOUNDS = {
    "horizontal_resolution": (2, 1024, "samples"),
    "vertical_resolution": (2, 512, "layers"),
    "threshold": (0.0, 1.0, "score"),  # coverage scores live in [0, 1]
}

MAX_CUBES = 5e7


def validate_params(params: MeshingParams) -> Tuple[bool, List[str]]:
    """
    Validate MeshingParams against bounds.

    Parameters
    ----------
    params : MeshingParams
        Parameters to validate

    Returns
    -------
    is_valid : bool
        True if all parameters are valid
    warnings : list of str
        List of validation warnings/errors
    """
    warnings = []

    for param_name, (min_val, max_val, unit) in PARAM_BOUNDS.items():
        value = getattr(params, param_name, None)

        if value is None:
            continue

        if value < min_val:
            warnings.append(
                f"{param_name} = {value} {unit} is below minimum {min_val} {unit}"
            )
        elif value > max_val:
            warnings.append(
                f"{param_name} = {value} {unit} exceeds maximum {max_val} {unit}"
            )

    if len(params.origin) != 3:
        warnings.append(f"origin must have 3 components, got {len(params.origin)}")

    if len(params.capture_size) != 3:
        warnings.append(f"capture_size must have 3 components, got {len(params.capture_size)}")
    elif any(s <= 0 for s in params.capture_size):
        warnings.append(f"capture_size {tuple(params.capture_size)} must be positive on every axis")

    if params.threshold <= 0.0:
        warnings.append(
            f"threshold ({params.threshold}) <= 0 marks every sample as inside, "
            "no surface will be produced"
        )
    elif params.threshold >= 1.0:
        warnings.append(
            f"threshold ({params.threshold}) >= 1 only keeps samples exactly on the path"
        )

    num_cubes = (
        max(params.horizontal_resolution - 1, 0) ** 2
        * max(params.vertical_resolution - 1, 0)
    )
    if num_cubes > MAX_CUBES:
        warnings.append(
            f"grid has {num_cubes:.3g} cubes (> {MAX_CUBES:.0g}), meshing will be very slow"
        )

    if len(params.capture_size) == 3 and all(s > 0 for s in params.capture_size):
        cube = np.asarray(params.cube_size())
        aspect = float(cube.max() / cube.min())
        if aspect > 10.0:
            warnings.append(
                f"cube aspect ratio {aspect:.1f} is very elongated (> 10), "
                "expect stretched triangles"
            )

    is_valid = len(warnings) == 0
    return is_valid, warnings


def validate_and_warn(params: MeshingParams) -> MeshingParams:
    """
    Validate parameters and print warnings.

    Parameters
    ----------
    params : MeshingParams
        Parameters to validate

    Returns
    -------
    params : MeshingParams
        Same parameters (for chaining)
    """
    is_valid, warnings = validate_params(params)

    if not is_valid:
        print(f"[validate_params] Parameter validation warnings ({len(warnings)}):")
        for warning in warnings:
            print(f"  - {warning}")

    return params

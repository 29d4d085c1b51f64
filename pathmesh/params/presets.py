"""Parameter presets for common meshing jobs.

Presets cover the unit capture box used by the procedural test patterns;
override ``origin`` / ``capture_size`` for other paths.
"""

from .meshing import MeshingParams


def debug() -> MeshingParams:
    """
    Tiny grid for stepping through the sweep by hand.

    Only a handful of cubes, so every emitted triangle can be inspected.
    """
    return MeshingParams(
        capture_size=(1.0, 0.5, 1.0),
        horizontal_resolution=8,
        vertical_resolution=4,
        threshold=0.5,
    )


def preview() -> MeshingParams:
    """
    Coarse mesh for quick looks.

    Characteristics:
    - 32 samples per side, thin features may break up
    - Few layers
    """
    return MeshingParams(
        capture_size=(1.0, 0.5, 1.0),
        horizontal_resolution=32,
        vertical_resolution=8,
        threshold=0.5,
    )


def standard() -> MeshingParams:
    """
    Default quality.

    64 samples per side resolves the default 1/16 radius with about four
    cubes across each stroke.
    """
    return MeshingParams(
        capture_size=(1.0, 0.5, 1.0),
        horizontal_resolution=64,
        vertical_resolution=16,
        threshold=0.5,
    )


def fine() -> MeshingParams:
    """
    High resolution export.

    Welds vertices so the exported mesh shares normals across cube borders.
    """
    return MeshingParams(
        capture_size=(1.0, 0.5, 1.0),
        horizontal_resolution=128,
        vertical_resolution=32,
        threshold=0.5,
        weld_vertices=True,
        show_progress=True,
    )


PRESETS = {
    "debug": debug,
    "preview": preview,
    "standard": standard,
    "fine": fine,
}


def get_preset(name: str) -> MeshingParams:
    """
    Get a parameter preset by name.

    Parameters
    ----------
    name : str
        Preset name (e.g., "preview", "fine")

    Returns
    -------
    MeshingParams
        Parameter configuration

    Raises
    ------
    ValueError
        If preset name is not recognized
    """
    if name not in PRESETS:
        available = ", ".join(PRESETS.keys())
        raise ValueError(f"Unknown preset '{name}'. Available: {available}")

    return PRESETS[name]()


def list_presets() -> list:
    """List all available preset names."""
    return list(PRESETS.keys())

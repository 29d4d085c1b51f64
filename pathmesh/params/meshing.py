"""
Meshing parameters.
"""

from dataclasses import dataclass
from typing import Tuple
import numpy as np


@dataclass
class MeshingParams:
    """Parameters for sampling a path and extracting its iso-surface."""

    origin: Tuple[float, float, float] = (0.0, 0.0, 0.0)  # minimum corner of the capture box
    capture_size: Tuple[float, float, float] = (1.0, 0.5, 1.0)  # extent along x, y, z
    horizontal_resolution: int = 64  # samples per side of each layer
    vertical_resolution: int = 16  # number of layers
    threshold: float = 0.5  # iso value; 0.5 puts the surface at one radius from the path
    weld_vertices: bool = False  # share vertices between neighbouring cubes
    prune_horizontal: bool = True  # skip segments that cannot reach a layer's rectangle
    show_progress: bool = False  # tqdm bar over the layer sweep

    def cube_size(self) -> np.ndarray:
        """Size of one marching cube."""
        h = self.horizontal_resolution
        v = self.vertical_resolution
        return np.asarray(self.capture_size, dtype=float) / np.array([h, v, h], dtype=float)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "origin": list(self.origin),
            "capture_size": list(self.capture_size),
            "horizontal_resolution": self.horizontal_resolution,
            "vertical_resolution": self.vertical_resolution,
            "threshold": self.threshold,
            "weld_vertices": self.weld_vertices,
            "prune_horizontal": self.prune_horizontal,
            "show_progress": self.show_progress,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "MeshingParams":
        """Create from dictionary."""
        defaults = cls()
        return cls(
            origin=tuple(d.get("origin", defaults.origin)),
            capture_size=tuple(d.get("capture_size", defaults.capture_size)),
            horizontal_resolution=d.get("horizontal_resolution", defaults.horizontal_resolution),
            vertical_resolution=d.get("vertical_resolution", defaults.vertical_resolution),
            threshold=d.get("threshold", defaults.threshold),
            weld_vertices=d.get("weld_vertices", defaults.weld_vertices),
            prune_horizontal=d.get("prune_horizontal", defaults.prune_horizontal),
            show_progress=d.get("show_progress", defaults.show_progress),
        )

"""
Reusable 2D scalar field buffer for one horizontal layer.
"""

from dataclasses import dataclass, field
import numpy as np


@dataclass
class ScalarField:
    """
    Row-major grid of coverage scores for one horizontal layer.

    ``values[row, col]`` holds the sample at
    ``x = origin[0] + col * size[0] / resolution`` and
    ``z = origin[2] + row * size[1] / resolution``, all at height ``origin[1]``.
    """

    values: np.ndarray
    origin: np.ndarray = field(default_factory=lambda: np.zeros(3))
    size: np.ndarray = field(default_factory=lambda: np.ones(2))

    @classmethod
    def empty(cls, resolution: int) -> "ScalarField":
        """Allocate a zeroed field of the given resolution."""
        if resolution < 1:
            raise ValueError(f"Field resolution must be >= 1, got {resolution}")
        return cls(values=np.zeros((resolution, resolution), dtype=float))

    @property
    def resolution(self) -> int:
        return int(self.values.shape[0])

    @property
    def layer_height(self) -> float:
        return float(self.origin[1])

    def clear(self) -> None:
        """Reset all samples to zero."""
        self.values.fill(0.0)

    def sample_positions(self) -> np.ndarray:
        """
        World positions of every sample.

        Returns
        -------
        np.ndarray
            Array of shape (resolution, resolution, 3)
        """
        res = self.resolution
        steps = np.arange(res, dtype=float)
        xs = steps * self.size[0] / res + self.origin[0]
        zs = steps * self.size[1] / res + self.origin[2]
        grid_x, grid_z = np.meshgrid(xs, zs)
        grid_y = np.full_like(grid_x, self.origin[1])
        return np.stack([grid_x, grid_y, grid_z], axis=-1)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "values": self.values.tolist(),
            "origin": [float(v) for v in self.origin],
            "size": [float(v) for v in self.size],
        }

    @classmethod
    def from_dict(cls, d: dict) -> "ScalarField":
        """Create from dictionary."""
        return cls(
            values=np.asarray(d["values"], dtype=float),
            origin=np.asarray(d.get("origin", (0.0, 0.0, 0.0)), dtype=float),
            size=np.asarray(d.get("size", (1.0, 1.0)), dtype=float),
        )

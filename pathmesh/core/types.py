"""
Geometric primitive types for weighted paths.
"""

from dataclasses import dataclass
from typing import Tuple
import numpy as np


DEFAULT_RADIUS = 1.0 / 16.0


@dataclass
class Point3D:
    """3D point in space."""

    x: float
    y: float
    z: float

    def to_array(self) -> np.ndarray:
        """Convert to numpy array."""
        return np.array([self.x, self.y, self.z], dtype=float)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "Point3D":
        """Create from numpy array."""
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    def to_tuple(self) -> Tuple[float, float, float]:
        """Convert to tuple."""
        return (self.x, self.y, self.z)

    @classmethod
    def from_tuple(cls, t: Tuple[float, float, float]) -> "Point3D":
        """Create from tuple."""
        return cls(float(t[0]), float(t[1]), float(t[2]))

    def distance_to(self, other: "Point3D") -> float:
        """Compute Euclidean distance to another point."""
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return float(np.sqrt(dx**2 + dy**2 + dz**2))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"x": self.x, "y": self.y, "z": self.z}

    @classmethod
    def from_dict(cls, d: dict) -> "Point3D":
        """Create from dictionary."""
        return cls(d["x"], d["y"], d["z"])


@dataclass
class PathVertex:
    """
    One weighted point along a path.

    The radius applies to the segment that starts at this vertex. A vertex
    flagged with ``is_segment_start`` has no edge leading into it, so it
    opens a new sub-loop instead of continuing the previous one.
    """

    position: Point3D
    radius: float = DEFAULT_RADIUS
    is_segment_start: bool = False

    def __post_init__(self):
        if not isinstance(self.position, Point3D):
            self.position = Point3D.from_tuple(tuple(self.position))
        self.radius = float(self.radius)
        if not np.isfinite(self.radius) or self.radius <= 0.0:
            raise ValueError(f"Path vertex radius must be positive, got {self.radius}")

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "position": self.position.to_dict(),
            "radius": self.radius,
            "is_segment_start": self.is_segment_start,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "PathVertex":
        """Create from dictionary."""
        return cls(
            position=Point3D.from_dict(d["position"]),
            radius=d.get("radius", DEFAULT_RADIUS),
            is_segment_start=bool(d.get("is_segment_start", False)),
        )


@dataclass
class Segment:
    """A capped line between two consecutive path vertices."""

    a: PathVertex
    b: PathVertex

    @property
    def radius(self) -> float:
        """Influence radius, taken from the start vertex."""
        return self.a.radius

    def length(self) -> float:
        """Compute segment length."""
        return self.a.position.distance_to(self.b.position)

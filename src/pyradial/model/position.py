"""Position and coordinate classes for 3D layout."""

from dataclasses import dataclass

import numpy as np


@dataclass
class Position:
    """3D position of a node.

    Node positions are stored relative to the parent node; the
    same class is used for absolute (world space) coordinates.

    Attributes:
        x: X coordinate
        y: Y coordinate
        z: Z coordinate
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_array(cls, values: np.ndarray) -> "Position":
        """Create a position from a length-3 array."""
        return cls(x=float(values[0]), y=float(values[1]), z=float(values[2]))

    def as_array(self) -> np.ndarray:
        """Get the position as a float64 numpy array."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def as_tuple(self) -> tuple[float, float, float]:
        """Get the position as an (x, y, z) tuple."""
        return (self.x, self.y, self.z)

    @property
    def length(self) -> float:
        """Euclidean norm of the position vector."""
        return (self.x**2 + self.y**2 + self.z**2) ** 0.5

    def translate(self, dx: float, dy: float, dz: float) -> "Position":
        """Create a new position translated by the given amounts."""
        return Position(x=self.x + dx, y=self.y + dy, z=self.z + dz)

    def __add__(self, other: "Position") -> "Position":
        return self.translate(other.x, other.y, other.z)

    def __sub__(self, other: "Position") -> "Position":
        return self.translate(-other.x, -other.y, -other.z)

    def distance_to(self, other: "Position") -> float:
        """Calculate the distance between two positions."""
        return ((self.x - other.x) ** 2 + (self.y - other.y) ** 2 + (self.z - other.z) ** 2) ** 0.5

    def is_close(self, other: "Position", tolerance: float = 1e-5) -> bool:
        """Check whether every axis differs by less than ``tolerance``."""
        return (
            abs(self.x - other.x) < tolerance
            and abs(self.y - other.y) < tolerance
            and abs(self.z - other.z) < tolerance
        )

    def __repr__(self) -> str:
        """String representation."""
        return f"Position(x={self.x:.2f}, y={self.y:.2f}, z={self.z:.2f})"

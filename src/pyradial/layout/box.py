"""Bounding box of a laid out tree."""

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from pyradial.model.position import Position


@dataclass
class BoundingBox:
    """Axis-aligned bounding box around node centers.

    Used by the rendering layer to frame the camera on a layout.

    Attributes:
        minimum: Lower corner
        maximum: Upper corner
        padding: Extra space added on every side
    """

    minimum: Position
    maximum: Position
    padding: float = 0.0

    @property
    def min_x(self) -> float:
        """Minimum X coordinate including padding."""
        return self.minimum.x - self.padding

    @property
    def max_x(self) -> float:
        """Maximum X coordinate including padding."""
        return self.maximum.x + self.padding

    @property
    def min_y(self) -> float:
        """Minimum Y coordinate including padding."""
        return self.minimum.y - self.padding

    @property
    def max_y(self) -> float:
        """Maximum Y coordinate including padding."""
        return self.maximum.y + self.padding

    @property
    def min_z(self) -> float:
        """Minimum Z coordinate including padding."""
        return self.minimum.z - self.padding

    @property
    def max_z(self) -> float:
        """Maximum Z coordinate including padding."""
        return self.maximum.z + self.padding

    @property
    def center(self) -> Position:
        """Center of the box."""
        return Position(
            x=(self.min_x + self.max_x) / 2,
            y=(self.min_y + self.max_y) / 2,
            z=(self.min_z + self.max_z) / 2,
        )

    @property
    def size(self) -> tuple[float, float, float]:
        """Extent along each axis."""
        return (self.max_x - self.min_x, self.max_y - self.min_y, self.max_z - self.min_z)

    @property
    def radius(self) -> float:
        """Radius of the sphere through the box corners."""
        sx, sy, sz = self.size
        return 0.5 * (sx**2 + sy**2 + sz**2) ** 0.5

    def contains_point(self, x: float, y: float, z: float) -> bool:
        """Check if a point is inside this bounding box."""
        return (
            self.min_x <= x <= self.max_x
            and self.min_y <= y <= self.max_y
            and self.min_z <= z <= self.max_z
        )

    @classmethod
    def from_points(cls, points: Iterable[np.ndarray], padding: float = 0.0) -> "BoundingBox":
        """Create the smallest box containing all points.

        Args:
            points: Absolute positions
            padding: Padding to add around the points

        Raises:
            ValueError: If there are no points
        """
        array = np.array(list(points), dtype=np.float64).reshape(-1, 3)
        if len(array) == 0:
            raise ValueError("No positions to calculate bounds for")
        return cls(
            minimum=Position.from_array(array.min(axis=0)),
            maximum=Position.from_array(array.max(axis=0)),
            padding=padding,
        )

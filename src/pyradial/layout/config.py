"""Configuration for the layout engine."""

import math
from dataclasses import dataclass

from pyradial.errors import ValidationError, validate_range


@dataclass
class LayoutConfig:
    """Named constants for the placement search.

    The sample counts and radius growth bounds are the only limit on
    the work a layout pass does; raising them trades speed for a better
    chance of finding a clean placement in crowded regions.

    Attributes:
        generation_gap: Minimum increase in distance from the hub per generation
        glow_buffer: Extra separation covering the rendered glow halo
        edge_buffer: Near-miss margin (world units) for edge crossing tests
        parallel_epsilon: Determinant magnitude below which segments count as parallel
        angle_samples: Angles tried around the parent per search ring
        radius_growth_start: Offset of the first grown ring beyond the base radius
        radius_growth_step: Radius increment between grown rings
        max_radius_growth: Upper bound on ring growth beyond the base radius
        search_z_jitter: Full width of the random z offset in the search rings
        arranger_attempts: Angular offsets tried per child by the arranger
        arranger_angle_step: Angle added per arranger attempt (radians)
        radius_jitter: Full width of the arranger's random radius offset
        arranger_z_jitter: Full width of the arranger's random z offset
        deviation_weight: Score added per radian of deviation from the ideal slot
        collision_penalty: Score added for colliding with a placed node
        intersection_penalty: Score added for crossing a placed edge
        packing_factor: Divisor (times pi) turning N * min distance into a ring radius
        top_level_min_distance: Separation used when placing branches
        nested_min_distance: Separation used when placing deeper nodes (before scaling)
        arranger_base_radius: Ring radius for children of a branch
        arranger_radius_step: Ring radius added per generation below the branches
        arranger_min_distance: Arranger separation for children of a branch
        min_distance_step: Separation added per generation
        max_sector_half_angle: Widest half angle a branch may claim around its direction
        ring_spacing_factor: Multiple of a generation's effective separation kept
            between neighbouring slots on its ring and between consecutive rings
    """

    generation_gap: float = 0.8
    glow_buffer: float = 0.6
    edge_buffer: float = 0.5
    parallel_epsilon: float = 1e-4
    angle_samples: int = 32
    radius_growth_start: float = 0.5
    radius_growth_step: float = 0.3
    max_radius_growth: float = 4.0
    search_z_jitter: float = 0.2
    arranger_attempts: int = 16
    arranger_angle_step: float = 0.39269908169872414  # pi / 8
    radius_jitter: float = 0.2
    arranger_z_jitter: float = 0.2
    deviation_weight: float = 10.0
    collision_penalty: float = 1000.0
    intersection_penalty: float = 2000.0
    packing_factor: float = 2.2
    top_level_min_distance: float = 2.8
    nested_min_distance: float = 1.4
    arranger_base_radius: float = 1.7
    arranger_radius_step: float = 0.2
    arranger_min_distance: float = 1.7
    min_distance_step: float = 0.15
    max_sector_half_angle: float = 1.0471975511965976  # pi / 3
    ring_spacing_factor: float = 2.0

    def effective_min_distance(self, min_distance: float) -> float:
        """Separation actually enforced: base distance plus the glow halo."""
        return min_distance + self.glow_buffer

    def search_min_distance(self, level: int) -> float:
        """Position Search separation for a node at ``level`` (branches are level 1)."""
        if level <= 1:
            return self.top_level_min_distance
        return self.nested_min_distance + self.min_distance_step * level

    def arranger_radius(self, depth: int) -> float:
        """Base ring radius for children of a parent ``depth`` generations below the branches."""
        return self.arranger_base_radius + self.arranger_radius_step * depth

    def arranger_separation(self, depth: int) -> float:
        """Arranger separation for children of a parent ``depth`` generations below the branches."""
        return self.arranger_min_distance + self.min_distance_step * depth

    def ring_spacing(self, level: int) -> float:
        """Spacing between planned slots of generation ``level``."""
        return self.ring_spacing_factor * self.effective_min_distance(self.search_min_distance(level))

    def validate(self) -> None:
        """Check that the search bounds make sense.

        Raises:
            ValidationError: If any value is out of range
        """
        if self.angle_samples < 1:
            raise ValidationError("angle_samples", self.angle_samples, "at least 1")
        if self.arranger_attempts < 1:
            raise ValidationError("arranger_attempts", self.arranger_attempts, "at least 1")
        if self.radius_growth_step <= 0:
            raise ValidationError("radius_growth_step", self.radius_growth_step, "a positive step")
        if self.packing_factor <= 0:
            raise ValidationError("packing_factor", self.packing_factor, "a positive factor")
        if self.ring_spacing_factor <= 0:
            raise ValidationError("ring_spacing_factor", self.ring_spacing_factor, "a positive factor")
        validate_range(self.max_sector_half_angle, 0.0, math.pi, "max_sector_half_angle")
        for name in (
            "generation_gap",
            "glow_buffer",
            "edge_buffer",
            "max_radius_growth",
            "search_z_jitter",
            "radius_jitter",
            "arranger_z_jitter",
            "top_level_min_distance",
            "nested_min_distance",
            "arranger_base_radius",
            "arranger_min_distance",
        ):
            validate_range(getattr(self, name), 0.0, float("inf"), name)

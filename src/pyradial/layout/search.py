"""Safe position search for a single node."""

import logging
import math
from collections.abc import Iterator, Sequence

import numpy as np

from pyradial.layout.config import LayoutConfig
from pyradial.layout.geometry import (
    DEFAULT_DIRECTION,
    ORIGIN,
    ZERO_LENGTH,
    Edge,
    distance_3d,
    enforce_hierarchical_distance,
    has_collision,
    would_edge_intersect,
)

logger = logging.getLogger(__name__)


def is_safe(
    candidate: np.ndarray,
    parent: np.ndarray,
    existing_positions: Sequence[np.ndarray],
    existing_edges: Sequence[Edge],
    effective_min_distance: float,
    node_id: str | None,
    parent_id: str | None,
    config: LayoutConfig,
) -> bool:
    """Check a candidate against both the collision and the crossing constraint."""
    if has_collision(candidate, existing_positions, effective_min_distance):
        return False
    return not would_edge_intersect(
        parent,
        candidate,
        existing_edges,
        parent_id,
        node_id,
        config.edge_buffer,
        config.parallel_epsilon,
    )


def _ring(
    parent: np.ndarray,
    radius: float,
    z: float,
    config: LayoutConfig,
    rng: np.random.Generator,
    origin: np.ndarray,
) -> Iterator[np.ndarray]:
    """Yield hierarchically corrected samples evenly spaced around the parent."""
    for i in range(config.angle_samples):
        angle = 2.0 * math.pi * i / config.angle_samples
        sample = np.array(
            [
                parent[0] + math.cos(angle) * radius,
                parent[1] + math.sin(angle) * radius,
                z + (rng.random() - 0.5) * config.search_z_jitter,
            ]
        )
        yield enforce_hierarchical_distance(sample, parent, origin, config.generation_gap)


def find_safe_position(
    parent: np.ndarray,
    preferred: np.ndarray,
    existing_positions: Sequence[np.ndarray],
    existing_edges: Sequence[Edge],
    min_distance: float,
    node_id: str | None = None,
    parent_id: str | None = None,
    *,
    config: LayoutConfig | None = None,
    rng: np.random.Generator | None = None,
    origin: np.ndarray = ORIGIN,
) -> np.ndarray:
    """Find a position for a child of ``parent`` close to ``preferred``.

    Tries, in order: the hierarchically corrected preferred position;
    a ring of samples around the parent at the same radius; rings of
    growing radius. If nothing passes, falls back to a point along the
    preferred direction well beyond the base radius. The search never
    fails; under extreme density the fallback may still overlap.

    All positions are absolute.

    Args:
        parent: Parent position
        preferred: Desired position of the node
        existing_positions: Positions already placed in this pass
        existing_edges: Edges already placed in this pass
        min_distance: Base separation (the glow buffer is added on top)
        node_id: Id of the node being placed
        parent_id: Id of its parent
        config: Layout constants (defaults if None)
        rng: Source of jitter (a fresh unseeded generator if None)
        origin: Hub position

    Returns:
        Absolute position for the node
    """
    config = config or LayoutConfig()
    rng = rng if rng is not None else np.random.default_rng()
    parent = np.asarray(parent, dtype=np.float64)
    origin = np.asarray(origin, dtype=np.float64)
    effective = config.effective_min_distance(min_distance)

    def safe(candidate: np.ndarray) -> bool:
        return is_safe(candidate, parent, existing_positions, existing_edges, effective, node_id, parent_id, config)

    corrected = enforce_hierarchical_distance(preferred, parent, origin, config.generation_gap)
    if safe(corrected):
        return corrected

    base_radius = max(distance_3d(parent, corrected), effective)
    for candidate in _ring(parent, base_radius, corrected[2], config, rng, origin):
        if safe(candidate):
            return candidate

    radius = base_radius + config.radius_growth_start
    while radius < base_radius + config.max_radius_growth:
        for candidate in _ring(parent, radius, corrected[2], config, rng, origin):
            if safe(candidate):
                return candidate
        radius += config.radius_growth_step

    direction = corrected - parent
    length = float(np.linalg.norm(direction))
    direction = direction / length if length > ZERO_LENGTH else DEFAULT_DIRECTION
    fallback = parent + direction * (base_radius + 2.0 * effective)
    logger.debug(f"No safe position for {node_id!r} under {parent_id!r}; using fallback")
    return enforce_hierarchical_distance(fallback, parent, origin, config.generation_gap)

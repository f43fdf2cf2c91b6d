"""Radial distribution of a parent's children."""

import math
from collections.abc import Sequence

import numpy as np

from pyradial.layout.config import LayoutConfig
from pyradial.layout.geometry import (
    ORIGIN,
    Edge,
    distance_from_origin,
    enforce_hierarchical_distance,
    has_collision,
    would_edge_intersect,
)
from pyradial.layout.search import find_safe_position


def working_radius(
    parent: np.ndarray,
    count: int,
    base_radius: float,
    min_distance: float,
    config: LayoutConfig,
    origin: np.ndarray = ORIGIN,
) -> float:
    """Ring radius wide enough that ``count`` evenly spaced children do not touch."""
    parent_distance = distance_from_origin(parent, origin)
    required = parent_distance + config.generation_gap
    hierarchical = max(base_radius, required - parent_distance)
    packed = count * config.effective_min_distance(min_distance) / (config.packing_factor * math.pi)
    return max(hierarchical, packed)


def arrange_children_around_parent(
    parent: np.ndarray,
    child_ids: Sequence[str],
    existing_positions: Sequence[np.ndarray],
    existing_edges: Sequence[Edge],
    base_radius: float,
    min_distance: float,
    parent_id: str | None = None,
    *,
    slots: Sequence[np.ndarray] | None = None,
    config: LayoutConfig | None = None,
    rng: np.random.Generator | None = None,
    origin: np.ndarray = ORIGIN,
) -> list[np.ndarray]:
    """Distribute children evenly around a parent, avoiding placed nodes and edges.

    Each child starts from its ideal slot (``2*pi*i/N`` on the working
    radius, or ``slots[i]`` when planned slots are given) and tries
    increasing angular offsets around the parent. A planned slot is
    tried first exactly as given. Candidates are scored rather than
    rejected, so every child always gets a position: collisions and
    crossings add large penalties and the deviation from the ideal slot
    breaks ties. The winner is refined by ``find_safe_position`` and
    becomes an obstacle for the following siblings.

    The inputs are not modified; sibling bookkeeping stays local.

    Args:
        parent: Absolute parent position
        child_ids: Child node ids in distribution order
        existing_positions: Positions already placed in this pass
        existing_edges: Edges already placed in this pass
        base_radius: Preferred ring radius
        min_distance: Base separation (the glow buffer is added on top)
        parent_id: Id of the parent
        slots: Planned absolute position per child (even spread if None)
        config: Layout constants (defaults if None)
        rng: Source of jitter (a fresh unseeded generator if None)
        origin: Hub position

    Returns:
        One absolute position per child, in order
    """
    count = len(child_ids)
    if count == 0:
        return []

    config = config or LayoutConfig()
    rng = rng if rng is not None else np.random.default_rng()
    parent = np.asarray(parent, dtype=np.float64)
    origin = np.asarray(origin, dtype=np.float64)
    effective = config.effective_min_distance(min_distance)

    # (angle around the parent, ring radius, z) per child
    if slots is None:
        radius = working_radius(parent, count, base_radius, min_distance, config, origin)
        targets = [(2.0 * math.pi * i / count, radius, parent[2]) for i in range(count)]
    else:
        slots = [np.asarray(slot, dtype=np.float64) for slot in slots]
        targets = []
        for slot in slots:
            dx, dy = slot[0] - parent[0], slot[1] - parent[1]
            targets.append((math.atan2(dy, dx), math.hypot(dx, dy), slot[2]))

    positions = list(existing_positions)
    edges = list(existing_edges)
    placed: list[np.ndarray] = []

    for i, child_id in enumerate(child_ids):
        ideal, radius, z = targets[i]
        best: np.ndarray | None = None
        best_score = math.inf

        for attempt in range(config.arranger_attempts):
            deviation = attempt * config.arranger_angle_step
            if attempt == 0 and slots is not None:
                candidate = slots[i]
            else:
                angle = ideal + deviation
                ring = radius + (rng.random() - 0.5) * config.radius_jitter
                candidate = np.array(
                    [
                        parent[0] + math.cos(angle) * ring,
                        parent[1] + math.sin(angle) * ring,
                        z + (rng.random() - 0.5) * config.arranger_z_jitter,
                    ]
                )
            candidate = enforce_hierarchical_distance(candidate, parent, origin, config.generation_gap)

            penalty = 0.0
            if has_collision(candidate, positions, effective):
                penalty += config.collision_penalty
            if would_edge_intersect(
                parent, candidate, edges, parent_id, child_id, config.edge_buffer, config.parallel_epsilon
            ):
                penalty += config.intersection_penalty
            score = penalty + abs(deviation) * config.deviation_weight

            if score < best_score:
                best_score = score
                best = candidate
            if penalty == 0.0:
                break

        safe = find_safe_position(
            parent,
            best,
            positions,
            edges,
            min_distance,
            child_id,
            parent_id,
            config=config,
            rng=rng,
            origin=origin,
        )
        placed.append(safe)
        positions.append(safe)
        edges.append(Edge(parent, safe, parent_id, child_id))

    return placed

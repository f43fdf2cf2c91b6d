"""Angular sectors and rings for the visible part of a tree.

Each branch owns a wedge around its direction from the hub, reaching
half way to its nearest neighbouring branch. Inside a wedge every
visible leaf gets an equal slice and a node sits in the middle of the
slices of its descendants, so sibling subtrees never share angles.
All nodes of one generation share a ring around the hub; the ring is
wide enough that its two closest slots keep the generation's spacing,
and each ring lies at least that spacing beyond the previous one.
"""

import logging
import math
from dataclasses import dataclass, field

import numpy as np

from pyradial.layout.config import LayoutConfig
from pyradial.layout.geometry import distance_from_origin
from pyradial.model.arena import CENTER_INDEX, TreeArena

logger = logging.getLogger(__name__)

# Sectors narrower than this do not constrain a ring
MIN_SECTOR = 1e-9


@dataclass
class SectorPlan:
    """Planned slots for one layout pass.

    Attributes:
        arena: Arena the plan was built for
        origin: Hub position
        angles: Slot angle per arena index (branches and visible descendants)
        widths: Angular width of the sector owned by each planned index
        rings: Ring radius per generation, from 2 down
    """

    arena: TreeArena
    origin: np.ndarray
    angles: dict[int, float] = field(default_factory=dict)
    widths: dict[int, float] = field(default_factory=dict)
    rings: dict[int, float] = field(default_factory=dict)

    def slot(self, index: int) -> np.ndarray:
        """Absolute slot of a node below the branches."""
        angle = self.angles[index]
        radius = self.rings[self.arena.levels[index]]
        return self.origin + np.array([math.cos(angle) * radius, math.sin(angle) * radius, 0.0])


def visible_leaf_counts(arena: TreeArena) -> dict[int, int]:
    """Number of visible leaves under each branch and visible descendant.

    A collapsed node, or one without children, counts as one leaf.
    """
    counts: dict[int, int] = {}

    def count(index: int) -> int:
        children = arena.children[index] if arena.expanded[index] else []
        counts[index] = sum(count(child) for child in children) if children else 1
        return counts[index]

    for branch in arena.branch_indices:
        count(branch)
    return counts


def branch_half_widths(directions: list[float], limit: float) -> list[float]:
    """Half the angle to the nearest neighbouring branch, capped at ``limit``."""
    count = len(directions)
    if count == 1:
        return [limit]

    full_turn = 2.0 * math.pi
    order = sorted(range(count), key=lambda i: directions[i])
    halves = [limit] * count
    for position, i in enumerate(order):
        previous = directions[order[position - 1]]
        following = directions[order[(position + 1) % count]]
        gap = min((directions[i] - previous) % full_turn, (following - directions[i]) % full_turn)
        halves[i] = min(gap / 2.0, limit)
    return halves


def plan_sectors(arena: TreeArena, absolute: np.ndarray, config: LayoutConfig) -> SectorPlan:
    """Assign sectors and rings to every visible node of an arena.

    Branch directions are read from ``absolute``, the positions the
    branches are about to be placed at.

    Args:
        arena: Flattened tree
        absolute: Absolute positions addressed like the arena
        config: Layout constants

    Returns:
        SectorPlan for the visible nodes
    """
    origin = np.asarray(absolute[CENTER_INDEX], dtype=np.float64).copy()
    plan = SectorPlan(arena=arena, origin=origin)
    branches = arena.branch_indices
    if not branches:
        return plan

    leaves = visible_leaf_counts(arena)
    directions = [math.atan2(absolute[b][1] - origin[1], absolute[b][0] - origin[0]) for b in branches]
    halves = branch_half_widths(directions, config.max_sector_half_angle)

    def divide(index: int, start: float, width: float) -> None:
        plan.widths[index] = width
        plan.angles[index] = start + width / 2.0
        children = arena.children[index]
        if not (arena.expanded[index] and children):
            return
        leaf_width = width / leaves[index]
        for child in children:
            child_width = leaf_width * leaves[child]
            divide(child, start, child_width)
            start += child_width

    for branch, direction, half in zip(branches, directions, halves):
        divide(branch, direction - half, 2.0 * half)

    narrowest: dict[int, float] = {}
    for index, width in plan.widths.items():
        level = arena.levels[index]
        if level >= 2:
            narrowest[level] = min(narrowest.get(level, math.inf), width)

    radius = max(distance_from_origin(absolute[b], origin) for b in branches)
    for level in sorted(narrowest):
        spacing = config.ring_spacing(level)
        radius += spacing
        width = min(narrowest[level], math.pi)
        if width > MIN_SECTOR:
            radius = max(radius, spacing / (2.0 * math.sin(width / 2.0)))
        plan.rings[level] = radius

    logger.debug(f"Planned {len(plan.angles)} sectors on {len(plan.rings)} rings")
    return plan

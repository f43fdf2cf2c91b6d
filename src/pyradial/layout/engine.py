"""Layout engine for 3D hierarchy visualization.

The engine is a greedy, order-sensitive incremental placer. Branches
and children are processed in their given order, and every node is
placed against the final positions of the nodes placed before it.
There is no relaxation or backtracking, so reordering the input is
expected to change the output.

Before placing anything the engine plans a sector and a ring slot for
every visible node (see ``pyradial.layout.sectors``). The arranger
tries those slots first, so crowded trees rarely need the search's
outer rings or its fallback.
"""

import copy
import logging
from dataclasses import dataclass, field

import numpy as np

from pyradial.layout.arranger import arrange_children_around_parent
from pyradial.layout.box import BoundingBox
from pyradial.layout.config import LayoutConfig
from pyradial.layout.geometry import Edge
from pyradial.layout.search import find_safe_position
from pyradial.layout.sectors import plan_sectors
from pyradial.model.arena import CENTER_INDEX, TreeArena
from pyradial.model.position import Position
from pyradial.model.tree import Tree

logger = logging.getLogger(__name__)


@dataclass
class LayoutResult:
    """Result of a layout pass.

    Attributes:
        arena: Index view of the tree that was laid out
        relative: New relative positions, shape (N, 3), addressed like the arena
        absolute: World space positions derived from ``relative``
        connections: (parent_id, child_id) pairs for every visible edge
        placed: Ids of the nodes the pass positioned
        bounds: Bounding box of the visible nodes
    """

    arena: TreeArena
    relative: np.ndarray
    absolute: np.ndarray
    connections: list[tuple[str, str]] = field(default_factory=list)
    placed: list[str] = field(default_factory=list)
    bounds: BoundingBox | None = None

    def position_of(self, node_id: str) -> Position:
        """New relative position of a node."""
        return Position.from_array(self.relative[self.arena.index_of(node_id)])

    def absolute_position_of(self, node_id: str) -> Position:
        """New absolute position of a node."""
        return Position.from_array(self.absolute[self.arena.index_of(node_id)])

    @property
    def positions(self) -> dict[str, Position]:
        """Relative positions of every node keyed by id."""
        return {node_id: Position.from_array(row) for node_id, row in zip(self.arena.ids, self.relative)}

    @property
    def absolute_positions(self) -> dict[str, Position]:
        """Absolute positions of every node keyed by id."""
        return {node_id: Position.from_array(row) for node_id, row in zip(self.arena.ids, self.absolute)}

    def apply(self, tree: Tree) -> Tree:
        """Return a copy of ``tree`` carrying the new relative positions.

        Nodes are matched by id; expansion flags and every other field
        are copied unchanged. The input tree is not modified.
        """
        updated = copy.deepcopy(tree)
        for node in updated.iter_nodes():
            node.position = self.position_of(node.id)
        return updated


class LayoutEngine:
    """Engine for calculating 3D positions for a node hierarchy."""

    def __init__(self, config: LayoutConfig | None = None, seed: int | None = None) -> None:
        """Initialize the layout engine.

        Args:
            config: Layout configuration (uses defaults if None)
            seed: Seed for the jitter generator; every pass restarts from
                it, so equal inputs give equal layouts. None draws fresh
                entropy per pass.
        """
        self.config = config or LayoutConfig()
        self.config.validate()
        self.seed = seed

    def _new_rng(self) -> np.random.Generator:
        return np.random.default_rng(self.seed)

    def reposition_tree(self, tree: Tree) -> LayoutResult:
        """Lay out every visible node of a tree.

        Branches are placed around the center with the wide top-level
        separation. Each expanded node then has its children distributed
        by the radial arranger, starting from their planned sector
        slots, and each child is confirmed by the
        position search before its own subtree is visited. Collapsed
        subtrees keep their stored relative positions and do not take
        part in collision accounting.

        Args:
            tree: Tree to lay out (not modified)

        Returns:
            LayoutResult with the new positions
        """
        config = self.config
        rng = self._new_rng()
        arena = TreeArena.from_tree(tree)
        initial = arena.absolute_positions()
        absolute = initial.copy()
        origin = absolute[CENTER_INDEX].copy()
        plan = plan_sectors(arena, initial, config)

        positions: list[np.ndarray] = [origin]
        edges: list[Edge] = []
        placed: list[int] = []

        def place(index: int, preferred: np.ndarray) -> None:
            parent = arena.parents[index]
            parent_position = absolute[parent].copy()
            level = arena.levels[index]
            position = find_safe_position(
                parent_position,
                preferred,
                positions,
                edges,
                config.search_min_distance(level),
                arena.ids[index],
                arena.ids[parent],
                config=config,
                rng=rng,
                origin=origin,
            )
            absolute[index] = position
            positions.append(position)
            edges.append(Edge(parent_position, position, arena.ids[parent], arena.ids[index]))
            placed.append(index)

            children = arena.children[index]
            if not (arena.expanded[index] and children):
                return

            depth = level - 1
            preferred_children = arrange_children_around_parent(
                position,
                [arena.ids[child] for child in children],
                positions,
                edges,
                config.arranger_radius(depth),
                config.arranger_separation(depth),
                arena.ids[index],
                slots=[plan.slot(child) for child in children],
                config=config,
                rng=rng,
                origin=origin,
            )
            for child, child_preferred in zip(children, preferred_children):
                place(child, child_preferred)

        for branch in arena.branch_indices:
            place(branch, initial[branch])

        relative = arena.relative.copy()
        for index in placed:
            relative[index] = absolute[index] - absolute[arena.parents[index]]
        final = arena.absolute_positions(relative)

        visible = [CENTER_INDEX] + placed
        result = LayoutResult(
            arena=arena,
            relative=relative,
            absolute=final,
            connections=[(arena.ids[arena.parents[i]], arena.ids[i]) for i in placed],
            placed=[arena.ids[i] for i in placed],
            bounds=BoundingBox.from_points(final[visible]),
        )
        logger.info(f"Laid out {len(placed)} of {len(arena) - 1} nodes around {arena.ids[CENTER_INDEX]!r}")
        return result

    def layout_tree(self, tree: Tree) -> Tree:
        """Lay out a tree and return an updated copy of it."""
        return self.reposition_tree(tree).apply(tree)

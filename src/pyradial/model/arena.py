"""Flattened, index-addressed view of a tree for layout passes.

A layout pass never clones the node objects. It flattens the tree once
into parallel arrays addressed by stable integer indices and produces a
fresh ``(N, 3)`` array of relative positions addressed the same way.
"""

from dataclasses import dataclass, field

import numpy as np

from pyradial.errors import NodeNotFoundError
from pyradial.model.node import Node
from pyradial.model.tree import Tree

CENTER_INDEX = 0


@dataclass
class TreeArena:
    """Arena of nodes in depth-first order; index 0 is the center.

    Attributes:
        ids: Node id per index
        parents: Parent index per index (-1 for the center)
        children: Child indices per index, in tree order
        levels: Depth per index (center = 0)
        expanded: Expansion flag per index
        relative: Relative positions, shape (N, 3)
    """

    ids: list[str] = field(default_factory=list)
    parents: list[int] = field(default_factory=list)
    children: list[list[int]] = field(default_factory=list)
    levels: list[int] = field(default_factory=list)
    expanded: list[bool] = field(default_factory=list)
    relative: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))
    _index: dict[str, int] = field(default_factory=dict, repr=False)

    @classmethod
    def from_tree(cls, tree: Tree) -> "TreeArena":
        """Flatten a tree into an arena.

        Levels are taken from tree structure, not from the stored
        ``level`` fields, so hand-built trees cannot drift.
        """
        arena = cls()
        rows: list[np.ndarray] = []

        def visit(node: Node, parent: int, level: int) -> int:
            index = len(arena.ids)
            arena.ids.append(node.id)
            arena.parents.append(parent)
            arena.children.append([])
            arena.levels.append(level)
            arena.expanded.append(node.expanded)
            arena._index[node.id] = index
            rows.append(node.position.as_array())
            for child in node.children:
                arena.children[index].append(visit(child, index, level + 1))
            return index

        visit(tree.center, -1, 0)
        for branch in tree.branches:
            arena.children[CENTER_INDEX].append(visit(branch, CENTER_INDEX, 1))

        arena.relative = np.array(rows, dtype=np.float64).reshape(-1, 3)
        return arena

    def __len__(self) -> int:
        return len(self.ids)

    def index_of(self, node_id: str) -> int:
        """Get the arena index of a node id.

        Raises:
            NodeNotFoundError: If the id is not in the arena
        """
        try:
            return self._index[node_id]
        except KeyError:
            raise NodeNotFoundError(node_id) from None

    @property
    def branch_indices(self) -> list[int]:
        """Indices of the top-level branches."""
        return self.children[CENTER_INDEX]

    def absolute_positions(self, relative: np.ndarray | None = None) -> np.ndarray:
        """Accumulate relative positions into world space.

        Args:
            relative: Relative position array to use (defaults to the arena's own)

        Returns:
            Array of shape (N, 3) with absolute positions
        """
        relative = self.relative if relative is None else relative
        absolute = np.empty_like(relative)
        # Depth-first order guarantees parents precede children
        for index, parent in enumerate(self.parents):
            if parent < 0:
                absolute[index] = relative[index]
            else:
                absolute[index] = absolute[parent] + relative[index]
        return absolute

    def visible_indices(self) -> list[int]:
        """Indices of the center, the branches and every expanded descendant."""
        visible = [CENTER_INDEX]
        stack = list(reversed(self.branch_indices))
        while stack:
            index = stack.pop()
            visible.append(index)
            if self.expanded[index]:
                stack.extend(reversed(self.children[index]))
        return visible

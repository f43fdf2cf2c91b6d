"""Tree container holding the center node and its top-level branches."""

import copy
from collections.abc import Iterator
from dataclasses import dataclass, field

from pyradial.errors import NodeNotFoundError
from pyradial.model.node import Node
from pyradial.model.position import Position


@dataclass
class Tree:
    """A hub node plus an ordered sequence of top-level branches.

    Every non-center node belongs to exactly one branch. Branches are
    attached to the center and are always laid out, whatever the
    center's expansion flag says.

    Attributes:
        center: The hub node, positioned relative to world origin
        branches: Top-level subtrees attached directly to the center
    """

    center: Node
    branches: list[Node] = field(default_factory=list)

    def iter_nodes(self) -> Iterator[Node]:
        """Iterate over every node, center first, depth first."""
        yield self.center
        for branch in self.branches:
            yield from branch.iter_subtree()

    def iter_visible(self) -> Iterator[Node]:
        """Iterate over the center, the branches and every expanded descendant."""
        yield self.center
        for branch in self.branches:
            yield from branch.iter_visible()

    def find_node(self, node_id: str) -> Node:
        """Find a node by id.

        Args:
            node_id: Id of the node

        Returns:
            The matching node

        Raises:
            NodeNotFoundError: If no node has the given id
        """
        for node in self.iter_nodes():
            if node.id == node_id:
                return node
        raise NodeNotFoundError(node_id)

    def path_to(self, node_id: str) -> list[Node]:
        """Get the chain of nodes from the center down to ``node_id``.

        Raises:
            NodeNotFoundError: If no node has the given id
        """
        if node_id == self.center.id:
            return [self.center]

        def search(nodes: list[Node], trail: list[Node]) -> list[Node] | None:
            for node in nodes:
                current = trail + [node]
                if node.id == node_id:
                    return current
                found = search(node.children, current)
                if found:
                    return found
            return None

        found = search(self.branches, [self.center])
        if found is None:
            raise NodeNotFoundError(node_id)
        return found

    def absolute_position(self, node_id: str) -> Position:
        """Sum the relative positions from the center down to a node."""
        total = Position()
        for node in self.path_to(node_id):
            total = total + node.position
        return total

    def breadcrumb_path(self, node_id: str) -> list[tuple[str, str]]:
        """Get ``(id, name)`` pairs from the center down to a node."""
        return [(node.id, node.name) for node in self.path_to(node_id)]

    def visible_edges(self) -> list[tuple[str, str]]:
        """Get ``(parent_id, child_id)`` pairs for every visible connection."""
        edges = [(self.center.id, branch.id) for branch in self.branches]
        for branch in self.branches:
            for node in branch.iter_visible():
                if node.expanded:
                    edges.extend((node.id, child.id) for child in node.children)
        return edges

    def expansion_state(self) -> dict[str, bool]:
        """Map every node id to its expansion flag."""
        return {node.id: node.expanded for node in self.iter_nodes()}

    def apply_expansion_state(self, state: dict[str, bool]) -> None:
        """Restore expansion flags; ids missing from ``state`` are left alone."""
        for node in self.iter_nodes():
            if node.id in state:
                node.expanded = state[node.id]

    def expand_all(self) -> None:
        """Expand every node, center included."""
        self.center.expanded = True
        for branch in self.branches:
            branch.set_expanded_recursive(True)

    def collapse_all(self) -> None:
        """Collapse every node except the center."""
        self.center.expanded = True
        for branch in self.branches:
            branch.set_expanded_recursive(False)

    @property
    def is_fully_expanded(self) -> bool:
        """Check whether every node with children is expanded."""
        return all(node.expanded for node in self.iter_nodes() if node.children)

    def __len__(self) -> int:
        return sum(1 for _ in self.iter_nodes())

    def copy(self) -> "Tree":
        """Return a deep copy that shares no nodes with this tree."""
        return copy.deepcopy(self)

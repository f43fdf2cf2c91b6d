"""Node class representing one element of the hierarchy."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Self

from pyradial.model.position import Position


@dataclass
class Node:
    """Represents one labeled node in the 3D hierarchy.

    Attributes:
        id: Unique key, stable across layout passes
        name: Display label
        position: Position relative to the parent node (world origin for the center)
        level: Depth in the tree (center = 0)
        expanded: Whether children are shown and laid out
        children: Ordered child nodes; order is the angular distribution order
        parent_id: Id of the parent node (None for the center)
        color: Base color as a hex string
        glow_color: Halo color as a hex string
        metalness: Material metalness in [0, 1]
        roughness: Material roughness in [0, 1]
        description: Free text description
        details: Bullet point details
        protocols: Protocol tags used by filtering
        income: Income tags used by filtering
    """

    id: str
    name: str
    position: Position = field(default_factory=Position)
    level: int = 0
    expanded: bool = False
    children: list[Self] = field(default_factory=list)
    parent_id: str | None = None
    color: str = "#FFFFFF"
    glow_color: str | None = None
    metalness: float | None = None
    roughness: float | None = None
    description: str = ""
    details: list[str] = field(default_factory=list)
    protocols: list[str] = field(default_factory=list)
    income: list[str] = field(default_factory=list)

    def __hash__(self) -> int:
        """Hash based on id."""
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        """Equality based on id."""
        if not isinstance(other, Node):
            return NotImplemented
        return self.id == other.id

    @property
    def is_leaf(self) -> bool:
        """Check if this node has no children."""
        return not self.children

    def add_child(self, child: Self) -> None:
        """Append a child node, fixing up its level and parent id.

        Args:
            child: Child node to add
        """
        child.parent_id = self.id
        child.level = self.level + 1
        self.children.append(child)

    def find(self, node_id: str) -> Self | None:
        """Find a node by id in this subtree (including self).

        Args:
            node_id: Id to look for

        Returns:
            The node if found, None otherwise
        """
        for node in self.iter_subtree():
            if node.id == node_id:
                return node
        return None

    def iter_subtree(self) -> Iterator[Self]:
        """Iterate over this node and all descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.iter_subtree()

    def iter_visible(self) -> Iterator[Self]:
        """Iterate over this node and descendants reachable through expanded nodes."""
        yield self
        if self.expanded:
            for child in self.children:
                yield from child.iter_visible()

    def set_expanded_recursive(self, expanded: bool) -> None:
        """Set the expansion flag on this node and every descendant."""
        for node in self.iter_subtree():
            node.expanded = expanded

    def __repr__(self) -> str:
        """String representation of the node."""
        return f"Node({self.id}, {self.name!r}, level={self.level}, expanded={self.expanded})"

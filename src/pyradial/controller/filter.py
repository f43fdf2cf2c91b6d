"""Node filtering by protocol tags, income tags and name."""

from dataclasses import dataclass, field

from pyradial.model.node import Node
from pyradial.model.tree import Tree


@dataclass(frozen=True)
class NodeFilter:
    """Active filter criteria.

    An empty criterion does not restrict anything; a node must satisfy
    every non-empty criterion to match.

    Attributes:
        protocols: Node matches if it carries any of these protocol tags
        income: Node matches if it carries any of these income tags
        search: Case-insensitive substring of the node name
    """

    protocols: frozenset[str] = field(default_factory=frozenset)
    income: frozenset[str] = field(default_factory=frozenset)
    search: str = ""

    @classmethod
    def create(cls, protocols=(), income=(), search: str = "") -> "NodeFilter":
        """Build a filter from any iterables of tags."""
        return cls(protocols=frozenset(protocols), income=frozenset(income), search=search)

    @property
    def is_empty(self) -> bool:
        """Check whether the filter restricts nothing."""
        return not self.protocols and not self.income and not self.search.strip()

    def matches(self, node: Node) -> bool:
        """Check whether a node satisfies every criterion."""
        if self.is_empty:
            return True
        if self.protocols and not self.protocols.intersection(node.protocols):
            return False
        if self.income and not self.income.intersection(node.income):
            return False
        term = self.search.strip().lower()
        if term and term not in node.name.lower():
            return False
        return True

    def visible_ids(self, tree: Tree) -> set[str]:
        """Ids of matching nodes plus all of their ancestors."""
        visible: set[str] = set()
        for node in tree.iter_nodes():
            if self.matches(node):
                visible.update(ancestor.id for ancestor in tree.path_to(node.id))
        return visible

    def cache_key_part(self) -> str:
        """Stable string form used in layout cache keys."""
        protocols = ",".join(sorted(self.protocols))
        income = ",".join(sorted(self.income))
        return f"{protocols}-{income}-{self.search.strip().lower()}"

"""Application state controller.

Decides when a full layout pass runs (expand all, reset, filter
activation) and when positions are written directly (dragging, plain
expand/collapse clicks). Every state change produces a new tree; the
previous tree is never modified in place, so a copy held by the
rendering layer or by the layout cache stays valid.
"""

import logging
from collections.abc import Callable

from PyQt6.QtCore import QObject, pyqtSignal

from pyradial.controller.cache import DEFAULT_MAX_ENTRIES, LayoutCache
from pyradial.controller.filter import NodeFilter
from pyradial.layout.config import LayoutConfig
from pyradial.layout.engine import LayoutEngine
from pyradial.model.position import Position
from pyradial.model.sample import build_sample_tree
from pyradial.model.tree import Tree

logger = logging.getLogger(__name__)


class LayoutController(QObject):
    """Main application controller.

    Manages expansion, filter and focus state and coordinates the
    layout engine and the layout cache.
    """

    # Signals for the rendering layer
    layout_changed = pyqtSignal(object)  # Emits the new Tree
    status_message = pyqtSignal(str)  # Emits status text
    focus_changed = pyqtSignal(str)  # Emits focused node id

    def __init__(
        self,
        tree_factory: Callable[[], Tree] = build_sample_tree,
        config: LayoutConfig | None = None,
        seed: int | None = None,
        cache_size: int = DEFAULT_MAX_ENTRIES,
    ) -> None:
        """Initialize controller.

        Args:
            tree_factory: Builds the pristine tree; called again on reset
            config: Layout configuration
            seed: Seed for layout jitter (None for a fresh seed per pass)
            cache_size: Maximum number of cached layouts
        """
        super().__init__()

        self._tree_factory = tree_factory
        self._engine = LayoutEngine(config, seed)
        self._cache = LayoutCache(cache_size)

        self._tree = tree_factory()
        self._is_all_expanded = self._tree.is_fully_expanded and bool(self._tree.branches)

        # Filter state
        self._filter = NodeFilter()
        self._filter_active = False

        # Focus state
        self._focused_node_id = self._tree.center.id

    # Properties

    @property
    def tree(self) -> Tree:
        """Current tree. Treat as read-only; changes go through the controller."""
        return self._tree

    @property
    def engine(self) -> LayoutEngine:
        """Layout engine used for full passes."""
        return self._engine

    @property
    def cache(self) -> LayoutCache:
        """Layout cache."""
        return self._cache

    @property
    def is_all_expanded(self) -> bool:
        """Whether the last bulk operation was expand-all."""
        return self._is_all_expanded

    @property
    def is_filter_active(self) -> bool:
        """Whether a non-empty filter is applied."""
        return self._filter_active

    @property
    def node_filter(self) -> NodeFilter:
        """Current filter criteria."""
        return self._filter

    @property
    def focused_node_id(self) -> str:
        """Id of the node the view is focused on."""
        return self._focused_node_id

    def cache_key(self, expanded: bool | None = None) -> str:
        """Cache key for an expansion state under the current filter."""
        expanded = self._is_all_expanded if expanded is None else expanded
        prefix = "expanded" if expanded else "collapsed"
        return f"{prefix}-{self._filter.cache_key_part()}"

    # Lifecycle

    def start(self) -> None:
        """Lay out the initial tree and publish it."""
        tree = self._engine.layout_tree(self._tree)
        self._cache.store(self.cache_key(), tree)
        self._set_tree(tree, f"Loaded {len(tree)} nodes")

    # Bulk expansion

    def expand_all(self) -> None:
        """Expand every node and lay out the result, using the cache when possible."""
        key = self.cache_key(True)
        tree = self._cache.get(key)
        if tree is None:
            logger.info("Computing new expanded layout")
            tree = self._tree.copy()
            tree.expand_all()
            tree = self._engine.layout_tree(tree)
            self._cache.store(key, tree)
        else:
            logger.info("Using cached expanded layout")

        self._is_all_expanded = True
        self._set_tree(tree, "Expanded all nodes")

    def collapse_all(self) -> None:
        """Collapse every node except the center.

        Collapsing never runs a layout pass: hidden subtrees keep their
        stored positions.
        """
        key = self.cache_key(False)
        tree = self._cache.get(key)
        if tree is None:
            tree = self._tree.copy()
            tree.collapse_all()
            self._cache.store(key, tree)

        self._is_all_expanded = False
        self._set_tree(tree, "Collapsed all nodes")

    def toggle_all(self) -> None:
        """Expand all when not fully expanded, otherwise collapse all."""
        if self._is_all_expanded:
            self.collapse_all()
        else:
            self.expand_all()

    def toggle_node(self, node_id: str) -> bool:
        """Flip one node's expansion flag.

        Runs a layout pass only while a filter is active.

        Args:
            node_id: Node to toggle

        Returns:
            The new expansion flag

        Raises:
            NodeNotFoundError: If the id is unknown
        """
        tree = self._tree.copy()
        node = tree.find_node(node_id)
        node.expanded = not node.expanded

        if self._filter_active:
            tree = self._engine.layout_tree(tree)

        self._cache.store(self.cache_key(), tree)
        state = "Expanded" if node.expanded else "Collapsed"
        self._set_tree(tree, f"{state} {node.name}")
        return node.expanded

    def reset_layout(self) -> None:
        """Rebuild the pristine tree, keep expansion flags, and lay it out.

        Manual positions are discarded, so the cache is cleared.
        """
        fresh = self._tree_factory()
        fresh.apply_expansion_state(self._tree.expansion_state())
        tree = self._engine.layout_tree(fresh)
        self._cache.clear()
        self._set_tree(tree, "Layout has been reset to default positions")

    # Direct manipulation

    def drag_node(self, node_id: str, new_position: Position) -> bool:
        """Move a node to a new relative position.

        Descendants are stored relative to the node, so the whole
        subtree follows by the same delta. No layout pass runs; this
        is a user override.

        Args:
            node_id: Node being dragged
            new_position: New position relative to the node's parent

        Returns:
            False if the move was below the movement threshold

        Raises:
            NodeNotFoundError: If the id is unknown
        """
        if self._tree.find_node(node_id).position.is_close(new_position):
            return False

        tree = self._tree.copy()
        tree.find_node(node_id).position = Position(new_position.x, new_position.y, new_position.z)

        key = self.cache_key()
        self._cache.store(key, tree)
        logger.debug(f"Updated cache with manual positioning: {key}")
        self._set_tree(tree, f"Moved {node_id}")
        return True

    # Filtering

    def set_filter(self, node_filter: NodeFilter) -> None:
        """Apply filter criteria.

        Activating a filter expands everything (once) so matches deep
        in the tree become visible.
        """
        was_active = self._filter_active
        self._filter = node_filter
        self._filter_active = not node_filter.is_empty

        if self._filter_active and not was_active:
            if not self._is_all_expanded:
                logger.info("Filter activated - expanding all nodes")
                self.expand_all()
                return
            logger.info("Filter activated - nodes already expanded, skipping expansion")

        self.status_message.emit(f"Showing {len(self.visible_ids())} nodes")

    def clear_filter(self) -> None:
        """Remove every filter criterion. Expansion is left as it is."""
        self.set_filter(NodeFilter())

    def visible_ids(self) -> set[str]:
        """Ids shown under the current expansion and filter state."""
        shown = {node.id for node in self._tree.iter_visible()}
        if self._filter_active:
            shown &= self._filter.visible_ids(self._tree)
        return shown

    # Focus and navigation

    def focus_node(self, node_id: str) -> list[tuple[str, str]]:
        """Focus the view on a node.

        Returns:
            Breadcrumb ``(id, name)`` pairs from the center to the node

        Raises:
            NodeNotFoundError: If the id is unknown
        """
        breadcrumbs = self._tree.breadcrumb_path(node_id)
        self._focused_node_id = node_id
        self.focus_changed.emit(node_id)
        return breadcrumbs

    def return_to_overview(self) -> None:
        """Focus the center again."""
        self.focus_node(self._tree.center.id)

    def breadcrumbs(self, node_id: str | None = None) -> list[tuple[str, str]]:
        """Breadcrumb path to ``node_id`` (the focused node by default)."""
        return self._tree.breadcrumb_path(node_id or self._focused_node_id)

    def absolute_position(self, node_id: str) -> Position:
        """World space position of a node in the current tree."""
        return self._tree.absolute_position(node_id)

    def _set_tree(self, tree: Tree, message: str) -> None:
        self._tree = tree
        logger.info(message)
        self.layout_changed.emit(tree)
        self.status_message.emit(message)

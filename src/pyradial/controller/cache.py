"""Bounded cache of computed layouts keyed by view state."""

import itertools
import logging
from dataclasses import dataclass

from pyradial.model.tree import Tree

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 10


@dataclass
class CachedLayout:
    """A stored tree and its insertion sequence number."""

    tree: Tree
    sequence: int


class LayoutCache:
    """Stores deep copies of laid out trees.

    Entries are evicted oldest first once the cache grows past
    ``max_entries``. Storing under an existing key moves it to
    the newest position.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        """Initialize the cache.

        Args:
            max_entries: Maximum number of layouts kept
        """
        self._max_entries = max_entries
        self._entries: dict[str, CachedLayout] = {}
        self._sequence = itertools.count()

    def store(self, key: str, tree: Tree) -> None:
        """Store a copy of ``tree`` under ``key``."""
        self._entries[key] = CachedLayout(tree=tree.copy(), sequence=next(self._sequence))

        if len(self._entries) > self._max_entries:
            oldest = sorted(self._entries, key=lambda k: self._entries[k].sequence)
            for stale in oldest[: len(self._entries) - self._max_entries]:
                del self._entries[stale]
                logger.debug(f"Evicted cached layout: {stale}")

        logger.debug(f"Cached layout: {key}")

    def get(self, key: str) -> Tree | None:
        """Get a copy of the stored tree, or None on a miss."""
        cached = self._entries.get(key)
        if cached is None:
            return None
        logger.debug(f"Retrieved cached layout: {key}")
        return cached.tree.copy()

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()
        logger.debug("Layout cache cleared")

    def keys(self) -> list[str]:
        """Cached keys, oldest first."""
        return sorted(self._entries, key=lambda k: self._entries[k].sequence)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

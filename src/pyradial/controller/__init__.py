"""Controller layer for pyradial.

This module provides the application state coordination:

- LayoutController: Expansion, drag, filter and focus state
- LayoutCache: Bounded cache of computed layouts
- NodeFilter: Filter criteria
"""

from pyradial.controller.cache import LayoutCache
from pyradial.controller.filter import NodeFilter
from pyradial.controller.controller import LayoutController

__all__ = [
    "LayoutCache",
    "NodeFilter",
    "LayoutController",
]

"""Layout engine for 3D hierarchy visualization.

This module contains the placement algorithms for positioning
nodes around their parents in 3D space.
"""

from pyradial.layout.arranger import arrange_children_around_parent
from pyradial.layout.box import BoundingBox
from pyradial.layout.config import LayoutConfig
from pyradial.layout.engine import LayoutEngine, LayoutResult
from pyradial.layout.geometry import (
    Edge,
    distance_3d,
    distance_from_origin,
    enforce_hierarchical_distance,
    segments_intersect,
)
from pyradial.layout.search import find_safe_position
from pyradial.layout.sectors import SectorPlan, plan_sectors

__all__ = [
    "BoundingBox",
    "Edge",
    "LayoutConfig",
    "LayoutEngine",
    "LayoutResult",
    "SectorPlan",
    "arrange_children_around_parent",
    "distance_3d",
    "distance_from_origin",
    "enforce_hierarchical_distance",
    "find_safe_position",
    "plan_sectors",
    "segments_intersect",
]

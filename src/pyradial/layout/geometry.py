"""Geometric predicates used by the placement search.

Vectors are float64 numpy arrays of shape (3,). Edge crossing tests
work on the x/y projection only: the layout is roughly planar around
the hub, so depth differences do not make a crossing readable.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

ORIGIN = np.zeros(3)
DEFAULT_DIRECTION = np.array([1.0, 0.0, 0.0])
ZERO_LENGTH = 1e-3


@dataclass(frozen=True)
class Edge:
    """A parent-child connection in absolute coordinates.

    Attributes:
        start: Parent position
        end: Child position
        start_id: Parent node id
        end_id: Child node id
    """

    start: np.ndarray
    end: np.ndarray
    start_id: str
    end_id: str

    def touches(self, *node_ids: str | None) -> bool:
        """Check whether either endpoint is one of ``node_ids``."""
        return self.start_id in node_ids or self.end_id in node_ids


def distance_3d(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance between two points."""
    return float(np.linalg.norm(np.asarray(a) - np.asarray(b)))


def distance_from_origin(p: np.ndarray, origin: np.ndarray = ORIGIN) -> float:
    """Euclidean distance of a world space point from the origin."""
    return distance_3d(p, origin)


def segments_intersect(
    a1: np.ndarray,
    a2: np.ndarray,
    b1: np.ndarray,
    b2: np.ndarray,
    buffer: float = 0.5,
    parallel_epsilon: float = 1e-4,
) -> bool:
    """Test whether two segments cross in the x/y plane.

    The parametric range [0, 1] of both segments is widened by
    ``buffer`` expressed as a fraction of the shorter segment, so near
    misses within the margin count as crossings.

    Args:
        a1: Start of the first segment
        a2: End of the first segment
        b1: Start of the second segment
        b2: End of the second segment
        buffer: Near-miss margin in world units
        parallel_epsilon: Determinant magnitude treated as parallel

    Returns:
        True if the segments cross (within the margin)
    """
    ax, ay = a2[0] - a1[0], a2[1] - a1[1]
    bx, by = b2[0] - b1[0], b2[1] - b1[1]

    det = ax * by - bx * ay
    if abs(det) < parallel_epsilon:
        return False

    shorter = min(np.hypot(ax, ay), np.hypot(bx, by))
    if shorter < ZERO_LENGTH:
        return False

    dx, dy = b2[0] - a1[0], b2[1] - a1[1]
    lam = (by * dx - bx * dy) / det
    gamma = (-ay * dx + ax * dy) / det

    margin = buffer / shorter
    return bool(-margin < lam < 1 + margin and -margin < gamma < 1 + margin)


def enforce_hierarchical_distance(
    candidate: np.ndarray,
    parent: np.ndarray,
    origin: np.ndarray = ORIGIN,
    gap: float = 0.8,
) -> np.ndarray:
    """Push a candidate outward so it sits at least ``gap`` beyond its parent.

    Distances are measured from ``origin``. A candidate that already
    satisfies the constraint is returned unchanged; otherwise it keeps
    its direction from the origin and is rescaled to exactly
    ``|parent| + gap``.

    Args:
        candidate: Proposed absolute position
        parent: Absolute position of the parent
        origin: Hub position
        gap: Required increase in distance from the origin

    Returns:
        A position satisfying the constraint
    """
    candidate = np.asarray(candidate, dtype=np.float64)
    parent = np.asarray(parent, dtype=np.float64)
    required = distance_from_origin(parent, origin) + gap

    offset = candidate - origin
    current = float(np.linalg.norm(offset))
    if current >= required:
        return candidate

    if current < ZERO_LENGTH:
        direction = candidate - parent
        length = float(np.linalg.norm(direction))
        direction = direction / length if length > ZERO_LENGTH else DEFAULT_DIRECTION
    else:
        direction = offset / current

    return origin + direction * required


def has_collision(candidate: np.ndarray, positions: Iterable[np.ndarray], min_distance: float) -> bool:
    """Check whether any placed position is closer than ``min_distance``."""
    return any(distance_3d(candidate, pos) < min_distance for pos in positions)


def would_edge_intersect(
    start: np.ndarray,
    end: np.ndarray,
    edges: Sequence[Edge],
    start_id: str | None,
    end_id: str | None,
    buffer: float = 0.5,
    parallel_epsilon: float = 1e-4,
) -> bool:
    """Check a proposed edge against placed edges.

    Edges sharing an endpoint with the proposed one are adjacent, not
    crossing, and are skipped.
    """
    for edge in edges:
        if edge.touches(start_id, end_id):
            continue
        if segments_intersect(start, end, edge.start, edge.end, buffer, parallel_epsilon):
            return True
    return False

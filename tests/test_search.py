#!/usr/bin/env python3
"""Unit tests for the safe position search."""

import sys
from pathlib import Path

# Add source directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np

from pyradial.layout.config import LayoutConfig
from pyradial.layout.geometry import Edge, distance_3d, distance_from_origin, segments_intersect
from pyradial.layout.search import find_safe_position


def v(x, y, z=0.0):
    return np.array([x, y, z], dtype=np.float64)


def test_free_preferred_position_is_kept():
    """A safe preferred position is returned as is."""
    result = find_safe_position(v(0, 0), v(5, 0), [], [], 1.4, rng=np.random.default_rng(0))
    assert np.allclose(result, v(5, 0))


def test_preferred_position_is_pushed_outward():
    """The preferred position is corrected before anything else."""
    parent = v(3, 0)
    result = find_safe_position(parent, v(3.2, 0), [], [], 1.4, rng=np.random.default_rng(0))
    assert distance_from_origin(result) >= distance_from_origin(parent) + 0.8 - 1e-9


def test_collision_with_other_branch_is_resolved():
    """A node whose preferred spot is taken is moved clear of it."""
    config = LayoutConfig()
    parent = v(0, 5, 0)
    occupied = v(4, 5, 0)
    positions = [v(0, 0, 0), parent, occupied]
    edges = [
        Edge(v(0, 0, 0), parent, "center", "a"),
        Edge(v(0, 0, 0), occupied, "center", "b"),
    ]

    result = find_safe_position(
        parent,
        occupied.copy(),
        positions,
        edges,
        1.4,
        "a1",
        "a",
        config=config,
        rng=np.random.default_rng(3),
    )

    effective = config.effective_min_distance(1.4)
    for other in positions:
        assert distance_3d(result, other) >= effective
    assert distance_from_origin(result) >= distance_from_origin(parent) + config.generation_gap - 1e-9

    print("✓ Collision resolution test passed")


def test_result_avoids_crossing_edges():
    """The edge to the chosen position does not cross placed edges."""
    parent = v(0, 3, 0)
    # A wall of an edge right in front of the preferred direction
    edges = [Edge(v(-3, 6, 0), v(3, 6, 0), "x", "y")]
    result = find_safe_position(parent, v(0, 8, 0), [parent], edges, 1.4, "n", "p", rng=np.random.default_rng(1))

    assert not segments_intersect(parent, result, edges[0].start, edges[0].end)


def test_fallback_when_nothing_is_safe():
    """The search never fails; it falls back along the preferred direction."""
    config = LayoutConfig(angle_samples=1, max_radius_growth=0.0, search_z_jitter=0.0)
    obstacle = v(3, 0, 0)

    result = find_safe_position(
        v(0, 0, 0),
        v(3, 0, 0),
        [obstacle],
        [],
        1.4,
        config=config,
        rng=np.random.default_rng(0),
    )

    # base radius 3 plus twice the effective distance of 2.0
    assert np.allclose(result, v(7, 0, 0))


def test_fallback_keeps_hierarchical_distance():
    """Even the fallback respects the generation gap."""
    config = LayoutConfig(angle_samples=1, max_radius_growth=0.0)
    parent = v(10, 0, 0)
    # Preferred points back toward the hub
    result = find_safe_position(parent, v(9, 0, 0), [parent, v(10.8, 0, 0)], [], 1.4, config=config, rng=np.random.default_rng(0))
    assert distance_from_origin(result) >= 10.8 - 1e-9


def test_search_is_deterministic_for_a_seed():
    """Equal generators give equal results."""
    parent = v(0, 5, 0)
    positions = [v(0, 0, 0), parent, v(4, 5, 0), v(2, 8, 0)]

    first = find_safe_position(parent, v(4, 5, 0), positions, [], 1.4, rng=np.random.default_rng(42))
    second = find_safe_position(parent, v(4, 5, 0), positions, [], 1.4, rng=np.random.default_rng(42))
    assert np.array_equal(first, second)


def test_inputs_are_not_modified():
    """The search only reads its obstacle lists."""
    positions = [v(0, 0, 0), v(0, 5, 0), v(4, 5, 0)]
    edges = [Edge(v(0, 0, 0), v(0, 5, 0), "center", "a")]
    preferred = v(4, 5, 0)

    find_safe_position(v(0, 5, 0), preferred, positions, edges, 1.4, "a1", "a", rng=np.random.default_rng(0))

    assert len(positions) == 3
    assert len(edges) == 1
    assert np.array_equal(preferred, v(4, 5, 0))

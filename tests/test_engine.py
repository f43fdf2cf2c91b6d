#!/usr/bin/env python3
"""Tests for the layout engine.

Tests:
- Distance from the hub grows with every generation
- Visible nodes keep their separation and edges do not cross for
  several tree shapes and seeds
- Children land on their planned sector slots
- Collapsed subtrees are left alone
- A seed makes layouts reproducible
- Input trees are never modified
"""

import itertools
import logging
import math
import sys
from pathlib import Path

# Add source directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np
import pytest

from pyradial.errors import ValidationError
from pyradial.layout.config import LayoutConfig
from pyradial.layout.engine import LayoutEngine
from pyradial.layout.geometry import distance_3d, segments_intersect
from pyradial.layout.sectors import plan_sectors
from pyradial.model.node import Node
from pyradial.model.position import Position
from pyradial.model.sample import build_sample_tree
from pyradial.model.tree import Tree


def grow(node: Node, fanout: int, depth: int, expanded: bool) -> None:
    for j in range(fanout):
        child = Node(f"{node.id}.{j}", f"{node.name} {j}", position=Position(2.0, 0.0, 0.0), expanded=expanded)
        node.add_child(child)
        if depth > 1:
            grow(child, fanout, depth - 1, expanded)


def build_tree(fanout: int = 3, depth: int = 2, expanded: bool = True) -> Tree:
    """Build a regular tree; ``depth`` counts the branch generation."""
    center = Node("center", "Center", expanded=True)
    branches = []
    for i in range(fanout):
        angle = 2 * math.pi * i / fanout
        branch = Node(
            f"b{i}",
            f"Branch {i}",
            position=Position(5 * math.cos(angle), 5 * math.sin(angle), 0.0),
            level=1,
            expanded=expanded,
            parent_id="center",
        )
        if depth > 1:
            grow(branch, fanout, depth - 1, expanded)
        branches.append(branch)
    return Tree(center=center, branches=branches)


def build_chain(length: int) -> Tree:
    """A single branch with one child per generation."""
    center = Node("center", "Center", expanded=True)
    node = Node("n1", "N1", position=Position(5.0, 0.0, 0.0), level=1, expanded=True, parent_id="center")
    branch = node
    for i in range(2, length + 1):
        child = Node(f"n{i}", f"N{i}", position=Position(1.0, 1.0, 0.0), expanded=True)
        node.add_child(child)
        node = child
    return Tree(center=center, branches=[branch])


def test_distance_grows_with_each_generation():
    """Every placed node sits further from the hub than its parent."""
    engine = LayoutEngine(seed=1)
    for tree in (build_tree(3, 2), build_chain(6)):
        result = engine.reposition_tree(tree)
        arena = result.arena
        gap = engine.config.generation_gap
        for node_id in result.placed:
            index = arena.index_of(node_id)
            parent = arena.parents[index]
            child_distance = np.linalg.norm(result.absolute[index] - result.absolute[0])
            parent_distance = np.linalg.norm(result.absolute[parent] - result.absolute[0])
            assert child_distance >= parent_distance + gap - 1e-9

    print("✓ Generation distance test passed")


def test_deep_chain_strictly_increasing():
    """A six generation chain moves outward at every step."""
    tree = build_chain(6)
    result = LayoutEngine(seed=4).reposition_tree(tree)

    distances = [result.absolute_position_of(f"n{i}").length for i in range(1, 7)]
    for inner, outer in zip(distances, distances[1:]):
        assert outer >= inner + 0.8 - 1e-9


def test_branches_keep_top_level_distance():
    """Branches are separated by the wide top-level distance."""
    config = LayoutConfig()
    result = LayoutEngine(config, seed=2).reposition_tree(build_tree(3, 2))

    threshold = config.effective_min_distance(config.top_level_min_distance)
    branches = [result.absolute_position_of(f"b{i}") for i in range(3)]
    for a, b in itertools.combinations(branches, 2):
        assert a.distance_to(b) >= threshold - 1e-6
    for branch in branches:
        assert branch.length >= threshold - 1e-6


# (fanout, depth) shapes inside the supported density, with the seeds tried on each
SHAPES = [(3, 2), (3, 3), (6, 2), (4, 3), (2, 4), (6, 3)]
SEEDS = [0, 1, 2]


def visible_count(fanout: int, depth: int) -> int:
    return 1 + sum(fanout**level for level in range(1, depth + 1))


def required_separation(config: LayoutConfig, *levels: int) -> float:
    """The stricter separation of two nodes; the center counts as a branch."""
    return max(config.effective_min_distance(config.search_min_distance(max(level, 1))) for level in levels)


@pytest.mark.parametrize("fanout,depth", SHAPES)
@pytest.mark.parametrize("seed", SEEDS)
def test_visible_nodes_keep_apart(fanout, depth, seed):
    """No two visible nodes are closer than the stricter of their separations."""
    config = LayoutConfig()
    result = LayoutEngine(config, seed=seed).reposition_tree(build_tree(fanout, depth))

    arena = result.arena
    visible = arena.visible_indices()
    assert len(visible) == visible_count(fanout, depth)
    for a, b in itertools.combinations(visible, 2):
        threshold = required_separation(config, arena.levels[a], arena.levels[b])
        assert distance_3d(result.absolute[a], result.absolute[b]) >= threshold - 1e-6, (arena.ids[a], arena.ids[b])

    print(f"✓ Separation test passed for {fanout}x{depth}, seed {seed}")


@pytest.mark.parametrize("fanout,depth", SHAPES)
@pytest.mark.parametrize("seed", SEEDS)
def test_visible_edges_do_not_cross(fanout, depth, seed):
    """Edges that share no endpoint do not cross in the x/y projection."""
    config = LayoutConfig()
    result = LayoutEngine(config, seed=seed).reposition_tree(build_tree(fanout, depth))

    arena = result.arena
    edges = []
    for parent_id, child_id in result.connections:
        edges.append(
            (
                result.absolute[arena.index_of(parent_id)],
                result.absolute[arena.index_of(child_id)],
                {parent_id, child_id},
            )
        )

    # Connections are in placement order; test each edge against earlier ones
    for (earlier, later) in itertools.combinations(edges, 2):
        if earlier[2] & later[2]:
            continue
        assert not segments_intersect(later[0], later[1], earlier[0], earlier[1], config.edge_buffer), (
            earlier[2],
            later[2],
        )


@pytest.mark.parametrize("fanout,depth", SHAPES)
def test_planned_slots_need_no_fallback(fanout, depth, caplog):
    """Every child lands on its planned slot without the search fallback."""
    caplog.set_level(logging.DEBUG, logger="pyradial.layout.search")
    engine = LayoutEngine(seed=0)
    tree = build_tree(fanout, depth)

    result = engine.reposition_tree(tree)

    assert "using fallback" not in caplog.text
    plan = plan_sectors(result.arena, result.arena.absolute_positions(), engine.config)
    for node_id in result.placed:
        index = result.arena.index_of(node_id)
        if result.arena.levels[index] >= 2:
            assert np.allclose(result.absolute[index], plan.slot(index))


def test_arranger_separation_matches_search():
    """Arranged children are spaced at least as widely as the search confirms them."""
    config = LayoutConfig()
    for depth in range(5):
        assert config.arranger_separation(depth) >= config.search_min_distance(depth + 2) - 1e-12


def test_collapsed_subtree_is_untouched():
    """Hidden nodes keep their stored relative positions."""
    tree = build_tree(2, 3)
    tree.branches[0].set_expanded_recursive(False)
    hidden = {node.id: node.position.as_tuple() for node in tree.branches[0].iter_subtree() if node is not tree.branches[0]}

    result = LayoutEngine(seed=3).reposition_tree(tree)

    assert "b0" in result.placed
    for node_id, position in hidden.items():
        assert node_id not in result.placed
        assert result.position_of(node_id).as_tuple() == position


def test_connections_follow_visible_edges():
    """The result reports an edge for every placed node."""
    tree = build_tree(2, 2)
    tree.branches[1].expanded = False
    result = LayoutEngine(seed=0).reposition_tree(tree)

    assert sorted(result.connections) == sorted(tree.visible_edges())
    assert len(result.placed) == len(list(tree.iter_visible())) - 1


def test_layout_is_deterministic_for_a_seed():
    """Equal seeds give equal layouts; every pass restarts the generator."""
    tree = build_tree(3, 2)
    engine = LayoutEngine(seed=11)

    first = engine.reposition_tree(tree)
    second = engine.reposition_tree(tree)
    third = LayoutEngine(seed=11).reposition_tree(tree)

    assert np.array_equal(first.relative, second.relative)
    assert np.array_equal(first.relative, third.relative)


def test_input_tree_is_not_modified():
    """Layout works on a flattened copy."""
    tree = build_sample_tree()
    tree.expand_all()
    before = {node.id: node.position.as_tuple() for node in tree.iter_nodes()}

    LayoutEngine(seed=5).layout_tree(tree)

    assert {node.id: node.position.as_tuple() for node in tree.iter_nodes()} == before


def test_layout_tree_returns_positioned_copy():
    """The returned tree carries the new positions and the old flags."""
    tree = build_sample_tree()
    engine = LayoutEngine(seed=5)
    result = engine.reposition_tree(tree)
    laid_out = result.apply(tree)

    assert laid_out is not tree
    assert laid_out.expansion_state() == tree.expansion_state()
    for node in laid_out.iter_visible():
        expected = result.absolute_position_of(node.id)
        assert laid_out.absolute_position(node.id).is_close(expected)


def test_sample_network_fully_expanded():
    """The built-in network lays out with every node placed."""
    tree = build_sample_tree()
    tree.expand_all()
    result = LayoutEngine(seed=9).reposition_tree(tree)

    assert len(result.placed) == len(tree) - 1
    assert result.bounds is not None
    assert result.bounds.radius > 0


def test_center_stays_put():
    """The center is the origin of the layout and is never moved."""
    tree = build_tree(2, 2)
    tree.center.position = Position(1.0, 2.0, 3.0)
    result = LayoutEngine(seed=0).reposition_tree(tree)

    assert result.position_of("center") == Position(1.0, 2.0, 3.0)
    assert "center" not in result.placed


def test_invalid_config_is_rejected():
    """Invalid search bounds are caught when the engine is built."""
    with pytest.raises(ValidationError):
        LayoutEngine(LayoutConfig(angle_samples=0))
    with pytest.raises(ValidationError):
        LayoutEngine(LayoutConfig(glow_buffer=-1.0))
    with pytest.raises(ValidationError):
        LayoutEngine(LayoutConfig(ring_spacing_factor=0.0))
    with pytest.raises(ValidationError):
        LayoutEngine(LayoutConfig(max_sector_half_angle=4.0))


def run_all_tests():
    """Run all engine tests."""
    print("Running Layout Engine Tests...")
    print("=" * 50)

    test_distance_grows_with_each_generation()
    test_deep_chain_strictly_increasing()
    test_branches_keep_top_level_distance()
    for fanout, depth in SHAPES:
        for seed in SEEDS:
            test_visible_nodes_keep_apart(fanout, depth, seed)
            test_visible_edges_do_not_cross(fanout, depth, seed)
    test_arranger_separation_matches_search()
    test_collapsed_subtree_is_untouched()
    test_connections_follow_visible_edges()
    test_layout_is_deterministic_for_a_seed()
    test_input_tree_is_not_modified()
    test_layout_tree_returns_positioned_copy()
    test_sample_network_fully_expanded()
    test_center_stays_put()
    test_invalid_config_is_rejected()

    print("=" * 50)
    print("All tests passed! ✓")


if __name__ == "__main__":
    run_all_tests()

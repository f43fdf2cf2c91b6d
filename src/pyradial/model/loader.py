"""Build trees from static definition data (dicts or JSON files)."""

import json
import logging
import math
from pathlib import Path
from typing import Any

from pyradial.errors import TreeDefinitionError
from pyradial.model.node import Node
from pyradial.model.position import Position
from pyradial.model.tree import Tree

logger = logging.getLogger(__name__)


def _parse_position(raw: Any, node_id: str) -> Position:
    """Accept ``{"x", "y", "z"}`` mappings or ``[x, y, z]`` sequences of finite numbers."""
    if raw is None:
        return Position()
    try:
        if isinstance(raw, dict):
            coords = (float(raw.get("x", 0.0)), float(raw.get("y", 0.0)), float(raw.get("z", 0.0)))
        elif isinstance(raw, (list, tuple)) and len(raw) == 3:
            coords = (float(raw[0]), float(raw[1]), float(raw[2]))
        else:
            raise TreeDefinitionError(f"node {node_id!r} has a malformed position: {raw!r}")
    except (TypeError, ValueError) as e:
        raise TreeDefinitionError(f"node {node_id!r} has a non-numeric position: {e}") from e
    if not all(math.isfinite(c) for c in coords):
        raise TreeDefinitionError(f"node {node_id!r} has a non-finite position: {raw!r}")
    return Position(*coords)


def _parse_strings(raw: dict[str, Any], key: str, node_id: str) -> list[str]:
    value = raw.get(key)
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise TreeDefinitionError(f"node {node_id!r} field {key!r} must be a list, got {type(value).__name__}")
    return [str(item) for item in value]


def _build_node(raw: Any, level: int, parent_id: str | None, seen: set[str]) -> Node:
    if not isinstance(raw, dict):
        raise TreeDefinitionError(f"expected a node object, got {type(raw).__name__}")

    node_id = raw.get("id")
    if not isinstance(node_id, str) or not node_id:
        raise TreeDefinitionError(f"node without a string id: {raw!r}")
    if node_id in seen:
        raise TreeDefinitionError(f"duplicate node id {node_id!r}")
    seen.add(node_id)

    node = Node(
        id=node_id,
        name=str(raw.get("name", node_id)),
        position=_parse_position(raw.get("position"), node_id),
        level=level,
        expanded=bool(raw.get("expanded", False)),
        parent_id=parent_id,
        color=str(raw.get("color", "#FFFFFF")),
        description=str(raw.get("description", "")),
        details=_parse_strings(raw, "details", node_id),
        protocols=_parse_strings(raw, "protocols", node_id),
        income=_parse_strings(raw, "income", node_id),
    )
    for child in raw.get("children") or []:
        node.children.append(_build_node(child, level + 1, node_id, seen))
    return node


def tree_from_dict(data: dict[str, Any]) -> Tree:
    """Build a tree from a ``{"center": ..., "branches": [...]}`` mapping.

    Levels and parent ids are derived from nesting; any values present
    in the data for them are ignored.

    Args:
        data: Definition mapping

    Returns:
        A new Tree

    Raises:
        TreeDefinitionError: If the data is malformed or ids repeat
    """
    if not isinstance(data, dict) or "center" not in data:
        raise TreeDefinitionError("definition must be an object with a 'center' node")

    seen: set[str] = set()
    center = _build_node(data["center"], 0, None, seen)
    # Branches listed under the center are accepted too
    raw_branches = list(data.get("branches") or [])
    center_children, center.children = center.children, []
    branches = center_children + [_build_node(raw, 1, center.id, seen) for raw in raw_branches]

    tree = Tree(center=center, branches=branches)
    logger.debug(f"Built tree with {len(tree)} nodes and {len(branches)} branches")
    return tree


def load_tree(path: Path) -> Tree:
    """Load a tree definition from a JSON file.

    Raises:
        TreeDefinitionError: If the file cannot be read or parsed
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise TreeDefinitionError(f"cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise TreeDefinitionError(f"{path} is not valid JSON: {e}") from e
    return tree_from_dict(data)


def _dump_node(node: Node) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": node.id,
        "name": node.name,
        "position": {"x": node.position.x, "y": node.position.y, "z": node.position.z},
        "expanded": node.expanded,
        "color": node.color,
    }
    if node.description:
        data["description"] = node.description
    if node.details:
        data["details"] = list(node.details)
    if node.protocols:
        data["protocols"] = list(node.protocols)
    if node.income:
        data["income"] = list(node.income)
    if node.children:
        data["children"] = [_dump_node(child) for child in node.children]
    return data


def dump_tree(tree: Tree) -> dict[str, Any]:
    """Convert a tree back into definition data accepted by ``tree_from_dict``."""
    return {
        "center": _dump_node(tree.center),
        "branches": [_dump_node(branch) for branch in tree.branches],
    }

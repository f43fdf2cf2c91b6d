"""Main entry point for pyradial."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pyradial.errors import PyradialError
from pyradial.layout.config import LayoutConfig
from pyradial.layout.engine import LayoutEngine, LayoutResult
from pyradial.model.loader import load_tree
from pyradial.model.sample import build_sample_tree
from pyradial.model.tree import Tree
from pyradial.style.materials import apply_tree_materials

logger = logging.getLogger("pyradial")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="pyradial",
        description="Radial 3D hierarchy layout - compute collision-free node positions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "definition",
        nargs="?",
        type=Path,
        default=None,
        help="JSON tree definition to lay out (default: built-in sample network)",
    )
    parser.add_argument(
        "--expand-all",
        action="store_true",
        help="Expand every node before laying out",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        metavar="N",
        help="Seed for placement jitter (default: random)",
    )
    parser.add_argument(
        "--format",
        choices=["json", "table"],
        default="table",
        help="Output format (default: table)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        metavar="FILE",
        help="Write output to FILE instead of stdout",
    )
    parser.add_argument(
        "--generation-gap",
        type=float,
        default=0.8,
        metavar="D",
        help="Minimum increase in distance from the hub per generation (default: 0.8)",
    )
    parser.add_argument(
        "--angle-samples",
        type=int,
        default=32,
        metavar="N",
        help="Angles tried per search ring (default: 32)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def result_to_dict(tree: Tree, result: LayoutResult) -> dict[str, Any]:
    """Convert a layout into JSON-serializable data."""
    nodes = []
    for node in tree.iter_visible():
        nodes.append(
            {
                "id": node.id,
                "name": node.name,
                "level": node.level,
                "expanded": node.expanded,
                "position": list(result.position_of(node.id).as_tuple()),
                "absolute": list(result.absolute_position_of(node.id).as_tuple()),
                "color": node.color,
                "glow_color": node.glow_color,
            }
        )
    data: dict[str, Any] = {
        "nodes": nodes,
        "connections": [list(pair) for pair in result.connections],
    }
    if result.bounds is not None:
        data["bounds"] = {
            "center": list(result.bounds.center.as_tuple()),
            "size": list(result.bounds.size),
            "radius": result.bounds.radius,
        }
    return data


def format_table(tree: Tree, result: LayoutResult) -> str:
    """Render a layout as an aligned text table."""
    lines = [f"{'id':<24} {'lvl':>3}  {'x':>8} {'y':>8} {'z':>8}  {'|r|':>7}"]
    for node in tree.iter_visible():
        p = result.absolute_position_of(node.id)
        name = "  " * node.level + node.id
        lines.append(f"{name:<24} {node.level:>3}  {p.x:>8.3f} {p.y:>8.3f} {p.z:>8.3f}  {p.length:>7.3f}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code
    """
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.definition:
            tree = load_tree(args.definition)
            apply_tree_materials(tree)
        else:
            tree = build_sample_tree()
        config = LayoutConfig(generation_gap=args.generation_gap, angle_samples=args.angle_samples)
        engine = LayoutEngine(config, seed=args.seed)
    except PyradialError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.expand_all:
        tree.expand_all()

    result = engine.reposition_tree(tree)
    tree = result.apply(tree)

    if args.format == "json":
        output = json.dumps(result_to_dict(tree, result), indent=2)
    else:
        output = format_table(tree, result)

    if args.output:
        args.output.write_text(output + "\n", encoding="utf-8")
        logger.info(f"Wrote layout to {args.output}")
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())

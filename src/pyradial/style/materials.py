"""Generational color and material properties for nodes.

Each top-level family has one primary color. Every generation below the
hub gets a lighter orb and a lighter glow, while the material finish
cycles polished -> satin -> matte.
"""

import colorsys
from dataclasses import dataclass

from pyradial.errors import TreeDefinitionError
from pyradial.model.node import Node
from pyradial.model.tree import Tree

# (metalness, roughness) per generation stage, starting at level 1
MATERIAL_STAGES: tuple[tuple[float, float], ...] = (
    (0.9, 0.15),  # polished metal
    (0.5, 0.4),  # satin
    (0.1, 0.75),  # matte
)

HUB_METALNESS = 0.8
HUB_ROUGHNESS = 0.2

NODE_LIGHTNESS_STEP = 8.0
NODE_LIGHTNESS_CAP = 85.0
GLOW_LIGHTNESS_STEP = 12.0
GLOW_LIGHTNESS_CAP = 90.0


@dataclass(frozen=True)
class Materials:
    """Cosmetic properties consumed by the rendering layer.

    Attributes:
        color: Orb color (hex)
        glow_color: Halo color (hex)
        metalness: Material metalness in [0, 1]
        roughness: Material roughness in [0, 1]
    """

    color: str
    glow_color: str
    metalness: float
    roughness: float


def hex_to_hsl(hex_color: str) -> tuple[float, float, float]:
    """Convert ``#RRGGBB`` to (hue degrees, saturation %, lightness %).

    Raises:
        ValueError: If the string is not a 6-digit hex color
    """
    value = hex_color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Invalid hex color: {hex_color}")
    r = int(value[0:2], 16) / 255.0
    g = int(value[2:4], 16) / 255.0
    b = int(value[4:6], 16) / 255.0
    h, l, s = colorsys.rgb_to_hls(r, g, b)
    return (h * 360.0, s * 100.0, l * 100.0)


def hsl_to_hex(h: float, s: float, l: float) -> str:
    """Convert (hue degrees, saturation %, lightness %) to ``#rrggbb``.

    Hue wraps around; saturation and lightness are clamped to [0, 100].
    """
    h = (h % 360.0) / 360.0
    s = max(0.0, min(100.0, s)) / 100.0
    l = max(0.0, min(100.0, l)) / 100.0
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    return "#" + "".join(f"{round(c * 255):02x}" for c in (r, g, b))


def materials_for(primary_color: str, level: int) -> Materials:
    """Compute the materials of a node from its family color and depth.

    Args:
        primary_color: Family primary color (hex)
        level: Node depth (0 = hub)

    Returns:
        Materials for the node
    """
    h, s, l = hex_to_hsl(primary_color)

    if level == 0:
        return Materials(
            color=primary_color,
            glow_color=hsl_to_hex(h, s, l),
            metalness=HUB_METALNESS,
            roughness=HUB_ROUGHNESS,
        )

    generation = level - 1
    metalness, roughness = MATERIAL_STAGES[generation % len(MATERIAL_STAGES)]
    return Materials(
        color=hsl_to_hex(h, s, min(l + generation * NODE_LIGHTNESS_STEP, NODE_LIGHTNESS_CAP)),
        glow_color=hsl_to_hex(h, s, min(l + generation * GLOW_LIGHTNESS_STEP, GLOW_LIGHTNESS_CAP)),
        metalness=metalness,
        roughness=roughness,
    )


def apply_materials(node: Node, primary_color: str, level: int = 0) -> None:
    """Annotate a node and its subtree with generational materials.

    Args:
        node: Subtree root to annotate
        primary_color: Family primary color (hex)
        level: Generation level of ``node``
    """
    materials = materials_for(primary_color, level)
    node.color = materials.color
    node.glow_color = materials.glow_color
    node.metalness = materials.metalness
    node.roughness = materials.roughness

    for child in node.children:
        apply_materials(child, primary_color, level + 1)


def apply_tree_materials(tree: Tree) -> None:
    """Annotate a whole tree, using each family's own color as its primary.

    The hub keeps its color at level 0 and every branch passes its color
    down to its subtree.

    Raises:
        TreeDefinitionError: If a hub or branch color is not a hex color
    """
    try:
        apply_materials(tree.center, tree.center.color, 0)
        for branch in tree.branches:
            apply_materials(branch, branch.color, 1)
    except ValueError as e:
        raise TreeDefinitionError(f"cannot derive materials: {e}") from e

"""Cosmetic annotation of nodes (colors and materials).

Independent of geometry; the layout engine never reads these values.
"""

from pyradial.style.materials import Materials, apply_materials, apply_tree_materials, materials_for

__all__ = ["Materials", "apply_materials", "apply_tree_materials", "materials_for"]

"""Model layer for pyradial.

This module contains the data models for representing the node
hierarchy and the loader for building trees from definition data.
"""

from pyradial.model.position import Position
from pyradial.model.node import Node
from pyradial.model.tree import Tree
from pyradial.model.arena import TreeArena
from pyradial.model.loader import dump_tree, load_tree, tree_from_dict

__all__ = ["Position", "Node", "Tree", "TreeArena", "dump_tree", "load_tree", "tree_from_dict"]

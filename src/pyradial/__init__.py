"""pyradial - radial 3D hierarchy layout.

Places the nodes of an expandable tree around a central hub so that
nodes keep apart, parent-child edges do not cross, and distance from
the hub grows with every generation.
"""

__version__ = "0.1.0"

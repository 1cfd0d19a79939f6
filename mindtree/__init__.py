"""Interactive tree diagrams: layout, mutation and viewport geometry."""

from .animation import Animator, Tween
from .edge import Edge, curve_points, edge_id
from .errors import TreeStructureError, Violation
from .geometry import Point, Rect, has_full_intersection, has_intersection, point_inside_rect, union
from .layout import LayoutSlot, ReingoldTilfordLayout
from .node import TreeNode
from .tree import DOWN, LEFT, RIGHT, UP, VisualTree
from .viewport import Viewport, pan_vector

__all__ = [
    "Animator",
    "DOWN",
    "Edge",
    "LEFT",
    "LayoutSlot",
    "Point",
    "RIGHT",
    "Rect",
    "ReingoldTilfordLayout",
    "TreeNode",
    "TreeStructureError",
    "Tween",
    "UP",
    "Viewport",
    "Violation",
    "VisualTree",
    "curve_points",
    "edge_id",
    "has_full_intersection",
    "has_intersection",
    "pan_vector",
    "point_inside_rect",
    "union",
]

from typing import List, Tuple

from .config import EDGE_COLOR, EDGE_SELECTION_COLOR
from .geometry import Point
from .node import TreeNode


def edge_id(start: TreeNode, end: TreeNode) -> str:
    return f"{start.id}-{end.id}"


def curve_points(start: Point, end: Point) -> List[float]:
    """Flattened start, two control points and end of an S-shaped connector.

    The first control point sits 22% along the x-span on the start's side of the
    y-span, the second 85% along on the end's side, each pulled 10% of the span
    towards the middle.
    """
    x_min = min(start.x, end.x)
    x_max = max(start.x, end.x)
    y_min = min(start.y, end.y)
    y_max = max(start.y, end.y)
    span = y_max - y_min

    descending = start.y - end.y >= 0
    sign = -1 if descending else 1
    first_base = y_max if descending else y_min
    second_base = y_min if descending else y_max

    c1 = Point(x_min + (x_max - x_min) * 0.22, first_base + span * sign * 0.1)
    c2 = Point(x_min + (x_max - x_min) * 0.85, second_base + span * sign * -0.1)
    return [start.x, start.y, c1.x, c1.y, c2.x, c2.y, end.x, end.y]


class Edge:
    def __init__(
        self,
        start: TreeNode,
        end: TreeNode,
        visible: bool = True,
        selected: bool = False,
        color: str = EDGE_COLOR,
        selection_color: str = EDGE_SELECTION_COLOR,
    ) -> None:
        self.start = start
        self.end = end
        self.visible = visible
        self.selected = selected
        self.color = color
        self.selection_color = selection_color
        self.is_new = True
        self.opacity = 1.0
        self.points: List[float] = []

    @property
    def id(self) -> str:
        return edge_id(self.start, self.end)

    @property
    def key(self) -> Tuple[str, str]:
        return self.start.id, self.end.id

    @property
    def stroke(self) -> str:
        return self.selection_color if self.selected else self.color

    @property
    def stroke_width(self) -> int:
        return 3 if self.selected else 1

    def render(self) -> List[float]:
        self.points = curve_points(self.start.tail_point(), self.end.head_point())
        return self.points

    def __repr__(self) -> str:
        return f"Edge({self.id!r}, visible={self.visible}, selected={self.selected})"

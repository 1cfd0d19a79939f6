from collections import deque
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .config import BACKGROUND_COLOR, NODE_H, NODE_W, TEXT_COLOR
from .geometry import Point, Rect


@dataclass(eq=False)
class TreeNode:
    """One box of the diagram.

    ``x``/``y`` are where the last render pass wants the node; ``draw_x``/``draw_y``
    are where it is painted right now and only differ while a tween runs.
    """

    id: str
    name: str = ""
    title: str = ""
    icon: Optional[str] = None
    text_color: str = TEXT_COLOR
    background_color: str = BACKGROUND_COLOR
    selected: bool = False
    highlighted: bool = False
    visible: bool = True
    expanded: bool = True
    is_new: bool = True
    width: float = NODE_W
    height: float = NODE_H
    body_offset: float = 0.0
    parent: Optional["TreeNode"] = field(default=None, repr=False)
    children: List["TreeNode"] = field(default_factory=list, repr=False)
    column: int = 0
    row: int = 0
    x: float = 0.0
    y: float = 0.0
    draw_x: float = 0.0
    draw_y: float = 0.0

    # ---------- Structure ----------
    def add(self, node: "TreeNode") -> None:
        self.children.append(node)

    def is_leaf(self) -> bool:
        return not self.children

    def depth(self) -> int:
        depth = 0
        current = self.parent
        while current is not None:
            depth += 1
            current = current.parent
        return depth

    def is_ancestor_of(self, node: "TreeNode") -> bool:
        current = node.parent
        while current is not None:
            if current is self:
                return True
            current = current.parent
        return False

    def walk(self) -> Iterator["TreeNode"]:
        """Pre-order walk of this subtree, without recursion."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def breadth_first(self) -> Iterator["TreeNode"]:
        queue = deque([self])
        while queue:
            node = queue.popleft()
            yield node
            queue.extend(node.children)

    def descendants(self) -> Iterator["TreeNode"]:
        walker = self.walk()
        next(walker)
        return walker

    def detach(self) -> None:
        self.parent = None
        self.children = []

    # ---------- Geometry ----------
    def resize(self, width: float, height: float, body_offset: float = 0.0) -> None:
        self.width = max(0.0, width)
        self.height = max(0.0, height)
        self.body_offset = min(max(0.0, body_offset), self.height)

    def place(self, x: float, y: float) -> None:
        self.x = x
        self.y = y
        self.draw_x = x
        self.draw_y = y

    def _body_center_y(self) -> float:
        return self.draw_y + self.body_offset + (self.height - self.body_offset) / 2

    def head_point(self) -> Point:
        return Point(self.draw_x, self._body_center_y())

    def tail_point(self) -> Point:
        return Point(self.draw_x + self.width, self._body_center_y())

    def bounds(self) -> Rect:
        return Rect(self.draw_x, self.draw_y, self.width, self.height)

"""Reingold-Tilford placement of a left-to-right tree.

Columns are tree depth; the engine only decides the vertical position of every
node. Intermediate values live in :class:`LayoutSlot` records keyed by node id,
so nodes only ever receive their ``column``.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from .config import LAYOUT_MARGIN
from .node import TreeNode

logger = logging.getLogger(__name__)


@dataclass
class LayoutSlot:
    x: float = 0.0
    y: float = 0.0
    modifier: float = 0.0
    final: float = 0.0
    prev_sibling: Optional[TreeNode] = None


def post_order(root: TreeNode) -> Iterator[TreeNode]:
    """Children left to right, each subtree finished before its parent."""
    stack = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            yield node
            continue
        stack.append((node, True))
        for child in reversed(node.children):
            stack.append((child, False))


class ReingoldTilfordLayout:
    def __init__(self, margin: float = LAYOUT_MARGIN) -> None:
        self.margin = margin
        self.slots: Dict[str, LayoutSlot] = {}

    def slot(self, node: TreeNode) -> LayoutSlot:
        return self.slots[node.id]

    def final(self, node: TreeNode) -> float:
        return self.slots[node.id].final

    def arrange(self, root: Optional[TreeNode]) -> None:
        if root is None:
            return
        self.slots = {}
        self._initialize(root)
        self._first_pass(root)
        self._second_pass(root)
        self._fix_node_conflicts(root)
        self._shift_tree_into_frame(root)
        logger.debug("Arranged %d node(s) under %s", len(self.slots), root.id)

    def _initialize(self, root: TreeNode) -> None:
        stack = [(root, 0, None)]
        while stack:
            node, level, prev_sibling = stack.pop()
            node.column = level
            self.slots[node.id] = LayoutSlot(x=level, prev_sibling=prev_sibling)
            children = node.children
            for index in range(len(children) - 1, -1, -1):
                previous = children[index - 1] if index >= 1 else None
                stack.append((children[index], level + 1, previous))

    def _first_pass(self, root: TreeNode) -> None:
        slots = self.slots
        for node in post_order(root):
            slot = slots[node.id]
            if slot.prev_sibling is not None:
                slot.y = slots[slot.prev_sibling.id].y + self.margin
            else:
                slot.y = 0.0

            if len(node.children) == 1:
                slot.modifier = slot.y
            elif len(node.children) >= 2:
                child_ys = [slots[child.id].y for child in node.children]
                slot.modifier = slot.y - (max(child_ys) - min(child_ys)) / 2

    def _second_pass(self, root: TreeNode) -> None:
        slots = self.slots
        stack = [(root, 0.0)]
        while stack:
            node, mod_sum = stack.pop()
            slot = slots[node.id]
            slot.final = slot.y + mod_sum
            for child in node.children:
                stack.append((child, slot.modifier + mod_sum))

    def _bottom_contour(self, node: TreeNode) -> float:
        return max(self.slots[n.id].final + n.height for n in node.walk())

    def _top_contour(self, node: TreeNode) -> float:
        return min(self.slots[n.id].final for n in node.walk())

    def _shift(self, node: TreeNode, distance: float) -> None:
        for n in node.walk():
            self.slots[n.id].final += distance

    def _fix_node_conflicts(self, root: TreeNode) -> None:
        slots = self.slots
        for node in post_order(root):
            children = node.children
            for left, right in zip(children, children[1:]):
                bottom = self._bottom_contour(left)
                top = self._top_contour(right)
                if bottom + self.margin > top:
                    self._shift(right, bottom - top + self.margin)
            if children:
                first = slots[children[0].id].final
                last = slots[children[-1].id].final
                slots[node.id].final = (first + last) / 2

    def _shift_tree_into_frame(self, root: TreeNode) -> None:
        min_final = min(self.slots[node.id].final for node in root.walk())
        for node in root.walk():
            self.slots[node.id].final -= min_final

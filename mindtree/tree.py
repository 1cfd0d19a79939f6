import logging
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Union

from .animation import Animator, Tween, ease_in, ease_in_out
from .config import COLUMN_MARGIN_FACTOR, ENTRY_DURATION, FADE_DURATION
from .edge import Edge, edge_id
from .errors import (
    ALREADY_ATTACHED,
    AMBIGUOUS_REMOVAL,
    BROKEN_PATH,
    DUPLICATE_ID,
    NOT_A_CHILD,
    SECOND_ROOT,
    UNKNOWN_PARENT,
    TreeStructureError,
    Violation,
)
from .geometry import Rect, union
from .layout import ReingoldTilfordLayout
from .node import TreeNode

logger = logging.getLogger(__name__)

NodeRef = Union[TreeNode, str]

LEFT = "left"
RIGHT = "right"
UP = "up"
DOWN = "down"


class VisualTree:
    """Nodes, edges and the column grid of one diagram.

    ``nodes`` and ``edges`` are indexes over the parent/children links; every
    mutation updates all three together or, when the request is invalid, none.
    """

    def __init__(
        self,
        layout: Optional[ReingoldTilfordLayout] = None,
        animator: Optional[Animator] = None,
        animation: bool = True,
    ) -> None:
        self.layout = layout if layout is not None else ReingoldTilfordLayout()
        self.animator = animator if animator is not None else Animator()
        self.animation = animation
        self.nodes: Dict[str, TreeNode] = {}
        self.edges: Dict[str, Edge] = {}
        self.root: Optional[TreeNode] = None
        self.cells: List[List[TreeNode]] = []
        self.selected_node: Optional[TreeNode] = None
        self.on_node_selected: Optional[Callable[[TreeNode], None]] = None
        self._initial_render = True

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, ref: object) -> bool:
        if isinstance(ref, (TreeNode, str)):
            return self._resolve(ref) is not None
        return False

    # ---------- Lookups ----------
    def _resolve(self, ref: Optional[NodeRef]) -> Optional[TreeNode]:
        if ref is None:
            return None
        if isinstance(ref, TreeNode):
            return ref if self.nodes.get(ref.id) is ref else None
        return self.nodes.get(ref)

    def get_node(self, node_id: str) -> Optional[TreeNode]:
        return self.nodes.get(node_id)

    def get_edge(self, start: Optional[TreeNode], end: Optional[TreeNode]) -> Optional[Edge]:
        if start is None or end is None:
            return None
        return self.edges.get(edge_id(start, end))

    def get_edge_by_ids(self, start_id: str, end_id: str) -> Optional[Edge]:
        return self.get_edge(self.nodes.get(start_id), self.nodes.get(end_id))

    def walk(self) -> Iterator[TreeNode]:
        if self.root is None:
            return iter(())
        return self.root.walk()

    def bounds(self) -> Optional[Rect]:
        return union(node.bounds() for node in self.walk() if node.visible)

    # ---------- Invariants ----------
    def check_mutation(
        self,
        action: str,
        node: TreeNode,
        parent: Optional[NodeRef] = None,
        child: Optional[NodeRef] = None,
        remove_children: bool = False,
    ) -> Optional[Violation]:
        """Return why ``action`` ("insert" or "remove") would break the tree, or None."""
        if action == "insert":
            if node.id in self.nodes:
                return Violation(DUPLICATE_ID, f'Node id "{node.id}" is already in the tree')
            if node.parent is not None or node.children:
                return Violation(ALREADY_ATTACHED, f'Node "{node.id}" is already linked to other nodes')
            if parent is None:
                if self.nodes:
                    return Violation(
                        SECOND_ROOT,
                        f'Invalid parent id, please set a valid parent for node "{node.id}" '
                        "(only one root node is allowed)",
                    )
                if child is not None:
                    return Violation(NOT_A_CHILD, f'Node "{node.id}" needs a parent to be inserted above a child')
                return None
            b_parent = self._resolve(parent)
            if b_parent is None:
                return Violation(UNKNOWN_PARENT, f'Invalid parent for node "{node.id}"')
            if child is not None:
                b_child = self._resolve(child)
                if b_child is None or b_child.parent is not b_parent:
                    return Violation(NOT_A_CHILD, f'Node "{node.id}" can only be inserted above a child of "{b_parent.id}"')
            return None
        if action == "remove":
            if not remove_children and len(node.children) > 1:
                return Violation(
                    AMBIGUOUS_REMOVAL,
                    f'Can not remove node "{node.id}" with multiple children, use "remove_children"',
                )
            return None
        raise ValueError(f"Unknown mutation {action!r}")

    # ---------- Mutation ----------
    def add(self, node: TreeNode, parent: Optional[NodeRef] = None, child: Optional[NodeRef] = None) -> TreeNode:
        violation = self.check_mutation("insert", node, parent, child)
        if violation is not None:
            raise TreeStructureError(violation)

        b_parent = self._resolve(parent)
        b_child = self._resolve(child)
        if b_parent is None:
            self.root = node
        elif b_child is None:
            b_parent.add(node)
            node.parent = b_parent
            self._index_edge(Edge(b_parent, node, visible=False))
        else:
            index = b_parent.children.index(b_child)
            b_parent.children[index] = node
            node.parent = b_parent
            node.add(b_child)
            b_child.parent = node
            self._rekey_edge(self.edges[edge_id(b_parent, b_child)], node, replay=True)
            self._index_edge(Edge(b_parent, node, visible=False))

        self.nodes[node.id] = node
        logger.debug(
            "Added %s under %s%s",
            node.id,
            b_parent.id if b_parent else "<root>",
            f" above {b_child.id}" if b_child else "",
        )
        return node

    def remove(self, node: Optional[NodeRef], remove_children: bool = False) -> bool:
        target = self._resolve(node)
        if target is None or target.parent is None:
            return False
        violation = self.check_mutation("remove", target, remove_children=remove_children)
        if violation is not None:
            raise TreeStructureError(violation)

        parent = target.parent
        if remove_children:
            doomed = list(target.breadth_first())
            parent.children.remove(target)
            for current in doomed:
                edge = self.edges.pop(edge_id(current.parent, current))
                del self.nodes[current.id]
                self._discard(current, edge)
            for current in doomed:
                current.detach()
            logger.debug("Removed %s with %d descendant(s)", target.id, len(doomed) - 1)
            return True

        index = parent.children.index(target)
        edge = self.edges.pop(edge_id(parent, target))
        if len(target.children) == 1:
            only_child = target.children[0]
            self._rekey_edge(self.edges[edge_id(target, only_child)], parent)
            parent.children[index] = only_child
            only_child.parent = parent
        else:
            del parent.children[index]
        del self.nodes[target.id]
        self._discard(target, edge)
        target.detach()
        logger.debug("Removed %s", target.id)
        return True

    def _index_edge(self, edge: Edge) -> None:
        self.edges[edge.id] = edge

    def _rekey_edge(self, edge: Edge, start: TreeNode, replay: bool = False) -> None:
        del self.edges[edge.id]
        edge.start = start
        if replay:
            edge.is_new = True
        self.edges[edge.id] = edge

    def _discard(self, node: TreeNode, edge: Optional[Edge]) -> None:
        self.animator.cancel_owner(node)
        if edge is not None:
            self.animator.cancel_owner(edge)
        if self.selected_node is node:
            self.selected_node = None
        node.selected = False

    # ---------- Render pass ----------
    def render(self, on_finish: Optional[Callable[[], None]] = None) -> None:
        root = self.root
        self.cells = []
        if root is None:
            if on_finish is not None:
                on_finish()
            return

        self.layout.arrange(root)
        order = list(root.breadth_first())

        widest: List[float] = []
        for node in order:
            if node.column >= len(widest):
                widest.append(0.0)
            widest[node.column] = max(widest[node.column], node.width)
        column_x = [0.0]
        for width in widest[:-1]:
            column_x.append(column_x[-1] + width * COLUMN_MARGIN_FACTOR)

        animate = self.animation and not self._initial_render
        # one slot held by the pass itself until every fade is scheduled
        pending = [1]

        def fade_done() -> None:
            pending[0] -= 1
            if pending[0] == 0 and on_finish is not None:
                on_finish()

        for node in order:
            x = column_x[node.column]
            y = self.layout.final(node)
            if node.column >= len(self.cells):
                self.cells.append([])
            self.cells[node.column].append(node)
            node.row = len(self.cells[node.column]) - 1

            parent = node.parent
            position_key = (node, "position")
            if parent is not None and animate and node.is_new:
                node.x, node.y = x, y
                node.draw_x, node.draw_y = parent.draw_x, parent.draw_y
                self._play_move(node, ENTRY_DURATION)
            elif self.animator.running(position_key):
                node.x, node.y = x, y
                self._play_move(node, ENTRY_DURATION)
            else:
                node.place(x, y)

            if parent is not None:
                edge = self.edges[edge_id(parent, node)]
                edge.visible = node.visible
                if animate and edge.is_new:
                    edge.opacity = 0.0
                    pending[0] += 1
                    self.animator.play(
                        (edge, "opacity"),
                        Tween(
                            edge,
                            {"opacity": 1.0},
                            FADE_DURATION,
                            ease_in,
                            on_finish=fade_done,
                            on_cancel=fade_done,
                        ),
                    )
                edge.is_new = False
            node.is_new = False

        for edge in self.edges.values():
            edge.render()

        self._initial_render = False
        fade_done()

    def _play_move(self, node: TreeNode, duration: float) -> None:
        self.animator.play(
            (node, "position"),
            Tween(
                node,
                {"draw_x": node.x, "draw_y": node.y},
                duration,
                ease_in_out,
                on_update=lambda: self._render_edges_of(node),
            ),
        )

    def _render_edges_of(self, node: TreeNode) -> None:
        edge = self.get_edge(node.parent, node)
        if edge is not None:
            edge.render()
        for child in node.children:
            edge = self.get_edge(node, child)
            if edge is not None:
                edge.render()

    # ---------- Selection ----------
    def select_node(self, ref: Optional[NodeRef]) -> Optional[TreeNode]:
        node = self._resolve(ref)
        if node is None:
            return None
        if self.selected_node is not None:
            self.selected_node.selected = False
        node.selected = True
        self.selected_node = node
        if self.on_node_selected is not None:
            self.on_node_selected(node)
        return node

    def reset_selection(self) -> None:
        for node in self.nodes.values():
            node.selected = False
        self.selected_node = None

    def select_path(self, start_id: str, end_id: str) -> bool:
        start = self.nodes.get(start_id)
        end = self.nodes.get(end_id)
        if start is None or end is None:
            return False

        marks = []
        node = end
        while node is not start:
            edge = self.get_edge(node.parent, node)
            if edge is None:
                raise TreeStructureError(
                    Violation(BROKEN_PATH, f'No direct path between "{start_id}" and "{end_id}"')
                )
            marks.append((node, edge))
            node = node.parent

        start.selected = True
        for node, edge in marks:
            node.selected = True
            edge.selected = True
        return True

    def reset_paths_selection(self) -> None:
        for edge in self.edges.values():
            edge.selected = False
            for node in (edge.start, edge.end):
                node.selected = node is self.selected_node

    # ---------- Highlight & search ----------
    def highlight_nodes(self, nodes: Iterable[TreeNode] = ()) -> None:
        for node in nodes:
            node.highlighted = True

    def reset_highlight(self) -> None:
        for node in self.nodes.values():
            node.highlighted = False

    def search(self, term: str) -> List[TreeNode]:
        if not term:
            self.reset_highlight()
            return []
        needle = term.casefold()
        matches = []
        for node in self.walk():
            node.highlighted = needle in node.name.casefold()
            if node.highlighted:
                matches.append(node)
        return matches

    # ---------- Collapse ----------
    def toggle_node_children(self, parent: TreeNode) -> bool:
        """Hide or show every descendant of ``parent``; returns the new expanded state."""
        expanded = parent.expanded
        for node in parent.descendants():
            edge = self.get_edge(node.parent, node)
            if not expanded:
                node.expanded = True
            node.visible = not expanded
            if edge is not None:
                edge.visible = not expanded
        parent.expanded = not expanded
        return parent.expanded

    # ---------- Keyboard navigation ----------
    def navigate(self, direction: str) -> Optional[TreeNode]:
        node = self.selected_node
        cells = self.cells
        if node is None or not cells:
            return None
        column, row = node.column, node.row
        if column >= len(cells) or row >= len(cells[column]) or cells[column][row] is not node:
            return None

        if direction == LEFT:
            if column > 0:
                if node.parent is not None:
                    row = node.parent.row
                column -= 1
        elif direction == RIGHT:
            if column < len(cells) - 1 and node.children:
                row = node.children[(len(node.children) - 1) // 2].row
                column += 1
        elif direction == UP:
            if row > 0:
                row -= 1
        elif direction == DOWN:
            if row < len(cells[column]) - 1:
                row += 1
        else:
            raise ValueError(f"Unknown direction {direction!r}")

        return self.select_node(cells[column][row])

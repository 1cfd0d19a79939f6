import argparse
import logging
import random
import tkinter as tk
import tkinter.font as tkfont
from tkinter import messagebox, simpledialog
from typing import Any, Dict, List, Optional, Tuple

from .config import (
    BG,
    BUTTON_SIZE,
    DEFAULT_STATUS,
    FONT,
    FRAME_MS,
    HIGHLIGHT_COLOR,
    HOVER_REACH,
    ICON_SIZE,
    NODE_MARGIN,
    NODE_OUTLINE,
    NODE_PADDING,
    PALETTE_COLORS,
    PAN_STEP,
    SEL_OUTLINE,
    TITLE_FONT,
)
from .edge import Edge
from .errors import TreeStructureError
from .geometry import Point, Rect, point_inside_rect
from .node import TreeNode
from .tree import DOWN, LEFT, RIGHT, UP, VisualTree
from .viewport import Viewport

logger = logging.getLogger(__name__)

ARROWS = {"Left": LEFT, "Right": RIGHT, "Up": UP, "Down": DOWN}
DEMO_WORDS = (
    "The quick brown fox jumps over a lazy dog while the river keeps running "
    "past old stone bridges and quiet gardens"
).split()


def _lerp_color(widget: tk.Misc, c1: str, c2: str, t: float) -> str:
    r1, g1, b1 = (v // 256 for v in widget.winfo_rgb(c1))
    r2, g2, b2 = (v // 256 for v in widget.winfo_rgb(c2))
    t = max(0.0, min(1.0, t))
    return "#{:02x}{:02x}{:02x}".format(
        int(r1 + (r2 - r1) * t),
        int(g1 + (g2 - g1) * t),
        int(b1 + (b2 - b1) * t),
    )


class TreeViewApp:
    def __init__(self, root: tk.Tk, animation: bool = True, keyboard_navigation: bool = True) -> None:
        self.root = root
        root.title("Mind Tree")

        self.tree = VisualTree(animation=animation)
        self.view = Viewport(900, 600, animator=self.tree.animator, animation=animation)
        self.keyboard_navigation = keyboard_navigation
        self.tree.on_node_selected = self._on_node_selected

        self.item_to_node: Dict[int, str] = {}
        self.dragging: Dict[str, Any] = {"mode": None}
        self._hover_node: Optional[TreeNode] = None
        self._next_id = 0
        self._dirty = True

        self._build_ui()
        self._font = tkfont.Font(root, font=FONT)
        self._title_font = tkfont.Font(root, font=TITLE_FONT)
        self._tick()

    # ---------- UI ----------
    def _build_ui(self) -> None:
        menubar = tk.Menu(self.root)

        tree_menu = tk.Menu(menubar, tearoff=False)
        tree_menu.add_command(label="New Root", command=self.new_root)
        tree_menu.add_command(label="Add Child", command=self.add_child, accelerator="A")
        tree_menu.add_command(label="Insert Above", command=self.insert_above, accelerator="I")
        tree_menu.add_command(label="Rename", command=self.rename_selected, accelerator="Enter")
        tree_menu.add_separator()
        tree_menu.add_command(label="Remove Node", command=self.remove_selected, accelerator="Del")
        tree_menu.add_command(
            label="Remove With Children",
            command=lambda: self.remove_selected(remove_children=True),
            accelerator="Shift+Del",
        )
        tree_menu.add_separator()
        tree_menu.add_command(label="Collapse / Expand", command=self.toggle_selected, accelerator="Space")
        menubar.add_cascade(label="Tree", menu=tree_menu)

        select_menu = tk.Menu(menubar, tearoff=False)
        select_menu.add_command(label="Path From Root", command=self.select_path_to_selected, accelerator="P")
        select_menu.add_command(label="Search...", command=self.search, accelerator="Ctrl+F")
        select_menu.add_separator()
        select_menu.add_command(label="Reset Paths", command=self.reset_paths)
        select_menu.add_command(label="Reset Selection", command=self.reset_selection)
        select_menu.add_command(label="Reset Highlight", command=self.reset_highlight)
        menubar.add_cascade(label="Select", menu=select_menu)

        view_menu = tk.Menu(menubar, tearoff=False)
        view_menu.add_command(label="Zoom In", command=self.zoom_in, accelerator="+")
        view_menu.add_command(label="Zoom Out", command=self.zoom_out, accelerator="-")
        view_menu.add_command(label="Fit", command=self.zoom_fit, accelerator="F")
        view_menu.add_command(label="Reset Zoom", command=self.zoom_reset, accelerator="0")
        view_menu.add_separator()
        view_menu.add_command(label="Full Screen", command=self.toggle_full_screen, accelerator="F11")
        menubar.add_cascade(label="View", menu=view_menu)

        self.root.config(menu=menubar)
        self.root.bind("<Key-a>", lambda _: self.add_child())
        self.root.bind("<Key-i>", lambda _: self.insert_above())
        self.root.bind("<Key-p>", lambda _: self.select_path_to_selected())
        self.root.bind("<Key-f>", lambda _: self.zoom_fit())
        self.root.bind("<Key-0>", lambda _: self.zoom_reset())
        self.root.bind("<plus>", lambda _: self.zoom_in())
        self.root.bind("<equal>", lambda _: self.zoom_in())
        self.root.bind("<minus>", lambda _: self.zoom_out())
        self.root.bind("<space>", lambda _: self.toggle_selected())
        self.root.bind("<Return>", lambda _: self.rename_selected())
        self.root.bind("<Delete>", lambda _: self.remove_selected())
        self.root.bind("<Shift-Delete>", lambda _: self.remove_selected(remove_children=True))
        self.root.bind("<Control-f>", lambda _: self.search())
        self.root.bind("<F11>", lambda _: self.toggle_full_screen())
        self.root.bind("<Escape>", lambda _: self.reset_selection())
        for keysym in ARROWS:
            self.root.bind(f"<{keysym}>", self._on_arrow)

        self.canvas = tk.Canvas(self.root, bg=BG, highlightthickness=0)
        self.canvas.pack(fill=tk.BOTH, expand=True)
        self.canvas.bind("<Configure>", self._on_resize)
        self.canvas.bind("<Button-1>", self.on_click)
        self.canvas.bind("<B1-Motion>", self.on_drag)
        self.canvas.bind("<ButtonRelease-1>", self.on_release)
        self.canvas.bind("<Motion>", self.on_motion)
        self.canvas.bind("<MouseWheel>", self._on_wheel)
        self.canvas.bind("<Button-4>", lambda e: self._on_wheel(e, -120))
        self.canvas.bind("<Button-5>", lambda e: self._on_wheel(e, 120))

        self.status_var = tk.StringVar(value=DEFAULT_STATUS)
        self.status_label = tk.Label(self.root, textvariable=self.status_var, anchor="w", bg="white")
        self.status_label.pack(fill=tk.X, side=tk.BOTTOM)

    def _set_status(self, message: str) -> None:
        self.status_var.set(message)

    def _on_resize(self, event: tk.Event) -> None:
        self.view.resize(event.width, event.height)
        self._dirty = True

    # ---------- Node helpers ----------
    def _new_id(self) -> str:
        self._next_id += 1
        return str(self._next_id)

    def _measure(self, node: TreeNode) -> None:
        line = self._font.metrics("linespace")
        text_w = self._font.measure(node.name or " ")
        icon_w = ICON_SIZE + NODE_MARGIN / 2 if node.icon else 0
        body_w = (icon_w + text_w + NODE_PADDING * 2 + NODE_MARGIN * 2) * 1.1
        body_h = max(line, ICON_SIZE if node.icon else 0) + NODE_PADDING * 2
        title_h = 0.0
        if node.title:
            lines = node.title.count("\n") + 1
            title_h = self._title_font.metrics("linespace") * lines + NODE_MARGIN
            body_w = max(body_w, max(self._title_font.measure(part) for part in node.title.split("\n")))
        node.resize(body_w, body_h + title_h, body_offset=title_h)

    def _create(self, name: str, parent: Optional[TreeNode] = None, child: Optional[TreeNode] = None) -> Optional[TreeNode]:
        depth = parent.depth() + 1 if parent is not None else 0
        node = TreeNode(self._new_id(), name=name, background_color=PALETTE_COLORS[depth % len(PALETTE_COLORS)])
        self._measure(node)
        try:
            self.tree.add(node, parent, child)
        except TreeStructureError as exc:
            logger.warning("Insert rejected: %s", exc)
            messagebox.showerror("Insert", str(exc))
            return None
        return node

    def refresh(self) -> None:
        self.tree.render()
        self._dirty = True

    def new_root(self) -> None:
        if len(self.tree):
            self._set_status("The tree already has a root.")
            return
        node = self._create("Root")
        if node is None:
            return
        self.refresh()
        self.tree.select_node(node)
        self.zoom_fit()
        self._set_status("Root created.")

    def add_child(self, parent: Optional[TreeNode] = None) -> None:
        if not len(self.tree):
            self.new_root()
            return
        parent = parent or self.tree.selected_node
        if parent is None:
            self._set_status("Select a node first, then press A or use Tree > Add Child.")
            return
        node = self._create("New Node", parent)
        if node is None:
            return
        self.refresh()
        self.tree.select_node(node)
        self._set_status("Child node added.")

    def insert_above(self) -> None:
        child = self.tree.selected_node
        if child is None or child.parent is None:
            self._set_status("Select a non-root node to insert above it.")
            return
        node = self._create("New Node", child.parent, child)
        if node is None:
            return
        self.refresh()
        self.tree.select_node(node)
        self._set_status("Node inserted.")

    def remove_selected(self, remove_children: bool = False) -> None:
        node = self.tree.selected_node
        if node is None:
            self._set_status("Nothing selected to remove.")
            return
        if node.parent is None:
            self._set_status("The root can not be removed.")
            return
        count = sum(1 for _ in node.walk())
        if remove_children and count > 1:
            if not messagebox.askyesno("Remove", f"Remove this node and its {count - 1} descendant(s)?"):
                return
        try:
            self.tree.remove(node, remove_children)
        except TreeStructureError as exc:
            logger.warning("Remove rejected: %s", exc)
            messagebox.showerror("Remove", str(exc))
            return
        self.refresh()
        self._set_status("Node removed.")

    def rename_selected(self) -> None:
        node = self.tree.selected_node
        if node is None:
            self._set_status("Select a node to rename.")
            return
        name = simpledialog.askstring("Rename", "Name:", initialvalue=node.name, parent=self.root)
        if name is None:
            return
        title = simpledialog.askstring("Rename", "Title (optional):", initialvalue=node.title, parent=self.root)
        node.name = name
        node.title = title or ""
        self._measure(node)
        self.refresh()

    def toggle_selected(self) -> None:
        node = self._hover_node or self.tree.selected_node
        if node is None or node.is_leaf():
            return
        expanded = self.tree.toggle_node_children(node)
        self._dirty = True
        self._set_status("Expanded." if expanded else "Collapsed.")

    # ---------- Selection ----------
    def _on_node_selected(self, node: TreeNode) -> None:
        logger.debug("Selected %s", node.id)
        self._dirty = True

    def select_path_to_selected(self) -> None:
        node = self.tree.selected_node
        root = self.tree.root
        if node is None or root is None:
            return
        try:
            self.tree.select_path(root.id, node.id)
        except TreeStructureError as exc:
            messagebox.showerror("Select path", str(exc))
            return
        self._dirty = True

    def reset_paths(self) -> None:
        self.tree.reset_paths_selection()
        self._dirty = True

    def reset_selection(self) -> None:
        self.tree.reset_selection()
        self._dirty = True

    def reset_highlight(self) -> None:
        self.tree.reset_highlight()
        self._dirty = True

    def search(self) -> None:
        term = simpledialog.askstring("Search", "Find nodes named:", parent=self.root)
        if term is None:
            return
        matches = self.tree.search(term)
        self._dirty = True
        self._set_status(f"{len(matches)} match(es)." if term else "Highlight cleared.")

    # ---------- View ----------
    def zoom_in(self) -> None:
        self.view.zoom_in()
        self._dirty = True

    def zoom_out(self) -> None:
        self.view.zoom_out()
        self._dirty = True

    def zoom_fit(self) -> None:
        self.view.fit(self.tree.bounds())

    def zoom_reset(self) -> None:
        self.view.zoom_reset(self.tree.bounds())

    def pan_to_node(self, node: TreeNode) -> None:
        self.view.pan_into_view(self.view.to_screen_rect(node.bounds()))

    def toggle_full_screen(self) -> None:
        current = bool(int(self.root.attributes("-fullscreen")))
        self.root.attributes("-fullscreen", not current)

    # ---------- Drawing ----------
    def _tick(self) -> None:
        running = self.tree.animator.tick()
        if running or self._dirty:
            self.redraw()
        self.root.after(FRAME_MS, self._tick)

    def redraw(self) -> None:
        self._dirty = False
        self.canvas.delete("all")
        self.item_to_node.clear()
        for edge in self.tree.edges.values():
            if edge.visible and edge.end.visible and len(edge.points) == 8:
                self._draw_edge(edge)
        for node in self.tree.walk():
            if node.visible:
                self._draw_node(node)
        self._draw_hover_buttons()

    def _draw_edge(self, edge: Edge) -> None:
        flat: List[float] = []
        for i in range(0, 8, 2):
            point = self.view.to_screen(Point(edge.points[i], edge.points[i + 1]))
            flat.extend(point)
        self.canvas.create_line(
            *flat,
            fill=_lerp_color(self.canvas, BG, edge.stroke, edge.opacity),
            width=max(1.0, edge.stroke_width * self.view.scale),
            smooth=True,
            splinesteps=32,
            tags="edge",
        )

    def _draw_node(self, node: TreeNode) -> None:
        scale = self.view.scale
        x0, y0, x1, y1 = self.view.to_screen_rect(node.bounds()).corners()
        body_top = y0 + node.body_offset * scale
        fill = HIGHLIGHT_COLOR if node.highlighted else node.background_color
        outline, width = (SEL_OUTLINE, 3) if node.selected else (NODE_OUTLINE, 2)
        items = [
            self.canvas.create_oval(x0, body_top, x1, y1, fill=fill, outline=outline, width=width, tags="node"),
            self.canvas.create_text(
                (x0 + x1) / 2,
                (body_top + y1) / 2,
                text=node.name,
                fill=node.text_color,
                font=(FONT[0], max(1, int(FONT[1] * scale))),
                tags="node",
            ),
        ]
        if node.title:
            items.append(
                self.canvas.create_text(
                    (x0 + x1) / 2,
                    (y0 + body_top) / 2,
                    text=node.title,
                    fill="gray",
                    justify=tk.CENTER,
                    font=(TITLE_FONT[0], max(1, int(TITLE_FONT[1] * scale)), TITLE_FONT[2]),
                    tags="node",
                )
            )
        for item in items:
            self.item_to_node[item] = node.id

    def _button_rects(self, node: TreeNode) -> Tuple[Rect, Optional[Rect]]:
        tail = self.view.to_screen(node.tail_point())
        half = BUTTON_SIZE / 2
        add = Rect(tail.x, tail.y - half, BUTTON_SIZE, BUTTON_SIZE)
        toggle = None
        if not node.is_leaf():
            toggle = Rect(add.right + 2, add.y, BUTTON_SIZE, BUTTON_SIZE)
        return add, toggle

    def _draw_hover_buttons(self) -> None:
        node = self._hover_node
        if node is None or not node.visible or node not in self.tree:
            return
        add, toggle = self._button_rects(node)
        self.canvas.create_oval(*add.corners(), fill="#d5d5d5", outline="", tags="button")
        self.canvas.create_text(*add.center, text="+", tags="button")
        if toggle is not None:
            self.canvas.create_oval(*toggle.corners(), fill="#d5d5d5", outline="", tags="button")
            self.canvas.create_text(*toggle.center, text="+" if not node.expanded else "-", tags="button")

    # ---------- Event handlers ----------
    def _node_at(self, x: float, y: float) -> Optional[TreeNode]:
        for item in reversed(self.canvas.find_overlapping(x, y, x, y)):
            nid = self.item_to_node.get(item)
            if nid is not None:
                return self.tree.get_node(nid)
        return None

    def _hover_button_at(self, point: Point) -> Optional[str]:
        node = self._hover_node
        if node is None or node not in self.tree:
            return None
        add, toggle = self._button_rects(node)
        if point_inside_rect(point, add):
            return "add"
        if toggle is not None and point_inside_rect(point, toggle):
            return "toggle"
        return None

    def on_motion(self, event: tk.Event) -> None:
        pointer = Point(event.x, event.y)
        node = self._node_at(event.x, event.y)
        if node is None and self._hover_node is not None and self._hover_node in self.tree:
            hit = self.view.to_screen_rect(self._hover_node.bounds())
            hit = Rect(hit.x, hit.y, hit.width + HOVER_REACH * self.view.scale, hit.height)
            if point_inside_rect(pointer, hit):
                node = self._hover_node
        if node is not self._hover_node:
            self._hover_node = node
            self._dirty = True

    def on_click(self, event: tk.Event) -> None:
        button = self._hover_button_at(Point(event.x, event.y))
        if button == "add":
            self.add_child(self._hover_node)
            return
        if button == "toggle":
            self.toggle_selected()
            return
        node = self._node_at(event.x, event.y)
        if node is not None:
            self.tree.select_node(node)
            return
        self.dragging = {
            "mode": "pan",
            "start_x": event.x,
            "start_y": event.y,
            "offset_x": self.view.x,
            "offset_y": self.view.y,
        }

    def on_drag(self, event: tk.Event) -> None:
        if self.dragging.get("mode") != "pan":
            return
        dx = self.dragging["offset_x"] + (event.x - self.dragging["start_x"]) - self.view.x
        dy = self.dragging["offset_y"] + (event.y - self.dragging["start_y"]) - self.view.y
        self.view.pan_by(dx, dy)
        self.canvas.config(cursor="fleur")
        self._dirty = True

    def on_release(self, event: tk.Event) -> None:
        if self.dragging.get("mode") == "pan":
            self.canvas.config(cursor="")
        self.dragging = {"mode": None}

    def _on_wheel(self, event: tk.Event, delta: Optional[int] = None) -> None:
        delta_y = -event.delta if delta is None else delta
        self.view.wheel(delta_y, Point(event.x, event.y))
        self._dirty = True

    def _on_arrow(self, event: tk.Event) -> str:
        direction = ARROWS[event.keysym]
        if self.keyboard_navigation and self.tree.selected_node is not None:
            node = self.tree.navigate(direction)
            if node is not None:
                self.pan_to_node(node)
        else:
            dx = {LEFT: PAN_STEP, RIGHT: -PAN_STEP}.get(direction, 0)
            dy = {UP: PAN_STEP, DOWN: -PAN_STEP}.get(direction, 0)
            self.view.pan_by(dx, dy)
        self._dirty = True
        return "break"

    # ---------- Demo ----------
    def build_demo(self, count: int, seed: Optional[int] = None) -> None:
        rng = random.Random(seed)
        root = self._create("Home")
        if root is None:
            return
        recent = [root]
        for _ in range(count):
            parent = rng.choice(recent)
            node = self._create(f"Node {rng.randint(1, 999)}", parent)
            if node is None:
                continue
            if rng.random() < 0.3:
                node.title = " ".join(DEMO_WORDS[: rng.randint(2, 6)])
                self._measure(node)
            recent.append(node)
        self.refresh()
        self.tree.select_node(root)
        self.root.after_idle(self.zoom_fit)


def main() -> None:
    parser = argparse.ArgumentParser(description="Interactive tree diagram.")
    parser.add_argument("--demo", type=int, default=16, help="number of random nodes to start with (0 for none)")
    parser.add_argument("--seed", type=int, default=None, help="seed for the demo tree")
    parser.add_argument("--no-animation", action="store_true", help="apply layout and view changes instantly")
    parser.add_argument("--no-keyboard", action="store_true", help="arrow keys pan instead of moving the selection")
    parser.add_argument("--debug", action="store_true", help="log tree mutations")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    root = tk.Tk()
    app = TreeViewApp(root, animation=not args.no_animation, keyboard_navigation=not args.no_keyboard)
    if args.demo > 0:
        app.build_demo(args.demo, args.seed)
    root.minsize(900, 600)
    root.mainloop()


if __name__ == "__main__":
    main()

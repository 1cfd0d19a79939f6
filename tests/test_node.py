import unittest

from mindtree.geometry import Point, Rect
from mindtree.node import TreeNode


def link(parent: TreeNode, *children: TreeNode) -> None:
    for child in children:
        parent.add(child)
        child.parent = parent


class StructureTests(unittest.TestCase):
    def setUp(self) -> None:
        self.root = TreeNode("root")
        self.a, self.b = TreeNode("a"), TreeNode("b")
        self.a1, self.a2 = TreeNode("a1"), TreeNode("a2")
        link(self.root, self.a, self.b)
        link(self.a, self.a1, self.a2)

    def test_leaves_and_depth(self) -> None:
        self.assertFalse(self.root.is_leaf())
        self.assertTrue(self.b.is_leaf())
        self.assertEqual([n.depth() for n in (self.root, self.a, self.a2)], [0, 1, 2])

    def test_ancestry(self) -> None:
        self.assertTrue(self.root.is_ancestor_of(self.a2))
        self.assertTrue(self.a.is_ancestor_of(self.a1))
        self.assertFalse(self.b.is_ancestor_of(self.a1))
        self.assertFalse(self.a1.is_ancestor_of(self.a))
        self.assertFalse(self.a.is_ancestor_of(self.a))

    def test_walk_orders(self) -> None:
        self.assertEqual([n.id for n in self.root.walk()], ["root", "a", "a1", "a2", "b"])
        self.assertEqual([n.id for n in self.root.breadth_first()], ["root", "a", "b", "a1", "a2"])
        self.assertEqual([n.id for n in self.a.descendants()], ["a1", "a2"])

    def test_walk_restarts_on_every_call(self) -> None:
        self.assertEqual(list(self.root.walk()), list(self.root.walk()))

    def test_detach_drops_both_links(self) -> None:
        self.a.detach()
        self.assertIsNone(self.a.parent)
        self.assertEqual(self.a.children, [])


class GeometryTests(unittest.TestCase):
    def test_resize_clamps_body_offset(self) -> None:
        node = TreeNode("n")
        node.resize(-5, 30, body_offset=50)
        self.assertEqual((node.width, node.height, node.body_offset), (0.0, 30, 30))

    def test_anchors_follow_the_drawn_body(self) -> None:
        node = TreeNode("n", width=100, height=60, body_offset=20)
        node.place(10, 0)
        node.draw_x, node.draw_y = 40, 10

        self.assertEqual(node.head_point(), Point(40, 50))
        self.assertEqual(node.tail_point(), Point(140, 50))
        self.assertEqual(node.bounds(), Rect(40, 10, 100, 60))
        self.assertEqual((node.x, node.y), (10, 0))


if __name__ == "__main__":
    unittest.main()

"""Rectangle and point predicates used for hit-testing and view fitting."""

import unittest

from mindtree.geometry import (
    Point,
    Rect,
    has_full_intersection,
    has_intersection,
    point_inside_rect,
    union,
)


class IntersectionTests(unittest.TestCase):
    def test_overlapping_rects_intersect(self) -> None:
        self.assertTrue(has_intersection(Rect(0, 0, 10, 10), Rect(5, 5, 10, 10)))

    def test_touching_rects_intersect(self) -> None:
        self.assertTrue(has_intersection(Rect(0, 0, 10, 10), Rect(10, 0, 5, 5)))

    def test_disjoint_rects_do_not_intersect(self) -> None:
        self.assertFalse(has_intersection(Rect(0, 0, 10, 10), Rect(11, 0, 5, 5)))
        self.assertFalse(has_intersection(Rect(0, 0, 10, 10), Rect(0, -6, 5, 5)))

    def test_full_intersection_is_inclusive(self) -> None:
        outer = Rect(0, 0, 100, 50)
        self.assertTrue(has_full_intersection(outer, Rect(0, 0, 100, 50)))
        self.assertTrue(has_full_intersection(outer, Rect(10, 10, 20, 20)))
        self.assertFalse(has_full_intersection(outer, Rect(90, 10, 20, 20)))
        self.assertFalse(has_full_intersection(outer, Rect(-1, 10, 20, 20)))


class PointInsideRectTests(unittest.TestCase):
    def test_border_points_are_outside(self) -> None:
        rect = Rect(0, 0, 10, 10)
        self.assertTrue(point_inside_rect(Point(5, 5), rect))
        self.assertFalse(point_inside_rect(Point(0, 5), rect))
        self.assertFalse(point_inside_rect(Point(5, 10), rect))
        self.assertFalse(point_inside_rect(Point(11, 5), rect))

    def test_point_inside_contained_rect_is_inside_container(self) -> None:
        outer = Rect(-20, -20, 200, 120)
        inner_rects = [Rect(0, 0, 10, 10), Rect(-20, -20, 200, 120), Rect(150, 80, 30, 20)]
        for inner in inner_rects:
            self.assertTrue(has_full_intersection(outer, inner))
            center = inner.center
            self.assertTrue(point_inside_rect(center, inner))
            self.assertTrue(point_inside_rect(center, outer))


class RectHelperTests(unittest.TestCase):
    def test_union_covers_all_rects(self) -> None:
        self.assertEqual(union([Rect(0, 0, 10, 10), Rect(20, -5, 5, 5)]), Rect(0, -5, 25, 15))

    def test_union_of_nothing_is_none(self) -> None:
        self.assertIsNone(union([]))

    def test_inflate_grows_every_side(self) -> None:
        self.assertEqual(Rect(10, 10, 20, 20).inflate(4, 2), Rect(6, 8, 28, 24))
        self.assertEqual(Rect(1, 2, 3, 4).corners(), (1, 2, 4, 6))


if __name__ == "__main__":
    unittest.main()

import unittest

from mindtree.animation import Animator
from mindtree.config import FIT_DURATION, PAN_DURATION
from mindtree.geometry import Point, Rect
from mindtree.tree import VisualTree
from mindtree.viewport import VIEW_KEY, Viewport, pan_vector


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class ZoomTests(unittest.TestCase):
    def setUp(self) -> None:
        self.view = Viewport(800, 600, animation=False)

    def test_anchor_point_stays_under_the_cursor(self) -> None:
        self.view.x, self.view.y = 10.0, 20.0
        anchor = Point(100.0, 100.0)
        world = self.view.to_world(anchor)

        self.assertTrue(self.view.scale_about_point(2.0, anchor))

        self.assertEqual(self.view.scale, 2.0)
        screen = self.view.to_screen(world)
        self.assertAlmostEqual(screen.x, anchor.x)
        self.assertAlmostEqual(screen.y, anchor.y)

    def test_default_anchor_is_the_centre(self) -> None:
        self.view.scale_about_point(2.0)
        self.assertEqual((self.view.x, self.view.y), (-400.0, -300.0))

    def test_values_outside_the_open_range_are_rejected(self) -> None:
        for value in (0.0, -1.0, 10.0, 12.0):
            self.assertFalse(self.view.scale_about_point(value))
        self.assertEqual(self.view.scale, 1.0)
        self.assertEqual((self.view.x, self.view.y), (0.0, 0.0))

    def test_zoom_steps(self) -> None:
        self.view.zoom_in()
        self.assertAlmostEqual(self.view.scale, 1.1)
        self.view.zoom_out()
        self.assertAlmostEqual(self.view.scale, 0.99)

    def test_wheel_direction_follows_inversion(self) -> None:
        self.view.wheel(1, Point(0, 0))
        self.assertAlmostEqual(self.view.scale, 0.9)

        plain = Viewport(800, 600, animation=False, wheel_inverted=False)
        plain.wheel(1, Point(0, 0))
        self.assertAlmostEqual(plain.scale, 1.1)
        plain.wheel(-1, Point(0, 0))
        self.assertAlmostEqual(plain.scale, 0.99)

    def test_screen_and_world_conversions(self) -> None:
        self.view.scale = 2.0
        self.view.x = 10.0
        self.assertEqual(self.view.to_screen_rect(Rect(1, 2, 3, 4)), Rect(12.0, 4.0, 6.0, 8.0))
        self.assertEqual(self.view.to_world(Point(12.0, 4.0)), Point(1.0, 2.0))


class FitTests(unittest.TestCase):
    def setUp(self) -> None:
        self.view = Viewport(800, 600, animation=False)

    def test_small_content_is_centred_at_current_scale(self) -> None:
        self.assertTrue(self.view.fit(Rect(0, 0, 200, 100)))
        self.assertEqual((self.view.scale, self.view.x, self.view.y), (1.0, 300.0, 250.0))

    def test_offset_bounds_are_centred(self) -> None:
        self.view.fit(Rect(50, 50, 200, 100))
        self.assertEqual((self.view.x, self.view.y), (250.0, 200.0))

    def test_large_content_shrinks_to_fit_with_padding(self) -> None:
        bounds = Rect(0, 0, 1600, 600)

        self.view.fit(bounds)

        expected = min(800 / 1608, 600 / 608)
        self.assertAlmostEqual(self.view.scale, expected)
        self.assertAlmostEqual(self.view.x, (800 - 1600 * expected) / 2)
        self.assertAlmostEqual(self.view.y, (600 - 600 * expected) / 2)

    def test_explicit_scale_wins(self) -> None:
        self.view.fit(Rect(0, 0, 200, 100), 2.0)
        self.assertEqual((self.view.scale, self.view.x, self.view.y), (2.0, 200.0, 200.0))

        self.view.zoom_reset(Rect(0, 0, 1600, 600))
        self.assertEqual(self.view.scale, 1.0)

    def test_scale_is_clamped_to_the_maximum(self) -> None:
        self.view.fit(Rect(0, 0, 10, 10), 20.0)
        self.assertEqual(self.view.scale, self.view.scale_max)

    def test_nothing_to_fit(self) -> None:
        self.assertFalse(self.view.fit(None))
        self.assertEqual(self.view.scale, 1.0)

    def test_animated_fit_runs_on_the_animator(self) -> None:
        clock = FakeClock()
        view = Viewport(800, 600, animator=Animator(clock=clock))

        view.fit(Rect(0, 0, 200, 100))

        self.assertTrue(view.animator.running(VIEW_KEY))
        self.assertEqual(view.x, 0.0)
        clock.now += FIT_DURATION
        self.assertFalse(view.animator.tick())
        self.assertEqual((view.x, view.y), (300.0, 250.0))

    def test_fit_runs_on_an_animator_shared_with_the_tree(self) -> None:
        clock = FakeClock()
        tree = VisualTree(animator=Animator(clock=clock))
        view = Viewport(800, 600, animator=tree.animator)

        self.assertIs(view.animator, tree.animator)
        view.fit(Rect(0, 0, 200, 100))
        clock.now += FIT_DURATION
        self.assertFalse(tree.animator.tick())

        self.assertEqual((view.x, view.y), (300.0, 250.0))

    def test_pan_into_view_animates_on_the_shared_animator(self) -> None:
        clock = FakeClock()
        tree = VisualTree(animator=Animator(clock=clock))
        view = Viewport(100, 100, animator=tree.animator)

        view.pan_into_view(Rect(90, 10, 20, 20))
        self.assertEqual(view.x, 0.0)
        clock.now += PAN_DURATION
        tree.animator.tick()

        self.assertEqual((view.x, view.y), (-10.0, 0.0))

    def test_manual_pan_cancels_a_running_fit(self) -> None:
        clock = FakeClock()
        view = Viewport(800, 600, animator=Animator(clock=clock))
        view.fit(Rect(0, 0, 200, 100))

        view.pan_by(10, 5)

        self.assertFalse(view.animator.running(VIEW_KEY))
        self.assertEqual((view.x, view.y), (10.0, 5.0))


class PanVectorTests(unittest.TestCase):
    viewport = Rect(0, 0, 100, 100)

    def test_inside_needs_no_shift(self) -> None:
        self.assertEqual(pan_vector(self.viewport, Rect(10, 10, 20, 20)), Point(0.0, 0.0))
        self.assertEqual(pan_vector(self.viewport, Rect(0, 0, 100, 100)), Point(0.0, 0.0))

    def test_each_side(self) -> None:
        self.assertEqual(pan_vector(self.viewport, Rect(-10, 10, 20, 20)), Point(10, 0.0))
        self.assertEqual(pan_vector(self.viewport, Rect(10, -5, 20, 20)), Point(0.0, 5))
        self.assertEqual(pan_vector(self.viewport, Rect(90, 10, 20, 20)), Point(-10, 0.0))
        self.assertEqual(pan_vector(self.viewport, Rect(10, 95, 20, 20)), Point(0.0, -15))

    def test_far_edge_wins_when_both_sides_overflow(self) -> None:
        self.assertEqual(pan_vector(self.viewport, Rect(-10, -10, 200, 200)), Point(-90, -90))

    def test_viewport_with_offset_origin(self) -> None:
        self.assertEqual(pan_vector(Rect(50, 50, 100, 100), Rect(40, 60, 20, 20)), Point(10, 0.0))

    def test_pan_into_view_moves_the_translate(self) -> None:
        view = Viewport(100, 100, animation=False)

        self.assertEqual(view.pan_into_view(Rect(10, 10, 20, 20)), Point(0.0, 0.0))
        self.assertEqual(view.pan_into_view(Rect(90, 10, 20, 20)), Point(-10, 0.0))
        self.assertEqual((view.x, view.y), (-10.0, 0.0))


if __name__ == "__main__":
    unittest.main()

"""Scale and translate of the canvas.

A world point ``(wx, wy)`` is painted at ``(x + wx * scale, y + wy * scale)``.
"""

import logging
from typing import Dict, Optional

from .animation import Animator, Tween, ease_in_out
from .config import (
    FIT_DURATION,
    PAN_DURATION,
    SCALE_FACTOR,
    SCALE_MAX,
    SCALE_MIN,
    VIEW_PADDING,
    WHEEL_INVERTED,
)
from .geometry import Point, Rect, has_full_intersection

logger = logging.getLogger(__name__)

VIEW_KEY = "viewport"


def pan_vector(viewport: Rect, rect: Rect) -> Point:
    """Smallest shift that moves ``rect`` back inside ``viewport``.

    Each axis is handled on its own; when a rectangle overflows both sides of
    an axis, the right/bottom edge decides.
    """
    if has_full_intersection(viewport, rect):
        return Point(0.0, 0.0)
    dx = 0.0
    dy = 0.0
    if rect.x < viewport.x:
        dx = viewport.x - rect.x
    if rect.y < viewport.y:
        dy = viewport.y - rect.y
    if rect.right > viewport.right:
        dx = viewport.right - rect.right
    if rect.bottom > viewport.bottom:
        dy = viewport.bottom - rect.bottom
    return Point(dx, dy)


class Viewport:
    def __init__(
        self,
        width: float,
        height: float,
        animator: Optional[Animator] = None,
        animation: bool = True,
        scale_min: float = SCALE_MIN,
        scale_max: float = SCALE_MAX,
        scale_factor: float = SCALE_FACTOR,
        padding: float = VIEW_PADDING,
        wheel_inverted: bool = WHEEL_INVERTED,
    ) -> None:
        self.width = width
        self.height = height
        self.animator = animator if animator is not None else Animator()
        self.animation = animation
        self.scale_min = scale_min
        self.scale_max = scale_max
        self.scale_factor = scale_factor
        self.padding = padding
        self.wheel_inverted = wheel_inverted
        self.scale = 1.0
        self.x = 0.0
        self.y = 0.0

    # ---------- Coordinates ----------
    @property
    def center(self) -> Point:
        return Point(self.width / 2, self.height / 2)

    @property
    def rect(self) -> Rect:
        return Rect(0.0, 0.0, self.width, self.height)

    def to_screen(self, point: Point) -> Point:
        return Point(self.x + point.x * self.scale, self.y + point.y * self.scale)

    def to_world(self, point: Point) -> Point:
        if self.scale == 0:
            return point
        return Point((point.x - self.x) / self.scale, (point.y - self.y) / self.scale)

    def to_screen_rect(self, rect: Rect) -> Rect:
        origin = self.to_screen(Point(rect.x, rect.y))
        return Rect(origin.x, origin.y, rect.width * self.scale, rect.height * self.scale)

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height

    # ---------- Zoom ----------
    def scale_about_point(self, value: float, point: Optional[Point] = None) -> bool:
        if value <= self.scale_min or value >= self.scale_max:
            logger.debug("Scale %.3f outside (%s, %s), ignored", value, self.scale_min, self.scale_max)
            return False
        self.animator.cancel(VIEW_KEY)
        anchor = point if point is not None else self.center
        world = self.to_world(anchor)
        self.scale = value
        self.x = anchor.x - world.x * value
        self.y = anchor.y - world.y * value
        return True

    def zoom_in(self) -> bool:
        return self.scale_about_point(self.scale + self.scale * self.scale_factor)

    def zoom_out(self) -> bool:
        return self.scale_about_point(self.scale - self.scale * self.scale_factor)

    def wheel(self, delta_y: float, point: Optional[Point] = None) -> bool:
        distance = self.scale * self.scale_factor * (-1 if self.wheel_inverted else 1)
        value = self.scale + distance if delta_y > 0 else self.scale - distance
        return self.scale_about_point(value, point)

    def fit(self, bounds: Optional[Rect], scale: Optional[float] = None) -> bool:
        """Centre ``bounds`` in the view, shrinking only when it does not fit."""
        if bounds is None:
            return False
        padding = self.padding
        value = scale if scale is not None else self.scale
        needs_scale = (
            bounds.width * value + padding * 2 > self.width
            or bounds.height * value + padding * 2 > self.height
        )
        if needs_scale and scale is None:
            value = min(
                self.width / (bounds.width + padding * 2),
                self.height / (bounds.height + padding * 2),
            )
        value = min(value, self.scale_max)

        x = (self.width - bounds.width * value) / 2 - bounds.x * value
        y = (self.height - bounds.height * value) / 2 - bounds.y * value
        self._transition({"scale": value, "x": x, "y": y}, FIT_DURATION)
        return True

    def zoom_reset(self, bounds: Optional[Rect]) -> bool:
        return self.fit(bounds, 1.0)

    # ---------- Pan ----------
    def pan_by(self, dx: float, dy: float) -> None:
        self.animator.cancel(VIEW_KEY)
        self.x += dx
        self.y += dy

    def pan_into_view(self, rect: Rect) -> Point:
        """Scroll so the screen rectangle ``rect`` is fully visible."""
        vector = pan_vector(self.rect, rect)
        if vector.x == 0 and vector.y == 0:
            return vector
        self._transition({"x": self.x + vector.x, "y": self.y + vector.y}, PAN_DURATION)
        return vector

    def _transition(self, values: Dict[str, float], duration: float) -> None:
        self.animator.play(
            VIEW_KEY,
            Tween(self, values, duration if self.animation else 0.0, ease_in_out),
        )

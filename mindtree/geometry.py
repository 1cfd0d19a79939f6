from typing import Iterable, NamedTuple, Optional, Tuple


class Point(NamedTuple):
    x: float
    y: float


class Rect(NamedTuple):
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def inflate(self, dx: float, dy: float) -> "Rect":
        return Rect(self.x - dx, self.y - dy, self.width + dx * 2, self.height + dy * 2)

    def corners(self) -> Tuple[float, float, float, float]:
        return self.x, self.y, self.right, self.bottom


def has_intersection(a: Rect, b: Rect) -> bool:
    return not (
        b.x > a.right
        or b.right < a.x
        or b.y > a.bottom
        or b.bottom < a.y
    )


def has_full_intersection(a: Rect, b: Rect) -> bool:
    """True when ``b`` lies inside ``a``; shared borders count as inside."""
    return b.x >= a.x and b.right <= a.right and b.y >= a.y and b.bottom <= a.bottom


def point_inside_rect(point: Point, rect: Rect) -> bool:
    # Strict: a point on the border is outside.
    return rect.x < point.x < rect.right and rect.y < point.y < rect.bottom


def union(rects: Iterable[Rect]) -> Optional[Rect]:
    x0 = y0 = float("inf")
    x1 = y1 = float("-inf")
    found = False
    for rect in rects:
        found = True
        x0 = min(x0, rect.x)
        y0 = min(y0, rect.y)
        x1 = max(x1, rect.right)
        y1 = max(y1, rect.bottom)
    if not found:
        return None
    return Rect(x0, y0, x1 - x0, y1 - y0)

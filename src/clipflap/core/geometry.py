"""
Pure geometry helpers for the clip rectangle.

Everything in this module operates on immutable value types so that the
controller can hand rectangles to the renderer without copying them and no
reader ever observes a half-updated rectangle.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Vector:
    """Point or delta in image-local coordinates."""

    x: float
    y: float


@dataclass(frozen=True)
class Size:
    """Positive extent of a box (viewport or output clip)."""

    width: float
    height: float


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle; ``width`` and ``height`` are never negative."""

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
    def center(self) -> Vector:
        return Vector(self.x + self.width * 0.5, self.y + self.height * 0.5)

    @classmethod
    def from_size(cls, size: Size) -> Rect:
        """Return the rectangle covering *size* anchored at the origin."""
        return cls(0.0, 0.0, size.width, size.height)

    def replace(self, **changes: float) -> Rect:
        values = {"x": self.x, "y": self.y, "width": self.width, "height": self.height}
        values.update(changes)
        return Rect(**values)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class Rate:
    """Axis ratios between two boxes, see :func:`get_rate`."""

    min_rate: float
    max_rate: float


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Return *value* bounded to ``[minimum, maximum]``.

    When ``minimum > maximum`` the upper bound wins; callers that may produce
    such a degenerate range rely on that instead of an exception.
    """
    return min(maximum, max(value, minimum))


def get_pedal(point: Vector, base: Vector, direction: Vector) -> Vector:
    """Project ``point - base`` orthogonally onto *direction*.

    *direction* must be non-zero.
    """
    v2x = point.x - base.x
    v2y = point.y - base.y
    dd = direction.x * direction.x + direction.y * direction.y
    dot = direction.x * v2x + direction.y * v2y
    t = dot / dd
    return Vector(direction.x * t, direction.y * t)


def rects_equal(a: Rect | None, b: Rect | None) -> bool:
    """Return True when both rectangles exist and match on every field.

    A missing rectangle is never equal to anything, not even another missing
    one, so "no rectangle yet" always counts as a change.
    """
    if a is None or b is None:
        return False
    return a.x == b.x and a.y == b.y and a.width == b.width and a.height == b.height


def get_rate(a: Size | Rect, b: Size | Rect) -> Rate:
    """Return the smaller and larger of the per-axis ratios ``b / a``."""
    rate_x = b.width / a.width
    rate_y = b.height / a.height
    return Rate(min_rate=min(rate_x, rate_y), max_rate=max(rate_x, rate_y))


def fit_rect_into(target: Rect, base: Rect, centralize: bool = False) -> Rect:
    """Shrink *target* (never grow it) until it fits inside *base*.

    The aspect ratio of *target* is preserved. With *centralize* the result is
    centred in *base*; otherwise each axis of the original position is clamped
    so the result lies inside *base*.
    """
    rate = min(get_rate(target, base).min_rate, 1.0)
    width = target.width * rate
    height = target.height * rate
    if centralize:
        return Rect(
            base.x + (base.width - width) / 2,
            base.y + (base.height - height) / 2,
            width,
            height,
        )
    return Rect(
        clamp(target.x, base.x, base.x + base.width - width),
        clamp(target.y, base.y, base.y + base.height - height),
        width,
        height,
    )


def centralized_view_box(view_port: Size, size: Size) -> Rect:
    """Return the box with *view_port*'s aspect that just contains *size*.

    The box is centred on a ``size`` sized image placed at the origin, so on
    the short axis it extends equally past both image edges.
    """
    view_rate = view_port.width / view_port.height
    size_rate = size.width / size.height
    if size_rate < view_rate:
        width = size.height * view_rate
        return Rect((size.width - width) / 2, 0.0, width, size.height)
    height = size.width / view_rate
    return Rect(0.0, (size.height - height) / 2, size.width, height)


def rect_outline_polygon(rect: Rect, stroke_width: float) -> list[Vector]:
    """Return the ring polygon that strokes *rect* with *stroke_width*.

    The first five vertices close the outer edge and the last five close the
    inner edge in the opposite winding, so the polygon paints as a ring with
    either fill rule.
    """
    half = stroke_width * 0.5
    left_out, top_out = rect.x - half, rect.y - half
    right_out, bottom_out = rect.right + half, rect.bottom + half
    left_in, top_in = rect.x + half, rect.y + half
    right_in, bottom_in = rect.right - half, rect.bottom - half
    return [
        Vector(left_out, top_out),
        Vector(right_out, top_out),
        Vector(right_out, bottom_out),
        Vector(left_out, bottom_out),
        Vector(left_out, top_out),
        Vector(left_in, top_in),
        Vector(left_in, bottom_in),
        Vector(right_in, bottom_in),
        Vector(right_in, top_in),
        Vector(left_in, top_in),
    ]

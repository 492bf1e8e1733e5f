"""
Drag related data structures for the clip rectangle.

This module contains the small value types shared by the pointer tracker,
the strategies and the controller, plus the cursor mapping used by the widget.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from PySide6.QtCore import QPointF, Qt

from .....core.geometry import Vector


class DragMode(enum.Enum):
    """Gesture currently driving the clip rectangle."""

    NONE = "none"
    MOVE = "move"
    RESIZE = "resize"


@dataclass(frozen=True)
class DragArgs:
    """Normalized drag payload: current pointer *p* and gesture origin *base*."""

    p: Vector
    base: Vector

    @property
    def delta(self) -> Vector:
        return Vector(self.p.x - self.base.x, self.p.y - self.base.y)


def to_vector(point: QPointF | Vector) -> Vector:
    """Return *point* as a :class:`Vector`, accepting Qt points as well."""
    if isinstance(point, Vector):
        return point
    return Vector(float(point.x()), float(point.y()))


def cursor_for_mode(mode: DragMode) -> Qt.CursorShape:
    """Return the cursor shape shown over (or while dragging) a handle."""
    return {
        DragMode.MOVE: Qt.CursorShape.SizeAllCursor,
        DragMode.RESIZE: Qt.CursorShape.SizeFDiagCursor,
    }.get(mode, Qt.CursorShape.ArrowCursor)

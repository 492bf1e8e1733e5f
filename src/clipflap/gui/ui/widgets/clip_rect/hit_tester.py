"""
Hit testing logic for clip handles.

This module contains pure geometric functions for detecting which handle
(if any) is under a given point, with no dependencies on Qt events or UI state.
"""

from __future__ import annotations

import math

from .....core.geometry import Rect, Vector
from .utils import DragMode


class HitTester:
    """Pure-function hit tester for the move and resize handles.

    The move handle sits on the top-left corner of the clip rectangle and the
    resize handle on its bottom-right corner; both are discs.
    """

    def __init__(self, handle_radius: float = 8.0) -> None:
        """Initialize hit tester.

        Parameters
        ----------
        handle_radius:
            Handle radius in view pixels; it is multiplied by the
            view-to-image scale passed to :meth:`test`.
        """
        self._handle_radius = float(handle_radius)

    def radius_for_scale(self, scale: float) -> float:
        return self._handle_radius * scale

    def test(self, point: Vector, rect: Rect | None, scale: float = 1.0) -> DragMode:
        """Return the gesture started by pressing at *point*.

        Parameters
        ----------
        point:
            The pressed point in image-local coordinates.
        rect:
            The current clip rectangle, or None when no image is loaded.
        scale:
            View-to-image scale of the current image.

        Returns
        -------
        DragMode:
            ``RESIZE`` or ``MOVE`` when a handle was hit, ``NONE`` otherwise.
            The resize handle wins when both overlap so that a collapsed
            rectangle can still be grown.
        """
        if rect is None:
            return DragMode.NONE
        radius = self.radius_for_scale(scale)
        if math.hypot(point.x - rect.right, point.y - rect.bottom) <= radius:
            return DragMode.RESIZE
        if math.hypot(point.x - rect.x, point.y - rect.y) <= radius:
            return DragMode.MOVE
        return DragMode.NONE

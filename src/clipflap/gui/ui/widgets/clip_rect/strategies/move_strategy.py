"""
Move strategy for dragging the whole clip rectangle.
"""

from __future__ import annotations

from ......core.geometry import Rect, Vector
from .abstract import InteractionStrategy


class MoveStrategy(InteractionStrategy):
    """Translate the anchor rectangle; its size never changes."""

    def compute_candidate(self, delta_image: Vector) -> Rect:
        anchor = self._anchor
        return anchor.replace(x=anchor.x + delta_image.x, y=anchor.y + delta_image.y)

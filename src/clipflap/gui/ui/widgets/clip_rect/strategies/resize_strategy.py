"""
Resize strategy for dragging the bottom-right handle of the clip rectangle.
"""

from __future__ import annotations

from collections.abc import Callable

from ......config import MIN_CLIP_EXTENT
from ......core.geometry import Rect, Size, Vector, get_pedal
from ..model import ClipRectModel
from .abstract import InteractionStrategy

_ORIGIN = Vector(0.0, 0.0)


class ResizeStrategy(InteractionStrategy):
    """Resize from the top-left corner while locking the output aspect ratio."""

    def __init__(
        self,
        *,
        model: ClipRectModel,
        anchor: Rect,
        clip_size: Size,
        image_bounds_provider: Callable[[], Rect | None],
        overflow_provider: Callable[[], bool],
        get_scale: Callable[[], float],
        on_clip_changed: Callable[[Rect], None],
    ) -> None:
        """Initialize resize strategy.

        Parameters
        ----------
        clip_size:
            Output size whose diagonal the resized rectangle follows.

        The remaining parameters are those of :class:`InteractionStrategy`.
        """
        super().__init__(
            model=model,
            anchor=anchor,
            image_bounds_provider=image_bounds_provider,
            overflow_provider=overflow_provider,
            get_scale=get_scale,
            on_clip_changed=on_clip_changed,
        )
        self._direction = Vector(float(clip_size.width), float(clip_size.height))
        shortest = min(self._direction.x, self._direction.y)
        self._min_diagonal = Vector(
            self._direction.x * MIN_CLIP_EXTENT / shortest,
            self._direction.y * MIN_CLIP_EXTENT / shortest,
        )

    def compute_candidate(self, delta_image: Vector) -> Rect:
        anchor = self._anchor
        # The free-form corner position is projected onto the clip diagonal so
        # width / height always equals the output aspect ratio.
        free_diagonal = Vector(anchor.width + delta_image.x, anchor.height + delta_image.y)
        diagonal = get_pedal(free_diagonal, _ORIGIN, self._direction)
        if diagonal.x < self._min_diagonal.x:
            diagonal = self._min_diagonal
        return anchor.replace(width=diagonal.x, height=diagonal.y)

"""
Abstract base class for clip interaction strategies.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from ......core.geometry import Rect, Vector
from ..model import ClipRectModel


class InteractionStrategy(ABC):
    """Base class for clip interaction strategies (move, resize).

    A strategy is created at pointer-down with the anchor rectangle and lives
    until pointer-up. Every drag recomputes the candidate from the anchor, so
    the outcome only depends on the total pointer delta.
    """

    def __init__(
        self,
        *,
        model: ClipRectModel,
        anchor: Rect,
        image_bounds_provider: Callable[[], Rect | None],
        overflow_provider: Callable[[], bool],
        get_scale: Callable[[], float],
        on_clip_changed: Callable[[Rect], None],
    ) -> None:
        """Initialize the strategy.

        Parameters
        ----------
        model:
            Clip rectangle model receiving the candidates.
        anchor:
            Clip rectangle captured when the gesture started.
        image_bounds_provider:
            Callable returning the source image bounds, or None once the
            image is gone.
        overflow_provider:
            Callable returning the current overflow policy.
        get_scale:
            Callable returning the view-to-image scale applied to deltas.
        on_clip_changed:
            Callback invoked with the accepted rectangle.
        """
        self._model = model
        self._anchor = anchor
        self._image_bounds_provider = image_bounds_provider
        self._overflow_provider = overflow_provider
        self._get_scale = get_scale
        self._on_clip_changed = on_clip_changed

    @property
    def anchor(self) -> Rect:
        return self._anchor

    @abstractmethod
    def compute_candidate(self, delta_image: Vector) -> Rect:
        """Return the unconstrained rectangle for a delta in image units."""

    def on_drag(self, delta_view: Vector) -> None:
        """Handle drag movement given the total delta in view pixels."""
        bounds = self._image_bounds_provider()
        if bounds is None:
            return
        scale = self._get_scale()
        delta_image = Vector(delta_view.x * scale, delta_view.y * scale)
        candidate = self.compute_candidate(delta_image)
        rect = self._model.propose(candidate, bounds, self._overflow_provider())
        if self._model.accept(rect):
            self._on_clip_changed(rect)

    def on_end(self) -> None:
        """Handle end of interaction (pointer release)."""

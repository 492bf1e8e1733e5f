"""
Clip rectangle model.

Single source of truth for the current clip rectangle and the policy used to
accept a new candidate. It has no knowledge of pointers, widgets or images.
"""

from __future__ import annotations

from .....core.geometry import Rect, fit_rect_into, rects_equal


class ClipRectModel:
    """Holds the clip rectangle and decides whether a candidate replaces it."""

    def __init__(self) -> None:
        self._rect: Rect | None = None

    @property
    def rect(self) -> Rect | None:
        """Return the current clip rectangle, or None before an image loads."""
        return self._rect

    def has_rect(self) -> bool:
        return self._rect is not None

    def snapshot(self) -> Rect | None:
        """Return the value used as a drag anchor.

        :class:`Rect` is immutable so the held instance already is a snapshot.
        """
        return self._rect

    def clear(self) -> None:
        self._rect = None

    @staticmethod
    def propose(candidate: Rect, image_bounds: Rect, overflow: bool) -> Rect:
        """Apply the overflow policy to *candidate*.

        Parameters
        ----------
        candidate:
            Rectangle derived from the drag anchor and the pointer delta.
        image_bounds:
            Rectangle covering the source image in image-local coordinates.
        overflow:
            When True the candidate may extend past the image and is returned
            unchanged.

        Returns
        -------
        Rect:
            The candidate, refitted inside *image_bounds* unless overflow is
            allowed.
        """
        if overflow:
            return candidate
        return fit_rect_into(candidate, image_bounds, centralize=False)

    def accept(self, new_rect: Rect) -> bool:
        """Replace the held rectangle when *new_rect* differs from it.

        Returns True when the rectangle changed. Redraws and change
        notifications are gated on this so jitter that maps to the same
        rectangle produces no redundant work.
        """
        if rects_equal(self._rect, new_rect):
            return False
        self._rect = new_rect
        return True

    def initialise(self, view_box: Rect, image_bounds: Rect, overflow: bool) -> Rect:
        """Set and return the initial rectangle for a freshly loaded image."""
        if overflow:
            self._rect = view_box
        else:
            self._rect = fit_rect_into(view_box, image_bounds, centralize=True)
        return self._rect

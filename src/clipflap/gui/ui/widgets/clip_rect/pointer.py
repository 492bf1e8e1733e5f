"""
Pointer primitives for clip gestures.

:class:`DragTracker` turns raw pointer positions into :class:`DragArgs`
relative to the gesture origin. :func:`use_window_pointer_effect` captures
pointer movement for the whole application while a gesture is active, so a
drag keeps working after the pointer leaves the widget.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from PySide6.QtCore import QCoreApplication, QEvent, QObject, QPointF

from .....core.geometry import Vector
from .utils import DragArgs, to_vector

_LOGGER = logging.getLogger(__name__)

Disposer = Callable[[], None]
WindowPointerEffect = Callable[..., Disposer]


class DragTracker:
    """Track one pointer gesture and report positions relative to its origin."""

    def __init__(self, on_drag: Callable[[DragArgs], None]) -> None:
        self._on_drag = on_drag
        self._base: Vector | None = None

    def is_tracking(self) -> bool:
        return self._base is not None

    def on_down(self, point: QPointF | Vector) -> None:
        self._base = to_vector(point)

    def on_move(self, point: QPointF | Vector) -> DragArgs | None:
        """Emit and return the drag payload, or None when no gesture is active."""
        if self._base is None:
            return None
        args = DragArgs(p=to_vector(point), base=self._base)
        self._on_drag(args)
        return args

    def on_up(self) -> None:
        self._base = None


class WindowPointerFilter(QObject):
    """Application-wide event filter forwarding pointer moves and releases.

    Positions are reported in global coordinates. The filter never consumes
    events, the widget under the pointer still receives them.
    """

    def __init__(
        self,
        *,
        on_move: Callable[[QPointF], None],
        on_up: Callable[[], None],
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._on_move = on_move
        self._on_up = on_up

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # noqa: N802 - Qt override
        event_type = event.type()
        if event_type == QEvent.Type.MouseMove:
            self._on_move(event.globalPosition())
        elif event_type == QEvent.Type.MouseButtonRelease:
            self._on_up()
        return False


def use_window_pointer_effect(
    *,
    on_move: Callable[[QPointF], None],
    on_up: Callable[[], None],
) -> Disposer:
    """Install a :class:`WindowPointerFilter` and return its disposer.

    The disposer is idempotent. Without a running application the effect is a
    no-op and the returned disposer does nothing.
    """
    app = QCoreApplication.instance()
    if app is None:
        _LOGGER.debug("No QCoreApplication; window pointer capture disabled")
        return lambda: None

    pointer_filter = WindowPointerFilter(on_move=on_move, on_up=on_up)
    app.installEventFilter(pointer_filter)
    disposed = False

    def dispose() -> None:
        nonlocal disposed
        if disposed:
            return
        disposed = True
        current = QCoreApplication.instance()
        if current is not None:
            current.removeEventFilter(pointer_filter)
        pointer_filter.deleteLater()

    return dispose

"""
Clip interaction controller (coordinator).

This module owns the clip rectangle lifecycle and delegates to specialized
modules for the overflow policy, hit testing, pointer capture, the banner
timer and the move/resize strategies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path

from PySide6.QtCore import QObject, QPointF, Qt
from PySide6.QtGui import QImage

from .....config import DEFAULT_ERROR_MESSAGES, ERROR_MESSAGE_TIMEOUT_MS, HANDLE_RADIUS_PX
from .....core.geometry import (
    Rect,
    Size,
    Vector,
    centralized_view_box,
    get_rate,
    rects_equal,
)
from .....errors import ImageNotLoadedError, InvalidImageError
from .....errors.handler import ErrorHandler, ErrorSeverity
from .....events.bus import EventBus
from .....events.clip_events import ClipResetEvent, ClipUpdatedEvent, ImageLoadedEvent
from .....utils.image_loader import base64_to_image, clip_image, file_to_base64
from .hit_tester import HitTester
from .message_timer import TransientMessageTimer
from .model import ClipRectModel
from .pointer import Disposer, DragTracker, WindowPointerEffect, use_window_pointer_effect
from .strategies import InteractionStrategy, MoveStrategy, ResizeStrategy
from .utils import DragArgs, DragMode, cursor_for_mode

_LOGGER = logging.getLogger(__name__)

UpdateClipCallback = Callable[[str, Rect, Size], None]


def _noop_disposer() -> None:
    return None


class ClipInteractionController:
    """Manages the clip rectangle, the drag session and change notifications."""

    def __init__(
        self,
        *,
        view_size: Size,
        clip_size: Size,
        overflow: bool = False,
        error_messages: Mapping[str, str] | None = None,
        on_update_clip: UpdateClipCallback | None = None,
        on_request_update: Callable[[Rect | None], None] | None = None,
        on_error_message: Callable[[str | None], None] | None = None,
        on_cursor_change: Callable[[Qt.CursorShape | None], None] | None = None,
        event_bus: EventBus | None = None,
        window_pointer_effect: WindowPointerEffect = use_window_pointer_effect,
        timer_parent: QObject | None = None,
    ) -> None:
        """Initialize the clip interaction controller.

        Parameters
        ----------
        view_size:
            Size of the on-screen box the image is shown in.
        clip_size:
            Output size; its aspect ratio is enforced while resizing.
        overflow:
            Whether the clip rectangle may extend past the image bounds.
        error_messages:
            User facing texts keyed by error kind, merged over the defaults.
        on_update_clip:
            Callback ``(payload, clip_rect, clip_size)`` fired when a finished
            gesture or an overflow toggle changed the rectangle.
        on_request_update:
            Callback asking the render target to redraw the given rectangle
            (None once the image is gone).
        on_error_message:
            Callback showing a banner message, or hiding it when passed None.
        on_cursor_change:
            Callback to change cursor, signature: (cursor_shape or None to unset).
        event_bus:
            Bus receiving clip and error events; a private one is created when
            omitted.
        window_pointer_effect:
            Factory installing window-level move/up listeners and returning
            their disposer.
        timer_parent:
            Parent QObject for the banner timer (optional).
        """
        self._view_size = view_size
        self._clip_size = clip_size
        self._overflow = bool(overflow)
        self._error_messages = {**DEFAULT_ERROR_MESSAGES, **dict(error_messages or {})}
        self._on_update_clip = on_update_clip
        self._on_request_update = on_request_update
        self._on_error_message = on_error_message
        self._on_cursor_change = on_cursor_change
        self._window_pointer_effect = window_pointer_effect

        # Core modules
        self._owns_event_bus = event_bus is None
        self._events = event_bus or EventBus()
        self._error_handler = ErrorHandler(_LOGGER, self._events)
        self._error_handler.register_ui_callback(self._show_error_message)
        self._model = ClipRectModel()
        self._hit_tester = HitTester(handle_radius=HANDLE_RADIUS_PX)
        self._tracker = DragTracker(self._on_drag)
        self._message_timer = TransientMessageTimer(
            interval_ms=ERROR_MESSAGE_TIMEOUT_MS,
            on_timeout=self.hide_error,
            timer_parent=timer_parent,
        )

        # Image state
        self._image: QImage | None = None
        self._payload: str = ""
        self._view_box: Rect | None = None
        self._scale: float = 1.0

        # Drag session state
        self._drag_mode: DragMode = DragMode.NONE
        self._anchor: Rect | None = None
        self._current_strategy: InteractionStrategy | None = None
        self._dispose_window_pointer: Disposer = _noop_disposer
        self._disposed: bool = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def event_bus(self) -> EventBus:
        return self._events

    def clip_rect(self) -> Rect | None:
        """Return the current clip rectangle in image coordinates."""
        return self._model.rect

    def image(self) -> QImage | None:
        return self._image

    def payload(self) -> str:
        """Return the encoded payload of the current image ('' when none)."""
        return self._payload

    def has_image(self) -> bool:
        return self._image is not None

    def overflow(self) -> bool:
        return self._overflow

    def drag_mode(self) -> DragMode:
        return self._drag_mode

    def is_dragging(self) -> bool:
        return self._drag_mode is not DragMode.NONE

    def is_disposed(self) -> bool:
        return self._disposed

    def scale(self) -> float:
        """Return the image units covered by one view pixel."""
        return self._scale

    def view_box(self) -> Rect | None:
        """Return the image region shown in the view, centred on the image."""
        return self._view_box

    def view_size(self) -> Size:
        return self._view_size

    def clip_size(self) -> Size:
        return self._clip_size

    def image_bounds(self) -> Rect | None:
        if self._image is None:
            return None
        return Rect(0.0, 0.0, float(self._image.width()), float(self._image.height()))

    def hit_test(self, point: Vector) -> DragMode:
        """Return the handle under *point* (image coordinates)."""
        return self._hit_tester.test(point, self._model.rect, self._scale)

    def handle_radius(self) -> float:
        """Return the handle radius in image coordinates."""
        return self._hit_tester.radius_for_scale(self._scale)

    # ------------------------------------------------------------------
    # Image lifecycle
    # ------------------------------------------------------------------
    def load_file(self, path: Path | str) -> bool:
        """Read *path* and load it; report an invalid image on failure."""
        if self._disposed:
            return False
        try:
            payload = file_to_base64(Path(path))
        except OSError as exc:
            self._report_invalid_image(InvalidImageError(f"Cannot read {path}: {exc}"), path=str(path))
            return False
        return self.load_image(payload)

    def load_image(self, payload: str) -> bool:
        """Decode *payload* and make it the current image.

        Returns False when the payload is not a decodable image; in that case
        the current image, clip rectangle and drag state are left untouched.
        """
        if self._disposed:
            return False
        try:
            image = base64_to_image(payload)
        except InvalidImageError as exc:
            self._report_invalid_image(exc)
            return False
        self.on_image_loaded(image, payload)
        return True

    def on_image_loaded(self, image: QImage, payload: str) -> None:
        """Compute the initial clip rectangle for a freshly decoded image."""
        if self._disposed:
            return
        self._cancel_drag()
        self._image = image
        self._payload = payload
        image_size = Size(float(image.width()), float(image.height()))
        self._view_box = centralized_view_box(self._clip_size, image_size)
        self._scale = get_rate(self._view_size, self._view_box).max_rate
        rect = self._model.initialise(self._view_box, Rect.from_size(image_size), self._overflow)
        _LOGGER.debug(
            "Image loaded %sx%s, view box %s, scale %.4f, clip %s",
            image.width(),
            image.height(),
            self._view_box,
            self._scale,
            rect,
        )
        self._events.publish(
            ImageLoadedEvent(width=image.width(), height=image.height(), clip_rect=rect)
        )
        self._request_update(rect)

    def reset(self) -> None:
        """Discard image, rectangle and drag state; back to the pre-load state."""
        self._cancel_drag()
        had_image = self._image is not None
        self._image = None
        self._payload = ""
        self._view_box = None
        self._scale = 1.0
        self._model.clear()
        if had_image:
            self._events.publish(ClipResetEvent())
        self._request_update(None)

    def dispose(self) -> None:
        """Tear down the controller; every later call becomes a no-op."""
        if self._disposed:
            return
        self.reset()
        self._message_timer.cancel()
        self._error_handler.register_ui_callback(None)
        if self._owns_event_bus:
            self._events.clear()
        self._disposed = True

    # ------------------------------------------------------------------
    # Clip operations
    # ------------------------------------------------------------------
    def toggle_overflow(self) -> None:
        """Flip the overflow policy and re-apply it to the current rectangle."""
        if self._disposed:
            return
        self._overflow = not self._overflow
        rect = self._model.rect
        bounds = self.image_bounds()
        if rect is None or bounds is None:
            return
        if self._model.accept(self._model.propose(rect, bounds, self._overflow)):
            self._request_update(self._model.rect)
            self._emit_clip_updated()

    def propose_clip_rect(self, rect: Rect) -> bool:
        """Place the clip rectangle programmatically under the overflow policy.

        Returns True when the rectangle changed. No notification is fired;
        callers decide whether the placement counts as a user edit.
        Rectangles without a positive width and height are ignored.
        """
        bounds = self.image_bounds()
        if self._disposed or bounds is None or self._model.rect is None:
            _LOGGER.debug("propose_clip_rect ignored: no image loaded")
            return False
        if rect.width <= 0 or rect.height <= 0:
            _LOGGER.debug("propose_clip_rect ignored: degenerate rectangle %s", rect)
            return False
        if self._model.accept(self._model.propose(rect, bounds, self._overflow)):
            self._request_update(self._model.rect)
            return True
        return False

    def clip(self) -> str:
        """Return the current clip rendered at ``clip_size`` as a data URL.

        Raises
        ------
        ImageNotLoadedError
            If no image is loaded or no clip rectangle exists.
        ExportError
            If the clip cannot be rendered or encoded.
        """
        rect = self._model.rect
        if self._image is None or rect is None:
            raise ImageNotLoadedError("image not loaded")
        return clip_image(self._image, rect, self._clip_size)

    # ------------------------------------------------------------------
    # Pointer handlers
    # ------------------------------------------------------------------
    def handle_pointer_down(self, mode: DragMode, pos: QPointF | Vector) -> bool:
        """Start a move or resize gesture at *pos* (any consistent space).

        Returns True when a drag session started.
        """
        if self._disposed or mode is DragMode.NONE:
            return False
        if self._drag_mode is not DragMode.NONE:
            _LOGGER.debug("Pointer down ignored: %s gesture already active", self._drag_mode.value)
            return False
        anchor = self._model.snapshot()
        if anchor is None or self._image is None:
            _LOGGER.debug("Pointer down ignored: no clip rectangle")
            return False

        self._drag_mode = mode
        self._anchor = anchor
        self._current_strategy = self._create_strategy(mode, anchor)
        self._tracker.on_down(pos)
        self._dispose_window_pointer()
        self._dispose_window_pointer = self._window_pointer_effect(
            on_move=self.handle_pointer_move,
            on_up=self.handle_pointer_up,
        )
        if self._on_cursor_change is not None:
            self._on_cursor_change(cursor_for_mode(mode))
        return True

    def handle_pointer_move(self, pos: QPointF | Vector) -> None:
        """Recompute the clip rectangle from the anchor and the total delta."""
        if self._drag_mode is DragMode.NONE:
            return
        self._tracker.on_move(pos)

    def handle_pointer_up(self) -> None:
        """Finish the gesture and notify when the rectangle changed."""
        if self._drag_mode is DragMode.NONE:
            return
        anchor = self._anchor
        if self._current_strategy is not None:
            self._current_strategy.on_end()
        self._cancel_drag()
        if self._on_cursor_change is not None:
            self._on_cursor_change(None)
        if not rects_equal(anchor, self._model.rect):
            self._emit_clip_updated()

    # ------------------------------------------------------------------
    # Error banner
    # ------------------------------------------------------------------
    def hide_error(self) -> None:
        """Hide the banner and cancel its pending timeout."""
        self._message_timer.cancel()
        if self._on_error_message is not None:
            self._on_error_message(None)

    def is_error_visible(self) -> bool:
        return self._message_timer.is_active()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _create_strategy(self, mode: DragMode, anchor: Rect) -> InteractionStrategy:
        if mode is DragMode.RESIZE:
            return ResizeStrategy(
                model=self._model,
                anchor=anchor,
                clip_size=self._clip_size,
                image_bounds_provider=self.image_bounds,
                overflow_provider=self.overflow,
                get_scale=self.scale,
                on_clip_changed=self._request_update,
            )
        return MoveStrategy(
            model=self._model,
            anchor=anchor,
            image_bounds_provider=self.image_bounds,
            overflow_provider=self.overflow,
            get_scale=self.scale,
            on_clip_changed=self._request_update,
        )

    def _on_drag(self, args: DragArgs) -> None:
        if self._current_strategy is None:
            return
        self._current_strategy.on_drag(args.delta)

    def _cancel_drag(self) -> None:
        """End any drag session without notifying and drop its listeners."""
        self._tracker.on_up()
        dispose = self._dispose_window_pointer
        self._dispose_window_pointer = _noop_disposer
        dispose()
        self._drag_mode = DragMode.NONE
        self._anchor = None
        self._current_strategy = None

    def _request_update(self, rect: Rect | None) -> None:
        if self._on_request_update is not None:
            self._on_request_update(rect)

    def _emit_clip_updated(self) -> None:
        rect = self._model.rect
        if not self._payload or rect is None:
            return
        if self._on_update_clip is not None:
            self._on_update_clip(self._payload, rect, self._clip_size)
        self._events.publish(
            ClipUpdatedEvent(payload=self._payload, clip_rect=rect, clip_size=self._clip_size)
        )

    def _report_invalid_image(self, error: InvalidImageError, **context: str) -> None:
        self._error_handler.handle(
            error,
            ErrorSeverity.ERROR,
            context,
            user_message=self._error_messages["invalid_image_file"],
        )

    def _show_error_message(self, message: str, severity: ErrorSeverity) -> None:
        del severity  # unused
        if self._on_error_message is not None:
            self._on_error_message(message)
        self._message_timer.restart()

"""Widget that shows an image with a draggable, aspect-locked clip rectangle."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from PySide6.QtCore import QPointF, QRectF, Qt, Signal
from PySide6.QtGui import (
    QCloseEvent,
    QColor,
    QDragEnterEvent,
    QDropEvent,
    QMouseEvent,
    QPainter,
    QPainterPath,
    QPaintEvent,
    QPolygonF,
    QResizeEvent,
    QTransform,
)
from PySide6.QtWidgets import (
    QFileDialog,
    QLabel,
    QPushButton,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from ....config import (
    IMAGE_FILE_FILTER,
    OUTLINE_COLOR,
    OUTLINE_STROKE_PX,
    TOOL_BUTTON_SIZE_PX,
    TOOL_BUTTON_SPACING_PX,
)
from ....core.geometry import Rect, Size, Vector, rect_outline_polygon
from ....events.bus import EventBus
from ....settings.schema import ClipOptions, load_options
from .clip_rect import ClipInteractionController, DragMode, cursor_for_mode
from .clip_rect.controller import UpdateClipCallback
from .clip_rect.pointer import WindowPointerEffect, use_window_pointer_effect

_LOGGER = logging.getLogger(__name__)

_ERROR_BANNER_STYLE = (
    "QLabel { color: white; background-color: red; padding: 4px 8px; font-size: 16px; }"
)
_TOOL_BUTTON_STYLE = (
    f"QToolButton {{ border: none; border-radius: {TOOL_BUTTON_SIZE_PX // 2}px; "
    "background-color: rgba(255, 255, 255, 200); }"
    "QToolButton:checked { background-color: rgba(255, 96, 96, 220); }"
)


class _ErrorBanner(QLabel):
    """Banner pinned to the bottom edge; a click dismisses it."""

    clicked = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWordWrap(True)
        self.setStyleSheet(_ERROR_BANNER_STYLE)
        self.setCursor(Qt.CursorShape.PointingHandCursor)

    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802 - Qt override
        self.clicked.emit()
        event.accept()


class ClipFlappersWidget(QWidget):
    """Render target and input surface for :class:`ClipInteractionController`.

    The widget never mutates the clip rectangle itself. It translates Qt input
    into controller calls and repaints whatever rectangle the controller asks
    it to draw.
    """

    clipUpdated = Signal(str, object, object)
    imageChanged = Signal(bool)

    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        options: ClipOptions | Mapping[str, Any] | None = None,
        on_update_clip: UpdateClipCallback | None = None,
        event_bus: EventBus | None = None,
        window_pointer_effect: WindowPointerEffect = use_window_pointer_effect,
    ) -> None:
        super().__init__(parent)
        if not isinstance(options, ClipOptions):
            options = load_options(options)
        self._options = options
        self._on_update_clip = on_update_clip
        self._disposed = False
        self._image_shown = False

        self._controller = ClipInteractionController(
            view_size=options.view_size,
            clip_size=options.clip_size,
            overflow=options.overflow,
            error_messages={"invalid_image_file": options.error_messages.invalid_image_file},
            on_update_clip=self._handle_update_clip,
            on_request_update=self._handle_request_update,
            on_error_message=self._handle_error_message,
            on_cursor_change=self._handle_cursor_change,
            event_bus=event_bus,
            window_pointer_effect=window_pointer_effect,
            timer_parent=self,
        )

        self.setFixedSize(round(options.view_size.width), round(options.view_size.height))
        self.setAcceptDrops(True)
        self.setMouseTracking(True)

        self._drop_button = QPushButton("Select image", self)
        self._drop_button.setCursor(Qt.CursorShape.PointingHandCursor)
        self._drop_button.setFlat(True)
        self._drop_button.clicked.connect(self.open_file_dialog)

        self._tools = QWidget(self)
        tools_layout = QVBoxLayout(self._tools)
        tools_layout.setContentsMargins(0, 0, 0, 0)
        tools_layout.setSpacing(TOOL_BUTTON_SPACING_PX)
        self._delete_button = self._create_tool_button("✕", "Remove image")
        self._delete_button.clicked.connect(self.reset)
        self._overflow_button = self._create_tool_button("⤢", "Allow clip outside the image")
        self._overflow_button.setCheckable(True)
        self._overflow_button.clicked.connect(self.toggle_overflow)
        tools_layout.addWidget(self._delete_button)
        tools_layout.addWidget(self._overflow_button)
        self._tools.adjustSize()

        self._error_banner = _ErrorBanner(self)
        self._error_banner.clicked.connect(self._controller.hide_error)
        self._error_banner.hide()

        self._sync_chrome()
        self._layout_children()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def controller(self) -> ClipInteractionController:
        return self._controller

    def options(self) -> ClipOptions:
        return self._options

    def load_file(self, path: Path | str) -> bool:
        """Load an image file; invalid files show the error banner."""
        return self._controller.load_file(path)

    def load_base64(self, payload: str) -> bool:
        """Load an image from a base64 string or ``data:`` URL."""
        return self._controller.load_image(payload)

    def clip(self) -> str:
        """Return the current clip as a PNG ``data:`` URL."""
        return self._controller.clip()

    def reset(self) -> None:
        self._controller.reset()

    def toggle_overflow(self) -> None:
        self._controller.toggle_overflow()
        self._sync_chrome()

    def dispose(self) -> None:
        """Release the controller and strip the widget down to an empty box."""
        if self._disposed:
            return
        self._controller.dispose()
        self._disposed = True
        for child in (self._drop_button, self._tools, self._error_banner):
            child.hide()
            child.deleteLater()
        self.setAcceptDrops(False)
        self.update()

    def open_file_dialog(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Select image", "", IMAGE_FILE_FILTER)
        if path:
            self.load_file(path)

    def image_transform(self) -> QTransform | None:
        """Return the image-to-widget transform, or None without an image."""
        view_box = self._controller.view_box()
        if view_box is None:
            return None
        scale = self._controller.scale()
        if scale <= 0.0:
            return None
        factor = 1.0 / scale
        offset_x = (self.width() - view_box.width * factor) / 2.0 - view_box.x * factor
        offset_y = (self.height() - view_box.height * factor) / 2.0 - view_box.y * factor
        return QTransform(factor, 0.0, 0.0, factor, offset_x, offset_y)

    def map_to_image(self, pos: QPointF) -> Vector | None:
        transform = self.image_transform()
        if transform is None:
            return None
        inverted, invertible = transform.inverted()
        if not invertible:
            return None
        mapped = inverted.map(pos)
        return Vector(mapped.x(), mapped.y())

    # ------------------------------------------------------------------
    # Qt overrides
    # ------------------------------------------------------------------
    def paintEvent(self, event: QPaintEvent) -> None:  # noqa: N802 - Qt override
        del event  # unused
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
            image = self._controller.image()
            transform = self.image_transform()
            if self._disposed or image is None or transform is None:
                return
            painter.setClipRect(QRectF(self.rect()))
            painter.setTransform(transform)
            painter.drawImage(QPointF(0.0, 0.0), image)
            rect = self._controller.clip_rect()
            if rect is not None:
                self._paint_clip(painter, rect)
        finally:
            painter.end()

    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802 - Qt override
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        point = self.map_to_image(event.position())
        mode = self._controller.hit_test(point) if point is not None else DragMode.NONE
        if mode is DragMode.NONE:
            super().mousePressEvent(event)
            return
        # Global coordinates match what the window-level filter reports.
        self._controller.handle_pointer_down(mode, event.globalPosition())
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:  # noqa: N802 - Qt override
        # Drag movement arrives through the window pointer filter; here only
        # the hover cursor is maintained.
        if not self._controller.is_dragging():
            point = self.map_to_image(event.position())
            mode = self._controller.hit_test(point) if point is not None else DragMode.NONE
            self._handle_cursor_change(cursor_for_mode(mode) if mode is not DragMode.NONE else None)
        super().mouseMoveEvent(event)

    def dragEnterEvent(self, event: QDragEnterEvent) -> None:  # noqa: N802 - Qt override
        if event.mimeData().hasUrls():
            event.acceptProposedAction()
            return
        event.ignore()

    def dropEvent(self, event: QDropEvent) -> None:  # noqa: N802 - Qt override
        urls = event.mimeData().urls()
        if not urls:
            event.ignore()
            return
        local = urls[0].toLocalFile()
        if not local:
            _LOGGER.debug("Ignoring drop of non-local URL %s", urls[0].toString())
            event.ignore()
            return
        event.acceptProposedAction()
        self.load_file(local)

    def resizeEvent(self, event: QResizeEvent) -> None:  # noqa: N802 - Qt override
        super().resizeEvent(event)
        self._layout_children()

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802 - Qt override
        self.dispose()
        super().closeEvent(event)

    # ------------------------------------------------------------------
    # Controller callbacks
    # ------------------------------------------------------------------
    def _handle_update_clip(self, payload: str, rect: Rect, size: Size) -> None:
        if self._on_update_clip is not None:
            self._on_update_clip(payload, rect, size)
        self.clipUpdated.emit(payload, rect, size)

    def _handle_request_update(self, rect: Rect | None) -> None:
        del rect  # the painter reads the controller state directly
        self._sync_chrome()
        self.update()

    def _handle_error_message(self, message: str | None) -> None:
        if self._disposed:
            return
        if message is None:
            self._error_banner.hide()
            return
        self._error_banner.setText(message)
        self._layout_children()
        self._error_banner.show()
        self._error_banner.raise_()

    def _handle_cursor_change(self, cursor: Qt.CursorShape | None) -> None:
        if cursor is None:
            self.unsetCursor()
        else:
            self.setCursor(cursor)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _create_tool_button(self, text: str, tooltip: str) -> QToolButton:
        button = QToolButton(self._tools)
        button.setText(text)
        button.setToolTip(tooltip)
        button.setFixedSize(TOOL_BUTTON_SIZE_PX, TOOL_BUTTON_SIZE_PX)
        button.setCursor(Qt.CursorShape.PointingHandCursor)
        button.setStyleSheet(_TOOL_BUTTON_STYLE)
        return button

    def _paint_clip(self, painter: QPainter, rect: Rect) -> None:
        colour = QColor(OUTLINE_COLOR)
        scale = self._controller.scale()
        outline = QPolygonF(
            [QPointF(v.x, v.y) for v in rect_outline_polygon(rect, OUTLINE_STROKE_PX * scale)]
        )
        path = QPainterPath()
        path.setFillRule(Qt.FillRule.OddEvenFill)
        path.addPolygon(outline)
        painter.fillPath(path, colour)

        radius = self._controller.handle_radius()
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(colour)
        painter.drawEllipse(QPointF(rect.x, rect.y), radius, radius)
        painter.drawEllipse(QPointF(rect.right, rect.bottom), radius, radius)

    def _sync_chrome(self) -> None:
        if self._disposed:
            return
        loaded = self._controller.has_image()
        self._drop_button.setVisible(not loaded)
        self._tools.setVisible(loaded)
        self._overflow_button.setChecked(self._controller.overflow())
        if self._tools.isVisible():
            self._tools.raise_()
        if loaded != self._image_shown:
            self._image_shown = loaded
            self.imageChanged.emit(loaded)

    def _layout_children(self) -> None:
        if self._disposed:
            return
        self._drop_button.setGeometry(self.rect())
        tools_size = self._tools.sizeHint()
        self._tools.setGeometry(
            self.width() - tools_size.width() - 2, 2, tools_size.width(), tools_size.height()
        )
        banner_height = self._error_banner.heightForWidth(self.width())
        if banner_height <= 0:
            banner_height = self._error_banner.sizeHint().height()
        self._error_banner.setGeometry(0, self.height() - banner_height, self.width(), banner_height)

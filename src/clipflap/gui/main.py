"""GUI entry point for the clipflap demo window."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from ..core.geometry import Rect, Size
from ..errors import ClipFlapError
from ..utils.image_loader import base64_to_image
from .ui.widgets import ClipFlappersWidget

_LOGGER = logging.getLogger(__name__)

DEMO_VIEW_SIZE = {"width": 300, "height": 200}
THUMBNAIL_HEIGHT_PX = 80


class DemoWindow(QMainWindow):
    """Clip widget plus buttons that export the clip into a thumbnail strip."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("clipflap")

        central = QWidget(self)
        layout = QVBoxLayout(central)

        self.clipper = ClipFlappersWidget(
            central,
            options={"view_size": DEMO_VIEW_SIZE, "clip_size": DEMO_VIEW_SIZE},
            on_update_clip=self._log_clip_update,
        )
        layout.addWidget(self.clipper, 0, Qt.AlignmentFlag.AlignHCenter)

        buttons = QHBoxLayout()
        self.clip_button = QPushButton("Clip", central)
        self.clip_button.clicked.connect(self.export_clip)
        self.dispose_button = QPushButton("Dispose", central)
        self.dispose_button.clicked.connect(self.dispose_clipper)
        buttons.addWidget(self.clip_button)
        buttons.addWidget(self.dispose_button)
        layout.addLayout(buttons)

        strip = QWidget()
        self._thumbnails = QHBoxLayout(strip)
        self._thumbnails.setAlignment(Qt.AlignmentFlag.AlignLeft)
        scroller = QScrollArea(central)
        scroller.setWidgetResizable(True)
        scroller.setFixedHeight(THUMBNAIL_HEIGHT_PX + 24)
        scroller.setWidget(strip)
        layout.addWidget(scroller)

        self.setCentralWidget(central)

    def thumbnail_count(self) -> int:
        return self._thumbnails.count()

    def export_clip(self) -> None:
        try:
            data_url = self.clipper.clip()
        except ClipFlapError as exc:
            _LOGGER.info("Nothing to clip: %s", exc)
            self.statusBar().showMessage(str(exc), 3000)
            return
        pixmap = QPixmap.fromImage(base64_to_image(data_url))
        label = QLabel()
        label.setPixmap(
            pixmap.scaledToHeight(THUMBNAIL_HEIGHT_PX, Qt.TransformationMode.SmoothTransformation)
        )
        self._thumbnails.addWidget(label)

    def dispose_clipper(self) -> None:
        self.clipper.dispose()
        self.clip_button.setEnabled(False)
        self.dispose_button.setEnabled(False)

    def _log_clip_update(self, payload: str, rect: Rect, size: Size) -> None:
        del payload  # unused
        _LOGGER.info("Clip updated: %s -> %sx%s", rect.as_tuple(), size.width, size.height)


def main(argv: list[str] | None = None) -> int:
    """Launch the Qt application and return the exit code."""

    arguments = list(sys.argv if argv is None else argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    app = QApplication(arguments)
    window = DemoWindow()
    window.show()
    # Allow opening an image directly via argv[1].
    if len(arguments) > 1:
        window.clipper.load_file(Path(arguments[1]))
    return app.exec()


if __name__ == "__main__":  # pragma: no cover - manual launch
    raise SystemExit(main())

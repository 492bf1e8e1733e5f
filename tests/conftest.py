import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

pytest.importorskip("PySide6", reason="PySide6 is required for clipflap tests", exc_type=ImportError)

from PySide6.QtGui import QColor, QImage  # noqa: E402
from PySide6.QtWidgets import QApplication  # noqa: E402


@pytest.fixture(scope="session")
def qapp() -> QApplication:
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


def solid_image(width: int = 200, height: int = 100, color: str = "#ff0000") -> QImage:
    image = QImage(width, height, QImage.Format.Format_ARGB32)
    image.fill(QColor(color))
    return image


@pytest.fixture()
def make_payload(qapp):
    """Return a factory producing PNG data URLs of solid images."""

    from clipflap.utils.image_loader import qimage_to_base64

    def _make(width: int = 200, height: int = 100, color: str = "#ff0000") -> str:
        return qimage_to_base64(solid_image(width, height, color))

    return _make


class FakeWindowPointer:
    """Stand-in for the window pointer effect that records installs."""

    def __init__(self) -> None:
        self.installs = 0
        self.disposals = 0
        self.on_move = None
        self.on_up = None

    def __call__(self, *, on_move, on_up):
        self.installs += 1
        self.on_move = on_move
        self.on_up = on_up

        def dispose() -> None:
            self.disposals += 1

        return dispose

    @property
    def active(self) -> int:
        return self.installs - self.disposals


@pytest.fixture()
def window_pointer() -> FakeWindowPointer:
    return FakeWindowPointer()

from unittest.mock import MagicMock

import pytest
from PySide6.QtCore import QEvent, QPointF, Qt
from PySide6.QtGui import QMouseEvent

from clipflap.core.geometry import Rect, Size, Vector
from clipflap.gui.ui.widgets import ClipFlappersWidget
from clipflap.gui.ui.widgets.clip_rect import DragMode


@pytest.fixture()
def widget(qapp, window_pointer):
    on_update = MagicMock()
    widget = ClipFlappersWidget(
        options={"view_size": {"width": 100, "height": 100}, "clip_size": {"width": 100, "height": 100}},
        on_update_clip=on_update,
        window_pointer_effect=window_pointer,
    )
    widget.on_update = on_update
    yield widget
    widget.deleteLater()


def _press(local: QPointF, global_pos: QPointF) -> QMouseEvent:
    return QMouseEvent(
        QEvent.Type.MouseButtonPress,
        local,
        global_pos,
        Qt.MouseButton.LeftButton,
        Qt.MouseButton.LeftButton,
        Qt.KeyboardModifier.NoModifier,
    )


def test_widget_size_follows_view_size(widget):
    assert (widget.width(), widget.height()) == (100, 100)
    assert widget.acceptDrops()


def test_chrome_switches_with_image(widget, make_payload):
    assert not widget._drop_button.isHidden()
    assert widget._tools.isHidden()

    assert widget.load_base64(make_payload(200, 100))

    assert widget._drop_button.isHidden()
    assert not widget._tools.isHidden()

    widget.reset()

    assert not widget._drop_button.isHidden()
    assert widget.controller.clip_rect() is None


def test_map_to_image_inverts_view_transform(widget, make_payload):
    assert widget.map_to_image(QPointF(10, 10)) is None

    widget.load_base64(make_payload(200, 100))

    point = widget.map_to_image(QPointF(25, 25))
    assert (point.x, point.y) == pytest.approx((50, 0))


def test_press_on_handle_starts_drag_and_release_notifies(widget, window_pointer, make_payload):
    widget.load_base64(make_payload(200, 100))
    spy = MagicMock()
    widget.clipUpdated.connect(spy)

    widget.mousePressEvent(_press(QPointF(25, 25), QPointF(125, 125)))

    assert widget.controller.drag_mode() is DragMode.MOVE
    window_pointer.on_move(QPointF(135, 125))
    window_pointer.on_up()

    rect = Rect(70, 0, 100, 100)
    assert widget.controller.clip_rect() == rect
    widget.on_update.assert_called_once_with(widget.controller.payload(), rect, Size(100, 100))
    spy.assert_called_once()


def test_image_changed_fires_only_on_load_and_reset(widget, window_pointer, make_payload):
    spy = MagicMock()
    widget.imageChanged.connect(spy)

    widget.load_base64(make_payload(200, 100))
    widget.mousePressEvent(_press(QPointF(25, 25), QPointF(125, 125)))
    window_pointer.on_move(QPointF(130, 125))
    window_pointer.on_move(QPointF(135, 125))
    window_pointer.on_up()
    widget.reset()

    assert [call.args for call in spy.call_args_list] == [(True,), (False,)]


def test_press_away_from_handles_does_nothing(widget, window_pointer, make_payload):
    widget.load_base64(make_payload(200, 100))

    widget.mousePressEvent(_press(QPointF(50, 50), QPointF(150, 150)))

    assert not widget.controller.is_dragging()
    assert window_pointer.installs == 0


def test_paint_draws_image_and_outline(widget, make_payload):
    widget.load_base64(make_payload(200, 100, "#0000ff"))

    image = widget.grab().toImage()

    inside = image.pixelColor(60, 60)
    assert (inside.red(), inside.green(), inside.blue()) == (0, 0, 255)
    outline = image.pixelColor(60, 25)
    assert outline.red() > 200
    assert outline.blue() < 60


def test_overflow_button_toggles_policy(widget, make_payload):
    widget.load_base64(make_payload(200, 100))

    widget._overflow_button.click()

    assert widget.controller.overflow() is True
    assert widget._overflow_button.isChecked()


def test_delete_button_resets(widget, make_payload):
    widget.load_base64(make_payload(200, 100))

    widget._delete_button.click()

    assert not widget.controller.has_image()


def test_invalid_image_shows_banner_until_clicked(widget):
    assert not widget.load_base64("%%%")

    assert not widget._error_banner.isHidden()
    assert widget._error_banner.text() == "Invalid image file."

    widget._error_banner.clicked.emit()

    assert widget._error_banner.isHidden()
    assert not widget.controller.is_error_visible()


def test_custom_error_message_option(qapp, window_pointer):
    widget = ClipFlappersWidget(
        options={"error_messages": {"invalid_image_file": "Unsupported"}},
        window_pointer_effect=window_pointer,
    )
    widget.load_base64("%%%")
    assert widget._error_banner.text() == "Unsupported"


def test_clip_returns_data_url(widget, make_payload):
    widget.load_base64(make_payload(200, 100))
    assert widget.clip().startswith("data:image/png;base64,")


def test_dispose_tears_down(widget, make_payload):
    widget.load_base64(make_payload(200, 100))

    widget.dispose()
    widget.dispose()

    assert widget.controller.is_disposed()
    assert not widget.acceptDrops()
    assert not widget.load_base64(make_payload(200, 100))
    assert widget.map_to_image(QPointF(25, 25)) is None


def test_load_file(widget, tmp_path):
    from PIL import Image

    path = tmp_path / "pic.png"
    Image.new("RGB", (50, 50), "white").save(path)

    assert widget.load_file(path)
    assert widget.controller.image_bounds() == Rect(0, 0, 50, 50)
    assert widget.controller.hit_test(Vector(0, 0)) is DragMode.MOVE


def test_close_disposes_controller(widget, make_payload):
    widget.load_base64(make_payload(200, 100))
    widget.show()

    widget.close()

    assert widget.controller.is_disposed()

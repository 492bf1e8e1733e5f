import pytest

from clipflap.core.geometry import Rect, Vector
from clipflap.gui.ui.widgets.clip_rect import DragMode, HitTester, cursor_for_mode

from PySide6.QtCore import Qt


@pytest.fixture()
def hit_tester():
    return HitTester(handle_radius=8.0)


def test_no_rect_hits_nothing(hit_tester):
    assert hit_tester.test(Vector(0, 0), None) is DragMode.NONE


def test_top_left_handle_starts_move(hit_tester):
    rect = Rect(50, 0, 100, 100)
    assert hit_tester.test(Vector(55, 5), rect) is DragMode.MOVE


def test_bottom_right_handle_starts_resize(hit_tester):
    rect = Rect(50, 0, 100, 100)
    assert hit_tester.test(Vector(147, 97), rect) is DragMode.RESIZE


def test_inside_rect_away_from_handles_hits_nothing(hit_tester):
    rect = Rect(50, 0, 100, 100)
    assert hit_tester.test(Vector(100, 50), rect) is DragMode.NONE


def test_radius_scales_with_view_to_image_scale(hit_tester):
    rect = Rect(50, 0, 100, 100)
    point = Vector(62, 0)
    assert hit_tester.test(point, rect, scale=1.0) is DragMode.NONE
    assert hit_tester.test(point, rect, scale=2.0) is DragMode.MOVE
    assert hit_tester.radius_for_scale(2.0) == 16.0


def test_resize_wins_when_handles_overlap(hit_tester):
    rect = Rect(10, 10, 1, 1)
    assert hit_tester.test(Vector(10, 10), rect) is DragMode.RESIZE


def test_cursor_for_mode():
    assert cursor_for_mode(DragMode.MOVE) == Qt.CursorShape.SizeAllCursor
    assert cursor_for_mode(DragMode.RESIZE) == Qt.CursorShape.SizeFDiagCursor
    assert cursor_for_mode(DragMode.NONE) == Qt.CursorShape.ArrowCursor

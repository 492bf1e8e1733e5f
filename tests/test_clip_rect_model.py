from clipflap.core.geometry import Rect
from clipflap.gui.ui.widgets.clip_rect.model import ClipRectModel

IMAGE = Rect(0, 0, 200, 100)


def test_model_starts_empty():
    model = ClipRectModel()
    assert model.rect is None
    assert not model.has_rect()
    assert model.snapshot() is None


def test_propose_with_overflow_returns_candidate_unchanged():
    candidate = Rect(-50, -50, 400, 400)
    assert ClipRectModel.propose(candidate, IMAGE, True) is candidate


def test_propose_without_overflow_fits_inside_image():
    proposed = ClipRectModel.propose(Rect(150, -20, 100, 100), IMAGE, False)
    assert proposed == Rect(100, 0, 100, 100)


def test_accept_reports_changes_only():
    model = ClipRectModel()
    assert model.accept(Rect(0, 0, 10, 10))
    assert not model.accept(Rect(0, 0, 10, 10))
    assert model.accept(Rect(1, 0, 10, 10))
    assert model.rect == Rect(1, 0, 10, 10)


def test_initialise_centres_view_box_inside_image():
    model = ClipRectModel()
    rect = model.initialise(Rect(0, -50, 200, 200), IMAGE, overflow=False)
    assert rect == Rect(50, 0, 100, 100)
    assert model.rect == rect


def test_initialise_with_overflow_keeps_view_box():
    model = ClipRectModel()
    view_box = Rect(0, -50, 200, 200)
    assert model.initialise(view_box, IMAGE, overflow=True) == view_box


def test_snapshot_survives_later_changes():
    model = ClipRectModel()
    model.accept(Rect(0, 0, 10, 10))
    anchor = model.snapshot()
    model.accept(Rect(5, 5, 10, 10))
    assert anchor == Rect(0, 0, 10, 10)


def test_clear_drops_rect():
    model = ClipRectModel()
    model.accept(Rect(0, 0, 10, 10))
    model.clear()
    assert model.rect is None

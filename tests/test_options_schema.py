import pytest

from clipflap.core.geometry import Size
from clipflap.errors import SettingsValidationError
from clipflap.settings import load_options
from clipflap.settings.schema import DEFAULT_OPTIONS, merge_with_defaults


def test_defaults():
    options = load_options()
    assert options.view_size == Size(124, 124)
    assert options.clip_size == Size(124, 124)
    assert options.overflow is False
    assert options.error_messages.invalid_image_file == "Invalid image file."


def test_partial_override_keeps_other_defaults():
    options = load_options({"clip_size": {"width": 300, "height": 200}, "overflow": True})
    assert options.clip_size == Size(300, 200)
    assert options.view_size == Size(124, 124)
    assert options.overflow is True


def test_error_messages_are_merged():
    merged = merge_with_defaults({"error_messages": {"invalid_image_file": "Bad file"}})
    assert merged["error_messages"] == {"invalid_image_file": "Bad file"}
    assert DEFAULT_OPTIONS["error_messages"]["invalid_image_file"] == "Invalid image file."


@pytest.mark.parametrize(
    "data",
    [
        {"view_size": {"width": 0, "height": 10}},
        {"clip_size": {"width": 10}},
        {"overflow": "yes"},
        {"error_messages": {"invalid_image_file": 3}},
        {"colour": "red"},
    ],
)
def test_invalid_options_raise(data):
    with pytest.raises(SettingsValidationError):
        load_options(data)

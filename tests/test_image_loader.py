import base64

import pytest
from PIL import Image
from PySide6.QtGui import QImage

from clipflap.core.geometry import Rect, Size
from clipflap.errors import ExportError, InvalidImageError
from clipflap.utils.image_loader import (
    base64_to_image,
    file_to_base64,
    payload_to_bytes,
    qimage_from_bytes,
    render_clip,
)

from conftest import solid_image


def test_payload_to_bytes_accepts_data_url_and_bare_base64():
    encoded = base64.b64encode(b"abc").decode("ascii")
    assert payload_to_bytes(f"data:image/png;base64,{encoded}") == b"abc"
    assert payload_to_bytes(encoded) == b"abc"


@pytest.mark.parametrize("payload", ["data:text/plain,hello", "not base64!", "data:image/png;base64"])
def test_payload_to_bytes_rejects_garbage(payload):
    with pytest.raises(InvalidImageError):
        payload_to_bytes(payload)


def test_file_to_base64_uses_mime_type(tmp_path):
    path = tmp_path / "pixel.png"
    Image.new("RGB", (3, 2), "green").save(path)

    payload = file_to_base64(path)

    assert payload.startswith("data:image/png;base64,")
    assert payload_to_bytes(payload) == path.read_bytes()


def test_file_to_base64_propagates_os_errors(tmp_path):
    with pytest.raises(OSError):
        file_to_base64(tmp_path / "missing.png")


def test_base64_to_image_decodes_pillow_written_file(qapp, tmp_path):
    path = tmp_path / "photo.jpg"
    Image.new("RGB", (30, 20), "blue").save(path, "JPEG")

    image = base64_to_image(file_to_base64(path))

    assert (image.width(), image.height()) == (30, 20)


def test_base64_to_image_rejects_non_images(qapp):
    payload = base64.b64encode(b"plain text, not pixels").decode("ascii")
    with pytest.raises(InvalidImageError):
        base64_to_image(payload)


def test_qimage_from_bytes_returns_none_for_garbage(qapp):
    assert qimage_from_bytes(b"\x00\x01\x02") is None


def test_render_clip_scales_region_to_output(qapp):
    image = solid_image(200, 100, "#00ff00")

    output = render_clip(image, Rect(50, 0, 100, 100), Size(10, 10))

    assert (output.width(), output.height()) == (10, 10)
    assert output.pixelColor(5, 5).green() == 255
    assert output.format() == QImage.Format.Format_ARGB32_Premultiplied


def test_render_clip_rejects_empty_rect(qapp):
    with pytest.raises(ExportError):
        render_clip(solid_image(), Rect(0, 0, 0, 10), Size(10, 10))

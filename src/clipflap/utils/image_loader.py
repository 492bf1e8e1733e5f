"""Helpers for moving images between files, base64 payloads and Qt."""

from __future__ import annotations

import base64
import binascii
import logging
import mimetypes
from io import BytesIO
from pathlib import Path
from typing import Optional

from PIL import Image, ImageOps
from PIL.ImageQt import ImageQt
from PySide6.QtCore import QBuffer, QByteArray, QIODevice, QPointF, Qt
from PySide6.QtGui import QImage, QImageReader, QPainter

from ..config import EXPORT_IMAGE_FORMAT, EXPORT_MIME_TYPE
from ..core.geometry import Rect, Size
from ..errors import ExportError, InvalidImageError

_LOGGER = logging.getLogger(__name__)

_DATA_URL_PREFIX = "data:"


def file_to_base64(source: Path) -> str:
    """Return the contents of *source* as a ``data:`` URL.

    ``OSError`` from reading the file propagates to the caller.
    """

    data = Path(source).read_bytes()
    mime, _ = mimetypes.guess_type(str(source))
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime or 'application/octet-stream'};base64,{encoded}"


def payload_to_bytes(payload: str) -> bytes:
    """Decode a ``data:`` URL or a bare base64 string into raw bytes."""

    body = payload.strip()
    if body.startswith(_DATA_URL_PREFIX):
        header, sep, body = body.partition(",")
        if not sep or ";base64" not in header:
            raise InvalidImageError("Image payload is not a base64 data URL")
    try:
        return base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidImageError(f"Image payload is not valid base64: {exc}") from exc


def qimage_from_bytes(data: bytes) -> Optional[QImage]:
    """Return a :class:`QImage` decoded from *data*, or None when undecodable."""

    buffer = QBuffer()
    buffer.setData(QByteArray(data))
    buffer.open(QIODevice.OpenModeFlag.ReadOnly)
    reader = QImageReader(buffer)
    # Honour EXIF orientation so the clip rectangle matches what users see.
    reader.setAutoTransform(True)
    image = reader.read()
    buffer.close()
    if not image.isNull():
        return image
    return _load_with_pillow(data)


def _load_with_pillow(data: bytes) -> Optional[QImage]:
    try:
        with Image.open(BytesIO(data)) as img:
            img = ImageOps.exif_transpose(img)
            qt_image = ImageQt(img.convert("RGBA"))
    except Exception:
        _LOGGER.debug("Pillow failed to decode image bytes", exc_info=True)
        return None
    image = QImage(qt_image)
    if image.isNull():
        return None
    return image


def base64_to_image(payload: str) -> QImage:
    """Decode *payload* into a :class:`QImage`.

    Raises
    ------
    InvalidImageError
        If the payload is not base64 or the bytes are not a supported image.
    """

    image = qimage_from_bytes(payload_to_bytes(payload))
    if image is None or image.isNull() or image.width() <= 0 or image.height() <= 0:
        raise InvalidImageError("Image payload could not be decoded")
    return image


def qimage_to_base64(image: QImage, fmt: str = EXPORT_IMAGE_FORMAT) -> str:
    """Encode *image* as a ``data:`` URL in *fmt*."""

    array = QByteArray()
    buffer = QBuffer(array)
    buffer.open(QIODevice.OpenModeFlag.WriteOnly)
    try:
        if not image.save(buffer, fmt):
            raise ExportError(f"Failed to encode image as {fmt}")
    finally:
        buffer.close()
    mime = EXPORT_MIME_TYPE if fmt == EXPORT_IMAGE_FORMAT else f"image/{fmt.lower()}"
    encoded = bytes(array.toBase64()).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def render_clip(image: QImage, rect: Rect, size: Size) -> QImage:
    """Rasterise the *rect* region of *image* into a *size* sized image.

    Parts of *rect* outside the source image stay transparent, which is how
    an overflowing clip is exported.
    """

    width = max(1, round(size.width))
    height = max(1, round(size.height))
    if rect.width <= 0 or rect.height <= 0:
        raise ExportError(f"Cannot export an empty clip rectangle: {rect}")

    output = QImage(width, height, QImage.Format.Format_ARGB32_Premultiplied)
    output.fill(Qt.GlobalColor.transparent)
    painter = QPainter(output)
    try:
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
        painter.scale(width / rect.width, height / rect.height)
        painter.translate(-rect.x, -rect.y)
        painter.drawImage(QPointF(0.0, 0.0), image)
    finally:
        painter.end()
    return output


def clip_image(image: QImage, rect: Rect, size: Size) -> str:
    """Return the clipped region of *image* as a PNG ``data:`` URL."""

    return qimage_to_base64(render_clip(image, rect, size))


__all__ = [
    "base64_to_image",
    "clip_image",
    "file_to_base64",
    "payload_to_bytes",
    "qimage_from_bytes",
    "qimage_to_base64",
    "render_clip",
]

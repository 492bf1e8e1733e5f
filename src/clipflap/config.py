"""Default configuration values for clipflap."""

from __future__ import annotations

from typing import Final

# The visible widget box and the output clip box default to the same square.
DEFAULT_VIEW_SIZE: Final[tuple[int, int]] = (124, 124)
DEFAULT_CLIP_SIZE: Final[tuple[int, int]] = (124, 124)
DEFAULT_OVERFLOW: Final[bool] = False

DEFAULT_ERROR_MESSAGES: Final[dict[str, str]] = {
    "invalid_image_file": "Invalid image file.",
}

# ---------------------------------------------------------------------------
# UI interaction constants
# ---------------------------------------------------------------------------

# Handle radius and outline stroke are expressed in screen pixels and
# multiplied by the view-to-image scale before painting/hit testing.
HANDLE_RADIUS_PX: Final[float] = 8.0
OUTLINE_STROKE_PX: Final[float] = 4.0
OUTLINE_COLOR: Final[str] = "#ff0000"

ERROR_MESSAGE_TIMEOUT_MS: Final[int] = 5000

TOOL_BUTTON_SIZE_PX: Final[int] = 20
TOOL_BUTTON_SPACING_PX: Final[int] = 6

# Export format of :func:`clipflap.utils.image_loader.clip_image`.
EXPORT_IMAGE_FORMAT: Final[str] = "PNG"
EXPORT_MIME_TYPE: Final[str] = "image/png"

IMAGE_FILE_FILTER: Final[str] = "Images (*.png *.jpg *.jpeg *.bmp *.gif *.webp *.tif *.tiff)"

# Smallest clip width/height (in image pixels) a resize gesture may produce.
MIN_CLIP_EXTENT: Final[float] = 1.0

"""Events published by the clip interaction controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .bus import Event

if TYPE_CHECKING:
    from ..core.geometry import Rect, Size


@dataclass(kw_only=True)
class ClipUpdatedEvent(Event):
    """A completed gesture or overflow toggle changed the clip rectangle."""

    payload: str
    clip_rect: Rect
    clip_size: Size


@dataclass(kw_only=True)
class ImageLoadedEvent(Event):
    """A new source image was decoded and an initial clip computed."""

    width: int
    height: int
    clip_rect: Rect


@dataclass(kw_only=True)
class ClipResetEvent(Event):
    """The image and clip rectangle were discarded."""

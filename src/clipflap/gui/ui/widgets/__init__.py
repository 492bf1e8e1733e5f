"""Reusable Qt widgets for the clipflap GUI."""

from .clip_flappers import ClipFlappersWidget

__all__ = ["ClipFlappersWidget"]

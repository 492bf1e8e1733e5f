"""
Clip rectangle interaction module.

This package provides the clip rectangle model, the move/resize strategies
and the controller that drives them from pointer events, implementing
Strategy and State patterns for better maintainability.
"""

from .controller import ClipInteractionController
from .hit_tester import HitTester
from .model import ClipRectModel
from .utils import DragArgs, DragMode, cursor_for_mode

__all__ = [
    "ClipInteractionController",
    "ClipRectModel",
    "DragArgs",
    "DragMode",
    "HitTester",
    "cursor_for_mode",
]

"""
Interaction strategies for the clip rectangle.

This package implements the Strategy pattern for the two clip gestures
(move vs resize), keeping the delta arithmetic out of the controller.
"""

from .abstract import InteractionStrategy
from .move_strategy import MoveStrategy
from .resize_strategy import ResizeStrategy

__all__ = [
    "InteractionStrategy",
    "MoveStrategy",
    "ResizeStrategy",
]

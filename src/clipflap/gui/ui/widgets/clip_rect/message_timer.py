"""
Single-shot timer used to hide the transient error banner.
"""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import QObject, QTimer


class TransientMessageTimer:
    """Owns the banner timeout; a new message supersedes the pending one."""

    def __init__(
        self,
        *,
        interval_ms: int,
        on_timeout: Callable[[], None],
        timer_parent: QObject | None = None,
    ) -> None:
        """Initialize the timer.

        Parameters
        ----------
        interval_ms:
            How long a message stays visible.
        on_timeout:
            Callback when the message should be hidden.
        timer_parent:
            Parent QObject for the timer (optional).
        """
        self._on_timeout = on_timeout
        self._timer = QTimer(timer_parent)
        self._timer.setSingleShot(True)
        self._timer.setInterval(int(interval_ms))
        self._timer.timeout.connect(self._handle_timeout)

    def interval(self) -> int:
        return self._timer.interval()

    def is_active(self) -> bool:
        return self._timer.isActive()

    def restart(self) -> None:
        """Cancel any pending timeout and start counting again."""
        self._timer.stop()
        self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()

    def _handle_timeout(self) -> None:
        self._timer.stop()
        self._on_timeout()

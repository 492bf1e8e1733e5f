"""Central reporting for recoverable clip widget failures."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from ..events.bus import Event, EventBus


class ErrorSeverity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(kw_only=True)
class ErrorOccurredEvent(Event):
    error: Exception
    severity: ErrorSeverity
    context: dict = field(default_factory=dict)


UiCallback = Callable[[str, ErrorSeverity], None]


class ErrorHandler:
    """Log an error, publish it on the bus and surface it to the banner.

    The banner shows *user_message* when supplied so that configured,
    translated texts such as ``error_messages.invalid_image_file`` reach the
    user instead of the raw exception string.
    """

    def __init__(self, logger: logging.Logger, event_bus: EventBus):
        self._logger = logger
        self._events = event_bus
        self._ui_callback: Optional[UiCallback] = None

    def register_ui_callback(self, callback: Optional[UiCallback]) -> None:
        self._ui_callback = callback

    def handle(
        self,
        error: Exception,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: dict | None = None,
        *,
        user_message: str | None = None,
    ) -> None:
        context = dict(context or {})
        log_method = getattr(self._logger, severity.value, self._logger.error)
        log_method("%s: %s", error.__class__.__name__, error, extra={"clip_context": context})

        self._events.publish(ErrorOccurredEvent(error=error, severity=severity, context=context))

        if self._ui_callback and severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL):
            self._ui_callback(user_message or str(error), severity)

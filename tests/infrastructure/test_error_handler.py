import logging
from unittest.mock import Mock

from clipflap.errors import InvalidImageError
from clipflap.errors.handler import ErrorHandler, ErrorOccurredEvent, ErrorSeverity
from clipflap.events.bus import EventBus


def test_handle_error_logs_and_publishes():
    logger = Mock(spec=logging.Logger)
    event_bus = Mock(spec=EventBus)
    handler = ErrorHandler(logger, event_bus)

    error = InvalidImageError("bad bytes")
    handler.handle(error, ErrorSeverity.ERROR, {"path": "a.png"})

    logger.error.assert_called()
    assert logger.error.call_args.kwargs["extra"] == {"clip_context": {"path": "a.png"}}

    event = event_bus.publish.call_args[0][0]
    assert isinstance(event, ErrorOccurredEvent)
    assert event.error is error
    assert event.severity == ErrorSeverity.ERROR
    assert event.context == {"path": "a.png"}


def test_ui_callback_receives_error_text():
    handler = ErrorHandler(Mock(spec=logging.Logger), Mock(spec=EventBus))
    callback = Mock()
    handler.register_ui_callback(callback)

    handler.handle(RuntimeError("ui error"), ErrorSeverity.CRITICAL)

    callback.assert_called_with("ui error", ErrorSeverity.CRITICAL)


def test_user_message_replaces_error_text():
    handler = ErrorHandler(Mock(spec=logging.Logger), Mock(spec=EventBus))
    callback = Mock()
    handler.register_ui_callback(callback)

    handler.handle(InvalidImageError("decoder said no"), user_message="Invalid image file.")

    callback.assert_called_once_with("Invalid image file.", ErrorSeverity.ERROR)


def test_ignore_info_severity_in_ui():
    logger = Mock(spec=logging.Logger)
    handler = ErrorHandler(logger, Mock(spec=EventBus))
    callback = Mock()
    handler.register_ui_callback(callback)

    handler.handle(Exception("info"), ErrorSeverity.INFO)

    callback.assert_not_called()
    logger.info.assert_called()


def test_unregistered_callback_is_not_called():
    handler = ErrorHandler(Mock(spec=logging.Logger), Mock(spec=EventBus))
    callback = Mock()
    handler.register_ui_callback(callback)
    handler.register_ui_callback(None)

    handler.handle(RuntimeError("boom"))

    callback.assert_not_called()

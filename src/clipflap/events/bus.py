import logging
import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Type


@dataclass(kw_only=True)
class Event:
    """Base event class."""
    timestamp: datetime = field(default_factory=datetime.now)
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class Subscription:
    """Handle returned by subscribe(); can be used to unsubscribe."""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    event_type: Type = Event
    handler: Callable = field(default=lambda e: None)
    active: bool = True

    def cancel(self):
        self.active = False


class EventBus:
    """Synchronous publish/subscribe hub.

    All clip interaction happens on the GUI thread, so handlers run inline in
    subscription order while :meth:`publish` is executing.
    """

    def __init__(self, logger: logging.Logger = None):
        self._logger = logger or logging.getLogger(__name__)
        self._handlers: Dict[Type[Event], List[Subscription]] = defaultdict(list)

    def subscribe(self, event_type: Type[Event], handler: Callable) -> Subscription:
        sub = Subscription(event_type=event_type, handler=handler)
        self._handlers[event_type].append(sub)
        return sub

    def unsubscribe(self, subscription: Subscription):
        subscription.active = False
        subs = self._handlers.get(subscription.event_type, [])
        try:
            subs.remove(subscription)
        except ValueError:
            pass

    def publish(self, event: Event):
        event_type = type(event)
        for sub in list(self._handlers[event_type]):
            if not sub.active:
                continue
            try:
                sub.handler(event)
            except Exception as e:
                self._logger.error(f"Handler failed for {event_type.__name__}: {e}")

    def clear(self):
        """Drop every subscription, used when the owning widget is disposed."""
        for subs in self._handlers.values():
            for sub in subs:
                sub.active = False
        self._handlers.clear()

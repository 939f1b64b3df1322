"""Refresh notifications emitted after ledger or price cache mutations."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from portfolio_tracker.core.timezone import now_eastern

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Kinds of refresh notifications."""

    LEDGER_CHANGED = "LEDGER_CHANGED"
    PRICES_UPDATED = "PRICES_UPDATED"


@dataclass
class RefreshEvent:
    """A single notification; symbol is None for whole-ledger changes (restore)."""

    event_type: EventType
    symbol: Optional[str] = None
    emitted_at: datetime = field(default_factory=now_eastern)


Listener = Callable[[RefreshEvent], None]


class EventBus:
    """
    Synchronous publish/subscribe hub for display collaborators.

    Listeners run in subscription order on the publishing thread. A listener
    that raises is logged and skipped; the publisher never sees the error.
    """

    def __init__(self) -> None:
        self._listeners: dict[EventType, list[Listener]] = defaultdict(list)

    def subscribe(self, event_type: EventType, listener: Listener) -> None:
        """Register a listener for one event type."""
        self._listeners[event_type].append(listener)

    def subscribe_all(self, listener: Listener) -> None:
        """Register a listener for every event type."""
        for event_type in EventType:
            self.subscribe(event_type, listener)

    def unsubscribe(self, event_type: EventType, listener: Listener) -> None:
        """Remove a listener; unknown listeners are ignored."""
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def publish(self, event: RefreshEvent) -> int:
        """
        Deliver an event to its listeners.

        Returns the number of listeners that completed without raising.
        """
        delivered = 0
        for listener in list(self._listeners.get(event.event_type, [])):
            try:
                listener(event)
                delivered += 1
            except Exception:
                logger.exception(
                    "Listener %r failed handling %s for %s",
                    listener,
                    event.event_type.value,
                    event.symbol,
                )
        return delivered

    def emit(self, event_type: EventType, symbol: Optional[str] = None) -> int:
        """Shorthand for publish(RefreshEvent(...))."""
        return self.publish(RefreshEvent(event_type=event_type, symbol=symbol))

"""Registry event publication."""

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Protocol

from asset_registry.exceptions import SinkError
from asset_registry.models.base import Event

logger = logging.getLogger(__name__)

EVENT_SOURCE = "asset-registry"

ASSET_REGISTERED = "asset.registered"
ASSET_UPDATED = "asset.updated"
ASSET_PURCHASED = "asset.purchased"
ASSET_STATUS_CHANGED = "asset.status_changed"
SELLERSHIP_TRANSFERRED = "asset.sellership_transferred"
LISTING_EXTENDED = "asset.listing_extended"
OWNERSHIP_ENABLED = "ownership.enabled"
SHARES_PURCHASED = "shares.purchased"
MARKETPLACE_CONFIG_UPDATED = "marketplace.config_updated"
PAYMENT_TOKEN_UPDATED = "marketplace.payment_token_updated"
REGISTRY_PAUSED = "registry.paused"
REGISTRY_UNPAUSED = "registry.unpaused"


class EventSink(Protocol):
    """Anything that accepts single records per topic."""

    def send(self, topic: str, record: Any, key: str | None = None) -> None:
        ...


class EventBus:
    """Keeps an in-memory event log and fans events out to sinks.

    Parameters
    ----------
    topic_prefix : str
        Prefix prepended to event types to form sink topics
        (``registry.asset.registered``).
    """

    def __init__(self, topic_prefix: str = "registry") -> None:
        self.topic_prefix = topic_prefix
        self.history: list[Event] = []
        self._sinks: list[EventSink] = []
        self.failed_deliveries = 0
        self._lock = threading.Lock()

    def subscribe(self, sink: EventSink) -> None:
        self._sinks.append(sink)

    def publish(self, event_type: str, subject: Any, data: dict, **metadata: Any) -> Event:
        """Record an event and forward it to every sink.

        Events are published after the state change they describe, so a
        sink that cannot take the event is logged and skipped; it never
        fails the operation that produced the event.
        """
        event = Event(
            event_id=uuid.uuid4().hex,
            event_type=event_type,
            event_time=datetime.now(timezone.utc),
            source=EVENT_SOURCE,
            subject=str(subject),
            data=data,
            metadata=metadata,
        )
        with self._lock:
            self.history.append(event)

        topic = f"{self.topic_prefix}.{event_type}" if self.topic_prefix else event_type
        for sink in self._sinks:
            try:
                sink.send(topic, event, key=event.subject)
            except (SinkError, OSError):
                with self._lock:
                    self.failed_deliveries += 1
                logger.exception(
                    "Sink %s failed to take %s for %s",
                    type(sink).__name__,
                    event_type,
                    event.subject,
                    extra={"event_type": event_type},
                )

        logger.debug("Published %s for %s", event_type, event.subject)
        return event

    def events_of(self, event_type: str) -> list[Event]:
        """All recorded events of one type, oldest first."""
        return [e for e in self.history if e.event_type == event_type]

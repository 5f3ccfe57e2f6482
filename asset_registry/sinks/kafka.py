"""Kafka sink for streaming registry events to Kafka topics."""

import json
import logging
import time
from dataclasses import dataclass, is_dataclass
from typing import Any

from confluent_kafka import Producer

from asset_registry.config import KafkaConfig
from asset_registry.exceptions import SinkError
from asset_registry.sinks.serialization import to_dict

logger = logging.getLogger(__name__)


@dataclass
class ProducerStats:
    """Track producer delivery statistics."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        total = self.delivered + self.failed
        return self.delivered / total if total > 0 else 0.0

    @property
    def throughput(self) -> float:
        """Calculate events per second achieved."""
        if self.start_time is None or self.end_time is None:
            return 0.0
        duration = self.end_time - self.start_time
        return self.sent / duration if duration > 0 else 0.0


class KafkaSink:
    """Output registry events and records to Kafka topics.

    Events are keyed by their subject (the asset id) so every event for an
    asset lands on the same partition, in publication order.
    """

    # Record type to key field mapping for batch writes
    KEY_FIELDS = {
        "assets": "asset_id",
        "events": "subject",
    }

    def __init__(self, config: KafkaConfig | str) -> None:
        """Initialize Kafka sink.

        Parameters
        ----------
        config : KafkaConfig | str
            Producer configuration or bootstrap servers string.
        """
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config)

        self.config = config
        self.producer = self._create_producer()
        self.stats = ProducerStats()

    def _create_producer(self) -> Producer:
        """Create Kafka producer with configuration."""
        return Producer(self.config.to_dict())

    def _delivery_callback(self, err: Any, msg: Any) -> None:
        """Handle delivery reports."""
        if err:
            self.stats.failed += 1
            logger.error("Delivery failed: %s", err)
        else:
            self.stats.delivered += 1
            logger.debug("Delivered to %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def _get_key(self, entity_type: str, record: Any) -> str | None:
        """Extract message key from record based on entity type."""
        key_field = self.KEY_FIELDS.get(entity_type)
        if not key_field:
            return None

        if is_dataclass(record):
            value = getattr(record, key_field, None)
        elif isinstance(record, dict):
            value = record.get(key_field)
        else:
            value = None
        return None if value is None else str(value)

    def send(self, topic: str, record: Any, key: str | None = None) -> None:
        """Send a single record to a Kafka topic."""
        if self.stats.start_time is None:
            self.stats.start_time = time.time()

        value = json.dumps(to_dict(record), ensure_ascii=False, default=str).encode("utf-8")

        try:
            self.producer.produce(
                topic=topic,
                key=key.encode("utf-8") if key else None,
                value=value,
                callback=self._delivery_callback,
            )
        except BufferError as exc:
            raise SinkError(f"Kafka producer queue is full for topic {topic}") from exc
        self.stats.sent += 1
        self.producer.poll(0)

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of records to ``<topic_prefix>.<entity_type>``."""
        topic = f"{self.config.topic_prefix}.{entity_type}"
        logger.info("Writing batch to %s: %d records", topic, len(records))

        for record in records:
            self.send(topic, record, key=self._get_key(entity_type, record))

        self.flush()
        logger.info("Batch complete: sent=%d, delivered=%d, failed=%d",
                    self.stats.sent, self.stats.delivered, self.stats.failed)

    def flush(self, timeout: float = 30.0) -> None:
        """Flush pending messages."""
        self.producer.flush(timeout)

    def close(self) -> None:
        """Flush and close the producer."""
        self.flush()
        self.stats.end_time = time.time()
        logger.info(
            "Kafka sink closed: sent=%d, delivered=%d, failed=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )

"""Kafka dispatcher: publishes notification events for the mail relay to deliver."""

import json
import logging
from dataclasses import dataclass

from confluent_kafka import KafkaException, Producer

from property_match.config import KafkaConfig
from property_match.exceptions import NotificationError
from property_match.models import Event
from property_match.notifications.serialization import to_dict

logger = logging.getLogger(__name__)


@dataclass
class ProducerStats:
    """Track producer delivery statistics."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        total = self.delivered + self.failed
        return self.delivered / total if total > 0 else 0.0


class KafkaDispatcher:
    """Publish each notification to ``<topic_prefix>.<event_type>``.

    Messages are keyed by the event subject (the listing or request id)
    so all notifications about one record land in the same partition.
    """

    def __init__(self, config: KafkaConfig | str, flush_timeout: float = 10.0) -> None:
        """Initialize Kafka dispatcher.

        Parameters
        ----------
        config : KafkaConfig | str
            Producer configuration or bootstrap servers string.
        flush_timeout : float
            Seconds to wait for delivery of each notification.
        """
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config)

        self.config = config
        self.flush_timeout = flush_timeout
        self.producer = Producer(config.to_dict())
        self.stats = ProducerStats()

    def topic_for(self, event: Event) -> str:
        """Topic name for an event type, e.g. ``marketplace.notifications.property-submitted``."""
        return f"{self.config.topic_prefix}.{event.event_type.replace('.', '-').replace('_', '-')}"

    def _delivery_callback(self, err: object, msg: object) -> None:
        """Handle delivery reports."""
        if err:
            self.stats.failed += 1
            logger.error("Notification delivery failed: %s", err)
        else:
            self.stats.delivered += 1
            logger.debug("Delivered to %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def dispatch(self, event: Event) -> None:
        """Publish one notification and wait for it to be acknowledged.

        Raises
        ------
        NotificationError
            If the message cannot be queued or is not delivered in time.
        """
        topic = self.topic_for(event)
        value = json.dumps(to_dict(event), ensure_ascii=False, default=str).encode("utf-8")
        failed_before = self.stats.failed

        try:
            self.producer.produce(
                topic=topic,
                key=event.subject.encode("utf-8") if event.subject else None,
                value=value,
                callback=self._delivery_callback,
            )
        except (KafkaException, BufferError) as exc:
            raise NotificationError(f"Could not queue notification for {topic}: {exc}") from exc
        self.stats.sent += 1

        pending = self.producer.flush(self.flush_timeout)
        if pending:
            raise NotificationError(f"{pending} notification(s) to {topic} not delivered in time")
        if self.stats.failed > failed_before:
            raise NotificationError(f"Notification to {topic} was rejected by the broker")
        logger.info("Published %s for %s to %s", event.event_type, event.subject, topic)

    def close(self) -> None:
        """Flush and close the producer."""
        self.producer.flush(self.flush_timeout)
        logger.info(
            "Kafka dispatcher closed: sent=%d, delivered=%d, failed=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )

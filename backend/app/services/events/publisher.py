from typing import Any, Protocol

from kombu import Connection, Exchange
from kombu.pools import producers

from app.core.config import settings
from app.core.logging import logger


class EventPublisher(Protocol):
    def publish(self, routing_key: str, payload: dict[str, Any], correlation_id: str | None = None) -> None: ...


class AmqpPublisher:
    """Publishes JSON messages to a durable topic exchange."""

    def __init__(self, url: str, exchange_name: str, max_retries: int = 3):
        self._connection = Connection(url)
        self._exchange = Exchange(exchange_name, type="topic", durable=True)
        self._max_retries = max_retries

    def publish(self, routing_key: str, payload: dict[str, Any], correlation_id: str | None = None) -> None:
        with producers[self._connection].acquire(block=True) as producer:
            producer.publish(
                payload,
                exchange=self._exchange,
                routing_key=routing_key,
                declare=[self._exchange],
                serializer="json",
                delivery_mode=2,
                correlation_id=correlation_id,
                retry=True,
                retry_policy={
                    "max_retries": self._max_retries,
                    "interval_start": 0,
                    "interval_step": 1,
                    "interval_max": 5,
                },
            )
        logger.debug("event_published", routing_key=routing_key, correlation_id=correlation_id)

    def close(self) -> None:
        self._connection.release()


def make_publisher() -> AmqpPublisher:
    return AmqpPublisher(settings.AMQP_URL, settings.PUBSUB_EXCHANGE, max_retries=settings.PUBLISH_MAX_RETRIES)

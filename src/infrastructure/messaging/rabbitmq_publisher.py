"""
RabbitMQ event publisher.

Uses pika in a thread-pool executor so blocking I/O doesn't stall the
asyncio event loop. A new connection is opened per publish call.
"""
import asyncio
import json
from functools import partial

import pika
import structlog

from src.application.interfaces.event_publisher import EventPublisher
from src.config import settings
from src.domain.events.domain_events import (
    DomainEvent,
    ListingDraftCreatedEvent,
    ListingPublishedEvent,
    ListingUpdatedEvent,
)

logger = structlog.get_logger(__name__)

EXCHANGE_NAME = "listing_wizard.events"


def _event_to_routing_key(event: DomainEvent) -> str:
    if isinstance(event, ListingDraftCreatedEvent):
        return "listing.draft.created"
    if isinstance(event, ListingUpdatedEvent):
        return f"listing.updated.{event.tab}"
    if isinstance(event, ListingPublishedEvent):
        return "listing.published"
    return "event.unknown"


def _serialise_event(event: DomainEvent) -> str:
    payload: dict = {  # type: ignore[type-arg]
        "event_type": _event_to_routing_key(event),
        "event_id": str(event.event_id),
        "occurred_at": event.occurred_at.isoformat(),
    }

    if isinstance(event, ListingDraftCreatedEvent):
        payload.update({"listing_id": event.listing_id, "tab": event.tab})
    elif isinstance(event, ListingUpdatedEvent):
        payload.update(
            {"listing_id": event.listing_id, "tab": event.tab, "page_type": event.page_type}
        )
    elif isinstance(event, ListingPublishedEvent):
        payload.update({"listing_id": event.listing_id})

    return json.dumps(payload, default=str)


def _blocking_publish(rabbitmq_url: str, routing_key: str, body: str) -> None:
    connection = pika.BlockingConnection(pika.URLParameters(rabbitmq_url))
    try:
        channel = connection.channel()
        channel.exchange_declare(exchange=EXCHANGE_NAME, exchange_type="topic", durable=True)
        channel.basic_publish(
            exchange=EXCHANGE_NAME,
            routing_key=routing_key,
            body=body.encode(),
            properties=pika.BasicProperties(
                delivery_mode=pika.DeliveryMode.Persistent,
                content_type="application/json",
            ),
        )
    finally:
        connection.close()


class RabbitMQPublisher(EventPublisher):
    """Publishes wizard events to a RabbitMQ topic exchange."""

    def __init__(self, rabbitmq_url: str = settings.rabbitmq_url) -> None:
        self._url = rabbitmq_url

    async def publish(self, event: DomainEvent) -> None:
        routing_key = _event_to_routing_key(event)
        body = _serialise_event(event)
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(
                None,
                partial(_blocking_publish, self._url, routing_key, body),
            )
            logger.debug("event_published", routing_key=routing_key, event_id=str(event.event_id))
        except Exception as exc:
            # Publishing failures must not fail the wizard step
            logger.error("failed_to_publish_event", routing_key=routing_key, error=str(exc))

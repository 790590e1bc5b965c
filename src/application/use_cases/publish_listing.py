from dataclasses import dataclass

import structlog

from src.application.interfaces.event_publisher import EventPublisher
from src.application.interfaces.listing_gateway import ListingGateway, ListingGatewayError
from src.application.wizard.errors import WizardOperation
from src.application.wizard.session import WizardSession
from src.domain.entities.listing import ListingId
from src.domain.events.domain_events import ListingPublishedEvent

logger = structlog.get_logger(__name__)


@dataclass
class PublishListingInput:
    listing_id: ListingId
    session: WizardSession


@dataclass
class PublishListingOutput:
    listing_id: ListingId
    published: bool


class PublishListing:
    """Use case: publish the draft once the last wizard tab has been saved."""

    def __init__(self, gateway: ListingGateway, event_publisher: EventPublisher) -> None:
        self._gateway = gateway
        self._event_publisher = event_publisher

    async def execute(self, input_data: PublishListingInput) -> PublishListingOutput:
        session = input_data.session
        session.begin(WizardOperation.PUBLISH)

        try:
            await self._gateway.publish(input_data.listing_id)
        except ListingGatewayError as exc:
            session.fail(WizardOperation.PUBLISH, exc)
            logger.warning(
                "listing_publish_failed",
                listing_id=input_data.listing_id.uuid,
                error=str(exc),
            )
            return PublishListingOutput(listing_id=input_data.listing_id, published=False)
        finally:
            session.update_in_progress = False

        session.succeed()
        session.new_listing_published = True
        await self._event_publisher.publish(
            ListingPublishedEvent(listing_id=input_data.listing_id.uuid)
        )
        logger.info("listing_published", listing_id=input_data.listing_id.uuid)
        return PublishListingOutput(listing_id=input_data.listing_id, published=True)

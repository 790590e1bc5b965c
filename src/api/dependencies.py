"""
FastAPI dependency injection wiring.

Each dependency function returns a fully-constructed object with its
collaborators injected — keeping the route handlers thin.
"""
from fastapi import Depends

from src.application.interfaces.availability_handlers import AvailabilityExceptionHandlers
from src.application.interfaces.event_publisher import EventPublisher
from src.application.interfaces.listing_gateway import ListingGateway
from src.application.interfaces.navigation import RouteBuilder
from src.config import Settings, settings
from src.domain.state_machine.wizard_flow import WizardFlow
from src.infrastructure.external_services.marketplace_client import MarketplaceClient
from src.infrastructure.external_services.marketplace_gateway import (
    MarketplaceAvailabilityHandlers,
    MarketplaceListingGateway,
)
from src.infrastructure.messaging.noop_publisher import NoOpEventPublisher
from src.infrastructure.messaging.rabbitmq_publisher import RabbitMQPublisher
from src.infrastructure.routing.route_configuration import RouteConfiguration


# ---- Low-level dependencies ------------------------------------------------

def get_settings() -> Settings:
    return settings


def get_marketplace_client() -> MarketplaceClient:
    return MarketplaceClient()


def get_listing_gateway(
    client: MarketplaceClient = Depends(get_marketplace_client),
) -> ListingGateway:
    return MarketplaceListingGateway(client)


def get_availability_handlers(
    client: MarketplaceClient = Depends(get_marketplace_client),
) -> AvailabilityExceptionHandlers:
    return MarketplaceAvailabilityHandlers(client)


def get_event_publisher(app_settings: Settings = Depends(get_settings)) -> EventPublisher:
    if app_settings.publish_events:
        return RabbitMQPublisher(app_settings.rabbitmq_url)
    return NoOpEventPublisher()


def get_route_builder() -> RouteBuilder:
    return RouteConfiguration()


# ---- Wizard dependencies ---------------------------------------------------

def get_wizard_flow(app_settings: Settings = Depends(get_settings)) -> WizardFlow:
    return WizardFlow(app_settings.marketplace_tabs, strict=app_settings.strict_tab_sequence)

from typing import Any

import structlog

from src.application.interfaces.availability_handlers import AvailabilityExceptionHandlers
from src.application.interfaces.listing_gateway import ListingGateway
from src.domain.entities.listing import Listing, ListingId
from src.infrastructure.external_services.marketplace_client import (
    MarketplaceClient,
    MarketplaceClientError,
)

logger = structlog.get_logger(__name__)


def _serialise_values(values: dict[str, Any]) -> dict[str, Any]:
    payload = dict(values)
    listing_id = payload.get("id")
    if isinstance(listing_id, ListingId):
        payload["id"] = listing_id.uuid
    return payload


def _listing_from_response(data: dict[str, Any]) -> Listing:
    resource = data.get("data") or {}
    if not isinstance(resource, dict):
        raise MarketplaceClientError("Marketplace API returned a listing that is not an object")
    return Listing.from_api(resource)


class MarketplaceListingGateway(ListingGateway):
    """ListingGateway backed by the marketplace REST API."""

    def __init__(self, client: MarketplaceClient) -> None:
        self._client = client

    async def create_draft(self, values: dict[str, Any]) -> Listing:
        data = await self._client.post("/listings/create_draft", _serialise_values(values))
        listing = _listing_from_response(data)
        if listing.id is None:
            logger.error("listing_draft_missing_id", response_keys=sorted(data))
            raise MarketplaceClientError("Marketplace API created a draft without returning its id")
        logger.info("listing_draft_created", listing_id=listing.id.uuid)
        return listing

    async def update(self, values: dict[str, Any]) -> Listing:
        data = await self._client.post("/listings/update", _serialise_values(values))
        return _listing_from_response(data)

    async def publish(self, listing_id: ListingId) -> None:
        await self._client.post("/listings/publish_draft", {"id": listing_id.uuid})

    async def fetch_listing(self, listing_id: ListingId) -> Listing:
        data = await self._client.get("/listings/show", params={"id": listing_id.uuid})
        return _listing_from_response(data)

    async def upload_image(self, file: Any) -> dict[str, Any]:
        data = await self._client.post_file("/images/upload", file)
        return dict(data.get("data") or {})

    async def fetch_availability_exceptions(self, listing_id: ListingId) -> list[dict[str, Any]]:
        data = await self._client.get(
            "/availability_exceptions/query", params={"listing_id": listing_id.uuid}
        )
        return list(data.get("data") or [])


class MarketplaceAvailabilityHandlers(AvailabilityExceptionHandlers):
    """Forwards availability exception changes to the marketplace API as-is."""

    def __init__(self, client: MarketplaceClient) -> None:
        self._client = client

    async def add_exception(self, params: dict[str, Any]) -> dict[str, Any]:
        data = await self._client.post("/availability_exceptions/create", params)
        return dict(data.get("data") or {})

    async def delete_exception(self, params: dict[str, Any]) -> dict[str, Any]:
        data = await self._client.post("/availability_exceptions/delete", params)
        return dict(data.get("data") or {})

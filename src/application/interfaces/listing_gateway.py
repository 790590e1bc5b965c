from abc import ABC, abstractmethod
from typing import Any

from src.domain.entities.listing import Listing, ListingId


class ListingGatewayError(Exception):
    """A marketplace call failed; carried into the wizard error bag."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ListingGateway(ABC):
    """Port for the marketplace API that persists listings."""

    @abstractmethod
    async def create_draft(self, values: dict[str, Any]) -> Listing:
        ...

    @abstractmethod
    async def update(self, values: dict[str, Any]) -> Listing:
        """`values` carries the listing `id` alongside the changed fields."""
        ...

    @abstractmethod
    async def publish(self, listing_id: ListingId) -> None:
        ...

    @abstractmethod
    async def fetch_listing(self, listing_id: ListingId) -> Listing:
        ...

    @abstractmethod
    async def upload_image(self, file: Any) -> dict[str, Any]:
        """Returns the uploaded image resource (`{"id": ..., ...}`)."""
        ...

    @abstractmethod
    async def fetch_availability_exceptions(self, listing_id: ListingId) -> list[dict[str, Any]]:
        ...

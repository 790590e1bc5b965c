from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ListingId:
    """Opaque marketplace id; only `uuid` ever reaches a URL."""

    uuid: str

    def __str__(self) -> str:
        return self.uuid


@dataclass
class Listing:
    """
    The listing assembled by the wizard.

    `id` stays None until the first draft is created. `attributes` is the
    bag of step-contributed fields (title, description, pricing, geolocation,
    public data) and is passed through untouched.
    """

    id: ListingId | None = None
    attributes: dict[str, Any] = field(default_factory=dict)
    images: list[dict[str, Any]] = field(default_factory=list)

    @property
    def title(self) -> str:
        return str(self.attributes.get("title") or "")

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Listing":
        """Build a Listing from a marketplace API resource (`{"id": {"uuid": ...}, ...}`)."""
        raw_id = data.get("id")
        listing_id: ListingId | None = None
        if isinstance(raw_id, dict) and raw_id.get("uuid"):
            listing_id = ListingId(uuid=str(raw_id["uuid"]))
        elif isinstance(raw_id, str) and raw_id:
            listing_id = ListingId(uuid=raw_id)
        return cls(
            id=listing_id,
            attributes=dict(data.get("attributes") or {}),
            images=list(data.get("images") or []),
        )


def ensure_listing(listing: Listing | None) -> Listing:
    """Return an empty Listing in place of None so callers never branch on it."""
    return listing if listing is not None else Listing()

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DomainEvent:
    """Base class for all domain events."""

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class ListingDraftCreatedEvent(DomainEvent):
    """Published when the first wizard tab creates a draft listing."""

    listing_id: str = ""
    tab: str = ""


@dataclass(frozen=True)
class ListingUpdatedEvent(DomainEvent):
    """Published whenever a wizard tab saves changes to an existing listing."""

    listing_id: str = ""
    tab: str = ""
    page_type: str = ""


@dataclass(frozen=True)
class ListingPublishedEvent(DomainEvent):
    """Published when the last wizard tab of the creation flow publishes the draft."""

    listing_id: str = ""

from dataclasses import dataclass, replace

from src.domain.enums.listing_page_type import FlowMode, ListingPageType, PersistenceState
from src.domain.enums.wizard_tab import WizardTab

EDIT_LISTING_PAGE = "EditListingPage"

# Placeholder identity carried by a `new` URL before the draft exists
DRAFT_SLUG = "draft"
DRAFT_ID = "00000000-0000-0000-0000-000000000000"


@dataclass(frozen=True)
class PathParams:
    """The URL path parameters of the edit-listing page."""

    slug: str
    id: str
    type: str
    tab: str

    @classmethod
    def for_new_listing(cls, tab: WizardTab) -> "PathParams":
        return cls(slug=DRAFT_SLUG, id=DRAFT_ID, type=ListingPageType.NEW.value, tab=tab.value)

    @property
    def is_new(self) -> bool:
        return self.type == ListingPageType.NEW.value

    @property
    def has_listing_id(self) -> bool:
        return bool(self.id) and self.id != DRAFT_ID

    @property
    def flow_mode(self) -> FlowMode:
        return FlowMode.from_page_type(self.type)

    @property
    def persistence_state(self) -> PersistenceState:
        return PersistenceState.from_page_type(self.type, has_id=self.has_listing_id)

    def evolve(self, **changes: str) -> "PathParams":
        return replace(self, **changes)

    def as_dict(self) -> dict[str, str]:
        return {"slug": self.slug, "id": self.id, "type": self.type, "tab": self.tab}


@dataclass(frozen=True)
class NavigationTarget:
    route_name: str
    path_params: PathParams

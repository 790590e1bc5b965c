from enum import Enum


class ListingPageType(str, Enum):
    """Values of the `type` segment in an edit-listing URL."""

    NEW = "new"
    DRAFT = "draft"
    EDIT = "edit"


class PersistenceState(str, Enum):
    """Where the listing sits in its create → draft → published lifecycle."""

    NOT_CREATED = "NOT_CREATED"
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"

    @classmethod
    def from_page_type(cls, page_type: str, has_id: bool = True) -> "PersistenceState":
        """
        Anything other than `new` or `draft` is the published marker.

        A URL without a real listing id has not been created yet, whatever
        its type says.
        """
        if page_type == ListingPageType.NEW.value or not has_id:
            return cls.NOT_CREATED
        if page_type == ListingPageType.DRAFT.value:
            return cls.DRAFT
        return cls.PUBLISHED


class FlowMode(str, Enum):
    """Guided creation sequence vs. stateless editing of a published listing."""

    CREATION = "CREATION"
    EDITING = "EDITING"

    @classmethod
    def from_page_type(cls, page_type: str) -> "FlowMode":
        if PersistenceState.from_page_type(page_type) is PersistenceState.PUBLISHED:
            return cls.EDITING
        return cls.CREATION

    @property
    def has_automatic_redirects(self) -> bool:
        return self is FlowMode.CREATION

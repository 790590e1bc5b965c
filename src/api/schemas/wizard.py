from typing import Any

from pydantic import BaseModel, Field

from src.application.use_cases.complete_wizard_tab import CompletionOutcome
from src.domain.enums.listing_page_type import FlowMode, PersistenceState


class OperationFailureResponse(BaseModel):
    operation: str
    message: str
    status_code: int | None = None


class WizardErrorsResponse(BaseModel):
    create_listing_draft_error: OperationFailureResponse | None = None
    update_listing_error: OperationFailureResponse | None = None
    publish_listing_error: OperationFailureResponse | None = None
    upload_image_error: OperationFailureResponse | None = None
    show_listings_error: OperationFailureResponse | None = None
    fetch_exceptions_error: OperationFailureResponse | None = None


class PanelResponse(BaseModel):
    tab: str
    component: str
    persistence_state: PersistenceState
    flow_mode: FlowMode
    marketplace_tabs: list[str]
    panel_updated: bool
    update_in_progress: bool
    disabled: bool
    ready: bool
    submit_button_text: str
    listing_id: str | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)
    images: list[dict[str, Any]] = Field(default_factory=list)
    availability_exceptions: list[dict[str, Any]] = Field(default_factory=list)
    errors: WizardErrorsResponse


class TabSubmissionRequest(BaseModel):
    values: dict[str, Any] = Field(default_factory=dict)


class NavigationEntryResponse(BaseModel):
    action: str  # "push" | "replace"
    url: str


class WizardResponse(BaseModel):
    outcome: CompletionOutcome | None = None
    listing_id: str | None = None
    updated_tab: str | None = None
    published: bool = False
    navigation: list[NavigationEntryResponse] = Field(default_factory=list)
    errors: WizardErrorsResponse

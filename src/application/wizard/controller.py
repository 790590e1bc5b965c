from collections.abc import Callable
from functools import partial
from typing import Any

import structlog

from src.application.interfaces.availability_handlers import AvailabilityExceptionHandlers
from src.application.interfaces.event_publisher import EventPublisher
from src.application.interfaces.listing_gateway import ListingGateway, ListingGatewayError
from src.application.use_cases.complete_wizard_tab import (
    CompleteWizardTab,
    CompleteWizardTabInput,
    CompleteWizardTabOutput,
)
from src.application.use_cases.load_wizard_listing import (
    LoadWizardListing,
    LoadWizardListingInput,
)
from src.application.use_cases.publish_listing import PublishListing, PublishListingInput
from src.application.wizard.errors import OperationFailure, WizardOperation
from src.application.wizard.navigation import NavigationDispatcher
from src.application.wizard.session import WizardSession
from src.application.wizard.tab_resolver import NoRenderer, PanelProps, TabResolver
from src.domain.enums.listing_page_type import FlowMode, PersistenceState
from src.domain.enums.wizard_tab import WizardTab
from src.domain.navigation.actions import NavigationAction
from src.domain.navigation.path_params import PathParams
from src.domain.state_machine.wizard_flow import WizardFlow

logger = structlog.get_logger(__name__)


class WizardController:
    """
    Drives one rendering of the listing wizard for the URL in `params`.

    Composes the tab resolver, the completion handler and the publish step,
    and applies their navigation through the dispatcher.
    """

    def __init__(
        self,
        *,
        params: PathParams,
        gateway: ListingGateway,
        flow: WizardFlow,
        dispatcher: NavigationDispatcher,
        event_publisher: EventPublisher,
        session: WizardSession | None = None,
        availability_handlers: AvailabilityExceptionHandlers | None = None,
        on_process_change: Callable[[Any], None] | None = None,
    ) -> None:
        self.params = params
        self.session = session or WizardSession()
        self._gateway = gateway
        self._flow = flow
        self._dispatcher = dispatcher
        self._availability_handlers = availability_handlers
        self._on_process_change = on_process_change
        self._complete_tab = CompleteWizardTab(gateway, flow, event_publisher)
        self._publish = PublishListing(gateway, event_publisher)
        self._load = LoadWizardListing(gateway)
        self._resolver = TabResolver(self._common_props, self._extra_props)

    @property
    def flow_mode(self) -> FlowMode:
        return self.params.flow_mode

    @property
    def persistence_state(self) -> PersistenceState:
        return self.params.persistence_state

    @property
    def marketplace_tabs(self) -> tuple[WizardTab, ...]:
        return self._flow.marketplace_tabs

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    async def load(self) -> WizardSession:
        return await self._load.execute(
            LoadWizardListingInput(
                params=self.params,
                session=self.session,
                load_availability_exceptions=WizardTab.AVAILABILITY in self.marketplace_tabs,
            )
        )

    def resolve(self, tab: "str | WizardTab") -> PanelProps | NoRenderer:
        panel = self._resolver.resolve(tab)
        if isinstance(panel, NoRenderer):
            logger.error("wizard_tab_has_no_renderer", tab=panel.tab)
        return panel

    def submit_button_text(self, tab: WizardTab) -> str:
        if not self.flow_mode.has_automatic_redirects:
            return f"Save {tab.label}"
        if self._flow.is_last_tab(tab):
            return "Publish listing"
        return f"Next: {self._flow.next_tab(tab).label}"

    def _common_props(self, tab: WizardTab) -> dict[str, Any]:
        return {
            "listing": self.session.listing,
            "errors": self.session.errors,
            "panel_updated": self.session.updated_tab is tab,
            "update_in_progress": self.session.update_in_progress,
            "disabled": self.session.fetch_in_progress,
            "ready": self.session.new_listing_published,
            "submit_button_text": self.submit_button_text(tab),
            "on_submit": partial(self.complete_tab, tab),
        }

    def _extra_props(self, tab: WizardTab) -> dict[str, Any]:
        return {
            "on_process_change": self._on_process_change,
            "images": self.session.images,
            "on_image_upload": self.upload_image,
            "on_remove_image": self.remove_image,
            "availability_exceptions": self.session.availability_exceptions,
            "fetch_exceptions_in_progress": self.session.fetch_exceptions_in_progress,
            "on_add_availability_exception": self.add_availability_exception,
            "on_delete_availability_exception": self.delete_availability_exception,
            "on_next_tab": partial(self.next_tab, tab),
        }

    # -------------------------------------------------------------------------
    # Tab completion
    # -------------------------------------------------------------------------

    async def complete_tab(self, tab: WizardTab, values: dict[str, Any]) -> CompleteWizardTabOutput:
        result = await self._complete_tab.execute(
            CompleteWizardTabInput(
                tab=tab,
                values=values,
                params=self.params,
                session=self.session,
                listing=self.session.listing,
            )
        )
        for listing_id in self._dispatcher.dispatch(result.actions):
            await self._publish.execute(
                PublishListingInput(listing_id=listing_id, session=self.session)
            )
        return result

    def next_tab(self, tab: WizardTab) -> list[NavigationAction]:
        """Manual "next" for tabs that persist their own data (availability)."""
        listing = self.session.listing
        if not self.flow_mode.has_automatic_redirects or listing is None or listing.id is None:
            logger.warning(
                "wizard_next_tab_skipped",
                tab=tab.value,
                page_type=self.params.type,
                has_listing_id=listing is not None and listing.id is not None,
            )
            return []

        actions = self._flow.redirect_after_draft_update(listing.id, self.params, tab)
        self._dispatcher.dispatch(actions)
        return actions

    # -------------------------------------------------------------------------
    # Tab-specific extras
    # -------------------------------------------------------------------------

    async def upload_image(self, file: Any) -> dict[str, Any] | None:
        self.session.errors.clear(WizardOperation.UPLOAD_IMAGE)
        try:
            image = await self._gateway.upload_image(file)
        except ListingGatewayError as exc:
            self.session.errors.record(
                OperationFailure.from_error(WizardOperation.UPLOAD_IMAGE, exc)
            )
            logger.warning("image_upload_failed", error=str(exc))
            return None
        self.session.images.append(image)
        return image

    def remove_image(self, image_id: Any) -> None:
        self.session.images = [img for img in self.session.images if img.get("id") != image_id]

    async def add_availability_exception(self, params: dict[str, Any]) -> dict[str, Any]:
        return await self._require_availability_handlers().add_exception(params)

    async def delete_availability_exception(self, params: dict[str, Any]) -> dict[str, Any]:
        return await self._require_availability_handlers().delete_exception(params)

    def _require_availability_handlers(self) -> AvailabilityExceptionHandlers:
        if self._availability_handlers is None:
            raise RuntimeError("Availability exception handlers are not configured.")
        return self._availability_handlers

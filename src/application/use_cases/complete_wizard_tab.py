from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import structlog

from src.application.interfaces.event_publisher import EventPublisher
from src.application.interfaces.listing_gateway import ListingGateway, ListingGatewayError
from src.application.wizard.errors import WizardOperation
from src.application.wizard.session import WizardSession
from src.domain.entities.listing import Listing, ListingId, ensure_listing
from src.domain.enums.wizard_tab import WizardTab
from src.domain.events.domain_events import (
    DomainEvent,
    ListingDraftCreatedEvent,
    ListingUpdatedEvent,
)
from src.domain.navigation.actions import NavigationAction, PublishTriggered
from src.domain.navigation.path_params import PathParams
from src.domain.state_machine.wizard_flow import WizardFlow

logger = structlog.get_logger(__name__)


class CompletionOutcome(str, Enum):
    SAVED = "SAVED"
    REDIRECTED = "REDIRECTED"
    PUBLISH_TRIGGERED = "PUBLISH_TRIGGERED"
    FAILED = "FAILED"
    REJECTED_BUSY = "REJECTED_BUSY"


@dataclass
class CompleteWizardTabInput:
    tab: WizardTab
    values: dict[str, Any]
    params: PathParams
    session: WizardSession
    listing: Listing | None = None


@dataclass
class CompleteWizardTabOutput:
    outcome: CompletionOutcome
    listing_id: ListingId | None = None
    actions: list[NavigationAction] = field(default_factory=list)


class CompleteWizardTab:
    """
    Use case: save a completed wizard tab and decide what happens next.

    A `new` URL creates a draft, every other URL updates the listing; the
    choice depends on the URL alone so a reload mid-flow stays consistent.
    Gateway failures end up in the session's error bag and produce no
    navigation. In the creation flow a successful save either moves on to
    the next tab or, on the last tab, triggers publishing.
    """

    def __init__(
        self,
        gateway: ListingGateway,
        flow: WizardFlow,
        event_publisher: EventPublisher,
    ) -> None:
        self._gateway = gateway
        self._flow = flow
        self._event_publisher = event_publisher

    async def execute(self, input_data: CompleteWizardTabInput) -> CompleteWizardTabOutput:
        session = input_data.session
        params = input_data.params

        if session.update_in_progress:
            logger.warning("wizard_tab_rejected_busy", tab=input_data.tab.value)
            return CompleteWizardTabOutput(outcome=CompletionOutcome.REJECTED_BUSY)

        operation = WizardOperation.CREATE_DRAFT if params.is_new else WizardOperation.UPDATE
        session.begin(operation)

        try:
            if params.is_new:
                saved = await self._gateway.create_draft(input_data.values)
                if saved.id is None:
                    raise ListingGatewayError("Draft was created without a listing id")
            else:
                saved = await self._gateway.update(
                    {**input_data.values, "id": self._current_id(input_data)}
                )
        except ListingGatewayError as exc:
            session.fail(operation, exc)
            logger.warning(
                "wizard_tab_failed",
                tab=input_data.tab.value,
                operation=operation.value,
                error=str(exc),
                status_code=exc.status_code,
            )
            return CompleteWizardTabOutput(outcome=CompletionOutcome.FAILED)
        finally:
            # Cleared on every exit path
            session.update_in_progress = False

        session.succeed(input_data.tab)
        if saved.id is None and not params.is_new:
            # Update responses may omit the id
            saved.id = self._current_id(input_data)
        session.listing = saved
        listing_id = saved.id

        await self._event_publisher.publish_many(
            self._events_for(operation, input_data, listing_id)
        )
        logger.info(
            "wizard_tab_saved",
            tab=input_data.tab.value,
            operation=operation.value,
            listing_id=str(listing_id) if listing_id else None,
            page_type=params.type,
        )

        if listing_id is None or not params.flow_mode.has_automatic_redirects:
            return CompleteWizardTabOutput(outcome=CompletionOutcome.SAVED, listing_id=listing_id)

        actions = self._flow.after_successful_save(listing_id, params, input_data.tab)
        outcome = (
            CompletionOutcome.PUBLISH_TRIGGERED
            if any(isinstance(action, PublishTriggered) for action in actions)
            else CompletionOutcome.REDIRECTED
        )
        return CompleteWizardTabOutput(outcome=outcome, listing_id=listing_id, actions=actions)

    @staticmethod
    def _current_id(input_data: CompleteWizardTabInput) -> ListingId:
        current = ensure_listing(input_data.listing)
        return current.id or ListingId(uuid=input_data.params.id)

    @staticmethod
    def _events_for(
        operation: WizardOperation,
        input_data: CompleteWizardTabInput,
        listing_id: ListingId | None,
    ) -> list[DomainEvent]:
        uuid = listing_id.uuid if listing_id else ""
        if operation is WizardOperation.CREATE_DRAFT:
            return [ListingDraftCreatedEvent(listing_id=uuid, tab=input_data.tab.value)]
        return [
            ListingUpdatedEvent(
                listing_id=uuid,
                tab=input_data.tab.value,
                page_type=input_data.params.type,
            )
        ]

from dataclasses import dataclass

import structlog

from src.application.interfaces.listing_gateway import ListingGateway, ListingGatewayError
from src.application.wizard.errors import OperationFailure, WizardOperation
from src.application.wizard.session import WizardSession
from src.domain.entities.listing import ListingId
from src.domain.navigation.path_params import PathParams

logger = structlog.get_logger(__name__)


@dataclass
class LoadWizardListingInput:
    params: PathParams
    session: WizardSession
    load_availability_exceptions: bool = False


class LoadWizardListing:
    """
    Use case: fill the session with the listing named by the URL.

    Nothing is fetched for a `new` URL. Availability exceptions are fetched
    only when the availability tab is part of the wizard.
    """

    def __init__(self, gateway: ListingGateway) -> None:
        self._gateway = gateway

    async def execute(self, input_data: LoadWizardListingInput) -> WizardSession:
        session = input_data.session
        params = input_data.params
        if params.is_new:
            return session

        listing_id = ListingId(uuid=params.id)
        session.fetch_in_progress = True
        session.errors.clear(WizardOperation.FETCH_LISTING)
        try:
            listing = await self._gateway.fetch_listing(listing_id)
        except ListingGatewayError as exc:
            session.errors.record(OperationFailure.from_error(WizardOperation.FETCH_LISTING, exc))
            logger.warning("listing_fetch_failed", listing_id=params.id, error=str(exc))
            return session
        finally:
            session.fetch_in_progress = False

        if listing.id is None:
            listing.id = listing_id
        session.listing = listing
        session.images = list(listing.images)

        if input_data.load_availability_exceptions:
            await self._load_exceptions(listing_id, session)

        logger.debug("wizard_listing_loaded", listing_id=params.id, tab=params.tab)
        return session

    async def _load_exceptions(self, listing_id: ListingId, session: WizardSession) -> None:
        session.fetch_exceptions_in_progress = True
        session.errors.clear(WizardOperation.FETCH_EXCEPTIONS)
        try:
            session.availability_exceptions = await self._gateway.fetch_availability_exceptions(
                listing_id
            )
        except ListingGatewayError as exc:
            session.errors.record(
                OperationFailure.from_error(WizardOperation.FETCH_EXCEPTIONS, exc)
            )
            logger.warning(
                "availability_exceptions_fetch_failed",
                listing_id=listing_id.uuid,
                error=str(exc),
            )
        finally:
            session.fetch_exceptions_in_progress = False

from dataclasses import dataclass, field
from typing import Any

from src.application.interfaces.listing_gateway import ListingGatewayError
from src.application.wizard.errors import OperationFailure, WizardErrors, WizardOperation
from src.domain.entities.listing import Listing
from src.domain.enums.wizard_tab import WizardTab


@dataclass
class WizardSession:
    """
    Mutable view state for one rendering of the wizard.

    Listing id and persistence state are not kept here; they come from the
    URL every time so a reload mid-flow behaves the same as navigation.
    """

    listing: Listing | None = None
    updated_tab: WizardTab | None = None
    update_in_progress: bool = False
    fetch_in_progress: bool = False
    fetch_exceptions_in_progress: bool = False
    new_listing_published: bool = False
    errors: WizardErrors = field(default_factory=WizardErrors)
    images: list[dict[str, Any]] = field(default_factory=list)
    availability_exceptions: list[dict[str, Any]] = field(default_factory=list)

    def begin(self, operation: WizardOperation) -> None:
        self.errors.clear(operation)
        self.update_in_progress = True

    def succeed(self, tab: WizardTab | None = None) -> None:
        self.update_in_progress = False
        if tab is not None:
            self.updated_tab = tab

    def fail(self, operation: WizardOperation, exc: ListingGatewayError) -> OperationFailure:
        failure = OperationFailure.from_error(operation, exc)
        self.errors.record(failure)
        self.update_in_progress = False
        return failure

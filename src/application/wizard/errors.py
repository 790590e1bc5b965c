from dataclasses import dataclass, fields
from enum import Enum
from typing import Any

from src.application.interfaces.listing_gateway import ListingGatewayError


class WizardOperation(str, Enum):
    """Marketplace operations whose failures are reported to the panels."""

    CREATE_DRAFT = "CREATE_DRAFT"
    UPDATE = "UPDATE"
    PUBLISH = "PUBLISH"
    UPLOAD_IMAGE = "UPLOAD_IMAGE"
    FETCH_LISTING = "FETCH_LISTING"
    FETCH_EXCEPTIONS = "FETCH_EXCEPTIONS"


@dataclass(frozen=True)
class OperationFailure:
    operation: WizardOperation
    message: str
    status_code: int | None = None

    @classmethod
    def from_error(cls, operation: WizardOperation, exc: ListingGatewayError) -> "OperationFailure":
        return cls(operation=operation, message=str(exc), status_code=exc.status_code)


_FIELD_BY_OPERATION: dict[WizardOperation, str] = {
    WizardOperation.CREATE_DRAFT: "create_listing_draft_error",
    WizardOperation.UPDATE: "update_listing_error",
    WizardOperation.PUBLISH: "publish_listing_error",
    WizardOperation.UPLOAD_IMAGE: "upload_image_error",
    WizardOperation.FETCH_LISTING: "show_listings_error",
    WizardOperation.FETCH_EXCEPTIONS: "fetch_exceptions_error",
}


@dataclass
class WizardErrors:
    """
    Error bag shared by every panel.

    Keyed by operation rather than by tab: several tabs report the same
    update failure, and the panel decides which entries it displays.
    """

    create_listing_draft_error: OperationFailure | None = None
    update_listing_error: OperationFailure | None = None
    publish_listing_error: OperationFailure | None = None
    upload_image_error: OperationFailure | None = None
    show_listings_error: OperationFailure | None = None
    fetch_exceptions_error: OperationFailure | None = None

    def record(self, failure: OperationFailure) -> None:
        setattr(self, _FIELD_BY_OPERATION[failure.operation], failure)

    def clear(self, operation: WizardOperation) -> None:
        setattr(self, _FIELD_BY_OPERATION[operation], None)

    def get(self, operation: WizardOperation) -> OperationFailure | None:
        return getattr(self, _FIELD_BY_OPERATION[operation])

    def as_dict(self) -> dict[str, dict[str, Any] | None]:
        result: dict[str, dict[str, Any] | None] = {}
        for f in fields(self):
            failure = getattr(self, f.name)
            result[f.name] = (
                None
                if failure is None
                else {
                    "operation": failure.operation.value,
                    "message": failure.message,
                    "status_code": failure.status_code,
                }
            )
        return result

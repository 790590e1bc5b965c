"""
Navigation outcomes returned by the wizard flow.

The flow never touches the router or history itself; it returns these values
and a dispatcher at the boundary applies them in order.
"""
from dataclasses import dataclass

from src.domain.entities.listing import ListingId
from src.domain.navigation.path_params import NavigationTarget


@dataclass(frozen=True)
class Replace:
    target: NavigationTarget


@dataclass(frozen=True)
class Push:
    target: NavigationTarget


@dataclass(frozen=True)
class PublishTriggered:
    listing_id: ListingId


@dataclass(frozen=True)
class StepAdvanceNotified:
    is_last_step: bool


NavigationAction = Replace | Push | PublishTriggered | StepAdvanceNotified

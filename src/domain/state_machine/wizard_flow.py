from collections.abc import Sequence

import structlog

from src.domain.entities.listing import ListingId
from src.domain.enums.listing_page_type import ListingPageType
from src.domain.enums.wizard_tab import WizardTab
from src.domain.navigation.actions import (
    NavigationAction,
    Push,
    PublishTriggered,
    Replace,
    StepAdvanceNotified,
)
from src.domain.navigation.path_params import EDIT_LISTING_PAGE, NavigationTarget, PathParams

logger = structlog.get_logger(__name__)


class InvalidWizardConfigurationError(Exception):
    """Raised when the configured tab sequence cannot drive a wizard."""


class TabNotInSequenceError(InvalidWizardConfigurationError):
    """Raised in strict mode when a tab is not part of the configured sequence."""

    def __init__(self, tab: WizardTab, marketplace_tabs: Sequence[WizardTab]) -> None:
        self.tab = tab
        self.marketplace_tabs = tuple(marketplace_tabs)
        super().__init__(
            f"Tab {tab.value} is not enabled. "
            f"Configured tabs: {[t.value for t in self.marketplace_tabs]}"
        )


class WizardFlow:
    """
    Decides where the creation flow goes after a tab has been saved.

    Pure computation over the configured tab sequence: no I/O, no history
    access. Callers apply the returned NavigationAction values.

    A tab missing from the sequence (stale URL, tab disabled by config) is
    treated as the last reachable tab unless `strict` is set, in which case
    TabNotInSequenceError is raised.
    """

    def __init__(self, marketplace_tabs: Sequence[WizardTab], *, strict: bool = False) -> None:
        if not marketplace_tabs:
            raise InvalidWizardConfigurationError("At least one wizard tab must be enabled.")
        self._tabs = tuple(marketplace_tabs)
        self._strict = strict

    @property
    def marketplace_tabs(self) -> tuple[WizardTab, ...]:
        return self._tabs

    @property
    def last_tab(self) -> WizardTab:
        return self._tabs[-1]

    def _index_of(self, tab: WizardTab) -> int | None:
        try:
            return self._tabs.index(tab)
        except ValueError:
            if self._strict:
                raise TabNotInSequenceError(tab, self._tabs) from None
            logger.warning(
                "wizard_tab_not_in_sequence",
                tab=tab.value,
                marketplace_tabs=[t.value for t in self._tabs],
            )
            return None

    def is_last_tab(self, tab: WizardTab) -> bool:
        index = self._index_of(tab)
        return index is None or index == len(self._tabs) - 1

    def next_tab(self, tab: WizardTab) -> WizardTab:
        """The tab after `tab`, clamped to the last one."""
        index = self._index_of(tab)
        if index is None or index + 1 >= len(self._tabs):
            return self.last_tab
        return self._tabs[index + 1]

    def redirect_after_draft_update(
        self, listing_id: ListingId, params: PathParams, tab: WizardTab
    ) -> list[NavigationAction]:
        """
        Navigation from `tab` to the next tab of a draft.

        A `new` URL is replaced by its `draft` equivalent before pushing the
        next tab, so the back button leads to the draft instead of creating
        another listing.
        """
        draft_params = params.evolve(
            type=ListingPageType.DRAFT.value, id=listing_id.uuid, tab=tab.value
        )
        actions: list[NavigationAction] = []
        if params.is_new:
            actions.append(Replace(NavigationTarget(EDIT_LISTING_PAGE, draft_params)))

        next_params = draft_params.evolve(tab=self.next_tab(tab).value)
        actions.append(Push(NavigationTarget(EDIT_LISTING_PAGE, next_params)))
        return actions

    def after_successful_save(
        self, listing_id: ListingId, params: PathParams, tab: WizardTab
    ) -> list[NavigationAction]:
        """Actions for a saved tab; editing a published listing never navigates."""
        if not params.flow_mode.has_automatic_redirects:
            return []

        if self.is_last_tab(tab):
            return [PublishTriggered(listing_id)]

        return [
            StepAdvanceNotified(is_last_step=False),
            *self.redirect_after_draft_update(listing_id, params, tab),
        ]

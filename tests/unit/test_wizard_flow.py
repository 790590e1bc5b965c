"""Unit tests for the wizard flow decisions."""
import pytest

from src.domain.entities.listing import ListingId
from src.domain.enums.listing_page_type import FlowMode, ListingPageType, PersistenceState
from src.domain.enums.wizard_tab import WizardTab
from src.domain.navigation.actions import Push, PublishTriggered, Replace, StepAdvanceNotified
from src.domain.navigation.path_params import DRAFT_ID, EDIT_LISTING_PAGE, PathParams
from src.domain.state_machine.wizard_flow import (
    InvalidWizardConfigurationError,
    TabNotInSequenceError,
    WizardFlow,
)

TABS = [WizardTab.DETAILS, WizardTab.PRICING, WizardTab.PHOTOS]
LISTING_ID = ListingId(uuid="X")


def _params(page_type: str, tab: WizardTab, listing_id: str = DRAFT_ID) -> PathParams:
    return PathParams(slug="bike", id=listing_id, type=page_type, tab=tab.value)


@pytest.fixture()
def flow() -> WizardFlow:
    return WizardFlow(TABS)


class TestPageType:
    def test_new_is_not_created(self) -> None:
        assert PersistenceState.from_page_type("new") == PersistenceState.NOT_CREATED

    def test_draft_is_draft(self) -> None:
        assert PersistenceState.from_page_type("draft") == PersistenceState.DRAFT

    def test_anything_else_is_published(self) -> None:
        assert PersistenceState.from_page_type("edit") == PersistenceState.PUBLISHED
        assert PersistenceState.from_page_type("pending-approval") == PersistenceState.PUBLISHED

    def test_flow_mode(self) -> None:
        assert FlowMode.from_page_type("new") == FlowMode.CREATION
        assert FlowMode.from_page_type("draft") == FlowMode.CREATION
        assert FlowMode.from_page_type("edit") == FlowMode.EDITING

    def test_draft_without_real_id_is_not_created(self) -> None:
        assert (
            PersistenceState.from_page_type("draft", has_id=False)
            == PersistenceState.NOT_CREATED
        )

    def test_placeholder_id_is_not_created(self) -> None:
        params = PathParams(slug="draft", id=DRAFT_ID, type="draft", tab="details")

        assert params.has_listing_id is False
        assert params.persistence_state == PersistenceState.NOT_CREATED

    def test_real_id_keeps_draft_and_published_states(self) -> None:
        assert _params("draft", WizardTab.DETAILS, "X").persistence_state == PersistenceState.DRAFT
        assert _params("edit", WizardTab.DETAILS, "X").persistence_state == PersistenceState.PUBLISHED


class TestNextTab:
    def test_returns_following_tab(self, flow: WizardFlow) -> None:
        assert flow.next_tab(WizardTab.DETAILS) == WizardTab.PRICING
        assert flow.next_tab(WizardTab.PRICING) == WizardTab.PHOTOS

    def test_clamps_at_last_tab(self, flow: WizardFlow) -> None:
        assert flow.next_tab(WizardTab.PHOTOS) == WizardTab.PHOTOS

    def test_unknown_tab_clamps_to_last(self, flow: WizardFlow) -> None:
        assert flow.next_tab(WizardTab.AVAILABILITY) == WizardTab.PHOTOS

    def test_unknown_tab_counts_as_last(self, flow: WizardFlow) -> None:
        assert flow.is_last_tab(WizardTab.AVAILABILITY) is True

    def test_strict_mode_raises_for_unknown_tab(self) -> None:
        strict = WizardFlow(TABS, strict=True)
        with pytest.raises(TabNotInSequenceError) as exc_info:
            strict.next_tab(WizardTab.AVAILABILITY)
        assert "availability" in str(exc_info.value)

    def test_empty_sequence_is_rejected(self) -> None:
        with pytest.raises(InvalidWizardConfigurationError):
            WizardFlow([])


class TestRedirectAfterDraftUpdate:
    def test_new_url_is_replaced_before_push(self, flow: WizardFlow) -> None:
        actions = flow.redirect_after_draft_update(
            LISTING_ID, _params(ListingPageType.NEW.value, WizardTab.DETAILS), WizardTab.DETAILS
        )

        assert len(actions) == 2
        replace, push = actions
        assert isinstance(replace, Replace)
        assert replace.target.route_name == EDIT_LISTING_PAGE
        assert replace.target.path_params.type == "draft"
        assert replace.target.path_params.id == "X"
        assert replace.target.path_params.tab == "details"
        assert isinstance(push, Push)
        assert push.target.path_params.type == "draft"
        assert push.target.path_params.tab == "pricing"

    def test_draft_url_only_pushes(self, flow: WizardFlow) -> None:
        actions = flow.redirect_after_draft_update(
            LISTING_ID,
            _params(ListingPageType.DRAFT.value, WizardTab.PRICING, "X"),
            WizardTab.PRICING,
        )

        assert len(actions) == 1
        assert isinstance(actions[0], Push)
        assert actions[0].target.path_params.tab == "photos"

    def test_slug_is_kept(self, flow: WizardFlow) -> None:
        actions = flow.redirect_after_draft_update(
            LISTING_ID, _params("new", WizardTab.DETAILS), WizardTab.DETAILS
        )
        assert all(a.target.path_params.slug == "bike" for a in actions)


class TestAfterSuccessfulSave:
    @pytest.mark.parametrize("tab", [WizardTab.DETAILS, WizardTab.PRICING])
    def test_non_last_tab_advances_to_next(self, flow: WizardFlow, tab: WizardTab) -> None:
        actions = flow.after_successful_save(LISTING_ID, _params("draft", tab, "X"), tab)

        assert actions[0] == StepAdvanceNotified(is_last_step=False)
        pushes = [a for a in actions if isinstance(a, Push)]
        assert len(pushes) == 1
        assert pushes[0].target.path_params.tab == TABS[TABS.index(tab) + 1].value
        assert not any(isinstance(a, PublishTriggered) for a in actions)

    def test_last_tab_triggers_publish_only(self, flow: WizardFlow) -> None:
        actions = flow.after_successful_save(
            LISTING_ID, _params("draft", WizardTab.PHOTOS, "X"), WizardTab.PHOTOS
        )
        assert actions == [PublishTriggered(LISTING_ID)]

    def test_last_tab_of_new_listing_publishes(self, flow: WizardFlow) -> None:
        single = WizardFlow([WizardTab.DETAILS])
        actions = single.after_successful_save(
            LISTING_ID, _params("new", WizardTab.DETAILS), WizardTab.DETAILS
        )
        assert actions == [PublishTriggered(LISTING_ID)]

    def test_unknown_tab_falls_through_to_publish(self, flow: WizardFlow) -> None:
        actions = flow.after_successful_save(
            LISTING_ID, _params("draft", WizardTab.LOCATION, "X"), WizardTab.LOCATION
        )
        assert actions == [PublishTriggered(LISTING_ID)]

    @pytest.mark.parametrize("tab", TABS)
    def test_editing_never_navigates(self, flow: WizardFlow, tab: WizardTab) -> None:
        actions = flow.after_successful_save(LISTING_ID, _params("edit", tab, "X"), tab)
        assert actions == []

"""Unit tests for URL building, history and navigation dispatch."""
from unittest.mock import MagicMock

import pytest

from src.application.wizard.navigation import NavigationDispatcher
from src.domain.entities.listing import ListingId
from src.domain.enums.wizard_tab import WizardTab
from src.domain.navigation.actions import Push, PublishTriggered, Replace, StepAdvanceNotified
from src.domain.navigation.path_params import EDIT_LISTING_PAGE, NavigationTarget, PathParams
from src.infrastructure.routing.history import HistoryMutation, InMemoryHistory
from src.infrastructure.routing.route_configuration import RouteConfiguration, RouteNotFoundError


def _target(tab: str, page_type: str = "draft") -> NavigationTarget:
    return NavigationTarget(
        EDIT_LISTING_PAGE, PathParams(slug="bike", id="X", type=page_type, tab=tab)
    )


class TestRouteConfiguration:
    def test_builds_edit_listing_path(self) -> None:
        routes = RouteConfiguration()
        url = routes.build_path(EDIT_LISTING_PAGE, _target("pricing").path_params)
        assert url == "/l/bike/X/draft/pricing"

    def test_new_listing_placeholder(self) -> None:
        url = RouteConfiguration().build_path(
            EDIT_LISTING_PAGE, PathParams.for_new_listing(WizardTab.DETAILS)
        )
        assert url == "/l/draft/00000000-0000-0000-0000-000000000000/new/details"

    def test_encodes_segments(self) -> None:
        params = PathParams(slug="red bike/fast", id="X", type="draft", tab="details")
        url = RouteConfiguration().build_path(EDIT_LISTING_PAGE, params)
        assert url == "/l/red%20bike%2Ffast/X/draft/details"

    def test_unknown_route_raises(self) -> None:
        with pytest.raises(RouteNotFoundError):
            RouteConfiguration().build_path("Nope", _target("details").path_params)


class TestInMemoryHistory:
    def test_push_appends(self) -> None:
        history = InMemoryHistory("/a")
        history.push("/b")
        assert history.entries == ["/a", "/b"]
        assert history.current == "/b"

    def test_replace_overwrites_current(self) -> None:
        history = InMemoryHistory("/a")
        history.replace("/b")
        assert history.entries == ["/b"]
        assert history.mutations == [HistoryMutation("replace", "/b")]


class TestNavigationDispatcher:
    def test_applies_actions_in_order(self) -> None:
        history = InMemoryHistory("/l/draft/0/new/details")
        scroll = MagicMock()
        dispatcher = NavigationDispatcher(RouteConfiguration(), history, scroll)

        published = dispatcher.dispatch(
            [
                StepAdvanceNotified(is_last_step=False),
                Replace(_target("details")),
                Push(_target("pricing")),
            ]
        )

        assert published == []
        scroll.notify_step_advance.assert_called_once_with(False)
        assert history.mutations == [
            HistoryMutation("replace", "/l/bike/X/draft/details"),
            HistoryMutation("push", "/l/bike/X/draft/pricing"),
        ]

    def test_publish_is_returned_not_navigated(self) -> None:
        history = InMemoryHistory("/start")
        dispatcher = NavigationDispatcher(RouteConfiguration(), history)

        published = dispatcher.dispatch([PublishTriggered(ListingId("X"))])

        assert published == [ListingId("X")]
        assert history.mutations == []

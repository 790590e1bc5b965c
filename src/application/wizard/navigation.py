import structlog

from src.application.interfaces.navigation import HistorySink, RouteBuilder, ScrollHook
from src.domain.entities.listing import ListingId
from src.domain.navigation.actions import (
    NavigationAction,
    Push,
    PublishTriggered,
    Replace,
    StepAdvanceNotified,
)

logger = structlog.get_logger(__name__)


class NavigationDispatcher:
    """
    Applies NavigationAction values to the router and history.

    PublishTriggered is not a history change; the listing ids it carries are
    handed back to the caller, which runs the publish use case.
    """

    def __init__(
        self,
        routes: RouteBuilder,
        history: HistorySink,
        scroll_hook: ScrollHook | None = None,
    ) -> None:
        self._routes = routes
        self._history = history
        self._scroll_hook = scroll_hook

    def dispatch(self, actions: list[NavigationAction]) -> list[ListingId]:
        to_publish: list[ListingId] = []
        for action in actions:
            if isinstance(action, Replace):
                url = self._routes.build_path(action.target.route_name, action.target.path_params)
                self._history.replace(url)
                logger.debug("history_replaced", url=url)
            elif isinstance(action, Push):
                url = self._routes.build_path(action.target.route_name, action.target.path_params)
                self._history.push(url)
                logger.debug("history_pushed", url=url)
            elif isinstance(action, StepAdvanceNotified):
                if self._scroll_hook is not None:
                    self._scroll_hook.notify_step_advance(action.is_last_step)
            elif isinstance(action, PublishTriggered):
                to_publish.append(action.listing_id)
        return to_publish

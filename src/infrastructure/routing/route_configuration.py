"""Route table and URL building for the pages the wizard links to."""
from urllib.parse import quote

from src.application.interfaces.navigation import RouteBuilder
from src.domain.navigation.path_params import EDIT_LISTING_PAGE, PathParams

ROUTES: dict[str, str] = {
    EDIT_LISTING_PAGE: "/l/{slug}/{id}/{type}/{tab}",
}


class RouteNotFoundError(Exception):
    def __init__(self, route_name: str) -> None:
        super().__init__(f"Route {route_name} is not configured.")


class RouteConfiguration(RouteBuilder):
    """Builds URLs from named route patterns, URL-encoding each path segment."""

    def __init__(self, routes: dict[str, str] | None = None) -> None:
        self._routes = dict(ROUTES if routes is None else routes)

    def build_path(self, route_name: str, path_params: PathParams) -> str:
        pattern = self._routes.get(route_name)
        if pattern is None:
            raise RouteNotFoundError(route_name)
        encoded = {key: quote(value, safe="") for key, value in path_params.as_dict().items()}
        return pattern.format(**encoded)

from abc import ABC, abstractmethod

from src.domain.navigation.path_params import PathParams


class RouteBuilder(ABC):
    """Port for turning a route name and path params into a URL."""

    @abstractmethod
    def build_path(self, route_name: str, path_params: PathParams) -> str:
        ...


class HistorySink(ABC):
    """Port for the browser history the wizard rewrites."""

    @abstractmethod
    def push(self, url: str) -> None:
        ...

    @abstractmethod
    def replace(self, url: str) -> None:
        ...


class ScrollHook(ABC):
    """Fire-and-forget UI hook run when the creation flow moves to another tab."""

    @abstractmethod
    def notify_step_advance(self, is_last_step: bool) -> None:
        ...

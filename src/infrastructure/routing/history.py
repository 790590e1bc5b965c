from dataclasses import dataclass

from src.application.interfaces.navigation import HistorySink


@dataclass(frozen=True)
class HistoryMutation:
    action: str  # "push" | "replace"
    url: str


class InMemoryHistory(HistorySink):
    """
    History stack kept in memory.

    Used by the HTTP API, which reports the mutations back to the browser
    instead of performing them, and by tests.
    """

    def __init__(self, initial_url: str) -> None:
        self._entries: list[str] = [initial_url]
        self._mutations: list[HistoryMutation] = []

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    @property
    def current(self) -> str:
        return self._entries[-1]

    @property
    def mutations(self) -> list[HistoryMutation]:
        return list(self._mutations)

    def push(self, url: str) -> None:
        self._entries.append(url)
        self._mutations.append(HistoryMutation("push", url))

    def replace(self, url: str) -> None:
        self._entries[-1] = url
        self._mutations.append(HistoryMutation("replace", url))

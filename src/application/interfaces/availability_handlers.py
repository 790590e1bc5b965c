from abc import ABC, abstractmethod
from typing import Any


class AvailabilityExceptionHandlers(ABC):
    """Port for the availability tab's out-of-band exception calls."""

    @abstractmethod
    async def add_exception(self, params: dict[str, Any]) -> dict[str, Any]:
        ...

    @abstractmethod
    async def delete_exception(self, params: dict[str, Any]) -> dict[str, Any]:
        ...

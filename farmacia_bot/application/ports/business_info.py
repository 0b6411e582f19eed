from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from farmacia_bot.domain.entities.live_info import LiveInfo


class BusinessInfoPort(ABC):
    @abstractmethod
    async def lookup(self, name: str, address: str) -> dict[str, Any] | None:
        """
        First structured result for the business, or None when nothing matched.
        Raises ServiceUnavailable on upstream failures.
        """
        raise NotImplementedError


class BusinessInfoFallbackPort(ABC):
    @abstractmethod
    async def scrape(self, name: str, address: str) -> LiveInfo:
        """Best-effort phone/status. Must never raise."""
        raise NotImplementedError

"""SerpAPI google_maps engine, used as the structured business-info source."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from farmacia_bot.application.exceptions import ServiceUnavailable
from farmacia_bot.application.ports.business_info import BusinessInfoPort

logger = logging.getLogger(__name__)


class SerpApiBusinessInfo(BusinessInfoPort):
    def __init__(self, api_key: str, url: str, timeout: float = 10.0, language: str = "pt-br") -> None:
        if not api_key:
            raise ValueError("SERPAPI_KEY is required for SerpApiBusinessInfo")
        self._api_key = api_key
        self._url = url
        self._timeout = timeout
        self._language = language

    async def lookup(self, name: str, address: str) -> dict[str, Any] | None:
        params = {
            "engine": "google_maps",
            "type": "search",
            "q": f"{name} {address}",
            "hl": self._language,
            "api_key": self._api_key,
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(self._url, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as exc:
            raise ServiceUnavailable(f"SerpAPI request failed: {exc}") from exc
        except ValueError as exc:
            raise ServiceUnavailable(f"SerpAPI returned invalid JSON: {exc}") from exc

        if data.get("error"):
            # "Google hasn't returned any results" is reported as an error too
            logger.info("SerpAPI returned an error", extra={"reason": data["error"]})
            return None

        local_results = data.get("local_results") or []
        if local_results and isinstance(local_results[0], dict):
            return local_results[0]
        place = data.get("place_results")
        if isinstance(place, dict):
            return place
        return None

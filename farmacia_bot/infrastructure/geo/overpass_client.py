"""Overpass API nearby search over OpenStreetMap nodes."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from farmacia_bot.application.exceptions import ServiceUnavailable
from farmacia_bot.application.ports.nearby_search import NearbySearchPort

logger = logging.getLogger(__name__)


def build_query(lat: float, lon: float, radius_meters: int, category: str) -> str:
    return f'[out:json];\nnode["amenity"="{category}"](around:{radius_meters}, {lat}, {lon});\nout;'


class OverpassNearbySearch(NearbySearchPort):
    def __init__(self, url: str, user_agent: str, timeout: float = 10.0) -> None:
        self._url = url
        self._headers = {"User-Agent": user_agent}
        self._timeout = timeout

    async def nearby(self, lat: float, lon: float, radius_meters: int, category: str) -> list[dict[str, Any]]:
        query = build_query(lat, lon, radius_meters, category)
        try:
            async with httpx.AsyncClient(timeout=self._timeout, headers=self._headers) as client:
                response = await client.post(self._url, data={"data": query})
                response.raise_for_status()
                elements = response.json().get("elements") or []
        except httpx.HTTPError as exc:
            logger.error("Overpass request failed lat=%s lon=%s: %s", lat, lon, exc)
            raise ServiceUnavailable(f"Nearby search failed: {exc}") from exc
        except (ValueError, AttributeError) as exc:
            raise ServiceUnavailable(f"Nearby search returned invalid JSON: {exc}") from exc

        return [dict(element.get("tags") or {}) for element in elements if isinstance(element, dict)]

"""Nominatim (OpenStreetMap) forward geocoding.

API docs: https://nominatim.org/release-docs/latest/api/Search/
No authentication; a descriptive User-Agent is mandatory.
"""

from __future__ import annotations

import logging

import httpx

from farmacia_bot.application.exceptions import AddressNotFound, ServiceUnavailable
from farmacia_bot.application.ports.geocoding import GeocodingPort
from farmacia_bot.domain.entities.coordinates import Coordinates

logger = logging.getLogger(__name__)


class NominatimGeocoder(GeocodingPort):
    def __init__(self, url: str, user_agent: str, timeout: float = 5.0) -> None:
        self._url = url
        self._headers = {"User-Agent": user_agent, "Accept": "application/json"}
        self._timeout = timeout

    async def geocode(self, address: str) -> Coordinates:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, headers=self._headers) as client:
                response = await client.get(self._url, params={"format": "json", "q": address, "limit": 1})
                response.raise_for_status()
                results = response.json()
        except httpx.HTTPError as exc:
            logger.error("Geocoding request failed for query=%r: %s", address, exc)
            raise ServiceUnavailable(f"Geocoding failed: {exc}") from exc
        except ValueError as exc:
            raise ServiceUnavailable(f"Geocoding returned invalid JSON: {exc}") from exc

        if not results:
            logger.info("No geocoding results for query: %r", address)
            raise AddressNotFound(address)

        first = results[0]
        try:
            return Coordinates(lat=float(first["lat"]), lon=float(first["lon"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise ServiceUnavailable(f"Geocoding result has no coordinates: {first!r}") from exc

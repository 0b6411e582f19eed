from __future__ import annotations

import logging
from typing import Any

from farmacia_bot.application.ports.geocoding import GeocodingPort
from farmacia_bot.application.ports.nearby_search import NearbySearchPort
from farmacia_bot.domain.entities.pharmacy import UNKNOWN_ADDRESS, UNNAMED_PHARMACY, Pharmacy

PHARMACY_CATEGORY = "pharmacy"

# order in which address tags are joined into a single line
ADDRESS_TAGS = (
    "addr:full",
    "addr:street",
    "addr:housenumber",
    "addr:suburb",
    "addr:city",
    "addr:postcode",
)
PHONE_TAGS = ("contact:phone", "phone")


def pharmacy_from_tags(tags: dict[str, Any]) -> Pharmacy:
    parts = [str(tags[key]).strip() for key in ADDRESS_TAGS if tags.get(key) and str(tags[key]).strip()]
    address = ", ".join(parts) if parts else UNKNOWN_ADDRESS
    name = str(tags.get("name") or "").strip() or UNNAMED_PHARMACY
    phone = next((str(tags[key]) for key in PHONE_TAGS if tags.get(key)), None)
    return Pharmacy(name=name, address=address, phone=phone)


class ResolvePharmaciesUseCase:
    """Address + drug name -> up to `max_candidates` valid pharmacies, in the search service's order."""

    def __init__(
        self,
        geocoder: GeocodingPort,
        nearby_search: NearbySearchPort,
        radius_meters: int = 2000,
        max_candidates: int = 5,
    ) -> None:
        self._geocoder = geocoder
        self._nearby_search = nearby_search
        self._radius_meters = radius_meters
        self._max_candidates = max_candidates
        self._logger = logging.getLogger(__name__)

    async def execute(self, address: str, drug_name: str) -> list[Pharmacy]:
        """
        Raises:
            AddressNotFound: the address could not be geocoded
            ServiceUnavailable: geocoding or search upstream failed
        """
        coords = await self._geocoder.geocode(address)
        raw = await self._nearby_search.nearby(coords.lat, coords.lon, self._radius_meters, PHARMACY_CATEGORY)

        seen: set[tuple[str, str]] = set()
        candidates: list[Pharmacy] = []
        for tags in raw:
            pharmacy = pharmacy_from_tags(tags)
            if not pharmacy.is_valid():
                continue
            key = pharmacy.dedupe_key()
            if key in seen:
                continue
            seen.add(key)
            candidates.append(pharmacy)
            if len(candidates) >= self._max_candidates:
                break

        self._logger.info(
            "Pharmacies resolved",
            extra={"event": "pharmacies_resolved", "raw_count": len(raw), "count": len(candidates), "drug": drug_name},
        )
        return candidates

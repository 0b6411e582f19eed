from __future__ import annotations

import asyncio
import logging
from typing import Any

from farmacia_bot.application.ports.business_info import BusinessInfoFallbackPort, BusinessInfoPort
from farmacia_bot.domain.entities.live_info import (
    LiveInfo,
    OpenNow,
    PlainText,
    StatusInfo,
    StructuredHours,
    render_status,
)


def status_from_record(record: dict[str, Any]) -> StatusInfo | None:
    """Pick the most useful status shape a structured search result carries."""
    open_state = record.get("open_state")
    if isinstance(open_state, str) and open_state.strip():
        return PlainText(open_state)

    if isinstance(record.get("open_now"), bool):
        return OpenNow(record["open_now"])
    opening_hours = record.get("opening_hours")
    if isinstance(opening_hours, dict) and isinstance(opening_hours.get("open_now"), bool):
        return OpenNow(opening_hours["open_now"])

    hours = record.get("hours")
    if isinstance(hours, str) and hours.strip():
        return PlainText(hours)
    entries = _hours_entries(hours) or _hours_entries(record.get("operating_hours"))
    if entries:
        return StructuredHours(entries)
    return None


def _hours_entries(value: Any) -> tuple[tuple[str, str], ...]:
    # {"monday": "8–22", ...} or [{"monday": "8–22"}, ...]
    if isinstance(value, dict):
        return tuple((str(day), str(hours)) for day, hours in value.items())
    if isinstance(value, list):
        out: list[tuple[str, str]] = []
        for item in value:
            if isinstance(item, dict):
                out.extend((str(day), str(hours)) for day, hours in item.items())
        return tuple(out)
    return ()


class EnrichPharmacyUseCase:
    """Live phone/status for one pharmacy. Never raises; worst case is LiveInfo.unavailable()."""

    def __init__(
        self,
        primary: BusinessInfoPort | None,
        fallback: BusinessInfoFallbackPort | None,
        lookup_timeout: float = 10.0,
    ) -> None:
        self._primary = primary
        self._fallback = fallback
        self._lookup_timeout = lookup_timeout
        self._logger = logging.getLogger(__name__)

    async def execute(self, name: str, address: str, phone_hint: str | None = None) -> LiveInfo:
        info = await self._from_primary(name, address)
        if not info.phone:
            fallback_info = await self._from_fallback(name, address)
            info = LiveInfo(
                phone=fallback_info.phone,
                status=info.status if info.has_status else fallback_info.status,
            )
        if not info.phone and phone_hint:
            info = LiveInfo(phone=phone_hint, status=info.status)

        self._logger.info(
            "Pharmacy enriched",
            extra={"event": "pharmacy_enriched", "service": name, "has_phone": bool(info.phone)},
        )
        return info

    async def _from_primary(self, name: str, address: str) -> LiveInfo:
        if self._primary is None:
            return LiveInfo.unavailable()
        try:
            record = await asyncio.wait_for(self._primary.lookup(name, address), timeout=self._lookup_timeout)
        except Exception as e:
            self._logger.warning("Primary lookup failed", extra={"service": name, "reason": str(e) or type(e).__name__})
            return LiveInfo.unavailable()
        if not record:
            return LiveInfo.unavailable()
        phone = record.get("phone")
        return LiveInfo(
            phone=str(phone) if phone else None,
            status=render_status(status_from_record(record)),
        )

    async def _from_fallback(self, name: str, address: str) -> LiveInfo:
        if self._fallback is None:
            return LiveInfo.unavailable()
        try:
            return await self._fallback.scrape(name, address)
        except Exception as e:
            # the port promises not to raise, but a broken adapter must not break the dialogue
            self._logger.warning("Fallback scrape failed", extra={"service": name, "reason": str(e) or type(e).__name__})
            return LiveInfo.unavailable()

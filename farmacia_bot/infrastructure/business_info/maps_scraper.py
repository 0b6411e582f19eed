"""Headless-browser fallback that reads phone and status off the public maps page."""

from __future__ import annotations

import asyncio
import logging
import re
from urllib.parse import quote

from farmacia_bot.application.ports.business_info import BusinessInfoFallbackPort
from farmacia_bot.domain.entities.live_info import LiveInfo, PlainText, render_status

logger = logging.getLogger(__name__)

FIRST_RESULT_SELECTOR = "a.hfpxzc"
STATUS_WORDS = ("Aberto", "Aberta", "Fechado", "Fechada")
# status lines longer than this are page chrome, not the opening-hours badge
MAX_STATUS_LENGTH = 80


def find_status(texts: list[str]) -> str | None:
    for text in texts:
        candidate = " ".join((text or "").split())
        if not candidate or len(candidate) > MAX_STATUS_LENGTH:
            continue
        if any(word in candidate for word in STATUS_WORDS):
            return candidate
    return None


def find_phone(texts: list[str], pattern: re.Pattern[str]) -> str | None:
    for text in texts:
        match = pattern.search(text or "")
        if match:
            return match.group(0)
    return None


class MapsScraper(BusinessInfoFallbackPort):
    def __init__(self, search_url: str, phone_pattern: str, timeout: float = 30.0) -> None:
        self._search_url = search_url
        self._phone_pattern = re.compile(phone_pattern)
        self._timeout = timeout

    async def scrape(self, name: str, address: str) -> LiveInfo:
        try:
            return await asyncio.wait_for(self._scrape(name, address), timeout=self._timeout)
        except asyncio.TimeoutError:
            logger.warning("Maps scrape timed out", extra={"reason": "timeout", "service": name})
        except Exception as exc:
            logger.warning("Maps scrape failed: %s", exc, extra={"reason": type(exc).__name__, "service": name})
        return LiveInfo.unavailable()

    async def _scrape(self, name: str, address: str) -> LiveInfo:
        from playwright.async_api import async_playwright

        url = self._search_url + quote(f"{name} {address}")
        async with async_playwright() as pw:
            browser = await pw.chromium.launch(headless=True, args=["--no-sandbox"])
            try:
                page = await browser.new_page(locale="pt-BR")
                await page.goto(url, wait_until="networkidle")
                first = await page.query_selector(FIRST_RESULT_SELECTOR)
                if first:
                    await first.click()
                    await page.wait_for_timeout(5000)
                texts = await page.locator("span, div, button, a").all_inner_texts()
            finally:
                await browser.close()

        status = find_status(texts)
        phone = find_phone(texts, self._phone_pattern)
        return LiveInfo(phone=phone, status=render_status(PlainText(status) if status else None))

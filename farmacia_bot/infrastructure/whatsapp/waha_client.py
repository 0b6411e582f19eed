from __future__ import annotations

import logging
from typing import Any

import httpx


class WahaClient:
    """Thin async client for the WAHA (WhatsApp HTTP API) bridge."""

    def __init__(self, base_url: str, session: str, api_key: str | None = None, timeout: float = 10.0) -> None:
        headers = {"Accept": "application/json"}
        if api_key:
            headers["X-Api-Key"] = api_key
        self._session = session
        self._client = httpx.AsyncClient(base_url=base_url.rstrip("/"), headers=headers, timeout=timeout)
        self._logger = logging.getLogger(__name__)

    async def send_text(self, chat_id: str, text: str) -> dict[str, Any]:
        payload = {"session": self._session, "chatId": chat_id, "text": text}
        resp = await self._client.post("/api/sendText", json=payload)
        self._raise_for_status(resp, "sendText", chat_id)
        return resp.json() if resp.content else {}

    async def check_exists(self, phone: str) -> dict[str, Any]:
        params = {"session": self._session, "phone": phone}
        resp = await self._client.get("/api/contacts/check-exists", params=params)
        self._raise_for_status(resp, "check-exists", phone)
        return resp.json()

    async def download(self, url: str) -> bytes:
        # media URLs are absolute and point back at the bridge, so the api key still applies
        resp = await self._client.get(url)
        self._raise_for_status(resp, "download", url)
        return resp.content

    async def aclose(self) -> None:
        await self._client.aclose()

    def _raise_for_status(self, resp: httpx.Response, operation: str, target: str) -> None:
        if resp.status_code < 400:
            return
        try:
            error_message = resp.json().get("message")
        except Exception:
            error_message = resp.text[:200]
        self._logger.error(
            "WAHA request failed",
            extra={
                "operation": operation,
                "status": resp.status_code,
                "error_message": error_message,
                "target": target,
            },
        )
        resp.raise_for_status()

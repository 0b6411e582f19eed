from __future__ import annotations

import httpx

from farmacia_bot.application.exceptions import TransportFailure
from farmacia_bot.application.ports.message_platform import MessagePlatformPort
from farmacia_bot.infrastructure.whatsapp.waha_client import WahaClient


class WahaPlatform(MessagePlatformPort):
    def __init__(self, client: WahaClient) -> None:
        self._client = client

    async def send_text(self, chat_id: str, text: str) -> None:
        try:
            await self._client.send_text(chat_id=chat_id, text=text)
        except httpx.HTTPError as e:
            raise TransportFailure(f"WhatsApp send failed: {e}") from e

    async def is_registered(self, chat_id: str) -> bool:
        phone = chat_id.split("@", 1)[0]
        try:
            data = await self._client.check_exists(phone)
        except httpx.HTTPError as e:
            raise TransportFailure(f"WhatsApp lookup failed: {e}") from e
        return bool(data.get("numberExists"))

    async def download_media(self, media_url: str) -> bytes:
        try:
            return await self._client.download(media_url)
        except httpx.HTTPError as e:
            raise TransportFailure(f"WhatsApp media download failed: {e}") from e

    async def aclose(self) -> None:
        await self._client.aclose()

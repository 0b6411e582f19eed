from __future__ import annotations

import logging

from farmacia_bot.application.ports.message_platform import MessagePlatformPort


class MockWhatsAppPlatform(MessagePlatformPort):
    """Logs instead of sending. Every number counts as registered; media is empty."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self.sent: list[tuple[str, str]] = []

    async def send_text(self, chat_id: str, text: str) -> None:
        self.sent.append((chat_id, text))
        self._logger.info("Mock send to WhatsApp", extra={"user_id": chat_id, "reply_text": text})

    async def is_registered(self, chat_id: str) -> bool:
        return True

    async def download_media(self, media_url: str) -> bytes:
        return b""

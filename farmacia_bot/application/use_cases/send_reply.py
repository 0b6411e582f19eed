from __future__ import annotations

import logging

from farmacia_bot.application.exceptions import TransportFailure
from farmacia_bot.application.ports.message_platform import MessagePlatformPort


class SendReplyUseCase:
    def __init__(self, platform: MessagePlatformPort, auto_reply_enabled: bool = True) -> None:
        self._platform = platform
        self._auto_reply_enabled = auto_reply_enabled
        self._logger = logging.getLogger(__name__)

    async def execute(self, chat_id: str, text: str) -> bool:
        """Send a reply once. Returns True if actually sent, False if skipped or failed."""
        if not text or not text.strip():
            return False
        if not self._auto_reply_enabled:
            self._logger.info("WOULD_SEND_REPLY", extra={"user_id": chat_id, "reply_text": text})
            self._logger.info("AUTO_REPLY_ENABLED=false -> skipping send")
            return False
        try:
            await self._platform.send_text(chat_id=chat_id, text=text)
        except TransportFailure as e:
            self._logger.error("Reply not delivered", extra={"user_id": chat_id, "reason": str(e)})
            return False
        return True

from __future__ import annotations

import logging

from farmacia_bot.application.exceptions import Unintelligible
from farmacia_bot.application.ports.message_platform import MessagePlatformPort
from farmacia_bot.application.ports.transcription import TranscriptionPort
from farmacia_bot.domain.entities.message import InboundEvent


class UnsupportedMedia(ValueError):
    """Raised for attachments the assistant cannot read (images, documents, stickers)."""
    pass


class NormalizeInputUseCase:
    """Turn an inbound event into plain text, transcribing voice notes."""

    def __init__(
        self,
        platform: MessagePlatformPort,
        transcriber: TranscriptionPort | None,
        sample_rate: int = 16000,
    ) -> None:
        self._platform = platform
        self._transcriber = transcriber
        self._sample_rate = sample_rate
        self._logger = logging.getLogger(__name__)

    async def execute(self, event: InboundEvent) -> str:
        """
        Raises:
            Unintelligible: the voice note produced no text
            UnsupportedMedia: non-audio attachment without text
            ServiceUnavailable / TransportFailure: download or transcription failed
        """
        if not event.is_voice:
            if event.has_media and not event.body.strip():
                raise UnsupportedMedia(event.media_kind or "media")
            return event.body

        if self._transcriber is None or not event.media_url:
            raise Unintelligible("voice input is not available")

        audio = await self._platform.download_media(event.media_url)
        text = await self._transcriber.transcribe(audio, self._sample_rate)
        text = " ".join(text.split())
        if not text:
            raise Unintelligible("transcript is empty")
        self._logger.info("Voice transcribed", extra={"message_id": event.id, "user_id": event.sender})
        return text

from __future__ import annotations

import asyncio
import logging

from openai import AsyncOpenAI

from farmacia_bot.application.exceptions import ServiceUnavailable, Unintelligible
from farmacia_bot.application.ports.transcription import TranscriptionPort


class OpenAITranscriber(TranscriptionPort):
    """
    OpenAI audio adapter implementing TranscriptionPort.

    WhatsApp voice notes arrive as ogg/opus and are accepted as-is, so
    sample_rate is only recorded for diagnostics.

    Raises:
        Unintelligible: empty transcript
        ServiceUnavailable: networking/provider failures and timeouts
    """

    def __init__(self, api_key: str, model: str, language: str, timeout: float = 30.0) -> None:
        self.client = AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        self._model = model
        self._language = language
        self._timeout = timeout
        self._logger = logging.getLogger(__name__)

    async def transcribe(self, audio: bytes, sample_rate: int) -> str:
        if not audio:
            raise Unintelligible("empty audio clip")
        try:
            resp = await asyncio.wait_for(
                self.client.audio.transcriptions.create(
                    model=self._model,
                    file=("voice.ogg", audio, "audio/ogg"),
                    language=self._language,
                ),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            raise ServiceUnavailable("OpenAI transcription timed out") from e
        except Exception as e:
            raise ServiceUnavailable(f"OpenAI API error: {e}") from e

        text = (getattr(resp, "text", "") or "").strip()
        self._logger.info("Audio transcribed", extra={"sample_rate": sample_rate, "text_length": len(text)})
        if not text:
            raise Unintelligible("transcript is empty")
        return text

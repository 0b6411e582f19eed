from abc import ABC, abstractmethod


class TranscriptionPort(ABC):
    @abstractmethod
    async def transcribe(self, audio: bytes, sample_rate: int) -> str:
        """
        Transcribe a voice clip to text.

        Raises:
            Unintelligible: nothing could be recognized
            ServiceUnavailable: provider failures and timeouts
        """
        raise NotImplementedError

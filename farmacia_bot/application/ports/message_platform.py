from abc import ABC, abstractmethod


class MessagePlatformPort(ABC):
    @abstractmethod
    async def send_text(self, chat_id: str, text: str) -> None:
        """Send one text message. Raises TransportFailure on delivery errors."""
        raise NotImplementedError

    @abstractmethod
    async def is_registered(self, chat_id: str) -> bool:
        """Whether the address has an account on the channel. Raises TransportFailure."""
        raise NotImplementedError

    @abstractmethod
    async def download_media(self, media_url: str) -> bytes:
        """Fetch the raw bytes of an inbound attachment. Raises TransportFailure."""
        raise NotImplementedError

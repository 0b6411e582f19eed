from dataclasses import dataclass


@dataclass(frozen=True)
class InboundEvent:
    id: str
    sender: str  # channel chat id, e.g. 5511987654321@c.us
    body: str
    timestamp: int
    has_media: bool = False
    media_kind: str | None = None  # "ptt", "audio", "image", ...
    media_url: str | None = None
    media_mimetype: str | None = None
    from_me: bool = False
    platform: str = "whatsapp"

    @property
    def is_voice(self) -> bool:
        if not self.has_media:
            return False
        if self.media_kind in {"ptt", "audio", "voice"}:
            return True
        return bool(self.media_mimetype and self.media_mimetype.startswith("audio/"))

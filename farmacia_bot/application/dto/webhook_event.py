from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from farmacia_bot.domain.entities.message import InboundEvent

MESSAGE_EVENTS = {"message", "message.any"}


class WebhookEventDTO(BaseModel):
    event: str | None = None
    session: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)

    def to_event(self) -> InboundEvent | None:
        if self.event not in MESSAGE_EVENTS:
            return None

        payload = self.payload or {}
        mid = payload.get("id")
        sender = payload.get("from")
        if not (mid and sender):
            return None

        media = payload.get("media") or {}
        has_media = bool(payload.get("hasMedia"))
        body = payload.get("body") or ""
        if not (body or has_media):
            return None

        return InboundEvent(
            id=str(mid),
            sender=str(sender),
            body=str(body),
            timestamp=int(payload.get("timestamp") or 0),
            has_media=has_media,
            media_kind=payload.get("type") or (payload.get("_data") or {}).get("type"),
            media_url=media.get("url"),
            media_mimetype=media.get("mimetype"),
            from_me=bool(payload.get("fromMe")),
        )

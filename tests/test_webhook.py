"""
Tests for the WhatsApp webhook: payload mapping, signature check and the HTTP route.
"""

from __future__ import annotations

import hashlib
import hmac
import json

import pytest
from fastapi.testclient import TestClient

from farmacia_bot.api import webhooks
from farmacia_bot.application.dto.webhook_event import WebhookEventDTO
from farmacia_bot.infrastructure.whatsapp.webhook_verify import verify_post_signature
from farmacia_bot.main import app


def _message_payload(**overrides):
    payload = {
        "id": "false_5511900000001@c.us_AAA",
        "from": "5511900000001@c.us",
        "fromMe": False,
        "body": "Preciso de dipirona",
        "hasMedia": False,
        "timestamp": 1700000000,
    }
    payload.update(overrides)
    return {"event": "message", "session": "default", "payload": payload}


def test_text_message_maps_to_event():
    event = WebhookEventDTO.model_validate(_message_payload()).to_event()

    assert event is not None
    assert event.id == "false_5511900000001@c.us_AAA"
    assert event.sender == "5511900000001@c.us"
    assert event.body == "Preciso de dipirona"
    assert event.timestamp == 1700000000
    assert not event.is_voice


def test_voice_message_maps_media():
    data = _message_payload(
        body="",
        hasMedia=True,
        type="ptt",
        media={"url": "http://waha:3000/api/files/voice.oga", "mimetype": "audio/ogg; codecs=opus"},
    )

    event = WebhookEventDTO.model_validate(data).to_event()

    assert event.is_voice
    assert event.media_url == "http://waha:3000/api/files/voice.oga"


def test_message_any_keeps_from_me_flag():
    data = _message_payload(fromMe=True)
    data["event"] = "message.any"

    event = WebhookEventDTO.model_validate(data).to_event()

    assert event.from_me


@pytest.mark.parametrize(
    "data",
    [
        {"event": "session.status", "payload": {"status": "WORKING"}},
        _message_payload(id=None),
        _message_payload(body="", hasMedia=False),
        {},
    ],
)
def test_irrelevant_payloads_are_dropped(data):
    assert WebhookEventDTO.model_validate(data).to_event() is None


def test_signature_check():
    body = b'{"event":"message"}'
    good = hmac.new(b"segredo", body, hashlib.sha512).hexdigest()
    good_256 = hmac.new(b"segredo", body, hashlib.sha256).hexdigest()

    assert verify_post_signature(body, good, "sha512", "segredo", "prod")
    assert verify_post_signature(body, good_256, "sha256", "segredo", "prod")
    assert not verify_post_signature(body, "deadbeef", "sha512", "segredo", "prod")
    assert not verify_post_signature(body, None, "sha512", "segredo", "prod")
    assert not verify_post_signature(body, good, "md5", "segredo", "prod")
    assert not verify_post_signature(body, good, "sha512", None, "prod")
    assert verify_post_signature(body, None, None, None, "dev")


class RecordingUseCase:
    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


@pytest.fixture
def recorder(monkeypatch):
    use_case = RecordingUseCase()
    monkeypatch.setattr(webhooks, "get_handle_incoming_message_use_case", lambda: use_case)
    monkeypatch.setattr(webhooks.settings, "WEBHOOK_HMAC_KEY", "segredo")
    monkeypatch.setattr(webhooks.settings, "ENV", "prod")
    return use_case


def _signed(data) -> tuple[bytes, dict[str, str]]:
    body = json.dumps(data).encode("utf-8")
    signature = hmac.new(b"segredo", body, hashlib.sha512).hexdigest()
    return body, {"X-Webhook-Hmac": signature, "X-Webhook-Hmac-Algorithm": "sha512"}


def test_route_queues_message(recorder):
    client = TestClient(app)
    body, headers = _signed(_message_payload())

    response = client.post("/webhooks/whatsapp", content=body, headers=headers)

    assert response.status_code == 200
    assert [e.body for e in recorder.events] == ["Preciso de dipirona"]


def test_route_rejects_bad_signature(recorder):
    client = TestClient(app)
    body, _ = _signed(_message_payload())

    response = client.post("/webhooks/whatsapp", content=body, headers={"X-Webhook-Hmac": "0" * 128})

    assert response.status_code == 403
    assert recorder.events == []


def test_route_ignores_own_messages(recorder):
    client = TestClient(app)
    data = _message_payload(fromMe=True)
    data["event"] = "message.any"
    body, headers = _signed(data)

    response = client.post("/webhooks/whatsapp", content=body, headers=headers)

    assert response.status_code == 200
    assert recorder.events == []


def test_health():
    assert TestClient(app).get("/health").json()["status"] == "ok"

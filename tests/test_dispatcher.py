from __future__ import annotations

from fakes import PHARMACY_CHAT, PHARMACY_PHONE, FakePlatform

from farmacia_bot.application.exceptions import TransportFailure
from farmacia_bot.application.use_cases.dispatch_order import DispatchOrderUseCase
from farmacia_bot.application.utils import replies


class BrokenPlatform(FakePlatform):
    async def send_text(self, chat_id: str, text: str) -> None:
        raise TransportFailure("bridge offline")


async def test_dispatch_sends_order_request():
    platform = FakePlatform()
    dispatcher = DispatchOrderUseCase(platform=platform, bot_name="Assistente Teste")

    result = await dispatcher.execute(PHARMACY_PHONE, "Drogaria Central", "dipirona", "Rua X, 10")

    assert result.success
    assert result.message == replies.DISPATCH_SENT
    assert result.phone == "5511987654321"
    assert platform.checked == [PHARMACY_CHAT]
    assert len(platform.sent) == 1
    chat_id, text = platform.sent[0]
    assert chat_id == PHARMACY_CHAT
    assert "Assistente Teste" in text
    assert "dipirona" in text
    assert "Rua X, 10" in text
    assert replies.PAYMENT_NOTE in text


async def test_dispatch_unregistered_never_sends():
    platform = FakePlatform(registered=False)
    dispatcher = DispatchOrderUseCase(platform=platform, bot_name="Assistente Teste")

    result = await dispatcher.execute(PHARMACY_PHONE, "Drogaria Central", "dipirona", "Rua X, 10")

    assert not result.success
    assert result.message == replies.DISPATCH_NOT_REGISTERED
    assert platform.sent == []


async def test_dispatch_invalid_phone_skips_lookup():
    platform = FakePlatform()
    dispatcher = DispatchOrderUseCase(platform=platform, bot_name="Assistente Teste")

    for phone in ("123", None, ""):
        result = await dispatcher.execute(phone, "Drogaria Central", "dipirona", "Rua X, 10")
        assert not result.success
        assert result.message == replies.DISPATCH_INVALID_PHONE

    assert platform.checked == []
    assert platform.sent == []


async def test_dispatch_transport_failure():
    dispatcher = DispatchOrderUseCase(platform=BrokenPlatform(), bot_name="Assistente Teste")

    result = await dispatcher.execute(PHARMACY_PHONE, "Drogaria Central", "dipirona", "Rua X, 10")

    assert not result.success
    assert result.message == replies.DISPATCH_FAILED


def test_normalize_matches_dispatch_phone():
    dispatcher = DispatchOrderUseCase(platform=FakePlatform(), bot_name="Assistente Teste")

    assert dispatcher.normalize(PHARMACY_PHONE) == "5511987654321"
    assert dispatcher.normalize("123") is None
    assert dispatcher.normalize(None) is None

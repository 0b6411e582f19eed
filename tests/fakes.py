"""
In-memory stand-ins for the ports, shared by the use-case tests.
"""

from __future__ import annotations

from typing import Any

from farmacia_bot.application.exceptions import AddressNotFound
from farmacia_bot.application.ports.business_info import BusinessInfoFallbackPort, BusinessInfoPort
from farmacia_bot.application.ports.geocoding import GeocodingPort
from farmacia_bot.application.ports.message_platform import MessagePlatformPort
from farmacia_bot.application.ports.nearby_search import NearbySearchPort
from farmacia_bot.application.ports.transcription import TranscriptionPort
from farmacia_bot.application.use_cases.correlate_reply import CorrelateReplyUseCase
from farmacia_bot.application.use_cases.dispatch_order import DispatchOrderUseCase
from farmacia_bot.application.use_cases.enrich_pharmacy import EnrichPharmacyUseCase
from farmacia_bot.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase
from farmacia_bot.application.use_cases.normalize_input import NormalizeInputUseCase
from farmacia_bot.application.use_cases.resolve_pharmacies import ResolvePharmaciesUseCase
from farmacia_bot.application.use_cases.send_reply import SendReplyUseCase
from farmacia_bot.domain.entities.coordinates import Coordinates
from farmacia_bot.domain.entities.live_info import LiveInfo
from farmacia_bot.infrastructure.store.memory_store import MemorySessionStore

USER = "5511900000001@c.us"
PHARMACY_PHONE = "(11) 98765-4321"
PHARMACY_CHAT = "5511987654321@c.us"


class FakePlatform(MessagePlatformPort):
    def __init__(self, registered: bool = True, audio: bytes = b"voice") -> None:
        self.registered = registered
        self.audio = audio
        self.sent: list[tuple[str, str]] = []
        self.checked: list[str] = []

    async def send_text(self, chat_id: str, text: str) -> None:
        self.sent.append((chat_id, text))

    async def is_registered(self, chat_id: str) -> bool:
        self.checked.append(chat_id)
        return self.registered

    async def download_media(self, media_url: str) -> bytes:
        return self.audio

    def sent_to(self, chat_id: str) -> list[str]:
        return [text for target, text in self.sent if target == chat_id]


class FakeGeocoder(GeocodingPort):
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.queries: list[str] = []

    async def geocode(self, address: str) -> Coordinates:
        self.queries.append(address)
        if self.error is not None:
            raise self.error
        return Coordinates(lat=-23.55, lon=-46.63)


class NotFoundGeocoder(FakeGeocoder):
    def __init__(self) -> None:
        super().__init__(error=AddressNotFound("nowhere"))


class FakeNearbySearch(NearbySearchPort):
    def __init__(self, results: list[dict[str, Any]] | None = None, error: Exception | None = None) -> None:
        self.results = results if results is not None else default_results()
        self.error = error
        self.calls: list[tuple[float, float, int, str]] = []

    async def nearby(self, lat: float, lon: float, radius_meters: int, category: str) -> list[dict[str, Any]]:
        self.calls.append((lat, lon, radius_meters, category))
        if self.error is not None:
            raise self.error
        return self.results


class FakePrimary(BusinessInfoPort):
    def __init__(self, record: dict[str, Any] | None = None, error: Exception | None = None) -> None:
        self.record = record
        self.error = error

    async def lookup(self, name: str, address: str) -> dict[str, Any] | None:
        if self.error is not None:
            raise self.error
        return self.record


class FakeFallback(BusinessInfoFallbackPort):
    def __init__(self, info: LiveInfo | None = None, error: Exception | None = None) -> None:
        self.info = info or LiveInfo.unavailable()
        self.error = error
        self.calls = 0

    async def scrape(self, name: str, address: str) -> LiveInfo:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.info


class FakeTranscriber(TranscriptionPort):
    def __init__(self, text: str = "", error: Exception | None = None) -> None:
        self.text = text
        self.error = error

    async def transcribe(self, audio: bytes, sample_rate: int) -> str:
        if self.error is not None:
            raise self.error
        return self.text


def default_results() -> list[dict[str, Any]]:
    return [
        {"name": "Drogaria Central", "addr:street": "Rua A", "addr:housenumber": "10", "addr:city": "São Paulo"},
        {"name": "Farmácia Popular", "addr:street": "Rua B", "addr:housenumber": "20", "addr:city": "São Paulo"},
    ]


def build_dialogue(
    platform: FakePlatform | None = None,
    geocoder: FakeGeocoder | None = None,
    nearby: FakeNearbySearch | None = None,
    primary: FakePrimary | None = None,
    fallback: FakeFallback | None = None,
    transcriber: FakeTranscriber | None = None,
) -> tuple[HandleIncomingMessageUseCase, MemorySessionStore, FakePlatform]:
    platform = platform or FakePlatform()
    store = MemorySessionStore()
    send_reply = SendReplyUseCase(platform=platform)
    use_case = HandleIncomingMessageUseCase(
        store=store,
        normalize_input=NormalizeInputUseCase(platform=platform, transcriber=transcriber),
        resolve_pharmacies=ResolvePharmaciesUseCase(
            geocoder=geocoder or FakeGeocoder(),
            nearby_search=nearby or FakeNearbySearch(),
        ),
        enrich_pharmacy=EnrichPharmacyUseCase(
            primary=primary or FakePrimary(record={"phone": PHARMACY_PHONE, "open_now": True}),
            fallback=fallback or FakeFallback(),
        ),
        dispatch_order=DispatchOrderUseCase(platform=platform, bot_name="Assistente Teste"),
        correlate_reply=CorrelateReplyUseCase(store=store, send_reply=send_reply),
        send_reply=send_reply,
    )
    return use_case, store, platform

from functools import lru_cache
import logging

from farmacia_bot.core.config import settings
from farmacia_bot.infrastructure.store.memory_store import MemorySessionStore
from farmacia_bot.infrastructure.whatsapp.waha_client import WahaClient
from farmacia_bot.infrastructure.whatsapp.waha_platform import WahaPlatform
from farmacia_bot.infrastructure.whatsapp.mock_platform import MockWhatsAppPlatform
from farmacia_bot.infrastructure.transcription.openai_transcriber import OpenAITranscriber
from farmacia_bot.infrastructure.geo.nominatim_client import NominatimGeocoder
from farmacia_bot.infrastructure.geo.overpass_client import OverpassNearbySearch
from farmacia_bot.infrastructure.business_info.serpapi_client import SerpApiBusinessInfo
from farmacia_bot.infrastructure.business_info.maps_scraper import MapsScraper
from farmacia_bot.application.ports.message_platform import MessagePlatformPort
from farmacia_bot.application.ports.transcription import TranscriptionPort
from farmacia_bot.application.use_cases.send_reply import SendReplyUseCase
from farmacia_bot.application.use_cases.normalize_input import NormalizeInputUseCase
from farmacia_bot.application.use_cases.resolve_pharmacies import ResolvePharmaciesUseCase
from farmacia_bot.application.use_cases.enrich_pharmacy import EnrichPharmacyUseCase
from farmacia_bot.application.use_cases.dispatch_order import DispatchOrderUseCase
from farmacia_bot.application.use_cases.correlate_reply import CorrelateReplyUseCase
from farmacia_bot.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase


logger = logging.getLogger(__name__)

_session_store: MemorySessionStore | None = None


def get_session_store() -> MemorySessionStore:
    global _session_store
    if _session_store is None:
        _session_store = MemorySessionStore()
    return _session_store


@lru_cache
def get_whatsapp_platform() -> MessagePlatformPort:
    logger.info("WAHA_BASE_URL present=%s ENV=%s", bool(settings.WAHA_BASE_URL), settings.ENV)

    if not settings.WAHA_BASE_URL:
        if settings.is_dev:
            logger.info("Using MockWhatsAppPlatform (WAHA_BASE_URL missing, ENV=dev/local)")
            return MockWhatsAppPlatform()
        raise ValueError("WAHA_BASE_URL is required to send WhatsApp messages.")

    logger.info("Using real WahaPlatform")
    client = WahaClient(
        base_url=settings.WAHA_BASE_URL,
        session=settings.WAHA_SESSION,
        api_key=settings.WAHA_API_KEY,
        timeout=settings.CHANNEL_TIMEOUT_SECONDS,
    )
    return WahaPlatform(client=client)


@lru_cache
def get_transcriber() -> TranscriptionPort | None:
    if not settings.VOICE_ENABLED:
        return None
    if not (settings.OPENAI_API_KEY and settings.OPENAI_API_KEY.strip()):
        if settings.is_dev:
            logger.warning("OPENAI_API_KEY missing; voice messages will not be transcribed")
            return None
        raise ValueError("OPENAI_API_KEY is required when VOICE_ENABLED is true.")
    return OpenAITranscriber(
        api_key=settings.OPENAI_API_KEY,
        model=settings.OPENAI_MODEL_TRANSCRIBE,
        language=settings.TRANSCRIBE_LANGUAGE,
        timeout=settings.TRANSCRIBE_TIMEOUT_SECONDS,
    )


def get_geocoder() -> NominatimGeocoder:
    return NominatimGeocoder(
        url=settings.NOMINATIM_URL,
        user_agent=settings.HTTP_USER_AGENT,
        timeout=settings.GEOCODE_TIMEOUT_SECONDS,
    )


def get_nearby_search() -> OverpassNearbySearch:
    return OverpassNearbySearch(
        url=settings.OVERPASS_URL,
        user_agent=settings.HTTP_USER_AGENT,
        timeout=settings.NEARBY_TIMEOUT_SECONDS,
    )


def get_business_info() -> SerpApiBusinessInfo | None:
    if not settings.SERPAPI_KEY:
        logger.warning("SERPAPI_KEY missing; live info will come from the scraper only")
        return None
    return SerpApiBusinessInfo(
        api_key=settings.SERPAPI_KEY,
        url=settings.SERPAPI_URL,
        timeout=settings.LOOKUP_TIMEOUT_SECONDS,
    )


def get_business_info_fallback() -> MapsScraper | None:
    if not settings.SCRAPER_ENABLED:
        return None
    return MapsScraper(
        search_url=settings.MAPS_SEARCH_URL,
        phone_pattern=settings.PHONE_PATTERN,
        timeout=settings.SCRAPE_TIMEOUT_SECONDS,
    )


@lru_cache
def get_handle_incoming_message_use_case() -> HandleIncomingMessageUseCase:
    store = get_session_store()
    platform = get_whatsapp_platform()
    send_reply = SendReplyUseCase(platform=platform, auto_reply_enabled=settings.AUTO_REPLY_ENABLED)
    return HandleIncomingMessageUseCase(
        store=store,
        normalize_input=NormalizeInputUseCase(
            platform=platform,
            transcriber=get_transcriber(),
            sample_rate=settings.AUDIO_SAMPLE_RATE,
        ),
        resolve_pharmacies=ResolvePharmaciesUseCase(
            geocoder=get_geocoder(),
            nearby_search=get_nearby_search(),
            radius_meters=settings.SEARCH_RADIUS_METERS,
            max_candidates=settings.MAX_CANDIDATES,
        ),
        enrich_pharmacy=EnrichPharmacyUseCase(
            primary=get_business_info(),
            fallback=get_business_info_fallback(),
            lookup_timeout=settings.LOOKUP_TIMEOUT_SECONDS,
        ),
        dispatch_order=DispatchOrderUseCase(
            platform=platform,
            bot_name=settings.BOT_NAME,
            country_code=settings.COUNTRY_CODE,
        ),
        correlate_reply=CorrelateReplyUseCase(
            store=store,
            send_reply=send_reply,
            country_code=settings.COUNTRY_CODE,
        ),
        send_reply=send_reply,
    )


def get_container() -> dict[str, object]:
    return {
        "use_case": get_handle_incoming_message_use_case(),
        "store": get_session_store(),
    }

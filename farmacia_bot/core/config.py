from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    AUTO_REPLY_ENABLED: bool = True

    BOT_NAME: str = "Assistente Virtual para Idosos"

    WAHA_BASE_URL: str | None = None
    WAHA_API_KEY: str | None = None
    WAHA_SESSION: str = "default"
    WEBHOOK_HMAC_KEY: str | None = None

    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL_TRANSCRIBE: str = "whisper-1"
    TRANSCRIBE_LANGUAGE: str = "pt"
    VOICE_ENABLED: bool = True
    AUDIO_SAMPLE_RATE: int = 16000

    NOMINATIM_URL: str = "https://nominatim.openstreetmap.org/search"
    OVERPASS_URL: str = "https://overpass-api.de/api/interpreter"
    HTTP_USER_AGENT: str = "BotAjudaIdoso/1.0"
    SEARCH_RADIUS_METERS: int = 2000
    MAX_CANDIDATES: int = 5

    SERPAPI_KEY: str | None = None
    SERPAPI_URL: str = "https://serpapi.com/search.json"
    SCRAPER_ENABLED: bool = True
    MAPS_SEARCH_URL: str = "https://www.google.com/maps/search/"
    PHONE_PATTERN: str = r"\(?\d{2}\)?\s?\d{4,5}-\d{4}"
    COUNTRY_CODE: str = "55"

    GEOCODE_TIMEOUT_SECONDS: float = 5.0
    NEARBY_TIMEOUT_SECONDS: float = 10.0
    LOOKUP_TIMEOUT_SECONDS: float = 10.0
    SCRAPE_TIMEOUT_SECONDS: float = 30.0
    TRANSCRIBE_TIMEOUT_SECONDS: float = 30.0
    CHANNEL_TIMEOUT_SECONDS: float = 10.0

    @property
    def is_dev(self) -> bool:
        return self.ENV.lower() in {"dev", "local"}


settings = Settings()

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from farmacia_bot.api.webhooks import router as webhooks_router
from farmacia_bot.core.config import settings
from farmacia_bot.infrastructure.whatsapp.waha_platform import WahaPlatform
from farmacia_bot.wiring.dependencies import get_container, get_whatsapp_platform

CONTEXT_KEYS = ("user_id", "message_id", "event", "phase", "service", "reason", "reply_text")


class ContextFormatter(logging.Formatter):
    """Appends the whitelisted `extra=` fields as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = [
            f"{key}={getattr(record, key)}"
            for key in CONTEXT_KEYS
            if getattr(record, key, None) not in (None, "")
        ]
        return f"{base} | {' '.join(extras)}" if extras else base


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(asctime)s %(levelname)s:%(name)s:%(message)s"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)


configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # raises ValueError on missing channel/transcription config
    get_container()
    logger.info("Farmacia Bot ready", extra={"event": "startup", "service": settings.WAHA_SESSION})
    yield
    platform = get_whatsapp_platform()
    if isinstance(platform, WahaPlatform):
        await platform.aclose()


app = FastAPI(title="Farmacia Bot", version="1.0.0", lifespan=lifespan)

app.include_router(webhooks_router, tags=["webhooks"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "env": settings.ENV}

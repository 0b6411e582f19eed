from __future__ import annotations

import json
import logging

from fastapi import APIRouter, BackgroundTasks, Request, Response

from farmacia_bot.application.dto.webhook_event import WebhookEventDTO
from farmacia_bot.infrastructure.whatsapp.webhook_verify import verify_post_signature
from farmacia_bot.wiring.dependencies import get_handle_incoming_message_use_case
from farmacia_bot.core.config import settings


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/webhooks/whatsapp")
async def whatsapp_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
) -> Response:
    try:
        try:
            use_case = get_handle_incoming_message_use_case()
        except Exception as e:
            logger.exception("Failed to initialize use case", extra={"reason": str(e)})
            return Response(status_code=500)

        body = await request.body()
        signature = request.headers.get("X-Webhook-Hmac")
        algorithm = request.headers.get("X-Webhook-Hmac-Algorithm")
        if not verify_post_signature(body, signature, algorithm, settings.WEBHOOK_HMAC_KEY, settings.ENV):
            return Response(status_code=403)

        try:
            payload = json.loads(body.decode("utf-8")) if body else {}
        except ValueError:
            logger.exception("Failed to parse webhook body")
            return Response(status_code=400)

        try:
            dto = WebhookEventDTO.model_validate(payload)
            event = dto.to_event()
            if event is None or event.from_me:
                return Response(status_code=200)

            logger.info("Webhook received", extra={"message_id": event.id, "event": dto.event})
            background_tasks.add_task(use_case.handle, event)
            return Response(status_code=200)
        except Exception as e:
            logger.exception("Error processing webhook event", extra={"reason": str(e)})
            return Response(status_code=500)
    except Exception as e:
        logger.exception("Fatal error in webhook handler", extra={"reason": str(e)})
        return Response(status_code=500)

from __future__ import annotations

import logging

from farmacia_bot.application.exceptions import InvalidPhoneNumber, NotRegistered, TransportFailure
from farmacia_bot.application.ports.message_platform import MessagePlatformPort
from farmacia_bot.application.utils import replies
from farmacia_bot.application.utils.phone import normalize_phone, to_chat_id
from farmacia_bot.domain.entities.dispatch_result import DispatchResult


class DispatchOrderUseCase:
    """Send one templated order request to a pharmacy's WhatsApp. No automatic retries."""

    def __init__(self, platform: MessagePlatformPort, bot_name: str, country_code: str = "55") -> None:
        self._platform = platform
        self._bot_name = bot_name
        self._country_code = country_code
        self._logger = logging.getLogger(__name__)

    async def execute(self, phone: str | None, pharmacy_name: str, drug_name: str, user_address: str) -> DispatchResult:
        try:
            chat_id = await self._reachable_chat_id(phone)
            text = replies.order_request(pharmacy_name, drug_name, user_address, self._bot_name)
            await self._platform.send_text(chat_id=chat_id, text=text)
        except InvalidPhoneNumber:
            self._logger.info("Order not sent", extra={"reason": "invalid_phone", "service": pharmacy_name})
            return DispatchResult(success=False, message=replies.DISPATCH_INVALID_PHONE)
        except NotRegistered as e:
            self._logger.info("Order not sent", extra={"reason": "not_registered", "service": pharmacy_name})
            return DispatchResult(success=False, message=replies.DISPATCH_NOT_REGISTERED, phone=str(e))
        except TransportFailure as e:
            self._logger.error("Order send failed", extra={"reason": str(e), "service": pharmacy_name})
            return DispatchResult(success=False, message=replies.DISPATCH_FAILED)

        normalized = chat_id.split("@", 1)[0]
        self._logger.info("Order sent", extra={"event": "order_sent", "service": pharmacy_name})
        return DispatchResult(success=True, message=replies.DISPATCH_SENT, phone=normalized)

    def normalize(self, phone: str | None) -> str | None:
        """The number an order to `phone` would go to, as used for reply correlation."""
        return normalize_phone(phone, country_code=self._country_code)

    async def _reachable_chat_id(self, phone: str | None) -> str:
        normalized = self.normalize(phone)
        if not normalized:
            raise InvalidPhoneNumber(phone or "")
        chat_id = to_chat_id(normalized)
        if not await self._platform.is_registered(chat_id):
            raise NotRegistered(normalized)
        return chat_id

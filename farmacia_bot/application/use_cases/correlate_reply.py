from __future__ import annotations

import logging
from dataclasses import replace

from farmacia_bot.application.ports.session_store import SessionStorePort
from farmacia_bot.application.use_cases.send_reply import SendReplyUseCase
from farmacia_bot.application.utils import replies
from farmacia_bot.application.utils.message_rules import is_pharmacy_confirmation
from farmacia_bot.application.utils.phone import phone_from_chat_id
from farmacia_bot.domain.entities.message import InboundEvent


class CorrelateReplyUseCase:
    """
    Match channel traffic against pending orders by normalized sender phone and
    relay the pharmacy's answer to the user who placed the order.
    """

    def __init__(self, store: SessionStorePort, send_reply: SendReplyUseCase, country_code: str = "55") -> None:
        self._store = store
        self._send_reply = send_reply
        self._country_code = country_code
        self._logger = logging.getLogger(__name__)

    async def on_event(self, event: InboundEvent) -> bool:
        """Returns True when the event was a pharmacy reply and has been consumed."""
        sender_phone = phone_from_chat_id(event.sender, country_code=self._country_code)
        if not sender_phone:
            return False

        matched = False
        for user_id in self._store.user_ids():
            if user_id == event.sender:
                continue
            order = self._store.get(user_id).pending_order
            if order is None or order.pharmacy_phone != sender_phone:
                continue

            async with self._store.lock(user_id):
                session = self._store.get(user_id)
                order = session.pending_order
                # re-check: the order may have been answered or cancelled while we waited
                if order is None or order.pharmacy_phone != sender_phone:
                    continue
                self._store.put(replace(session, pending_order=None))

            if is_pharmacy_confirmation(event.body):
                text = replies.pharmacy_confirmed(order.pharmacy_name, order.drug_name)
            else:
                text = replies.pharmacy_replied(order.pharmacy_name, event.body)
            await self._send_reply.execute(user_id, text)
            self._logger.info(
                "Pharmacy reply relayed",
                extra={"event": "reply_correlated", "user_id": user_id, "service": order.pharmacy_name},
            )
            matched = True

        return matched

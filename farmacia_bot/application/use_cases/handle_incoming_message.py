from __future__ import annotations

import logging
import time
from dataclasses import replace

from farmacia_bot.application.exceptions import (
    AddressNotFound,
    ServiceUnavailable,
    TransportFailure,
    Unintelligible,
)
from farmacia_bot.application.ports.session_store import SessionStorePort
from farmacia_bot.application.use_cases.correlate_reply import CorrelateReplyUseCase
from farmacia_bot.application.use_cases.dispatch_order import DispatchOrderUseCase
from farmacia_bot.application.use_cases.enrich_pharmacy import EnrichPharmacyUseCase
from farmacia_bot.application.use_cases.normalize_input import NormalizeInputUseCase, UnsupportedMedia
from farmacia_bot.application.use_cases.resolve_pharmacies import ResolvePharmaciesUseCase
from farmacia_bot.application.use_cases.send_reply import SendReplyUseCase
from farmacia_bot.application.utils import replies
from farmacia_bot.application.utils.message_rules import (
    is_affirmative,
    is_bare_negative,
    is_cancellation,
    is_greeting,
    is_negative,
    parse_selection,
    strip_greeting,
)
from farmacia_bot.application.utils.state_helpers import reset_search, reset_session, transition
from farmacia_bot.domain.entities.message import InboundEvent
from farmacia_bot.domain.entities.pharmacy import Pharmacy
from farmacia_bot.domain.entities.session import Phase, PendingOrder, Session

Outcome = tuple[Session, str | None]


class HandleIncomingMessageUseCase:
    """
    Per-user dialogue: drug name -> confirmation -> address -> drug name -> search
    -> pick a pharmacy -> optionally relay an order.

    Each input produces at most one final reply. Progress notes ("searching...",
    "sending...") are sent best-effort before it.
    """

    def __init__(
        self,
        store: SessionStorePort,
        normalize_input: NormalizeInputUseCase,
        resolve_pharmacies: ResolvePharmaciesUseCase,
        enrich_pharmacy: EnrichPharmacyUseCase,
        dispatch_order: DispatchOrderUseCase,
        correlate_reply: CorrelateReplyUseCase,
        send_reply: SendReplyUseCase,
    ) -> None:
        self._store = store
        self._normalize_input = normalize_input
        self._resolve_pharmacies = resolve_pharmacies
        self._enrich_pharmacy = enrich_pharmacy
        self._dispatch_order = dispatch_order
        self._correlate_reply = correlate_reply
        self._send_reply = send_reply
        self._logger = logging.getLogger(__name__)

    async def handle(self, event: InboundEvent) -> None:
        if event.from_me:
            return
        # WAHA delivers the same inbound message as both "message" and "message.any"
        if self._store.has_processed(event.id):
            self._logger.info("Duplicate message ignored", extra={"message_id": event.id})
            return
        self._store.mark_processed(event.id)

        try:
            if await self._correlate_reply.on_event(event):
                return

            async with self._store.lock(event.sender):
                reply = await self._process_event(event)
                if reply:
                    await self._send_reply.execute(event.sender, reply)
        except Exception as e:
            self._logger.exception("Error handling message", extra={"message_id": event.id, "reason": str(e)})

    async def handle_input(self, user_id: str, raw_input: str, is_voice: bool = False) -> str | None:
        """Interpret already-normalized text for `user_id` and return the reply to send, if any."""
        async with self._store.lock(user_id):
            return await self._handle_locked(user_id, raw_input, is_voice)

    async def _process_event(self, event: InboundEvent) -> str | None:
        try:
            text = await self._normalize_input.execute(event)
        except Unintelligible:
            return replies.AUDIO_UNINTELLIGIBLE
        except UnsupportedMedia:
            return replies.UNSUPPORTED_MEDIA
        except (ServiceUnavailable, TransportFailure) as e:
            self._logger.error("Voice input failed", extra={"message_id": event.id, "reason": str(e)})
            return replies.AUDIO_FAILED
        return await self._handle_locked(event.sender, text, event.is_voice)

    async def _handle_locked(self, user_id: str, raw_input: str, is_voice: bool) -> str | None:
        session = self._store.get(user_id)
        text = (raw_input or "").strip()
        previous_phase = session.phase

        if not text:
            return replies.HELP

        if is_cancellation(text):
            self._store.delete(user_id)
            self._log_transition(user_id, previous_phase, Phase.IDLE, "cancelled")
            return replies.CANCELLED

        if is_greeting(text):
            return replies.WELCOME

        if session.phase is Phase.AWAITING_DRUG_CONFIRMATION:
            session, reply = self._on_drug_confirmation(session, text)
        elif session.phase is Phase.AWAITING_ADDRESS:
            session, reply = self._on_address(session, text)
        elif session.phase is Phase.SELECTING_PHARMACY:
            session, reply = await self._on_selection(session, text)
        elif session.phase is Phase.AWAITING_ORDER_CONFIRMATION:
            session, reply = await self._on_order_confirmation(session, text)
        elif is_bare_negative(text):
            session, reply = reset_session(session), replies.CANCELLED
        elif session.phase is Phase.AWAITING_DRUG_NAME or session.address:
            session, reply = await self._on_drug_name(session, text)
        else:
            session, reply = self._on_drug_candidate(session, text)

        self._store.put(session)
        self._log_transition(user_id, previous_phase, session.phase, "voice" if is_voice else "text")
        return reply or replies.HELP

    def _on_drug_candidate(self, session: Session, text: str) -> Outcome:
        candidate = strip_greeting(text) or text
        session = transition(session, Phase.AWAITING_DRUG_CONFIRMATION, drug_name_candidate=candidate)
        return session, replies.confirm_drug(candidate)

    def _on_drug_confirmation(self, session: Session, text: str) -> Outcome:
        if is_affirmative(text):
            session = transition(
                session,
                Phase.AWAITING_ADDRESS,
                confirmed_drug_name=session.drug_name_candidate,
                drug_name_candidate=None,
            )
            return session, replies.ASK_ADDRESS
        return transition(session, Phase.IDLE, drug_name_candidate=None), replies.ASK_DRUG_AGAIN

    def _on_address(self, session: Session, text: str) -> Outcome:
        return transition(session, Phase.AWAITING_DRUG_NAME, address=text), replies.ASK_DRUG_NAME

    async def _on_drug_name(self, session: Session, text: str) -> Outcome:
        drug_name = strip_greeting(text) or text
        address = session.address or ""
        await self._send_reply.execute(session.user_id, replies.searching(drug_name))

        try:
            pharmacies = await self._resolve_pharmacies.execute(address, drug_name)
        except AddressNotFound:
            session = transition(session, Phase.AWAITING_ADDRESS, address=None, confirmed_drug_name=drug_name)
            return session, replies.ADDRESS_NOT_FOUND
        except ServiceUnavailable as e:
            self._logger.error("Pharmacy search failed", extra={"user_id": session.user_id, "reason": str(e)})
            return reset_search(session), replies.SEARCH_FAILED

        if not pharmacies:
            return replace(reset_search(session), confirmed_drug_name=drug_name), replies.NO_RESULTS

        session = transition(
            session,
            Phase.SELECTING_PHARMACY,
            confirmed_drug_name=drug_name,
            candidate_pharmacies=tuple(pharmacies),
            selected_pharmacy=None,
        )
        return session, replies.pharmacy_list(pharmacies, drug_name)

    async def _on_selection(self, session: Session, text: str) -> Outcome:
        candidates = session.candidate_pharmacies
        if is_bare_negative(text):
            return reset_session(session), replies.CANCELLED

        choice = parse_selection(text)
        if choice is None or not 1 <= choice <= len(candidates):
            return session, replies.invalid_selection(len(candidates))

        chosen = candidates[choice - 1]
        info = await self._enrich_pharmacy.execute(chosen.name, chosen.address, phone_hint=chosen.phone)
        enriched = replace(chosen, phone=info.phone, status=info.status)
        drug_name = session.confirmed_drug_name or ""
        card = replies.pharmacy_card(enriched, info, drug_name)

        if info.phone:
            session = transition(session, Phase.AWAITING_ORDER_CONFIRMATION, selected_pharmacy=enriched)
            return session, card + replies.offer_dispatch(drug_name, session.address or "")
        return reset_search(session), card + replies.suggested_message(drug_name)

    async def _on_order_confirmation(self, session: Session, text: str) -> Outcome:
        pharmacy = session.selected_pharmacy
        drug_name = session.confirmed_drug_name or ""
        address = session.address or ""

        if pharmacy is None:
            return reset_search(session), replies.HELP

        if is_affirmative(text):
            await self._send_reply.execute(session.user_id, replies.SENDING_ORDER)
            expected_phone = self._dispatch_order.normalize(pharmacy.phone)
            if expected_phone:
                # the pharmacy can answer before the send returns
                self._store.put(replace(session, pending_order=self._pending_order(pharmacy, expected_phone, drug_name)))

            result = await self._dispatch_order.execute(pharmacy.phone, pharmacy.name, drug_name, address)
            if not result.success or not result.phone:
                return reset_search(session), replies.order_failed(result.message, pharmacy.phone or "")
            pending = self._pending_order(pharmacy, result.phone, drug_name)
            return replace(reset_search(session), pending_order=pending), replies.order_sent(pharmacy.name, drug_name, address)

        if is_negative(text):
            return reset_search(session), replies.ORDER_CANCELLED

        return session, replies.ASK_YES_NO

    @staticmethod
    def _pending_order(pharmacy: Pharmacy, phone: str, drug_name: str) -> PendingOrder:
        return PendingOrder(
            pharmacy_name=pharmacy.name,
            pharmacy_phone=phone,
            drug_name=drug_name,
            created_at=time.time(),
        )

    def _log_transition(self, user_id: str, before: Phase, after: Phase, reason: str) -> None:
        self._logger.info(
            "Phase transition",
            extra={"event": "phase_transition", "user_id": user_id, "phase": f"{before.value}->{after.value}", "reason": reason},
        )

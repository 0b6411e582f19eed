from __future__ import annotations

import asyncio
from collections import OrderedDict
from contextlib import asynccontextmanager
from typing import AsyncIterator

from farmacia_bot.application.ports.session_store import SessionStorePort
from farmacia_bot.application.utils.state_helpers import is_blank
from farmacia_bot.domain.entities.session import Session


class MemorySessionStore(SessionStorePort):
    """Process-lifetime session map keyed by user id. Nothing survives a restart."""

    def __init__(self, processed_limit: int = 10000) -> None:
        self._sessions: dict[str, Session] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}
        self._processed: OrderedDict[str, None] = OrderedDict()
        self._processed_limit = processed_limit

    def get(self, user_id: str) -> Session:
        return self._sessions.get(user_id, Session(user_id=user_id))

    def put(self, session: Session) -> None:
        # an idle session with nothing in it is the same as no session
        if is_blank(session):
            self.delete(session.user_id)
            return
        self._sessions[session.user_id] = session

    def delete(self, user_id: str) -> None:
        self._sessions.pop(user_id, None)

    def user_ids(self) -> list[str]:
        return list(self._sessions)

    @asynccontextmanager
    async def lock(self, user_id: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(user_id, asyncio.Lock())
        self._lock_users[user_id] = self._lock_users.get(user_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            # the lock is dropped only when nobody holds or waits for it
            self._lock_users[user_id] -= 1
            if not self._lock_users[user_id]:
                del self._lock_users[user_id]
                self._locks.pop(user_id, None)

    def active_locks(self) -> list[str]:
        return list(self._locks)

    def has_processed(self, message_id: str) -> bool:
        return message_id in self._processed

    def mark_processed(self, message_id: str) -> None:
        self._processed[message_id] = None
        self._processed.move_to_end(message_id)
        while len(self._processed) > self._processed_limit:
            self._processed.popitem(last=False)

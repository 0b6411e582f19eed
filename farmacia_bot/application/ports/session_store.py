from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager

from farmacia_bot.domain.entities.session import Session


class SessionStorePort(ABC):
    @abstractmethod
    def get(self, user_id: str) -> Session:
        """Current session, or a fresh idle one if the user has none."""
        raise NotImplementedError

    @abstractmethod
    def put(self, session: Session) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, user_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def user_ids(self) -> list[str]:
        raise NotImplementedError

    @abstractmethod
    def lock(self, user_id: str) -> AbstractAsyncContextManager:
        """
        Per-user lock. Waiters are served in arrival order, so overlapping
        inputs from the same user are queued rather than dropped.
        """
        raise NotImplementedError

    @abstractmethod
    def has_processed(self, message_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def mark_processed(self, message_id: str) -> None:
        raise NotImplementedError

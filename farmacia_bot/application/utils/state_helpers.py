from __future__ import annotations

import time
from dataclasses import replace
from typing import Any

from farmacia_bot.domain.entities.session import Phase, Session


def transition(session: Session, phase: Phase, **changes: Any) -> Session:
    """Move to `phase`, replacing the previous one. The only way a handler changes phase."""
    return replace(session, phase=phase, updated_at=time.time(), **changes)


def reset_session(session: Session) -> Session:
    """Clear the whole flow, including the address and any pending order."""
    return Session(user_id=session.user_id, updated_at=time.time())


def reset_search(session: Session) -> Session:
    """Back to idle after a finished search or order step; the address is kept for the next drug."""
    return transition(
        session,
        Phase.IDLE,
        drug_name_candidate=None,
        candidate_pharmacies=(),
        selected_pharmacy=None,
    )


def is_blank(session: Session) -> bool:
    """Idle and holding no conversation data."""
    return session == Session(user_id=session.user_id, updated_at=session.updated_at)

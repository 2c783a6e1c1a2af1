"""Per-connection menu sessions."""

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Callable

from webbs_terminal.menu.item import MenuId

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TIMEOUT = 900


@dataclass
class MenuSession:
    """
    Where one connected user currently is.

    Holds identifiers only; the screen and its items are fetched
    from the stores each time they are needed.
    """
    session_id: str
    current_menu_id: MenuId
    user_level: int = 1
    last_seen: float = 0.0


class SessionStore:
    """
    Sessions keyed by id, with idle expiry.

    Sessions are created on connect or login and destroyed on
    logout or disconnect; ``expire`` sweeps out ones idle for longer
    than ``timeout`` seconds. The clock is injectable for tests.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_SESSION_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
    ):
        if timeout <= 0:
            raise ValueError(f"Session timeout must be positive, got {timeout}")
        self.timeout = timeout
        self._clock = clock
        self._sessions: dict[str, MenuSession] = {}

    def create(
        self,
        menu_id: MenuId,
        user_level: int = 1,
        session_id: str | None = None,
    ) -> MenuSession:
        """Open a session positioned on ``menu_id``."""
        session = MenuSession(
            session_id=session_id or uuid.uuid4().hex,
            current_menu_id=menu_id,
            user_level=user_level,
            last_seen=self._clock(),
        )
        self._sessions[session.session_id] = session
        logger.debug("Created session %s at menu %r", session.session_id, menu_id)
        return session

    def get(self, session_id: str) -> MenuSession | None:
        return self._sessions.get(session_id)

    def touch(self, session_id: str) -> MenuSession | None:
        """Mark a session as active now."""
        session = self._sessions.get(session_id)
        if session is not None:
            session.last_seen = self._clock()
        return session

    def destroy(self, session_id: str) -> bool:
        """Drop a session; returns False if it did not exist."""
        if self._sessions.pop(session_id, None) is None:
            return False
        logger.debug("Destroyed session %s", session_id)
        return True

    def expire(self) -> list[str]:
        """Remove idle sessions and return their ids."""
        cutoff = self._clock() - self.timeout
        stale = [sid for sid, s in self._sessions.items() if s.last_seen < cutoff]
        for sid in stale:
            del self._sessions[sid]
        if stale:
            logger.info("Expired %d idle sessions", len(stale))
        return stale

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

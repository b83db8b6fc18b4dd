import logging
import time
from uuid import uuid4

from app.core.config import settings
from app.generation_logic.letter_session import LetterSession

logger = logging.getLogger(__name__)


class SessionStore:
    """In-memory map of browser session ids to their ``LetterSession``.

    Sessions idle for longer than ``settings.session_ttl`` are dropped the next
    time the store is touched, and at most ``settings.session_max_entries`` are
    held: creating one past the cap evicts the least recently seen. Nothing is
    written to disk.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, LetterSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def purge_expired(self) -> int:
        """Remove sessions idle longer than session_ttl; return how many were removed."""
        now = time.time()
        expired = [sid for sid, s in self._sessions.items() if now - s.last_seen > settings.session_ttl]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("Evicted %d idle session(s)", len(expired))
        return len(expired)

    def _evict_least_recent(self) -> None:
        while self._sessions and len(self._sessions) >= settings.session_max_entries:
            oldest = min(self._sessions, key=lambda sid: self._sessions[sid].last_seen)
            del self._sessions[oldest]
            logger.info("Session cap reached, evicted session %s", oldest[:8])

    def get_or_create(self, session_id: str | None) -> tuple[str, LetterSession]:
        self.purge_expired()
        if session_id and session_id in self._sessions:
            session = self._sessions[session_id]
            session.touch()
            return session_id, session

        self._evict_least_recent()
        new_id = uuid4().hex
        session = LetterSession()
        self._sessions[new_id] = session
        logger.debug("Created session %s", new_id[:8])
        return new_id, session


session_store = SessionStore()

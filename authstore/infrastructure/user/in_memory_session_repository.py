"""In-memory Session Repository for testing."""

import logging
import threading
from typing import Dict, List, Optional

from authstore.domain.user.core.entities.session import Session
from authstore.domain.user.core.ports.session_repository import ISessionRepository

logger = logging.getLogger(__name__)


class InMemorySessionRepository(ISessionRepository):
    """In-memory implementation of Session repository for testing.

    Sessions are keyed by user_id and every write happens under one lock,
    so update-or-insert is atomic even across threads.
    """

    def __init__(self) -> None:
        """Initialize empty in-memory storage."""
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()
        logger.debug("InMemorySessionRepository initialized")

    async def upsert(self, session: Session) -> None:
        with self._lock:
            self._sessions[session.user_id] = session

    async def find_by_user_id(self, user_id: str) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(user_id)

    async def delete_by_user_id(self, user_id: str) -> int:
        with self._lock:
            return 1 if self._sessions.pop(user_id, None) is not None else 0

    def sessions_for(self, user_id: str) -> List[Session]:
        """All stored sessions of a user (test helper)."""
        with self._lock:
            session = self._sessions.get(user_id)
            return [session] if session is not None else []

"""Session repository port (interface)."""

from abc import ABC, abstractmethod
from typing import Optional

from authstore.domain.user.core.entities.session import Session


class ISessionRepository(ABC):
    """Repository interface for Session records.

    Implementations must keep at most one session per user_id, using a
    single atomic update-or-insert rather than a read followed by a write.

    Error contract:
    - StoreUnavailableError for any backend failure
    """

    @abstractmethod
    async def upsert(self, session: Session) -> None:
        """Set the jwt of the user's session, creating it if absent.

        Raises:
            StoreUnavailableError: If the write fails
        """
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: str) -> Optional[Session]:
        """Find the session owned by user_id.

        Returns:
            Session if found, None otherwise

        Raises:
            StoreUnavailableError: If the lookup fails
        """
        pass

    @abstractmethod
    async def delete_by_user_id(self, user_id: str) -> int:
        """Delete every session owned by user_id.

        Returns:
            Number of deleted sessions (0 is not an error)

        Raises:
            StoreUnavailableError: If the delete fails
        """
        pass

    async def ensure_indexes(self) -> None:
        """Create backend indexes, if the backend has any."""
        return None

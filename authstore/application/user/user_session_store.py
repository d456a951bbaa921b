"""
User/session store facade.

Single entry point used by the authentication layer. Both sub-stores
share the same injected storage handle.
"""

from typing import Any, Optional, Union

import structlog

from authstore.application.user.session_store import SessionStore
from authstore.application.user.user_store import UserStore
from authstore.domain.shared.results import ReadResult, WriteResult
from authstore.domain.user.core.entities.session import Session
from authstore.domain.user.core.entities.user import User
from authstore.domain.user.core.ports.session_repository import ISessionRepository
from authstore.domain.user.core.ports.user_repository import IUserRepository
from authstore.domain.user.core.value_objects.email import Email

logger = structlog.get_logger(__name__)


class UserSessionStore:
    """Accounts plus their login sessions.

    Example:
        >>> store = UserSessionStore(InMemoryUserRepository(), InMemorySessionRepository())
        >>> await store.add_user(User.create("foo@bar.com", "Foo Bar", "h"))
        >>> await store.create_user_session("foo@bar.com", "jwt1")
        >>> (await store.get_user_session("foo@bar.com")).value.jwt
        'jwt1'
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        session_repository: ISessionRepository,
        client: Optional[Any] = None,
    ) -> None:
        """Initialize store.

        Args:
            user_repository: Account records
            session_repository: Session records
            client: Database client owned by this store, closed by close()
        """
        self.users = UserStore(user_repository, session_repository)
        self.sessions = SessionStore(session_repository)
        self._client = client

    async def ensure_indexes(self) -> None:
        """Create backend indexes for both collections.

        Raises:
            StoreUnavailableError: If index creation fails
        """
        await self.users.repository.ensure_indexes()
        await self.sessions.repository.ensure_indexes()
        logger.info("user_session_store.indexes_ready")

    def close(self) -> None:
        """Close the owned client, if any."""
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.info("user_session_store.closed")

    # Users

    async def add_user(self, user: User) -> WriteResult:
        return await self.users.add_user(user)

    async def get_user(self, email: Union[str, Email]) -> ReadResult[User]:
        return await self.users.get_user(email)

    async def update_user_preferences(
        self, email: Union[str, Email], preferences: Any
    ) -> WriteResult:
        return await self.users.update_user_preferences(email, preferences)

    async def delete_user(self, email: Union[str, Email]) -> WriteResult:
        return await self.users.delete_user(email)

    # Sessions

    async def create_user_session(self, user_id: Union[str, Email], jwt: str) -> WriteResult:
        return await self.sessions.create_user_session(user_id, jwt)

    async def get_user_session(self, user_id: Union[str, Email]) -> ReadResult[Session]:
        return await self.sessions.get_user_session(user_id)

    async def delete_user_sessions(self, user_id: Union[str, Email]) -> WriteResult:
        return await self.sessions.delete_user_sessions(user_id)

"""In-memory User Repository for testing."""

import logging
import threading
from typing import Dict, Optional

from authstore.domain.user.core.entities.user import User
from authstore.domain.user.core.exceptions.user_errors import UserAlreadyExistsError
from authstore.domain.user.core.ports.user_repository import IUserRepository
from authstore.domain.user.core.value_objects.email import Email
from authstore.domain.user.core.value_objects.user_preferences import UserPreferences

logger = logging.getLogger(__name__)


class InMemoryUserRepository(IUserRepository):
    """In-memory implementation of User repository for testing.

    Stores users in memory keyed by email, so the unique-email rule holds
    the same way the MongoDB unique index enforces it. Entities are
    copied on the way in and out; callers never share stored state.

    NOT suitable for production with multiple processes (use MongoDB).

    Examples:
        >>> repo = InMemoryUserRepository()
        >>> await repo.add(User.create("foo@bar.com", "Foo Bar", "h"))
        >>> found = await repo.find_by_email(Email("foo@bar.com"))
    """

    def __init__(self) -> None:
        """Initialize empty in-memory storage."""
        self._users: Dict[str, User] = {}
        self._lock = threading.Lock()
        logger.debug("InMemoryUserRepository initialized")

    @staticmethod
    def _copy(user: User) -> User:
        return User(
            email=user.email,
            name=user.name,
            password=user.password,
            preferences=UserPreferences(data=user.preferences.to_document()),
        )

    async def add(self, user: User) -> None:
        key = str(user.email)
        with self._lock:
            if key in self._users:
                raise UserAlreadyExistsError(key)
            self._users[key] = self._copy(user)

    async def find_by_email(self, email: Email) -> Optional[User]:
        with self._lock:
            user = self._users.get(str(email))
            return self._copy(user) if user is not None else None

    async def replace_preferences(self, email: Email, preferences: UserPreferences) -> int:
        with self._lock:
            user = self._users.get(str(email))
            if user is None:
                return 0
            user.update_preferences(UserPreferences(data=preferences.to_document()))
            return 1

    async def delete_by_email(self, email: Email) -> int:
        with self._lock:
            return 1 if self._users.pop(str(email), None) is not None else 0

    def count(self) -> int:
        """Number of stored users (test helper)."""
        with self._lock:
            return len(self._users)

"""User repository port (interface)."""

from abc import ABC, abstractmethod
from typing import Optional

from authstore.domain.user.core.entities.user import User
from authstore.domain.user.core.value_objects.email import Email
from authstore.domain.user.core.value_objects.user_preferences import UserPreferences


class IUserRepository(ABC):
    """Repository interface for User aggregate.

    Defines contract for account persistence operations.
    Implementations must handle User entity serialization/deserialization.

    Error contract:
    - UserAlreadyExistsError when inserting a duplicate email
    - StoreUnavailableError for any backend failure
    """

    @abstractmethod
    async def add(self, user: User) -> None:
        """Insert a new user with majority-acknowledged durability.

        Args:
            user: User entity to persist

        Raises:
            UserAlreadyExistsError: If the email is already stored
            StoreUnavailableError: If the insert fails for any other reason
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find user by email.

        Returns:
            User entity if found, None otherwise

        Raises:
            StoreUnavailableError: If the lookup fails
        """
        pass

    @abstractmethod
    async def replace_preferences(self, email: Email, preferences: UserPreferences) -> int:
        """Replace the preferences container of a user.

        Returns:
            Number of matched users (0 or 1)

        Raises:
            StoreUnavailableError: If the update fails
        """
        pass

    @abstractmethod
    async def delete_by_email(self, email: Email) -> int:
        """Delete every user record with this email.

        Returns:
            Number of deleted records (0 when nothing matched)

        Raises:
            StoreUnavailableError: If the delete fails
        """
        pass

    async def ensure_indexes(self) -> None:
        """Create backend indexes, if the backend has any."""
        return None

"""MongoDB User Repository implementation."""

from typing import Any, Dict, Optional

from pymongo import ASCENDING, WriteConcern
from pymongo.errors import DuplicateKeyError

from authstore.domain.user.core.entities.user import User
from authstore.domain.user.core.exceptions.user_errors import (
    InvalidUserDataError,
    StoreUnavailableError,
    UserAlreadyExistsError,
)
from authstore.domain.user.core.ports.user_repository import IUserRepository
from authstore.domain.user.core.value_objects.email import Email
from authstore.domain.user.core.value_objects.user_preferences import UserPreferences
from authstore.infrastructure.persistence.mongodb.base import MongoBaseRepository


class MongoUserRepository(MongoBaseRepository, IUserRepository):
    """MongoDB implementation of User repository.

    Document shape (``users`` collection):
    - _id: assigned by MongoDB, ignored on read
    - email: logical unique key (unique index, see ensure_indexes)
    - name: display name
    - password: hashed credential
    - preferences: open-schema mapping

    Inserts wait for majority acknowledgement. Every other write uses the
    collection's default write concern.

    Examples:
        >>> repo = MongoUserRepository(db)
        >>> await repo.add(User.create("foo@bar.com", "Foo Bar", "h"))
        >>> found = await repo.find_by_email(Email("foo@bar.com"))
    """

    COLLECTION_NAME = "users"

    def __init__(self, db: Any, majority_wtimeout_ms: Optional[int] = None) -> None:
        """Initialize repository with MongoDB database.

        Args:
            db: MongoDB database instance
            majority_wtimeout_ms: wtimeout for majority inserts (None waits indefinitely)
        """
        super().__init__(db)
        self._majority = WriteConcern(w="majority", wtimeout=majority_wtimeout_ms)

    @property
    def collection_name(self) -> str:
        return self.COLLECTION_NAME

    @property
    def majority_write_concern(self) -> WriteConcern:
        """Write concern used by add()."""
        return self._majority

    async def ensure_indexes(self) -> None:
        """Create the unique email index duplicate detection relies on."""
        await self._create_index([("email", ASCENDING)], unique=True, name="unique_email")

    async def add(self, user: User) -> None:
        """Insert user with majority write concern.

        Raises:
            UserAlreadyExistsError: If email already stored
            StoreUnavailableError: For any other failure
        """
        try:
            await self._insert_one(self._entity_to_document(user), write_concern=self._majority)
        except DuplicateKeyError as e:
            raise UserAlreadyExistsError(str(user.email)) from e

    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find user by email.

        Returns:
            User entity or None if not found
        """
        document = await self._find_one({"email": str(email)})

        if not document:
            return None

        return self._document_to_entity(document)

    async def replace_preferences(self, email: Email, preferences: UserPreferences) -> int:
        """Overwrite the preferences field (no merge).

        Returns:
            Number of matched users
        """
        return await self._update_one(
            {"email": str(email)},
            {"$set": {"preferences": preferences.to_document()}},
        )

    async def delete_by_email(self, email: Email) -> int:
        """Delete all user records with this email."""
        return await self._delete_many({"email": str(email)})

    def _entity_to_document(self, user: User) -> Dict[str, Any]:
        return {
            "email": str(user.email),
            "name": user.name,
            "password": user.password,
            "preferences": user.preferences.to_document(),
        }

    def _document_to_entity(self, document: Dict[str, Any]) -> User:
        """Convert MongoDB document to User entity.

        Raises:
            StoreUnavailableError: If the stored document can't be mapped
        """
        try:
            return User.create(
                email=document["email"],
                name=document.get("name", ""),
                password=document["password"],
                preferences=document.get("preferences") or {},
            )
        except (KeyError, ValueError, InvalidUserDataError) as e:
            raise StoreUnavailableError("decode_user", e) from e

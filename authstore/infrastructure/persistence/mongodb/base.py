"""Base MongoDB repository with reusable patterns.

Provides common functionality for all MongoDB repositories:
- Collection access on an injected database handle
- Driver error translation (PyMongoError, BSONError and the
  OverflowError/UnicodeEncodeError raised while encoding a document
  → StoreUnavailableError)
- Logging

All concrete MongoDB repositories should inherit from MongoBaseRepository.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence, Tuple, Union
import logging

from bson.errors import BSONError
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import WriteConcern
from pymongo.errors import DuplicateKeyError, PyMongoError

from authstore.domain.user.core.exceptions.user_errors import StoreUnavailableError

logger = logging.getLogger(__name__)

IndexKeys = Union[str, Sequence[Tuple[str, int]]]

# bson raises OverflowError for ints wider than 8 bytes and
# UnicodeEncodeError for strings that are not valid UTF-8.
_STORE_ERRORS = (PyMongoError, BSONError, OverflowError, UnicodeEncodeError)


class MongoBaseRepository(ABC):
    """
    Abstract base class for MongoDB repositories.

    Provides common functionality:
    - Connection pooling (motor handles this automatically, one pool
      shared by every repository built on the same client)
    - Error handling with proper logging
    - Write concern overrides per operation

    DuplicateKeyError is re-raised untouched so subclasses can decide
    what a duplicate means. Every other driver or encoding error becomes
    StoreUnavailableError.

    Subclasses must implement:
    - collection_name: Name of MongoDB collection

    Example:
        class MongoSessionRepository(MongoBaseRepository):
            @property
            def collection_name(self) -> str:
                return "sessions"
    """

    def __init__(self, db: AsyncIOMotorDatabase[Dict[str, Any]]):
        """
        Initialize repository with a database handle.

        Args:
            db: Motor database (shared by all repositories of a store)
        """
        self._db = db
        self._collection: AsyncIOMotorCollection[Dict[str, Any]] = db[self.collection_name]

        logger.info(
            f"Initialized {self.__class__.__name__} " f"for collection '{self.collection_name}'"
        )

    # ============================================================
    # Abstract Properties (must be implemented)
    # ============================================================

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """MongoDB collection name."""
        pass

    # ============================================================
    # Protected Utility Methods (for subclasses)
    # ============================================================

    @property
    def collection(self) -> AsyncIOMotorCollection[Dict[str, Any]]:
        """Get MongoDB collection handle."""
        return self._collection

    def _unavailable(
        self, operation: str, error: Exception, filter_dict: Optional[Dict[str, Any]] = None
    ) -> StoreUnavailableError:
        logger.error(
            f"Error in {operation}: collection={self.collection_name}, "
            f"filter={filter_dict}, error={error}"
        )
        return StoreUnavailableError(operation, error)

    async def _find_one(self, filter_dict: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Find single document with error handling.

        Args:
            filter_dict: MongoDB filter

        Returns:
            Document dict or None if not found

        Raises:
            StoreUnavailableError: If MongoDB operation fails
        """
        try:
            doc: Optional[Dict[str, Any]] = await self._collection.find_one(filter_dict)
            return doc
        except _STORE_ERRORS as e:
            raise self._unavailable("find_one", e, filter_dict) from e

    async def _insert_one(
        self,
        document: Dict[str, Any],
        write_concern: Optional[WriteConcern] = None,
    ) -> None:
        """
        Insert single document with error handling.

        Args:
            document: MongoDB document to insert
            write_concern: Override for this insert only

        Raises:
            DuplicateKeyError: If a unique index rejects the document
            StoreUnavailableError: If MongoDB operation fails otherwise
        """
        collection = self._collection
        if write_concern is not None:
            collection = collection.with_options(write_concern=write_concern)

        try:
            await collection.insert_one(document)
        except DuplicateKeyError as e:
            logger.warning(
                f"Duplicate key in insert_one: collection={self.collection_name}, "
                f"error={e}"
            )
            raise
        except _STORE_ERRORS as e:
            raise self._unavailable("insert_one", e) from e

    async def _update_one(
        self,
        filter_dict: Dict[str, Any],
        update_dict: Dict[str, Any],
        upsert: bool = False,
    ) -> int:
        """
        Update single document with error handling.

        Args:
            filter_dict: MongoDB filter
            update_dict: Update operations (e.g., {"$set": {...}})
            upsert: Create document if not found

        Returns:
            Number of documents matched (0 or 1), or 1 when upserted

        Raises:
            DuplicateKeyError: If an upsert raced another insert on a unique index
            StoreUnavailableError: If MongoDB operation fails otherwise
        """
        try:
            result = await self._collection.update_one(filter_dict, update_dict, upsert=upsert)
        except DuplicateKeyError as e:
            logger.warning(
                f"Duplicate key in update_one: collection={self.collection_name}, "
                f"filter={filter_dict}, error={e}"
            )
            raise
        except _STORE_ERRORS as e:
            raise self._unavailable("update_one", e, filter_dict) from e

        if result.upserted_id is not None:
            return 1
        return int(result.matched_count)

    async def _delete_many(self, filter_dict: Dict[str, Any]) -> int:
        """
        Delete all matching documents with error handling.

        Args:
            filter_dict: MongoDB filter

        Returns:
            Number of documents deleted

        Raises:
            StoreUnavailableError: If MongoDB operation fails
        """
        try:
            result = await self._collection.delete_many(filter_dict)
            return int(result.deleted_count)
        except _STORE_ERRORS as e:
            raise self._unavailable("delete_many", e, filter_dict) from e

    async def _create_index(self, keys: IndexKeys, **kwargs: Any) -> None:
        """
        Create index with error handling.

        Raises:
            StoreUnavailableError: If MongoDB operation fails
        """
        try:
            await self._collection.create_index(keys, **kwargs)
        except _STORE_ERRORS as e:
            raise self._unavailable("create_index", e) from e

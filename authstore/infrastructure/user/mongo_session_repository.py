"""MongoDB Session Repository implementation."""

from typing import Any, Dict, Optional
import logging

from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from authstore.domain.user.core.entities.session import Session
from authstore.domain.user.core.exceptions.user_errors import StoreUnavailableError
from authstore.domain.user.core.ports.session_repository import ISessionRepository
from authstore.infrastructure.persistence.mongodb.base import MongoBaseRepository

logger = logging.getLogger(__name__)


class MongoSessionRepository(MongoBaseRepository, ISessionRepository):
    """MongoDB implementation of Session repository.

    Document shape (``sessions`` collection):
    - _id: assigned by MongoDB, ignored on read
    - user_id: owner email
    - jwt: opaque token

    One session per user is kept by writing through a single
    ``update_one(..., upsert=True)`` keyed on user_id. Two racing upserts
    can only both insert when nothing enforces uniqueness on user_id, so
    ensure_indexes() makes that index unique; the losing upsert then gets
    a duplicate key error and is re-issued as a plain update.

    The session document shape declares no uniqueness rule, so the unique
    index goes beyond that data definition and is on by default. Pass
    ``unique_user_index=False`` to get a plain index and rely on the
    upsert alone; concurrent first logins for one user may then leave two
    documents.
    """

    COLLECTION_NAME = "sessions"

    def __init__(self, db: Any, unique_user_index: bool = True) -> None:
        """Initialize repository with MongoDB database.

        Args:
            db: MongoDB database instance
            unique_user_index: Make the user_id index unique in ensure_indexes()
        """
        super().__init__(db)
        self._unique_user_index = unique_user_index

    @property
    def collection_name(self) -> str:
        return self.COLLECTION_NAME

    async def ensure_indexes(self) -> None:
        await self._create_index(
            [("user_id", ASCENDING)],
            unique=self._unique_user_index,
            name="unique_user_id" if self._unique_user_index else "idx_user_id",
        )

    async def upsert(self, session: Session) -> None:
        """Set the user's jwt in one atomic update-or-insert.

        Raises:
            StoreUnavailableError: If the write fails
        """
        filter_dict = {"user_id": session.user_id}
        update_dict = {"$set": {"jwt": session.jwt}}

        try:
            await self._update_one(filter_dict, update_dict, upsert=True)
        except DuplicateKeyError:
            # Another upsert inserted first; the document exists now.
            logger.info(f"Upsert raced for user_id={session.user_id}, retrying as update")
            try:
                await self._update_one(filter_dict, update_dict, upsert=True)
            except DuplicateKeyError as e:
                raise StoreUnavailableError("update_one", e) from e

    async def find_by_user_id(self, user_id: str) -> Optional[Session]:
        document = await self._find_one({"user_id": user_id})

        if not document:
            return None

        return self._document_to_entity(document)

    async def delete_by_user_id(self, user_id: str) -> int:
        """Delete all sessions for user_id (0 deleted is fine)."""
        return await self._delete_many({"user_id": user_id})

    def _document_to_entity(self, document: Dict[str, Any]) -> Session:
        try:
            return Session.from_document(document)
        except (KeyError, ValueError) as e:
            raise StoreUnavailableError("decode_session", e) from e

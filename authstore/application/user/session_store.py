"""
Session store.

Keeps at most one login session per user. The session key is the
owner's email.
"""

from typing import Union

import structlog
from pydantic import ValidationError

from authstore.domain.shared.results import ReadResult, WriteResult
from authstore.domain.user.core.entities.session import Session
from authstore.domain.user.core.exceptions.user_errors import (
    InvalidUserDataError,
    StoreUnavailableError,
)
from authstore.domain.user.core.ports.session_repository import ISessionRepository
from authstore.domain.user.core.value_objects.email import Email

logger = structlog.get_logger(__name__)


def _key(user_id: Union[str, Email]) -> str:
    """Validate a session owner key the same way account emails are.

    Raises:
        ValueError: If user_id is not a valid email key
    """
    if isinstance(user_id, Email):
        return user_id.value
    return Email(user_id).value


class SessionStore:
    """Session persistence with a one-session-per-user policy.

    Per user_id the store is either Absent or Present(jwt):
    - create_user_session: Absent | Present(any) -> Present(jwt)
    - delete_user_sessions: Present(any) -> Absent, no-op on Absent

    Backend failures are reported as TRANSIENT_FAILURE results and logged;
    they are never raised.
    """

    def __init__(self, repository: ISessionRepository) -> None:
        self._repository = repository

    @property
    def repository(self) -> ISessionRepository:
        return self._repository

    async def create_user_session(self, user_id: Union[str, Email], jwt: str) -> WriteResult:
        """Create the user's session or replace its jwt.

        Implemented as one atomic update-or-insert on the backend, so
        concurrent calls for the same user converge to a single record.

        Args:
            user_id: Owner email
            jwt: Opaque session token

        Returns:
            SUCCESS, VALIDATION_FAILURE (invalid user_id, empty jwt) or TRANSIENT_FAILURE
        """
        try:
            key = _key(user_id)
        except ValueError as e:
            logger.warning("session_store.create_user_session.invalid_user_id", error=str(e))
            return WriteResult.validation_failure(InvalidUserDataError("user_id", str(e)))

        try:
            session = Session(user_id=key, jwt=jwt)
        except ValidationError as e:
            logger.warning("session_store.create_user_session.invalid", errors=e.error_count())
            return WriteResult.validation_failure(InvalidUserDataError("session", str(e)))

        try:
            await self._repository.upsert(session)
        except StoreUnavailableError as e:
            logger.error(
                "session_store.create_user_session.failed",
                user_id=session.user_id,
                error=str(e),
            )
            return WriteResult.transient_failure(e)

        logger.debug("session_store.create_user_session.ok", user_id=session.user_id)
        return WriteResult.success(affected=1)

    async def get_user_session(self, user_id: Union[str, Email]) -> ReadResult[Session]:
        """Return the user's session, NOT_FOUND when there is none."""
        try:
            key = _key(user_id)
        except ValueError:
            return ReadResult.not_found()

        try:
            session = await self._repository.find_by_user_id(key)
        except StoreUnavailableError as e:
            logger.error("session_store.get_user_session.failed", user_id=key, error=str(e))
            return ReadResult.transient_failure(e)

        if session is None:
            return ReadResult.not_found()
        return ReadResult.found(session)

    async def delete_user_sessions(self, user_id: Union[str, Email]) -> WriteResult:
        """Delete every session of the user.

        Idempotent: deleting when nothing is stored is a SUCCESS with
        ``affected == 0``.
        """
        try:
            key = _key(user_id)
        except ValueError as e:
            return WriteResult.validation_failure(InvalidUserDataError("user_id", str(e)))

        try:
            deleted = await self._repository.delete_by_user_id(key)
        except StoreUnavailableError as e:
            logger.error("session_store.delete_user_sessions.failed", user_id=key, error=str(e))
            return WriteResult.transient_failure(e)

        logger.debug("session_store.delete_user_sessions.ok", user_id=key, deleted=deleted)
        return WriteResult.success(affected=deleted)

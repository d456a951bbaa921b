"""
User store.

Account records keyed by email. Deleting a user cascades to its
sessions.
"""

from typing import Any, Optional, Union

import structlog

from authstore.domain.shared.results import ReadResult, WriteResult
from authstore.domain.user.core.entities.user import User
from authstore.domain.user.core.exceptions.user_errors import (
    InvalidUserDataError,
    StoreUnavailableError,
    UserAlreadyExistsError,
)
from authstore.domain.user.core.ports.session_repository import ISessionRepository
from authstore.domain.user.core.ports.user_repository import IUserRepository
from authstore.domain.user.core.value_objects.email import Email
from authstore.domain.user.core.value_objects.user_preferences import UserPreferences

logger = structlog.get_logger(__name__)


def _parse_email(email: Union[str, Email]) -> Optional[Email]:
    if isinstance(email, Email):
        return email
    try:
        return Email(email)
    except ValueError:
        return None


class UserStore:
    """Account persistence.

    Outcomes:
    - add_user: SUCCESS, CONFLICT (email taken), TRANSIENT_FAILURE,
      VALIDATION_FAILURE
    - get_user: FOUND, NOT_FOUND, TRANSIENT_FAILURE
    - update_user_preferences / delete_user: SUCCESS, TRANSIENT_FAILURE,
      VALIDATION_FAILURE

    Only add_user asks for majority-acknowledged durability. Other writes
    use the backend's default acknowledgement.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        session_repository: ISessionRepository,
    ) -> None:
        """Initialize store.

        Args:
            user_repository: Account records
            session_repository: Session records, needed for the cascading delete
        """
        self._users = user_repository
        self._sessions = session_repository

    @property
    def repository(self) -> IUserRepository:
        return self._users

    async def add_user(self, user: User) -> WriteResult:
        """Insert a new account.

        Returns:
            CONFLICT carrying UserAlreadyExistsError when the email is taken;
            call ``raise_for_status()`` to get it raised.
        """
        if not isinstance(user, User):
            return WriteResult.validation_failure(
                InvalidUserDataError("user", f"expected User, got {type(user).__name__}")
            )

        try:
            await self._users.add(user)
        except UserAlreadyExistsError as e:
            logger.warning("user_store.add_user.conflict", email=str(user.email))
            return WriteResult.conflict(e)
        except StoreUnavailableError as e:
            logger.error("user_store.add_user.failed", email=str(user.email), error=str(e))
            return WriteResult.transient_failure(e)

        logger.info("user_store.add_user.ok", email=str(user.email))
        return WriteResult.success(affected=1)

    async def get_user(self, email: Union[str, Email]) -> ReadResult[User]:
        """Look up an account; NOT_FOUND is not an error."""
        parsed = _parse_email(email)
        if parsed is None:
            return ReadResult.not_found()

        try:
            user = await self._users.find_by_email(parsed)
        except StoreUnavailableError as e:
            logger.error("user_store.get_user.failed", email=str(parsed), error=str(e))
            return ReadResult.transient_failure(e)

        if user is None:
            return ReadResult.not_found()
        return ReadResult.found(user)

    async def update_user_preferences(
        self,
        email: Union[str, Email],
        preferences: Any,
    ) -> WriteResult:
        """Replace the user's whole preferences container.

        Null or malformed preferences are rejected before the backend is
        touched. Updating an unknown email succeeds with ``affected == 0``.

        Args:
            email: Account email
            preferences: UserPreferences or a plain mapping
        """
        parsed = _parse_email(email)
        if parsed is None:
            return WriteResult.validation_failure(
                InvalidUserDataError("email", "cannot be empty")
            )

        try:
            prefs = UserPreferences.coerce(preferences)
        except InvalidUserDataError as e:
            logger.warning(
                "user_store.update_user_preferences.invalid", email=str(parsed), reason=e.reason
            )
            return WriteResult.validation_failure(e)

        try:
            matched = await self._users.replace_preferences(parsed, prefs)
        except StoreUnavailableError as e:
            logger.error(
                "user_store.update_user_preferences.failed", email=str(parsed), error=str(e)
            )
            return WriteResult.transient_failure(e)

        if matched == 0:
            logger.info("user_store.update_user_preferences.no_match", email=str(parsed))
        return WriteResult.success(affected=matched)

    async def delete_user(self, email: Union[str, Email]) -> WriteResult:
        """Delete the user's sessions, then the user.

        Not atomic: these are two separate backend calls. If the second
        fails the sessions are already gone while the account remains.
        Both halves are idempotent, so retrying delete_user is safe.

        Returns:
            SUCCESS with ``affected`` = deleted user records (0 if absent)
        """
        parsed = _parse_email(email)
        if parsed is None:
            return WriteResult.validation_failure(
                InvalidUserDataError("email", "cannot be empty")
            )

        try:
            sessions_deleted = await self._sessions.delete_by_user_id(parsed.value)
        except StoreUnavailableError as e:
            logger.error(
                "user_store.delete_user.sessions_failed", email=str(parsed), error=str(e)
            )
            return WriteResult.transient_failure(e)

        try:
            users_deleted = await self._users.delete_by_email(parsed)
        except StoreUnavailableError as e:
            logger.error(
                "user_store.delete_user.partial",
                email=str(parsed),
                sessions_deleted=sessions_deleted,
                error=str(e),
            )
            return WriteResult.transient_failure(e)

        logger.info(
            "user_store.delete_user.ok",
            email=str(parsed),
            sessions_deleted=sessions_deleted,
            users_deleted=users_deleted,
        )
        return WriteResult.success(affected=users_deleted)

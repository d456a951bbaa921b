"""
Operation results.

Every store operation reports its outcome through one of these types
instead of mixing raised errors, boolean sentinels and None.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from authstore.domain.user.core.exceptions.user_errors import UserDomainError

T = TypeVar("T")


class WriteStatus(str, Enum):
    """Outcome of a write operation."""

    SUCCESS = "success"
    CONFLICT = "conflict"
    TRANSIENT_FAILURE = "transient_failure"
    VALIDATION_FAILURE = "validation_failure"


class ReadStatus(str, Enum):
    """Outcome of a read operation."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    TRANSIENT_FAILURE = "transient_failure"


@dataclass(frozen=True)
class WriteResult:
    """
    Result of a write.

    ``affected`` counts matched or deleted records. A write that matches
    nothing is still a success (deletes are idempotent).

    Results have no truth value: check ``succeeded`` or
    ``status``.

    Example:
        >>> result = await store.add_user(user)
        >>> if result.status is WriteStatus.CONFLICT:
        ...     ...
        >>> result.raise_for_status()  # raises UserAlreadyExistsError
    """

    status: WriteStatus
    error: Optional[UserDomainError] = None
    affected: int = 0

    @classmethod
    def success(cls, affected: int = 0) -> WriteResult:
        return cls(status=WriteStatus.SUCCESS, affected=affected)

    @classmethod
    def conflict(cls, error: UserDomainError) -> WriteResult:
        return cls(status=WriteStatus.CONFLICT, error=error)

    @classmethod
    def transient_failure(cls, error: UserDomainError) -> WriteResult:
        return cls(status=WriteStatus.TRANSIENT_FAILURE, error=error)

    @classmethod
    def validation_failure(cls, error: UserDomainError) -> WriteResult:
        return cls(status=WriteStatus.VALIDATION_FAILURE, error=error)

    @property
    def succeeded(self) -> bool:
        return self.status is WriteStatus.SUCCESS

    @property
    def is_conflict(self) -> bool:
        return self.status is WriteStatus.CONFLICT

    @property
    def is_transient_failure(self) -> bool:
        return self.status is WriteStatus.TRANSIENT_FAILURE

    @property
    def is_validation_failure(self) -> bool:
        return self.status is WriteStatus.VALIDATION_FAILURE

    def raise_for_status(self) -> None:
        """Raise the carried error unless the write succeeded."""
        if self.error is not None:
            raise self.error

    def __bool__(self) -> bool:
        raise TypeError("WriteResult has no truth value; check .succeeded or .status")


@dataclass(frozen=True)
class ReadResult(Generic[T]):
    """
    Result of a read.

    NOT_FOUND is a normal outcome, never an error. Only
    TRANSIENT_FAILURE carries an error.
    """

    status: ReadStatus
    value: Optional[T] = None
    error: Optional[UserDomainError] = None

    @classmethod
    def found(cls, value: T) -> ReadResult[T]:
        return cls(status=ReadStatus.FOUND, value=value)

    @classmethod
    def not_found(cls) -> ReadResult[T]:
        return cls(status=ReadStatus.NOT_FOUND)

    @classmethod
    def transient_failure(cls, error: UserDomainError) -> ReadResult[T]:
        return cls(status=ReadStatus.TRANSIENT_FAILURE, error=error)

    @property
    def is_found(self) -> bool:
        return self.status is ReadStatus.FOUND

    @property
    def is_not_found(self) -> bool:
        return self.status is ReadStatus.NOT_FOUND

    @property
    def is_transient_failure(self) -> bool:
        return self.status is ReadStatus.TRANSIENT_FAILURE

    def unwrap(self) -> Optional[T]:
        """Return the value (None when not found), raising on failure."""
        if self.error is not None:
            raise self.error
        return self.value

    def __bool__(self) -> bool:
        raise TypeError("ReadResult has no truth value; check .is_found or .status")

"""User domain exceptions."""

from typing import Optional


class UserDomainError(Exception):
    """Base exception for User domain errors."""

    pass


class UserAlreadyExistsError(UserDomainError):
    """User with given identifier already exists."""

    def __init__(self, identifier: str):
        """Initialize with user identifier.

        Args:
            identifier: Email that already exists
        """
        self.identifier = identifier
        super().__init__(f"User already exists: {identifier}")


class StoreUnavailableError(UserDomainError):
    """Backing store failed to complete an operation.

    Covers network errors, timeouts, write concern failures and
    documents the driver could not encode or decode. The driver
    exception is chained as ``__cause__``.
    """

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        """Initialize with failed operation and underlying error.

        Args:
            operation: Store operation that failed (e.g. "insert_one")
            cause: Driver exception, if any
        """
        self.operation = operation
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Store operation '{operation}' failed{detail}")


class InvalidUserDataError(UserDomainError):
    """Input rejected before reaching the store."""

    def __init__(self, field: str, reason: str):
        """Initialize with offending field and reason.

        Args:
            field: Name of the invalid field
            reason: Reason why it's invalid
        """
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


class InvalidPreferencesError(InvalidUserDataError):
    """Preferences container is missing or holds unsupported values."""

    def __init__(self, reason: str):
        super().__init__("preferences", reason)

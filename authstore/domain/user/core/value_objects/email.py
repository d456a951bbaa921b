"""Email value object."""

from dataclasses import dataclass

MAX_EMAIL_LENGTH = 320


@dataclass(frozen=True)
class Email:
    """Account email value object.

    Logical unique key of a user account. Also used as the owner key
    of the user's session (``sessions.user_id``).

    Examples:
        >>> email = Email("foo@bar.com")
        >>> str(email)
        'foo@bar.com'

        >>> Email("  foo@bar.com ").value
        'foo@bar.com'

    Raises:
        ValueError: If empty or too long
    """

    value: str

    def __post_init__(self) -> None:
        """Validate and normalize surrounding whitespace."""
        if not isinstance(self.value, str):
            raise ValueError(f"Email must be a string, got {type(self.value).__name__}")

        stripped = self.value.strip()
        if not stripped:
            raise ValueError("Email cannot be empty")

        if len(stripped) > MAX_EMAIL_LENGTH:
            raise ValueError(
                f"Email too long ({len(stripped)} chars). "
                f"Maximum {MAX_EMAIL_LENGTH} characters allowed"
            )

        # frozen dataclass: bypass __setattr__ to store the normalized value
        object.__setattr__(self, "value", stripped)

    def __str__(self) -> str:
        """String representation returns the value."""
        return self.value

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"Email('{self.value}')"

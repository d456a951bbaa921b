"""User entity - aggregate root."""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from authstore.domain.user.core.exceptions.user_errors import InvalidUserDataError
from authstore.domain.user.core.value_objects.email import Email
from authstore.domain.user.core.value_objects.user_preferences import UserPreferences


@dataclass
class User:
    """User aggregate root.

    Represents an account record. Primary identifier is the email.

    Invariants:
    - email is non-empty and unique across stored users
    - password is an opaque, already-hashed credential (never a plaintext)
    - preferences is always a valid UserPreferences (never None)

    Examples:
        >>> user = User.create("foo@bar.com", "Foo Bar", "h")
        >>> user.preferences.data
        {}

        >>> user.update_preferences(UserPreferences(data={"theme": "dark"}))
        >>> user.preferences.get("theme")
        'dark'
    """

    email: Email
    name: str
    password: str = field(repr=False)
    preferences: UserPreferences = field(default_factory=UserPreferences.default)

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not isinstance(self.email, Email):
            raise InvalidUserDataError("email", "must be an Email value object")

        if not isinstance(self.name, str):
            raise InvalidUserDataError("name", "must be a string")

        if not isinstance(self.password, str) or not self.password:
            raise InvalidUserDataError("password", "must be a non-empty hash string")

        if not isinstance(self.preferences, UserPreferences):
            raise InvalidUserDataError("preferences", "must be a UserPreferences value object")

    @staticmethod
    def create(
        email: Union[str, Email],
        name: str,
        password: str,
        preferences: Optional[Union[UserPreferences, Mapping[str, Any]]] = None,
    ) -> "User":
        """Factory method to create a new user.

        Args:
            email: Account email (logical unique key)
            name: Display name
            password: Hashed credential
            preferences: Optional preferences (defaults to empty)

        Returns:
            New User instance

        Raises:
            InvalidUserDataError: If any field is invalid
        """
        if not isinstance(email, Email):
            try:
                email = Email(email)
            except ValueError as e:
                raise InvalidUserDataError("email", str(e)) from e

        prefs = (
            UserPreferences.default()
            if preferences is None
            else UserPreferences.coerce(preferences)
        )

        return User(email=email, name=name, password=password, preferences=prefs)

    def update_preferences(self, preferences: UserPreferences) -> None:
        """Replace the whole preferences container (no merge)."""
        self.preferences = preferences

    def __eq__(self, other: object) -> bool:
        """Equality based on email (aggregate identity)."""
        if not isinstance(other, User):
            return False
        return self.email == other.email

    def __hash__(self) -> int:
        """Hash based on email (aggregate identity)."""
        return hash(self.email)

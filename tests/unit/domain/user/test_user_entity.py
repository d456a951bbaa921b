"""Unit tests for User entity."""

import pytest

from authstore.domain.user.core.entities.user import User
from authstore.domain.user.core.exceptions.user_errors import InvalidUserDataError
from authstore.domain.user.core.value_objects.email import Email
from authstore.domain.user.core.value_objects.user_preferences import UserPreferences


class TestUserCreate:
    """Test User.create factory."""

    def test_create_with_defaults(self):
        user = User.create("foo@bar.com", "Foo Bar", "h")

        assert user.email == Email("foo@bar.com")
        assert user.name == "Foo Bar"
        assert user.password == "h"
        assert user.preferences.data == {}

    def test_create_with_mapping_preferences(self):
        user = User.create("foo@bar.com", "Foo Bar", "h", preferences={"theme": "dark"})

        assert isinstance(user.preferences, UserPreferences)
        assert user.preferences.get("theme") == "dark"

    def test_create_with_empty_email_raises(self):
        with pytest.raises(InvalidUserDataError) as exc_info:
            User.create("", "Foo Bar", "h")

        assert exc_info.value.field == "email"

    def test_create_with_empty_password_raises(self):
        with pytest.raises(InvalidUserDataError, match="password"):
            User.create("foo@bar.com", "Foo Bar", "")

    def test_create_with_non_string_name_raises(self):
        with pytest.raises(InvalidUserDataError, match="name"):
            User.create("foo@bar.com", None, "h")  # type: ignore

    def test_create_with_invalid_preferences_raises(self):
        with pytest.raises(InvalidUserDataError, match="preferences"):
            User.create("foo@bar.com", "Foo Bar", "h", preferences={"k": {1, 2}})

    def test_password_hidden_from_repr(self):
        user = User.create("foo@bar.com", "Foo Bar", "secret-hash")

        assert "secret-hash" not in repr(user)


class TestUserBehaviour:
    """Test User mutation and identity."""

    def test_update_preferences_replaces_container(self):
        user = User.create("foo@bar.com", "Foo Bar", "h", preferences={"a": 1, "b": 2})

        user.update_preferences(UserPreferences(data={"c": 3}))

        assert user.preferences.data == {"c": 3}

    def test_equality_by_email(self):
        user1 = User.create("foo@bar.com", "Foo", "h1")
        user2 = User.create("foo@bar.com", "Bar", "h2")
        user3 = User.create("other@bar.com", "Foo", "h1")

        assert user1 == user2
        assert user1 != user3
        assert hash(user1) == hash(user2)

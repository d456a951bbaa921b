"""Tests for the UserSessionStore facade (end-to-end over in-memory backends)."""

import asyncio
from unittest.mock import MagicMock

import pytest

from authstore import ReadStatus, User, UserSessionStore, WriteStatus
from authstore.domain.user.core.exceptions.user_errors import UserAlreadyExistsError


@pytest.fixture
def store(user_repository, session_repository):
    return UserSessionStore(user_repository, session_repository)


@pytest.mark.asyncio
async def test_account_and_session_lifecycle(store, user_repository, session_repository):
    """Walk one account through add, conflict, session refresh and delete."""
    user = User.create("foo@bar.com", "Foo Bar", "h", preferences={})

    assert (await store.add_user(user)).status is WriteStatus.SUCCESS

    again = await store.add_user(User.create("foo@bar.com", "Foo Bar", "h"))
    assert again.status is WriteStatus.CONFLICT
    with pytest.raises(UserAlreadyExistsError):
        again.raise_for_status()
    assert user_repository.count() == 1

    assert (await store.create_user_session("foo@bar.com", "jwt1")).succeeded
    assert (await store.get_user_session("foo@bar.com")).value.jwt == "jwt1"

    assert (await store.create_user_session("foo@bar.com", "jwt2")).succeeded
    assert (await store.get_user_session("foo@bar.com")).value.jwt == "jwt2"
    assert len(session_repository.sessions_for("foo@bar.com")) == 1

    assert (await store.delete_user("foo@bar.com")).succeeded
    assert (await store.get_user("foo@bar.com")).status is ReadStatus.NOT_FOUND
    assert (await store.get_user_session("foo@bar.com")).status is ReadStatus.NOT_FOUND


@pytest.mark.asyncio
async def test_update_preferences_through_facade(store, sample_user):
    await store.add_user(sample_user)

    assert (await store.update_user_preferences("foo@bar.com", {"theme": "dark"})).succeeded
    assert (await store.update_user_preferences("foo@bar.com", None)).is_validation_failure

    user = (await store.get_user("foo@bar.com")).value
    assert user.preferences.data == {"theme": "dark"}


@pytest.mark.asyncio
async def test_delete_user_sessions_is_idempotent(store):
    first = await store.delete_user_sessions("foo@bar.com")
    second = await store.delete_user_sessions("foo@bar.com")

    assert first.status is WriteStatus.SUCCESS
    assert second.status is WriteStatus.SUCCESS


@pytest.mark.asyncio
async def test_session_does_not_require_account(store):
    """No foreign key: a session can exist for an email with no account."""
    assert (await store.create_user_session("ghost@bar.com", "jwt1")).succeeded
    assert (await store.get_user("ghost@bar.com")).is_not_found
    assert (await store.get_user_session("ghost@bar.com")).is_found


@pytest.mark.asyncio
async def test_concurrent_session_creation_across_users(store, session_repository):
    emails = [f"user{i}@bar.com" for i in range(10)]

    await asyncio.gather(
        *(
            store.create_user_session(email, f"{email}-jwt{n}")
            for email in emails
            for n in range(5)
        )
    )

    for email in emails:
        sessions = session_repository.sessions_for(email)
        assert len(sessions) == 1
        assert sessions[0].jwt.startswith(f"{email}-jwt")


@pytest.mark.asyncio
async def test_ensure_indexes_on_inmemory_is_noop(store):
    await store.ensure_indexes()


def test_close_closes_owned_client_once(user_repository, session_repository):
    client = MagicMock()
    store = UserSessionStore(user_repository, session_repository, client=client)

    store.close()
    store.close()

    client.close.assert_called_once_with()


def test_close_without_client(store):
    store.close()

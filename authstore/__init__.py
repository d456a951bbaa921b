"""Account and login-session persistence for the authentication layer.

Exposes the composed store plus the types callers need to read results.
"""

from authstore.application.user.user_session_store import UserSessionStore
from authstore.domain.shared.results import (
    ReadResult,
    ReadStatus,
    WriteResult,
    WriteStatus,
)
from authstore.domain.user.core.entities.session import Session
from authstore.domain.user.core.entities.user import User
from authstore.domain.user.core.value_objects.user_preferences import UserPreferences

__all__ = [
    "UserSessionStore",
    "User",
    "Session",
    "UserPreferences",
    "WriteResult",
    "WriteStatus",
    "ReadResult",
    "ReadStatus",
]

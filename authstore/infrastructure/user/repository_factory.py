"""User/session store factory for environment-based selection.

This factory builds a UserSessionStore backed by the repositories named
in the USER_REPOSITORY environment variable:
- "inmemory": InMemoryUserRepository + InMemorySessionRepository (for testing)
- "mongodb": MongoUserRepository + MongoSessionRepository (for production)

Default: inmemory

Every call returns a new store; callers hold on to it and inject it
where needed.
"""

from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorClient

from authstore.application.user.user_session_store import UserSessionStore
from authstore.infrastructure.config import (
    REPOSITORY_INMEMORY,
    REPOSITORY_MONGODB,
    get_majority_wtimeout_ms,
    get_mongodb_database,
    get_mongodb_uri,
    get_server_selection_timeout_ms,
    get_user_repository_backend,
)
from authstore.infrastructure.user.in_memory_session_repository import (
    InMemorySessionRepository,
)
from authstore.infrastructure.user.in_memory_user_repository import (
    InMemoryUserRepository,
)
from authstore.infrastructure.user.mongo_session_repository import MongoSessionRepository
from authstore.infrastructure.user.mongo_user_repository import MongoUserRepository


def create_mongo_store(
    db: Any,
    client: Optional[Any] = None,
    majority_wtimeout_ms: Optional[int] = None,
) -> UserSessionStore:
    """Build a MongoDB-backed store on an existing database handle.

    Args:
        db: Motor database shared by both repositories
        client: Client to close with the store (None if the caller owns it)
        majority_wtimeout_ms: wtimeout for majority inserts
    """
    return UserSessionStore(
        MongoUserRepository(db, majority_wtimeout_ms=majority_wtimeout_ms),
        MongoSessionRepository(db),
        client=client,
    )


def create_user_session_store() -> UserSessionStore:
    """Create store based on environment configuration.

    Returns:
        UserSessionStore: The configured store

    Environment Variables:
        USER_REPOSITORY: "inmemory" | "mongodb" (default: inmemory)
        MONGODB_URI: MongoDB connection string (required for mongodb)
        MONGODB_DATABASE: Database name (default: authstore)
        MONGODB_MAJORITY_WTIMEOUT_MS: wtimeout for majority inserts
        MONGODB_SERVER_SELECTION_TIMEOUT_MS: client server selection timeout
    """
    repo_type = get_user_repository_backend()

    if repo_type == REPOSITORY_MONGODB:
        mongo_url = get_mongodb_uri()
        if not mongo_url:
            raise ValueError(
                "MONGODB_URI environment variable is required "
                "when USER_REPOSITORY=mongodb"
            )

        client_options: Dict[str, Any] = {}
        selection_timeout = get_server_selection_timeout_ms()
        if selection_timeout is not None:
            client_options["serverSelectionTimeoutMS"] = selection_timeout

        client: AsyncIOMotorClient = AsyncIOMotorClient(mongo_url, **client_options)  # type: ignore
        db = client[get_mongodb_database()]

        return create_mongo_store(
            db,
            client=client,
            majority_wtimeout_ms=get_majority_wtimeout_ms(),
        )

    elif repo_type == REPOSITORY_INMEMORY:
        return UserSessionStore(InMemoryUserRepository(), InMemorySessionRepository())

    else:
        raise ValueError(
            f"Invalid USER_REPOSITORY value: {repo_type}. "
            "Expected 'inmemory' or 'mongodb'"
        )

"""
Session entity.

At most one session exists per user_id.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Session(BaseModel):
    """
    Active login session of a user.

    ``user_id`` holds the owning account's email, not a separate id.
    The JWT is an opaque token; it is stored, never inspected.

    Example:
        >>> session = Session(user_id="foo@bar.com", jwt="jwt1")
        >>> session.to_document()
        {'user_id': 'foo@bar.com', 'jwt': 'jwt1'}
    """

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(..., min_length=1, description="Owner email")
    jwt: str = Field(..., min_length=1, repr=False, description="Opaque session token")

    @field_validator("user_id")
    @classmethod
    def user_id_not_blank(cls, v: str) -> str:
        """Ensure not empty or whitespace."""
        if not v.strip():
            raise ValueError("user_id cannot be empty or whitespace")
        return v.strip()

    @field_validator("jwt")
    @classmethod
    def jwt_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("jwt cannot be empty or whitespace")
        return v

    def to_document(self) -> dict[str, str]:
        """Convert to storage document."""
        return {"user_id": self.user_id, "jwt": self.jwt}

    @classmethod
    def from_document(cls, doc: dict[str, object]) -> Session:
        """Build from storage document, ignoring ``_id``."""
        return cls(user_id=doc["user_id"], jwt=doc["jwt"])

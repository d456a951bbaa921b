"""Unit tests for Session entity."""

import pytest
from pydantic import ValidationError

from authstore.domain.user.core.entities.session import Session


class TestSession:
    """Test Session model."""

    def test_create_session(self):
        session = Session(user_id="foo@bar.com", jwt="jwt1")

        assert session.user_id == "foo@bar.com"
        assert session.jwt == "jwt1"

    def test_user_id_is_stripped(self):
        assert Session(user_id=" foo@bar.com ", jwt="jwt1").user_id == "foo@bar.com"

    @pytest.mark.parametrize("user_id,jwt", [("", "jwt1"), ("   ", "jwt1"), ("foo@bar.com", ""), ("foo@bar.com", "  ")])
    def test_blank_fields_rejected(self, user_id, jwt):
        with pytest.raises(ValidationError):
            Session(user_id=user_id, jwt=jwt)

    def test_frozen(self):
        session = Session(user_id="foo@bar.com", jwt="jwt1")

        with pytest.raises(ValidationError):
            session.jwt = "jwt2"  # type: ignore

    def test_to_document(self):
        session = Session(user_id="foo@bar.com", jwt="jwt1")

        assert session.to_document() == {"user_id": "foo@bar.com", "jwt": "jwt1"}

    def test_from_document_ignores_object_id(self):
        session = Session.from_document({"_id": "abc123", "user_id": "foo@bar.com", "jwt": "jwt1"})

        assert session == Session(user_id="foo@bar.com", jwt="jwt1")

    @pytest.mark.parametrize("doc", [{"user_id": "foo@bar.com", "jwt": None}, {"user_id": None, "jwt": "jwt1"}])
    def test_from_document_rejects_null_fields(self, doc):
        with pytest.raises(ValidationError):
            Session.from_document(doc)

    def test_jwt_hidden_from_repr(self):
        assert "jwt-secret" not in repr(Session(user_id="foo@bar.com", jwt="jwt-secret"))

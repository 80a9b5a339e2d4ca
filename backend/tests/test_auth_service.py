"""Tests for AuthService tokens and access codes."""

import pytest

from rift_draft.errors import AuthenticationError
from rift_draft.services.auth_service import ADMIN_SUBJECT, AuthService


@pytest.fixture
def auth():
    return AuthService(admin_password="hunter2", token_ttl_seconds=60, code_length=6)


class TestTokens:
    def test_issue_validate_revoke(self, auth):
        token = auth.issue("player:1")
        assert auth.validate(token) == "player:1"

        auth.revoke(token)
        assert auth.validate(token) is None

    def test_unknown_token(self, auth):
        assert auth.validate("nope") is None
        assert auth.validate(None) is None

    def test_expired_token(self):
        auth = AuthService(admin_password="x", token_ttl_seconds=0)
        token = auth.issue("player:1")
        assert auth.validate(token) is None


class TestAdminLogin:
    def test_correct_password(self, auth):
        token = auth.login_admin("hunter2")
        assert auth.validate(token) == ADMIN_SUBJECT
        assert auth.is_admin(token)

    def test_wrong_password(self, auth):
        with pytest.raises(AuthenticationError):
            auth.login_admin("hunter3")


class TestAccessCodes:
    def test_code_shape(self, auth):
        code = auth.create_access_code("Team Liquid")
        assert len(code.code) == 6
        assert code.code.isupper() or code.code.isdigit()
        assert not code.is_used

    def test_one_time_redeem(self, auth):
        code = auth.create_access_code()

        token = auth.redeem_access_code(code.code.lower())
        assert auth.validate(token) == f"player:{code.id}"
        assert not auth.is_admin(token)
        assert auth.list_access_codes()[0].is_used

        with pytest.raises(AuthenticationError):
            auth.redeem_access_code(code.code)

    def test_unknown_code(self, auth):
        with pytest.raises(AuthenticationError):
            auth.redeem_access_code("ZZZZZZ")

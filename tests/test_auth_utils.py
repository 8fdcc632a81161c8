"""Tests for the bcrypt password hasher and the JWT token manager."""

from __future__ import annotations

from datetime import timedelta
from unittest.mock import patch

import pytest
from jose import jwt

from app.config import SecurityConfig
from app.exceptions import UnauthenticatedError
from app.utils.auth import PasswordHasher, TokenManager, _dummy_hash

# =============================================================================
# Test: PasswordHasher
# =============================================================================


class TestPasswordHasher:
    def test_hash_is_bcrypt_with_configured_cost(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("my_secure_password_123")

        assert hashed.startswith(("$2a$04$", "$2b$04$", "$2y$04$"))
        assert len(hashed) == 60

    def test_hash_is_salted(self, hasher: PasswordHasher) -> None:
        assert hasher.hash("same_password") != hasher.hash("same_password")

    def test_hash_never_contains_plaintext(self, hasher: PasswordHasher) -> None:
        assert "hunter2" not in hasher.hash("hunter2")

    def test_verify_correct_password(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("correct horse")
        assert hasher.verify("correct horse", hashed) is True

    def test_verify_wrong_password(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("correct horse")
        assert hasher.verify("battery staple", hashed) is False

    def test_verify_malformed_hash_returns_false(self, hasher: PasswordHasher) -> None:
        assert hasher.verify("anything", "not-a-bcrypt-hash") is False

    def test_verify_dummy_always_false(self, hasher: PasswordHasher) -> None:
        assert hasher.verify_dummy("not-a-real-password") is False

    def test_long_password_round_trips(self, hasher: PasswordHasher) -> None:
        password = "p" * 100
        assert hasher.verify(password, hasher.hash(password)) is True

    def test_cost_comes_from_config(self) -> None:
        hasher = PasswordHasher(SecurityConfig(secret_key="k", bcrypt_rounds=5))
        assert hasher.hash("pw").split("$")[2] == "05"

    def test_dummy_hash_ready_before_first_unknown_login(self) -> None:
        _dummy_hash.cache_clear()
        hasher = PasswordHasher(SecurityConfig(secret_key="k", bcrypt_rounds=4))

        with patch("app.utils.auth.bcrypt.hashpw") as hashpw:
            assert hasher.verify_dummy("whatever") is False

        hashpw.assert_not_called()


# =============================================================================
# Test: TokenManager
# =============================================================================


class TestTokenManager:
    def test_sign_and_verify(self, token_manager: TokenManager) -> None:
        token = token_manager.sign({"sub": "user-1", "email": "a@example.com"})

        claims = token_manager.verify(token)

        assert claims.subject == "user-1"
        assert claims.email == "a@example.com"
        assert claims.expires_at > claims.issued_at

    def test_expiry_uses_configured_lifetime(self, token_manager: TokenManager) -> None:
        claims = token_manager.verify(
            token_manager.sign({"sub": "user-1", "email": "a@example.com"})
        )
        assert claims.expires_at - claims.issued_at == timedelta(minutes=5)

    def test_expired_token_rejected(self, token_manager: TokenManager) -> None:
        token = token_manager.sign(
            {"sub": "user-1", "email": "a@example.com"},
            expires_delta=timedelta(seconds=-10),
        )
        with pytest.raises(UnauthenticatedError):
            token_manager.verify(token)

    def test_wrong_secret_rejected(self, token_manager: TokenManager) -> None:
        other = TokenManager(SecurityConfig(secret_key="another-secret"))
        token = other.sign({"sub": "user-1", "email": "a@example.com"})
        with pytest.raises(UnauthenticatedError):
            token_manager.verify(token)

    def test_malformed_token_rejected(self, token_manager: TokenManager) -> None:
        with pytest.raises(UnauthenticatedError):
            token_manager.verify("definitely.not.a-jwt")

    def test_missing_claims_rejected(self, token_manager: TokenManager) -> None:
        token = token_manager.sign({"sub": "user-1"})
        with pytest.raises(UnauthenticatedError):
            token_manager.verify(token)

    def test_all_failures_share_one_message(self, token_manager: TokenManager) -> None:
        expired = token_manager.sign(
            {"sub": "u", "email": "e@example.com"}, expires_delta=timedelta(seconds=-1)
        )
        forged = jwt.encode(
            {"sub": "u", "email": "e@example.com", "exp": 4102444800},
            "wrong",
            algorithm="HS256",
        )
        messages = set()
        for token in (expired, forged, "garbage"):
            with pytest.raises(UnauthenticatedError) as exc_info:
                token_manager.verify(token)
            messages.add(exc_info.value.detail)

        assert messages == {"Could not validate credentials"}

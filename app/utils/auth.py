"""
Authentication primitives: bcrypt password hashing and JWT bearer tokens.

Uses industry-standard security practices:
- bcrypt with a fresh salt per hash and a configurable work factor
- constant-time hash comparison (bcrypt.checkpw)
- HS256 JWT signing with configurable expiration
- UTC timezone consistency

Both classes take an explicit ``SecurityConfig`` so nothing here reads
process-wide state.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
from jose import JWTError, jwt

from app.config import SecurityConfig
from app.exceptions import UnauthenticatedError

# bcrypt only looks at the first 72 bytes
BCRYPT_MAX_BYTES = 72


def _encode_secret(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]


@lru_cache(maxsize=8)
def _dummy_hash(rounds: int) -> bytes:
    return bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt(rounds=rounds))


class PasswordHasher:
    """One-way salted hashing and verification of secrets."""

    def __init__(self, config: SecurityConfig):
        self.rounds = config.bcrypt_rounds
        # Warm the dummy hash for this cost
        _dummy_hash(self.rounds)

    def hash(self, plaintext: str) -> str:
        """Hash a plain text password using bcrypt."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(_encode_secret(plaintext), salt)
        return hashed.decode("utf-8")

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Verify a plain text password against a bcrypt hash."""
        try:
            return bcrypt.checkpw(_encode_secret(plaintext), hashed.encode("utf-8"))
        except ValueError:
            # Malformed stored hash
            return False

    def verify_dummy(self, plaintext: str) -> bool:
        """
        Run a full verification against a throwaway hash of the same cost.

        Used when no account matches, so the response time does not reveal
        whether the email is registered. Always returns False.
        """
        bcrypt.checkpw(_encode_secret(plaintext), _dummy_hash(self.rounds))
        return False


@dataclass(frozen=True)
class TokenClaims:
    subject: str
    email: str
    issued_at: datetime
    expires_at: datetime


class TokenManager:
    """Signs and verifies JWT access tokens."""

    def __init__(self, config: SecurityConfig):
        self._secret_key = config.secret_key
        self._algorithm = config.algorithm
        self.default_expiry = timedelta(minutes=config.access_token_expire_minutes)

    def sign(self, claims: dict[str, Any], expires_delta: timedelta | None = None) -> str:
        """Create a JWT access token carrying ``claims``."""
        now = datetime.now(UTC)
        to_encode = claims.copy()
        to_encode.update(
            {"iat": now, "exp": now + (expires_delta or self.default_expiry)}
        )
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and verify a JWT access token.

        Every failure (bad signature, expiry, malformed token, missing claims)
        raises the same UnauthenticatedError.
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as e:
            raise UnauthenticatedError() from e

        subject = payload.get("sub")
        email = payload.get("email")
        issued_at = payload.get("iat")
        expires_at = payload.get("exp")
        if not isinstance(subject, str) or not isinstance(email, str):
            raise UnauthenticatedError()
        if not isinstance(expires_at, int | float):
            raise UnauthenticatedError()

        return TokenClaims(
            subject=subject,
            email=email,
            issued_at=datetime.fromtimestamp(issued_at or expires_at, UTC),
            expires_at=datetime.fromtimestamp(expires_at, UTC),
        )

"""Password hashing and JWT signing/verification."""

import asyncio
import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.errors import (
    InvalidCredentialFormat,
    TokenExpired,
    TokenMalformed,
    TokenMissingSubject,
    TokenSignatureInvalid,
)
from app.core.keys import KeyMaterial
from app.domain import TokenType

logger = logging.getLogger(__name__)

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

PASSWORD_MIN_LEN = 6
# bcrypt only reads the first 72 bytes of input.
BCRYPT_MAX_BYTES = 72

TOKEN_TYPE_CLAIM = "typ"


class PasswordHasher:
    """Salted bcrypt hashing with a fixed cost factor and a minimum-length policy."""

    def __init__(self, *, rounds: int = BCRYPT_ROUNDS, min_length: int = PASSWORD_MIN_LEN) -> None:
        self.rounds = rounds
        self.min_length = max(min_length, PASSWORD_MIN_LEN)
        self._dummy_hash: str | None = None

    def check_policy(self, plain_password: str) -> None:
        if not isinstance(plain_password, str) or len(plain_password) < self.min_length:
            raise InvalidCredentialFormat(
                f"Password must be at least {self.min_length} characters"
            )

    async def hash(self, plain_password: str) -> str:
        """Validate then hash a plain-text password for storage. Do not store plain passwords."""
        self.check_policy(plain_password)
        return await asyncio.to_thread(self._hash_sync, plain_password)

    async def verify(self, plain_password: str, hashed: str) -> bool:
        """Verify a plain password against a stored hash (bcrypt's constant-time compare)."""
        if not plain_password or not hashed:
            return False
        return await asyncio.to_thread(self._verify_sync, plain_password, hashed)

    async def dummy_hash(self) -> str:
        """Hash of a random throwaway password at this hasher's cost; built once, then cached."""
        if self._dummy_hash is None:
            self._dummy_hash = await asyncio.to_thread(self._hash_sync, secrets.token_urlsafe(16))
        return self._dummy_hash

    def _hash_sync(self, plain_password: str) -> str:
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    @staticmethod
    def _verify_sync(plain_password: str, hashed: str) -> bool:
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False


class TokenSigner:
    """
    Sign and verify compact JWTs with one configured scheme.

    Every token carries iss/aud/iat and a ``typ`` claim naming its class;
    verification pins issuer, audience and (when requested) the class.
    """

    def __init__(self, keys: KeyMaterial, *, issuer: str, audience: str) -> None:
        self._keys = keys
        self.issuer = issuer
        self.audience = audience

    async def sign(
        self,
        claims: dict[str, Any],
        *,
        token_type: TokenType,
        expires_in: timedelta | None = None,
    ) -> str:
        """Sign claims; ``expires_in=None`` produces a token without ``exp``."""
        now = datetime.now(UTC)
        payload: dict[str, Any] = dict(claims)
        payload.update(
            {
                "iss": self.issuer,
                "aud": self.audience,
                "iat": now,
                TOKEN_TYPE_CLAIM: token_type.value,
            }
        )
        if expires_in is not None:
            payload["exp"] = now + expires_in
        return await asyncio.to_thread(
            jwt.encode,
            payload,
            self._keys.signing_key,
            algorithm=self._keys.algorithm,
        )

    async def verify(self, token: str, *, token_type: TokenType | None = None) -> dict[str, Any]:
        """
        Decode and validate a JWT; return its claims.

        Raises TokenExpired, TokenSignatureInvalid, TokenMalformed or
        TokenMissingSubject. Failures outside PyJWT's verification errors are
        logged and re-raised unchanged.
        """
        if not token or not isinstance(token, str):
            raise TokenMalformed("Authentication required.")
        try:
            claims = await asyncio.to_thread(
                jwt.decode,
                token,
                self._keys.verification_key,
                algorithms=[self._keys.algorithm],
                issuer=self.issuer,
                audience=self.audience,
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpired() from e
        except jwt.InvalidSignatureError as e:
            raise TokenSignatureInvalid() from e
        except jwt.PyJWTError as e:
            raise TokenMalformed() from e
        except Exception:
            logger.exception("Unexpected error while verifying token")
            raise

        if not claims or not claims.get("sub"):
            raise TokenMissingSubject()
        if token_type is not None and claims.get(TOKEN_TYPE_CLAIM) != token_type.value:
            raise TokenMalformed()
        return claims

"""Unit tests for app.core.security: bcrypt password policy and JWT sign/verify."""

import asyncio
import unittest
from datetime import timedelta
from unittest.mock import patch

import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from app.core.errors import (
    InvalidCredentialFormat,
    TokenExpired,
    TokenMalformed,
    TokenMissingSubject,
    TokenSignatureInvalid,
)
from app.core.keys import KeyMaterial
from app.core.security import PasswordHasher, TokenSigner
from app.domain import TokenType

from accounts_testing import TEST_KEYS, TEST_SECRET

ISSUER = "api.tibu.nu"


def _signer(keys: KeyMaterial = TEST_KEYS, issuer: str = ISSUER, audience: str = ISSUER) -> TokenSigner:
    return TokenSigner(keys, issuer=issuer, audience=audience)


class TestPasswordHasher(unittest.TestCase):
    """Hashing enforces the minimum length and verifies through bcrypt."""

    def setUp(self) -> None:
        self.hasher = PasswordHasher(rounds=4)

    def test_hash_then_verify(self) -> None:
        hashed = asyncio.run(self.hasher.hash("secret1"))
        self.assertNotEqual(hashed, "secret1")
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(asyncio.run(self.hasher.verify("secret1", hashed)))
        self.assertFalse(asyncio.run(self.hasher.verify("secret2", hashed)))

    def test_hashes_are_salted(self) -> None:
        first = asyncio.run(self.hasher.hash("secret1"))
        second = asyncio.run(self.hasher.hash("secret1"))
        self.assertNotEqual(first, second)

    def test_short_password_rejected_before_hashing(self) -> None:
        with patch("app.core.security.bcrypt.hashpw") as hashpw:
            with self.assertRaises(InvalidCredentialFormat):
                asyncio.run(self.hasher.hash("12345"))
            hashpw.assert_not_called()

    def test_six_characters_is_enough(self) -> None:
        hashed = asyncio.run(self.hasher.hash("123456"))
        self.assertTrue(asyncio.run(self.hasher.verify("123456", hashed)))

    def test_min_length_never_below_six(self) -> None:
        hasher = PasswordHasher(rounds=4, min_length=2)
        self.assertEqual(hasher.min_length, 6)

    def test_verify_against_garbage_hash_is_false(self) -> None:
        self.assertFalse(asyncio.run(self.hasher.verify("secret1", "not-a-bcrypt-hash")))
        self.assertFalse(asyncio.run(self.hasher.verify("", "$2b$04$abc")))

    def test_long_password_truncated_consistently(self) -> None:
        long_pw = "x" * 100
        hashed = asyncio.run(self.hasher.hash(long_pw))
        self.assertTrue(asyncio.run(self.hasher.verify(long_pw, hashed)))


class TestTokenSigner(unittest.TestCase):
    """Signing pins issuer/audience/type; verification maps failures to token errors."""

    def test_access_token_claims(self) -> None:
        signer = _signer()
        token = asyncio.run(
            signer.sign(
                {"sub": "7", "jti": "3", "role": "USER", "name": "Ana"},
                token_type=TokenType.ACCESS,
                expires_in=timedelta(hours=1),
            )
        )
        claims = asyncio.run(signer.verify(token, token_type=TokenType.ACCESS))
        self.assertEqual(claims["sub"], "7")
        self.assertEqual(claims["jti"], "3")
        self.assertEqual(claims["iss"], ISSUER)
        self.assertEqual(claims["aud"], ISSUER)
        self.assertEqual(claims["typ"], "access")
        self.assertEqual(claims["exp"] - claims["iat"], 3600)

    def test_refresh_token_has_no_expiry(self) -> None:
        signer = _signer()
        token = asyncio.run(signer.sign({"sub": "7", "jti": "3"}, token_type=TokenType.REFRESH))
        claims = asyncio.run(signer.verify(token, token_type=TokenType.REFRESH))
        self.assertNotIn("exp", claims)

    def test_expired_token(self) -> None:
        signer = _signer()
        token = asyncio.run(
            signer.sign({"sub": "7"}, token_type=TokenType.ACCESS, expires_in=timedelta(seconds=-5))
        )
        with self.assertRaises(TokenExpired):
            asyncio.run(signer.verify(token))

    def test_wrong_key_is_signature_error(self) -> None:
        other = KeyMaterial("HS256", "another-secret-0123456789abcdef-xyz", "another-secret-0123456789abcdef-xyz")
        token = asyncio.run(_signer(other).sign({"sub": "7"}, token_type=TokenType.ACCESS))
        with self.assertRaises(TokenSignatureInvalid):
            asyncio.run(_signer().verify(token))

    def test_issuer_mismatch_is_malformed(self) -> None:
        token = asyncio.run(_signer(issuer="evil.example").sign({"sub": "7"}, token_type=TokenType.ACCESS))
        with self.assertRaises(TokenMalformed):
            asyncio.run(_signer().verify(token))

    def test_audience_mismatch_is_malformed(self) -> None:
        token = asyncio.run(_signer(audience="other.example").sign({"sub": "7"}, token_type=TokenType.ACCESS))
        with self.assertRaises(TokenMalformed):
            asyncio.run(_signer().verify(token))

    def test_garbage_and_empty_tokens_are_malformed(self) -> None:
        with self.assertRaises(TokenMalformed):
            asyncio.run(_signer().verify("not.a.jwt"))
        with self.assertRaises(TokenMalformed):
            asyncio.run(_signer().verify(""))

    def test_missing_subject(self) -> None:
        token = jwt.encode({"iss": ISSUER, "aud": ISSUER, "typ": "access"}, TEST_SECRET, algorithm="HS256")
        with self.assertRaises(TokenMissingSubject):
            asyncio.run(_signer().verify(token))

    def test_token_class_mismatch_is_malformed(self) -> None:
        signer = _signer()
        refresh = asyncio.run(signer.sign({"sub": "7", "jti": "1"}, token_type=TokenType.REFRESH))
        with self.assertRaises(TokenMalformed):
            asyncio.run(signer.verify(refresh, token_type=TokenType.ACCESS))

    def test_rs256_keypair(self) -> None:
        private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
        private_pem = private_key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )
        public_pem = private_key.public_key().public_bytes(
            serialization.Encoding.PEM,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        signer = _signer(KeyMaterial("RS256", private_pem, public_pem))
        token = asyncio.run(signer.sign({"sub": "9"}, token_type=TokenType.ACCESS))
        self.assertEqual(jwt.get_unverified_header(token)["alg"], "RS256")
        self.assertEqual(asyncio.run(signer.verify(token))["sub"], "9")


if __name__ == "__main__":
    unittest.main()

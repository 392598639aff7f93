"""Load token signing/verification keys once at startup."""

import logging
from dataclasses import dataclass
from pathlib import Path

import jwt

from app.core.config import HMAC_ALGORITHMS, Settings
from app.core.errors import KeyMaterialError

logger = logging.getLogger(__name__)

# Well-known placeholder used only when APP_ENV=dev and no real key is configured.
DEV_PLACEHOLDER_KEY = "THIS-IS-NOT-AN-ACTUAL-PRIVATE-KEY-LOCAL-DEV-ONLY"
DEV_PLACEHOLDER_ALGORITHM = "HS256"


@dataclass(frozen=True)
class KeyMaterial:
    """Keys for one signing scheme. For HMAC both keys are the same secret."""

    algorithm: str
    signing_key: str | bytes
    verification_key: str | bytes

    @property
    def is_placeholder(self) -> bool:
        return self.signing_key == DEV_PLACEHOLDER_KEY

    def __repr__(self) -> str:
        return f"KeyMaterial(algorithm={self.algorithm!r})"


def _dev_placeholder(reason: str) -> KeyMaterial:
    logger.warning(
        "Using placeholder token key (APP_ENV=dev): %s. Never run like this in production.",
        reason,
    )
    return KeyMaterial(
        algorithm=DEV_PLACEHOLDER_ALGORITHM,
        signing_key=DEV_PLACEHOLDER_KEY,
        verification_key=DEV_PLACEHOLDER_KEY,
    )


def _read_key_file(path: str | None, label: str) -> bytes:
    if not path or not path.strip():
        raise KeyMaterialError(f"{label} path is not configured")
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise KeyMaterialError(f"Unable to read {label} at {path}: {e}") from e
    if not data.strip():
        raise KeyMaterialError(f"{label} at {path} is empty")
    return data


def _check_key_pair(algorithm: str, private_key: bytes, public_key: bytes) -> None:
    """Sign and verify a throwaway token so unparsable or mismatched keys fail at startup."""
    try:
        token = jwt.encode({"sub": "key-check"}, private_key, algorithm=algorithm)
        jwt.decode(token, public_key, algorithms=[algorithm])
    except jwt.InvalidSignatureError as e:
        raise KeyMaterialError("Public key does not match the private key") from e
    except (jwt.PyJWTError, ValueError, TypeError) as e:
        raise KeyMaterialError(f"Unable to use {algorithm} key pair: {e}") from e


def load_key_material(settings: Settings) -> KeyMaterial:
    """
    Resolve the signing scheme from settings.

    HMAC algorithms use JWT_SECRET for both signing and verification; asymmetric
    algorithms read PEM files from JWT_PRIVATE_KEY_PATH / JWT_PUBLIC_KEY_PATH
    and must sign and verify a test token together.
    Raises KeyMaterialError when material is missing, except in dev where the
    placeholder secret is substituted.
    """
    algorithm = settings.JWT_ALGORITHM
    try:
        if algorithm in HMAC_ALGORITHMS:
            secret = settings.JWT_SECRET.get_secret_value() if settings.JWT_SECRET else ""
            if not secret.strip():
                raise KeyMaterialError("JWT_SECRET must be set for HMAC token signing")
            return KeyMaterial(algorithm=algorithm, signing_key=secret, verification_key=secret)

        private_key = _read_key_file(settings.JWT_PRIVATE_KEY_PATH, "private key")
        public_key = _read_key_file(settings.JWT_PUBLIC_KEY_PATH, "public key")
        _check_key_pair(algorithm, private_key, public_key)
        return KeyMaterial(
            algorithm=algorithm,
            signing_key=private_key,
            verification_key=public_key,
        )
    except KeyMaterialError as e:
        if settings.is_dev:
            return _dev_placeholder(e.message)
        logger.error("Token key material unavailable: %s", e.message)
        raise

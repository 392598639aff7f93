"""Shared builders for tests: settings, an in-memory database and a wired runtime."""

from pydantic import SecretStr
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.keys import KeyMaterial
from app.models import Base
from app.runtime import Runtime, build_runtime

TEST_SECRET = "unit-test-signing-secret-0123456789abcdef"
TEST_KEYS = KeyMaterial(algorithm="HS256", signing_key=TEST_SECRET, verification_key=TEST_SECRET)


def make_settings(**overrides: object) -> Settings:
    """Dev settings with a real secret and a cheap bcrypt cost."""
    values: dict[str, object] = {
        "APP_ENV": "dev",
        "JWT_ALGORITHM": "HS256",
        "JWT_SECRET": SecretStr(TEST_SECRET),
        "BCRYPT_ROUNDS": 4,
        "TOKEN_ISSUER": "api.tibu.nu",
        "TOKEN_AUDIENCE": "api.tibu.nu",
    }
    values.update(overrides)
    return Settings(**values)


def make_engine() -> Engine:
    """In-memory SQLite shared across worker threads, with all tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return engine


def make_runtime(**overrides: object) -> Runtime:
    return build_runtime(make_settings(**overrides), engine=make_engine(), keys=TEST_KEYS)

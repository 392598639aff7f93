"""Startup wiring: build every core component once from explicit settings."""

import logging
from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy import Engine

from app.core.config import Settings
from app.core.database import build_engine, build_session_factory
from app.core.keys import KeyMaterial, load_key_material
from app.core.security import PasswordHasher, TokenSigner
from app.repositories import (
    SqlPreRegisteredUserRepository,
    SqlSessionRepository,
    SqlUserRepository,
)
from app.services.auth import AuthService
from app.services.gate import OperationTable, RequestContext
from app.services.operations import build_operation_table

logger = logging.getLogger(__name__)


@dataclass
class Runtime:
    """Holds the process-wide, read-only service instances for the app."""

    settings: Settings
    engine: Engine
    users: SqlUserRepository
    sessions: SqlSessionRepository
    pre_registered_users: SqlPreRegisteredUserRepository
    auth: AuthService
    operations: OperationTable

    def context(self, token: str | None) -> RequestContext:
        return RequestContext(
            token=token,
            auth=self.auth,
            users=self.users,
            sessions=self.sessions,
            pre_registered_users=self.pre_registered_users,
        )


def build_runtime(
    settings: Settings,
    *,
    engine: Engine | None = None,
    keys: KeyMaterial | None = None,
) -> Runtime:
    """
    Construct the runtime. Raises KeyMaterialError (fatal) when signing keys
    cannot be loaded outside dev.
    """
    keys = keys or load_key_material(settings)
    engine = engine or build_engine(settings)
    session_factory = build_session_factory(engine)

    users = SqlUserRepository(session_factory)
    sessions = SqlSessionRepository(session_factory)
    pre_registered_users = SqlPreRegisteredUserRepository(session_factory)

    hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS, min_length=settings.PASSWORD_MIN_LENGTH)
    signer = TokenSigner(keys, issuer=settings.TOKEN_ISSUER, audience=settings.TOKEN_AUDIENCE)
    auth = AuthService(
        users,
        sessions,
        hasher,
        signer,
        access_token_ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    logger.info("Runtime initialized: env=%s jwt_algorithm=%s", settings.APP_ENV, keys.algorithm)
    return Runtime(
        settings=settings,
        engine=engine,
        users=users,
        sessions=sessions,
        pre_registered_users=pre_registered_users,
        auth=auth,
        operations=build_operation_table(),
    )

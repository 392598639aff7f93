"""Authentication workflows: registration, credential checks and token-pair lifecycle."""

import logging
from datetime import timedelta
from typing import Any

from email_validator import EmailNotValidError, validate_email

from app.core.errors import (
    DuplicateEmail,
    InvalidCredentials,
    InvalidEmail,
    InvalidToken,
    SessionCreationFailed,
    SessionNotFound,
    TokenMalformed,
    UserNotFound,
)
from app.core.security import PasswordHasher, TokenSigner
from app.domain import Role, TokenPair, TokenType, UserRecord
from app.repositories import (
    ConstraintViolation,
    SessionRepository,
    UniqueConstraintViolation,
    UserRepository,
)

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TTL = timedelta(hours=1)


def check_email(email: str) -> str:
    """Validate email syntax. The caller's string is kept as-is (exact-match policy)."""
    if not isinstance(email, str) or not email.strip():
        raise InvalidEmail("Email is required.")
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        raise InvalidEmail(str(e)) from e
    return email


def subject_id(claims: dict[str, Any]) -> int:
    try:
        return int(claims["sub"])
    except (KeyError, TypeError, ValueError):
        raise TokenMalformed() from None


def session_id_from(claims: dict[str, Any]) -> int:
    try:
        return int(claims["jti"])
    except (KeyError, TypeError, ValueError):
        raise TokenMalformed() from None


class AuthService:
    """
    Session state per refresh token: NONE -> ACTIVE on issuance, ACTIVE -> ACTIVE
    on refresh (same session id, new access token), ACTIVE -> REVOKED on
    logout/revoke (row deleted). Expiry of a refresh token is absence of its row.
    """

    def __init__(
        self,
        users: UserRepository,
        sessions: SessionRepository,
        hasher: PasswordHasher,
        signer: TokenSigner,
        *,
        access_token_ttl: timedelta = ACCESS_TOKEN_TTL,
    ) -> None:
        self.users = users
        self.sessions = sessions
        self.hasher = hasher
        self.signer = signer
        self.access_token_ttl = access_token_ttl

    async def register(self, name: str, email: str, password: str) -> UserRecord:
        """Create a USER account. Does not issue tokens."""
        check_email(email)
        if await self.users.count(email=email):
            raise DuplicateEmail()
        password_hash = await self.hasher.hash(password)
        try:
            user = await self.users.create(email=email, name=name, password_hash=password_hash)
        except UniqueConstraintViolation as e:
            # Lost a race with a concurrent registration; the constraint is authoritative.
            raise DuplicateEmail() from e
        logger.info("User registered: id=%s", user.id)
        return user

    async def authenticate(self, email: str, password: str) -> UserRecord:
        user = await self.users.find_by_email(email)
        if user is None:
            # Pay the same bcrypt cost as a wrong password so timing does not reveal the email.
            await self.hasher.verify(password, await self.hasher.dummy_hash())
            raise InvalidCredentials()
        if not await self.hasher.verify(password, user.password_hash):
            raise InvalidCredentials()
        return user

    async def furnish_tokens(self, user: UserRecord) -> TokenPair:
        """Open a new session and sign a refresh + access token bound to it."""
        try:
            session = await self.sessions.create(user_id=user.id)
        except ConstraintViolation as e:
            logger.error("Session creation failed for user %s: %s", user.id, e.message)
            raise SessionCreationFailed() from e
        if session is None or not session.id:
            raise SessionCreationFailed()

        try:
            refresh_token = await self.signer.sign(
                {"sub": str(user.id), "jti": str(session.id)},
                token_type=TokenType.REFRESH,
            )
            access_token = await self.furnish_access_token(user, session.id)
        except Exception:
            # No token references the session; drop it before surfacing the error.
            await self.sessions.delete_by_id(session.id)
            raise
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    async def furnish_access_token(self, user: UserRecord, session_id: int) -> str:
        """Sign a short-lived access token for an existing session; the store is not consulted."""
        return await self.signer.sign(
            {
                "sub": str(user.id),
                "jti": str(session_id),
                "name": user.name,
                "role": user.role.value,
            },
            token_type=TokenType.ACCESS,
            expires_in=self.access_token_ttl,
        )

    async def verify_access_token(self, token: str) -> dict[str, Any]:
        return await self.signer.verify(token, token_type=TokenType.ACCESS)

    async def _require_session(self, claims: dict[str, Any]) -> int:
        session_id = session_id_from(claims)
        session = await self.sessions.find_by_id(session_id)
        if session is None or session.user_id != subject_id(claims):
            raise InvalidToken()
        return session_id

    async def refresh_access_token(self, refresh_token: str) -> TokenPair:
        """Issue a new access token on the same session; the refresh token is echoed back."""
        claims = await self.signer.verify(refresh_token, token_type=TokenType.REFRESH)
        user = await self.users.find_by_id(subject_id(claims))
        if user is None:
            # Session outlived its user; treat it as not found.
            raise InvalidToken()
        session_id = await self._require_session(claims)
        access_token = await self.furnish_access_token(user, session_id)
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    async def revoke_refresh_token(self, refresh_token: str) -> None:
        claims = await self.signer.verify(refresh_token, token_type=TokenType.REFRESH)
        await self.end_session(session_id_from(claims))

    async def end_session(self, session_id: int) -> None:
        """Delete a session row; SessionNotFound when nothing was deleted."""
        deleted = await self.sessions.delete_by_id(session_id)
        if not deleted:
            raise SessionNotFound()
        logger.info("Session revoked: id=%s", session_id)

    async def get_user_from_token(
        self, token: str, token_type: TokenType = TokenType.ACCESS
    ) -> UserRecord:
        claims = await self.signer.verify(token, token_type=token_type)
        return await self.get_user_from_claims(claims)

    async def get_user_from_claims(self, claims: dict[str, Any]) -> UserRecord:
        user = await self.users.find_by_id(subject_id(claims))
        if user is None:
            raise UserNotFound()
        return user

    async def change_user_role(self, user_id: int, role: str | Role) -> UserRecord:
        """Persist a new role. Admin-only; the gate enforces that, not this method."""
        new_role = Role.normalize(role)
        updated = await self.users.update(user_id, role=new_role)
        if updated is None:
            raise UserNotFound("Invalid user ID")
        logger.info("User role changed: id=%s role=%s", user_id, new_role.value)
        return updated

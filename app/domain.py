"""Plain entities shared by repositories, services and the API layer."""

import enum
from dataclasses import dataclass

from app.core.errors import InvalidRole


class Role(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"

    @classmethod
    def normalize(cls, value: "str | Role") -> "Role":
        """Upper-case the input, then accept only a known role."""
        if isinstance(value, Role):
            return value
        if not isinstance(value, str) or not value.strip():
            raise InvalidRole("Role must be a non-empty string.")
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise InvalidRole(
                f"Invalid role {value!r}; expected one of {', '.join(r.value for r in cls)}."
            ) from None


class TokenType(str, enum.Enum):
    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True)
class UserRecord:
    id: int
    email: str
    name: str
    password_hash: str
    role: Role
    created_at: int
    updated_at: int

    def __repr__(self) -> str:
        # Never render the password hash.
        return f"UserRecord(id={self.id!r}, email={self.email!r}, role={self.role.value!r})"


@dataclass(frozen=True)
class SessionRecord:
    id: int
    user_id: int
    created_at: int
    updated_at: int


@dataclass(frozen=True)
class PreRegisteredUserRecord:
    id: int
    email: str
    name: str
    created_at: int
    updated_at: int


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class AuthPayload:
    """Result of login and sign-up: the user plus a freshly issued token pair."""

    user: UserRecord
    tokens: TokenPair

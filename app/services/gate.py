"""
Authorization gate for protected operations.

Each operation declares the minimum role it requires as data. ``guard`` wraps
an operation's resolver so that, per call, the gate:

1. passes straight through when neither the operation nor its group requires a role;
2. reads the bearer token from the request context (``Unauthenticated`` if absent);
3. verifies it as an access token (any failure -> ``Unauthenticated``);
4. checks the token's role against the requirement (``Forbidden`` on mismatch);
5. attaches the decoded claims and a lazy current-user accessor to the context.

Guarding is idempotent: a resolver that is already guarded is returned as is.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from functools import wraps
from typing import Any

from app.core.errors import Forbidden, TokenError, Unauthenticated
from app.domain import Role, UserRecord
from app.repositories import PreRegisteredUserRepository, SessionRepository, UserRepository
from app.services.auth import AuthService

logger = logging.getLogger(__name__)

Resolver = Callable[..., Awaitable[Any]]

GUARDED_MARKER = "__auth_guarded__"


@dataclass
class RequestContext:
    """Per-call context: the caller's bearer token and handles to the core services."""

    token: str | None
    auth: AuthService
    users: UserRepository
    sessions: SessionRepository
    pre_registered_users: PreRegisteredUserRepository
    claims: dict[str, Any] | None = None
    _current_user_loader: Callable[[], Awaitable[UserRecord]] | None = field(default=None, repr=False)
    _current_user: UserRecord | None = field(default=None, repr=False)

    async def get_current_user(self) -> UserRecord:
        """Resolve (once) the user behind the verified token."""
        if self._current_user_loader is None:
            raise Unauthenticated()
        if self._current_user is None:
            self._current_user = await self._current_user_loader()
        return self._current_user


@dataclass(frozen=True)
class Operation:
    name: str
    resolver: Resolver
    requires: Role | None = None


@dataclass(frozen=True)
class OperationGroup:
    """A set of operations sharing a default requirement (like a schema type)."""

    name: str
    operations: tuple[Operation, ...]
    requires: Role | None = None


def role_satisfies(claimed: Any, required: Role) -> bool:
    if required is Role.ADMIN:
        return claimed == Role.ADMIN.value
    return True


async def authorize(context: RequestContext, required: Role) -> dict[str, Any]:
    """Verify the context's token against ``required`` and enrich the context."""
    token = context.token
    if not token:
        raise Unauthenticated("Authentication required.")
    try:
        claims = await context.auth.verify_access_token(token)
    except TokenError as e:
        logger.info("Rejected access token: %s", e.code)
        raise Unauthenticated("Invalid token.") from e

    if not role_satisfies(claims.get("role"), required):
        raise Forbidden()

    context.claims = claims
    context._current_user = None
    context._current_user_loader = lambda: context.auth.get_user_from_claims(claims)
    return claims


def is_guarded(resolver: Resolver) -> bool:
    return bool(getattr(resolver, GUARDED_MARKER, False))


def guard(operation: Operation, default_requires: Role | None = None) -> Operation:
    """Wrap ``operation`` so every call runs through the gate first."""
    if is_guarded(operation.resolver):
        return operation

    resolver = operation.resolver
    # The operation's own requirement wins over its group's.
    required = operation.requires or default_requires

    @wraps(resolver)
    async def guarded(context: RequestContext, **kwargs: Any) -> Any:
        if required is not None:
            await authorize(context, required)
        return await resolver(context, **kwargs)

    setattr(guarded, GUARDED_MARKER, True)
    return replace(operation, resolver=guarded, requires=required)


class OperationTable:
    """Operation name -> guarded operation; the single dispatch point for callers."""

    def __init__(self, groups: list[OperationGroup] | tuple[OperationGroup, ...] = ()) -> None:
        self._operations: dict[str, Operation] = {}
        for group in groups:
            self.add_group(group)

    def add_group(self, group: OperationGroup) -> None:
        for operation in group.operations:
            if operation.name in self._operations:
                raise ValueError(f"Operation {operation.name!r} is already registered")
            self._operations[operation.name] = guard(operation, group.requires)

    def get(self, name: str) -> Operation:
        try:
            return self._operations[name]
        except KeyError:
            raise LookupError(f"Unknown operation {name!r}") from None

    def required_role(self, name: str) -> Role | None:
        return self.get(name).requires

    async def execute(self, name: str, context: RequestContext, /, **kwargs: Any) -> Any:
        return await self.get(name).resolver(context, **kwargs)

"""Caller-visible operations and their role requirements."""

import logging

from app.core.errors import DuplicateEmail, Forbidden, UserNotFound
from app.domain import AuthPayload, PreRegisteredUserRecord, Role, TokenPair, UserRecord
from app.repositories import UniqueConstraintViolation
from app.services.auth import check_email, session_id_from
from app.services.gate import Operation, OperationGroup, OperationTable, RequestContext

logger = logging.getLogger(__name__)


# -- mutations ----------------------------------------------------------------


async def login(context: RequestContext, *, email: str, password: str) -> AuthPayload:
    user = await context.auth.authenticate(email, password)
    tokens = await context.auth.furnish_tokens(user)
    return AuthPayload(user=user, tokens=tokens)


async def logout(context: RequestContext) -> bool:
    await context.auth.end_session(session_id_from(context.claims or {}))
    return True


async def refresh_access_token(context: RequestContext, *, refresh_token: str) -> TokenPair:
    return await context.auth.refresh_access_token(refresh_token)


async def revoke_refresh_token(context: RequestContext, *, refresh_token: str) -> bool:
    await context.auth.revoke_refresh_token(refresh_token)
    return True


async def sign_up(context: RequestContext, *, name: str, email: str, password: str) -> AuthPayload:
    user = await context.auth.register(name, email, password)
    tokens = await context.auth.furnish_tokens(user)
    return AuthPayload(user=user, tokens=tokens)


async def add_pre_registered_user(
    context: RequestContext, *, email: str, name: str
) -> PreRegisteredUserRecord:
    check_email(email)
    try:
        record = await context.pre_registered_users.create(email=email, name=name)
    except UniqueConstraintViolation as e:
        raise DuplicateEmail("This email is already pre-registered.") from e
    logger.info("Pre-registered user added: id=%s", record.id)
    return record


async def change_user_role(context: RequestContext, *, user_id: int, role: str) -> UserRecord:
    return await context.auth.change_user_role(user_id, role)


# -- queries ------------------------------------------------------------------


async def current_user(context: RequestContext) -> UserRecord:
    return await context.get_current_user()


async def get_user(context: RequestContext, *, user_id: int) -> UserRecord:
    """A user may read their own profile; admins may read any."""
    me = await context.get_current_user()
    if user_id != me.id and me.role is not Role.ADMIN:
        raise Forbidden("You do not have permission to view this profile")
    user = await context.users.find_by_id(user_id)
    if user is None:
        raise UserNotFound()
    return user


async def list_users(context: RequestContext) -> list[UserRecord]:
    return await context.users.list_all()


async def list_pre_registered_users(context: RequestContext) -> list[PreRegisteredUserRecord]:
    return await context.pre_registered_users.list_all()


MUTATIONS = OperationGroup(
    name="mutation",
    operations=(
        Operation("login", login),
        Operation("logout", logout, requires=Role.USER),
        Operation("refreshAccessToken", refresh_access_token),
        Operation("revokeRefreshToken", revoke_refresh_token),
        Operation("signUp", sign_up),
        Operation("addPreRegisteredUser", add_pre_registered_user, requires=Role.ADMIN),
        Operation("changeUserRole", change_user_role, requires=Role.ADMIN),
    ),
)

QUERIES = OperationGroup(
    name="query",
    operations=(
        Operation("currentUser", current_user, requires=Role.USER),
        Operation("getUser", get_user, requires=Role.USER),
        Operation("listUsers", list_users, requires=Role.ADMIN),
        Operation("listPreRegisteredUsers", list_pre_registered_users, requires=Role.ADMIN),
    ),
)


def build_operation_table() -> OperationTable:
    return OperationTable([MUTATIONS, QUERIES])

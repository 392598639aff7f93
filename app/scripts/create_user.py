"""
Create a user (e.g. first admin). Run from project root:
  python -m app.scripts.create_user EMAIL NAME PASSWORD [role]
Example:
  python -m app.scripts.create_user admin@example.com "Site Admin" your-secure-password admin
"""
import argparse
import asyncio
import logging
import sys

from app.core.config import get_settings
from app.core.errors import AccountsError
from app.core.logging import configure_logging
from app.domain import Role
from app.runtime import build_runtime

logger = logging.getLogger(__name__)


async def _create(email: str, name: str, password: str, role: Role) -> int:
    runtime = build_runtime(get_settings())
    try:
        user = await runtime.auth.register(name, email, password)
        if role is not Role.USER:
            user = await runtime.auth.change_user_role(user.id, role)
    finally:
        runtime.engine.dispose()
    print(f"Created user '{user.email}' (id={user.id}) with role '{user.role.value}'.")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Create an account without going through sign-up.")
    parser.add_argument("email", help="Unique email address")
    parser.add_argument("name", help="Display name")
    parser.add_argument("password", help="Password (at least 6 characters)")
    parser.add_argument("role", nargs="?", default="user", type=str.upper, choices=[r.value for r in Role])
    args = parser.parse_args()

    configure_logging(get_settings())
    try:
        return asyncio.run(_create(args.email, args.name.strip(), args.password, Role(args.role)))
    except AccountsError as e:
        print(e.message, file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

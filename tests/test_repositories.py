"""Repository tests against an in-memory SQLite database."""

import asyncio
import unittest

from app.core.database import build_session_factory
from app.core.errors import InvalidRole
from app.domain import Role
from app.repositories import (
    SqlPreRegisteredUserRepository,
    SqlSessionRepository,
    SqlUserRepository,
    UniqueConstraintViolation,
)

from accounts_testing import make_engine


class RepositoryTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = make_engine()
        factory = build_session_factory(self.engine)
        self.users = SqlUserRepository(factory)
        self.sessions = SqlSessionRepository(factory)
        self.pre_registered = SqlPreRegisteredUserRepository(factory)

    def tearDown(self) -> None:
        self.engine.dispose()

    def _create_user(self, email: str = "ana@x.com", **kwargs: object):
        fields = {"name": "Ana", "password_hash": "hash"}
        fields.update(kwargs)
        return asyncio.run(self.users.create(email=email, **fields))


class TestUserRepository(RepositoryTestCase):
    def test_create_defaults(self) -> None:
        user = self._create_user()
        self.assertIsInstance(user.id, int)
        self.assertEqual(user.role, Role.USER)
        self.assertIsInstance(user.created_at, int)
        self.assertGreater(user.created_at, 1_500_000_000)

    def test_find_by_id_and_email(self) -> None:
        user = self._create_user()
        self.assertEqual(asyncio.run(self.users.find_by_id(user.id)), user)
        self.assertEqual(asyncio.run(self.users.find_by_email("ana@x.com")), user)
        self.assertIsNone(asyncio.run(self.users.find_by_id(999)))
        self.assertIsNone(asyncio.run(self.users.find_by_email("nobody@x.com")))

    def test_email_lookup_is_exact_match(self) -> None:
        self._create_user()
        self.assertIsNone(asyncio.run(self.users.find_by_email("ANA@x.com")))

    def test_duplicate_email_raises_unique_violation(self) -> None:
        self._create_user()
        with self.assertRaises(UniqueConstraintViolation):
            self._create_user(name="Other")
        self.assertEqual(asyncio.run(self.users.count(email="ana@x.com")), 1)

    def test_update_role_normalizes_case(self) -> None:
        user = self._create_user()
        updated = asyncio.run(self.users.update(user.id, role="admin"))
        self.assertEqual(updated.role, Role.ADMIN)
        self.assertEqual(asyncio.run(self.users.find_by_id(user.id)).role, Role.ADMIN)

    def test_update_rejects_unknown_role(self) -> None:
        user = self._create_user()
        with self.assertRaises(InvalidRole):
            asyncio.run(self.users.update(user.id, role="superuser"))

    def test_update_missing_user_returns_none(self) -> None:
        self.assertIsNone(asyncio.run(self.users.update(404, name="Ghost")))

    def test_update_rejects_unknown_fields(self) -> None:
        user = self._create_user()
        with self.assertRaises(ValueError):
            asyncio.run(self.users.update(user.id, email="new@x.com"))

    def test_list_all_ordered_by_id(self) -> None:
        first = self._create_user("a@x.com")
        second = self._create_user("b@x.com")
        self.assertEqual([u.id for u in asyncio.run(self.users.list_all())], [first.id, second.id])


class TestSessionRepository(RepositoryTestCase):
    def test_create_find_delete(self) -> None:
        user = self._create_user()
        session = asyncio.run(self.sessions.create(user_id=user.id))
        self.assertEqual(session.user_id, user.id)
        self.assertEqual(asyncio.run(self.sessions.find_by_id(session.id)), session)

        self.assertEqual(asyncio.run(self.sessions.delete_by_id(session.id)), 1)
        self.assertIsNone(asyncio.run(self.sessions.find_by_id(session.id)))
        self.assertEqual(asyncio.run(self.sessions.delete_by_id(session.id)), 0)

    def test_sessions_have_distinct_ids(self) -> None:
        user = self._create_user()
        first = asyncio.run(self.sessions.create(user_id=user.id))
        second = asyncio.run(self.sessions.create(user_id=user.id))
        self.assertNotEqual(first.id, second.id)


class TestPreRegisteredUserRepository(RepositoryTestCase):
    def test_create_and_list(self) -> None:
        record = asyncio.run(self.pre_registered.create(email="invite@x.com", name="Invitee"))
        self.assertEqual(asyncio.run(self.pre_registered.list_all()), [record])

    def test_duplicate_email(self) -> None:
        asyncio.run(self.pre_registered.create(email="invite@x.com", name="Invitee"))
        with self.assertRaises(UniqueConstraintViolation):
            asyncio.run(self.pre_registered.create(email="invite@x.com", name="Again"))


if __name__ == "__main__":
    unittest.main()

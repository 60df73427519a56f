"""Tests for database seeding, the health endpoint and the user scripts."""

import io
import random
import unittest
from unittest.mock import patch

from app.core.config import settings
from app.core.security import verify_password
from app.models import FormStructureVersion, Service, User
from app.scripts import create_user
from app.scripts.seed_users import generate_usernames
from app.services.seed import DEFAULT_SERVICES, seed_defaults
from tests.support import API, ApiTestCase, StoreTestCase


class TestSeedDefaults(StoreTestCase):
    def test_seeds_empty_database(self) -> None:
        inserted = seed_defaults(self.db, settings)
        self.assertEqual(
            inserted,
            {"users": 1, "form_structure": 1, "services": len(DEFAULT_SERVICES)},
        )
        admin = self.db.query(User).one()
        self.assertEqual(admin.username, settings.BOOTSTRAP_ADMIN_USERNAME)
        self.assertTrue(admin.is_admin)
        self.assertTrue(
            verify_password(settings.BOOTSTRAP_ADMIN_PASSWORD.get_secret_value(), admin.password_hash)
        )
        self.assertEqual(self.db.query(Service).count(), len(DEFAULT_SERVICES))

    def test_second_run_is_noop(self) -> None:
        seed_defaults(self.db, settings)
        inserted = seed_defaults(self.db, settings)
        self.assertEqual(inserted, {"users": 0, "form_structure": 0, "services": 0})
        self.assertEqual(self.db.query(FormStructureVersion).count(), 1)


class TestHealthApi(ApiTestCase):
    def test_health(self) -> None:
        resp = self.client.get(f"{API}/health/")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["database"], "connected")
        self.assertFalse(body["template_available"])


class TestCreateUserScript(StoreTestCase):
    def _run(self, *argv: str) -> tuple[int, str]:
        stderr = io.StringIO()
        with patch.object(create_user, "SessionLocal", self.SessionTesting), \
                patch("sys.stderr", stderr), patch("sys.stdout", io.StringIO()):
            code = create_user.main(list(argv))
        return code, stderr.getvalue()

    def test_creates_admin(self) -> None:
        code, _ = self._run("jane", "jane@example.com", "a-long-password", "--admin")
        self.assertEqual(code, 0)
        user = self.db.query(User).filter(User.username == "jane").one()
        self.assertTrue(user.is_admin)

    def test_rejects_blank_username(self) -> None:
        code, err = self._run("   ", "jane@example.com", "a-long-password")
        self.assertEqual(code, 1)
        self.assertIn("username length", err)
        self.assertEqual(self.db.query(User).count(), 0)

    def test_rejects_short_password(self) -> None:
        code, _ = self._run("jane", "jane@example.com", "short")
        self.assertEqual(code, 1)
        self.assertEqual(self.db.query(User).count(), 0)


class TestGenerateUsernames(unittest.TestCase):
    def test_unique_and_not_taken(self) -> None:
        taken = {"john.smith1"}
        names = generate_usernames(300, taken, random.Random(42))
        self.assertEqual(len(names), 300)
        self.assertEqual(len(set(names)), 300)
        self.assertFalse(taken & set(names))

    def test_capacity_exceeded(self) -> None:
        with self.assertRaises(ValueError):
            generate_usernames(10_000_000, set(), random.Random(0))


if __name__ == "__main__":
    unittest.main()

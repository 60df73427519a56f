"""Shared helpers for API tests: in-memory SQLite wired into the app via dependency overrides."""

import tempfile
import unittest

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.v1.deps import get_template_store
from app.core.config import settings
from app.core.database import get_db
from app.main import app
from app.models import Base
from app.services.seed import seed_defaults
from app.services.templates import TemplateStore
from app.services.users import UserStore

API = settings.API_V1_PREFIX
ADMIN_USERNAME = settings.BOOTSTRAP_ADMIN_USERNAME
ADMIN_PASSWORD = settings.BOOTSTRAP_ADMIN_PASSWORD.get_secret_value()


def make_session_factory():
    """Fresh in-memory database shared by every connection of the returned engine."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine, sessionmaker(bind=engine, autocommit=False, autoflush=False)


class StoreTestCase(unittest.TestCase):
    """Gives each test an empty schema and a session."""

    def setUp(self) -> None:
        self.engine, self.SessionTesting = make_session_factory()
        self.db = self.SessionTesting()

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()


class ApiTestCase(unittest.TestCase):
    """Seeded in-memory database, a temp template directory and a TestClient."""

    def setUp(self) -> None:
        self.engine, self.SessionTesting = make_session_factory()
        self.template_dir = tempfile.TemporaryDirectory()

        def override_get_db():
            db = self.SessionTesting()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_template_store] = lambda: TemplateStore(
            self.template_dir.name, 1024 * 1024
        )
        with self.SessionTesting() as db:
            seed_defaults(db, settings)
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        self.client.close()
        self.engine.dispose()
        self.template_dir.cleanup()

    def login(self, username: str = ADMIN_USERNAME, password: str = ADMIN_PASSWORD) -> str:
        """Log in and return the token. The auth cookie is dropped so tests control transport."""
        resp = self.client.post(f"{API}/login", json={"username": username, "password": password})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.client.cookies.clear()
        return resp.json()["token"]

    def create_user(
        self,
        username: str = "alice",
        password: str = "alice-password",
        is_admin: bool = False,
    ) -> int:
        with self.SessionTesting() as db:
            user = UserStore(db).create(username, f"{username}@example.com", password, is_admin)
            return user.id

    def user_token(self, username: str = "alice", password: str = "alice-password") -> str:
        self.create_user(username, password)
        return self.login(username, password)

    @staticmethod
    def bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

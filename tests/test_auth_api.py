"""API tests for login, token transport and the admin guard."""

import unittest
from datetime import timedelta

from app.core.config import settings
from app.core.security import create_access_token, decode_access_token
from tests.support import ADMIN_PASSWORD, ADMIN_USERNAME, API, ApiTestCase


class TestLogin(ApiTestCase):
    def test_bootstrap_admin_can_log_in(self) -> None:
        resp = self.client.post(
            f"{API}/login", json={"username": "admin", "password": "ch4ngeme333!!!"}
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        claims = decode_access_token(body["token"])
        self.assertEqual(claims.username, "admin")
        self.assertTrue(claims.is_admin)
        self.assertEqual(claims.id, body["user"]["id"])
        self.assertTrue(body["user"]["is_admin"])
        self.assertNotIn("password_hash", body["user"])
        self.assertNotIn("password", body["user"])

    def test_login_sets_http_only_cookie(self) -> None:
        resp = self.client.post(
            f"{API}/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}
        )
        cookie_header = resp.headers.get("set-cookie", "")
        self.assertIn(f"{settings.AUTH_COOKIE_NAME}=", cookie_header)
        self.assertIn("HttpOnly", cookie_header)
        self.assertIn("SameSite=strict", cookie_header)

    def test_regular_user_token_carries_identity(self) -> None:
        user_id = self.create_user("bob", "bob-password")
        token = self.login("bob", "bob-password")
        claims = decode_access_token(token)
        self.assertEqual((claims.id, claims.username, claims.is_admin), (user_id, "bob", False))

    def test_wrong_password(self) -> None:
        resp = self.client.post(
            f"{API}/login", json={"username": ADMIN_USERNAME, "password": "wrong-password"}
        )
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["code"], "InvalidCredentials")

    def test_unknown_user(self) -> None:
        resp = self.client.post(
            f"{API}/login", json={"username": "nobody", "password": "whatever-password"}
        )
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["code"], "InvalidCredentials")

    def test_missing_fields_is_400(self) -> None:
        resp = self.client.post(f"{API}/login", json={"username": "admin"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["code"], "ValidationError")

    def test_logout_clears_cookie(self) -> None:
        resp = self.client.post(f"{API}/logout")
        self.assertEqual(resp.status_code, 200)
        self.assertIn(f"{settings.AUTH_COOKIE_NAME}=", resp.headers.get("set-cookie", ""))


class TestRequireAuth(ApiTestCase):
    def test_no_token(self) -> None:
        resp = self.client.get(f"{API}/check-auth")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["code"], "NoTokenProvided")
        self.assertEqual(resp.headers.get("www-authenticate"), "Bearer")

    def test_bearer_header(self) -> None:
        token = self.login()
        resp = self.client.get(f"{API}/check-auth", headers=self.bearer(token))
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["authenticated"])
        self.assertEqual(body["user"]["username"], ADMIN_USERNAME)
        self.assertEqual(body["user"]["email"], settings.BOOTSTRAP_ADMIN_EMAIL)

    def test_cookie(self) -> None:
        token = self.login()
        self.client.cookies.set(settings.AUTH_COOKIE_NAME, token)
        resp = self.client.get(f"{API}/check-auth")
        self.assertEqual(resp.status_code, 200)

    def test_header_wins_over_cookie(self) -> None:
        token = self.login()
        self.client.cookies.set(settings.AUTH_COOKIE_NAME, "garbage")
        resp = self.client.get(f"{API}/check-auth", headers=self.bearer(token))
        self.assertEqual(resp.status_code, 200)

        self.client.cookies.set(settings.AUTH_COOKIE_NAME, token)
        resp = self.client.get(f"{API}/check-auth", headers=self.bearer("garbage"))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["code"], "TokenInvalid")

    def test_expired_token(self) -> None:
        token = create_access_token(1, ADMIN_USERNAME, True, expires_delta=timedelta(minutes=-1))
        resp = self.client.get(f"{API}/check-auth", headers=self.bearer(token))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["code"], "TokenExpired")

    def test_token_for_deleted_user(self) -> None:
        token = create_access_token(9999, "ghost", False)
        resp = self.client.get(f"{API}/check-auth", headers=self.bearer(token))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["code"], "TokenInvalid")


class TestRequireAdmin(ApiTestCase):
    """Admin routes answer 403 to any valid non-admin token."""

    def setUp(self) -> None:
        super().setUp()
        self.headers = self.bearer(self.user_token())

    def test_admin_routes_forbidden(self) -> None:
        cases = [
            ("get", f"{API}/users", None),
            ("post", f"{API}/users", {"username": "x", "email": "x@example.com", "password": "password1"}),
            ("delete", f"{API}/users/1", None),
            ("post", f"{API}/form-structure", {"structure": [{"title": "T", "fields": []}]}),
            ("get", f"{API}/form-structure/history", None),
            ("put", f"{API}/services", []),
            ("post", f"{API}/services", []),
            ("delete", f"{API}/services/1", None),
            ("post", f"{API}/template/reset", None),
        ]
        for method, url, payload in cases:
            with self.subTest(method=method, url=url):
                kwargs = {"headers": self.headers}
                if payload is not None:
                    kwargs["json"] = payload
                resp = self.client.request(method.upper(), url, **kwargs)
                self.assertEqual(resp.status_code, 403, resp.text)
                self.assertEqual(resp.json()["code"], "AdminRequired")

    def test_user_routes_allowed(self) -> None:
        for url in (f"{API}/form-structure", f"{API}/services", f"{API}/proposals"):
            with self.subTest(url=url):
                self.assertEqual(self.client.get(url, headers=self.headers).status_code, 200)


if __name__ == "__main__":
    unittest.main()

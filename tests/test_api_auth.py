"""HTTP tests for login/logout, health and the admin user listing."""

from fastapi.testclient import TestClient

from store_api.core.config import settings
from store_api.core.security import parse_token
from store_api.main import app
from store_api.models import Role
from tests.support import TEST_PASSWORD, DatabaseTestCase, auth_header, make_user


class TestLogin(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.client = TestClient(app)
        self.manager = make_user(self.db, "manager", Role.MANAGER)

    def _login(self, username: str, password: str):
        return self.client.post("/api/auth/login", json={"username": username, "password": password})

    def test_login_returns_bearer_token(self) -> None:
        response = self._login("manager", TEST_PASSWORD)
        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertEqual(body["type"], "Bearer")
        self.assertEqual(body["expiresIn"], settings.JWT_EXPIRE_SECONDS)
        self.assertEqual(body["username"], "manager")
        self.assertEqual(body["role"], "MANAGER")
        claims = parse_token(body["token"])
        self.assertEqual(claims.user_id, self.manager.id)

    def test_issued_token_opens_protected_endpoints(self) -> None:
        token = self._login("manager", TEST_PASSWORD).json()["token"]
        response = self.client.get("/api/products", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(response.status_code, 200)

    def test_wrong_password_and_unknown_user_are_indistinguishable(self) -> None:
        wrong = self._login("manager", "wrong-password")
        unknown = self._login("nobody", TEST_PASSWORD)
        for response in (wrong, unknown):
            self.assertEqual(response.status_code, 401)
            body = response.json()
            self.assertEqual(body["error"], "Unauthorized")
            self.assertEqual(body["message"], "Invalid username or password")
        self.assertEqual(wrong.json()["message"], unknown.json()["message"])

    def test_disabled_account_cannot_login(self) -> None:
        make_user(self.db, "ghost", Role.USER, enabled=False)
        response = self._login("ghost", TEST_PASSWORD)
        self.assertEqual(response.status_code, 401)

    def test_blank_username_is_400(self) -> None:
        response = self._login("  ", TEST_PASSWORD)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["details"], {"username": "Username is required"})

    def test_login_ignores_stale_authorization_header(self) -> None:
        response = self.client.post(
            "/api/auth/login",
            json={"username": "manager", "password": TEST_PASSWORD},
            headers={"Authorization": "Bearer expired-or-garbage"},
        )
        self.assertEqual(response.status_code, 200)

    def test_logout_is_stateless_acknowledgement(self) -> None:
        response = self.client.post("/api/auth/logout")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(), {"message": "Logout successful. Please discard your token."}
        )


class TestHealthAndAdmin(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.client = TestClient(app)

    def test_health_is_public(self) -> None:
        response = self.client.get("/api/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(), {"status": "ok", "environment": "dev", "database": "connected"}
        )

    def test_root_is_public(self) -> None:
        self.assertEqual(self.client.get("/").status_code, 200)

    def test_admin_lists_users_without_passwords(self) -> None:
        admin = make_user(self.db, "admin", Role.ADMIN)
        make_user(self.db, "user", Role.USER)
        response = self.client.get("/api/admin/users", headers=auth_header(admin))
        self.assertEqual(response.status_code, 200)
        users = response.json()["users"]
        self.assertEqual([u["username"] for u in users], ["admin", "user"])
        self.assertEqual(users[0]["role"], "ADMIN")
        self.assertEqual(users[0]["firstName"], "Admin")
        for user in users:
            self.assertNotIn("passwordHash", user)
            self.assertNotIn("password_hash", user)

    def test_admin_filters_users_by_role(self) -> None:
        admin = make_user(self.db, "admin", Role.ADMIN)
        make_user(self.db, "manager", Role.MANAGER)
        make_user(self.db, "user", Role.USER)
        response = self.client.get(
            "/api/admin/users", params={"role": "MANAGER"}, headers=auth_header(admin)
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual([u["username"] for u in response.json()["users"]], ["manager"])

    def test_manager_cannot_list_users(self) -> None:
        manager = make_user(self.db, "manager", Role.MANAGER)
        response = self.client.get("/api/admin/users", headers=auth_header(manager))
        self.assertEqual(response.status_code, 403)

"""Tests for the provisioning scripts: create_user and seed."""

from unittest.mock import patch

from store_api.core.security import verify_password
from store_api.models import Product, Role, User
from store_api.scripts import seed
from store_api.scripts.create_user import create_user
from store_api.scripts.create_user import main as create_user_main
from tests.support import TEST_PASSWORD_HASH, DatabaseTestCase

# bcrypt at full cost is slow; seed creates several accounts.
FAST_HASH = patch("store_api.scripts.create_user.hash_password", return_value=TEST_PASSWORD_HASH)


class TestCreateUser(DatabaseTestCase):
    def test_creates_enabled_user_with_hashed_password(self) -> None:
        user = create_user(self.db, "carol", "carol@example.com", "carol-pass", Role.MANAGER)
        self.assertEqual(user.role, "MANAGER")
        self.assertTrue(user.enabled)
        self.assertNotEqual(user.password_hash, "carol-pass")
        self.assertTrue(verify_password("carol-pass", user.password_hash))

    @FAST_HASH
    def test_rejects_duplicate_username_and_email(self, _hash) -> None:
        create_user(self.db, "carol", "carol@example.com", "carol-pass")
        with self.assertRaisesRegex(ValueError, "already exists"):
            create_user(self.db, "carol", "other@example.com", "carol-pass")
        with self.assertRaisesRegex(ValueError, "already registered"):
            create_user(self.db, "carol2", "carol@example.com", "carol-pass")

    def test_rejects_bad_input(self) -> None:
        with self.assertRaises(ValueError):
            create_user(self.db, "", "a@example.com", "password")
        with self.assertRaises(ValueError):
            create_user(self.db, "dave", "not-an-email", "password")
        with self.assertRaises(ValueError):
            create_user(self.db, "dave", "dave@example.com", "123")

    @FAST_HASH
    def test_cli_reports_duplicates(self, _hash) -> None:
        self.assertEqual(create_user_main(["erin", "erin@example.com", "erin-pass", "ADMIN"]), 0)
        self.assertEqual(create_user_main(["erin", "erin2@example.com", "erin-pass"]), 1)
        self.db.expire_all()
        self.assertEqual(self.db.query(User).filter(User.username == "erin").one().role, "ADMIN")


class TestSeed(DatabaseTestCase):
    @FAST_HASH
    def test_seed_populates_empty_tables_once(self, _hash) -> None:
        self.assertEqual(seed.seed_users(self.db), len(seed.DEFAULT_USERS))
        self.assertEqual(seed.seed_products(self.db), len(seed.SAMPLE_PRODUCTS))
        self.assertEqual(seed.seed_users(self.db), 0)
        self.assertEqual(seed.seed_products(self.db), 0)
        self.assertEqual(self.db.query(User).count(), 3)
        self.assertEqual(self.db.query(Product).count(), len(seed.SAMPLE_PRODUCTS))
        roles = {u.username: u.role for u in self.db.query(User)}
        self.assertEqual(roles, {"admin": "ADMIN", "manager": "MANAGER", "user": "USER"})

    @FAST_HASH
    def test_main_returns_zero(self, _hash) -> None:
        self.assertEqual(seed.main(), 0)

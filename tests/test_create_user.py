"""Unit tests for leaderboard_api.scripts.create_user: seeding users with a role."""

import unittest
from unittest.mock import patch

from leaderboard_api.core.security import verify_password
from leaderboard_api.models.user import Role
from leaderboard_api.scripts.create_user import main, seed_user
from leaderboard_api.services.credential_store import InMemoryCredentialStore, UniquenessError


class TestSeedUser(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryCredentialStore()

    def test_seeds_admin(self) -> None:
        user = seed_user(self.store, " admin ", "admin_rb", "s3cret", Role.ADMIN)
        self.assertEqual(user.kick_username, "admin")
        self.assertEqual(user.role, Role.ADMIN)
        self.assertTrue(verify_password("s3cret", user.password_hash))

    def test_rejects_bad_input(self) -> None:
        for args in (("", "r", "pw"), ("k", "", "pw"), ("k", "r", ""), ("k", "r", "x" * 73)):
            with self.subTest(args=args):
                with self.assertRaises(ValueError):
                    seed_user(self.store, *args, Role.USER)
        self.assertEqual(len(self.store), 0)

    def test_duplicate(self) -> None:
        seed_user(self.store, "admin", "admin_rb", "pw", Role.ADMIN)
        with self.assertRaises(UniquenessError):
            seed_user(self.store, "admin", "other", "pw", Role.USER)


class TestMain(unittest.TestCase):
    def test_exit_codes(self) -> None:
        store = InMemoryCredentialStore()
        with patch(
            "leaderboard_api.scripts.create_user.get_credential_store", return_value=store
        ):
            self.assertEqual(main(["admin", "admin_rb", "pw", "admin"]), 0)
            self.assertEqual(main(["admin", "again_rb", "pw"]), 1)
        self.assertEqual(store.find_by_primary("admin").role, Role.ADMIN)

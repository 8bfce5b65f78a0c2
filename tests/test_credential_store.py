"""Unit tests for leaderboard_api.services.credential_store: lookups and atomic unique insert."""

import threading
import unittest
from concurrent.futures import ThreadPoolExecutor

from leaderboard_api.models.user import Role, UserRecord
from leaderboard_api.services.credential_store import (
    InMemoryCredentialStore,
    UniquenessError,
    get_credential_store,
)


def _user(kick: str = "alice", rainbet: str = "alice_r", **kwargs: object) -> UserRecord:
    """Build a UserRecord with a placeholder hash for tests."""
    return UserRecord(kick_username=kick, rainbet_username=rainbet, password_hash="hash", **kwargs)


class TestLookups(unittest.TestCase):
    """find_by_primary / find_by_secondary return the stored record or None."""

    def setUp(self) -> None:
        self.store = InMemoryCredentialStore()
        self.alice = self.store.insert(_user())

    def test_find_by_primary(self) -> None:
        self.assertIs(self.store.find_by_primary("alice"), self.alice)
        self.assertIsNone(self.store.find_by_primary("bob"))

    def test_find_by_secondary(self) -> None:
        self.assertIs(self.store.find_by_secondary("alice_r"), self.alice)
        self.assertIsNone(self.store.find_by_secondary("alice"))

    def test_lookup_is_case_sensitive(self) -> None:
        self.assertIsNone(self.store.find_by_primary("Alice"))
        self.assertIsNone(self.store.find_by_secondary("ALICE_R"))

    def test_new_store_is_empty(self) -> None:
        self.assertEqual(len(InMemoryCredentialStore()), 0)
        self.assertEqual(len(self.store), 1)


class TestInsertUniqueness(unittest.TestCase):
    """insert rejects duplicate kick or rainbet usernames and leaves the store unchanged."""

    def setUp(self) -> None:
        self.store = InMemoryCredentialStore()
        self.store.insert(_user())

    def test_duplicate_primary(self) -> None:
        with self.assertRaises(UniquenessError) as ctx:
            self.store.insert(_user(kick="alice", rainbet="other"))
        self.assertEqual(ctx.exception.field, "kick_username")
        self.assertIsNone(self.store.find_by_secondary("other"))
        self.assertEqual(len(self.store), 1)

    def test_duplicate_secondary(self) -> None:
        with self.assertRaises(UniquenessError) as ctx:
            self.store.insert(_user(kick="bob", rainbet="alice_r"))
        self.assertEqual(ctx.exception.field, "rainbet_username")
        self.assertIsNone(self.store.find_by_primary("bob"))
        self.assertEqual(len(self.store), 1)

    def test_distinct_handles_insert(self) -> None:
        bob = self.store.insert(_user(kick="bob", rainbet="bob_r", role=Role.ADMIN))
        self.assertIs(self.store.find_by_primary("bob"), bob)
        self.assertEqual(len(self.store), 2)


class TestConcurrentInsert(unittest.TestCase):
    """Concurrent inserts of the same handle: exactly one wins."""

    def test_one_winner(self) -> None:
        store = InMemoryCredentialStore()
        workers = 50
        barrier = threading.Barrier(workers)

        def attempt(i: int) -> bool:
            barrier.wait()
            try:
                store.insert(_user(kick="same", rainbet=f"r{i}"))
                return True
            except UniquenessError:
                return False

        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(attempt, range(workers)))

        self.assertEqual(results.count(True), 1)
        self.assertEqual(len(store), 1)


class TestProcessWideStore(unittest.TestCase):
    """get_credential_store returns one shared instance."""

    def test_same_instance(self) -> None:
        self.assertIs(get_credential_store(), get_credential_store())

"""Tests for memoized user and group name resolution."""

import os
import pwd
import unittest

from permtree.names import NameResolver


class CountingLookup:
    """Lookup over a fixed table that counts its calls."""

    def __init__(self, table):
        self.table = table
        self.calls = 0

    def __call__(self, ident):
        self.calls += 1
        return self.table[ident]


class TestNameResolver(unittest.TestCase):

    def setUp(self):
        self.users = CountingLookup({0: "root", 1000: "alice"})
        self.groups = CountingLookup({0: "root", 100: "users"})
        self.resolver = NameResolver(self.users, self.groups)

    def test_known_ids(self):
        self.assertEqual(self.resolver.resolve_user(1000), "alice")
        self.assertEqual(self.resolver.resolve_group(100), "users")

    def test_unknown_id_falls_back_to_number(self):
        self.assertEqual(self.resolver.resolve_user(4242), "4242")
        self.assertEqual(self.resolver.resolve_group(4343), "4343")

    def test_lookup_happens_once_per_id(self):
        for _ in range(5):
            self.resolver.resolve_user(1000)
            self.resolver.resolve_user(4242)

        self.assertEqual(self.users.calls, 2)
        stats = self.resolver.get_statistics()
        self.assertEqual(stats['misses'], 2)
        self.assertEqual(stats['hits'], 8)
        self.assertEqual(stats['users'], 2)
        self.assertEqual(stats['groups'], 0)

    def test_user_and_group_caches_separate(self):
        self.assertEqual(self.resolver.resolve_user(0), "root")
        self.assertEqual(self.resolver.resolve_group(1000), "1000")
        self.assertEqual(self.users.calls, 1)
        self.assertEqual(self.groups.calls, 1)

    def test_out_of_range_id(self):
        def overflow(ident):
            raise OverflowError("uid out of range")

        resolver = NameResolver(overflow, overflow)
        self.assertEqual(resolver.resolve_user(2 ** 40), str(2 ** 40))

    def test_system_database(self):
        uid = os.getuid()
        try:
            expected = pwd.getpwuid(uid).pw_name
        except KeyError:
            expected = str(uid)

        self.assertEqual(NameResolver().resolve_user(uid), expected)


if __name__ == "__main__":
    unittest.main()

"""Unit tests for authapi.core.permissions: exact role equality and ownership, False when unauthenticated."""

import unittest

from authapi.core.permissions import Identity, is_admin, is_moderator, owns_resource


class TestRolePredicates(unittest.TestCase):
    def test_is_admin(self) -> None:
        self.assertTrue(is_admin(Identity(user_id=1, role="admin")))
        self.assertFalse(is_admin(Identity(user_id=1, role="moderator")))
        self.assertFalse(is_admin(Identity(user_id=1, role="user")))

    def test_is_moderator(self) -> None:
        self.assertTrue(is_moderator(Identity(user_id=1, role="moderator")))
        self.assertFalse(is_moderator(Identity(user_id=1, role="admin")))

    def test_no_role_hierarchy_or_case_folding(self) -> None:
        # admin is not implicitly a moderator, and role names are compared exactly
        self.assertFalse(is_moderator(Identity(user_id=1, role="admin")))
        self.assertFalse(is_admin(Identity(user_id=1, role="Admin")))
        self.assertFalse(is_admin(Identity(user_id=1, role="admin ")))


class TestOwnsResource(unittest.TestCase):
    def test_same_id(self) -> None:
        self.assertTrue(owns_resource(Identity(user_id=5, role="user"), 5))

    def test_other_id(self) -> None:
        self.assertFalse(owns_resource(Identity(user_id=5, role="admin"), 6))


class TestUnauthenticated(unittest.TestCase):
    """A route mounted without the auth dependency has no identity; predicates deny instead of raising."""

    def test_all_predicates_false(self) -> None:
        self.assertFalse(is_admin(None))
        self.assertFalse(is_moderator(None))
        self.assertFalse(owns_resource(None, 1))
        self.assertFalse(owns_resource(None, 0))


if __name__ == "__main__":
    unittest.main()

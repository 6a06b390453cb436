"""Unit tests for authapi.api.deps: Bearer header handling and request identity."""

import unittest
from datetime import timedelta
from types import SimpleNamespace

from authapi.api.deps import authenticate, current_identity
from authapi.core.exceptions import InvalidTokenError, MissingCredentialsError
from authapi.core.permissions import Identity
from authapi.core.tokens import TokenCodec
from tests.fakes import ACCESS_SECRET, REFRESH_SECRET, FakeClock


class TestAuthenticate(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.codec = TokenCodec(
            access_secret=ACCESS_SECRET,
            refresh_secret=REFRESH_SECRET,
            access_ttl=timedelta(minutes=30),
            refresh_ttl=timedelta(days=30),
            clock=self.clock,
        )

    def test_valid_bearer_token(self) -> None:
        token = self.codec.issue_access(12, "moderator")
        self.assertEqual(
            authenticate(f"Bearer {token}", self.codec),
            Identity(user_id=12, role="moderator"),
        )

    def test_missing_header(self) -> None:
        for header in (None, ""):
            with self.subTest(header=header):
                with self.assertRaises(MissingCredentialsError):
                    authenticate(header, self.codec)

    def test_prefix_is_literal(self) -> None:
        token = self.codec.issue_access(12, "user")
        for header in (token, f"bearer {token}", f"Token {token}", f"Bearer{token}", "Bearer"):
            with self.subTest(header=header):
                with self.assertRaises(MissingCredentialsError):
                    authenticate(header, self.codec)

    def test_empty_token_after_prefix(self) -> None:
        with self.assertRaises(InvalidTokenError):
            authenticate("Bearer ", self.codec)

    def test_refresh_token_rejected(self) -> None:
        token = self.codec.issue_refresh(12, "admin")
        with self.assertRaises(InvalidTokenError):
            authenticate(f"Bearer {token}", self.codec)

    def test_expired_access_token(self) -> None:
        token = self.codec.issue_access(12, "user")
        self.clock.advance(minutes=31)
        with self.assertRaises(InvalidTokenError):
            authenticate(f"Bearer {token}", self.codec)


class TestCurrentIdentity(unittest.TestCase):
    def test_returns_identity_set_by_dependency(self) -> None:
        identity = Identity(user_id=1, role="user")
        request = SimpleNamespace(state=SimpleNamespace(identity=identity))
        self.assertIs(current_identity(request), identity)  # type: ignore[arg-type]

    def test_none_when_not_authenticated(self) -> None:
        request = SimpleNamespace(state=SimpleNamespace())
        self.assertIsNone(current_identity(request))  # type: ignore[arg-type]

    def test_ignores_untyped_values(self) -> None:
        request = SimpleNamespace(state=SimpleNamespace(identity={"user_id": 1, "role": "admin"}))
        self.assertIsNone(current_identity(request))  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()

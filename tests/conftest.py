"""Test-wide environment. Must run before authapi.core.config is imported (settings are cached)."""

import os

# Minimum bcrypt cost keeps hashing fast in tests.
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("APP_ENV", "dev")
os.environ.setdefault("JWT_ACCESS_SECRET", "test-access-secret-0123456789abcdef")
os.environ.setdefault("JWT_REFRESH_SECRET", "test-refresh-secret-0123456789abcdef")

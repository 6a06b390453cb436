"""Password hashing, verification and the password policy."""

import re

import bcrypt

from authapi.core.config import settings

# Min/max lengths for username and password validation (input validation).
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

PASSWORD_SYMBOLS = "!@#$%^&*?"
PASSWORD_POLICY_MESSAGE = (
    "Password must have 8+ characters, with a lowercase and a capital letter, "
    f"a number, and a symbol ({PASSWORD_SYMBOLS})"
)
_PASSWORD_PATTERNS = (
    re.compile(r"[a-z]"),
    re.compile(r"[A-Z]"),
    re.compile(r"\d"),
    re.compile("[" + re.escape(PASSWORD_SYMBOLS) + "]"),
)


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Each call uses a fresh salt."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    cost = rounds if rounds is not None else settings.BCRYPT_ROUNDS
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=cost)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Any error counts as a mismatch."""
    try:
        pw_bytes = plain_password.encode("utf-8")[:72]
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


def validate_password_strength(password: str) -> str:
    """Return the password unchanged if it satisfies the policy, else raise ValueError."""
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        raise ValueError(PASSWORD_POLICY_MESSAGE)
    for pattern in _PASSWORD_PATTERNS:
        if not pattern.search(password):
            raise ValueError(PASSWORD_POLICY_MESSAGE)
    return password


# Verified against when a login names an unknown user, so both paths pay the bcrypt cost.
DUMMY_PASSWORD_HASH = hash_password("timing-equalization-dummy")

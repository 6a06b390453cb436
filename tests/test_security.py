"""Unit tests for authapi.core.security: bcrypt hashing, fail-closed verification, password policy."""

import unittest

from authapi.core.security import (
    DUMMY_PASSWORD_HASH,
    PASSWORD_POLICY_MESSAGE,
    hash_password,
    validate_password_strength,
    verify_password,
)


class TestHashPassword(unittest.TestCase):
    """hash_password salts every call and never returns the plaintext."""

    def test_same_input_hashes_differently(self) -> None:
        h1 = hash_password("Secret#123", rounds=4)
        h2 = hash_password("Secret#123", rounds=4)
        self.assertNotEqual(h1, h2)
        self.assertNotIn("Secret#123", h1)

    def test_embeds_bcrypt_cost(self) -> None:
        self.assertTrue(hash_password("Secret#123", rounds=5).startswith("$2b$05$"))

    def test_default_rounds_come_from_settings(self) -> None:
        # conftest sets BCRYPT_ROUNDS=4
        self.assertTrue(hash_password("Secret#123").startswith("$2b$04$"))


class TestVerifyPassword(unittest.TestCase):
    """verify_password accepts only the plaintext that was hashed and fails closed on bad input."""

    def test_matching_password(self) -> None:
        hashed = hash_password("Secret#123", rounds=4)
        self.assertTrue(verify_password("Secret#123", hashed))

    def test_different_password(self) -> None:
        hashed = hash_password("Secret#123", rounds=4)
        self.assertFalse(verify_password("Secret#124", hashed))
        self.assertFalse(verify_password("", hashed))

    def test_malformed_hash_is_a_mismatch(self) -> None:
        self.assertFalse(verify_password("Secret#123", "not-a-bcrypt-hash"))
        self.assertFalse(verify_password("Secret#123", ""))

    def test_non_string_hash_is_a_mismatch(self) -> None:
        self.assertFalse(verify_password("Secret#123", None))  # type: ignore[arg-type]

    def test_dummy_hash_is_valid_bcrypt(self) -> None:
        self.assertTrue(DUMMY_PASSWORD_HASH.startswith("$2b$"))
        self.assertFalse(verify_password("Secret#123", DUMMY_PASSWORD_HASH))


class TestPasswordPolicy(unittest.TestCase):
    """8+ chars with lowercase, uppercase, digit and a symbol from !@#$%^&*?."""

    def test_accepts_strong_password(self) -> None:
        self.assertEqual(validate_password_strength("Abcdef1!"), "Abcdef1!")
        self.assertEqual(validate_password_strength("xY9?xY9?xY9?"), "xY9?xY9?xY9?")

    def test_rejects_weak_passwords(self) -> None:
        weak = [
            "Ab1!",            # too short
            "abcdefg1!",       # no uppercase
            "ABCDEFG1!",       # no lowercase
            "Abcdefgh!",       # no digit
            "Abcdefgh1",       # no symbol
            "Abcdefg1-",       # '-' is not in the symbol set
            "A" * 120 + "a1!aaaaaaa",  # longer than 128
        ]
        for password in weak:
            with self.subTest(password=password):
                with self.assertRaises(ValueError) as ctx:
                    validate_password_strength(password)
                self.assertEqual(str(ctx.exception), PASSWORD_POLICY_MESSAGE)


if __name__ == "__main__":
    unittest.main()

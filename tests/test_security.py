"""Unit tests for account_api.core.security: bcrypt wrapper, legacy detection, JWT issue/decode."""

import support  # noqa: F401  (sets DATABASE_URL before app imports)

import unittest
from datetime import timedelta

import jwt

from account_api.core.errors import ConfigError
from account_api.core.security import (
    decode_access_token,
    hash_password,
    is_password_hash,
    issue_access_token,
    legacy_password_matches,
    verify_password,
)

ROUNDS = 4


class TestHashPassword(unittest.TestCase):
    """hash_password produces salted bcrypt hashes that verify_password accepts."""

    def test_hash_has_bcrypt_marker_and_is_not_plaintext(self) -> None:
        hashed = hash_password("1234", ROUNDS)
        self.assertTrue(hashed.startswith("$2"))
        self.assertNotEqual(hashed, "1234")

    def test_salt_differs_per_call(self) -> None:
        self.assertNotEqual(hash_password("1234", ROUNDS), hash_password("1234", ROUNDS))

    def test_verify_is_stable_across_calls(self) -> None:
        hashed = hash_password("correct horse", ROUNDS)
        for _ in range(3):
            self.assertTrue(verify_password("correct horse", hashed))

    def test_verify_rejects_other_passwords(self) -> None:
        hashed = hash_password("correct horse", ROUNDS)
        for other in ("", "correct", "correct horse ", "Correct horse"):
            self.assertFalse(verify_password(other, hashed))

    def test_verify_malformed_hash_returns_false(self) -> None:
        self.assertFalse(verify_password("1234", "$2b$not-a-real-hash"))
        self.assertFalse(verify_password("1234", ""))

    def test_non_ascii_password(self) -> None:
        hashed = hash_password("รหัสผ่าน", ROUNDS)
        self.assertTrue(verify_password("รหัสผ่าน", hashed))


class TestLegacyDetection(unittest.TestCase):
    """is_password_hash and legacy_password_matches discriminate plaintext from bcrypt."""

    def test_bcrypt_variants_are_hashes(self) -> None:
        for prefix in ("$2a$", "$2b$", "$2y$"):
            self.assertTrue(is_password_hash(prefix + "10$abcdefghijklmnopqrstuv"))

    def test_plaintext_is_not_hash(self) -> None:
        for value in ("1234", "", None, "2$abc", "$1$md5crypt"):
            self.assertFalse(is_password_hash(value))

    def test_legacy_exact_match(self) -> None:
        self.assertTrue(legacy_password_matches("1234", "1234"))
        self.assertTrue(legacy_password_matches("ผ่าน", "ผ่าน"))

    def test_legacy_mismatch(self) -> None:
        self.assertFalse(legacy_password_matches("1234 ", "1234"))
        self.assertFalse(legacy_password_matches("", "1234"))


class TestAccessToken(unittest.TestCase):
    """issue_access_token / decode_access_token round trip, expiry and secret handling."""

    secret = support.TEST_SECRET
    claims = {"role": "user", "id": 7, "fullname": "John", "lastname": "Doe", "status": "active"}

    def test_round_trip_returns_claims(self) -> None:
        token = issue_access_token(self.claims, self.secret, timedelta(hours=1))
        payload = decode_access_token(token, self.secret)
        for key, value in self.claims.items():
            self.assertEqual(payload[key], value)
        self.assertEqual(payload["exp"] - payload["iat"], 3600)

    def test_expired_token_rejected(self) -> None:
        token = issue_access_token(self.claims, self.secret, timedelta(seconds=-5))
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(token, self.secret)

    def test_wrong_secret_rejected(self) -> None:
        token = issue_access_token(self.claims, self.secret, timedelta(hours=1))
        with self.assertRaises(jwt.InvalidSignatureError):
            decode_access_token(token, "another-secret-0123456789abcdefghij")

    def test_garbage_token_rejected(self) -> None:
        with self.assertRaises(jwt.PyJWTError):
            decode_access_token("not-a-real-token", self.secret)

    def test_token_without_exp_rejected(self) -> None:
        token = jwt.encode({"role": "user", "id": 1}, self.secret, algorithm="HS256")
        with self.assertRaises(jwt.MissingRequiredClaimError):
            decode_access_token(token, self.secret)

    def test_issue_without_secret_raises_config_error(self) -> None:
        for secret in (None, ""):
            with self.assertRaises(ConfigError):
                issue_access_token(self.claims, secret, timedelta(hours=1))

    def test_decode_without_secret_raises_config_error(self) -> None:
        token = issue_access_token(self.claims, self.secret, timedelta(hours=1))
        with self.assertRaises(ConfigError):
            decode_access_token(token, None)


if __name__ == "__main__":
    unittest.main()

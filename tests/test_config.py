"""Unit tests for account_api.core.config: signing secret resolution and validation."""

import support  # noqa: F401  (sets DATABASE_URL before app imports)

import unittest

from pydantic import ValidationError

from account_api.core.config import Settings


def _settings(**values: object) -> Settings:
    base: dict[str, object] = {"SECRET_KEY": None, "JWT_SECRET": None}
    base.update(values)
    return Settings(_env_file=None, **base)


class TestSigningSecret(unittest.TestCase):
    """SECRET_KEY and JWT_SECRET are both accepted; first non-empty wins."""

    def test_secret_key_wins(self) -> None:
        s = _settings(SECRET_KEY="from-secret-key", JWT_SECRET="from-jwt-secret")
        self.assertEqual(s.signing_secret, "from-secret-key")

    def test_falls_back_to_jwt_secret(self) -> None:
        s = _settings(JWT_SECRET="from-jwt-secret")
        self.assertEqual(s.signing_secret, "from-jwt-secret")

    def test_blank_secret_key_counts_as_unset(self) -> None:
        s = _settings(SECRET_KEY="   ", JWT_SECRET="from-jwt-secret")
        self.assertIsNone(s.SECRET_KEY)
        self.assertEqual(s.signing_secret, "from-jwt-secret")

    def test_no_secret_is_allowed_at_startup(self) -> None:
        self.assertIsNone(_settings().signing_secret)


class TestSettingsValidation(unittest.TestCase):
    """Field validators reject out-of-range or malformed values."""

    def test_rejects_non_postgres_or_sqlite_url(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mysql://root@localhost/db")

    def test_accepts_sqlite_url(self) -> None:
        self.assertEqual(_settings(DATABASE_URL=" sqlite:///./accounts.db ").DATABASE_URL, "sqlite:///./accounts.db")

    def test_rejects_bcrypt_rounds_out_of_range(self) -> None:
        for rounds in (3, 32):
            with self.assertRaises(ValidationError):
                _settings(BCRYPT_ROUNDS=rounds)

    def test_rejects_jwt_expire_minutes_out_of_range(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_EXPIRE_MINUTES=0)

    def test_defaults(self) -> None:
        s = _settings()
        self.assertEqual(s.JWT_EXPIRE_MINUTES, 60)
        self.assertEqual(s.JWT_ALGORITHM, "HS256")
        self.assertTrue(s.USERS_REQUIRE_AUTH)

    def test_api_prefix_trailing_slash_stripped(self) -> None:
        self.assertEqual(_settings(API_PREFIX="/api/").API_PREFIX, "/api")

    def test_log_level_normalized(self) -> None:
        self.assertEqual(_settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")

    def test_cors_origins_split(self) -> None:
        s = _settings(CORS_ORIGINS="http://a.test, http://b.test")
        self.assertEqual(s.cors_origins, ["http://a.test", "http://b.test"])


if __name__ == "__main__":
    unittest.main()

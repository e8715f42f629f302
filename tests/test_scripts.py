"""Tests for the command-line scripts: create_user and export_openapi."""

import support  # noqa: F401  (sets DATABASE_URL before app imports)

import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from account_api.scripts import create_user, export_openapi


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        self.factory = support.make_session_factory()
        patchers = [
            patch.object(create_user, "SessionLocal", self.factory),
            patch.object(create_user, "get_settings", return_value=support.make_settings()),
        ]
        for p in patchers:
            p.start()
            self.addCleanup(p.stop)

    def test_creates_hashed_user(self) -> None:
        self.assertEqual(create_user.main(["john", "pw-1234", "--fullname", "John"]), 0)
        self.assertTrue(support.stored_password(self.factory, "john").startswith("$2"))

    def test_unreachable_database_returns_error_code(self) -> None:
        with patch.object(create_user, "check_db_connected", return_value=False):
            self.assertEqual(create_user.main(["john", "pw-1234"]), 1)
        self.assertIsNone(support.stored_password(self.factory, "john"))

    def test_duplicate_returns_error_code(self) -> None:
        create_user.main(["john", "pw-1234"])
        self.assertEqual(create_user.main(["john", "pw-1234"]), 1)


class TestExportOpenapiScript(unittest.TestCase):
    def test_writes_document(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "openapi.json"
            self.assertEqual(export_openapi.main([str(out)]), 0)
            doc = json.loads(out.read_text(encoding="utf-8"))
        self.assertEqual(doc["info"]["title"], "Account Service API")
        self.assertIn("/ping", doc["paths"])


if __name__ == "__main__":
    unittest.main()

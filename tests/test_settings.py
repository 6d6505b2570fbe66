from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import support  # noqa: F401  (puts api-code on sys.path)

from env_loader import load_local_env
from settings import Settings


class SettingsTest(unittest.TestCase):
    def test_defaults_match_study_assistant_parameters(self) -> None:
        config = Settings.model_validate({}).gemini_config()

        self.assertIsNone(config.api_key)
        self.assertFalse(config.is_configured)
        self.assertEqual(config.max_output_tokens, 2000)
        self.assertEqual(config.temperature, 0.7)
        self.assertEqual(config.top_p, 1.0)

    def test_values_come_from_environment_aliases(self) -> None:
        env = {
            "GEMINI_API_KEY": "  key-from-env ",
            "GEMINI_MODEL": "gemini-2.0-flash",
            "GEMINI_TEMPERATURE": "0.2",
            "CORS_ORIGINS": "http://localhost:3000, https://lms.example.edu",
            "SEED_DEMO_DATA": "true",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()

        config = settings.gemini_config()
        self.assertEqual(config.api_key, "key-from-env")
        self.assertEqual(config.model_name, "gemini-2.0-flash")
        self.assertEqual(config.temperature, 0.2)
        self.assertTrue(settings.seed_demo_data)
        self.assertEqual(
            settings.allowed_origins, ["http://localhost:3000", "https://lms.example.edu"]
        )

    def test_blank_key_is_not_configured(self) -> None:
        self.assertFalse(Settings(GEMINI_API_KEY="   ").gemini_config().is_configured)


class EnvLoaderTest(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.env_path = Path(self._tmp.name) / ".env"

    def test_missing_file_is_ignored(self) -> None:
        self.assertEqual(load_local_env(self.env_path), 0)

    def test_parses_values_and_keeps_existing_environment(self) -> None:
        self.env_path.write_text(
            "# comment\n"
            "GEMINI_MODEL='gemini-2.5-pro'\n"
            "export MONGODB_DB_NAME=\"lms_test\"\n"
            "not a pair\n"
            "GEMINI_API_KEY=from-file\n"
        )
        with mock.patch.dict(os.environ, {"GEMINI_API_KEY": "from-shell"}, clear=True):
            with self.assertLogs("campus-lms.env", level="WARNING"):
                loaded = load_local_env(self.env_path)

            self.assertEqual(loaded, 2)
            self.assertEqual(os.environ["GEMINI_MODEL"], "gemini-2.5-pro")
            self.assertEqual(os.environ["MONGODB_DB_NAME"], "lms_test")
            self.assertEqual(os.environ["GEMINI_API_KEY"], "from-shell")

    def test_override_replaces_existing_values(self) -> None:
        self.env_path.write_text("GEMINI_API_KEY=from-file\n")
        with mock.patch.dict(os.environ, {"GEMINI_API_KEY": "from-shell"}, clear=True):
            load_local_env(self.env_path, override=True)
            self.assertEqual(os.environ["GEMINI_API_KEY"], "from-file")


if __name__ == "__main__":
    unittest.main()

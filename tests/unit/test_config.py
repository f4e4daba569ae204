# File: tests/unit/test_config.py
"""
Configuration Unit Tests

Tests for AppSettings and load_settings.
"""

import unittest
import tempfile
from pathlib import Path

from parklot.infrastructure.config import AppSettings, ConfigurationError, load_settings


class TestLoadSettings(unittest.TestCase):
    """Unit tests for reading settings"""

    def setUp(self):
        self._temp_dir = tempfile.TemporaryDirectory()
        self.config_path = Path(self._temp_dir.name) / "parklot.yaml"

    def tearDown(self):
        self._temp_dir.cleanup()

    def write_config(self, text):
        self.config_path.write_text(text, encoding="utf-8")
        return str(self.config_path)

    def test_defaults(self):
        settings = load_settings()
        self.assertEqual(settings.data_file, "parking_data.txt")
        self.assertEqual(settings.log_dir, "logs")
        self.assertEqual(settings.log_level, "INFO")
        self.assertFalse(settings.log_to_console)
        self.assertEqual(settings.log_file, Path("logs") / "parklot.log")

    def test_values_from_yaml(self):
        path = self.write_config(
            "data_file: /var/lib/parklot/lot.txt\n"
            "log_level: debug\n"
            "log_to_console: true\n"
        )
        settings = load_settings(path)
        self.assertEqual(settings.data_file, "/var/lib/parklot/lot.txt")
        self.assertEqual(settings.log_level, "DEBUG")
        self.assertTrue(settings.log_to_console)

    def test_empty_yaml_gives_defaults(self):
        self.assertEqual(load_settings(self.write_config("")), AppSettings())

    def test_overrides_win_and_none_falls_through(self):
        path = self.write_config("data_file: from_file.txt\nlog_dir: file_logs\n")
        settings = load_settings(path, {"data_file": "from_cli.txt", "log_dir": None})
        self.assertEqual(settings.data_file, "from_cli.txt")
        self.assertEqual(settings.log_dir, "file_logs")

    def test_unknown_key_rejected(self):
        path = self.write_config("capacity: 20\n")
        with self.assertRaises(ConfigurationError):
            load_settings(path)

    def test_bad_log_level_rejected(self):
        with self.assertRaises(ConfigurationError):
            load_settings(overrides={"log_level": "LOUD"})

    def test_missing_file_rejected(self):
        with self.assertRaises(ConfigurationError):
            load_settings(str(Path(self._temp_dir.name) / "nope.yaml"))

    def test_non_mapping_rejected(self):
        with self.assertRaises(ConfigurationError):
            load_settings(self.write_config("- one\n- two\n"))

    def test_invalid_yaml_rejected(self):
        with self.assertRaises(ConfigurationError):
            load_settings(self.write_config("data_file: [unclosed\n"))


if __name__ == "__main__":
    unittest.main(verbosity=2)

# File: tests/test_main_app.py
"""
Main application tests: argument parsing, logging setup and a full run.
"""

import io
import logging
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from parklot.main import main, build_parser, setup_logging, ParkingApplication
from parklot.infrastructure.config import AppSettings


class MainTestCase(unittest.TestCase):

    def setUp(self):
        self._temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self._temp_dir.name)
        self.data_file = self.root / "parking_data.txt"
        self.log_dir = self.root / "logs"
        root_logger = logging.getLogger()
        self._saved_handlers = list(root_logger.handlers)
        self._saved_level = root_logger.level

    def tearDown(self):
        root_logger = logging.getLogger()
        for handler in list(root_logger.handlers):
            if handler not in self._saved_handlers:
                root_logger.removeHandler(handler)
                handler.close()
        for handler in self._saved_handlers:
            if handler not in root_logger.handlers:
                root_logger.addHandler(handler)
        root_logger.setLevel(self._saved_level)
        self._temp_dir.cleanup()

    def base_args(self):
        return ["--data-file", str(self.data_file), "--log-dir", str(self.log_dir)]


class TestMainFunction(MainTestCase):
    """Test main() function execution"""

    @patch('sys.stdout', new_callable=io.StringIO)
    @patch('builtins.input', side_effect=["2", "TR-1", "0"])
    def test_main_runs_and_saves(self, mock_input, mock_stdout):
        exit_code = main(self.base_args())

        self.assertEqual(exit_code, 0)
        self.assertIn("Truck (TR-1) parked successfully.", mock_stdout.getvalue())
        saved = self.data_file.read_text(encoding="utf-8").split()
        self.assertEqual(saved[:2], ["Truck", "TR-1"])
        self.assertTrue((self.log_dir / "parklot.log").exists())

    @patch('sys.stdout', new_callable=io.StringIO)
    @patch('builtins.input', side_effect=["0"])
    def test_main_reloads_previous_data(self, mock_input, mock_stdout):
        self.data_file.write_text("Car AB-123 100\n", encoding="utf-8")

        self.assertEqual(main(self.base_args()), 0)

        self.assertIn("Previous data loaded.", mock_stdout.getvalue())
        self.assertEqual(self.data_file.read_text(encoding="utf-8"), "Car AB-123 100\n")

    @patch('sys.stderr', new_callable=io.StringIO)
    def test_bad_config_exits_with_error(self, mock_stderr):
        exit_code = main(["--config", str(self.root / "missing.yaml")])
        self.assertEqual(exit_code, 2)
        self.assertIn("Config file not found", mock_stderr.getvalue())

    @patch('sys.stdout', new_callable=io.StringIO)
    @patch('builtins.input', side_effect=["0"])
    def test_failed_save_exits_non_zero(self, mock_input, mock_stdout):
        args = ["--data-file", str(self.root / "missing" / "data.txt"), "--log-dir", str(self.log_dir)]
        self.assertEqual(main(args), 1)
        self.assertIn("Error: Could not open file for saving.", mock_stdout.getvalue())


class TestArgumentParsing(unittest.TestCase):
    """Test the command-line options"""

    def test_defaults_are_none(self):
        args = build_parser().parse_args([])
        self.assertIsNone(args.config)
        self.assertIsNone(args.data_file)
        self.assertIsNone(args.log_level)
        self.assertIsNone(args.log_to_console)

    def test_options(self):
        args = build_parser().parse_args(["--data-file", "lot.txt", "--log-level", "debug", "--verbose"])
        self.assertEqual(args.data_file, "lot.txt")
        self.assertEqual(args.log_level, "debug")
        self.assertTrue(args.log_to_console)


class TestSetupLogging(MainTestCase):
    """Test logging configuration"""

    def test_creates_log_directory_and_file_handler(self):
        settings = AppSettings(log_dir=str(self.log_dir), log_level="WARNING")
        setup_logging(settings)

        root_logger = logging.getLogger()
        self.assertTrue(self.log_dir.is_dir())
        self.assertEqual(root_logger.level, logging.WARNING)
        self.assertTrue(any(isinstance(h, logging.FileHandler) for h in root_logger.handlers))

    def test_console_handler_when_requested(self):
        settings = AppSettings(log_dir=str(self.log_dir), log_to_console=True)
        setup_logging(settings)

        stream_handlers = [
            h for h in logging.getLogger().handlers
            if type(h) is logging.StreamHandler
        ]
        self.assertEqual(len(stream_handlers), 1)


class TestParkingApplication(MainTestCase):
    """Test application wiring"""

    @patch('sys.stdout', new_callable=io.StringIO)
    def test_interrupt_still_saves(self, mock_stdout):
        settings = AppSettings(data_file=str(self.data_file), log_dir=str(self.log_dir))
        app = ParkingApplication(settings)
        app.service.park("Car", "AB-123")

        with patch.object(app.controller, 'run', side_effect=KeyboardInterrupt):
            self.assertTrue(app.run())

        self.assertIn("AB-123", self.data_file.read_text(encoding="utf-8"))
        self.assertIn("Data saved successfully.", mock_stdout.getvalue())


if __name__ == "__main__":
    unittest.main(verbosity=2)

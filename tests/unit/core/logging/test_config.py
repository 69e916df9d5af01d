"""Unit tests for logging setup."""

import json
import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import structlog

from core.logging.config import setup_logging


class TestSetupLogging(unittest.TestCase):
    """Test cases for setup_logging."""

    def setUp(self):
        self.root = logging.getLogger()
        self.saved_handlers = list(self.root.handlers)
        self.saved_level = self.root.level
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        for handler in self.root.handlers:
            handler.close()
        self.root.handlers[:] = self.saved_handlers
        self.root.setLevel(self.saved_level)
        structlog.reset_defaults()
        self.tmpdir.cleanup()

    def test_writes_json_records_to_file(self):
        log_file = Path(self.tmpdir.name) / "nested" / "service.log"
        with patch.dict(
            os.environ, {"LOG_FILE_PATH": str(log_file), "LOG_LEVEL": "DEBUG"}
        ):
            setup_logging()
            logging.getLogger("plain").warning("from stdlib")

        self.assertEqual(self.root.level, logging.DEBUG)
        self.assertEqual(len(self.root.handlers), 2)
        for handler in self.root.handlers:
            handler.flush()

        records = [
            json.loads(line)
            for line in log_file.read_text(encoding="utf-8").splitlines()
        ]
        events = [record["event"] for record in records]
        self.assertIn("logging_configured", events)
        self.assertIn("from stdlib", events)
        plain = next(r for r in records if r["event"] == "from stdlib")
        self.assertEqual(plain["level"], "warning")
        self.assertIn("service_name", plain)

    def test_unknown_level_falls_back_to_info(self):
        log_file = Path(self.tmpdir.name) / "service.log"
        with patch.dict(
            os.environ, {"LOG_FILE_PATH": str(log_file), "LOG_LEVEL": "LOUD"}
        ):
            setup_logging()
        self.assertEqual(self.root.level, logging.INFO)

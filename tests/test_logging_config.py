"""Unit tests for logging configuration."""

import logging
import unittest

from calcbrain import api, brain, cli, symbolic
from calcbrain.logging_config import StructuredFormatter, get_logger, setup_logging


class TestLoggingConfig(unittest.TestCase):
    """Test structured logging setup."""

    def tearDown(self):
        logger = logging.getLogger("calcbrain")
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)

    def test_setup_logging_level_and_handlers(self):
        logger = setup_logging("DEBUG")
        self.assertEqual(logger.name, "calcbrain")
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertEqual(len(logger.handlers), 1)
        # Repeated setup replaces handlers instead of stacking them
        setup_logging("INFO")
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.INFO)

    def test_unknown_level_falls_back_to_warning(self):
        logger = setup_logging("chatty")
        self.assertEqual(logger.level, logging.WARNING)

    def test_log_file(self):
        import tempfile
        from pathlib import Path

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "calc.log"
            logger = setup_logging("INFO", log_file=str(path))
            get_logger("brain").info("hello %s", "world")
            for handler in logger.handlers:
                handler.flush()
            self.assertIn("[INFO] calcbrain.brain: hello world", path.read_text(encoding="utf-8"))
            self.tearDown()

    def test_get_logger_namespacing(self):
        self.assertEqual(get_logger("api").name, "calcbrain.api")
        self.assertEqual(get_logger("calcbrain.cli").name, "calcbrain.cli")
        self.assertEqual(get_logger().name, "calcbrain")

    def test_package_modules_log_under_namespace(self):
        self.assertEqual(api.logger.name, "calcbrain.api")
        self.assertEqual(brain.logger.name, "calcbrain.brain")
        self.assertEqual(cli.logger.name, "calcbrain.cli")
        self.assertEqual(symbolic.logger.name, "calcbrain.symbolic")

    def test_structured_format(self):
        record = logging.LogRecord(
            "calcbrain.brain", logging.WARNING, __file__, 1, "value %d", (3,), None
        )
        line = StructuredFormatter().format(record)
        self.assertTrue(line.endswith("[WARNING] calcbrain.brain: value 3"))


if __name__ == "__main__":
    unittest.main()

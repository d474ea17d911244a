import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch
import importlib

from _test_utils import add_src_to_path

add_src_to_path()

logging_utils = importlib.import_module("mint_indexer.core.logging_utils")


class TestLoggingUtilsBasics(unittest.TestCase):
    def test_service_label_priority(self) -> None:
        with patch.dict(
            os.environ,
            {"SERVICE_ROLE": " Status ", "MINT_INDEXER_SERVICE": "svc"},
            clear=True,
        ):
            self.assertEqual(logging_utils.service_label(), "status")
        with patch.dict(os.environ, {"MINT_INDEXER_SERVICE": "svc"}, clear=True):
            self.assertEqual(logging_utils.service_label(), "svc")
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(logging_utils.service_label(default="fallback"), "fallback")

    def test_log_format_includes_label(self) -> None:
        with patch.dict(os.environ, {"SERVICE_ROLE": "mints"}, clear=True):
            fmt = logging_utils.log_format()
        self.assertIn("| mints |", fmt)

    def test_parse_log_level_and_known(self) -> None:
        self.assertEqual(logging_utils.parse_log_level(None, logging.WARNING), logging.WARNING)
        self.assertEqual(logging_utils.parse_log_level("10", logging.INFO), 10)
        self.assertEqual(logging_utils.parse_log_level("debug", logging.INFO), logging.DEBUG)
        self.assertEqual(logging_utils.parse_log_level("unknown", logging.INFO), logging.INFO)
        self.assertFalse(logging_utils.is_known_log_level(None))
        self.assertTrue(logging_utils.is_known_log_level("10"))
        self.assertTrue(logging_utils.is_known_log_level("INFO"))
        self.assertFalse(logging_utils.is_known_log_level("LOUD"))


class TestLoggingUtilsHandlers(unittest.TestCase):
    def test_resolve_log_file(self) -> None:
        with patch.dict(os.environ, {"LOG_FILE": "~/mints.log"}, clear=True):
            self.assertEqual(
                logging_utils._resolve_log_file(),
                os.path.expanduser("~/mints.log"),
            )
        with patch.dict(os.environ, {"LOG_DIR": "/var/log/x"}, clear=True):
            self.assertIsNone(logging_utils._resolve_log_file())

    def test_log_handlers_stdout_default(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            handlers = logging_utils.log_handlers()
        self.assertEqual(len(handlers), 1)
        self.assertIsInstance(handlers[0], logging.StreamHandler)

    def test_log_handlers_file_only(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_file = str(Path(tmp) / "nested" / "mints.log")
            with patch.dict(os.environ, {"LOG_FILE": log_file, "LOG_STDOUT": "0"}, clear=True):
                handlers = logging_utils.log_handlers()
            try:
                self.assertEqual(len(handlers), 1)
                self.assertIsInstance(handlers[0], logging.FileHandler)
                self.assertEqual(handlers[0].baseFilename, log_file)
            finally:
                for handler in handlers:
                    handler.close()


class TestConfigureLogging(unittest.TestCase):
    def test_configure_logging_warns_on_unknown_level(self) -> None:
        basic_config = MagicMock()
        logger = MagicMock()
        with patch.dict(os.environ, {"LOG_LEVEL": "LOUD"}, clear=True):
            level = logging_utils.configure_logging(
                service_name="mints",
                logger=logger,
                basic_config=basic_config,
            )
        self.assertEqual(level, logging.INFO)
        kwargs = basic_config.call_args.kwargs
        self.assertEqual(kwargs["level"], logging.INFO)
        self.assertIn("mints", kwargs["format"])
        logger.warning.assert_called_once()

    def test_configure_logging_quiets_clients_on_debug(self) -> None:
        basic_config = MagicMock()
        logger = MagicMock()
        with patch.dict(os.environ, {}, clear=True), \
             patch.object(logging_utils, "configure_client_logging") as quiet:
            level = logging_utils.configure_logging(
                service_name="mints",
                logger=logger,
                basic_config=basic_config,
                level_raw="DEBUG",
            )
        self.assertEqual(level, logging.DEBUG)
        quiet.assert_called_once_with(logging.DEBUG)
        logger.warning.assert_not_called()

    def test_configure_client_logging_override(self) -> None:
        target = logging.getLogger("web3")
        previous = target.level
        try:
            with patch.dict(os.environ, {"LOG_HTTP_LEVEL": "ERROR"}, clear=True):
                logging_utils.configure_client_logging()
            self.assertEqual(target.level, logging.ERROR)
        finally:
            target.setLevel(previous)

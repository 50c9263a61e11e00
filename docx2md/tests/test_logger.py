"""Tests for the logging helper."""
import logging
import os
import unittest
from unittest import mock

from docx2md.utils import logger as logger_module


class LoggerTest(unittest.TestCase):

    def test_level_read_from_environment(self) -> None:
        with mock.patch.dict(os.environ, {logger_module.LOG_LEVEL_ENV: "debug"}):
            self.assertEqual(logger_module._configured_level(), logging.DEBUG)

    def test_unknown_level_falls_back_to_info(self) -> None:
        with mock.patch.dict(os.environ, {logger_module.LOG_LEVEL_ENV: "chatty"}):
            self.assertEqual(logger_module._configured_level(), logging.INFO)

    def test_existing_handlers_are_kept(self) -> None:
        with mock.patch.object(logging, "basicConfig") as basic_config:
            with mock.patch.object(logging.getLogger(), "handlers", [logging.NullHandler()]):
                logger = logger_module.get_logger("docx2md.sample")
        basic_config.assert_not_called()
        self.assertEqual(logger.name, "docx2md.sample")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()

"""
Test suite for services/logging_service.py
==========================================
Tests for the shared detector logger setup.
"""

import logging
import os
import tempfile

import pytest
from services.logging_service import LOGGER_NAME, LoggingService


@pytest.fixture
def clean_root_logger():
    """Root logger snapshot, call the fixture value to empty it so basicConfig installs its handlers"""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield lambda: setattr(root, "handlers", [])
    for handler in root.handlers:
        handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


class TestLoggingService:
    """Tests for LoggingService"""

    def test_shared_logger(self, clean_root_logger):
        clean_root_logger()
        with tempfile.TemporaryDirectory() as temp_dir:
            service = LoggingService(os.path.join(temp_dir, "detector.log"))

            assert service.get_logger() is logging.getLogger(LOGGER_NAME)
            assert service.get_logger().level == logging.INFO
            for handler in logging.getLogger().handlers:
                handler.close()

    def test_messages_written_to_file(self, clean_root_logger):
        clean_root_logger()
        with tempfile.TemporaryDirectory() as temp_dir:
            log_file = os.path.join(temp_dir, "detector.log")
            service = LoggingService(log_file)

            service.info("[Detector] State: Created -> Ready")
            for handler in logging.getLogger().handlers:
                handler.flush()
                handler.close()

            with open(log_file, "r", encoding="utf-8") as f:
                content = f.read()
            assert "INFO | [Detector] State: Created -> Ready" in content

    def test_set_level(self, clean_root_logger):
        clean_root_logger()
        with tempfile.TemporaryDirectory() as temp_dir:
            service = LoggingService(os.path.join(temp_dir, "detector.log"))
            service.set_level(logging.DEBUG)

            assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG
            for handler in logging.getLogger().handlers:
                handler.close()

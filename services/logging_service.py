# Copyright (C) 2026 BPS
# This file is part of Screen Detector.
#
# Services Module - Logging Service

import logging
import os
import sys

LOGGER_NAME = 'ScreenDetector'


class LoggingService:
    """
    Centralized logging service

    Configures the shared 'ScreenDetector' logger with a file and a console
    handler. Every module logs through logging.getLogger('ScreenDetector').
    """

    def __init__(self, log_file: str = None, log_level: int = logging.INFO):
        """
        Initialize logging service

        Args:
            log_file: Path to log file
            log_level: Logging level (default: INFO)
        """
        if log_file is None:
            # Default log file location: next to the executable or the project root
            log_file = os.path.join(
                os.path.dirname(os.path.dirname(os.path.abspath(__file__))) if not getattr(sys, 'frozen', False)
                else os.path.dirname(sys.executable),
                'screen_detector.log'
            )

        self.log_file = log_file
        self.log_level = log_level
        self.logger = None
        self._setup_logging()

    def _setup_logging(self):
        """Setup logging with file and console handlers"""
        logging.basicConfig(
            level=self.log_level,
            format='%(asctime)s | %(levelname)s | %(message)s',
            handlers=[
                logging.FileHandler(self.log_file, encoding='utf-8'),
                logging.StreamHandler()
            ]
        )
        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(self.log_level)

    def get_logger(self):
        """Get the logger instance"""
        return self.logger

    def set_level(self, log_level: int):
        """Change the detector log level (e.g. logging.DEBUG to trace candidates)"""
        self.log_level = log_level
        if self.logger:
            self.logger.setLevel(log_level)

    def info(self, message: str):
        """Log info message"""
        if self.logger:
            self.logger.info(message)

    def warning(self, message: str):
        """Log warning message"""
        if self.logger:
            self.logger.warning(message)

    def error(self, message: str, exc_info: bool = False):
        """Log error message"""
        if self.logger:
            self.logger.error(message, exc_info=exc_info)

    def debug(self, message: str):
        """Log debug message"""
        if self.logger:
            self.logger.debug(message)

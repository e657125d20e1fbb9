# Copyright (C) 2026 BPS
# This file is part of Screen Detector.
#
# Services Module - Public Interface

from .logging_service import LoggingService

__all__ = [
    "LoggingService",
]

"""
Core Exceptions

Custom exceptions for detector lifecycle errors.

Precondition failures during a detection (no screen yet, condition bigger
than the area, area outside the screen) are NOT exceptions: they produce a
not detected result and a warning log.
"""

from vision.detection_image import ImageFormatError


class DetectorException(Exception):
    """Base exception for Detector errors"""
    pass


class DetectorStateError(DetectorException):
    """Raised when a detector operation is invalid for its current state"""
    pass


__all__ = [
    'DetectorException',
    'DetectorStateError',
    'ImageFormatError',
]

# Utils module for Screen Detector
# Image file helpers live in utils.image_io

from .validators import (
    validate_threshold,
    validate_detection_quality,
    validate_languages,
    validate_area_coords
)

__all__ = [
    'validate_threshold',
    'validate_detection_quality',
    'validate_languages',
    'validate_area_coords'
]

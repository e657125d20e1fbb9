# Config module for Screen Detector
# Detection defaults; SettingsManager lives in config.settings_manager

from .defaults import (
    DETECTION_QUALITY_DEFAULT,
    DETECTION_QUALITY_MIN,
    DETECTION_QUALITY_MAX,
    DEFAULT_THRESHOLD,
    DEFAULT_TEXT_THRESHOLD,
    DEFAULT_OCR_LANGUAGES,
    get_default_settings,
)

__all__ = [
    'DETECTION_QUALITY_DEFAULT',
    'DETECTION_QUALITY_MIN',
    'DETECTION_QUALITY_MAX',
    'DEFAULT_THRESHOLD',
    'DEFAULT_TEXT_THRESHOLD',
    'DEFAULT_OCR_LANGUAGES',
    'get_default_settings',
]

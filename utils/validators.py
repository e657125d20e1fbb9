# Copyright (C) 2026 BPS
# This file is part of Screen Detector.
#
# Validation utilities for detection areas, thresholds and qualities

import logging
import numbers

from config.defaults import (
    DETECTION_QUALITY_MAX,
    DETECTION_QUALITY_MIN,
    THRESHOLD_MAX,
    THRESHOLD_MIN,
)

logger = logging.getLogger('ScreenDetector')


def validate_threshold(threshold):
    """Validate a detection threshold (integer percentage in [0, 100])"""
    if isinstance(threshold, bool) or not isinstance(threshold, numbers.Integral):
        return False
    return THRESHOLD_MIN <= threshold <= THRESHOLD_MAX


def validate_detection_quality(quality):
    """Validate a detection quality against the supported range"""
    if isinstance(quality, bool) or not isinstance(quality, numbers.Real):
        return False
    return DETECTION_QUALITY_MIN <= quality <= DETECTION_QUALITY_MAX


def validate_languages(languages):
    """Validate a list of Tesseract language codes (e.g. ['eng', 'fra'])"""
    if not languages or not isinstance(languages, (list, tuple)):
        return False
    return all(isinstance(code, str) and code.strip() and '+' not in code for code in languages)


def validate_area_coords(coords, screen_width=None, screen_height=None):
    """Validate area coordinates dict with x, y, width, height

    Args:
        coords: Dict with 'x', 'y', 'width' and 'height' keys
        screen_width: Screen width limit (not checked if None)
        screen_height: Screen height limit (not checked if None)
    """
    if coords is None:
        return False
    if not isinstance(coords, dict):
        return False

    required_keys = ['x', 'y', 'width', 'height']
    if not all(key in coords for key in required_keys):
        logger.warning("Invalid detection area: missing x, y, width or height")
        return False

    try:
        x, y = int(coords['x']), int(coords['y'])
        w, h = int(coords['width']), int(coords['height'])
        if w <= 0 or h <= 0:
            return False
        if x < 0 or y < 0:
            return False
        if screen_width is not None and (x + w) > screen_width:
            return False
        if screen_height is not None and (y + h) > screen_height:
            return False
        return True
    except (ValueError, TypeError):
        logger.warning("Invalid detection area: values not numeric")
        return False

# Copyright (C) 2026 BPS
# This file is part of Screen Detector.
#
# Centralized settings manager
# Detection settings persisted in a JSON file, cached in memory

import os
import json
import logging
import threading

from utils.validators import (
    validate_area_coords,
    validate_detection_quality,
    validate_languages,
    validate_threshold,
)
from .defaults import (
    DEFAULT_OCR_LANGUAGES,
    DEFAULT_TEXT_THRESHOLD,
    DEFAULT_THRESHOLD,
    DETECTION_QUALITY_DEFAULT,
    get_default_settings,
)

logger = logging.getLogger("ScreenDetector")


class SettingsManager:
    """Centralized settings management for Screen Detector

    Single JSON file, loaded once and cached. Every save validates its value
    and writes the whole file back.
    """

    def __init__(self, settings_file: str):
        """Initialize settings manager

        Args:
            settings_file: Absolute path to settings JSON file
        """
        self.settings_file = settings_file
        self._data = {}  # In-memory cache
        self._lock = threading.Lock()  # Thread-safe access
        self._ensure_settings_file_exists()
        self._load_all()

    def _ensure_settings_file_exists(self):
        """Create default settings file if it doesn't exist"""
        if not os.path.exists(self.settings_file):
            logger.info("Creating default settings file...")
            try:
                with open(self.settings_file, "w", encoding="utf-8") as f:
                    json.dump(get_default_settings(), f, indent=4, ensure_ascii=False)
                logger.info(f"Default settings created at: {self.settings_file}")
            except OSError as e:
                logger.error(f"Failed to create default settings: {e}")

    def _load_all(self):
        """Load all settings from file (called at init, no lock needed)"""
        try:
            if os.path.exists(self.settings_file):
                with open(self.settings_file, "r", encoding="utf-8") as f:
                    self._data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse settings file: {e}")
            self._data = {}
        except OSError as e:
            logger.error(f"Error loading settings: {e}")
            self._data = {}

        if not isinstance(self._data, dict):
            logger.error("Settings file does not contain an object, using defaults")
            self._data = {}

    def _save_all(self):
        """Save all settings to file (assumes caller holds lock)"""
        try:
            with open(self.settings_file, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=4, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Error saving settings: {e}")

    def _load(self, key, default, validator=None):
        with self._lock:
            value = self._data.get(key, default)
        if validator is not None and value != default and not validator(value):
            logger.warning(f"Invalid {key} in settings ({value!r}), using default")
            return default
        return value

    def _save(self, key, value):
        with self._lock:
            self._data[key] = value
            self._save_all()

    # ========================================================================
    # INDIVIDUAL SETTING LOADERS / SAVERS
    # ========================================================================

    def load_detection_quality(self):
        """Load detection quality (max dimension of the processing resolution)"""
        return self._load("detection_quality", DETECTION_QUALITY_DEFAULT, validate_detection_quality)

    def save_detection_quality(self, quality):
        """Save detection quality

        Raises:
            ValueError: If quality is outside the supported range
        """
        if not validate_detection_quality(quality):
            raise ValueError(f"Invalid detection quality: {quality!r}")
        self._save("detection_quality", quality)

    def load_default_threshold(self):
        """Load default image detection threshold"""
        return self._load("default_threshold", DEFAULT_THRESHOLD, validate_threshold)

    def save_default_threshold(self, threshold):
        """Save default image detection threshold

        Raises:
            ValueError: If threshold is not an integer in [0, 100]
        """
        if not validate_threshold(threshold):
            raise ValueError(f"Invalid threshold: {threshold!r}")
        self._save("default_threshold", threshold)

    def load_text_threshold(self):
        """Load minimum OCR confidence for text detection"""
        return self._load("text_threshold", DEFAULT_TEXT_THRESHOLD, validate_threshold)

    def save_text_threshold(self, threshold):
        """Save minimum OCR confidence for text detection"""
        if not validate_threshold(threshold):
            raise ValueError(f"Invalid text threshold: {threshold!r}")
        self._save("text_threshold", threshold)

    def load_ocr_languages(self):
        """Load Tesseract language codes"""
        return list(self._load("ocr_languages", list(DEFAULT_OCR_LANGUAGES), validate_languages))

    def save_ocr_languages(self, languages):
        """Save Tesseract language codes"""
        if not validate_languages(languages):
            raise ValueError(f"Invalid OCR languages: {languages!r}")
        self._save("ocr_languages", list(languages))

    def load_tesseract_path(self):
        """Load Tesseract executable path (None = auto detect)"""
        return self._load("tesseract_path", None)

    def save_tesseract_path(self, path):
        """Save Tesseract executable path (None = auto detect)"""
        self._save("tesseract_path", path or None)

    def load_detection_area(self):
        """Load default detection area (None = whole screen)"""
        return self._load("detection_area", None, validate_area_coords)

    def save_detection_area(self, coords):
        """Save default detection area, None to search the whole screen"""
        if coords is not None and not validate_area_coords(coords):
            raise ValueError(f"Invalid detection area: {coords!r}")
        self._save("detection_area", coords)

    def get_all(self):
        """Copy of every stored setting"""
        with self._lock:
            return dict(self._data)

"""
Test suite for config/settings_manager.py
==========================================
Tests for settings loading, saving, and caching.
"""

import pytest
import json
import os
import tempfile
from config.settings_manager import SettingsManager
from config.defaults import DEFAULT_THRESHOLD, DETECTION_QUALITY_DEFAULT


class TestSettingsManagerInitialization:
    """Tests for SettingsManager initialization"""

    def test_initialization_creates_default_file(self):
        """Test that initialization creates settings file if it doesn't exist"""
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_file = os.path.join(temp_dir, "test_settings.json")

            SettingsManager(temp_file)

            # File should be created
            assert os.path.exists(temp_file)
            with open(temp_file, "r", encoding="utf-8") as f:
                assert json.load(f)["detection_quality"] == DETECTION_QUALITY_DEFAULT

    def test_corrupted_file_uses_defaults(self):
        """Test that an unreadable settings file falls back to defaults"""
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_file = os.path.join(temp_dir, "test_settings.json")
            with open(temp_file, "w", encoding="utf-8") as f:
                f.write("{not json")

            manager = SettingsManager(temp_file)

            assert manager.load_default_threshold() == DEFAULT_THRESHOLD
            assert manager.load_detection_quality() == DETECTION_QUALITY_DEFAULT


class TestDetectionSettings:
    """Tests for detection settings load/save"""

    def test_save_and_load_quality(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_file = os.path.join(temp_dir, "test_settings.json")
            manager = SettingsManager(temp_file)

            manager.save_detection_quality(800)

            # Reload from disk
            assert SettingsManager(temp_file).load_detection_quality() == 800

    def test_invalid_quality_rejected(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            manager = SettingsManager(os.path.join(temp_dir, "test_settings.json"))

            with pytest.raises(ValueError):
                manager.save_detection_quality(10000)

    def test_save_and_load_thresholds(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            manager = SettingsManager(os.path.join(temp_dir, "test_settings.json"))

            manager.save_default_threshold(90)
            manager.save_text_threshold(75)

            assert manager.load_default_threshold() == 90
            assert manager.load_text_threshold() == 75

    def test_invalid_threshold_in_file(self):
        """Test that an out of range value stored in the file is ignored"""
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_file = os.path.join(temp_dir, "test_settings.json")
            with open(temp_file, "w", encoding="utf-8") as f:
                json.dump({"default_threshold": 150}, f)

            manager = SettingsManager(temp_file)

            assert manager.load_default_threshold() == DEFAULT_THRESHOLD

    def test_ocr_languages(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            manager = SettingsManager(os.path.join(temp_dir, "test_settings.json"))

            assert manager.load_ocr_languages() == ["eng"]
            manager.save_ocr_languages(["eng", "fra"])
            assert manager.load_ocr_languages() == ["eng", "fra"]

            with pytest.raises(ValueError):
                manager.save_ocr_languages([])


class TestDetectionArea:
    """Tests for detection area load/save"""

    def test_save_and_load_area(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            manager = SettingsManager(os.path.join(temp_dir, "test_settings.json"))

            test_coords = {"x": 100, "y": 200, "width": 500, "height": 700}
            manager.save_detection_area(test_coords)

            assert manager.load_detection_area() == test_coords

    def test_default_is_whole_screen(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            manager = SettingsManager(os.path.join(temp_dir, "test_settings.json"))

            assert manager.load_detection_area() is None

    def test_clear_area(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            manager = SettingsManager(os.path.join(temp_dir, "test_settings.json"))

            manager.save_detection_area({"x": 0, "y": 0, "width": 10, "height": 10})
            manager.save_detection_area(None)

            assert manager.load_detection_area() is None


class TestTesseractPath:
    """Tests for Tesseract path load/save"""

    def test_auto_detect_by_default(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            manager = SettingsManager(os.path.join(temp_dir, "test_settings.json"))

            assert manager.load_tesseract_path() is None
            manager.save_tesseract_path("/opt/tesseract/bin/tesseract")
            assert manager.load_tesseract_path() == "/opt/tesseract/bin/tesseract"

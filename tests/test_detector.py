"""
Test suite for core/detector.py
===============================
Tests for the detector lifecycle and the detection entry points.
"""

import numpy as np
import pytest
import pytesseract
from core import Detector, DetectorState, DetectorStateError, ImageFormatError
from vision.roi import Rect
from vision.text_matcher import TextMatcher

from conftest import blocky_screen, noise_screen


@pytest.fixture
def detector():
    return Detector(text_matcher=TextMatcher(tesseract_cmd="tesseract"))


@pytest.fixture
def ready_detector(detector, screen_1000x800):
    detector.set_screen_metrics(1000, 800, quality=400)
    detector.set_screen_image(screen_1000x800)
    return detector


class TestDetectorLifecycle:
    """Tests for state transitions"""

    def test_initial_state(self, detector):
        assert detector.state is DetectorState.CREATED
        assert detector.scale_ratio is None
        assert not detector.is_text_detection_available

    def test_metrics_then_image(self, detector, screen_1000x800):
        assert detector.set_screen_metrics(1000, 800, quality=400) == 0.4
        assert detector.state is DetectorState.METRICS_SET

        detector.set_screen_image(screen_1000x800)
        assert detector.state is DetectorState.READY
        assert detector.screen_roi.scaled == Rect(0, 0, 400, 320)

    def test_image_before_metrics_raises(self, detector, screen_1000x800):
        with pytest.raises(DetectorStateError):
            detector.set_screen_image(screen_1000x800)

    def test_invalid_screen_buffer(self, detector):
        detector.set_screen_metrics(100, 100)
        with pytest.raises(ImageFormatError):
            detector.set_screen_image(np.zeros((100, 100, 3), dtype=np.uint8))
        assert detector.state is DetectorState.METRICS_SET

    def test_invalid_metrics(self, detector):
        with pytest.raises(ValueError):
            detector.set_screen_metrics(0, 800)

    def test_ratio_change_drops_screen(self, ready_detector):
        ready_detector.set_screen_metrics(1000, 800, quality=500)
        assert ready_detector.scale_ratio == 0.5
        assert ready_detector.state is DetectorState.METRICS_SET

    def test_same_metrics_keep_screen(self, ready_detector):
        ready_detector.set_screen_metrics(1000, 800, quality=400)
        assert ready_detector.state is DetectorState.READY

    def test_rotated_frame_updates_metrics(self, ready_detector):
        ready_detector.set_screen_image(noise_screen(800, 1000))
        assert ready_detector.state is DetectorState.READY
        assert ready_detector.scale_ratio == 0.4
        assert ready_detector.screen_roi.full_size == Rect(0, 0, 800, 1000)

    @pytest.mark.parametrize("width,height", [(800, 1000), (1000, 500), (400, 1000)])
    def test_new_screen_size_with_same_ratio_drops_screen(self, ready_detector, width, height):
        assert ready_detector.set_screen_metrics(width, height, quality=400) == 0.4

        assert ready_detector.state is DetectorState.METRICS_SET
        assert ready_detector.screen_roi.is_empty()

    def test_rotation_without_new_frame_detects_nothing(self, ready_detector, screen_1000x800):
        condition = screen_1000x800[300:350, 200:250].copy()
        ready_detector.set_screen_metrics(800, 1000, quality=400)

        assert not ready_detector.detect_image(condition, threshold=90).detected

        ready_detector.set_screen_image(noise_screen(800, 1000))
        assert ready_detector.state is DetectorState.READY

    def test_close(self, ready_detector):
        ready_detector.close()
        assert ready_detector.state is DetectorState.CREATED
        assert ready_detector.scale_ratio is None
        assert ready_detector.screen_roi.is_empty()


class TestDetectImage:
    """Tests for Detector.detect_image"""

    def test_detects_crop(self, ready_detector, screen_1000x800):
        condition = screen_1000x800[300:350, 200:250].copy()
        result = ready_detector.detect_image(condition, threshold=90)

        assert result.detected
        assert result.to_dict()["centerX"] == pytest.approx(225, abs=1)
        assert result.to_dict()["centerY"] == pytest.approx(325, abs=1)

    def test_detects_in_area(self, ready_detector, screen_1000x800):
        condition = screen_1000x800[300:350, 200:250].copy()
        result = ready_detector.detect_image(condition, 200, 300, 50, 50)
        assert result.detected
        assert result.center == (225, 325)

    def test_new_result_per_call(self, ready_detector, screen_1000x800):
        condition = screen_1000x800[300:350, 200:250].copy()
        first = ready_detector.detect_image(condition)
        second = ready_detector.detect_image(condition)
        assert first is not second
        assert first == second

    def test_no_screen_image(self, detector, screen_1000x800):
        detector.set_screen_metrics(1000, 800, quality=400)
        result = detector.detect_image(screen_1000x800[0:10, 0:10].copy())
        assert not result.detected

    def test_partial_area_raises(self, ready_detector, screen_1000x800):
        condition = screen_1000x800[300:350, 200:250].copy()
        with pytest.raises(ValueError):
            ready_detector.detect_image(condition, 200, 300, None, 50)

    def test_invalid_threshold_raises(self, ready_detector, screen_1000x800):
        condition = screen_1000x800[300:350, 200:250].copy()
        with pytest.raises(ValueError):
            ready_detector.detect_image(condition, threshold=-5)

    def test_invalid_condition_raises(self, ready_detector):
        with pytest.raises(ImageFormatError):
            ready_detector.detect_image(np.zeros((10, 10), dtype=np.uint8))

    def test_condition_larger_than_area(self, ready_detector, screen_1000x800):
        condition = screen_1000x800[300:350, 200:250].copy()
        assert not ready_detector.detect_image(condition, 200, 300, 20, 20).detected


class TestDetectText:
    """Tests for Detector.detect_text"""

    @pytest.fixture
    def ocr_ready(self, ready_detector, monkeypatch):
        monkeypatch.setattr(pytesseract, "get_languages", lambda config="": ["eng"])
        monkeypatch.setattr(pytesseract, "image_to_data", lambda *a, **k: {
            "level": [5], "page_num": [1], "block_num": [1], "par_num": [1],
            "line_num": [1], "word_num": [1], "left": [40], "top": [80],
            "width": [20], "height": [8], "conf": [93.0], "text": ["Play"],
        })
        assert ready_detector.set_text_languages(["eng"])
        return ready_detector

    def test_text_found(self, ocr_ready):
        result = ocr_ready.detect_text("Play")
        assert result.detected
        assert result.area.full_size == Rect(100, 200, 50, 20)
        assert result.center == (125, 210)

    def test_text_not_found(self, ocr_ready):
        assert not ocr_ready.detect_text("Stop").detected

    def test_empty_text(self, ocr_ready):
        assert not ocr_ready.detect_text("  ").detected

    def test_disabled_without_languages(self, ready_detector):
        assert not ready_detector.detect_text("Play").detected


class TestExactAreaDetection:
    """Tests for detection areas exactly matching the condition"""

    @pytest.fixture
    def half_scale_detector(self, detector):
        screen = blocky_screen(1000, 800, seed=7)
        assert detector.set_screen_metrics(1000, 800, quality=500) == 0.5
        detector.set_screen_image(screen)
        return detector, screen

    @pytest.mark.parametrize("x,y,width,height", [
        (3, 3, 51, 51),
        (201, 301, 51, 51),
        (200, 300, 50, 50),
        (7, 11, 33, 45),
        (949, 749, 51, 51),
    ])
    def test_crop_found_at_its_own_area(self, half_scale_detector, x, y, width, height):
        detector, screen = half_scale_detector
        condition = screen[y:y + height, x:x + width].copy()

        result = detector.detect_image(condition, x, y, width, height, threshold=0)

        assert result.detected
        assert result.area.full_size == Rect(x, y, width, height)

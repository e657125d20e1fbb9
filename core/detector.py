"""
Detector - Core Detection Orchestrator

The Detector owns the current screen snapshot and the scale ratio, and
exposes the two detection operations (image condition, text condition)
to calling code.

Responsibilities:
    - Compute the scale ratio when the screen metrics change
    - Load each captured frame (grayscale, scaled and OCR buffers)
    - Validate detection requests and delegate them to the matchers

What it does NOT do:
    - Screen capture (frames are pushed by the caller)
    - Correlation or OCR (delegated to TemplateMatcher / TextMatcher)

Threading:
    Not reentrant. One Detector is driven by one polling loop:
    set_screen_metrics() once per resolution change, set_screen_image()
    once per frame, then any number of detect_*() calls on that frame.

Usage:
    detector = Detector()
    detector.set_screen_metrics(1080, 2400, quality=1200)
    detector.set_screen_image(frame)
    result = detector.detect_image(condition, threshold=96)
    if result.detected:
        click(*result.center)
"""

import logging
from typing import Optional, Sequence

import numpy as np

from config.defaults import (
    DEFAULT_TEXT_THRESHOLD,
    DEFAULT_THRESHOLD,
    DETECTION_QUALITY_DEFAULT,
)
from core.exceptions import DetectorStateError
from core.state import DetectorState
from vision.detection_image import ConditionImage, ScreenImage, validate_rgba_buffer
from vision.results import DetectionResult
from vision.roi import ScalableRoi
from vision.scaling import ScaleRatioManager
from vision.template_matcher import TemplateMatcher, check_threshold
from vision.text_matcher import TextMatcher


class Detector:
    """
    Screen region detection engine.

    The detector owns:
        - Scale ratio for the current screen metrics
        - Current screen image (full size, scaled, grayscale)
        - Matchers for image and text conditions
    """

    def __init__(
        self,
        languages: Optional[Sequence[str]] = None,
        text_matcher: Optional[TextMatcher] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the Detector.

        Args:
            languages: OCR languages to initialize, text detection stays
                disabled until set_text_languages() succeeds when None
            text_matcher: TextMatcher to use, a default one is created when None
            logger: Optional logger for detector events
        """
        self._logger = logger or logging.getLogger("ScreenDetector")

        self._scaling = ScaleRatioManager()
        self._quality = DETECTION_QUALITY_DEFAULT
        self._screen = ScreenImage()
        self._template_matcher = TemplateMatcher()
        self._text_matcher = text_matcher or TextMatcher()
        self._state = DetectorState.CREATED

        if languages:
            self.set_text_languages(languages)

    # ========== PROPERTIES ==========

    @property
    def state(self) -> DetectorState:
        return self._state

    @property
    def scale_ratio(self) -> Optional[float]:
        return self._scaling.ratio

    @property
    def screen_roi(self) -> ScalableRoi:
        """Bounds of the current screen image in both coordinate spaces"""
        return self._screen.roi

    @property
    def is_text_detection_available(self) -> bool:
        return self._text_matcher.is_available

    # ========== SCREEN ==========

    def set_screen_metrics(self, width: int, height: int, quality: float = DETECTION_QUALITY_DEFAULT) -> float:
        """
        Set the screen size and the detection quality.

        Must be called before the first screen image and whenever the screen
        size changes (e.g. rotation). The current screen image is dropped
        when the screen size or the ratio changes.

        Args:
            width: Screen width in pixels
            height: Screen height in pixels
            quality: Maximum dimension of the processing resolution

        Returns:
            The scale ratio used for processing

        Raises:
            ValueError: If a metric is not strictly positive
        """
        previous_metrics = self._scaling.metrics
        previous_ratio = self._scaling.ratio
        ratio = self._scaling.update(width, height, quality)
        self._quality = quality

        # A rotation can keep the ratio, the frame is stale all the same
        size_changed = previous_metrics is None or previous_metrics[:2] != (width, height)
        if size_changed or previous_ratio != ratio or not self._state.has_metrics:
            self._screen.release()
            self._text_matcher.release()
            self._set_state(DetectorState.METRICS_SET)

        return ratio

    def set_screen_image(self, screen_buffer: np.ndarray) -> None:
        """
        Replace the current screen snapshot.

        Recomputes the grayscale, scaled and OCR buffers. A frame with another
        size than the metrics (a rotation the caller didn't report) updates
        the metrics from the frame.

        Args:
            screen_buffer: RGBA buffer, shape (H, W, 4), uint8

        Raises:
            DetectorStateError: If set_screen_metrics() has never been called
            ImageFormatError: If the buffer is not a valid RGBA image
        """
        if not self._state.has_metrics:
            raise DetectorStateError("Can't set screen image, screen metrics are not initialized")

        validate_rgba_buffer(screen_buffer)

        height, width = screen_buffer.shape[:2]
        expected_width, expected_height, _ = self._scaling.metrics
        if (width, height) != (expected_width, expected_height):
            self._logger.warning(
                f"[Detector] Screen image is {width}x{height}, metrics are "
                f"{expected_width}x{expected_height}, updating metrics"
            )
            self._scaling.update(width, height, self._quality)

        self._screen.load(screen_buffer, self._scaling.ratio)
        self._text_matcher.load_image(self._screen.image.scaled_gray)
        self._set_state(DetectorState.READY)

    def set_text_languages(self, languages: Sequence[str]) -> bool:
        """
        Initialize the OCR languages for text detection.

        Returns:
            True if text detection is enabled, False if it has been disabled
        """
        return self._text_matcher.set_languages(languages)

    # ========== DETECTION ==========

    def detect_image(
        self,
        condition_buffer: np.ndarray,
        x: Optional[int] = None,
        y: Optional[int] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
        threshold: int = DEFAULT_THRESHOLD,
    ) -> DetectionResult:
        """
        Detect a condition image on the current screen.

        Args:
            condition_buffer: RGBA buffer of the condition
            x, y, width, height: Full size detection area, whole screen when omitted
            threshold: Strictness in [0, 100], higher is stricter

        Returns:
            A new DetectionResult

        Raises:
            ValueError: If the threshold or the area arguments are invalid
            ImageFormatError: If the condition is not a valid RGBA image
        """
        check_threshold(threshold)
        if not self._state.can_detect:
            self._logger.warning(f"[Detector] Can't detect image, no screen image set (state: {self._state})")
            return DetectionResult()

        condition = ConditionImage()
        condition.load(condition_buffer, self._scaling.ratio)

        detection_area = self._detection_area(x, y, width, height)
        result = self._template_matcher.match_template(self._screen, condition, detection_area, threshold)
        self._logger.debug(f"[Detector] Image detection: {result!r}")
        return result

    def detect_text(
        self,
        text: str,
        x: Optional[int] = None,
        y: Optional[int] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
        threshold: int = DEFAULT_TEXT_THRESHOLD,
    ) -> DetectionResult:
        """
        Detect a word on the current screen with OCR.

        Args:
            text: Exact word to find
            x, y, width, height: Full size detection area, whole screen when omitted
            threshold: Minimum OCR confidence (0-100)

        Returns:
            A new DetectionResult, never detected when text detection is disabled

        Raises:
            ValueError: If the threshold or the area arguments are invalid
        """
        check_threshold(threshold)
        if not self._state.can_detect:
            self._logger.warning(f"[Detector] Can't detect text, no screen image set (state: {self._state})")
            return DetectionResult()

        if not text or not text.strip():
            self._logger.warning("[Detector] Can't detect an empty text")
            return DetectionResult()

        detection_area = self._detection_area(x, y, width, height)
        result = self._text_matcher.match_text(text.strip(), detection_area, threshold)
        self._logger.debug(f"[Detector] Text detection '{text}': {result!r}")
        return result

    # ========== LIFECYCLE ==========

    def close(self) -> None:
        """Release the screen buffers, metrics must be set again before detecting."""
        self._screen.release()
        self._text_matcher.release()
        self._scaling.reset()
        self._set_state(DetectorState.CREATED)

    # ========== INTERNALS ==========

    def _detection_area(self, x, y, width, height) -> ScalableRoi:
        area = (x, y, width, height)
        if all(value is None for value in area):
            return self._screen.roi
        if any(value is None for value in area):
            raise ValueError(f"Detection area must be fully defined, got {area}")
        return ScalableRoi.from_full_size(area, self._scaling.ratio, bounds=self._screen.roi)

    def _set_state(self, new_state: DetectorState) -> None:
        if new_state is not self._state:
            self._logger.debug(f"[Detector] State: {self._state} -> {new_state}")
            self._state = new_state

"""
Vision Module - Screen Detector
===============================
Image and text detection primitives.

This module holds everything that touches pixels: the dual resolution
coordinate model, the image buffers, the scale ratio selection, template
and OCR matching, and screen capture.

Modules:
    - roi: Rect and ScalableRoi (full size + scaled rectangles)
    - detection_image: Screen and condition image buffers
    - scaling: Scale ratio selection from the detection quality
    - template_matcher: Correlation matching with color confirmation
    - text_matcher: Tesseract word matching
    - results: DetectionResult
    - screen_capture: RGBA frame capture with mss

Usage:
    from vision import ScreenCapture

    capture = ScreenCapture()
    frame = capture.grab_rgba()
"""

from .roi import Rect, ScalableRoi
from .detection_image import ConditionImage, DetectionImage, ImageFormatError, ScreenImage
from .scaling import ScaleRatioManager, compute_ratio
from .results import DetectionResult
from .template_matcher import TemplateMatcher
from .text_matcher import TextMatcher
from .screen_capture import ScreenCapture

__all__ = [
    'Rect',
    'ScalableRoi',
    'DetectionImage',
    'ScreenImage',
    'ConditionImage',
    'ImageFormatError',
    'ScaleRatioManager',
    'compute_ratio',
    'DetectionResult',
    'TemplateMatcher',
    'TextMatcher',
    'ScreenCapture',
]

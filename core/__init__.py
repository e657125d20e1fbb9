"""
Core Module - Detection Orchestration

This module provides the detection engine used by calling code. It owns the
current screen, the scale ratio and the detection state WITHOUT any:
- Screen capture logic
- Correlation / OCR logic (delegated to vision)
- Click or input logic

Components:
    - detector: Detector (main orchestrator)
    - conditions_verifier: AND / OR evaluation of image and text conditions
    - state: DetectorState enum
    - exceptions: Custom exceptions for detector lifecycle errors

Usage:
    from core import Detector

    detector = Detector(languages=["eng"])
    detector.set_screen_metrics(width, height, quality=1200)
    detector.set_screen_image(frame)
    result = detector.detect_image(condition, threshold=96)

Design Principles:
    - Single thread, call and return
    - Precondition failures return a not detected result, never raise
    - Fresh result per detection call
"""

from core.state import DetectorState
from core.exceptions import DetectorException, DetectorStateError, ImageFormatError
from core.detector import Detector
from core.conditions_verifier import (
    ConditionOperator,
    ConditionsResults,
    ConditionsVerifier,
    DetectionType,
    ImageCondition,
    TextCondition,
)

__all__ = [
    'Detector',
    'DetectorState',
    'DetectorException',
    'DetectorStateError',
    'ImageFormatError',
    'ConditionsVerifier',
    'ConditionsResults',
    'ConditionOperator',
    'DetectionType',
    'ImageCondition',
    'TextCondition',
]

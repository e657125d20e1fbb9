"""
Conditions Verifier

Evaluates a list of image and text conditions against the current frame of
a Detector, combined with an AND / OR operator.

Evaluation short-circuits: OR stops at the first fulfilled condition, AND at
the first unfulfilled one. A condition is fulfilled when its detection state
matches what it expects (should_be_detected).
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from config.defaults import DEFAULT_TEXT_THRESHOLD, DEFAULT_THRESHOLD
from vision.results import DetectionResult


class ConditionOperator(Enum):
    """How the conditions of a list are combined"""

    AND = auto()
    OR = auto()


class DetectionType(Enum):
    """Where an image condition is searched"""

    EXACT = auto()         # At the position the condition was captured from
    WHOLE_SCREEN = auto()  # Anywhere on the screen
    IN_AREA = auto()       # Inside a custom detection area


@dataclass
class ImageCondition:
    """
    An image to find on the screen.

    area is the full size rectangle (x, y, width, height) the image was
    captured from. detection_area is only used with DetectionType.IN_AREA.
    """

    name: str
    image: np.ndarray
    area: Tuple[int, int, int, int]
    threshold: int = DEFAULT_THRESHOLD
    detection_type: DetectionType = DetectionType.EXACT
    detection_area: Optional[Tuple[int, int, int, int]] = None
    should_be_detected: bool = True

    def get_detection_area(self):
        """Full size area to search in, None for the whole screen."""
        if self.detection_type is DetectionType.WHOLE_SCREEN:
            return None
        if self.detection_type is DetectionType.IN_AREA:
            return self.detection_area or self.area
        return self.area


@dataclass
class TextCondition:
    """A word to find on the screen with OCR, whole screen when detection_area is None."""

    name: str
    text: str
    detection_area: Optional[Tuple[int, int, int, int]] = None
    threshold: int = DEFAULT_TEXT_THRESHOLD
    should_be_detected: bool = True

    def get_detection_area(self):
        return self.detection_area


Condition = Union[ImageCondition, TextCondition]


@dataclass
class ConditionResult:
    """Outcome of one verified condition"""

    condition: Condition
    fulfilled: bool
    detected: bool
    confidence: float = 0.0
    position: Optional[Tuple[int, int]] = None


@dataclass
class ConditionsResults:
    """Outcome of a verify_conditions() call, results keyed by condition name"""

    fulfilled: bool = False
    results: Dict[str, ConditionResult] = field(default_factory=dict)

    def get(self, name) -> Optional[ConditionResult]:
        return self.results.get(name)

    def detected_positions(self) -> List[Tuple[int, int]]:
        return [result.position for result in self.results.values() if result.detected]


class ConditionsVerifier:
    """Verifies conditions on the frame currently loaded in a Detector."""

    def __init__(self, detector):
        self._detector = detector

    def verify_conditions(self, operator: ConditionOperator, conditions: Sequence[Condition]) -> ConditionsResults:
        """
        Verify a list of conditions.

        Args:
            operator: ConditionOperator.AND or ConditionOperator.OR
            conditions: Conditions to verify, in order

        Returns:
            ConditionsResults with the verdict of the operator. Conditions after
            the short-circuit point are not verified and have no result.
        """
        verification = ConditionsResults()

        for condition in conditions:
            result = self.verify_condition(condition)
            verification.results[condition.name] = result

            if operator is ConditionOperator.OR and result.fulfilled:
                verification.fulfilled = True
                return verification
            if operator is ConditionOperator.AND and not result.fulfilled:
                verification.fulfilled = False
                return verification

        verification.fulfilled = operator is ConditionOperator.AND
        return verification

    def verify_condition(self, condition: Condition) -> ConditionResult:
        """Run the detection for a single condition."""
        area = condition.get_detection_area()
        area_args = tuple(area) if area is not None else (None, None, None, None)

        if isinstance(condition, ImageCondition):
            detection = self._detector.detect_image(condition.image, *area_args, threshold=condition.threshold)
        elif isinstance(condition, TextCondition):
            detection = self._detector.detect_text(condition.text, *area_args, threshold=condition.threshold)
        else:
            raise TypeError(f"Unsupported condition type: {type(condition).__name__}")

        return self._to_condition_result(condition, detection)

    @staticmethod
    def _to_condition_result(condition: Condition, detection: DetectionResult) -> ConditionResult:
        return ConditionResult(
            condition=condition,
            fulfilled=detection.detected == condition.should_be_detected,
            detected=detection.detected,
            confidence=detection.confidence,
            position=detection.center if detection.detected else None,
        )

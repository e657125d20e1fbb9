"""
Detection Results - Screen Detector
===================================
Outcome of a single image or text detection call.
"""

from .roi import ScalableRoi


class DetectionResult:
    """
    Result of one detection call.

    A new instance is created zeroed at the start of every detection and
    filled while the search runs; callers only get it once the search is over.

    Attributes:
        detected (bool): True if the condition has been found
        confidence (float): Correlation score (or OCR confidence) of the last examined candidate
        area (ScalableRoi): Matched area, None when nothing has been found
        center (tuple): (x, y) full size center of the match, (0, 0) when not detected
    """

    __slots__ = ("detected", "confidence", "area", "center")

    def __init__(self, detected=False, confidence=0.0, area=None, center=(0, 0)):
        self.detected = detected
        self.confidence = confidence
        self.area = area
        self.center = center

    @classmethod
    def not_detected(cls, confidence=0.0):
        return cls(detected=False, confidence=confidence)

    @property
    def center_x(self):
        return self.center[0]

    @property
    def center_y(self):
        return self.center[1]

    def set_match(self, full_size_rect, scaled_rect, scale_ratio):
        """Record the matched area in both coordinate spaces and derive its center."""
        self.area = ScalableRoi(full_size_rect, scaled_rect, scale_ratio)
        self.center = self.area.full_size.center

    def clear_match(self):
        self.area = None
        self.center = (0, 0)

    def to_dict(self):
        """Result as exposed to callers: detection flag, full size center and confidence."""
        return {
            "detected": self.detected,
            "centerX": self.center[0],
            "centerY": self.center[1],
            "confidence": self.confidence,
        }

    def __eq__(self, other):
        if not isinstance(other, DetectionResult):
            return NotImplemented
        return (
            self.detected == other.detected
            and self.confidence == other.confidence
            and self.area == other.area
            and self.center == other.center
        )

    def __repr__(self):
        return (
            f"DetectionResult(detected={self.detected}, confidence={self.confidence:.4f}, "
            f"center={self.center}, area={self.area!r})"
        )

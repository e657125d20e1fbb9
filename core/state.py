"""
Detector State Definitions

Defines the lifecycle states of a Detector.
"""

from enum import Enum, auto


class DetectorState(Enum):
    """Detector lifecycle states"""

    CREATED = auto()      # No screen metrics, nothing can be detected
    METRICS_SET = auto()  # Scale ratio known, waiting for a first screen image
    READY = auto()        # Screen image loaded, detections allowed

    def __str__(self):
        return self.name.title()

    @property
    def has_metrics(self):
        """Returns True if the scale ratio is known"""
        return self in (DetectorState.METRICS_SET, DetectorState.READY)

    @property
    def can_detect(self):
        """Returns True if a screen image is available for detection"""
        return self is DetectorState.READY

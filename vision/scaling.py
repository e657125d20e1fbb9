"""
Scale Ratio Manager - Screen Detector
=====================================
Selects the processing resolution for a screen size.

Detection cost grows with the pixel count, so every frame is downscaled
until its biggest dimension fits the detection quality. The aspect ratio
is preserved and the ratio is only recomputed when the screen size changes
(e.g. after a rotation).
"""

import logging

logger = logging.getLogger("ScreenDetector")


def compute_ratio(width, height, quality_target):
    """
    Compute the downscale ratio for a screen.

    Args:
        width (int): Screen width in pixels
        height (int): Screen height in pixels
        quality_target (float): Maximum dimension of the processing resolution

    Returns:
        float: 1.0 if the screen already fits, quality_target / max(width, height) otherwise

    Raises:
        ValueError: If any argument is not strictly positive
    """
    if width <= 0 or height <= 0 or quality_target <= 0:
        raise ValueError(
            f"Invalid screen metrics: {width}x{height}, quality {quality_target}"
        )

    biggest = max(width, height)
    if biggest <= quality_target:
        return 1.0
    return quality_target / biggest


class ScaleRatioManager:
    """
    Keeps the scale ratio of the current screen metrics.

    The ratio is only recomputed when the width, height or quality change.
    """

    def __init__(self):
        self._metrics = None
        self._ratio = None

    @property
    def ratio(self):
        """Current ratio, None until update() has been called."""
        return self._ratio

    @property
    def metrics(self):
        """Last (width, height, quality) used to compute the ratio."""
        return self._metrics

    def update(self, width, height, quality_target):
        """
        Set the screen metrics and return the matching ratio.

        Args:
            width (int): Screen width
            height (int): Screen height
            quality_target (float): Detection quality

        Returns:
            float: The scale ratio for these metrics
        """
        metrics = (width, height, quality_target)
        if metrics == self._metrics and self._ratio is not None:
            return self._ratio

        self._ratio = compute_ratio(width, height, quality_target)
        self._metrics = metrics
        logger.info(
            f"[Scaling] Screen {width}x{height} at quality {quality_target} -> ratio {self._ratio:.4f}"
        )
        return self._ratio

    def reset(self):
        self._metrics = None
        self._ratio = None

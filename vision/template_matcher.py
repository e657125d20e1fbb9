"""
Template Matcher - Screen Detector
==================================
Finds a condition image inside a region of the screen.

Matching runs in two stages:
    1. Shape: normalized cross-correlation (TM_CCOEFF_NORMED) between the
       scaled grayscale screen region and the scaled grayscale condition.
    2. Color: the mean color of the best candidate at full size must be
       close to the mean color of the condition.

Correlation alone is fooled by elements with the same shape but another
color, so candidates failing the color check are invalidated in the
correlation map and the next best one is examined, until one is accepted
or the best remaining score falls below the confidence floor.

Threshold:
    An integer percentage in [0, 100], higher is stricter. With
    tolerance = 100 - threshold, a candidate needs a correlation above
    (100 - tolerance) / 100 and a color difference below tolerance.
"""

import logging

import cv2
import numpy as np

from utils.validators import validate_threshold
from .detection_image import color_difference, mean_color
from .results import DetectionResult
from .roi import Rect

logger = logging.getLogger("ScreenDetector")


def check_threshold(threshold):
    """
    Validate a detection threshold.

    Raises:
        ValueError: If threshold is not an integer in [0, 100]
    """
    if not validate_threshold(threshold):
        raise ValueError(f"Threshold must be an integer in [0, 100], got {threshold!r}")


def tolerance_for(threshold):
    """Color difference tolerance (0-100) allowed by a threshold."""
    return 100 - threshold


def is_above_confidence_floor(confidence, threshold):
    """True if a correlation score passes the shape check for this threshold."""
    return confidence > (100 - tolerance_for(threshold)) / 100


def is_color_matching(color_diff, threshold):
    """True if a color difference passes the color check for this threshold."""
    return color_diff < tolerance_for(threshold)


def correlate(image, template):
    """
    Normalized cross-correlation map of a template over an image.

    Args:
        image (numpy.ndarray): Grayscale image, at least as big as template
        template (numpy.ndarray): Grayscale template

    Returns:
        numpy.ndarray: float32 map of shape (H_i - H_t + 1, W_i - W_t + 1),
            values in [-1, 1]. Cells OpenCV can't compute are set to 0.
    """
    matching_results = cv2.matchTemplate(image, template, cv2.TM_CCOEFF_NORMED)
    np.nan_to_num(matching_results, copy=False, nan=0.0, posinf=0.0, neginf=0.0)
    return matching_results


def invalidate_candidate(matching_results, location, width, height):
    """Zero a candidate's rectangle in the correlation map so it can't be selected again."""
    x, y = location
    matching_results[y:y + height, x:x + width] = 0


class TemplateMatcher:
    """
    Correlation based image detection with color confirmation.

    Stateless: every call works on its own correlation map.
    """

    def match_template(self, screen, condition, detection_area, threshold):
        """
        Search the condition in a region of the screen.

        Args:
            screen (ScreenImage): Current screen, loaded
            condition (ConditionImage): Condition, loaded with the same scale ratio
            detection_area (ScalableRoi): Region of the screen to search in
            threshold (int): Strictness in [0, 100]

        Returns:
            DetectionResult: The accepted candidate, or a not detected result
                carrying the confidence of the last examined candidate.

        Raises:
            ValueError: If threshold is not an integer in [0, 100]
        """
        check_threshold(threshold)
        result = DetectionResult()

        if not screen.roi.contains_or_equals(detection_area):
            logger.warning(
                f"[TemplateMatcher] Detection area {detection_area!r} is outside the screen {screen.roi!r}"
            )
            return result

        if not detection_area.is_bigger_or_equals(condition.roi):
            logger.warning(
                f"[TemplateMatcher] Detection area {detection_area!r} is smaller than the condition {condition.roi!r}"
            )
            return result

        cropped_screen = screen.crop_scaled_gray(detection_area.scaled)
        condition_gray = condition.scaled_gray
        if (cropped_screen.shape[0] < condition_gray.shape[0]
                or cropped_screen.shape[1] < condition_gray.shape[1]):
            logger.warning("[TemplateMatcher] Cropped screen is smaller than the condition")
            return result

        matching_results = correlate(cropped_screen, condition_gray)
        self._search_candidates(screen, condition, detection_area, threshold, matching_results, result)
        return result

    def _search_candidates(self, screen, condition, detection_area, threshold, matching_results, result):
        """Examine candidates by decreasing correlation until one is accepted or none is left."""
        scale_ratio = detection_area.scale_ratio
        condition_full = condition.roi.full_size
        condition_scaled = condition.roi.scaled
        condition_colors = condition.mean_color

        while not result.detected:
            _, max_val, _, max_loc = cv2.minMaxLoc(matching_results)
            result.confidence = float(max_val)

            # Best remaining score too low, nothing else can match
            if not is_above_confidence_floor(max_val, threshold):
                result.clear_match()
                break

            scaled_roi = Rect(
                detection_area.scaled.x + max_loc[0],
                detection_area.scaled.y + max_loc[1],
                condition_scaled.width,
                condition_scaled.height,
            )
            full_size_roi = Rect(
                detection_area.full_size.x + int(round(max_loc[0] / scale_ratio)),
                detection_area.full_size.y + int(round(max_loc[1] / scale_ratio)),
                condition_full.width,
                condition_full.height,
            )

            if (not screen.roi.scaled.contains(scaled_roi)
                    or not screen.roi.full_size.contains(full_size_roi)):
                logger.debug(f"[TemplateMatcher] Candidate {tuple(full_size_roi)} out of screen bounds")
                invalidate_candidate(matching_results, max_loc, condition_scaled.width, condition_scaled.height)
                continue

            candidate_colors = mean_color(screen.crop_full_size_color(full_size_roi))
            color_diff = color_difference(candidate_colors, condition_colors)
            if is_color_matching(color_diff, threshold):
                result.detected = True
                result.set_match(full_size_roi, scaled_roi, scale_ratio)
            else:
                logger.debug(
                    f"[TemplateMatcher] Candidate {tuple(full_size_roi)} rejected, "
                    f"confidence {max_val:.3f}, color diff {color_diff:.2f}"
                )
                invalidate_candidate(matching_results, max_loc, condition_scaled.width, condition_scaled.height)

        return result

"""
Text Matcher - Screen Detector
==============================
Tesseract OCR word matching for text conditions.

The scaled grayscale screen is binarized once per frame (Otsu threshold),
then each text detection crops it to the detection area, runs Tesseract
and looks for the first word equal to the searched text with a high
enough confidence.

Fail-safe: when Tesseract or one of the requested languages is missing,
text matching is disabled for the instance and every call returns a not
detected result instead of raising.
"""

import logging
import os
import shutil

import cv2
import pytesseract

from config.defaults import DEFAULT_OCR_LANGUAGES, TESSERACT_PATHS
from .results import DetectionResult
from .roi import Rect
from .template_matcher import check_threshold

logger = logging.getLogger("ScreenDetector")

# Tesseract image_to_data level for a single word
WORD_LEVEL = 5


def find_tesseract(tesseract_cmd=None):
    """
    Resolve the Tesseract executable.

    Args:
        tesseract_cmd (str): Explicit command or path, used as is when given

    Returns:
        str: Path or command name, None if Tesseract can't be found
    """
    if tesseract_cmd:
        return tesseract_cmd
    for path in TESSERACT_PATHS:
        if os.path.exists(path):
            return path
    return shutil.which("tesseract")


def binarize(gray_image):
    """Black and white version of a grayscale image using Otsu's threshold."""
    _, binary = cv2.threshold(gray_image, 0, 255, cv2.THRESH_BINARY | cv2.THRESH_OTSU)
    return binary


def iter_words(ocr_data):
    """
    Yield recognized words in reading order.

    Args:
        ocr_data (dict): pytesseract.image_to_data output (Output.DICT)

    Yields:
        tuple: (text, confidence, Rect) for each non empty word
    """
    indexes = [
        i for i, level in enumerate(ocr_data["level"])
        if int(level) == WORD_LEVEL and str(ocr_data["text"][i]).strip()
    ]
    indexes.sort(key=lambda i: (
        int(ocr_data["page_num"][i]),
        int(ocr_data["block_num"][i]),
        int(ocr_data["par_num"][i]),
        int(ocr_data["line_num"][i]),
        int(ocr_data["word_num"][i]),
    ))

    for i in indexes:
        yield (
            str(ocr_data["text"][i]).strip(),
            float(ocr_data["conf"][i]),
            Rect(
                int(ocr_data["left"][i]),
                int(ocr_data["top"][i]),
                int(ocr_data["width"][i]),
                int(ocr_data["height"][i]),
            ),
        )


class TextMatcher:
    """
    OCR text detection on the current screen.

    Not reentrant: one OCR image is kept per frame.
    """

    def __init__(self, tesseract_cmd=None, psm_mode=3):
        """
        Args:
            tesseract_cmd (str): Tesseract executable, auto detected when None
            psm_mode (int): Tesseract page segmentation mode (3=auto, 11=sparse text)
        """
        self.psm_mode = psm_mode
        self.tesseract_cmd = find_tesseract(tesseract_cmd)
        self.languages = []
        self._enabled = False
        self._ocr_image = None

        if self.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self.tesseract_cmd
            logger.info(f"[OCR] Tesseract: {self.tesseract_cmd}")
        else:
            logger.error("[OCR] Tesseract not found, text detection disabled")

    @property
    def is_available(self):
        """True once languages have been successfully initialized."""
        return self._enabled

    def set_languages(self, languages=None):
        """
        Initialize the OCR languages.

        Any failure disables text matching until a later call succeeds.

        Args:
            languages (list): Tesseract language codes (default: DEFAULT_OCR_LANGUAGES)

        Returns:
            bool: True if text matching is enabled
        """
        languages = list(languages or DEFAULT_OCR_LANGUAGES)
        self._enabled = False
        self.languages = []

        if not self.tesseract_cmd:
            logger.error("[OCR] Can't set languages, Tesseract is not available")
            return False

        try:
            installed = set(pytesseract.get_languages(config=""))
        except (pytesseract.TesseractNotFoundError, pytesseract.TesseractError, OSError) as e:
            logger.error(f"[OCR] Can't list Tesseract languages: {e}")
            return False

        missing = [language for language in languages if language not in installed]
        if missing:
            logger.error(f"[OCR] Languages not installed: {', '.join(missing)}")
            return False

        self.languages = languages
        self._enabled = True
        logger.info(f"[OCR] Languages set: {'+'.join(languages)}")
        return True

    def load_image(self, scaled_gray):
        """Binarize the scaled grayscale screen for the next text detections."""
        self._ocr_image = binarize(scaled_gray) if scaled_gray is not None else None

    def release(self):
        self._ocr_image = None

    def match_text(self, text, detection_area, threshold):
        """
        Search a word on the last loaded image.

        Args:
            text (str): Exact word to find
            detection_area (ScalableRoi): Region of the screen to search in
            threshold (int): Minimum OCR confidence (0-100)

        Returns:
            DetectionResult: First matching word in reading order, or not detected
        """
        check_threshold(threshold)
        result = DetectionResult()

        if not self._enabled:
            logger.debug("[OCR] Text detection disabled, languages not initialized")
            return result

        if self._ocr_image is None:
            logger.warning("[OCR] No image loaded for text detection")
            return result

        height, width = self._ocr_image.shape[:2]
        scaled_area = detection_area.scaled
        if not Rect(0, 0, width, height).contains(scaled_area):
            logger.warning(f"[OCR] Detection area {detection_area!r} is outside the screen")
            return result

        cropped = self._ocr_image[scaled_area.y:scaled_area.bottom, scaled_area.x:scaled_area.right]

        try:
            ocr_data = pytesseract.image_to_data(
                cropped,
                lang="+".join(self.languages),
                config=f"--psm {self.psm_mode}",
                output_type=pytesseract.Output.DICT,
            )
        except (pytesseract.TesseractNotFoundError, pytesseract.TesseractError, OSError) as e:
            logger.warning(f"[OCR] Recognition failed: {e}")
            return result

        scale_ratio = detection_area.scale_ratio
        for word, confidence, box in iter_words(ocr_data):
            if word != text:
                continue

            result.confidence = confidence
            if confidence < threshold:
                logger.debug(f"[OCR] '{word}' found with confidence {confidence:.1f} < {threshold}")
                continue

            scaled_rect = Rect(scaled_area.x + box.x, scaled_area.y + box.y, box.width, box.height)
            full_size_rect = Rect(
                detection_area.full_size.x + int(round(box.x / scale_ratio)),
                detection_area.full_size.y + int(round(box.y / scale_ratio)),
                int(round(box.width / scale_ratio)),
                int(round(box.height / scale_ratio)),
            )
            result.detected = True
            result.set_match(full_size_rect, scaled_rect, scale_ratio)
            break

        return result

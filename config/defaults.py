# Copyright (C) 2026 BPS
# This file is part of Screen Detector.
#
# Default detection values and Tesseract locations

import os

# Detection quality: maximum dimension of the processing resolution
DETECTION_QUALITY_DEFAULT = 1200
DETECTION_QUALITY_MIN = 400
DETECTION_QUALITY_MAX = 3216

# Image detection strictness in [0, 100], higher is stricter.
# 96 keeps a 4% tolerance on both correlation and color difference.
DEFAULT_THRESHOLD = 96
THRESHOLD_MIN = 0
THRESHOLD_MAX = 100

# Minimum Tesseract word confidence (0-100) for text detection
DEFAULT_TEXT_THRESHOLD = 60

DEFAULT_OCR_LANGUAGES = ["eng"]

# Tesseract paths to check (in priority order), PATH is used as a last resort
TESSERACT_PATHS = [
    r"C:\Program Files\Tesseract-OCR\tesseract.exe",
    r"C:\Program Files (x86)\Tesseract-OCR\tesseract.exe",
    "/usr/bin/tesseract",
    "/usr/local/bin/tesseract",
    "/opt/homebrew/bin/tesseract",
    # Relative to the project (portable mode)
    os.path.join(
        os.path.dirname(os.path.abspath(__file__)), "..", "tesseract", "tesseract.exe"
    ),
]

DEFAULT_SETTINGS = {
    "detection_quality": DETECTION_QUALITY_DEFAULT,
    "default_threshold": DEFAULT_THRESHOLD,
    "text_threshold": DEFAULT_TEXT_THRESHOLD,
    "ocr_languages": list(DEFAULT_OCR_LANGUAGES),
    "tesseract_path": None,
    "detection_area": None,
}


def get_default_settings():
    """Fresh copy of the default settings (safe to mutate)"""
    settings = dict(DEFAULT_SETTINGS)
    settings["ocr_languages"] = list(DEFAULT_OCR_LANGUAGES)
    return settings

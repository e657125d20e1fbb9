# Copyright (C) 2026 BPS
# This file is part of Screen Detector.
#
# Image file helpers: load conditions/screenshots as RGBA buffers

import logging

import numpy as np
from PIL import Image

from vision.detection_image import ImageFormatError

logger = logging.getLogger('ScreenDetector')


def load_rgba(path):
    """Load an image file (PNG, JPEG, ...) as an RGBA buffer

    Args:
        path: Path to the image file

    Returns:
        numpy.ndarray: (H, W, 4) uint8 RGBA buffer

    Raises:
        ImageFormatError: If the file can't be read as an image
    """
    try:
        with Image.open(path) as img:
            return np.array(img.convert("RGBA"), dtype=np.uint8)
    except (OSError, ValueError) as e:
        logger.error(f"Can't load image {path}: {e}")
        raise ImageFormatError(f"Can't load image {path}: {e}") from e


def save_rgba(buffer, path):
    """Save an RGBA buffer to an image file (format from the extension)"""
    Image.fromarray(np.asarray(buffer, dtype=np.uint8)).save(path)

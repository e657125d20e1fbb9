"""
Detection Image - Screen Detector
=================================
Color buffers and the derived buffers the matching runs on.

A DetectionImage holds an RGBA buffer, its grayscale version and both of
them downscaled to the processing resolution. Buffers are replaced as a
whole each time a new frame or condition is loaded, never patched.

Screen and condition images only differ by what they can do, so they are
built by composition on top of DetectionImage:
    - ScreenImage: cropping of sub regions
    - ConditionImage: mean color of the full size buffer
"""

import cv2
import numpy as np

from .roi import Rect, ScalableRoi, scale_length

COLOR_CHANNELS = 3


class ImageFormatError(ValueError):
    """Raised when a buffer can't be read as an RGBA image."""


def validate_rgba_buffer(buffer):
    """
    Check that a buffer is an (H, W, 4) uint8 numpy array.

    Raises:
        ImageFormatError: If the buffer can't be used for detection
    """
    if not isinstance(buffer, np.ndarray):
        raise ImageFormatError(f"Expected a numpy array, got {type(buffer).__name__}")
    if buffer.ndim != 3 or buffer.shape[2] != 4:
        raise ImageFormatError(f"Expected an RGBA buffer (H, W, 4), got shape {buffer.shape}")
    if buffer.dtype != np.uint8:
        raise ImageFormatError(f"Expected 8 bits per channel, got {buffer.dtype}")
    if buffer.shape[0] == 0 or buffer.shape[1] == 0:
        raise ImageFormatError("Buffer is empty")


def scaled_size(width, height, scale_ratio):
    """Size of an image once downscaled, same rounding as ROI sizes, never below 1x1."""
    return scale_length(width, scale_ratio), scale_length(height, scale_ratio)


def _crop(image, rect):
    """Crop an array to the part of `rect` inside it, empty array if outside."""
    height, width = image.shape[:2]
    visible = Rect(*rect).intersection(Rect(0, 0, width, height))
    if visible.is_empty():
        return image[0:0, 0:0]
    return image[visible.y:visible.bottom, visible.x:visible.right]


class DetectionImage:
    """
    Base image record shared by screen and condition images.

    Attributes:
        full_size_color: RGBA buffer as loaded
        full_size_gray: Grayscale version of full_size_color
        scaled_color: full_size_color at the processing resolution
        scaled_gray: full_size_gray at the processing resolution
        roi: Bounds of the image in both coordinate spaces
    """

    def __init__(self):
        self.full_size_color = None
        self.full_size_gray = None
        self.scaled_color = None
        self.scaled_gray = None
        self.roi = ScalableRoi()

    @property
    def is_loaded(self):
        return self.full_size_color is not None

    def load(self, color_buffer, scale_ratio):
        """
        Replace the image content and recompute all derived buffers.

        Grayscale uses the standard RGBA -> gray luma weights for every image,
        and downscaling uses area averaging to keep the correlation peak
        stable.

        Args:
            color_buffer (numpy.ndarray): RGBA buffer, shape (H, W, 4), uint8
            scale_ratio (float): Full size -> processing resolution ratio

        Raises:
            ImageFormatError: If the buffer is not a valid RGBA image
        """
        validate_rgba_buffer(color_buffer)

        color_buffer = np.ascontiguousarray(color_buffer)
        height, width = color_buffer.shape[:2]
        self.full_size_color = color_buffer
        self.full_size_gray = cv2.cvtColor(color_buffer, cv2.COLOR_RGBA2GRAY)

        if scale_ratio == 1:
            self.scaled_color = self.full_size_color
            self.scaled_gray = self.full_size_gray
        else:
            dsize = scaled_size(width, height, scale_ratio)
            self.scaled_color = cv2.resize(color_buffer, dsize, interpolation=cv2.INTER_AREA)
            self.scaled_gray = cv2.resize(self.full_size_gray, dsize, interpolation=cv2.INTER_AREA)

        scaled_height, scaled_width = self.scaled_gray.shape[:2]
        self.roi = ScalableRoi.from_size(width, height, scale_ratio, scaled_width, scaled_height)

    def release(self):
        self.full_size_color = None
        self.full_size_gray = None
        self.scaled_color = None
        self.scaled_gray = None
        self.roi = ScalableRoi()


class ScreenImage:
    """Screen snapshot, supports cropping of sub regions."""

    def __init__(self):
        self.image = DetectionImage()

    @property
    def roi(self):
        return self.image.roi

    @property
    def is_loaded(self):
        return self.image.is_loaded

    def load(self, color_buffer, scale_ratio):
        self.image.load(color_buffer, scale_ratio)

    def release(self):
        self.image.release()

    def crop_scaled_gray(self, rect):
        """Scaled grayscale pixels in `rect` (scaled coordinates). Empty array if outside."""
        if not self.is_loaded:
            return np.empty((0, 0), dtype=np.uint8)
        return _crop(self.image.scaled_gray, rect)

    def crop_full_size_color(self, rect):
        """Full size RGBA pixels in `rect` (full size coordinates). Empty array if outside."""
        if not self.is_loaded:
            return np.empty((0, 0, 4), dtype=np.uint8)
        return _crop(self.image.full_size_color, rect)


class ConditionImage:
    """Pattern searched on the screen, exposes its mean color."""

    def __init__(self):
        self.image = DetectionImage()
        self._mean_color = None

    @property
    def roi(self):
        return self.image.roi

    @property
    def scaled_gray(self):
        return self.image.scaled_gray

    def load(self, color_buffer, scale_ratio):
        self.image.load(color_buffer, scale_ratio)
        self._mean_color = None

    @property
    def mean_color(self):
        """Per channel mean (R, G, B) of the full size buffer."""
        if self._mean_color is None and self.image.is_loaded:
            self._mean_color = mean_color(self.image.full_size_color)
        return self._mean_color


def mean_color(color_image):
    """
    Mean of each color channel of an image, alpha ignored.

    Args:
        color_image (numpy.ndarray): RGBA or RGB buffer

    Returns:
        tuple: (R, G, B) means as floats
    """
    channels = color_image[:, :, :COLOR_CHANNELS].reshape(-1, COLOR_CHANNELS)
    return tuple(float(value) for value in channels.mean(axis=0))


def color_difference(color_means, other_color_means):
    """
    Difference between two mean colors, normalized to 0-100.

    Sum of absolute per channel differences scaled so that black vs white
    is 100.
    """
    diff = sum(abs(a - b) for a, b in zip(color_means, other_color_means))
    return (diff * 100) / (255 * COLOR_CHANNELS)

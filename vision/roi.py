"""
Scalable ROI - Screen Detector
==============================
Rectangles tracked in two coordinate spaces at once.

Every region handled by the detection pipeline exists both at full size
(the coordinates callers use) and at the processing resolution (the
downscaled buffers the matching runs on). ScalableRoi keeps both in sync
through one scale ratio so the two spaces never drift apart.
"""

from typing import NamedTuple


class Rect(NamedTuple):
    """Axis aligned rectangle, (x, y) is the top-left corner."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self):
        return self.x + self.width

    @property
    def bottom(self):
        return self.y + self.height

    @property
    def center(self):
        return self.x + self.width // 2, self.y + self.height // 2

    def is_empty(self):
        return self.width <= 0 or self.height <= 0

    def contains(self, other):
        """True if `other` fits inside this rectangle (shared edges allowed)."""
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def intersection(self, other):
        """Overlapping part of both rectangles, or an empty Rect."""
        left = max(self.x, other.x)
        top = max(self.y, other.y)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if right <= left or bottom <= top:
            return Rect(0, 0, 0, 0)
        return Rect(left, top, right - left, bottom - top)

    def to_dict(self):
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


EMPTY_RECT = Rect(0, 0, 0, 0)


def scale_length(length, scale_ratio):
    """Scaled size of a full size length, never below one pixel."""
    return max(1, int(round(length * scale_ratio)))


def scale_rect(rect, scale_ratio):
    """
    Convert a full size rectangle into the processing resolution.

    Position and size are rounded separately, with the same rule used to
    resize images, so a rectangle and an image of the same full size always
    have the same scaled size. A non empty rectangle never scales below one
    pixel.

    Args:
        rect (Rect): Full size rectangle
        scale_ratio (float): Full size -> scaled ratio

    Returns:
        Rect: Scaled rectangle
    """
    if rect.is_empty():
        return EMPTY_RECT

    return Rect(
        int(round(rect.x * scale_ratio)),
        int(round(rect.y * scale_ratio)),
        scale_length(rect.width, scale_ratio),
        scale_length(rect.height, scale_ratio),
    )


def fit_into(rect, bounds):
    """
    Shift a rectangle the least possible so it lies inside `bounds`.

    Sizes are kept. A rectangle bigger than `bounds` is returned unchanged.
    """
    if rect.width > bounds.width or rect.height > bounds.height:
        return rect
    x = min(max(rect.x, bounds.x), bounds.right - rect.width)
    y = min(max(rect.y, bounds.y), bounds.bottom - rect.height)
    return Rect(x, y, rect.width, rect.height)


class ScalableRoi:
    """
    Region of interest known at full size and at the processing resolution.

    Instances are immutable: build a new one with `from_full_size` when the
    region or the ratio changes.
    """

    __slots__ = ("_full_size", "_scaled", "_scale_ratio")

    def __init__(self, full_size=EMPTY_RECT, scaled=EMPTY_RECT, scale_ratio=1.0):
        self._full_size = Rect(*full_size)
        self._scaled = Rect(*scaled)
        self._scale_ratio = scale_ratio

    @classmethod
    def from_full_size(cls, rect, scale_ratio, bounds=None):
        """
        Create a ROI from its full size rectangle.

        Args:
            rect (Rect | tuple): (x, y, width, height) at full size
            scale_ratio (float): Ratio used by the detector for this screen
            bounds (ScalableRoi): Enclosing ROI (e.g. the screen). When the
                full size rectangle lies inside it, the scaled rectangle is
                shifted back inside the scaled bounds if rounding pushed it out.

        Returns:
            ScalableRoi: The ROI in both coordinate spaces
        """
        rect = Rect(*(int(value) for value in rect))
        scaled = scale_rect(rect, scale_ratio)
        if bounds is not None and bounds.full_size.contains(rect):
            scaled = fit_into(scaled, bounds.scaled)
        return cls(rect, scaled, scale_ratio)

    @classmethod
    def from_size(cls, width, height, scale_ratio, scaled_width=None, scaled_height=None):
        """
        Create a ROI anchored at (0, 0), e.g. the bounds of an image.

        When the scaled size is already known (an image that has been resized)
        it is used as is instead of being recomputed.
        """
        full_size = Rect(0, 0, int(width), int(height))
        if scaled_width is None or scaled_height is None:
            return cls(full_size, scale_rect(full_size, scale_ratio), scale_ratio)
        return cls(full_size, Rect(0, 0, int(scaled_width), int(scaled_height)), scale_ratio)

    @property
    def full_size(self):
        return self._full_size

    @property
    def scaled(self):
        return self._scaled

    @property
    def scale_ratio(self):
        return self._scale_ratio

    def is_empty(self):
        return self._full_size.is_empty()

    def contains_or_equals(self, other):
        """True if `other` fits in this ROI in both coordinate spaces."""
        return self._full_size.contains(other.full_size) and self._scaled.contains(other.scaled)

    def is_bigger_or_equals(self, other):
        """True if this ROI is at least as big as `other` in both coordinate spaces."""
        return (
            self._full_size.width >= other.full_size.width
            and self._full_size.height >= other.full_size.height
            and self._scaled.width >= other.scaled.width
            and self._scaled.height >= other.scaled.height
        )

    def __eq__(self, other):
        if not isinstance(other, ScalableRoi):
            return NotImplemented
        return self._full_size == other.full_size and self._scaled == other.scaled

    def __hash__(self):
        return hash((self._full_size, self._scaled))

    def __repr__(self):
        return f"ScalableRoi(full_size={tuple(self._full_size)}, scaled={tuple(self._scaled)})"

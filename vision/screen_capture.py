"""
Screen Capture - Screen Detector
================================
RGBA frame capture with mss, ready for Detector.set_screen_image().

- Single mss instance, created lazily and reused across captures
- Instance reset after a failed grab (stale thread-local device contexts)
- Frames converted from mss BGRA to the RGBA layout the detector expects
"""

import logging
import threading

import cv2
import mss
import numpy as np

logger = logging.getLogger("ScreenDetector")


class ScreenCapture:
    """
    Monitor capture producing RGBA buffers.

    All coordinates are absolute screen coordinates.
    """

    def __init__(self, monitor_index=1):
        """
        Initialize screen capture.

        Args:
            monitor_index (int): mss monitor index (0 = all monitors, 1 = primary)
        """
        self.monitor_index = monitor_index

        # Thread-safe mss instance creation
        self._mss_instance = None
        self._mss_lock = threading.Lock()

    def _get_mss_instance(self):
        """Get or create mss instance (thread-safe)."""
        with self._mss_lock:
            if self._mss_instance is None:
                self._mss_instance = mss.mss()
            return self._mss_instance

    def _reset_mss_instance(self):
        """Reset mss instance (thread-safe)."""
        with self._mss_lock:
            if self._mss_instance is not None:
                try:
                    self._mss_instance.close()
                except Exception as e:
                    logger.debug(f"[ScreenCapture] Error while closing mss: {e}")
                self._mss_instance = None

    def _monitor(self):
        return self._get_mss_instance().monitors[self.monitor_index]

    def monitor_size(self):
        """
        Size of the captured monitor.

        Returns:
            tuple: (width, height), or None on failure
        """
        try:
            monitor = self._monitor()
            return monitor["width"], monitor["height"]
        except Exception as e:
            logger.warning(f"[ScreenCapture] Can't read monitor size: {e}")
            self._reset_mss_instance()
            return None

    def grab_rgba(self, x=None, y=None, width=None, height=None):
        """
        Capture an area of the screen, or the whole monitor.

        Args:
            x (int): Left coordinate (default: monitor left)
            y (int): Top coordinate (default: monitor top)
            width (int): Width of capture area (default: monitor width)
            height (int): Height of capture area (default: monitor height)

        Returns:
            numpy.ndarray: RGBA buffer (H, W, 4) uint8, or None on failure
        """
        try:
            if x is None or y is None or width is None or height is None:
                monitor = dict(self._monitor())
            else:
                monitor = {"left": x, "top": y, "width": width, "height": height}

            screenshot = self._get_mss_instance().grab(monitor)
            bgra = np.array(screenshot, dtype=np.uint8)
            return cv2.cvtColor(bgra, cv2.COLOR_BGRA2RGBA)
        except Exception as e:
            logger.warning(f"[ScreenCapture] grab_rgba failed at ({x},{y},{width},{height}): {e}")
            self._reset_mss_instance()
            return None

    def cleanup(self):
        """Close the mss instance if it exists."""
        self._reset_mss_instance()

# Copyright (C) 2026 BPS
# This file is part of Screen Detector.
#
# Command line entry point: one detection on a screenshot or a live capture

"""
Screen Detector - Command Line
==============================
Runs a single image or text detection and prints the result as JSON.

Usage:
    screen-detector --condition button.png --screen screenshot.png
    screen-detector --condition button.png --area 100 200 300 80 --threshold 90
    screen-detector --text Play --languages eng fra

Exit code is 0 when the condition is detected, 1 when it isn't and 2 on
invalid input.
"""

import argparse
import json
import logging
import sys

from config.settings_manager import SettingsManager
from core import Detector, DetectorException
from services.logging_service import LoggingService
from utils.image_io import load_rgba
from vision.screen_capture import ScreenCapture


def build_parser():
    parser = argparse.ArgumentParser(description="Detect an image or a word on the screen")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--condition", metavar="FILE", help="Condition image to find (PNG, JPEG, ...)")
    target.add_argument("--text", help="Word to find with OCR")
    parser.add_argument("--screen", metavar="FILE", help="Screenshot to search in (default: capture the monitor)")
    parser.add_argument("--monitor", type=int, default=1, help="mss monitor index used for capture")
    parser.add_argument("--area", type=int, nargs=4, metavar=("X", "Y", "W", "H"),
                        help="Full size detection area (default: settings area, else whole screen)")
    parser.add_argument("--threshold", type=int, default=None, help="Threshold in [0, 100], higher is stricter")
    parser.add_argument("--quality", type=float, default=None, help="Detection quality (max processing dimension)")
    parser.add_argument("--languages", nargs="+", default=None, help="Tesseract languages for --text")
    parser.add_argument("--settings", metavar="FILE", default=None, help="Settings JSON file")
    parser.add_argument("--log-file", metavar="FILE", default=None, help="Log file (default: screen_detector.log)")
    parser.add_argument("--debug", action="store_true", help="Log every examined candidate")
    return parser


def _screen_buffer(args, logger):
    if args.screen:
        return load_rgba(args.screen)

    capture = ScreenCapture(monitor_index=args.monitor)
    try:
        frame = capture.grab_rgba()
    finally:
        capture.cleanup()
    if frame is None:
        logger.error("[CLI] Screen capture failed")
    return frame


def _detection_area(args, settings):
    if args.area:
        return tuple(args.area)
    if settings is not None:
        area = settings.load_detection_area()
        if area:
            return area["x"], area["y"], area["width"], area["height"]
    return None, None, None, None


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging_service = LoggingService(log_file=args.log_file)
    if args.debug:
        logging_service.set_level(logging.DEBUG)
    logger = logging_service.get_logger()

    settings = SettingsManager(args.settings) if args.settings else None
    quality = args.quality or (settings.load_detection_quality() if settings else None)
    languages = args.languages or (settings.load_ocr_languages() if settings else None)

    try:
        screen = _screen_buffer(args, logger)
        if screen is None:
            return 2

        height, width = screen.shape[:2]
        detector = Detector(languages=languages if args.text else None)
        if quality:
            detector.set_screen_metrics(width, height, quality=quality)
        else:
            detector.set_screen_metrics(width, height)
        detector.set_screen_image(screen)

        area = _detection_area(args, settings)
        if args.text:
            threshold = args.threshold if args.threshold is not None else (
                settings.load_text_threshold() if settings else None)
            kwargs = {"threshold": threshold} if threshold is not None else {}
            result = detector.detect_text(args.text, *area, **kwargs)
        else:
            threshold = args.threshold if args.threshold is not None else (
                settings.load_default_threshold() if settings else None)
            kwargs = {"threshold": threshold} if threshold is not None else {}
            result = detector.detect_image(load_rgba(args.condition), *area, **kwargs)
        detector.close()
    except (DetectorException, ValueError) as e:
        logger.error(f"[CLI] {e}")
        return 2

    logger.info(f"[CLI] {result!r}")
    print(json.dumps(result.to_dict()))
    return 0 if result.detected else 1


if __name__ == "__main__":
    sys.exit(main())

"""Command line interface.

Commands::

    detect IMAGE   print detected text regions, optionally save an annotated copy
    ocr IMAGE      read text from the whole image or from detected regions
    capture        grab the desktop, select a region, save and/or read it
"""
from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional, Tuple

import numpy as np

from .backends.east_backend import EastBackend
from .config.settings import load_config
from .core.entities import PixelRegion
from .core.exceptions import ApplicationError
from .core.logging_config import RunContext, setup_logging
from .services.capture_service import capture_desktop
from .services.ocr_service import OCRService, save_text
from .services.text_detection_service import TextDetectionService
from .utils.image_utils import load_image, save_image

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ocr-viewer", description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--config", default="config.json", help="Path to config.json")
    parser.add_argument("--log-level", help="Override the configured log level")
    sub = parser.add_subparsers(dest="command", required=True)

    detect = sub.add_parser("detect", help="Detect text areas in an image")
    detect.add_argument("image")
    detect.add_argument("--annotate", metavar="OUT", help="Save the image with regions drawn")
    _add_detection_args(detect)

    ocr = sub.add_parser("ocr", help="Extract text from an image")
    ocr.add_argument("image")
    ocr.add_argument("--detect-areas", action="store_true",
                     help="Run OCR once per detected text area")
    ocr.add_argument("--output", metavar="TEXT_FILE", help="Save the text (.txt)")
    ocr.add_argument("--annotate", metavar="OUT",
                     help="With --detect-areas, save the image with the areas drawn")
    _add_detection_args(ocr)

    capture = sub.add_parser("capture", help="Capture a screen region")
    capture.add_argument("--output", metavar="IMAGE", help="Save the selected region")
    capture.add_argument("--ocr", action="store_true", help="Print the text in the selection")
    capture.add_argument("--detect-areas", action="store_true",
                         help="With --ocr, read each detected text area separately")
    _add_detection_args(capture)
    return parser


def _add_detection_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--model", help="EAST model path")
    parser.add_argument("--conf", type=float, help="Confidence threshold")
    parser.add_argument("--nms", type=float, help="NMS threshold")


def _apply_overrides(config, args) -> None:
    if getattr(args, "model", None):
        config.model_path = args.model
    if getattr(args, "conf", None) is not None:
        config.confidence_threshold = args.conf
    if getattr(args, "nms", None) is not None:
        config.nms_threshold = args.nms
    if getattr(args, "detect_areas", False):
        config.detect_text_areas = True
    if args.log_level:
        config.log_level = args.log_level
    config.validate()


def cmd_detect(config, args) -> int:
    image = load_image(args.image)
    service = TextDetectionService(EastBackend(config), config)
    result = service.detect(image, annotate=bool(args.annotate))
    for i, region in enumerate(result.regions):
        print(f"{i} {region.x} {region.y} {region.width} {region.height}")
    if args.annotate:
        save_image(args.annotate, result.frame)
    return 0


def read_text(config, image, annotate: Optional[str] = None) -> str:
    """OCR ``image``, once per detected text area when detection is enabled.

    ``annotate`` names a file for the image with the detected areas drawn;
    it is ignored (with a warning) when detection is off.
    """
    regions = None
    if config.detect_text_areas:
        service = TextDetectionService(EastBackend(config), config)
        result = service.detect(image, annotate=bool(annotate))
        regions = result.regions
        if annotate:
            save_image(annotate, result.frame)
    elif annotate:
        logger.warning(f"Not saving {annotate}: text area detection is off")
    return OCRService(config).extract_text(image, regions)


def cmd_ocr(config, args) -> int:
    image = load_image(args.image)
    text = read_text(config, image, args.annotate)
    if args.output:
        save_text(args.output, text)
    else:
        print(text)
    return 0


def select_screen_region(config) -> Tuple[Optional[np.ndarray], Optional[PixelRegion]]:
    """Capture the desktop and let the user drag a region over it.

    Returns ``(None, None)`` when the user leaves capture mode with Escape.
    """
    # imported here so the other commands work without a display
    import tkinter as tk
    from .ui.capture_window import CaptureWindow

    captured = {}

    def on_capture(image, region):
        captured["image"] = image
        captured["region"] = region

    root = tk.Tk()
    root.withdraw()

    def start_capture():
        try:
            CaptureWindow(root, capture_desktop(), on_capture)
        except ApplicationError as e:
            captured["error"] = e
            root.quit()

    root.after(config.capture_delay_ms, start_capture)
    root.mainloop()
    root.destroy()

    if "error" in captured:
        raise captured["error"]
    return captured.get("image"), captured.get("region")


def cmd_capture(config, args) -> int:
    image, region = select_screen_region(config)
    if image is None:
        logger.info("No region captured")
        return 0
    if image.size == 0:
        logger.warning(f"Empty selection {region}, nothing to save")
        return 0
    if args.output:
        save_image(args.output, image)
    if args.ocr:
        print(read_text(config, image))
    return 0


COMMANDS = {"detect": cmd_detect, "ocr": cmd_ocr, "capture": cmd_capture}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.config)
        _apply_overrides(config, args)
    except ApplicationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    setup_logging(config)

    with RunContext():
        try:
            return COMMANDS[args.command](config, args)
        except ApplicationError as e:
            logger.error(str(e))
            return 1

"""Screen capture functionality."""
from __future__ import annotations
import logging

import numpy as np
from PIL import ImageGrab

from ..core.entities import PixelRegion
from ..core.exceptions import CaptureError
from ..utils.image_utils import crop_region

logger = logging.getLogger(__name__)


def capture_desktop() -> np.ndarray:
    """Capture all available screens combined into one RGB array."""
    try:
        screenshot = ImageGrab.grab(all_screens=True)
    except OSError as e:
        raise CaptureError(f"Error capturing screen: {e}") from e
    frame = np.asarray(screenshot.convert("RGB"))
    logger.info(f"Captured desktop {frame.shape[1]}x{frame.shape[0]}")
    return frame


def crop_selection(frame: np.ndarray, region: PixelRegion) -> np.ndarray:
    """Copy the selected part of a captured frame.

    A zero-size selection gives an empty ``(0, 0, channels)`` array rather
    than an error, so callers must check ``image.size`` before using it.
    """
    if region.is_empty():
        return np.zeros((0, 0) + frame.shape[2:], dtype=frame.dtype)
    return crop_region(frame, region)

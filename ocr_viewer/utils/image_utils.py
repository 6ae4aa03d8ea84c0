"""Image processing utilities.

Frames are handled as RGB ``uint8`` numpy arrays throughout; conversion from
OpenCV's BGR order happens once, at load/save time.
"""
from __future__ import annotations
import logging
import os
from typing import Optional, Sequence

import cv2
import numpy as np

from ..core.constants import (
    OVERLAY_ALPHA, OVERLAY_COLOR, REGION_COLOR, SELECTION_BORDER_COLOR,
    SUPPORTED_IMAGE_FORMATS,
)
from ..core.entities import PixelRegion
from ..core.exceptions import FileFormatError

logger = logging.getLogger(__name__)


def has_supported_extension(path: str, extensions: Sequence[str]) -> bool:
    _, ext = os.path.splitext(path.lower())
    return ext in extensions


def load_image(path: str) -> np.ndarray:
    """Load an image file as an RGB array."""
    if not has_supported_extension(path, SUPPORTED_IMAGE_FORMATS):
        raise FileFormatError(f"Unsupported image format: {path}")
    image = cv2.imread(path, cv2.IMREAD_COLOR)
    if image is None:
        raise FileFormatError(f"Could not read image: {path}")
    logger.info(f"Loaded {path}, {image.shape[1]}x{image.shape[0]}, {os.path.getsize(path)} Bytes")
    return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)


def save_image(path: str, image: np.ndarray) -> None:
    """Save an RGB array; only png/bmp/jpg names are accepted."""
    if not has_supported_extension(path, SUPPORTED_IMAGE_FORMATS):
        raise FileFormatError(f"Save error: bad format or filename: {path}")
    if not cv2.imwrite(path, cv2.cvtColor(image, cv2.COLOR_RGB2BGR)):
        raise FileFormatError(f"Could not write image: {path}")


def crop_region(image: np.ndarray, region: PixelRegion) -> np.ndarray:
    """Crop ``region`` out of ``image``, clamped to the image bounds."""
    h, w = image.shape[:2]
    x1, y1, x2, y2 = region.clamp(w, h).to_xyxy()
    return image[y1:y2, x1:x2].copy()


def draw_regions(image: np.ndarray, regions: Sequence[PixelRegion],
                 color=REGION_COLOR) -> np.ndarray:
    """Return a copy of ``image`` with each region outlined and numbered."""
    annotated = image.copy()
    for i, region in enumerate(regions):
        cv2.rectangle(annotated, (region.x, region.y), (region.right, region.bottom), color, 1)
        cv2.putText(annotated, str(i), (region.x, region.y - 2),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, color, 1)
    return annotated


def render_selection_overlay(frame: np.ndarray, selection: Optional[PixelRegion]) -> np.ndarray:
    """Dim ``frame`` everywhere except inside ``selection``.

    The selection gets a one pixel border. A missing or zero-area selection
    dims the whole frame and draws no border.
    """
    dimmed = frame.astype(np.float32)
    dimmed = dimmed * (1.0 - OVERLAY_ALPHA) + np.array(OVERLAY_COLOR, dtype=np.float32) * OVERLAY_ALPHA
    out = dimmed.round().astype(np.uint8)
    if selection is None or selection.is_empty():
        return out

    h, w = frame.shape[:2]
    x1, y1, x2, y2 = selection.clamp(w, h).to_xyxy()
    out[y1:y2, x1:x2] = frame[y1:y2, x1:x2]
    cv2.rectangle(out, (selection.x, selection.y), (selection.right, selection.bottom),
                  SELECTION_BORDER_COLOR, 1)
    return out

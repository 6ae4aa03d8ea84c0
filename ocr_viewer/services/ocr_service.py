"""OCR using Tesseract, over a whole image or over detected regions."""
from __future__ import annotations
import logging
from typing import List, Optional, Sequence

import numpy as np
import pytesseract
from PIL import Image

from ..core.constants import SUPPORTED_TEXT_FORMATS
from ..core.entities import PixelRegion
from ..core.exceptions import FileFormatError, OCRError
from ..utils.image_utils import crop_region, has_supported_extension

logger = logging.getLogger(__name__)


class OCRService:
    """Thin wrapper around ``pytesseract`` configured from :class:`Config`."""

    def __init__(self, config):
        self.config = config
        if config.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = config.tesseract_cmd

    def _tesseract_args(self) -> str:
        if self.config.tessdata_dir:
            return f'--tessdata-dir "{self.config.tessdata_dir}"'
        return ""

    def _image_to_string(self, image: np.ndarray) -> str:
        try:
            return pytesseract.image_to_string(
                Image.fromarray(image), lang=self.config.tesseract_lang,
                config=self._tesseract_args()
            )
        except pytesseract.TesseractNotFoundError as e:
            raise OCRError("Failed to initialize tesseract: executable not found") from e
        except pytesseract.TesseractError as e:
            raise OCRError(f"Tesseract failed: {e}") from e

    def extract_text(self, image: np.ndarray,
                     regions: Optional[Sequence[PixelRegion]] = None) -> str:
        """Run OCR on ``image``.

        Without ``regions`` the whole image is read once. With regions,
        Tesseract runs once per region and the texts are concatenated in
        region order. Regions are clamped to the image first; any that end up
        empty are skipped. An empty region list yields an empty string.
        """
        if regions is None:
            return self._image_to_string(image)

        h, w = image.shape[:2]
        texts: List[str] = []
        for i, region in enumerate(regions):
            if region.clamp(w, h).is_empty():
                logger.debug(f"Skipping region {i} {region}: outside the {w}x{h} image")
                continue
            texts.append(self._image_to_string(crop_region(image, region)))
        logger.info(f"OCR over {len(texts)} of {len(regions)} regions")
        return "".join(texts)


def save_text(path: str, text: str) -> None:
    """Write OCR output to a ``.txt`` file."""
    if not has_supported_extension(path, SUPPORTED_TEXT_FORMATS):
        raise FileFormatError(f"Save error: format or filename not ok: {path}")
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text + "\n")
    except OSError as e:
        raise FileFormatError(f"Can't save text to {path}: {e}") from e

"""Text area detection: detector forward pass plus post-processing."""
from __future__ import annotations
import logging
import time
from typing import Optional

import numpy as np

from ..backends.base_backend import BaseBackend
from ..core.decoder import decode_predictions
from ..core.entities import DetectionResult
from ..core.nms import non_max_suppression
from ..utils.geometry import map_candidates
from ..utils.image_utils import draw_regions

logger = logging.getLogger(__name__)


class TextDetectionService:
    """Locate text regions in an image.

    The backend is created once by the caller and shared across calls; this
    service holds no per-image state.
    """

    def __init__(self, backend: BaseBackend, config):
        self.backend = backend
        self.config = config

    def detect(self, image: np.ndarray, annotate: bool = True,
               confidence_threshold: Optional[float] = None,
               nms_threshold: Optional[float] = None) -> DetectionResult:
        """Detect text regions in an RGB image.

        Args:
            image: Original image, any size.
            annotate: Also return a copy of the image with the regions drawn.
            confidence_threshold: Overrides ``config.confidence_threshold``.
            nms_threshold: Overrides ``config.nms_threshold``.

        Returns:
            DetectionResult whose regions are in original-image pixels, in
            detector scan order (top to bottom, then left to right).
        """
        conf = self.config.confidence_threshold if confidence_threshold is None else confidence_threshold
        nms = self.config.nms_threshold if nms_threshold is None else nms_threshold
        image_size = (image.shape[1], image.shape[0])
        input_size = self.config.input_size

        start = time.perf_counter()
        scores, geometry = self.backend.forward(image)
        inference_ms = (time.perf_counter() - start) * 1000.0

        start = time.perf_counter()
        candidates, confidences = decode_predictions(scores, geometry, conf)
        indices = non_max_suppression(candidates, confidences, conf, nms)
        regions = map_candidates(candidates, indices, input_size, image_size)
        decode_ms = (time.perf_counter() - start) * 1000.0

        logger.info(
            f"Detected {len(regions)} text regions ({len(candidates)} candidates) "
            f"in {inference_ms:.1f}ms + {decode_ms:.1f}ms"
        )

        return DetectionResult(
            regions=regions,
            candidates=[candidates[i] for i in indices],
            frame=draw_regions(image, regions) if annotate else None,
            inference_ms=inference_ms,
            decode_ms=decode_ms,
        )

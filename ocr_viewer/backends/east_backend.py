"""EAST text detector backend using OpenCV's dnn module."""
import logging
import os
from typing import List, Dict, Any, Tuple

import cv2
import numpy as np

from .base_backend import BaseBackend
from ..core.constants import EAST_MEAN, EAST_OUTPUT_LAYERS, INPUT_SIZE_MULTIPLE
from ..core.exceptions import ConfigError, ModelError

logger = logging.getLogger(__name__)


def validate_input_size(width: int, height: int) -> None:
    """EAST needs both input dimensions to be positive multiples of 32."""
    for name, value in (("width", width), ("height", height)):
        if value <= 0 or value % INPUT_SIZE_MULTIPLE:
            raise ConfigError(
                f"EAST input {name} must be a positive multiple of {INPUT_SIZE_MULTIPLE}, got {value}"
            )


class EastBackend(BaseBackend):
    """Pretrained EAST network loaded once and reused for every image."""

    def __init__(self, config):
        super().__init__(config)
        self.net = None
        self.model_path = None
        self.input_size = (config.input_width, config.input_height)
        validate_input_size(*self.input_size)

    def load_model(self, model_path: str) -> bool:
        """Load a frozen EAST graph."""
        if not os.path.isfile(model_path):
            raise ModelError(f"EAST model not found: {model_path}")
        if not self.validate_model(model_path):
            raise ModelError(
                f"Cannot use {model_path}: expected a readable "
                f"{' or '.join(self.get_supported_formats())} file"
            )

        try:
            self.net = cv2.dnn.readNet(model_path)
        except cv2.error as e:
            self.is_loaded = False
            raise ModelError(f"Failed to load EAST model {model_path}: {e}") from e

        self.model_path = model_path
        self.is_loaded = True
        self.model_info = {
            'backend': 'opencv-dnn',
            'model_type': 'EAST',
            'model_path': model_path,
            'input_size': self.input_size,
        }
        logger.info(f"Loaded EAST model from {model_path}")
        return True

    def ensure_loaded(self) -> None:
        """Load the configured model on first use."""
        if not self.is_loaded:
            self.load_model(self.config.model_path)

    def forward(self, image: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Resize ``image`` (RGB) to the input size and run the network.

        Returns:
            ``(scores, geometry)`` shaped ``(1, 1, H/4, W/4)`` and
            ``(1, 5, H/4, W/4)``.
        """
        self.ensure_loaded()

        # the frame is already RGB, the mean is given in RGB order too
        blob = cv2.dnn.blobFromImage(
            image, 1.0, self.input_size, EAST_MEAN, swapRB=False, crop=False
        )
        try:
            self.net.setInput(blob)
            scores, geometry = self.net.forward(list(EAST_OUTPUT_LAYERS))
        except cv2.error as e:
            raise ModelError(f"EAST forward pass failed: {e}") from e
        return scores, geometry

    def get_model_info(self) -> Dict[str, Any]:
        if not self.is_loaded:
            return {'status': 'not_loaded'}
        return self.model_info.copy()

    def unload_model(self) -> None:
        super().unload_model()
        self.net = None

    def get_supported_formats(self) -> List[str]:
        return ['.pb', '.onnx']

    def validate_model(self, model_path: str) -> bool:
        """Check extension and readability without loading the network."""
        _, ext = os.path.splitext(model_path.lower())
        if ext not in self.get_supported_formats():
            return False
        return os.path.isfile(model_path) and os.access(model_path, os.R_OK)

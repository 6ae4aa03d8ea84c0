"""
OCR Image Viewer: EAST text area detection and Tesseract OCR for images and
screen captures.
"""

__version__ = "1.0.0"

from .config.settings import Config, load_config, save_config
from .core.entities import Candidate, RotatedBox, PixelRegion, SelectionState, DetectionResult
from .core.decoder import decode_predictions
from .core.nms import non_max_suppression
from .utils.geometry import map_to_image, map_candidates

__all__ = [
    "Config", "load_config", "save_config",
    "Candidate", "RotatedBox", "PixelRegion", "SelectionState", "DetectionResult",
    "decode_predictions", "non_max_suppression", "map_to_image", "map_candidates",
]

"""Core domain entities, constants and exceptions."""

from .entities import (
    Candidate, RotatedBox, PixelRegion, SelectionState, DetectionResult, Point, Rect
)
from .exceptions import (
    ApplicationError, DetectionError, TensorShapeError, ConfigError, ModelError,
    OCRError, CaptureError, FileFormatError
)
from .constants import APP_NAME, VERSION, SUPPORTED_IMAGE_FORMATS

__all__ = [
    "Candidate", "RotatedBox", "PixelRegion", "SelectionState", "DetectionResult",
    "Point", "Rect",
    "ApplicationError", "DetectionError", "TensorShapeError", "ConfigError", "ModelError",
    "OCRError", "CaptureError", "FileFormatError",
    "APP_NAME", "VERSION", "SUPPORTED_IMAGE_FORMATS",
]

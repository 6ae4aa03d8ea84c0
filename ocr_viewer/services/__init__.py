"""Service layer: detection orchestration, OCR and screen capture."""

from .text_detection_service import TextDetectionService
from .ocr_service import OCRService, save_text
from .capture_service import capture_desktop, crop_selection

__all__ = [
    "TextDetectionService", "OCRService", "save_text",
    "capture_desktop", "crop_selection",
]

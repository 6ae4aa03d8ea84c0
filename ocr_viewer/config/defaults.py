"""Default configuration values."""

from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    # Text detection (EAST)
    "model_path": "./frozen_east_text_detection.pb",
    "input_width": 320,  # must be a multiple of 32
    "input_height": 320,
    "confidence_threshold": 0.5,  # 0.0 to 1.0
    "nms_threshold": 0.4,  # (0.0, 1.0]
    "detect_text_areas": False,

    # OCR (Tesseract)
    "tesseract_lang": "eng",
    "tessdata_dir": "",  # empty: use Tesseract's own lookup
    "tesseract_cmd": "",  # empty: tesseract on PATH

    # Screen capture
    "capture_delay_ms": 1000,  # time for the main window to minimize

    # Debug and Logging Settings
    "log_level": "INFO",
    "log_dir": "logs",
    "enable_file_logging": False,
    "structured_logging": False,
}

"""Custom exceptions for the application."""

class ApplicationError(Exception):
    """Base application error."""
    pass

class DetectionError(ApplicationError):
    """Base exception for text detection errors."""
    pass

class TensorShapeError(DetectionError):
    """Detector output tensors do not have the expected layout."""
    pass

class ConfigError(ApplicationError):
    """Configuration-related errors."""
    pass

class ModelError(ApplicationError):
    """Model loading/inference errors."""
    pass

class OCRError(ApplicationError):
    """Tesseract invocation errors."""
    pass

class CaptureError(ApplicationError):
    """Screen capture errors."""
    pass

class FileFormatError(ApplicationError):
    """Image or text file with an unsupported name, or one that cannot be read or written."""
    pass

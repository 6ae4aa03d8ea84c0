"""Backend implementations for text detector models."""

from .base_backend import BaseBackend
from .east_backend import EastBackend, validate_input_size

__all__ = ["BaseBackend", "EastBackend", "validate_input_size"]

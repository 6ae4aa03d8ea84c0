"""Base backend interface for text detector implementations."""
from abc import ABC, abstractmethod
from typing import List, Dict, Any, Tuple
import numpy as np


class BaseBackend(ABC):
    """Abstract base class for text detector backends.

    A backend owns the network and returns the raw score and geometry maps;
    decoding them is left to the detection service.
    """

    def __init__(self, config):
        self.config = config
        self.is_loaded = False
        self.model_info: Dict[str, Any] = {}

    @abstractmethod
    def load_model(self, model_path: str) -> bool:
        """Load a model from path."""
        pass

    @abstractmethod
    def forward(self, image: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Run inference and return ``(scores, geometry)``."""
        pass

    @abstractmethod
    def get_model_info(self) -> Dict[str, Any]:
        """Describe the loaded network (path, input size, ...)."""
        pass

    def is_model_loaded(self) -> bool:
        """True once a network has been read successfully."""
        return self.is_loaded

    def unload_model(self) -> None:
        """Drop the network; the next forward pass reloads it."""
        self.is_loaded = False
        self.model_info = {}

    @abstractmethod
    def get_supported_formats(self) -> List[str]:
        """Model file extensions this backend can read."""
        pass

    @abstractmethod
    def validate_model(self, model_path: str) -> bool:
        """Cheap check that a model file looks loadable, without loading it."""
        pass

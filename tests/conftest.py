"""Pytest configuration and shared fixtures for the OCR image viewer.

Provides EAST-shaped tensor builders, configuration objects and sample
images used across the unit and integration suites.
"""
import sys
import logging
from pathlib import Path
from typing import Dict, Tuple
from unittest.mock import Mock

import numpy as np
import pytest

# Add the project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from ocr_viewer.backends.base_backend import BaseBackend
from ocr_viewer.config.settings import Config
from ocr_viewer.core.entities import RotatedBox


# Disable some verbose loggers during testing
logging.getLogger('PIL').setLevel(logging.WARNING)

# (score, top, right, bottom, left, angle)
Cell = Tuple[float, float, float, float, float, float]


def make_east_output(height: int, width: int, cells: Dict[Tuple[int, int], Cell]):
    """Build ``(scores, geometry)`` tensors shaped like the EAST outputs.

    Every cell not listed in ``cells`` has score 0 and zero geometry.
    """
    scores = np.zeros((1, 1, height, width), dtype=np.float32)
    geometry = np.zeros((1, 5, height, width), dtype=np.float32)
    for (y, x), (score, top, right, bottom, left, angle) in cells.items():
        scores[0, 0, y, x] = score
        geometry[0, :, y, x] = (top, right, bottom, left, angle)
    return scores, geometry


def make_axis_box(x1: float, y1: float, x2: float, y2: float, confidence: float = 0.9) -> RotatedBox:
    """An unrotated candidate covering (x1, y1)-(x2, y2)."""
    return RotatedBox(
        center=((x1 + x2) / 2.0, (y1 + y2) / 2.0),
        size=(x2 - x1, y2 - y1),
        angle=0.0,
        confidence=confidence,
    )


@pytest.fixture
def east_output():
    """Factory fixture for EAST-shaped tensors."""
    return make_east_output


@pytest.fixture
def config():
    """Provide a default configuration object."""
    return Config()


@pytest.fixture
def single_cell_output():
    """One axis-aligned text cell at row 2, column 3 of an 80x80 grid.

    Its box spans (10, 7)-(17, 11) in detector-input pixels.
    """
    return make_east_output(80, 80, {(2, 3): (0.9, 1.0, 5.0, 3.0, 2.0, 0.0)})


@pytest.fixture
def mock_backend(single_cell_output):
    """Provide a backend whose forward pass returns ``single_cell_output``."""
    backend = Mock(spec=BaseBackend)
    backend.forward.return_value = single_cell_output
    return backend


@pytest.fixture
def sample_image():
    """Provide a 640x480 RGB test image."""
    image = np.full((480, 640, 3), 255, dtype=np.uint8)
    image[100:140, 50:300] = 0
    return image


@pytest.fixture
def axis_box():
    """Factory fixture for unrotated candidates."""
    return make_axis_box

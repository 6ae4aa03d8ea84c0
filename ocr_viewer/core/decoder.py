"""Decoding of EAST score/geometry maps into rotated box candidates.

The detector emits two tensors at 1/4 of the network input resolution:

* a score map ``(1, 1, H, W)`` with the probability that a cell holds text;
* a geometry map ``(1, 5, H, W)`` whose channels are the distances from the
  cell to the top, right, bottom and left sides of its box, plus the box
  rotation in radians.

``decode_predictions`` turns every cell that clears the score threshold into
a :class:`RotatedBox`, in row-major scan order. Later stages (NMS) refer to
candidates by position, so that order must not change.
"""
from __future__ import annotations
import logging
import math
from typing import List, Tuple

import numpy as np

from .constants import FEATURE_MAP_STRIDE, GEOMETRY_CHANNELS
from .entities import RotatedBox
from .exceptions import TensorShapeError

logger = logging.getLogger(__name__)


def _score_grid(scores: np.ndarray) -> np.ndarray:
    scores = np.asarray(scores)
    if scores.ndim == 4:
        if scores.shape[0] != 1 or scores.shape[1] != 1:
            raise TensorShapeError(f"score map must be (1, 1, H, W), got {scores.shape}")
        return scores[0, 0]
    if scores.ndim == 2:
        return scores
    raise TensorShapeError(f"score map must be 4-D (or a bare 2-D grid), got {scores.ndim}-D")


def _geometry_channels(geometry: np.ndarray) -> np.ndarray:
    geometry = np.asarray(geometry)
    if geometry.ndim == 4:
        if geometry.shape[0] != 1:
            raise TensorShapeError(f"geometry batch size must be 1, got {geometry.shape[0]}")
        geometry = geometry[0]
    elif geometry.ndim != 3:
        raise TensorShapeError(f"geometry map must be 4-D (or 3-D), got {geometry.ndim}-D")
    if geometry.shape[0] != GEOMETRY_CHANNELS:
        raise TensorShapeError(
            f"geometry map must have {GEOMETRY_CHANNELS} channels, got {geometry.shape[0]}"
        )
    return geometry


def decode_predictions(
    scores: np.ndarray,
    geometry: np.ndarray,
    score_threshold: float,
) -> Tuple[List[RotatedBox], List[float]]:
    """Decode detector output into candidates and their confidences.

    Args:
        scores: Score map, ``(1, 1, H, W)`` or ``(H, W)``.
        geometry: Geometry map, ``(1, 5, H, W)`` or ``(5, H, W)``.
        score_threshold: Minimum score for a cell to produce a candidate.

    Returns:
        ``(candidates, confidences)``, index-aligned, in row-major scan order.

    Raises:
        TensorShapeError: If the tensors do not match the EAST layout.
        ValueError: If ``score_threshold`` is outside [0, 1].
    """
    if not 0.0 <= score_threshold <= 1.0:
        raise ValueError(f"score_threshold must be in [0, 1], got {score_threshold}")

    grid = _score_grid(scores)
    geo = _geometry_channels(geometry)
    if grid.shape != geo.shape[1:]:
        raise TensorShapeError(
            f"score map {grid.shape} and geometry map {geo.shape[1:]} differ in size"
        )

    # np.nonzero walks the grid in row-major order
    ys, xs = np.nonzero(grid >= score_threshold)
    if ys.size == 0:
        return [], []

    top, right, bottom, left, angle = (geo[c, ys, xs].astype(np.float64) for c in range(GEOMETRY_CHANNELS))
    offset_x = xs.astype(np.float64) * FEATURE_MAP_STRIDE
    offset_y = ys.astype(np.float64) * FEATURE_MAP_STRIDE
    cos_a = np.cos(angle)
    sin_a = np.sin(angle)
    h = top + bottom
    w = right + left

    ref_x = offset_x + cos_a * right + sin_a * bottom
    ref_y = offset_y - sin_a * right + cos_a * bottom
    p1_x = -sin_a * h + ref_x
    p1_y = -cos_a * h + ref_y
    p3_x = -cos_a * w + ref_x
    p3_y = sin_a * w + ref_y
    center_x = 0.5 * (p1_x + p3_x)
    center_y = 0.5 * (p1_y + p3_y)
    degrees = -angle * 180.0 / math.pi
    confidences = grid[ys, xs].astype(np.float64).tolist()

    candidates = [
        RotatedBox(
            center=(float(center_x[i]), float(center_y[i])),
            size=(float(w[i]), float(h[i])),
            angle=float(degrees[i]),
            confidence=confidences[i],
        )
        for i in range(ys.size)
    ]
    logger.debug(f"Decoded {len(candidates)} candidates from {grid.shape[0]}x{grid.shape[1]} score map")
    return candidates, confidences

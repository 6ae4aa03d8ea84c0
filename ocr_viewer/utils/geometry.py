"""Geometry and bounding box utilities."""
from __future__ import annotations
from typing import List, Sequence, Tuple

import numpy as np

from ..core.entities import PixelRegion, RotatedBox


def iou_one_to_many(box: np.ndarray, boxes: np.ndarray) -> np.ndarray:
    """IoU of one (x1, y1, x2, y2) box against an (N, 4) array of boxes."""
    xA = np.maximum(box[0], boxes[:, 0])
    yA = np.maximum(box[1], boxes[:, 1])
    xB = np.minimum(box[2], boxes[:, 2])
    yB = np.minimum(box[3], boxes[:, 3])
    inter = np.clip(xB - xA, 0, None) * np.clip(yB - yA, 0, None)
    area = max(0.0, box[2] - box[0]) * max(0.0, box[3] - box[1])
    areas = np.clip(boxes[:, 2] - boxes[:, 0], 0, None) * np.clip(boxes[:, 3] - boxes[:, 1], 0, None)
    denom = area + areas - inter
    out = np.zeros(len(boxes), dtype=np.float64)
    np.divide(inter, denom, out=out, where=denom > 0)
    return out


def map_to_image(
    candidate: RotatedBox,
    input_size: Tuple[int, int],
    image_size: Tuple[int, int],
) -> PixelRegion:
    """Map a candidate from detector-input to original-image pixels.

    Both sizes are (width, height). The candidate's integer bounding rectangle
    is scaled per axis and truncated toward zero. The result is not clamped
    to the image, so regions near the border may extend past it.
    """
    input_w, input_h = input_size
    image_w, image_h = image_size
    ratio_x = image_w / float(input_w)
    ratio_y = image_h / float(input_h)
    x, y, w, h = candidate.bounding_rect()
    return PixelRegion(
        x=int(x * ratio_x),
        y=int(y * ratio_y),
        width=int(w * ratio_x),
        height=int(h * ratio_y),
    )


def map_candidates(
    candidates: Sequence[RotatedBox],
    indices: Sequence[int],
    input_size: Tuple[int, int],
    image_size: Tuple[int, int],
) -> List[PixelRegion]:
    """Map the candidates selected by ``indices``, in that order."""
    return [map_to_image(candidates[i], input_size, image_size) for i in indices]

"""Greedy non-maximum suppression over decoded text candidates."""
from __future__ import annotations
import logging
from typing import List, Sequence

import numpy as np

from .entities import RotatedBox
from ..utils.geometry import iou_one_to_many

logger = logging.getLogger(__name__)


def non_max_suppression(
    candidates: Sequence[RotatedBox],
    confidences: Sequence[float],
    score_threshold: float,
    nms_threshold: float,
    top_k: int = 0,
) -> List[int]:
    """Return the indices of the candidates that survive NMS.

    Overlap is measured as the IoU of the candidates' axis-aligned bounding
    boxes. A candidate is dropped when its IoU with an already kept, higher
    scoring candidate is strictly greater than ``nms_threshold``, so a
    threshold of 1.0 keeps everything.

    Ties in confidence are broken by input order. The returned indices are
    sorted ascending, i.e. in the decoder's scan order.
    """
    if len(candidates) != len(confidences):
        raise ValueError(
            f"got {len(candidates)} candidates but {len(confidences)} confidences"
        )
    if not 0.0 < nms_threshold <= 1.0:
        raise ValueError(f"nms_threshold must be in (0, 1], got {nms_threshold}")
    if not candidates:
        return []

    scores = np.asarray(confidences, dtype=np.float64)
    eligible = np.flatnonzero(scores >= score_threshold)
    # stable sort keeps scan order among equal scores
    order = eligible[np.argsort(-scores[eligible], kind="stable")]
    if top_k > 0:
        order = order[:top_k]

    boxes = np.array([c.bounding_box() for c in candidates], dtype=np.float64)
    keep: List[int] = []
    while order.size:
        best = int(order[0])
        keep.append(best)
        rest = order[1:]
        if not rest.size:
            break
        overlaps = iou_one_to_many(boxes[best], boxes[rest])
        order = rest[overlaps <= nms_threshold]

    keep.sort()
    logger.debug(f"NMS kept {len(keep)} of {len(candidates)} candidates")
    return keep

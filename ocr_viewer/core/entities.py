"""Domain entities (data-only structures) used across services."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple, List, Any
import math

import numpy as np

Point = Tuple[float, float]
Size = Tuple[float, float]  # (width, height)
Rect = Tuple[int, int, int, int]  # (x, y, width, height)


@dataclass(frozen=True, slots=True)
class RotatedBox:
    """Rotated text box candidate in detector-input coordinates.

    ``angle`` is in degrees, using the same convention as OpenCV's
    ``RotatedRect`` so ``to_cv()`` can be handed straight to cv2 helpers.
    """
    center: Point
    size: Size
    angle: float
    confidence: float = 0.0

    def points(self) -> np.ndarray:
        """Return the four corners as a (4, 2) float array.

        Corner order matches ``cv2.boxPoints``: bottom-left, top-left,
        top-right, bottom-right for an unrotated box.
        """
        cx, cy = self.center
        w, h = self.size
        theta = math.radians(self.angle)
        b = math.cos(theta) * 0.5
        a = math.sin(theta) * 0.5
        p0 = (cx - a * h - b * w, cy + b * h - a * w)
        p1 = (cx + a * h - b * w, cy - b * h - a * w)
        p2 = (2 * cx - p0[0], 2 * cy - p0[1])
        p3 = (2 * cx - p1[0], 2 * cy - p1[1])
        return np.array([p0, p1, p2, p3], dtype=np.float64)

    def bounding_box(self) -> Tuple[float, float, float, float]:
        """Exact axis-aligned bounds as (x1, y1, x2, y2)."""
        pts = self.points()
        x1, y1 = pts.min(axis=0)
        x2, y2 = pts.max(axis=0)
        return float(x1), float(y1), float(x2), float(y2)

    def bounding_rect(self) -> Rect:
        """Integer bounding rectangle (x, y, width, height).

        Same rounding as ``cv::RotatedRect::boundingRect``: floor the minimum,
        ceil the maximum, width/height counted inclusively.
        """
        x1, y1, x2, y2 = self.bounding_box()
        x = math.floor(x1)
        y = math.floor(y1)
        return x, y, math.ceil(x2) - x + 1, math.ceil(y2) - y + 1

    def to_cv(self):
        """Return the ``((cx, cy), (w, h), angle)`` tuple used by cv2."""
        return (tuple(self.center), tuple(self.size), self.angle)


# The decoder's output unit
Candidate = RotatedBox


@dataclass(frozen=True, slots=True)
class PixelRegion:
    """Axis-aligned rectangle in original-image pixel coordinates."""
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_points(cls, p1: Point, p2: Point) -> "PixelRegion":
        """Build a region from two opposite corners in any drag direction."""
        x1, y1 = int(p1[0]), int(p1[1])
        x2, y2 = int(p2[0]), int(p2[1])
        return cls(min(x1, x2), min(y1, y2), abs(x2 - x1), abs(y2 - y1))

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return max(0, self.width) * max(0, self.height)

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def to_xyxy(self) -> Tuple[int, int, int, int]:
        return self.x, self.y, self.right, self.bottom

    def clamp(self, image_width: int, image_height: int) -> "PixelRegion":
        """Intersect with the image bounds; may return an empty region."""
        x1 = max(0, min(self.x, image_width))
        y1 = max(0, min(self.y, image_height))
        x2 = max(x1, min(self.right, image_width))
        y2 = max(y1, min(self.bottom, image_height))
        return PixelRegion(x1, y1, x2 - x1, y2 - y1)


@dataclass(slots=True)
class SelectionState:
    anchor: Optional[Point] = None
    current: Optional[Point] = None
    dragging: bool = False


@dataclass(slots=True)
class DetectionResult:
    """Output of one text detection pass over an image."""
    regions: List[PixelRegion]
    candidates: List[RotatedBox] = field(default_factory=list)
    frame: Any = None  # annotated numpy ndarray (RGB), or None
    inference_ms: float = 0.0
    decode_ms: float = 0.0

    @property
    def count(self) -> int:
        return len(self.regions)

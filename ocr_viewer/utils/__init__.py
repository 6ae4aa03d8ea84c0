"""Utility functions package."""

from .geometry import iou_one_to_many, map_to_image, map_candidates
from .image_utils import (
    load_image, save_image, crop_region, draw_regions, render_selection_overlay
)

__all__ = [
    "iou_one_to_many", "map_to_image", "map_candidates",
    "load_image", "save_image", "crop_region", "draw_regions", "render_selection_overlay",
]

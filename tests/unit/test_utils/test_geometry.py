"""Unit tests for geometry helpers and coordinate mapping."""
import numpy as np
import pytest

from ocr_viewer.core.entities import PixelRegion
from ocr_viewer.utils.geometry import iou_one_to_many, map_to_image, map_candidates


class TestIoU:
    """Test suite for iou_one_to_many."""

    def test_identical(self):
        box = np.array([0, 0, 10, 10], dtype=np.float64)

        assert iou_one_to_many(box, box[None, :]).tolist() == [1.0]

    def test_mixed(self):
        """Disjoint, half-shifted and contained boxes in one call."""
        box = np.array([0, 0, 10, 10], dtype=np.float64)
        boxes = np.array([
            [20, 20, 30, 30],
            [5, 0, 15, 10],
            [0, 0, 5, 10],
        ], dtype=np.float64)

        assert iou_one_to_many(box, boxes) == pytest.approx([0.0, 1 / 3, 0.5])

    def test_zero_area(self):
        """Degenerate boxes have zero overlap instead of dividing by zero."""
        box = np.array([5, 5, 5, 5], dtype=np.float64)
        boxes = np.array([[5, 5, 5, 5]], dtype=np.float64)

        assert iou_one_to_many(box, boxes).tolist() == [0.0]


class TestMapToImage:
    """Test suite for map_to_image."""

    def test_identity_scale(self, axis_box):
        """Equal sizes keep the integer bounding rectangle."""
        region = map_to_image(axis_box(10, 7, 17, 11), (320, 320), (320, 320))

        assert region == PixelRegion(10, 7, 8, 5)

    def test_per_axis_scale(self, axis_box):
        """Each axis is scaled by its own ratio and truncated."""
        region = map_to_image(axis_box(10, 7, 17, 11), (320, 320), (640, 480))

        # ratios 2.0 and 1.5: y 10.5 -> 10, height 7.5 -> 7
        assert region == PixelRegion(20, 10, 16, 7)

    def test_linear_in_image_size(self, axis_box):
        """Doubling the image size doubles the region, up to truncation."""
        box = axis_box(12, 20, 60, 44)
        small = map_to_image(box, (320, 320), (333, 517))
        large = map_to_image(box, (320, 320), (666, 1034))

        for a, b in zip((small.x, small.y, small.width, small.height),
                        (large.x, large.y, large.width, large.height)):
            assert abs(b - 2 * a) <= 1

    def test_inverse_in_input_size(self, axis_box):
        """Halving the network input size doubles the region on a fixed image."""
        box = axis_box(12, 20, 60, 44)
        coarse = map_to_image(box, (320, 320), (640, 640))
        fine = map_to_image(box, (640, 640), (640, 640))

        assert fine == PixelRegion(12, 20, 49, 25)
        for a, b in zip((fine.x, fine.y, fine.width, fine.height),
                        (coarse.x, coarse.y, coarse.width, coarse.height)):
            assert abs(b - 2 * a) <= 1

    def test_truncates_toward_zero(self, axis_box):
        """Negative coordinates truncate toward zero, not down."""
        # bounding rect (-3, -3, 11, 11), ratio 1.5 -> x = int(-4.5)
        region = map_to_image(axis_box(-3, -3, 7, 7), (100, 100), (150, 150))

        assert region == PixelRegion(-4, -4, 16, 16)

    def test_not_clamped(self, axis_box):
        """Regions near the border may extend past the image."""
        region = map_to_image(axis_box(300, 300, 330, 330), (320, 320), (320, 320))

        assert region.right > 320
        assert region.bottom > 320


class TestMapCandidates:
    """Test suite for map_candidates."""

    def test_follows_indices(self, axis_box):
        """Only selected candidates are mapped, in index order."""
        boxes = [axis_box(0, 0, 4, 4), axis_box(10, 10, 14, 14), axis_box(20, 20, 24, 24)]

        regions = map_candidates(boxes, [2, 0], (100, 100), (100, 100))

        assert [r.x for r in regions] == [20, 0]

    def test_empty_indices(self, axis_box):
        assert map_candidates([axis_box(0, 0, 4, 4)], [], (100, 100), (100, 100)) == []

"""Unit tests for the text detection service."""
import numpy as np
import pytest

from ocr_viewer.core.entities import DetectionResult, PixelRegion
from ocr_viewer.core.exceptions import TensorShapeError
from ocr_viewer.services.text_detection_service import TextDetectionService


class TestTextDetectionService:
    """Test suite for TextDetectionService."""

    def test_detect_maps_to_image_pixels(self, mock_backend, config, sample_image):
        """Candidate (10, 7, 8, 5) at 320x320 maps onto the 640x480 image."""
        service = TextDetectionService(mock_backend, config)

        result = service.detect(sample_image)

        assert isinstance(result, DetectionResult)
        assert result.regions == [PixelRegion(20, 10, 16, 7)]
        assert len(result.candidates) == 1
        assert result.count == 1
        mock_backend.forward.assert_called_once_with(sample_image)

    def test_annotated_frame(self, mock_backend, config, sample_image):
        service = TextDetectionService(mock_backend, config)

        result = service.detect(sample_image, annotate=True)

        assert result.frame.shape == sample_image.shape
        assert result.frame is not sample_image
        assert not np.array_equal(result.frame, sample_image)

    def test_no_annotation(self, mock_backend, config, sample_image):
        service = TextDetectionService(mock_backend, config)

        assert service.detect(sample_image, annotate=False).frame is None

    def test_confidence_override(self, mock_backend, config, sample_image):
        """A per-call threshold above every score gives no regions."""
        service = TextDetectionService(mock_backend, config)

        result = service.detect(sample_image, confidence_threshold=0.95)

        assert result.regions == []
        assert result.candidates == []

    def test_uses_config_threshold(self, mock_backend, config, sample_image):
        config.confidence_threshold = 0.95
        service = TextDetectionService(mock_backend, config)

        assert service.detect(sample_image).regions == []

    def test_overlapping_cells_merged(self, east_output, mock_backend, config, sample_image):
        """Neighbouring cells describing the same word come back as one region."""
        mock_backend.forward.return_value = east_output(80, 80, {
            (2, 3): (0.9, 1.0, 5.0, 3.0, 2.0, 0.0),
            (2, 4): (0.8, 1.0, 1.0, 3.0, 6.0, 0.0),
        })
        service = TextDetectionService(mock_backend, config)

        result = service.detect(sample_image, annotate=False)

        assert result.regions == [PixelRegion(20, 10, 16, 7)]

    def test_regions_in_scan_order(self, east_output, mock_backend, config, sample_image):
        mock_backend.forward.return_value = east_output(80, 80, {
            (2, 3): (0.6, 1.0, 5.0, 3.0, 2.0, 0.0),
            (40, 40): (0.99, 1.0, 5.0, 3.0, 2.0, 0.0),
        })
        service = TextDetectionService(mock_backend, config)

        result = service.detect(sample_image, annotate=False)

        assert [r.y for r in result.regions] == [10, 238]

    def test_timings_recorded(self, mock_backend, config, sample_image):
        result = TextDetectionService(mock_backend, config).detect(sample_image)

        assert result.inference_ms >= 0.0
        assert result.decode_ms >= 0.0

    def test_bad_backend_output(self, mock_backend, config, sample_image):
        mock_backend.forward.return_value = (
            np.zeros((1, 1, 80, 80), dtype=np.float32),
            np.zeros((1, 4, 80, 80), dtype=np.float32),
        )
        service = TextDetectionService(mock_backend, config)

        with pytest.raises(TensorShapeError):
            service.detect(sample_image)

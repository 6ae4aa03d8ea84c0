"""Application-wide constants."""

APP_NAME = "ocr-image-viewer"
VERSION = "1.0.0"

SUPPORTED_IMAGE_FORMATS = (".png", ".bmp", ".jpg")
SUPPORTED_TEXT_FORMATS = (".txt",)

# EAST feature maps are 4x smaller than the network input
FEATURE_MAP_STRIDE = 4
GEOMETRY_CHANNELS = 5
INPUT_SIZE_MULTIPLE = 32

EAST_OUTPUT_LAYERS = (
    "feature_fusion/Conv_7/Sigmoid",  # text / no text score map
    "feature_fusion/concat_3",        # box geometry map
)
# (r, g, b) mean the EAST model was trained with
EAST_MEAN = (123.68, 116.78, 103.94)

# Capture overlay colours (r, g, b) and dimming alpha
SELECTION_BORDER_COLOR = (210, 100, 40)
OVERLAY_COLOR = (20, 20, 20)
OVERLAY_ALPHA = 50 / 255.0

# Annotation colour for detected regions, (r, g, b)
REGION_COLOR = (255, 0, 0)

"""Main entry point for the OCR Image Viewer."""

import sys
from pathlib import Path

# Allow running from a source checkout without installing the package
sys.path.insert(0, str(Path(__file__).parent))

from ocr_viewer.cli import main

if __name__ == "__main__":
    sys.exit(main())

"""User interface: region selection state machine and capture window.

``capture_window`` imports tkinter, so it is not imported here; the selector
stays usable on machines without a display.
"""

from .region_selector import RegionSelector, SelectorState

__all__ = ["RegionSelector", "SelectorState"]

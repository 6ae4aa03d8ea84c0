"""Borderless full-screen Tk window used in screen capture mode."""
from __future__ import annotations
import logging
import tkinter as tk
from typing import Callable

import numpy as np
from PIL import Image, ImageTk

from .region_selector import RegionSelector
from ..core.entities import PixelRegion
from ..services.capture_service import crop_selection
from ..utils.image_utils import render_selection_overlay

logger = logging.getLogger(__name__)


class CaptureWindow:
    """Shows a captured desktop frame and lets the user drag a selection.

    Return confirms the selection, Escape leaves capture mode without one.
    """

    def __init__(self, root: tk.Tk, frame: np.ndarray,
                 on_capture: Callable[[np.ndarray, PixelRegion], None]):
        self.root = root
        self.frame = frame
        self.on_capture = on_capture
        self.selector = RegionSelector(
            on_confirm=self._on_confirm,
            on_close=self.close,
            on_refresh=self.redraw,
        )
        self._photo = None
        self._image_id = None

        height, width = frame.shape[:2]
        self.window = tk.Toplevel(root)
        self.window.overrideredirect(True)
        self.window.attributes('-topmost', True)
        self.window.geometry(f"{width}x{height}+0+0")

        self.canvas = tk.Canvas(self.window, width=width, height=height,
                                highlightthickness=0, cursor='crosshair')
        self.canvas.pack(fill=tk.BOTH, expand=True)

        self._bind_events()
        self.redraw()
        self.window.focus_force()

    def _bind_events(self):
        self.canvas.bind('<ButtonPress-1>', lambda e: self.selector.press((e.x, e.y)))
        self.canvas.bind('<B1-Motion>', lambda e: self.selector.move((e.x, e.y)))
        self.canvas.bind('<ButtonRelease-1>', lambda e: self.selector.release((e.x, e.y)))
        self.window.bind('<Return>', lambda e: self.selector.confirm())
        self.window.bind('<Escape>', lambda e: self.selector.cancel())

    def redraw(self):
        """Repaint the dimmed frame with the current selection cut out."""
        overlay = render_selection_overlay(self.frame, self.selector.selection)
        self._photo = ImageTk.PhotoImage(Image.fromarray(overlay))
        if self._image_id is None:
            self._image_id = self.canvas.create_image(0, 0, anchor=tk.NW, image=self._photo)
        else:
            self.canvas.itemconfigure(self._image_id, image=self._photo)

    def _on_confirm(self, region: PixelRegion):
        self.on_capture(crop_selection(self.frame, region), region)

    def close(self):
        self.window.destroy()
        self.root.quit()

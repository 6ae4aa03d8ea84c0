"""Rectangular region selection over a captured full-screen image.

``RegionSelector`` holds only the selection state machine. The window that
shows the capture forwards pointer and key events to it and repaints whenever
``on_refresh`` fires; the selector never touches the widget toolkit itself.

States::

    IDLE --press--> DRAGGING --move--> DRAGGING --release--> IDLE
    any --confirm--> FINALIZED (region emitted)
    any --cancel-->  FINALIZED (nothing emitted)
    FINALIZED --press--> DRAGGING
"""
from __future__ import annotations
import logging
from enum import Enum
from typing import Callable, Optional

from ..core.entities import PixelRegion, Point, SelectionState

logger = logging.getLogger(__name__)


class SelectorState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    FINALIZED = "finalized"


def _noop(*_args) -> None:
    pass


class RegionSelector:
    """Tracks a user-dragged rectangle in captured-image pixel coordinates.

    Every event is accepted in every state; out-of-order events (a release
    with no press, a move without a drag) degrade to something sensible
    instead of raising.
    """

    def __init__(
        self,
        on_confirm: Optional[Callable[[PixelRegion], None]] = None,
        on_close: Optional[Callable[[], None]] = None,
        on_refresh: Optional[Callable[[], None]] = None,
    ):
        self.on_confirm = on_confirm or _noop
        self.on_close = on_close or _noop
        self.on_refresh = on_refresh or _noop
        self.state = SelectorState.IDLE
        self.selection_state = SelectionState()

    @property
    def dragging(self) -> bool:
        return self.selection_state.dragging

    @property
    def is_finalized(self) -> bool:
        return self.state is SelectorState.FINALIZED

    @property
    def selection(self) -> Optional[PixelRegion]:
        """The current (normalized) selection, or None before any press."""
        anchor = self.selection_state.anchor
        current = self.selection_state.current
        if anchor is None and current is None:
            return None
        return PixelRegion.from_points(anchor or current, current or anchor)

    def press(self, point: Point) -> None:
        self.selection_state = SelectionState(anchor=point, current=point, dragging=True)
        self.state = SelectorState.DRAGGING
        self.on_refresh()

    def move(self, point: Point) -> None:
        # plain pointer motion without a pressed button
        if self.state is not SelectorState.DRAGGING:
            return
        self.selection_state.current = point
        self.on_refresh()

    def release(self, point: Point) -> None:
        if self.is_finalized:
            return
        if self.selection_state.anchor is None:
            self.selection_state.anchor = point
        self.selection_state.current = point
        self.selection_state.dragging = False
        self.state = SelectorState.IDLE
        self.on_refresh()

    def confirm(self) -> Optional[PixelRegion]:
        """Emit the current selection and finish.

        Without any drag the emitted region has zero size (at the press
        point, or at the origin if there was no press at all).
        """
        if self.is_finalized:
            return None
        region = self.selection or PixelRegion(0, 0, 0, 0)
        logger.info(f"Capture confirmed: {region}")
        self._finalize()
        self.on_confirm(region)
        self.on_close()
        return region

    def cancel(self) -> None:
        if self.is_finalized:
            return
        logger.info("Capture cancelled")
        self._finalize()
        self.on_close()

    def reset(self) -> None:
        self.state = SelectorState.IDLE
        self.selection_state = SelectionState()

    def _finalize(self) -> None:
        self.state = SelectorState.FINALIZED
        self.selection_state = SelectionState()

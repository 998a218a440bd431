"""Pan and zoom handling for the timeline viewport.

Wheel zoom only responds while the zoom modifier (Ctrl/Cmd) is held. A pan
gesture starts on a middle-button press, or on a primary press while the pan
modifier (Shift) is held, and drags the whole track with the pointer.
"""

import logging

from custom_types import Point
from enums import PointerButton
from viewport import ViewportTransform

logger = logging.getLogger(__name__)

DEFAULT_WHEEL_STEP = 0.1
DEFAULT_BUTTON_STEP = 0.25


class PanZoomController:
    """Interprets wheel and pan gestures into viewport updates."""

    def __init__(
        self,
        viewport: ViewportTransform,
        wheel_step: float = DEFAULT_WHEEL_STEP,
        button_step: float = DEFAULT_BUTTON_STEP,
    ) -> None:
        self.viewport = viewport
        self.wheel_step = wheel_step
        self.button_step = button_step
        self._pan_anchor: Point | None = None

    @property
    def is_panning(self) -> bool:
        return self._pan_anchor is not None

    @staticmethod
    def is_pan_trigger(button: PointerButton | str, modifier_pressed: bool) -> bool:
        """True for a middle press, or a primary press with the pan modifier."""
        button = PointerButton(button)
        return button is PointerButton.MIDDLE or (button is PointerButton.PRIMARY and modifier_pressed)

    def on_wheel(self, delta_y: float, modifier_pressed: bool) -> bool:
        """Zoom one step per wheel event. Returns True when the zoom was handled.

        ``delta_y`` follows the scroll-distance convention: positive when the
        wheel rolls toward the user, which zooms out.
        """
        if not modifier_pressed or delta_y == 0:
            return False
        delta = -self.wheel_step if delta_y > 0 else self.wheel_step
        self.viewport.set_zoom(ViewportTransform.apply_zoom_delta(self.viewport.zoom, delta))
        logger.debug("Wheel zoom -> %.2f", self.viewport.zoom)
        return True

    def zoom_in(self) -> float:
        self.viewport.set_zoom(ViewportTransform.apply_zoom_delta(self.viewport.zoom, self.button_step))
        return self.viewport.zoom

    def zoom_out(self) -> float:
        self.viewport.set_zoom(ViewportTransform.apply_zoom_delta(self.viewport.zoom, -self.button_step))
        return self.viewport.zoom

    def on_pan_gesture_start(
        self,
        pointer: Point,
        button: PointerButton | str,
        modifier_pressed: bool,
    ) -> bool:
        """Begin panning if the press qualifies; anchor = pointer - pan."""
        if self._pan_anchor is not None:
            return False
        if not self.is_pan_trigger(button, modifier_pressed):
            return False
        self._pan_anchor = (pointer[0] - self.viewport.pan_x, pointer[1] - self.viewport.pan_y)
        logger.debug("Pan started, anchor=%s", self._pan_anchor)
        return True

    def on_pan_gesture_move(self, pointer: Point) -> Point | None:
        """pan = pointer - anchor. Returns the new pan, or None when not panning."""
        if self._pan_anchor is None:
            return None
        anchor_x, anchor_y = self._pan_anchor
        self.viewport.set_pan(pointer[0] - anchor_x, pointer[1] - anchor_y)
        return self.viewport.pan

    def on_pan_gesture_end(self) -> None:
        self._pan_anchor = None

    def reset_view(self) -> None:
        """zoom=1, pan=(0, 0), unconditionally."""
        self._pan_anchor = None
        self.viewport.reset()

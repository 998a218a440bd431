"""
ViewportTransform: zoom scalar and pan offset mapping the timeline track to screen pixels.
"""

import numpy as np

from custom_types import AffineMatrix, Point
from task_model import DAY_HOURS

MIN_ZOOM = 0.25
MAX_ZOOM = 4.0
DEFAULT_ZOOM = 1.0


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class ViewportTransform:
    """Manage the view transform ``translate(pan) . scale(zoom)`` of the rendered track.

    The origin is the track's top-left corner. Zoom is kept in [0.25, 4]; pan
    is unconstrained.
    """

    def __init__(self, zoom: float = DEFAULT_ZOOM, pan_x: float = 0.0, pan_y: float = 0.0):
        self.zoom = clamp(float(zoom), MIN_ZOOM, MAX_ZOOM)
        self.pan_x = float(pan_x)
        self.pan_y = float(pan_y)

    def __repr__(self) -> str:
        return f"ViewportTransform(zoom={self.zoom}, pan=({self.pan_x}, {self.pan_y}))"

    @property
    def pan(self) -> Point:
        return (self.pan_x, self.pan_y)

    def set_zoom(self, zoom: float) -> None:
        """Update the zoom scalar, clamped to the valid range."""
        self.zoom = clamp(float(zoom), MIN_ZOOM, MAX_ZOOM)

    def set_pan(self, x: float, y: float) -> None:
        self.pan_x = float(x)
        self.pan_y = float(y)

    def reset(self) -> None:
        """Back to zoom 1 and no pan."""
        self.zoom = DEFAULT_ZOOM
        self.pan_x = 0.0
        self.pan_y = 0.0

    def snapshot(self) -> tuple[float, float, float]:
        return (self.zoom, self.pan_x, self.pan_y)

    def restore(self, state: tuple[float, float, float]) -> None:
        zoom, pan_x, pan_y = state
        self.set_zoom(zoom)
        self.set_pan(pan_x, pan_y)

    # ---- screen <-> domain ----

    def screen_to_domain_hour(self, px: float, track_left: float, track_width_px: float) -> float:
        """Map a pointer x coordinate to a domain hour in [0, 24].

        ``track_left`` and ``track_width_px`` describe the track as rendered on
        screen. Zoom cancels in the ratio, so a given fractional position
        within the visible track always maps to the same hour.
        """
        if track_width_px <= 0:
            return 0.0
        x = (px - track_left) / self.zoom
        timeline_width = track_width_px / self.zoom
        hour = (x / timeline_width) * DAY_HOURS
        return clamp(hour, 0.0, DAY_HOURS)

    def screen_delta_to_domain_delta(self, dx: float, track_width_px: float) -> float:
        """Convert a horizontal pixel delta on the rendered track to hours."""
        if track_width_px <= 0:
            return 0.0
        return dx / track_width_px * DAY_HOURS

    def track_rect(self, base_left: float, base_width: float) -> tuple[float, float]:
        """Rendered (left, width) of a track laid out at ``base_left``/``base_width`` before transform."""
        left, _ = self.map_to_screen(base_left, 0.0)
        return (left, base_width * self.zoom)

    # ---- zoom / pan arithmetic ----

    @staticmethod
    def apply_zoom_delta(current: float, requested_delta: float) -> float:
        """Add ``requested_delta`` to ``current`` and clamp to [0.25, 4]."""
        return clamp(current + requested_delta, MIN_ZOOM, MAX_ZOOM)

    def apply_pan(self, dx: float, dy: float) -> Point:
        """Shift the pan offset by a screen delta and return the new offset."""
        self.pan_x += dx
        self.pan_y += dy
        return self.pan

    # ---- matrix form ----

    def compose(self) -> AffineMatrix:
        """3x3 homogeneous matrix for ``translate(pan) . scale(zoom)``."""
        translate = np.array([
            [1.0, 0.0, self.pan_x],
            [0.0, 1.0, self.pan_y],
            [0.0, 0.0, 1.0],
        ])
        scale = np.diag([self.zoom, self.zoom, 1.0])
        return translate @ scale

    def map_to_screen(self, x: float, y: float) -> Point:
        """Map a point in track layout coordinates to screen pixels."""
        sx, sy, _ = self.compose() @ np.array([x, y, 1.0])
        return (float(sx), float(sy))

    def map_from_screen(self, x: float, y: float) -> Point:
        """Map a screen pixel back into track layout coordinates."""
        lx, ly, _ = np.linalg.inv(self.compose()) @ np.array([x, y, 1.0])
        return (float(lx), float(ly))

"""View controller for the planner."""

from PyQt6.QtCore import QObject, pyqtSignal
from pan_zoom import PanZoomController
from viewport import ViewportTransform
import logging

logger = logging.getLogger(__name__)


class ViewController(QObject):
    """Handles zoom buttons, view reset and viewport change notification."""

    view_changed = pyqtSignal()
    zoom_changed = pyqtSignal(float)

    def __init__(self, viewport: ViewportTransform, pan_zoom: PanZoomController) -> None:
        """Initialize ViewController.

        Args:
            viewport: ViewportTransform holding zoom and pan
            pan_zoom: Controller that applies zoom and pan gestures to the viewport
        """
        super().__init__()
        self.viewport = viewport
        self.pan_zoom = pan_zoom
        self._last_zoom = viewport.zoom

    def notify_changed(self) -> None:
        """Emit view_changed, plus zoom_changed when the zoom actually moved."""
        if self.viewport.zoom != self._last_zoom:
            self._last_zoom = self.viewport.zoom
            self.zoom_changed.emit(self.viewport.zoom)
        self.view_changed.emit()

    def zoom_in(self) -> float:
        """Zoom in by one button step (clamped at 4x).

        Returns:
            float: The new zoom level
        """
        zoom = self.pan_zoom.zoom_in()
        logger.debug("Zoom in -> %.2f", zoom)
        self.notify_changed()
        return zoom

    def zoom_out(self) -> float:
        """Zoom out by one button step (clamped at 0.25x).

        Returns:
            float: The new zoom level
        """
        zoom = self.pan_zoom.zoom_out()
        logger.debug("Zoom out -> %.2f", zoom)
        self.notify_changed()
        return zoom

    def reset_view(self) -> None:
        """Reset zoom to 1 and pan to the origin."""
        self.pan_zoom.reset_view()
        self.notify_changed()

    def get_zoom_percent(self) -> int:
        return round(self.viewport.zoom * 100)

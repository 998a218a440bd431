"""
Raster (PNG) export of the schedule.

The image uses its own fixed layout and ignores the live viewport: the 24h
domain maps linearly across the canvas width minus a label gutter, and each
task gets one row in list order. Out-of-range extents from imported files are
clamped here rather than rejected.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence
import logging

import numpy as np
from PyQt6.QtCore import QBuffer, QByteArray, QIODevice, QRectF, Qt
from PyQt6.QtGui import QColor, QFont, QImage, QPainter, QPen

from config_manager import config
from custom_types import HourArray
from task_model import DAY_HOURS, Task
from utils.time_format import format_hour_range, hour_label

logger = logging.getLogger(__name__)

CANVAS_WIDTH = 1400
HEADER_HEIGHT = 120
ROW_HEIGHT = 70
LEFT_GUTTER = 200
RIGHT_MARGIN = 50
GRID_TOP = 80
GRID_BOTTOM_MARGIN = 20
LABEL_BASELINE = 75
FIRST_ROW_Y = 90
BAR_HEIGHT = 50


@dataclass(frozen=True)
class TaskRect:
    x: float
    y: float
    width: float
    height: float


class RasterLayout:
    """Fixed hour-to-pixel geometry of the exported image."""

    def __init__(self, task_count: int) -> None:
        self.task_count = max(0, task_count)
        self.width = CANVAS_WIDTH
        self.height = HEADER_HEIGHT + ROW_HEIGHT * self.task_count
        self.hour_width = (CANVAS_WIDTH - LEFT_GUTTER - RIGHT_MARGIN) / DAY_HOURS

    def hour_to_x(self, hour: float) -> float:
        return LEFT_GUTTER + hour * self.hour_width

    def gridline_xs(self) -> HourArray:
        """x of the 25 hour gridlines (0:00 through 24:00)."""
        return np.linspace(self.hour_to_x(0.0), self.hour_to_x(DAY_HOURS), int(DAY_HOURS) + 1)

    def grid_span(self) -> tuple[float, float]:
        return (GRID_TOP, self.height - GRID_BOTTOM_MARGIN)

    def task_rect(self, index: int, task: Task) -> TaskRect:
        start = min(max(task.start, 0.0), DAY_HOURS)
        end = min(max(task.start + task.duration, start), DAY_HOURS)
        return TaskRect(
            x=self.hour_to_x(start),
            y=FIRST_ROW_Y + index * ROW_HEIGHT,
            width=(end - start) * self.hour_width,
            height=BAR_HEIGHT,
        )


def _font(point_size: int, bold: bool = False) -> QFont:
    font = QFont(config.get_font("primary"))
    font.setPixelSize(point_size)
    font.setBold(bold)
    return font


def render_image(tasks: Sequence[Task], timestamp: datetime | None = None) -> QImage:
    """Paint the schedule into a QImage. Requires a QGuiApplication."""
    layout = RasterLayout(len(tasks))
    timestamp = timestamp or datetime.now()

    image = QImage(layout.width, layout.height, QImage.Format.Format_ARGB32)
    image.fill(config.get_qt_color("exportBackground", "#ffffff"))

    painter = QPainter(image)
    try:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing, True)

        # Header
        painter.setPen(config.get_qt_color("exportTitle", "#1f2937"))
        painter.setFont(_font(18, bold=True))
        painter.drawText(30, 35, config.get_string("app", "exportTitle", "Daily Routine Timeline"))
        painter.setFont(_font(13))
        painter.drawText(30, 55, timestamp.strftime("%Y-%m-%d %H:%M:%S"))

        # Hour gridlines and labels
        grid_top, grid_bottom = layout.grid_span()
        grid_pen = QPen(config.get_qt_color("exportGridLine", "#e5e7eb"), 1)
        label_color = config.get_qt_color("exportHourLabel", "#6b7280")
        painter.setFont(_font(11))
        for hour, x in enumerate(layout.gridline_xs()):
            painter.setPen(grid_pen)
            painter.drawLine(int(round(x)), int(grid_top), int(round(x)), int(grid_bottom))
            painter.setPen(label_color)
            label_rect = QRectF(x - 30, LABEL_BASELINE - 14, 60, 16)
            painter.drawText(label_rect, Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignBottom, hour_label(hour))

        # Task rows
        text_color = QColor("#ffffff")
        for index, task in enumerate(tasks):
            rect = layout.task_rect(index, task)
            painter.fillRect(QRectF(rect.x, rect.y, rect.width, rect.height), QColor(task.color))
            painter.setPen(text_color)
            painter.setFont(_font(13, bold=True))
            painter.drawText(int(rect.x + 10), int(rect.y + 25), task.name)
            painter.setFont(_font(11))
            painter.drawText(int(rect.x + 10), int(rect.y + 42), format_hour_range(task.start, task.duration))
    finally:
        painter.end()

    return image


def render_png(tasks: Sequence[Task], timestamp: datetime | None = None) -> bytes:
    """Render the schedule and encode it as PNG bytes."""
    image = render_image(tasks, timestamp)
    data = QByteArray()
    buffer = QBuffer(data)
    buffer.open(QIODevice.OpenModeFlag.WriteOnly)
    try:
        if not image.save(buffer, "PNG"):
            raise IOError("PNG encoding failed")
    finally:
        buffer.close()
    logger.debug("Rendered %d tasks to %dx%d PNG", len(tasks), image.width(), image.height())
    return bytes(data.data())

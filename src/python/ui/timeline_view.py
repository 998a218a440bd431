"""
Interactive 24-hour timeline widget.

The widget lays the track out in unzoomed "layout" coordinates (hour columns
across ``trackWidth`` pixels, one row per task) and paints it under the
viewport transform. Raw Qt input is translated into calls on the
ApplicationController, which routes it through the single input dispatcher.
"""

import math
from typing import Any

import numpy as np
from PyQt6.QtCore import QEvent, QPointF, QRectF, QSize, Qt
from PyQt6.QtGui import (
    QColor, QContextMenuEvent, QCursor, QFocusEvent, QFont, QKeyEvent, QMouseEvent,
    QPainter, QPaintEvent, QPen, QTransform, QWheelEvent,
)
from PyQt6.QtWidgets import QColorDialog, QInputDialog, QLineEdit, QMenu, QWidget

from config_manager import config
from drag_edit import TrackGeometry
from enums import Direction, EditMode, GestureKind, PointerButton
from gestures import TaskHit
from task_model import DAY_HOURS, Task
from utils.time_format import format_duration, format_hour_range, hour_label
import logging

logger = logging.getLogger(__name__)

_BUTTONS = {
    Qt.MouseButton.LeftButton: PointerButton.PRIMARY,
    Qt.MouseButton.MiddleButton: PointerButton.MIDDLE,
    Qt.MouseButton.RightButton: PointerButton.SECONDARY,
}


class TimelineView(QWidget):
    """Paints hour columns and task bars and feeds pointer input to the controller.

    Layout coordinates (before the viewport transform):
        - the track spans x in [padding, padding + trackWidth]
        - the hour label row sits at y in [padding, padding + headerHeight]
        - task row i starts at padding + headerHeight + i * rowHeight
    """

    def __init__(self, controller: Any, parent: Any = None) -> None:
        """Initialize the timeline view.

        Args:
            controller: The ApplicationController
            parent: Parent widget
        """
        super().__init__(parent)
        self.controller = controller

        geometry = config.get_timeline_config()
        self.track_width = float(geometry["trackWidth"])
        self.padding = float(geometry["padding"])
        self.header_height = float(geometry["headerHeight"])
        self.row_height = float(geometry["rowHeight"])
        self.bar_height = float(geometry["barHeight"])
        self.handle_width = float(geometry["handleWidth"])

        self._hover: TaskHit | None = None

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMinimumSize(QSize(400, 200))

        self.controller.task_ctrl.tasks_changed.connect(self._on_tasks_changed)
        self.controller.view_ctrl.view_changed.connect(self.update)

    def sizeHint(self) -> QSize:
        rows = max(1, len(self.controller.task_list))
        width = self.padding * 2 + self.track_width
        height = self.padding * 2 + self.header_height + rows * self.row_height
        return QSize(int(width), int(height))

    def _on_tasks_changed(self, tasks: list[Task]) -> None:
        self.updateGeometry()
        self.update()

    # ---- geometry ----

    def track_geometry(self) -> TrackGeometry:
        """The track as currently rendered on screen."""
        left, width = self.controller.viewport.track_rect(self.padding, self.track_width)
        return TrackGeometry(left, width)

    def hour_to_layout_x(self, hour: float) -> float:
        return self.padding + hour / DAY_HOURS * self.track_width

    def bar_rect(self, index: int, task: Task) -> QRectF:
        """Layout rect of a task bar; out-of-range extents are clamped for display."""
        start = min(max(task.start, 0.0), DAY_HOURS)
        end = min(max(task.end, start), DAY_HOURS)
        x = self.hour_to_layout_x(start)
        y = (self.padding + self.header_height + index * self.row_height
             + (self.row_height - self.bar_height) / 2)
        return QRectF(x, y, self.hour_to_layout_x(end) - x, self.bar_height)

    def hit_test(self, x: float, y: float) -> TaskHit | None:
        """Find the task bar (and the part of it) under a screen point.

        The resize handles are ``handleWidth`` layout pixels wide at each bar
        edge; the left handle wins on bars too narrow for both.
        """
        lx, ly = self.controller.viewport.map_from_screen(x, y)
        row_top = self.padding + self.header_height
        if ly < row_top:
            return None
        index = int(math.floor((ly - row_top) / self.row_height))
        tasks = self.controller.task_list.tasks
        if index < 0 or index >= len(tasks):
            return None

        task = tasks[index]
        rect = self.bar_rect(index, task)
        if not rect.contains(QPointF(lx, ly)):
            return None
        if lx <= rect.left() + self.handle_width:
            return TaskHit(task.id, EditMode.RESIZE_LEFT)
        if lx >= rect.right() - self.handle_width:
            return TaskHit(task.id, EditMode.RESIZE_RIGHT)
        return TaskHit(task.id, EditMode.MOVE)

    def layout_transform(self) -> QTransform:
        m = self.controller.viewport.compose()
        return QTransform(m[0, 0], m[1, 0], m[0, 1], m[1, 1], m[0, 2], m[1, 2])

    # ---- painting ----

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            painter.fillRect(self.rect(), config.get_qt_color("background"))
            painter.setTransform(self.layout_transform())
            self._paint_track(painter)
            self._paint_tasks(painter)
        finally:
            painter.end()

    def _paint_track(self, painter: QPainter) -> None:
        tasks_height = max(1, len(self.controller.task_list)) * self.row_height
        top = self.padding
        bottom = self.padding + self.header_height + tasks_height
        painter.fillRect(
            QRectF(self.padding, top, self.track_width, bottom - top),
            config.get_qt_color("canvas"),
        )

        xs = np.linspace(self.hour_to_layout_x(0.0), self.hour_to_layout_x(DAY_HOURS), int(DAY_HOURS) + 1)
        grid_pen = QPen(config.get_qt_color("gridLine"), 0)
        label_color = config.get_qt_color("hourLabel")
        font = QFont(config.get_font("primary"))
        font.setPixelSize(11)
        painter.setFont(font)
        column_width = self.track_width / DAY_HOURS

        for hour, x in enumerate(xs):
            painter.setPen(grid_pen)
            painter.drawLine(QPointF(x, top), QPointF(x, bottom))
            if hour < int(DAY_HOURS):
                painter.setPen(label_color)
                label_rect = QRectF(x, top, column_width, self.header_height)
                painter.drawText(label_rect, Qt.AlignmentFlag.AlignCenter, hour_label(hour))

    def _paint_tasks(self, painter: QPainter) -> None:
        text_color = config.get_qt_color("taskText")
        hover_color = QColor(config.get_color("handleHover"))
        name_font = QFont(config.get_font("primary"))
        name_font.setPixelSize(13)
        name_font.setBold(True)
        time_font = QFont(config.get_font("primary"))
        time_font.setPixelSize(11)

        for index, task in enumerate(self.controller.task_list.tasks):
            rect = self.bar_rect(index, task)
            painter.fillRect(rect, QColor(task.color))

            if self._hover is not None and self._hover.task_id == task.id:
                handle = min(self.handle_width, rect.width())
                painter.fillRect(QRectF(rect.left(), rect.top(), handle, rect.height()), hover_color)
                painter.fillRect(QRectF(rect.right() - handle, rect.top(), handle, rect.height()), hover_color)

            text_rect = rect.adjusted(self.handle_width, 4, -self.handle_width, -4)
            painter.save()
            painter.setClipRect(rect)
            painter.setPen(text_color)
            painter.setFont(name_font)
            painter.drawText(text_rect, Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop, task.name)
            painter.setFont(time_font)
            painter.drawText(
                text_rect,
                Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignBottom,
                format_hour_range(task.start, task.duration),
            )
            painter.restore()

    # ---- input ----

    def mousePressEvent(self, event: QMouseEvent) -> None:
        button = _BUTTONS.get(event.button())
        if button is None:
            super().mousePressEvent(event)
            return
        pos = event.position()
        pan_modifier = bool(event.modifiers() & Qt.KeyboardModifier.ShiftModifier)
        hit = self.hit_test(pos.x(), pos.y())
        kind = self.controller.handle_pointer_down(
            pos.x(), pos.y(), button, pan_modifier, hit, self.track_geometry()
        )
        if kind is GestureKind.NONE:
            super().mousePressEvent(event)
            return
        self.setFocus(Qt.FocusReason.MouseFocusReason)
        self._update_cursor(kind, hit)
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        pos = event.position()
        kind = self.controller.handle_pointer_move(pos.x(), pos.y(), self.track_geometry())
        if kind is GestureKind.NONE:
            self._set_hover(self.hit_test(pos.x(), pos.y()))
        event.accept()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        self.controller.handle_pointer_up()
        pos = event.position()
        self._set_hover(self.hit_test(pos.x(), pos.y()))
        event.accept()

    def wheelEvent(self, event: QWheelEvent) -> None:
        # Qt reports positive angleDelta when rolling away from the user
        delta_y = -event.angleDelta().y()
        modifiers = event.modifiers()
        zoom_modifier = bool(
            modifiers & (Qt.KeyboardModifier.ControlModifier | Qt.KeyboardModifier.MetaModifier)
        )
        if self.controller.handle_wheel(delta_y, zoom_modifier):
            event.accept()
        else:
            event.ignore()

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if event.key() == Qt.Key.Key_Escape and self.controller.dispatcher.kind is not GestureKind.NONE:
            self.cancel_gesture()
            event.accept()
            return
        super().keyPressEvent(event)

    def focusOutEvent(self, event: QFocusEvent) -> None:
        self.cancel_gesture()
        super().focusOutEvent(event)

    def event(self, event: QEvent) -> bool:
        if event.type() == QEvent.Type.WindowDeactivate:
            self.cancel_gesture()
        return super().event(event)

    def leaveEvent(self, event: QEvent) -> None:
        if self.controller.dispatcher.kind is GestureKind.NONE:
            self._set_hover(None)
        super().leaveEvent(event)

    def cancel_gesture(self) -> None:
        """Abort any pan or edit in progress (focus or pointer capture lost)."""
        if self.controller.handle_pointer_cancel() is not GestureKind.NONE:
            self.unsetCursor()
            self.update()

    # ---- hover and cursor ----

    def _set_hover(self, hit: TaskHit | None) -> None:
        if hit != self._hover:
            self._hover = hit
            self.update()
        self._update_cursor(GestureKind.NONE, hit)

    def _update_cursor(self, kind: GestureKind, hit: TaskHit | None) -> None:
        match kind:
            case GestureKind.PANNING:
                self.setCursor(QCursor(Qt.CursorShape.ClosedHandCursor))
            case GestureKind.EDITING | GestureKind.NONE if hit is not None:
                if hit.mode is EditMode.MOVE:
                    self.setCursor(QCursor(Qt.CursorShape.SizeAllCursor))
                else:
                    self.setCursor(QCursor(Qt.CursorShape.SizeHorCursor))
            case _:
                self.unsetCursor()

    # ---- task context menu ----

    def contextMenuEvent(self, event: QContextMenuEvent) -> None:
        pos = event.pos()
        hit = self.hit_test(pos.x(), pos.y())
        if hit is None:
            super().contextMenuEvent(event)
            return
        self.cancel_gesture()
        menu = self.build_task_menu(hit.task_id)
        menu.exec(event.globalPos())
        menu.deleteLater()
        event.accept()

    def build_task_menu(self, task_id: int) -> QMenu:
        """Menu of edits for one task: rename, recolor, reorder and delete.

        The actions are also kept in ``self.task_menu_actions`` by key.
        """
        task = self.controller.task_list.get(task_id)
        index = self.controller.task_list.index_of(task_id)
        menu = QMenu(self)
        self.task_menu_actions = {}

        header = menu.addAction(f"{task.name} ({format_duration(task.duration)})")
        header.setEnabled(False)
        menu.addSeparator()

        def add(key, slot, enabled=True):
            action = menu.addAction(config.get_string("taskMenu", key))
            action.setEnabled(enabled)
            action.triggered.connect(slot)
            self.task_menu_actions[key] = action

        add("rename", lambda: self.rename_task(task_id))
        add("color", lambda: self.pick_task_color(task_id))
        menu.addSeparator()
        add("moveUp", lambda: self.controller.execute_command(
            'reorder_task', task_id=task_id, direction=Direction.UP), enabled=index > 0)
        add("moveDown", lambda: self.controller.execute_command(
            'reorder_task', task_id=task_id, direction=Direction.DOWN),
            enabled=index < len(self.controller.task_list) - 1)
        menu.addSeparator()
        add("delete", lambda: self.controller.execute_command('remove_task', task_id=task_id))
        return menu

    def rename_task(self, task_id: int) -> None:
        task = self.controller.task_list.get(task_id)
        if task is None:
            return
        name, ok = QInputDialog.getText(
            self,
            config.get_string("taskMenu", "renameTitle"),
            config.get_string("taskMenu", "renameLabel"),
            QLineEdit.EchoMode.Normal,
            task.name,
        )
        if ok:
            self.controller.execute_command('rename_task', task_id=task_id, name=name)

    def pick_task_color(self, task_id: int) -> None:
        task = self.controller.task_list.get(task_id)
        if task is None:
            return
        picked = QColorDialog.getColor(QColor(task.color), self, config.get_string("taskMenu", "colorTitle"))
        if picked.isValid():
            self.controller.execute_command('recolor_task', task_id=task_id, color=picked.name())

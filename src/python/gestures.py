"""
Single input-dispatch point for pointer and wheel events on the timeline.

The active gesture is an explicit tagged union:

    Gesture = NoGesture | Panning | Editing

Every pointer event is routed by one exhaustive ``match`` over it, so a pan
and a task edit can never be in progress at the same time: a new gesture can
only start from ``NoGesture``.
"""

from dataclasses import dataclass
from typing import NamedTuple
import logging

from drag_edit import DragEditStateMachine, TrackGeometry
from enums import EditMode, GestureKind, PointerButton
from pan_zoom import PanZoomController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoGesture:
    kind = GestureKind.NONE


@dataclass(frozen=True)
class Panning:
    kind = GestureKind.PANNING


@dataclass(frozen=True)
class Editing:
    task_id: int
    mode: EditMode
    kind = GestureKind.EDITING


Gesture = NoGesture | Panning | Editing


class TaskHit(NamedTuple):
    """The task (and which part of it) under the pointer at press time."""
    task_id: int
    mode: EditMode


class InputDispatcher:
    """Routes raw input to the pan/zoom controller or the drag edit state machine."""

    gesture: Gesture

    def __init__(self, pan_zoom: PanZoomController, drag: DragEditStateMachine) -> None:
        self.pan_zoom = pan_zoom
        self.drag = drag
        self.gesture = NoGesture()

    @property
    def kind(self) -> GestureKind:
        return self.gesture.kind

    def pointer_down(
        self,
        x: float,
        y: float,
        button: PointerButton | str,
        pan_modifier: bool,
        hit: TaskHit | None,
        track: TrackGeometry,
    ) -> GestureKind:
        """Try to start a gesture. Returns the kind started (NONE if ignored).

        A press that qualifies as a pan trigger pans even over a task bar;
        otherwise a primary press on a task starts an edit.
        """
        button = PointerButton(button)
        match self.gesture:
            case Panning() | Editing():
                logger.debug("pointer_down ignored during %s", self.gesture.kind)
                return GestureKind.NONE
            case NoGesture():
                pass

        if self.pan_zoom.on_pan_gesture_start((x, y), button, pan_modifier):
            self.gesture = Panning()
            return GestureKind.PANNING

        if hit is not None and button is PointerButton.PRIMARY:
            if self.drag.pointer_down(hit.task_id, hit.mode, x, track):
                self.gesture = Editing(task_id=hit.task_id, mode=EditMode(hit.mode))
                return GestureKind.EDITING

        return GestureKind.NONE

    def pointer_move(self, x: float, y: float, track: TrackGeometry) -> GestureKind:
        """Feed a move to the active gesture. Returns the kind that consumed it."""
        match self.gesture:
            case NoGesture():
                return GestureKind.NONE
            case Panning():
                self.pan_zoom.on_pan_gesture_move((x, y))
                return GestureKind.PANNING
            case Editing():
                if self.drag.pointer_move(x, track) is None:
                    # Session invalidated (task deleted mid-drag)
                    self.gesture = NoGesture()
                    return GestureKind.NONE
                return GestureKind.EDITING

    def pointer_up(self) -> GestureKind:
        """Finish the active gesture. Returns the kind that ended."""
        ended = self.gesture.kind
        match self.gesture:
            case NoGesture():
                pass
            case Panning():
                self.pan_zoom.on_pan_gesture_end()
            case Editing():
                self.drag.pointer_up()
        self.gesture = NoGesture()
        return ended

    def cancel(self) -> GestureKind:
        """Abort the active gesture without applying further changes."""
        ended = self.gesture.kind
        match self.gesture:
            case NoGesture():
                pass
            case Panning():
                self.pan_zoom.on_pan_gesture_end()
            case Editing():
                self.drag.cancel()
        self.gesture = NoGesture()
        return ended

    def wheel(self, delta_y: float, zoom_modifier: bool) -> bool:
        """Forward a wheel event to the zoom handler unless a task edit is active."""
        match self.gesture:
            case Editing():
                return False
            case NoGesture() | Panning():
                return self.pan_zoom.on_wheel(delta_y, zoom_modifier)

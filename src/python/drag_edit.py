"""Drag edit state machine for task bars.

A press on a task body or one of its resize handles starts a drag session;
each pointer move recomputes the task extent from the snapshot taken at press
time; release or cancellation ends the session.

States:
    Idle: ``session is None``
    Dragging: ``session`` holds the task id, mode, press hour and snapshot
"""

from dataclasses import dataclass
from typing import NamedTuple
import logging

from custom_types import Extent
from enums import EditMode
from task_model import DAY_HOURS, MIN_DURATION, TaskList
from viewport import ViewportTransform

logger = logging.getLogger(__name__)


class TrackGeometry(NamedTuple):
    """The timeline track as rendered on screen."""
    left: float
    width: float


@dataclass(frozen=True)
class DragSession:
    """Snapshot of an in-progress edit gesture."""
    task_id: int
    mode: EditMode
    start_hour: float
    original_start: float
    original_duration: float


def compute_extent(session: DragSession, current_hour: float, task_start: float) -> Extent:
    """Return the new ``(start, duration)`` for a pointer at ``current_hour``.

    ``task_start`` is the task's current start; only resize-right reads it.
    """
    original_start = session.original_start
    original_duration = session.original_duration

    match session.mode:
        case EditMode.MOVE:
            time_diff = current_hour - session.start_hour
            new_start = original_start + time_diff
            new_start = max(0.0, min(DAY_HOURS - original_duration, new_start))
            return (new_start, original_duration)

        case EditMode.RESIZE_LEFT:
            time_diff = current_hour - original_start
            new_start = original_start + time_diff
            new_duration = original_duration - time_diff

            # Overshoot past 0 is absorbed so the right edge stays put
            if new_start < 0:
                new_duration += new_start
                new_start = 0.0

            # Then the minimum duration pins the right edge
            if new_duration < MIN_DURATION:
                new_start = original_start + original_duration - MIN_DURATION
                new_duration = MIN_DURATION

            return (new_start, new_duration)

        case EditMode.RESIZE_RIGHT:
            new_duration = current_hour - task_start
            new_duration = max(MIN_DURATION, min(DAY_HOURS - task_start, new_duration))
            return (task_start, new_duration)

        case _:
            raise ValueError(f"Invalid edit mode: {session.mode}")


class DragEditStateMachine:
    """Turns pointer down/move/up on a task into move and resize mutations."""

    session: DragSession | None

    def __init__(self, task_list: TaskList, viewport: ViewportTransform) -> None:
        self.task_list = task_list
        self.viewport = viewport
        self.session = None

    @property
    def is_dragging(self) -> bool:
        return self.session is not None

    def pointer_down(
        self,
        task_id: int,
        mode: EditMode | str,
        pointer_x: float,
        track: TrackGeometry,
    ) -> bool:
        """Start a drag session. Returns False if one is active or the task is gone."""
        if self.session is not None:
            logger.debug("pointer_down ignored: drag session already active")
            return False
        task = self.task_list.get(task_id)
        if task is None:
            return False

        start_hour = self.viewport.screen_to_domain_hour(pointer_x, track.left, track.width)
        self.session = DragSession(
            task_id=task_id,
            mode=EditMode(mode),
            start_hour=start_hour,
            original_start=task.start,
            original_duration=task.duration,
        )
        logger.debug("Drag %s started on task %s at %.3fh", self.session.mode, task_id, start_hour)
        return True

    def pointer_move(self, pointer_x: float, track: TrackGeometry) -> Extent | None:
        """Apply the mode update for the pointer position; returns the new extent."""
        session = self.session
        if session is None:
            return None
        task = self.task_list.get(session.task_id)
        if task is None:
            # Deleted mid-drag
            logger.debug("Task %s vanished during drag; session dropped", session.task_id)
            self.session = None
            return None

        current_hour = self.viewport.screen_to_domain_hour(pointer_x, track.left, track.width)
        start, duration = compute_extent(session, current_hour, task.start)
        if not self.task_list.set_extent(session.task_id, start, duration):
            self.session = None
            return None
        return (start, duration)

    def pointer_up(self) -> DragSession | None:
        """End the session; returns the finished session, if any."""
        session, self.session = self.session, None
        if session is not None:
            logger.debug("Drag %s finished on task %s", session.mode, session.task_id)
        return session

    def cancel(self) -> None:
        """Drop the session without applying a mutation (focus or grab lost)."""
        if self.session is not None:
            logger.debug("Drag on task %s cancelled", self.session.task_id)
        self.session = None

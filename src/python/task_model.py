"""
Time domain model: the 24-hour day and the ordered task list.

- Domain hours are floats in [0, 24]
- A task occupies [start, start + duration] with duration >= 0.25 (15 minutes)
- The list order is meaningful (row position) and independent of start
- Overlapping tasks are allowed
"""

import logging
import math
import random
import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict, replace
from typing import Any, Callable, Iterable, Mapping

from custom_types import ColorHex, TaskRecord
from enums import Direction

logger = logging.getLogger(__name__)

DAY_HOURS = 24.0
MIN_DURATION = 0.25
DEFAULT_START = 12.0
DEFAULT_DURATION = 1.0
DEFAULT_NAME = "New Task"
DEFAULT_COLOR = "#3b82f6"

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# Absorbs float noise in template sums like 20.1 + 3.9
_EPSILON = 1e-9


class InvalidTaskError(ValueError):
    """Raised when a task template or color violates the domain invariants."""


def normalize_color(color: str) -> ColorHex:
    """Return ``color`` as lowercase ``#rrggbb``.

    Raises:
        InvalidTaskError: If ``color`` is not a ``#rgb`` or ``#rrggbb`` string
    """
    if not isinstance(color, str) or not _HEX_COLOR.match(color):
        raise InvalidTaskError(f"Invalid color: {color!r}")
    digits = color[1:].lower()
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return f"#{digits}"


def random_color(rng: random.Random | None = None) -> ColorHex:
    """Pick a random ``#rrggbb`` color."""
    rng = rng or random
    return f"#{rng.randrange(0x1000000):06x}"


def validate_extent(start: float, duration: float) -> None:
    """Check the at-rest invariants of a task extent.

    Raises:
        InvalidTaskError: If start < 0, duration < 0.25 or start + duration > 24
    """
    if not (math.isfinite(start) and math.isfinite(duration)):
        raise InvalidTaskError(f"Non-finite extent: start={start}, duration={duration}")
    if start < 0:
        raise InvalidTaskError(f"Start must be >= 0, got {start}")
    if duration < MIN_DURATION:
        raise InvalidTaskError(f"Duration must be >= {MIN_DURATION}, got {duration}")
    if start + duration > DAY_HOURS + _EPSILON:
        raise InvalidTaskError(f"Task ends after {DAY_HOURS:g}h: start={start}, duration={duration}")


@dataclass
class Task:
    """A scheduled block on the day timeline."""
    id: int
    name: str
    start: float
    duration: float
    color: ColorHex

    @property
    def end(self) -> float:
        return self.start + self.duration

    def validate(self) -> None:
        validate_extent(self.start, self.duration)
        normalize_color(self.color)

    def to_dict(self) -> TaskRecord:
        return asdict(self)  # type: ignore[return-value]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Task":
        """Build a task from a document record without checking invariants."""
        return cls(
            id=int(data["id"]),
            name=str(data.get("name", DEFAULT_NAME)),
            start=float(data["start"]),
            duration=float(data["duration"]),
            color=str(data.get("color", DEFAULT_COLOR)),
        )


class TaskIdGenerator:
    """Issues session-unique, strictly increasing task ids.

    Ids start from the wall clock in milliseconds and never repeat, even when
    several tasks are created within the same millisecond.
    """

    def __init__(self, clock: Any = None) -> None:
        self._clock = clock or (lambda: time.time_ns() // 1_000_000)
        self._last = 0

    def next_id(self) -> int:
        self._last = max(int(self._clock()), self._last + 1)
        return self._last

    def bump(self, used_ids: Iterable[int]) -> None:
        """Make sure future ids are greater than every id in ``used_ids``."""
        for used in used_ids:
            if used > self._last:
                self._last = used


class TaskListObserver(ABC):
    """Abstract base class for task list observers."""

    @abstractmethod
    def on_tasks_changed(self, operation: str, tasks: list[Task]) -> None:
        """Called after the task list is modified."""
        pass


class CallbackObserver(TaskListObserver):
    """Adapts a plain callable to the observer interface."""

    def __init__(self, callback: Callable[[str, list[Task]], None]) -> None:
        self.callback = callback

    def on_tasks_changed(self, operation: str, tasks: list[Task]) -> None:
        self.callback(operation, tasks)


class TaskList:
    """Ordered sequence of tasks; the sole owner of every Task.

    Mutations that reference a missing id are no-ops: a side panel edit may
    race with a deletion.
    """

    _tasks: list[Task]
    _observers: list[TaskListObserver]

    def __init__(
        self,
        tasks: Iterable[Task] | None = None,
        id_generator: TaskIdGenerator | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._ids = id_generator or TaskIdGenerator()
        self._tasks = self._with_unique_ids(tasks or [])
        self._rng = rng
        self._observers = []

    # ---- observers ----

    def add_observer(self, observer: TaskListObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def remove_observer(self, observer: TaskListObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self, operation: str) -> None:
        snapshot = self.tasks
        for observer in self._observers:
            observer.on_tasks_changed(operation, snapshot)

    # ---- queries ----

    @property
    def tasks(self) -> list[Task]:
        """Copies of the tasks in list order."""
        return [replace(t) for t in self._tasks]

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self):
        return iter(self.tasks)

    def get(self, task_id: int) -> Task | None:
        index = self.index_of(task_id)
        return None if index is None else replace(self._tasks[index])

    def index_of(self, task_id: int) -> int | None:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None

    # ---- mutations ----

    def add_task(self, template: Mapping[str, Any] | None = None) -> Task:
        """Append a new task built from ``template``.

        Missing template fields take the defaults (start 12, duration 1,
        "New Task", random color). Any ``id`` in the template is ignored.

        Raises:
            InvalidTaskError: If the template violates an invariant
        """
        template = template or {}
        start = float(template.get("start", DEFAULT_START))
        duration = float(template.get("duration", DEFAULT_DURATION))
        validate_extent(start, duration)
        color = template.get("color")
        color = normalize_color(color) if color is not None else random_color(self._rng)

        task = Task(
            id=self._ids.next_id(),
            name=str(template.get("name", DEFAULT_NAME)),
            start=start,
            duration=duration,
            color=color,
        )
        self._tasks.append(task)
        logger.debug("Added task %s at %.2fh for %.2fh", task.id, start, duration)
        self._notify("add")
        return replace(task)

    def remove_task(self, task_id: int) -> None:
        index = self.index_of(task_id)
        if index is None:
            logger.debug("remove_task: no task with id %s", task_id)
            return
        del self._tasks[index]
        self._notify("remove")

    def reorder(self, task_id: int, direction: Direction | str) -> bool:
        """Swap a task with its neighbour; False at the sequence boundary."""
        direction = Direction(direction)
        index = self.index_of(task_id)
        if index is None:
            return False
        new_index = index - 1 if direction is Direction.UP else index + 1
        if new_index < 0 or new_index >= len(self._tasks):
            return False
        self._tasks[index], self._tasks[new_index] = self._tasks[new_index], self._tasks[index]
        self._notify("reorder")
        return True

    def rename(self, task_id: int, name: str) -> None:
        index = self.index_of(task_id)
        if index is None:
            return
        self._tasks[index].name = name
        self._notify("rename")

    def recolor(self, task_id: int, color: str) -> None:
        index = self.index_of(task_id)
        if index is None:
            return
        self._tasks[index].color = normalize_color(color)
        self._notify("recolor")

    def set_extent(self, task_id: int, start: float, duration: float) -> bool:
        """Apply a drag edit result. False when the task no longer exists."""
        index = self.index_of(task_id)
        if index is None:
            return False
        task = self._tasks[index]
        if task.start == start and task.duration == duration:
            return True
        task.start = start
        task.duration = duration
        self._notify("edit")
        return True

    def replace_all(self, tasks: Iterable[Task]) -> None:
        """Swap in a whole new sequence (import or autosave restore)."""
        self._tasks = self._with_unique_ids(tasks)
        self._notify("replace")

    def _with_unique_ids(self, tasks: Iterable[Task]) -> list[Task]:
        """Copy ``tasks``, giving every repeated id after the first a fresh one."""
        copies = [replace(t) for t in tasks]
        self._ids.bump(t.id for t in copies)
        seen: set[int] = set()
        for task in copies:
            if task.id in seen:
                old_id = task.id
                task.id = self._ids.next_id()
                logger.warning("Duplicate task id %s for %r reassigned to %s", old_id, task.name, task.id)
            seen.add(task.id)
        return copies

"""Task list controller for the planner."""

from typing import Any
from PyQt6.QtCore import QObject, pyqtSignal
from enums import Direction
from task_model import CallbackObserver, Task, TaskList
import logging

logger = logging.getLogger(__name__)


class TaskController(QObject):
    """Handles add, remove, reorder, rename and recolor on the task list.

    Every change to the list, including drag edits applied by the edit state
    machine, is re-emitted as ``tasks_changed(list[Task])``.
    """

    tasks_changed = pyqtSignal(object)  # list[Task]

    def __init__(self, task_list: TaskList) -> None:
        """Initialize TaskController.

        Args:
            task_list: The task list model owned by the application controller
        """
        super().__init__()
        self.task_list = task_list
        self._observer = CallbackObserver(self._on_list_changed)
        self.task_list.add_observer(self._observer)

    def _on_list_changed(self, operation: str, tasks: list[Task]) -> None:
        logger.debug("Task list %s (%d tasks)", operation, len(tasks))
        self.tasks_changed.emit(tasks)

    @property
    def tasks(self) -> list[Task]:
        return self.task_list.tasks

    def add_task(self, template: dict[str, Any] | None = None) -> Task:
        """Append a task built from ``template``.

        Raises:
            InvalidTaskError: If the template violates a task invariant
        """
        task = self.task_list.add_task(template)
        logger.info("Added task %s '%s'", task.id, task.name)
        return task

    def remove_task(self, task_id: int) -> None:
        self.task_list.remove_task(task_id)

    def reorder(self, task_id: int, direction: Direction | str) -> bool:
        return self.task_list.reorder(task_id, direction)

    def rename(self, task_id: int, name: str) -> None:
        self.task_list.rename(task_id, name)

    def recolor(self, task_id: int, color: str) -> None:
        self.task_list.recolor(task_id, color)

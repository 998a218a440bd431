"""
Command pattern for planner controller actions.

The side panel and menu bar drive the task list and the viewport through
these commands via ``ApplicationController.execute_command``.
"""
from abc import ABC, abstractmethod
from typing import Any, TYPE_CHECKING
from enums import Direction

if TYPE_CHECKING:
    from controllers.application_controller import ApplicationController


class Command(ABC):
    """Base class for controller commands."""
    def __init__(self, controller: 'ApplicationController') -> None:
        self.controller = controller

    @abstractmethod
    def execute(self) -> Any:
        """Execute the command against the controller."""
        pass


class AddTaskCommand(Command):
    """Append a task; missing template fields take the defaults."""
    def __init__(self, controller: 'ApplicationController', template: dict[str, Any] | None = None) -> None:
        super().__init__(controller)
        self.template = template

    def execute(self) -> Any:
        return self.controller.task_ctrl.add_task(self.template)


class RemoveTaskCommand(Command):
    """Delete a task by id (no-op if it is already gone)."""
    def __init__(self, controller: 'ApplicationController', task_id: int) -> None:
        super().__init__(controller)
        self.task_id = task_id

    def execute(self) -> None:
        self.controller.task_ctrl.remove_task(self.task_id)


class ReorderTaskCommand(Command):
    """Move a task one row up or down."""
    def __init__(self, controller: 'ApplicationController', task_id: int, direction: str | Direction) -> None:
        super().__init__(controller)
        self.task_id = task_id
        self.direction = Direction(direction) if isinstance(direction, str) else direction

    def execute(self) -> bool:
        return self.controller.task_ctrl.reorder(self.task_id, self.direction)


class RenameTaskCommand(Command):
    """Change a task's display name."""
    def __init__(self, controller: 'ApplicationController', task_id: int, name: str) -> None:
        super().__init__(controller)
        self.task_id = task_id
        self.name = name

    def execute(self) -> None:
        self.controller.task_ctrl.rename(self.task_id, self.name)


class RecolorTaskCommand(Command):
    """Change a task's color."""
    def __init__(self, controller: 'ApplicationController', task_id: int, color: str) -> None:
        super().__init__(controller)
        self.task_id = task_id
        self.color = color

    def execute(self) -> None:
        self.controller.task_ctrl.recolor(self.task_id, self.color)


class ZoomInCommand(Command):
    """Zoom in by one button step."""
    def execute(self) -> float:
        return self.controller.view_ctrl.zoom_in()


class ZoomOutCommand(Command):
    """Zoom out by one button step."""
    def execute(self) -> float:
        return self.controller.view_ctrl.zoom_out()


class ResetViewCommand(Command):
    """Back to zoom 1 and no pan."""
    def execute(self) -> None:
        self.controller.view_ctrl.reset_view()

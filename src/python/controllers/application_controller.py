"""ApplicationController - Main orchestrator for the routine planner.

This controller owns the whole editor state and passes it explicitly to
every handler; there are no module-level globals beyond configuration.

Architecture:
- Delegates task list edits, view changes and export to sub-controllers
- Routes raw pointer and wheel input through the single InputDispatcher
- Autosaves after every committed change and restores at start-up
- Exposes the core hooks: on_task_list_changed, on_request_export,
  on_request_import
"""

import pathlib
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Iterator
import random
import logging

from config_manager import config
from custom_types import TaskListChangedCallback
from drag_edit import DragEditStateMachine, TrackGeometry
from enums import ExportFormat, GestureKind, PointerButton
from error_handler import ErrorHandler
from gestures import InputDispatcher, TaskHit
from pan_zoom import PanZoomController
from serialization import default_export_filename
from session_store import SessionState, SessionStore
from task_model import Task, TaskList, TaskListObserver
from commands import (
    AddTaskCommand, RemoveTaskCommand, ReorderTaskCommand,
    RenameTaskCommand, RecolorTaskCommand,
    ZoomInCommand, ZoomOutCommand, ResetViewCommand,
)

from controllers.task_controller import TaskController
from controllers.view_controller import ViewController
from controllers.export_controller import ExportController

logger = logging.getLogger(__name__)

# Map command names to command classes
COMMAND_MAP: dict[str, type] = {
    'add_task': AddTaskCommand,
    'remove_task': RemoveTaskCommand,
    'reorder_task': ReorderTaskCommand,
    'rename_task': RenameTaskCommand,
    'recolor_task': RecolorTaskCommand,
    'zoom_in': ZoomInCommand,
    'zoom_out': ZoomOutCommand,
    'reset_view': ResetViewCommand,
}


class ApplicationController(TaskListObserver):
    """Main application controller that orchestrates all domain controllers.

    - TaskController: add, remove, reorder, rename, recolor
    - ViewController: zoom buttons, view reset, view change signals
    - ExportController: JSON document and PNG image export/import

    Shared State:
        - task_list: The ordered task list (sole owner of every task)
        - viewport: Zoom and pan
        - dispatcher: The active gesture (none, panning or editing)
        - store: Autosave store, or None when autosave is disabled

    Autosave policy: task edits made while a drag is in progress are saved
    once at release; pan moves are saved once at pan end; every other change
    is saved immediately.
    """

    def __init__(
        self,
        store: SessionStore | None = None,
        autosave: bool | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the ApplicationController.

        Args:
            store: Autosave store; built from the storage config when omitted
            autosave: Overrides storage.autosaveEnabled
            rng: Random source for default task colors
        """
        storage = config.get_storage_config()
        if autosave is None:
            autosave = bool(storage["autosaveEnabled"])
        if autosave and store is None:
            store = SessionStore(storage["autosavePath"])
        self.store = store if autosave else None

        state = self.store.load() if self.store is not None else SessionState()
        self.viewport = state.viewport
        self.task_list = TaskList(state.tasks, rng=rng)

        zoom_config = config.get_zoom_config()
        self.pan_zoom = PanZoomController(
            self.viewport,
            wheel_step=zoom_config["wheelStep"],
            button_step=zoom_config["buttonStep"],
        )
        self.drag = DragEditStateMachine(self.task_list, self.viewport)
        self.dispatcher = InputDispatcher(self.pan_zoom, self.drag)

        # Initialize all sub-controllers
        self.task_ctrl = TaskController(self.task_list)
        self.view_ctrl = ViewController(self.viewport, self.pan_zoom)
        self.export_ctrl = ExportController()

        self._autosave_suspended = False
        self.task_list.add_observer(self)
        self.view_ctrl.view_changed.connect(self._on_view_changed)

        logger.debug(
            "ApplicationController initialized with %d tasks, zoom %.2f, autosave %s",
            len(self.task_list), self.viewport.zoom, self.store is not None,
        )

    def execute_command(self, name: str, /, **kwargs: Any) -> Any:
        """Instantiate and execute a Command by name, passing kwargs to its constructor.

        Args:
            name: Command name to execute
            **kwargs: Arguments to pass to the command constructor

        Returns:
            Result of command execution

        Raises:
            KeyError: If command name is unknown
        """
        cmd_cls = COMMAND_MAP.get(name)
        if not cmd_cls:
            raise KeyError(f"Unknown command: {name}")
        cmd = cmd_cls(self, **kwargs)
        return cmd.execute()

    @property
    def tasks(self) -> list[Task]:
        return self.task_list.tasks

    # ========== Hooks ==========

    def on_task_list_changed(self, callback: TaskListChangedCallback) -> None:
        """Register ``callback(tasks)`` to run after every task list change."""
        self.task_ctrl.tasks_changed.connect(callback)

    def on_request_export(self) -> bytes:
        """Serialize the current tasks and viewport to a JSON document."""
        return self.export_ctrl.export_document(self.task_list.tasks, self.viewport)

    def on_request_import(self, data: bytes) -> list[Task]:
        """Replace the editor state with an imported document.

        The document is decoded completely before anything is replaced, so a
        malformed document leaves tasks, viewport and any gesture in progress
        untouched. On success the active gesture is cancelled.

        Raises:
            DocumentFormatError: If the document is malformed
        """
        decoded = self.export_ctrl.decode_import(data, self.viewport)
        self.dispatcher.cancel()

        with self._batched_autosave():
            decoded.apply_viewport(self.viewport)
            self.task_list.replace_all(decoded.tasks)
            self.view_ctrl.notify_changed()

        logger.info("Imported %d tasks", len(decoded.tasks))
        return self.task_list.tasks

    def export_image(self, timestamp: datetime | None = None) -> bytes:
        """Render the current tasks as a PNG image."""
        return self.export_ctrl.export_image(self.task_list.tasks, timestamp)

    # ========== File Export/Import ==========

    def export_document_to_file(self, path: str | pathlib.Path) -> pathlib.Path:
        return self.export_ctrl.write_file(path, self.on_request_export())

    def export_image_to_file(self, path: str | pathlib.Path) -> pathlib.Path:
        return self.export_ctrl.write_file(path, self.export_image())

    def import_document_from_file(self, path: str | pathlib.Path) -> list[Task]:
        """Read and import a document file.

        Raises:
            OSError: If the file cannot be read
            DocumentFormatError: If the document is malformed
        """
        return self.on_request_import(self.export_ctrl.read_file(path))

    @staticmethod
    def default_filename(fmt: ExportFormat | str, today: date | None = None) -> str:
        return default_export_filename(fmt, today)

    # ========== Pointer Input ==========

    def handle_pointer_down(
        self,
        x: float,
        y: float,
        button: PointerButton | str,
        pan_modifier: bool,
        hit: TaskHit | None,
        track: TrackGeometry,
    ) -> GestureKind:
        """Start a pan or an edit. Returns the gesture kind started."""
        return self.dispatcher.pointer_down(x, y, button, pan_modifier, hit, track)

    def handle_pointer_move(self, x: float, y: float, track: TrackGeometry) -> GestureKind:
        kind = self.dispatcher.pointer_move(x, y, track)
        if kind is GestureKind.PANNING:
            self.view_ctrl.notify_changed()
        return kind

    def handle_pointer_up(self) -> GestureKind:
        """Finish the active gesture and autosave its result."""
        ended = self.dispatcher.pointer_up()
        self._commit_gesture(ended)
        return ended

    def handle_pointer_cancel(self) -> GestureKind:
        """Abort the active gesture (focus or mouse grab lost)."""
        ended = self.dispatcher.cancel()
        self._commit_gesture(ended)
        return ended

    def handle_wheel(self, delta_y: float, zoom_modifier: bool) -> bool:
        handled = self.dispatcher.wheel(delta_y, zoom_modifier)
        if handled:
            self.view_ctrl.notify_changed()
        return handled

    def _commit_gesture(self, ended: GestureKind) -> None:
        match ended:
            case GestureKind.PANNING:
                self.view_ctrl.notify_changed()
            case GestureKind.EDITING:
                self.save_session()
            case GestureKind.NONE:
                pass

    # ========== Autosave ==========

    def on_tasks_changed(self, operation: str, tasks: list[Task]) -> None:
        """Autosave after a task list change.

        Extent edits from an active drag are saved once when the drag ends;
        any other change is saved at once.
        """
        if operation == "edit" and self.dispatcher.kind is GestureKind.EDITING:
            return
        self.save_session()

    def _on_view_changed(self) -> None:
        if self.dispatcher.kind is GestureKind.PANNING:
            return
        self.save_session()

    @contextmanager
    def _batched_autosave(self) -> Iterator[None]:
        self._autosave_suspended = True
        try:
            yield
        finally:
            self._autosave_suspended = False
        self.save_session()

    def save_session(self) -> bool:
        """Write the current state to the autosave store.

        Returns:
            bool: True if the state was written
        """
        if self.store is None or self._autosave_suspended:
            return False
        try:
            self.store.save(self.task_list.tasks, self.viewport)
        except OSError as e:
            ErrorHandler.report_recoverable(e, f"Autosave to {self.store.path}")
            return False
        return True

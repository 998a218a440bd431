"""Menu bar manager for the routine planner.

This module provides the MenuBarManager class which handles creation of the
application's menu bar: File, Edit, View and Help menus.
"""

from typing import Any, Callable
from PyQt6.QtWidgets import QMenuBar
from PyQt6.QtGui import QAction, QKeySequence
from config_manager import config
import logging

logger = logging.getLogger(__name__)


class MenuBarManager:
    """Manages the creation and configuration of the application menu bar.

    The MenuBarManager creates a complete menu bar with:
    - File menu (Import, Export, Download Image, Quit)
    - Edit menu (Add Task)
    - View menu (Zoom In, Zoom Out, Reset View)
    - Help menu (Keyboard Shortcuts, About)

    File and Help actions use callbacks into the main window; Edit and View
    actions go straight through the controller's command dispatcher.
    """

    def __init__(
        self,
        parent: Any,
        controller: Any,
        on_import: Callable[[], None],
        on_export: Callable[[], None],
        on_download_image: Callable[[], None],
        on_quit: Callable[[], None],
        on_show_shortcuts: Callable[[], None],
        on_show_about: Callable[[], None]
    ) -> None:
        """Initialize the MenuBarManager.

        Args:
            parent: The parent window (typically PlannerView)
            controller: The application controller
            on_import: Callback for the Import action
            on_export: Callback for the Export action
            on_download_image: Callback for the Download Image action
            on_quit: Callback for the Quit action
            on_show_shortcuts: Callback for showing the keyboard shortcuts dialog
            on_show_about: Callback for showing the about dialog
        """
        self.parent = parent
        self.controller = controller
        self.on_import = on_import
        self.on_export = on_export
        self.on_download_image = on_download_image
        self.on_quit = on_quit
        self.on_show_shortcuts = on_show_shortcuts
        self.on_show_about = on_show_about

        self.menu_bar: QMenuBar | None = None
        self.actions: dict[str, QAction] = {}

    def create_menu_bar(self) -> QMenuBar:
        """Create and configure the complete menu bar.

        Returns:
            QMenuBar: The configured menu bar ready to be added to the main window
        """
        self.menu_bar = QMenuBar(self.parent)

        self._create_file_menu()
        self._create_edit_menu()
        self._create_view_menu()
        self._create_help_menu()

        return self.menu_bar

    def _add_action(
        self,
        menu: Any,
        key: str,
        callback: Callable[[], Any],
        shortcut: QKeySequence | str | None = None,
        status_tip: str | None = None,
    ) -> QAction:
        action = QAction(config.get_string("menus", key), self.parent)
        if shortcut is not None:
            action.setShortcut(shortcut)
        if status_tip:
            action.setStatusTip(status_tip)
        action.triggered.connect(lambda checked=False: callback())
        menu.addAction(action)
        self.actions[key] = action
        return action

    def _create_file_menu(self) -> None:
        """Create the File menu with import and export actions."""
        file_menu = self.menu_bar.addMenu(config.get_string("menus", "file"))
        self._add_action(file_menu, "import", self.on_import, 'Ctrl+O', 'Load a schedule from a JSON file')
        self._add_action(file_menu, "export", self.on_export, 'Ctrl+S', 'Save the schedule as a JSON file')
        self._add_action(file_menu, "downloadImage", self.on_download_image, 'Ctrl+E', 'Save the schedule as a PNG image')
        file_menu.addSeparator()
        self._add_action(file_menu, "quit", self.on_quit, QKeySequence.StandardKey.Quit)

    def _create_edit_menu(self) -> None:
        """Create the Edit menu."""
        edit_menu = self.menu_bar.addMenu(config.get_string("menus", "edit"))
        self._add_action(
            edit_menu, "addTask",
            lambda: self.controller.execute_command('add_task'),
            'Ctrl+N', 'Append a one-hour task at noon',
        )

    def _create_view_menu(self) -> None:
        """Create the View menu with zoom actions."""
        view_menu = self.menu_bar.addMenu(config.get_string("menus", "view"))
        self._add_action(view_menu, "zoomIn", lambda: self.controller.execute_command('zoom_in'), 'Ctrl+=')
        self._add_action(view_menu, "zoomOut", lambda: self.controller.execute_command('zoom_out'), 'Ctrl+-')
        self._add_action(view_menu, "resetView", lambda: self.controller.execute_command('reset_view'), 'Ctrl+0')

    def _create_help_menu(self) -> None:
        """Create the Help menu with documentation and about actions."""
        help_menu = self.menu_bar.addMenu(config.get_string("menus", "help"))
        self._add_action(help_menu, "shortcuts", self.on_show_shortcuts)
        self._add_action(help_menu, "about", self.on_show_about)

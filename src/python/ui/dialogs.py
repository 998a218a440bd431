"""Dialog classes for the routine planner."""

import os
from typing import Any
from PyQt6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QTextBrowser,
    QPushButton,
    QMessageBox,
)
from PyQt6.QtCore import QSize, QUrl
from PyQt6.QtGui import QDesktopServices, QFont
from config_manager import config


def _style_sheet() -> str:
    return (
        f"background-color: {config.get_color('background')}; "
        f"color: {config.get_color('textColor')};"
    )


class KeyboardShortcutsDialog(QDialog):
    """Dialog showing keyboard and mouse shortcuts."""

    def __init__(self, parent: Any = None) -> None:
        """Initialize the keyboard shortcuts dialog.

        Args:
            parent: Parent widget
        """
        super().__init__(parent)
        self.setWindowTitle(config.get_string("dialogs", "shortcutsTitle"))
        self.setMinimumSize(QSize(500, 400))
        self._init_ui()

    def _init_ui(self) -> None:
        """Initialize the dialog UI."""
        self.setStyleSheet(_style_sheet())

        layout = QVBoxLayout()
        self.setLayout(layout)

        text_browser = QTextBrowser()
        text_browser.setStyleSheet(_style_sheet())
        text_browser.setFont(QFont(config.get_font('primary')))

        shortcuts_html = f"""
        <h2>{config.get_string("dialogs", "shortcutsTitle")}</h2>

        <h3>{config.get_string("shortcuts", "tasksSection")}</h3>
        <ul>
            <li><b>Drag</b> a task bar: {config.get_string("shortcuts", "moveTask")}</li>
            <li><b>Drag</b> the left or right edge: {config.get_string("shortcuts", "resizeTask")}</li>
            <li><b>Escape</b> during a drag: {config.get_string("shortcuts", "cancelDrag")}</li>
            <li><b>Right-click</b> a task bar: {config.get_string("shortcuts", "taskMenu")}</li>
            <li><b>Ctrl+N</b>: {config.get_string("shortcuts", "addTask")}</li>
        </ul>

        <h3>{config.get_string("shortcuts", "viewSection")}</h3>
        <ul>
            <li><b>Shift+Drag</b> or <b>Middle-drag</b>: {config.get_string("shortcuts", "pan")}</li>
            <li><b>Ctrl/Cmd+Scroll</b>: {config.get_string("shortcuts", "zoom")}</li>
            <li><b>Ctrl+=</b> / <b>Ctrl+-</b>: {config.get_string("shortcuts", "zoomButtons")}</li>
            <li><b>Ctrl+0</b>: {config.get_string("shortcuts", "resetView")}</li>
        </ul>

        <h3>{config.get_string("shortcuts", "fileSection")}</h3>
        <ul>
            <li><b>Ctrl+O</b>: {config.get_string("shortcuts", "importFile")}</li>
            <li><b>Ctrl+S</b>: {config.get_string("shortcuts", "exportFile")}</li>
            <li><b>Ctrl+E</b>: {config.get_string("shortcuts", "exportImage")}</li>
        </ul>
        """

        text_browser.setHtml(shortcuts_html)
        layout.addWidget(text_browser)

        close_button = QPushButton(config.get_string("buttons", "close"))
        close_button.clicked.connect(self.accept)
        layout.addWidget(close_button)

        self.setModal(True)


class AboutDialog(QDialog):
    """Dialog showing information about the application."""

    def __init__(self, parent: Any = None) -> None:
        """Initialize the about dialog.

        Args:
            parent: Parent widget
        """
        super().__init__(parent)
        self.setWindowTitle(config.get_string("dialogs", "aboutTitle"))
        self.setMinimumSize(QSize(400, 240))
        self._init_ui()

    def _init_ui(self) -> None:
        """Initialize the dialog UI."""
        self.setStyleSheet(_style_sheet())

        layout = QVBoxLayout()
        self.setLayout(layout)

        text_browser = QTextBrowser()
        text_browser.setStyleSheet(_style_sheet())
        text_browser.setFont(QFont(config.get_font('primary')))

        title, _, description = config.get_string("dialogs", "aboutText").partition("\n")
        text_browser.setHtml(f"<h1>{title}</h1><p>{description}</p>")
        layout.addWidget(text_browser)

        close_button = QPushButton(config.get_string("buttons", "close"))
        close_button.clicked.connect(self.accept)
        layout.addWidget(close_button)


class ExportCompletionDialog:
    """Message box confirming a finished export, with an Open Folder button."""

    @staticmethod
    def show_dialog(path: str | None, parent: Any = None) -> None:
        """Show the export completion dialog.

        Args:
            path: Path of the written file
            parent: Parent widget
        """
        if not path:
            return

        msg_box = QMessageBox(parent)
        msg_box.setWindowTitle(config.get_string("dialogs", "exportCompleteTitle"))
        msg_box.setIcon(QMessageBox.Icon.Information)
        msg_box.setText(f"{config.get_string('dialogs', 'exportCompleteMessage')}\n\n{path}")

        open_dir_button = msg_box.addButton(config.get_string("buttons", "openFolder"), QMessageBox.ButtonRole.ActionRole)
        msg_box.addButton(QMessageBox.StandardButton.Close)
        msg_box.exec()

        if msg_box.clickedButton() == open_dir_button:
            QDesktopServices.openUrl(QUrl.fromLocalFile(os.path.dirname(os.path.abspath(path))))


def show_import_failed(parent: Any, detail: str = "") -> None:
    """Tell the user an import was rejected; the schedule is unchanged."""
    message = config.get_string("dialogs", "importFailedMessage")
    msg_box = QMessageBox(parent)
    msg_box.setWindowTitle(config.get_string("dialogs", "importFailedTitle"))
    msg_box.setIcon(QMessageBox.Icon.Warning)
    msg_box.setText(message)
    if detail:
        msg_box.setDetailedText(detail)
    msg_box.exec()


def show_export_failed(parent: Any, detail: str) -> None:
    QMessageBox.critical(parent, config.get_string("dialogs", "exportFailedTitle"), detail)

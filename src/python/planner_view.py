from PyQt6.QtWidgets import (
    QApplication, QFileDialog, QHBoxLayout, QLabel, QMainWindow, QPushButton,
    QScrollArea, QVBoxLayout, QWidget,
)
from PyQt6.QtGui import QCloseEvent, QFont
from PyQt6.QtCore import Qt
import logging
from typing import Any

from config_manager import config
from enums import ExportFormat
from error_handler import ErrorHandler
from serialization import DocumentFormatError

# UI Module imports
from ui.dialogs import (
    AboutDialog, ExportCompletionDialog, KeyboardShortcutsDialog,
    show_export_failed, show_import_failed,
)
from ui.menu_bar import MenuBarManager
from ui.timeline_view import TimelineView

logger = logging.getLogger(__name__)

JSON_FILTER = "JSON files (*.json);;All files (*)"
PNG_FILTER = "PNG images (*.png)"


class PlannerView(QMainWindow):
    """Main window: toolbar row, the timeline, and the navigation hint."""

    def __init__(self, controller: Any) -> None:
        super().__init__()
        self.controller = controller

        self.init_ui()
        self._setup_menu_bar()

        self.controller.view_ctrl.zoom_changed.connect(self.update_zoom_label)
        self.controller.export_ctrl.export_complete.connect(self._on_export_complete)
        self.controller.export_ctrl.export_failed.connect(self._on_export_failed)
        self.update_zoom_label(self.controller.viewport.zoom)

    def _setup_menu_bar(self) -> None:
        """Set up the menu bar using MenuBarManager."""
        self.menu_manager = MenuBarManager(
            parent=self,
            controller=self.controller,
            on_import=self.import_document,
            on_export=self.export_document,
            on_download_image=self.export_image,
            on_quit=self.close,
            on_show_shortcuts=lambda: KeyboardShortcutsDialog(self).exec(),
            on_show_about=lambda: AboutDialog(self).exec()
        )
        self.setMenuBar(self.menu_manager.create_menu_bar())

    def init_ui(self) -> None:
        self.setWindowTitle(config.get_string("app", "windowTitle"))
        self.resize(
            config.get_ui_setting("window", "width", 1280),
            config.get_ui_setting("window", "height", 760),
        )

        app = QApplication.instance()
        if app:
            app.setFont(QFont(config.get_font('primary')))

        main_widget = QWidget()
        main_layout = QVBoxLayout()
        main_widget.setLayout(main_layout)
        main_widget.setStyleSheet(
            f"background-color: {config.get_color('background')}; color: {config.get_color('textColor')};"
        )
        self.setCentralWidget(main_widget)

        # Toolbar row
        toolbar = QHBoxLayout()
        add_button = QPushButton(config.get_string("buttons", "addTask"))
        add_button.clicked.connect(lambda: self.controller.execute_command('add_task'))
        toolbar.addWidget(add_button)
        toolbar.addStretch(1)

        zoom_out_button = QPushButton(config.get_string("buttons", "zoomOut"))
        zoom_out_button.clicked.connect(lambda: self.controller.execute_command('zoom_out'))
        toolbar.addWidget(zoom_out_button)

        self.zoom_label = QLabel()
        self.zoom_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.zoom_label.setMinimumWidth(50)
        toolbar.addWidget(self.zoom_label)

        zoom_in_button = QPushButton(config.get_string("buttons", "zoomIn"))
        zoom_in_button.clicked.connect(lambda: self.controller.execute_command('zoom_in'))
        toolbar.addWidget(zoom_in_button)

        reset_button = QPushButton(config.get_string("buttons", "resetView"))
        reset_button.clicked.connect(lambda: self.controller.execute_command('reset_view'))
        toolbar.addWidget(reset_button)
        main_layout.addLayout(toolbar)

        # Timeline
        self.timeline = TimelineView(self.controller)
        scroll_area = QScrollArea()
        scroll_area.setWidget(self.timeline)
        scroll_area.setWidgetResizable(True)
        main_layout.addWidget(scroll_area, 1)

        hint = QLabel(config.get_string("hints", "navigation"))
        hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        main_layout.addWidget(hint)

    def update_zoom_label(self, zoom: float) -> None:
        self.zoom_label.setText(f"{self.controller.view_ctrl.get_zoom_percent()}%")

    def _on_export_complete(self, path: str) -> None:
        self.statusBar().showMessage(f"{config.get_string('dialogs', 'exportCompleteMessage')} {path}", 5000)

    def _on_export_failed(self, detail: str) -> None:
        self.statusBar().showMessage(detail, 5000)

    # ---- file actions ----

    def import_document(self) -> None:
        """Pick a JSON file and replace the schedule with it."""
        filename, _ = QFileDialog.getOpenFileName(
            self, config.get_string("menus", "import"), "", JSON_FILTER
        )
        if not filename:
            logger.debug("Import canceled by user")
            return
        try:
            self.controller.import_document_from_file(filename)
        except (OSError, DocumentFormatError) as e:
            show_import_failed(self, str(e))

    def export_document(self) -> None:
        """Save the schedule and viewport as a JSON file."""
        default_name = self.controller.default_filename(ExportFormat.JSON)
        filename, _ = QFileDialog.getSaveFileName(
            self, config.get_string("menus", "export"), default_name, JSON_FILTER
        )
        if not filename:
            logger.debug("Export canceled by user")
            return
        self._write_export(lambda: self.controller.export_document_to_file(filename))

    def export_image(self) -> None:
        """Save the schedule as a PNG image."""
        default_name = self.controller.default_filename(ExportFormat.PNG)
        filename, _ = QFileDialog.getSaveFileName(
            self, config.get_string("menus", "downloadImage"), default_name, PNG_FILTER
        )
        if not filename:
            logger.debug("Image export canceled by user")
            return
        self._write_export(lambda: self.controller.export_image_to_file(filename))

    def _write_export(self, write: Any) -> None:
        try:
            path = write()
        except OSError as e:
            show_export_failed(self, ErrorHandler.log_exception(e, "Export"))
            return
        ExportCompletionDialog.show_dialog(str(path), self)

    def closeEvent(self, event: QCloseEvent) -> None:
        self.timeline.cancel_gesture()
        self.controller.save_session()
        super().closeEvent(event)

"""Export controller for the planner."""

import pathlib
from datetime import datetime
from typing import Sequence
from PyQt6.QtCore import QObject, pyqtSignal
from error_handler import ErrorHandler
from raster_export import render_png
from serialization import DecodedDocument, DocumentFormatError, decode_document, encode_document
from task_model import Task
from viewport import ViewportTransform
import logging

logger = logging.getLogger(__name__)


class ExportController(QObject):
    """Handles structured export/import and raster image export."""

    export_complete = pyqtSignal(str)
    export_failed = pyqtSignal(str)

    def export_document(self, tasks: Sequence[Task], viewport: ViewportTransform) -> bytes:
        """Encode the editor state as a JSON document."""
        return encode_document(tasks, viewport)

    def decode_import(self, data: bytes, viewport: ViewportTransform) -> DecodedDocument:
        """Decode an import document without touching live state.

        Raises:
            DocumentFormatError: If the document is malformed
        """
        try:
            return decode_document(data, viewport)
        except DocumentFormatError as e:
            message = ErrorHandler.report_recoverable(e, "Import failed")
            self.export_failed.emit(message)
            raise

    def export_image(self, tasks: Sequence[Task], timestamp: datetime | None = None) -> bytes:
        """Render the schedule to PNG bytes."""
        return render_png(tasks, timestamp)

    def write_file(self, path: str | pathlib.Path, payload: bytes) -> pathlib.Path:
        """Write an export payload to ``path``.

        Raises:
            OSError: If the file cannot be written
        """
        target = pathlib.Path(path)
        logger.debug("Writing %d bytes to %s", len(payload), target)
        try:
            target.write_bytes(payload)
        except OSError as e:
            self.export_failed.emit(ErrorHandler.report_recoverable(e, f"Writing {target}"))
            raise
        self.export_complete.emit(str(target))
        return target

    def read_file(self, path: str | pathlib.Path) -> bytes:
        """Read an import file.

        Raises:
            OSError: If the file cannot be read
        """
        source = pathlib.Path(path)
        try:
            return source.read_bytes()
        except OSError as e:
            self.export_failed.emit(ErrorHandler.report_recoverable(e, f"Reading {source}"))
            raise

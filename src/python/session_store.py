"""Autosave of the full editor state.

The store writes the same envelope as the structured export after every
committed change and reads it back at start-up. A missing or corrupt file
falls back to an empty task list and the default viewport.
"""

import logging
import os
import pathlib
import tempfile
from dataclasses import dataclass, field

from error_handler import ErrorHandler
from serialization import DocumentFormatError, decode_document, encode_document
from task_model import Task
from viewport import ViewportTransform

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    tasks: list[Task] = field(default_factory=list)
    viewport: ViewportTransform = field(default_factory=ViewportTransform)


class SessionStore:
    """Reads and writes the autosave document at ``path``."""

    def __init__(self, path: str | pathlib.Path) -> None:
        self.path = pathlib.Path(path).expanduser()

    def load(self) -> SessionState:
        """Restore the last saved state, or the default state."""
        try:
            data = self.path.read_bytes()
        except FileNotFoundError:
            logger.debug("No autosave at %s; starting empty", self.path)
            return SessionState()
        except OSError as e:
            ErrorHandler.report_recoverable(e, f"Reading autosave {self.path}")
            return SessionState()

        try:
            decoded = decode_document(data, ViewportTransform())
        except DocumentFormatError as e:
            ErrorHandler.report_recoverable(e, f"Corrupt autosave {self.path}, using defaults")
            return SessionState()

        viewport = ViewportTransform()
        decoded.apply_viewport(viewport)
        logger.info("Restored %d tasks from %s", len(decoded.tasks), self.path)
        return SessionState(tasks=decoded.tasks, viewport=viewport)

    def save(self, tasks: list[Task], viewport: ViewportTransform) -> None:
        """Write the state atomically (temp file + rename)."""
        payload = encode_document(tasks, viewport)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".autosave-", suffix=".json", dir=self.path.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.debug("Autosaved %d tasks to %s", len(tasks), self.path)

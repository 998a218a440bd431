"""UI components package for the routine planner."""

from ui.dialogs import (
    KeyboardShortcutsDialog,
    AboutDialog,
    ExportCompletionDialog,
)
from ui.timeline_view import TimelineView

__all__ = [
    "KeyboardShortcutsDialog",
    "AboutDialog",
    "ExportCompletionDialog",
    "TimelineView",
]

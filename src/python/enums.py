"""
Enumerations for the routine planner using Python 3.11+ StrEnum.

This module defines string-based enumerations for the constants shared by the
timeline engine, the controllers and the UI layer.
"""

from enum import StrEnum


class EditMode(StrEnum):
    """How a drag gesture on a task changes its extent.

    Attributes:
        MOVE: Shift the whole task, duration unchanged
        RESIZE_LEFT: Drag the left edge, right edge stays anchored
        RESIZE_RIGHT: Drag the right edge, start unchanged
    """
    MOVE = "move"
    RESIZE_LEFT = "resize-left"
    RESIZE_RIGHT = "resize-right"


class Direction(StrEnum):
    """Reorder direction within the task sequence.

    Attributes:
        UP: Towards the front of the sequence
        DOWN: Towards the back of the sequence
    """
    UP = "up"
    DOWN = "down"


class PointerButton(StrEnum):
    """Pointer buttons the input dispatcher distinguishes."""
    PRIMARY = "primary"
    MIDDLE = "middle"
    SECONDARY = "secondary"


class GestureKind(StrEnum):
    """Kind of gesture currently owning the pointer.

    Attributes:
        NONE: No gesture in progress
        PANNING: Viewport pan in progress
        EDITING: Task drag edit in progress
    """
    NONE = "none"
    PANNING = "panning"
    EDITING = "editing"


class ExportFormat(StrEnum):
    """Export format options.

    Attributes:
        JSON: Structured document (tasks + viewport)
        PNG: Flattened raster image
    """
    JSON = "json"
    PNG = "png"

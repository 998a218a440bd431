"""
Type definitions for the routine planner.

This module defines common types, aliases, and TypedDict structures
used throughout the codebase.
"""

from typing import Any, Callable, TypedDict

import numpy as np
import numpy.typing as npt

# NumPy array type aliases
AffineMatrix = npt.NDArray[np.float64]  # 3x3 homogeneous 2-D transform
HourArray = npt.NDArray[np.float64]     # Hour positions, e.g. gridlines


# Document TypedDict definitions
class TaskRecord(TypedDict):
    """A task as stored in the structured document."""
    id: int
    name: str
    start: float
    duration: float
    color: str


class PanOffsetRecord(TypedDict):
    """Pan offset as stored in the structured document."""
    x: float
    y: float


class DocumentEnvelope(TypedDict, total=False):
    """Full document: tasks plus viewport."""
    tasks: list[TaskRecord]
    zoomLevel: float
    panOffset: PanOffsetRecord


# Configuration TypedDict definitions
class TimelineConfig(TypedDict, total=False):
    """Timeline widget geometry."""
    trackWidth: int
    padding: int
    headerHeight: int
    rowHeight: int
    barHeight: int
    handleWidth: int


class ZoomConfig(TypedDict, total=False):
    """Zoom step sizes."""
    buttonStep: float
    wheelStep: float


class StorageConfig(TypedDict, total=False):
    """Autosave settings."""
    autosaveEnabled: bool
    autosavePath: str


# Type aliases for common function signatures
ColorHex = str                         # Color in hex format like "#RRGGBB"
Point = tuple[float, float]            # (x, y) in screen pixels
Extent = tuple[float, float]           # (start, duration) in hours

# Callback type aliases
TaskListChangedCallback = Callable[[list[Any]], None]

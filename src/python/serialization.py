"""
Structured export and import of the editor state.

Document shape (UTF-8 JSON)::

    {
      "tasks": [{"id": 1, "name": "...", "start": 9.5, "duration": 2.25, "color": "#aabbcc"}],
      "zoomLevel": 1.75,
      "panOffset": {"x": 10, "y": -5}
    }

Import also accepts a bare task array (older files). Decoding never touches
live state; callers swap state in only after a successful decode.
"""

import json
import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable

from custom_types import DocumentEnvelope
from enums import ExportFormat
from task_model import Task
from viewport import ViewportTransform, clamp, MIN_ZOOM, MAX_ZOOM

logger = logging.getLogger(__name__)


class DocumentFormatError(ValueError):
    """Raised when an import document cannot be decoded."""


@dataclass
class DecodedDocument:
    """Result of a successful decode."""
    tasks: list[Task]
    zoom: float
    pan_x: float
    pan_y: float

    def apply_viewport(self, viewport: ViewportTransform) -> None:
        viewport.set_zoom(self.zoom)
        viewport.set_pan(self.pan_x, self.pan_y)


def build_envelope(tasks: Iterable[Task], viewport: ViewportTransform) -> DocumentEnvelope:
    return {
        "tasks": [t.to_dict() for t in tasks],
        "zoomLevel": viewport.zoom,
        "panOffset": {"x": viewport.pan_x, "y": viewport.pan_y},
    }


def encode_document(tasks: Iterable[Task], viewport: ViewportTransform) -> bytes:
    """Serialize tasks and viewport to an indented JSON document."""
    envelope = build_envelope(tasks, viewport)
    return json.dumps(envelope, indent=2, allow_nan=False).encode("utf-8")


def _number(value: Any, field: str) -> float:
    # bool is an int subclass but never a valid coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DocumentFormatError(f"'{field}' must be a number, got {value!r}")
    result = float(value)
    if not math.isfinite(result):
        raise DocumentFormatError(f"'{field}' must be finite, got {value!r}")
    return result


def _decode_task(record: Any, index: int) -> Task:
    if not isinstance(record, dict):
        raise DocumentFormatError(f"Task #{index} is not an object")
    for key in ("id", "start", "duration"):
        if key not in record:
            raise DocumentFormatError(f"Task #{index} is missing '{key}'")
    task_id = record["id"]
    if isinstance(task_id, bool) or not isinstance(task_id, (int, float)) or not float(task_id).is_integer():
        raise DocumentFormatError(f"Task #{index} has a non-integer id: {task_id!r}")
    name = record.get("name", "")
    color = record.get("color", "#3b82f6")
    if not isinstance(name, str) or not isinstance(color, str):
        raise DocumentFormatError(f"Task #{index} has a non-string name or color")
    return Task(
        id=int(task_id),
        name=name,
        start=_number(record["start"], f"tasks[{index}].start"),
        duration=_number(record["duration"], f"tasks[{index}].duration"),
        color=color,
    )


def decode_document(data: bytes | str, current: ViewportTransform) -> DecodedDocument:
    """Parse an import document.

    Task invariants are not re-checked; consumers clamp at render time. A
    missing ``zoomLevel``/``panOffset`` keeps the current viewport value.

    Raises:
        DocumentFormatError: If the document is malformed
    """
    try:
        text = data.decode("utf-8") if isinstance(data, bytes) else data
        parsed = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DocumentFormatError(f"Not a JSON document: {e}") from e

    zoom = current.zoom
    pan_x, pan_y = current.pan_x, current.pan_y

    if isinstance(parsed, list):
        records = parsed
    elif isinstance(parsed, dict):
        records = parsed.get("tasks")
        if not isinstance(records, list):
            raise DocumentFormatError("Document has no 'tasks' array")
        if parsed.get("zoomLevel") is not None:
            zoom = clamp(_number(parsed["zoomLevel"], "zoomLevel"), MIN_ZOOM, MAX_ZOOM)
        pan = parsed.get("panOffset")
        if pan is not None:
            if not isinstance(pan, dict) or "x" not in pan or "y" not in pan:
                raise DocumentFormatError("'panOffset' must be an object with x and y")
            pan_x = _number(pan["x"], "panOffset.x")
            pan_y = _number(pan["y"], "panOffset.y")
    else:
        raise DocumentFormatError("Document must be an object or a task array")

    tasks = [_decode_task(record, i) for i, record in enumerate(records)]
    logger.debug("Decoded %d tasks (zoom=%s, pan=(%s, %s))", len(tasks), zoom, pan_x, pan_y)
    return DecodedDocument(tasks=tasks, zoom=zoom, pan_x=pan_x, pan_y=pan_y)


def default_export_filename(fmt: ExportFormat | str, today: date | None = None) -> str:
    """``routine-YYYY-MM-DD.<ext>``"""
    today = today or date.today()
    return f"routine-{today.isoformat()}.{ExportFormat(fmt).value}"

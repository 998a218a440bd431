"""Human-readable labels for domain hours."""

from task_model import DAY_HOURS


def format_hour(hour: float) -> str:
    """Format a domain hour as ``HH:MM`` (minutes rounded, clamped to 00:00-24:00)."""
    hour = max(0.0, min(DAY_HOURS, hour))
    total_minutes = int(round(hour * 60))
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def format_hour_range(start: float, duration: float) -> str:
    """``HH:MM - HH:MM`` for a task extent."""
    return f"{format_hour(start)} - {format_hour(start + duration)}"


def format_duration(duration: float) -> str:
    """Duration in hours with one decimal, e.g. ``1.5h``."""
    return f"{duration:.1f}h"


def hour_label(hour: int) -> str:
    """Gridline label, e.g. ``9:00``."""
    return f"{hour}:00"

from __future__ import annotations

import math
import time
from datetime import datetime, tzinfo
from typing import Any


DATE_NOT_SET = "Not set"
INVALID_DATE = "Invalid date"
UNASSIGNED = "Unassigned"
NO_DESCRIPTION = "No description"
ELLIPSIS = "..."

PRIORITY_LABELS = {
    0: "⚪ None",
    1: "🟢 Low",
    2: "🟡 Medium",
    3: "🟠 High",
    4: "🔴 Urgent",
}
UNKNOWN_PRIORITY = "⚪ Unknown"

SECONDS_PER_DAY = 24 * 3600


def _as_epoch_seconds(value: Any) -> int | None:
    try:
        out = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(out) or math.isinf(out):
        return None
    return int(out)


def format_date(value: Any, tz: tzinfo | None = None) -> str:
    """Render a Kanboard epoch timestamp as ``M/D/YYYY, h:mm:ss AM``.

    Kanboard stores unset dates as ``0`` (sometimes ``"0"``), which render as
    ``DATE_NOT_SET`` just like a missing value.
    """
    if not value or value == "0":
        return DATE_NOT_SET
    seconds = _as_epoch_seconds(value)
    if seconds is None:
        return INVALID_DATE
    try:
        moment = datetime.fromtimestamp(seconds, tz)
    except (OverflowError, OSError, ValueError):
        return INVALID_DATE
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return (
        f"{moment.month}/{moment.day}/{moment.year}, "
        f"{hour}:{moment.minute:02d}:{moment.second:02d} {meridiem}"
    )


def priority_label(code: Any) -> str:
    if isinstance(code, float) and not code.is_integer():
        return UNKNOWN_PRIORITY
    try:
        key = int(code)
    except (TypeError, ValueError):
        return UNKNOWN_PRIORITY
    return PRIORITY_LABELS.get(key, UNKNOWN_PRIORITY)


def truncate(text: str | None, limit: int) -> str:
    if text is None:
        return ""
    if len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


def days_overdue(due: Any, now: float | None = None) -> int | None:
    seconds = _as_epoch_seconds(due)
    if seconds is None:
        return None
    current = time.time() if now is None else now
    return math.floor((current - seconds) / SECONDS_PER_DAY)


def is_flag_set(value: Any) -> bool:
    return str(value) == "1"


def hours(value: Any, fallback: str) -> str:
    return f"{value}h" if value else fallback


class KanboardLinks:
    """Browseable Kanboard URLs for projects and tasks."""

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url.rstrip("/")

    def project(self, project_id: Any) -> str:
        return f"{self.base_url}/?controller=BoardViewController&action=show&project_id={project_id}"

    def task(self, task_id: Any, project_id: Any) -> str:
        return (
            f"{self.base_url}/?controller=TaskViewController&action=show"
            f"&task_id={task_id}&project_id={project_id}"
        )

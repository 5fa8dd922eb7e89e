"""Rendering task lists for the terminal."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from datetime import datetime
from itertools import groupby
from typing import TextIO

from todocli.models import Task

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_PADDING = 2
_HEADER = "ID\tTitle\tCompleted\tCreated At\tUpdated At\tCompleted At\t"

# (upper bound in seconds, fixed phrase or None, unit size for counting, unit name)
_SCALE = (
    (45, "a few seconds", None, None),
    (90, "a minute", None, None),
    (45 * _MINUTE, None, _MINUTE, "minutes"),
    (90 * _MINUTE, "an hour", None, None),
    (22 * _HOUR, None, _HOUR, "hours"),
    (36 * _HOUR, "a day", None, None),
    (26 * _DAY, None, _DAY, "days"),
    (45 * _DAY, "a month", None, None),
    (320 * _DAY, None, 30 * _DAY, "months"),
    (548 * _DAY, "a year", None, None),
    (float("inf"), None, 365 * _DAY, "years"),
)


def _phrase(seconds: float) -> str:
    for bound, fixed, unit, name in _SCALE:
        if seconds < bound:
            if fixed is not None:
                return fixed
            return f"{int(seconds / unit + 0.5)} {name}"
    raise ValueError(seconds)


def time_diff(moment: datetime, now: datetime | None = None) -> str:
    """Describe ``moment`` relative to ``now`` in words, e.g. ``3 hours ago``."""
    if now is None:
        now = datetime.now(moment.tzinfo)
    seconds = (now - moment).total_seconds()
    phrase = _phrase(abs(seconds))
    return f"in {phrase}" if seconds < 0 else f"{phrase} ago"


def _align(lines: list[str]) -> str:
    """Align tab-terminated cells into columns, two spaces apart."""
    rows = [line.split("\t") for line in lines]
    cells = [row[:-1] for row in rows]
    widths = [[0] * len(row) for row in cells]

    def layout(start: int, end: int, column: int) -> None:
        for has_column, group in groupby(range(start, end), key=lambda i: len(cells[i]) > column):
            if not has_column:
                continue
            block = list(group)
            width = max(len(cells[i][column]) for i in block) + _PADDING
            for i in block:
                widths[i][column] = width
            layout(block[0], block[-1] + 1, column + 1)

    layout(0, len(rows), 0)
    return "".join(
        "".join(cell.ljust(width) for cell, width in zip(row_cells, row_widths)) + row[-1] + "\n"
        for row, row_cells, row_widths in zip(rows, cells, widths)
    )


def _ago(moment: datetime | None, now: datetime | None) -> str:
    return "-" if moment is None else time_diff(moment, now)


def format_tasks(tasks: Iterable[Task], now: datetime | None = None) -> str:
    """Return the task table as text."""
    tasks = list(tasks)
    if not tasks:
        return "No tasks found.\n"
    lines = [_HEADER]
    lines.extend(
        "\t".join(
            (
                str(task.id),
                task.title or "",
                "✅" if task.completed else "❌",
                _ago(task.created_at, now),
                _ago(task.updated_at, now),
                _ago(task.completed_at, now),
            )
        )
        for task in tasks
    )
    return _align(lines)


def print_tasks(tasks: Iterable[Task], out: TextIO | None = None, now: datetime | None = None) -> None:
    """Write the task table to ``out`` (standard output by default)."""
    (sys.stdout if out is None else out).write(format_tasks(tasks, now))
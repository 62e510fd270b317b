# Rev 0.2.0

"""Task-derived progress (Rev 0.2.0)
Pure functions; no store access.
"""
from __future__ import annotations
from typing import Optional, Sequence, Tuple

from clientdesk.models.entities import Task


def task_counts(tasks: Sequence[Task]) -> Tuple[int, int]:
    """Return (completed, total)."""
    completed = sum(1 for t in tasks if t.completed)
    return completed, len(tasks)


def compute_progress(tasks: Sequence[Task]) -> Optional[int]:
    """
    Percentage of completed tasks, rounded half up to an int in [0, 100].
    Returns None for an empty sequence: there is nothing to derive from and
    the caller keeps the project's current progress.
    """
    completed, total = task_counts(tasks)
    if total == 0:
        return None
    # round(100 * c / n) half up, in integers to avoid float ties (e.g. 1/8 -> 13)
    return (200 * completed + total) // (2 * total)


def apply_progress(current: int, tasks: Sequence[Task]) -> int:
    derived = compute_progress(tasks)
    return current if derived is None else derived

# clientdesk type definitions
# Rev 0.2.0

from __future__ import annotations
from typing import Literal, Tuple

# Entity classification: client ← project → task
EntityType = Literal["client", "project", "task"]

ProjectStatus = Literal["not-started", "in-progress", "review", "completed"]
Priority = Literal["low", "medium", "high"]

PROJECT_STATUSES: Tuple[str, ...] = ("not-started", "in-progress", "review", "completed")
PRIORITIES: Tuple[str, ...] = ("low", "medium", "high")

# Sentinel accepted by the status filter
STATUS_ALL = "all"

PROGRESS_MIN = 0
PROGRESS_MAX = 100

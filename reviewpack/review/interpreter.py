"""
Student progress interpreter - display-ready view of one StudentResult.

Provides:
- Status labels
- MM:SS time formatting
- Display rounding of percentage scores
- Last-activity timestamp selection
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from reviewpack.schemas import StudentResult, StudentStatus, coerce_float, coerce_status


STATUS_LABELS = {
    StudentStatus.SUBMITTED: "Submitted",
    StudentStatus.IN_PROGRESS: "In Progress",
    StudentStatus.NOT_STARTED: "Not Started",
}

WATCHED_TO_END_LABEL = "Watched to end"
NOT_FINISHED_LABEL = "Not finished"


def status_label(status: Any) -> str:
    """Human label for a status; anything unrecognized reads as not started."""
    return STATUS_LABELS[coerce_status(status)]


def format_time(seconds: Any) -> str:
    """Seconds to zero-padded MM:SS (floored, clamped at zero)."""
    number = coerce_float(seconds)
    total = max(0, math.floor(number)) if number is not None else 0
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"


def display_score(score: Optional[float]) -> Optional[int]:
    """Round a percentage for display; None stays None."""
    if score is None:
        return None
    number = coerce_float(score)
    if number is None:
        return 0
    # half up: 82.5 -> 83
    return math.floor(number + 0.5)


def last_activity(result: StudentResult) -> Optional[datetime]:
    """Most recent timestamp available: completed > updated > started."""
    return result.completed_at or result.updated_at or result.started_at


def format_timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d %H:%M")


@dataclass(frozen=True)
class StudentProgressView:
    """Display fields derived from one student's record."""
    student_id: str
    display_name: str
    status: StudentStatus
    status_label: str
    reached_label: str
    watched_label: str
    score_percent: Optional[int]
    last_activity_label: str
    show_progress: bool
    show_score: bool


def interpret(result: StudentResult) -> StudentProgressView:
    """
    Interpret a student's record for display.

    Progress details are only meaningful once the student has started;
    the score only once they have submitted and a score exists.
    """
    name = result.student_name or "Student"
    if result.class_name:
        name = f"{name} ({result.class_name})"

    score_percent = display_score(result.score)
    return StudentProgressView(
        student_id=result.student_id,
        display_name=name,
        status=result.status,
        status_label=status_label(result.status),
        reached_label=format_time(result.max_reached_sec),
        watched_label=WATCHED_TO_END_LABEL if result.watched_to_end else NOT_FINISHED_LABEL,
        score_percent=score_percent,
        last_activity_label=format_timestamp(last_activity(result)),
        show_progress=result.status != StudentStatus.NOT_STARTED,
        show_score=result.status == StudentStatus.SUBMITTED and score_percent is not None,
    )

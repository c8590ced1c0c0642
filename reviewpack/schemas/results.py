"""
Result schemas for ReviewPack.

Defines Pydantic models for the student side of a review snapshot:
- StudentStatus: lifecycle stage for one package
- StudentAnswer: one response to one checkpoint
- StudentResult: one student's progress and answers
- ReviewSnapshot: package + results, handed over as one immutable unit
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import Field, ValidationError, field_validator

from .package import (
    Package,
    ReviewModel,
    coerce_float,
    coerce_id,
    coerce_index,
    coerce_seconds,
)

logger = logging.getLogger(__name__)


class StudentStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"


def coerce_status(value: Any) -> StudentStatus:
    """Unrecognized status values count as not started."""
    if isinstance(value, StudentStatus):
        return value
    try:
        return StudentStatus(str(value).strip().lower())
    except ValueError:
        return StudentStatus.NOT_STARTED


def coerce_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


# -----------------------------------------------------------------------------
# Answers
# -----------------------------------------------------------------------------

class StudentAnswer(ReviewModel):
    """One student's response to one checkpoint; `selected_index` None means unanswered."""
    checkpoint_id: str = ""
    selected_index: Optional[int] = None
    answered_at: Optional[datetime] = None

    @field_validator('checkpoint_id', mode='before')
    @classmethod
    def checkpoint_id_as_str(cls, v):
        return coerce_id(v)

    @field_validator('selected_index', mode='before')
    @classmethod
    def selected_index_integral(cls, v):
        return coerce_index(v)

    @field_validator('answered_at', mode='before')
    @classmethod
    def answered_at_parsed(cls, v):
        return coerce_datetime(v)


def _answer_entries(raw: Any) -> list[Any]:
    """Flatten list or mapping shaped answer payloads into answer dicts."""
    if isinstance(raw, dict):
        entries = []
        for key, value in raw.items():
            if isinstance(value, dict):
                entries.append({"checkpointId": key, **value})
            elif isinstance(value, StudentAnswer):
                entries.append(value)
            else:
                entries.append({"checkpointId": key, "selectedIndex": value})
        return entries
    if isinstance(raw, (list, tuple)):
        return list(raw)
    return []


# -----------------------------------------------------------------------------
# Student result
# -----------------------------------------------------------------------------

class StudentResult(ReviewModel):
    """
    One student's full record for a package.

    `status` is authoritative and never re-derived from the answers.
    `answers` is keyed by checkpoint id; a later duplicate in the input wins.
    """
    student_id: str = ""
    student_name: str = ""
    class_name: str = ""
    status: StudentStatus = StudentStatus.NOT_STARTED
    max_reached_sec: float = 0.0
    last_position_sec: float = 0.0
    watched_to_end: bool = False
    completed: bool = False
    score: Optional[float] = None
    answers: dict[str, StudentAnswer] = Field(default_factory=dict)
    started_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @field_validator('student_id', mode='before')
    @classmethod
    def student_id_as_str(cls, v):
        return coerce_id(v)

    @field_validator('student_name', 'class_name', mode='before')
    @classmethod
    def text_or_empty(cls, v):
        return "" if v is None else str(v)

    @field_validator('status', mode='before')
    @classmethod
    def status_known(cls, v):
        return coerce_status(v)

    @field_validator('max_reached_sec', 'last_position_sec', mode='before')
    @classmethod
    def seconds_non_negative(cls, v):
        return coerce_seconds(v)

    @field_validator('watched_to_end', 'completed', mode='before')
    @classmethod
    def flags_truthy(cls, v):
        return bool(v)

    @field_validator('score', mode='before')
    @classmethod
    def score_percentage(cls, v):
        if v is None:
            return None
        number = coerce_float(v)
        if number is None:
            return 0.0
        return min(100.0, max(0.0, number))

    @field_validator('answers', mode='before')
    @classmethod
    def answers_by_checkpoint(cls, v):
        answers: dict[str, StudentAnswer] = {}
        for entry in _answer_entries(v):
            try:
                answer = StudentAnswer.model_validate(entry)
            except ValidationError as e:
                logger.debug(f"Dropping malformed answer entry {entry!r}: {e}")
                continue
            answers[answer.checkpoint_id] = answer
        return answers

    @field_validator('started_at', 'updated_at', 'completed_at', mode='before')
    @classmethod
    def timestamps_parsed(cls, v):
        return coerce_datetime(v)

    def answer_for(self, checkpoint_id: str) -> Optional[StudentAnswer]:
        """Answer recorded for a checkpoint, if any."""
        return self.answers.get(str(checkpoint_id))


# -----------------------------------------------------------------------------
# Snapshot
# -----------------------------------------------------------------------------

class ReviewSnapshot(ReviewModel):
    """Package definition plus every student's result; `package` None means nothing loaded."""
    package: Optional[Package] = None
    results: list[StudentResult] = Field(default_factory=list)

    @field_validator('results', mode='before')
    @classmethod
    def results_list(cls, v):
        if v is None:
            return []
        if not isinstance(v, (list, tuple)):
            raise ValueError('results must be a list of student records')
        return [r for r in v if isinstance(r, (dict, StudentResult))]

    @property
    def package_id(self) -> Optional[str]:
        return self.package.id if self.package else None

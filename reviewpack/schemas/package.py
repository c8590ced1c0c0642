"""
Package schemas for ReviewPack.

Defines Pydantic models for the assignment side of a review snapshot:
- Checkpoint: a timestamped multiple-choice prompt inside the video
- Package: the assignment container (video reference + checkpoints)

Every field coming from the wire is coerced to a safe value here, once,
so nothing downstream needs to re-check types.
"""

import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# =============================================================================
# Shared coercion helpers (liberal input: never raise, fall back to defaults)
# =============================================================================


def coerce_id(value: Any) -> str:
    """Opaque identifiers are compared as strings."""
    if value is None:
        return ""
    return str(value).strip()


def coerce_float(value: Any) -> Optional[float]:
    """Return a finite float, or None when the value is not numeric."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except (OverflowError, ValueError):
        # ints beyond float range, unparsable strings
        return None
    if not math.isfinite(number):
        return None
    return number


def coerce_seconds(value: Any) -> float:
    """Video positions: non-numeric, non-finite or negative become 0."""
    number = coerce_float(value)
    if number is None or number < 0:
        return 0.0
    return number


def coerce_index(value: Any) -> Optional[int]:
    """Option indexes: integral numbers (or numeric strings) only, else None."""
    if isinstance(value, bool):
        return None
    number = coerce_float(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


class ReviewModel(BaseModel):
    """Base model accepting both camelCase wire keys and snake_case names."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# -----------------------------------------------------------------------------
# Checkpoint
# -----------------------------------------------------------------------------

class Checkpoint(ReviewModel):
    """
    One quiz prompt anchored to a video position.

    `correct_index` is None when the source value was not an integer; an
    out-of-range integer is kept as-is, but `answer_index` reports None.
    """
    id: str = ""
    timestamp_sec: float = 0.0
    required: bool = False
    points: float = 1.0
    question_text: str = ""
    options: list[str] = Field(default_factory=list)
    correct_index: Optional[int] = None

    @field_validator('id', mode='before')
    @classmethod
    def id_as_str(cls, v):
        return coerce_id(v)

    @field_validator('timestamp_sec', mode='before')
    @classmethod
    def timestamp_non_negative(cls, v):
        return coerce_seconds(v)

    @field_validator('required', mode='before')
    @classmethod
    def required_truthy(cls, v):
        return bool(v)

    @field_validator('points', mode='before')
    @classmethod
    def points_positive(cls, v):
        number = coerce_float(v)
        if number is None or number <= 0:
            return 1.0
        return number

    @field_validator('question_text', mode='before')
    @classmethod
    def question_as_str(cls, v):
        return "" if v is None else str(v)

    @field_validator('options', mode='before')
    @classmethod
    def options_as_strings(cls, v):
        if not isinstance(v, (list, tuple)):
            return []
        return ["" if opt is None else str(opt) for opt in v]

    @field_validator('correct_index', mode='before')
    @classmethod
    def correct_index_integral(cls, v):
        return coerce_index(v)

    def option_text(self, index: Optional[int]) -> str:
        """Option text at `index`, or empty string when out of range."""
        if index is None or index < 0 or index >= len(self.options):
            return ""
        return self.options[index]

    @property
    def answer_index(self) -> Optional[int]:
        """`correct_index` when it points at an option, else None."""
        if self.correct_index is None or not 0 <= self.correct_index < len(self.options):
            return None
        return self.correct_index


# -----------------------------------------------------------------------------
# Package
# -----------------------------------------------------------------------------

class Package(ReviewModel):
    """An assignment: one video plus its checkpoints (input order preserved)."""
    id: str = ""
    title: str = ""
    subject: str = ""
    video_provider: str = ""
    youtube_video_id: Optional[str] = None
    video_url: str = ""
    video_duration_sec: Optional[float] = None
    checkpoints: list[Checkpoint] = Field(default_factory=list)

    @field_validator('id', mode='before')
    @classmethod
    def id_as_str(cls, v):
        return coerce_id(v)

    @field_validator('title', 'subject', 'video_provider', 'video_url', mode='before')
    @classmethod
    def text_or_empty(cls, v):
        return "" if v is None else str(v)

    @field_validator('youtube_video_id', mode='before')
    @classmethod
    def video_id_or_none(cls, v):
        if v is None or str(v).strip() == "":
            return None
        return str(v).strip()

    @field_validator('video_duration_sec', mode='before')
    @classmethod
    def duration_or_none(cls, v):
        number = coerce_float(v)
        if number is None or number < 0:
            return None
        return number

    @field_validator('checkpoints', mode='before')
    @classmethod
    def checkpoints_list(cls, v):
        if not isinstance(v, (list, tuple)):
            return []
        return [cp for cp in v if isinstance(cp, (dict, Checkpoint))]

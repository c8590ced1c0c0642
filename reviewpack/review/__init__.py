"""
ReviewPack Review - Derivations behind the teacher review page.

This module provides:
- Checkpoint ordering and lookup
- Student progress interpretation
- Answer resolution (answered / correct)
- Class statistics
- Student x checkpoint answer matrix and breakdowns
- Selection/navigation state
- SnapshotLoader and ReviewSession
"""

from .ordering import (
    OrderedCheckpoint,
    CheckpointOrdering,
    order_checkpoints,
)

from .interpreter import (
    STATUS_LABELS,
    StudentProgressView,
    status_label,
    format_time,
    format_timestamp,
    display_score,
    last_activity,
    interpret,
)

from .resolver import (
    NO_SELECTION,
    CellState,
    ResolvedAnswer,
    index_to_letter,
    resolve_answer,
    resolve_for_student,
)

from .stats import (
    ClassStats,
    aggregate_stats,
)

from .matrix import (
    AnswerMatrix,
    MatrixRow,
    MatrixCell,
    BreakdownEntry,
    CheckpointBreakdown,
    build_matrix,
    checkpoint_breakdown,
    student_detail,
    order_students,
    student_id_sort_key,
)

from .selection import (
    ReviewView,
    ReviewSelection,
)

from .loader import (
    SnapshotLoader,
    SnapshotLoadError,
    parse_snapshot,
)

from .session import ReviewSession

__all__ = [
    # Ordering
    "OrderedCheckpoint",
    "CheckpointOrdering",
    "order_checkpoints",
    # Interpreter
    "STATUS_LABELS",
    "StudentProgressView",
    "status_label",
    "format_time",
    "format_timestamp",
    "display_score",
    "last_activity",
    "interpret",
    # Resolver
    "NO_SELECTION",
    "CellState",
    "ResolvedAnswer",
    "index_to_letter",
    "resolve_answer",
    "resolve_for_student",
    # Stats
    "ClassStats",
    "aggregate_stats",
    # Matrix
    "AnswerMatrix",
    "MatrixRow",
    "MatrixCell",
    "BreakdownEntry",
    "CheckpointBreakdown",
    "build_matrix",
    "checkpoint_breakdown",
    "student_detail",
    "order_students",
    "student_id_sort_key",
    # Selection
    "ReviewView",
    "ReviewSelection",
    # Loader / session
    "SnapshotLoader",
    "SnapshotLoadError",
    "parse_snapshot",
    "ReviewSession",
]

"""
ReviewSession - everything one review page needs for a render pass.

Combines the current snapshot (immutable) with the selection state.
Derived structures are rebuilt whenever the snapshot is replaced.
"""

import logging
from typing import Optional

from reviewpack.schemas import ReviewSnapshot, StudentResult

from .interpreter import StudentProgressView, interpret
from .loader import SnapshotLoadError, SnapshotLoader
from .matrix import (
    AnswerMatrix,
    CheckpointBreakdown,
    MatrixCell,
    build_matrix,
    checkpoint_breakdown,
    order_students,
    student_detail,
)
from .ordering import CheckpointOrdering, OrderedCheckpoint, order_checkpoints
from .resolver import ResolvedAnswer, resolve_for_student
from .selection import ReviewSelection, ReviewView
from .stats import ClassStats, aggregate_stats

logger = logging.getLogger(__name__)


class ReviewSession:
    """
    Review state for one teacher page.

    The snapshot is swapped atomically; a failed refresh leaves the
    last good snapshot (and everything derived from it) in place.
    """

    def __init__(self, snapshot: Optional[ReviewSnapshot] = None, student_order: str = "input"):
        """
        Initialize session.

        Args:
            snapshot: Initial snapshot (None renders empty states)
            student_order: Student list order ("input" or "student_id")
        """
        self.student_order = student_order
        self.selection = ReviewSelection()
        self.error_message: Optional[str] = None
        self._set_snapshot(snapshot or ReviewSnapshot())

    def _set_snapshot(self, snapshot: ReviewSnapshot):
        self.snapshot = snapshot
        checkpoints = snapshot.package.checkpoints if snapshot.package else []
        self.ordering: CheckpointOrdering = order_checkpoints(checkpoints)
        self.stats: ClassStats = aggregate_stats(snapshot.results)
        self.matrix: AnswerMatrix = build_matrix(self.ordering, snapshot.results)
        # duplicate student ids: the first record in the snapshot wins
        self._results_by_id = {}
        for result in snapshot.results:
            self._results_by_id.setdefault(result.student_id, result)
        self.selection = self.selection.for_package(snapshot.package_id)

    # -------------------------------------------------------------------------
    # Snapshot
    # -------------------------------------------------------------------------

    def replace_snapshot(self, snapshot: ReviewSnapshot):
        """Install a new snapshot; selection resets if the package changed."""
        self._set_snapshot(snapshot)
        self.error_message = None

    def refresh(self, loader: SnapshotLoader) -> bool:
        """
        Reload from `loader`.

        Returns True on success. On failure the message is kept in
        `error_message` and the previous snapshot stays active.
        """
        try:
            snapshot = loader.load()
        except SnapshotLoadError as e:
            logger.warning(f"Snapshot refresh failed, keeping last good snapshot: {e.message}")
            self.error_message = e.message
            return False
        self.replace_snapshot(snapshot)
        return True

    @property
    def has_package(self) -> bool:
        return self.snapshot.package is not None

    @property
    def package_title(self) -> str:
        return self.snapshot.package.title if self.snapshot.package else ""

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    @property
    def view(self) -> ReviewView:
        return self.selection.view

    def show_students(self):
        self.selection = self.selection.show_students()

    def show_matrix(self):
        self.selection = self.selection.show_matrix(self.ordering)

    def select_student(self, student_id: Optional[str]):
        self.selection = self.selection.select_student(student_id)

    def select_student_from_matrix(self, student_id: Optional[str]):
        self.selection = self.selection.select_student_from_matrix(student_id)

    def select_checkpoint(self, checkpoint_id: Optional[str]):
        self.selection = self.selection.select_checkpoint(checkpoint_id)

    def select_checkpoint_from_list(self, checkpoint_id: Optional[str]):
        self.selection = self.selection.select_checkpoint_from_list(checkpoint_id)

    # -------------------------------------------------------------------------
    # Lookups (stale ids resolve to None / empty)
    # -------------------------------------------------------------------------

    def get_student(self, student_id: Optional[str]) -> Optional[StudentResult]:
        if student_id is None:
            return None
        return self._results_by_id.get(str(student_id))

    @property
    def selected_student(self) -> Optional[StudentResult]:
        return self.get_student(self.selection.student_id)

    @property
    def selected_checkpoint(self) -> Optional[OrderedCheckpoint]:
        return self.ordering.get(self.selection.checkpoint_id)

    def selected_breakdown(self) -> Optional[CheckpointBreakdown]:
        return checkpoint_breakdown(self.matrix, self.selection.checkpoint_id)

    def selected_student_detail(self) -> list[MatrixCell]:
        return student_detail(self.ordering, self.selected_student)

    def resolve(self, student_id: Optional[str], checkpoint_id: Optional[str]) -> Optional[ResolvedAnswer]:
        """Resolution for an arbitrary (student, checkpoint) pair."""
        result = self.get_student(student_id)
        item = self.ordering.get(checkpoint_id)
        if result is None or item is None:
            return None
        return resolve_for_student(item.checkpoint, result)

    def student_list(self) -> list[StudentResult]:
        return order_students(self.snapshot.results, self.student_order)

    def student_views(self) -> list[StudentProgressView]:
        return [interpret(r) for r in self.student_list()]

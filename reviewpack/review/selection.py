"""
Selection state - which view is active and which student/checkpoint is focused.

Transitions are pure: each returns a new ReviewSelection.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .ordering import CheckpointOrdering


class ReviewView(str, Enum):
    """Active review view."""
    STUDENTS = "students"       # student list + student detail
    MATRIX = "matrix"           # class matrix + checkpoint breakdown


@dataclass(frozen=True)
class ReviewSelection:
    """Two independent cursors plus the active view, scoped to one package."""
    view: ReviewView = ReviewView.STUDENTS
    student_id: Optional[str] = None
    checkpoint_id: Optional[str] = None
    package_id: Optional[str] = None

    # -------------------------------------------------------------------------
    # View switching
    # -------------------------------------------------------------------------

    def show_students(self) -> "ReviewSelection":
        return replace(self, view=ReviewView.STUDENTS)

    def show_matrix(self, ordering: CheckpointOrdering) -> "ReviewSelection":
        """Enter the checkpoint-centric view, defaulting to the first checkpoint."""
        checkpoint_id = self.checkpoint_id
        if not checkpoint_id:
            checkpoint_id = ordering.first_id
        return replace(self, view=ReviewView.MATRIX, checkpoint_id=checkpoint_id)

    # -------------------------------------------------------------------------
    # Cursor moves
    # -------------------------------------------------------------------------

    def select_student(self, student_id: Optional[str]) -> "ReviewSelection":
        """Focus a student from the student list (view unchanged)."""
        return replace(self, student_id=_normalize_id(student_id))

    def select_student_from_matrix(self, student_id: Optional[str]) -> "ReviewSelection":
        """Focus a student from a matrix row and jump to their detail."""
        return replace(self, student_id=_normalize_id(student_id), view=ReviewView.STUDENTS)

    def select_checkpoint(self, checkpoint_id: Optional[str]) -> "ReviewSelection":
        """Focus a checkpoint from the matrix header (view unchanged)."""
        return replace(self, checkpoint_id=_normalize_id(checkpoint_id))

    def select_checkpoint_from_list(self, checkpoint_id: Optional[str]) -> "ReviewSelection":
        """Focus a checkpoint from the question list and jump to the matrix."""
        return replace(self, checkpoint_id=_normalize_id(checkpoint_id), view=ReviewView.MATRIX)

    def clear_student(self) -> "ReviewSelection":
        return replace(self, student_id=None)

    # -------------------------------------------------------------------------
    # Snapshot changes
    # -------------------------------------------------------------------------

    def for_package(self, package_id: Optional[str]) -> "ReviewSelection":
        """Keep the selection for the same package, reset it for a different one."""
        if package_id == self.package_id:
            return self
        return ReviewSelection(package_id=package_id)


def _normalize_id(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None

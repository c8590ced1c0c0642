"""
Answer matrix - student x checkpoint grid of resolved answers.

Provides:
- Student orderings (matrix rows, numeric-aware student ids)
- Full matrix build over a snapshot
- Per-checkpoint class breakdown
- Per-student detail rows
"""

import unicodedata
from dataclasses import dataclass, field
from typing import Iterable, Optional

from reviewpack.schemas import StudentResult

from .ordering import CheckpointOrdering, OrderedCheckpoint
from .resolver import CellState, ResolvedAnswer, resolve_for_student


# -----------------------------------------------------------------------------
# Student ordering
# -----------------------------------------------------------------------------

def display_sort_key(text: Optional[str]) -> str:
    """Collation key for names: width/compat-normalized, case-insensitive."""
    return unicodedata.normalize("NFKC", text or "").casefold()


def matrix_sort_key(result: StudentResult) -> tuple[str, str]:
    return (display_sort_key(result.class_name), display_sort_key(result.student_name))


def student_id_sort_key(student_id: Optional[str]) -> tuple[int, int, str, str]:
    """
    Numeric-aware student id key.

    All-digit ids come first in numeric order, then other ids alphabetically,
    blank ids last.
    """
    text = (student_id or "").strip()
    if not text:
        return (2, 0, "", "")
    if text.isascii() and text.isdigit():
        # magnitude order: fewer significant digits first, then lexical
        digits = text.lstrip("0")
        return (0, len(digits), digits, text)
    return (1, 0, display_sort_key(text), "")


def order_students(results: Iterable[StudentResult], order: str = "input") -> list[StudentResult]:
    """Order a student list by "input" (snapshot order), "student_id" or "matrix"."""
    results = list(results)
    if order == "student_id":
        return sorted(
            results,
            key=lambda r: (student_id_sort_key(r.student_id), display_sort_key(r.student_name)),
        )
    if order == "matrix":
        return sorted(results, key=matrix_sort_key)
    return results


# -----------------------------------------------------------------------------
# Matrix
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class MatrixCell:
    """One (student, checkpoint) resolution."""
    student_id: str
    checkpoint: OrderedCheckpoint
    resolution: ResolvedAnswer

    @property
    def checkpoint_id(self) -> str:
        return self.checkpoint.id

    @property
    def state(self) -> CellState:
        return self.resolution.state


@dataclass(frozen=True)
class MatrixRow:
    """One student's row, cells in canonical checkpoint order."""
    result: StudentResult
    cells: list[MatrixCell]
    source_index: int = 0

    @property
    def student_id(self) -> str:
        return self.result.student_id


@dataclass(frozen=True)
class AnswerMatrix:
    """Dense grid: one row per student, one column per checkpoint."""
    ordering: CheckpointOrdering
    rows: list[MatrixRow]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.ordering)

    @property
    def students(self) -> list[StudentResult]:
        return [row.result for row in self.rows]

    def row_for(self, student_id: Optional[str]) -> Optional[MatrixRow]:
        """Row for a student id; with duplicate ids, the earliest input record."""
        if student_id is None:
            return None
        matches = [row for row in self.rows if row.student_id == str(student_id)]
        return min(matches, key=lambda row: row.source_index, default=None)

    def cell(self, student_id: Optional[str], checkpoint_id: Optional[str]) -> Optional[MatrixCell]:
        """Cell lookup; stale ids return None."""
        row = self.row_for(student_id)
        item = self.ordering.get(checkpoint_id)
        if row is None or item is None:
            return None
        return row.cells[item.position - 1]

    def column(self, checkpoint_id: Optional[str]) -> list[MatrixCell]:
        """All students' cells for one checkpoint, in row order."""
        item = self.ordering.get(checkpoint_id)
        if item is None:
            return []
        return [row.cells[item.position - 1] for row in self.rows]


def build_row(ordering: CheckpointOrdering, result: StudentResult, source_index: int = 0) -> MatrixRow:
    return MatrixRow(
        result=result,
        source_index=source_index,
        cells=[
            MatrixCell(
                student_id=result.student_id,
                checkpoint=item,
                resolution=resolve_for_student(item.checkpoint, result),
            )
            for item in ordering
        ],
    )


def build_matrix(ordering: CheckpointOrdering, results: Iterable[StudentResult]) -> AnswerMatrix:
    """Build the full grid; rows sorted by (class name, student name), stable on ties."""
    indexed = sorted(enumerate(results), key=lambda pair: matrix_sort_key(pair[1]))
    return AnswerMatrix(
        ordering=ordering,
        rows=[build_row(ordering, result, idx) for idx, result in indexed],
    )


def student_detail(ordering: CheckpointOrdering, result: Optional[StudentResult]) -> list[MatrixCell]:
    """Every checkpoint resolved for one student; empty when no student is given."""
    if result is None:
        return []
    return build_row(ordering, result).cells


# -----------------------------------------------------------------------------
# Per-checkpoint breakdown
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class BreakdownEntry:
    result: StudentResult
    cell: MatrixCell


@dataclass(frozen=True)
class CheckpointBreakdown:
    """Class-wide answers for one checkpoint."""
    checkpoint: OrderedCheckpoint
    entries: list[BreakdownEntry]
    correct_count: int = 0
    incorrect_count: int = 0
    unanswered_count: int = 0
    option_counts: list[int] = field(default_factory=list)

    @property
    def answered_count(self) -> int:
        return self.correct_count + self.incorrect_count

    @property
    def answer_rate(self) -> Optional[float]:
        total = len(self.entries)
        return self.answered_count / total if total else None

    @property
    def correct_rate(self) -> Optional[float]:
        total = len(self.entries)
        return self.correct_count / total if total else None


def checkpoint_breakdown(matrix: AnswerMatrix, checkpoint_id: Optional[str]) -> Optional[CheckpointBreakdown]:
    """Breakdown for one checkpoint, or None if the id does not resolve."""
    item = matrix.ordering.get(checkpoint_id)
    if item is None:
        return None

    counts = {state: 0 for state in CellState}
    option_counts = [0] * len(item.checkpoint.options)
    entries = []
    for row in matrix.rows:
        cell = row.cells[item.position - 1]
        counts[cell.state] += 1
        if cell.resolution.is_answered:
            option_counts[cell.resolution.picked_index] += 1
        entries.append(BreakdownEntry(result=row.result, cell=cell))

    return CheckpointBreakdown(
        checkpoint=item,
        entries=entries,
        correct_count=counts[CellState.CORRECT],
        incorrect_count=counts[CellState.INCORRECT],
        unanswered_count=counts[CellState.UNANSWERED],
        option_counts=option_counts,
    )

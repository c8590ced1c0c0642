"""
Answer resolver - the single definition of "answered" and "correct".

The matrix cells, the per-checkpoint class breakdown and the per-student
detail list all go through `resolve_answer`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from reviewpack.schemas import Checkpoint, StudentAnswer, StudentResult, coerce_index


NO_SELECTION = -1


class CellState(str, Enum):
    """Render state of one (student, checkpoint) pair."""
    UNANSWERED = "unanswered"
    CORRECT = "correct"
    INCORRECT = "incorrect"


def index_to_letter(index: Any) -> str:
    """0 -> A, 1 -> B, ... 25 -> Z, 26 -> AA; None or negative -> empty string."""
    idx = coerce_index(index)
    if idx is None or idx < 0:
        return ""
    letters = ""
    while True:
        idx, rem = divmod(idx, 26)
        letters = chr(ord('A') + rem) + letters
        if idx == 0:
            return letters
        idx -= 1


@dataclass(frozen=True)
class ResolvedAnswer:
    """What a student picked for one checkpoint and whether it was right."""
    is_answered: bool
    picked_index: int
    is_correct: bool
    picked_text: str
    correct_text: str
    correct_index: Optional[int]

    @property
    def state(self) -> CellState:
        if not self.is_answered:
            return CellState.UNANSWERED
        return CellState.CORRECT if self.is_correct else CellState.INCORRECT

    @property
    def picked_letter(self) -> str:
        return index_to_letter(self.picked_index)

    @property
    def correct_letter(self) -> str:
        return index_to_letter(self.correct_index)


def resolve_answer(checkpoint: Checkpoint, answer: Optional[StudentAnswer]) -> ResolvedAnswer:
    """
    Resolve one student's answer to one checkpoint.

    An index outside the checkpoint's options counts as unanswered.
    A checkpoint without an in-range correct index marks every answer
    incorrect and has no correct answer to show.
    """
    picked = answer.selected_index if answer is not None else None
    is_answered = picked is not None and 0 <= picked < len(checkpoint.options)
    picked_index = picked if is_answered else NO_SELECTION
    correct_index = checkpoint.answer_index

    return ResolvedAnswer(
        is_answered=is_answered,
        picked_index=picked_index,
        is_correct=is_answered and picked_index == correct_index,
        picked_text=checkpoint.option_text(picked_index) if is_answered else "",
        correct_text=checkpoint.option_text(correct_index),
        correct_index=correct_index,
    )


def resolve_for_student(checkpoint: Checkpoint, result: Optional[StudentResult]) -> ResolvedAnswer:
    """Resolve using the student's recorded answer for this checkpoint."""
    answer = result.answer_for(checkpoint.id) if result is not None else None
    return resolve_answer(checkpoint, answer)

"""
Class statistics - status counts and average score over a result set.
"""

from dataclasses import asdict, dataclass
from typing import Iterable, Optional

from reviewpack.schemas import StudentResult, StudentStatus


@dataclass(frozen=True)
class ClassStats:
    """Derived class-wide statistics (never persisted)."""
    total_students: int
    not_started_count: int
    in_progress_count: int
    submitted_count: int
    average_score: Optional[float]

    def to_dict(self) -> dict:
        return asdict(self)


def aggregate_stats(results: Iterable[StudentResult]) -> ClassStats:
    """
    Reduce results into per-status counts and the submitted average.

    The average is the plain mean of submitted students' percentage scores;
    students without a score are left out of it.
    """
    counts = {status: 0 for status in StudentStatus}
    scores = []
    total = 0

    for result in results:
        total += 1
        status = result.status if isinstance(result.status, StudentStatus) else StudentStatus.NOT_STARTED
        counts[status] += 1
        if status == StudentStatus.SUBMITTED and result.score is not None:
            scores.append(float(result.score))

    return ClassStats(
        total_students=total,
        not_started_count=counts[StudentStatus.NOT_STARTED],
        in_progress_count=counts[StudentStatus.IN_PROGRESS],
        submitted_count=counts[StudentStatus.SUBMITTED],
        average_score=sum(scores) / len(scores) if scores else None,
    )

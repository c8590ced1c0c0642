"""
Review renderer - HTML fragments for the teacher review page.

Provides:
- Student list with status badges and progress
- Class statistics bar
- Question list
- Student x checkpoint matrix
- Per-checkpoint class breakdown
- Per-student detail
"""

import html
from typing import Any, Optional

from reviewpack.review import (
    AnswerMatrix,
    CellState,
    CheckpointBreakdown,
    CheckpointOrdering,
    ClassStats,
    MatrixCell,
    OrderedCheckpoint,
    ResolvedAnswer,
    StudentProgressView,
    display_score,
    format_time,
    index_to_letter,
    interpret,
)
from reviewpack.schemas import StudentResult, StudentStatus, coerce_status


EMPTY_STUDENTS = "No student data"
EMPTY_CHECKPOINTS = "No checkpoints"
EMPTY_SELECTION = "No student selected"
NO_CORRECT_ANSWER = "not set"

STATUS_CLASSES = {
    StudentStatus.SUBMITTED: "status-submitted",
    StudentStatus.IN_PROGRESS: "status-in-progress",
    StudentStatus.NOT_STARTED: "status-not-started",
}

CELL_CLASSES = {
    CellState.UNANSWERED: "cell-unanswered",
    CellState.CORRECT: "cell-correct",
    CellState.INCORRECT: "cell-incorrect",
}


def get_review_css() -> str:
    """Get CSS styles for the review page."""
    return """
    <style>
    .status-badge {
        padding: 0.1em 0.5em;
        border-radius: 8px;
        border: 2px solid;
        font-size: 0.8em;
        font-weight: 600;
    }
    .status-submitted { background: #e8f5e9; color: #2e7d32; border-color: #a5d6a7; }
    .status-in-progress { background: #fff8e1; color: #8d6e00; border-color: #ffe082; }
    .status-not-started { background: #f5f5f5; color: #616161; border-color: #e0e0e0; }
    .review-stats {
        display: flex;
        flex-wrap: wrap;
        gap: 1em;
        font-weight: 600;
        color: #444;
    }
    .review-card {
        background: white;
        border: 2px solid #e0e0e0;
        border-radius: 12px;
        padding: 0.8em 1em;
        margin: 0.4em 0;
    }
    .review-card.selected {
        border-color: #5d4037;
    }
    .review-card-title {
        font-weight: 700;
        color: #5d4037;
    }
    .review-card-meta {
        display: flex;
        flex-wrap: wrap;
        gap: 0.8em;
        font-size: 0.85em;
        color: #666;
        margin-top: 0.3em;
    }
    .review-empty {
        color: #9e9e9e;
        font-weight: 600;
    }
    .review-matrix {
        border-collapse: separate;
        border-spacing: 0;
    }
    .review-matrix th, .review-matrix td {
        border-bottom: 1px solid #e0e0e0;
        padding: 0.4em;
        text-align: center;
    }
    .review-matrix th.student-col, .review-matrix td.student-col {
        text-align: left;
        min-width: 180px;
    }
    .review-matrix th.selected {
        background: #fff3e0;
    }
    .matrix-cell {
        width: 2.2em;
        height: 2.2em;
        border-radius: 8px;
        border: 2px solid #e0e0e0;
        margin: 0 auto;
    }
    .cell-unanswered { background: #f5f5f5; }
    .cell-correct { background: #c8e6c9; }
    .cell-incorrect { background: #ffcdd2; }
    .answer-correct { color: #2e7d32; font-weight: 700; }
    .answer-incorrect { color: #c62828; font-weight: 700; }
    .answer-unanswered { color: #757575; font-weight: 700; }
    .option-row {
        padding: 0.4em 0.6em;
        border-radius: 8px;
        border: 2px solid #e0e0e0;
        background: #fafafa;
        margin: 0.2em 0;
    }
    .option-row.correct {
        border-color: #81c784;
        background: #f1f8e9;
    }
    </style>
    """


# -----------------------------------------------------------------------------
# Small pieces
# -----------------------------------------------------------------------------

def status_css_class(status: Any) -> str:
    return STATUS_CLASSES[coerce_status(status)]


def render_status_badge(view: StudentProgressView) -> str:
    return (
        f'<span class="status-badge {status_css_class(view.status)}">'
        f'{html.escape(view.status_label)}</span>'
    )


def checkpoint_label(item: OrderedCheckpoint) -> str:
    """Plain-text label, e.g. "Question 2 • 01:30 (required)"."""
    label = f"Question {item.position} • {format_time(item.checkpoint.timestamp_sec)}"
    if item.checkpoint.required:
        label += " (required)"
    return label


def format_points(points: float) -> str:
    value = int(points) if float(points).is_integer() else points
    return f"{value} pts"


def answer_summary(resolution: ResolvedAnswer) -> str:
    """Plain-text answer summary: "Unanswered" or "B (text) ✓"."""
    if not resolution.is_answered:
        return "Unanswered"
    text = resolution.picked_letter
    if resolution.picked_text:
        text += f" ({resolution.picked_text})"
    return f"{text} {'✓' if resolution.is_correct else '✗'}"


def _answer_class(resolution: ResolvedAnswer) -> str:
    return f"answer-{resolution.state.value}"


def _empty(message: str) -> str:
    return f'<div class="review-empty">({html.escape(message)})</div>'


# -----------------------------------------------------------------------------
# Stats and student list
# -----------------------------------------------------------------------------

def render_stats_bar(stats: Optional[ClassStats]) -> str:
    """Render submitted / in progress / not started counts and the average."""
    if stats is None:
        return ""
    parts = ['<div class="review-stats">']
    parts.append(f'<span>Submitted: {stats.submitted_count}</span>')
    parts.append(f'<span>In Progress: {stats.in_progress_count}</span>')
    parts.append(f'<span>Not Started: {stats.not_started_count}</span>')
    if stats.average_score is not None:
        parts.append(f'<span>Average: {display_score(stats.average_score)}%</span>')
    parts.append('</div>')
    return ''.join(parts)


def render_student_card(view: StudentProgressView, selected: bool = False) -> str:
    """Render one student entry of the student list."""
    css = "review-card selected" if selected else "review-card"
    parts = [f'<div class="{css}">']
    parts.append(f'<div class="review-card-title">{html.escape(view.display_name)}</div>')
    parts.append('<div class="review-card-meta">')
    parts.append(render_status_badge(view))
    if view.show_progress:
        parts.append(f'<span>Reached: {view.reached_label}</span>')
        parts.append(f'<span>End: {html.escape(view.watched_label)}</span>')
    if view.show_score:
        parts.append(f'<span>Score: {view.score_percent}%</span>')
    if view.last_activity_label:
        parts.append(f'<span>{view.last_activity_label}</span>')
    parts.append('</div>')
    parts.append('</div>')
    return ''.join(parts)


def render_student_list(views: list[StudentProgressView], selected_id: Optional[str] = None) -> str:
    if not views:
        return _empty(EMPTY_STUDENTS)
    return ''.join(
        render_student_card(v, selected=v.student_id == selected_id)
        for v in views
    )


# -----------------------------------------------------------------------------
# Question list
# -----------------------------------------------------------------------------

def render_question_list(ordering: CheckpointOrdering, selected_id: Optional[str] = None) -> str:
    """Render the ordered question list with labels and points."""
    if ordering.is_empty:
        return _empty(EMPTY_CHECKPOINTS)

    parts = []
    for item in ordering:
        css = "review-card selected" if item.id == selected_id else "review-card"
        parts.append(f'<div class="{css}">')
        parts.append(f'<div class="review-card-title">{html.escape(checkpoint_label(item))}</div>')
        parts.append(f'<div>{html.escape(item.checkpoint.question_text)}</div>')
        parts.append(f'<div class="review-card-meta">{format_points(item.checkpoint.points)}</div>')
        parts.append('</div>')
    return ''.join(parts)


# -----------------------------------------------------------------------------
# Matrix
# -----------------------------------------------------------------------------

def _cell_title(cell: MatrixCell) -> str:
    if not cell.resolution.is_answered:
        return "Unanswered"
    mark = "✓" if cell.resolution.is_correct else "✗"
    return f"{cell.resolution.picked_letter} {mark}"


def render_matrix(matrix: AnswerMatrix, selected_checkpoint_id: Optional[str] = None) -> str:
    """
    Render the class matrix as a table.

    Args:
        matrix: AnswerMatrix built from the current snapshot
        selected_checkpoint_id: Column to highlight

    Returns:
        HTML string for the table (or the empty state)
    """
    if matrix.column_count == 0:
        return _empty(EMPTY_CHECKPOINTS)

    parts = ['<table class="review-matrix">', '<thead><tr>']
    parts.append('<th class="student-col">Student</th>')
    for item in matrix.ordering:
        css = ' class="selected"' if item.id == selected_checkpoint_id else ''
        title = html.escape(checkpoint_label(item), quote=True)
        parts.append(f'<th{css} title="{title}">{item.position}</th>')
    parts.append('</tr></thead><tbody>')

    for row in matrix.rows:
        view = interpret(row.result)
        parts.append('<tr>')
        parts.append(
            f'<td class="student-col">{html.escape(view.display_name)} {render_status_badge(view)}</td>'
        )
        for cell in row.cells:
            title = html.escape(_cell_title(cell), quote=True)
            parts.append(
                f'<td><div class="matrix-cell {CELL_CLASSES[cell.state]}" '
                f'data-state="{cell.state.value}" title="{title}"></div></td>'
            )
        parts.append('</tr>')

    parts.append('</tbody></table>')
    return ''.join(parts)


# -----------------------------------------------------------------------------
# Checkpoint breakdown
# -----------------------------------------------------------------------------

def render_checkpoint_detail(breakdown: Optional[CheckpointBreakdown]) -> str:
    """Render one checkpoint: prompt, options, and every student's answer."""
    if breakdown is None:
        return ""

    item = breakdown.checkpoint
    cp = item.checkpoint
    answer_index = cp.answer_index
    correct_letter = index_to_letter(answer_index)
    correct_text = cp.option_text(answer_index)

    parts = ['<div class="review-card">']
    parts.append(f'<div class="review-card-title">{html.escape(checkpoint_label(item))}</div>')
    parts.append(f'<div>{html.escape(cp.question_text)}</div>')
    if answer_index is None:
        correct = NO_CORRECT_ANSWER
    else:
        correct = correct_letter
        if correct_text:
            correct += f" ({correct_text})"
    parts.append(f'<div class="review-card-meta">Correct answer: {html.escape(correct)}</div>')

    for idx, option in enumerate(cp.options):
        is_correct = idx == answer_index
        css = "option-row correct" if is_correct else "option-row"
        suffix = " (correct)" if is_correct else ""
        count = breakdown.option_counts[idx]
        parts.append(
            f'<div class="{css}">{index_to_letter(idx)}. {html.escape(option)}{suffix}'
            f' <span class="review-card-meta">{count} picked</span></div>'
        )

    parts.append(
        f'<div class="review-stats">'
        f'<span>Correct: {breakdown.correct_count}</span>'
        f'<span>Incorrect: {breakdown.incorrect_count}</span>'
        f'<span>Unanswered: {breakdown.unanswered_count}</span>'
        f'</div>'
    )

    if not breakdown.entries:
        parts.append(_empty(EMPTY_STUDENTS))
    for entry in breakdown.entries:
        view = interpret(entry.result)
        resolution = entry.cell.resolution
        parts.append('<div class="review-card">')
        parts.append(f'<span class="review-card-title">{html.escape(view.display_name)}</span> ')
        parts.append(render_status_badge(view))
        parts.append(
            f' <span class="{_answer_class(resolution)}">{html.escape(answer_summary(resolution))}</span>'
        )
        parts.append('</div>')

    parts.append('</div>')
    return ''.join(parts)


# -----------------------------------------------------------------------------
# Student detail
# -----------------------------------------------------------------------------

def render_student_detail(result: Optional[StudentResult], cells: list[MatrixCell]) -> str:
    """Render a student's progress and their answer to every checkpoint."""
    if result is None:
        return _empty(EMPTY_SELECTION)

    view = interpret(result)
    parts = ['<div class="review-card">']
    parts.append(f'<div class="review-card-title">{html.escape(view.display_name)} ')
    parts.append(render_status_badge(view))
    parts.append('</div>')
    parts.append('<div class="review-card-meta">')
    parts.append(f'<span>Reached: {view.reached_label}</span>')
    parts.append(f'<span>End: {html.escape(view.watched_label)}</span>')
    if view.show_score:
        parts.append(f'<span>Score: {view.score_percent}%</span>')
    parts.append('</div>')
    parts.append('</div>')

    if not cells:
        parts.append(_empty(EMPTY_CHECKPOINTS))

    for cell in cells:
        resolution = cell.resolution
        verdict = {
            CellState.UNANSWERED: "Unanswered",
            CellState.CORRECT: "✓ Correct",
            CellState.INCORRECT: "✗ Incorrect",
        }[resolution.state]
        parts.append('<div class="review-card">')
        parts.append(f'<div class="review-card-title">{html.escape(checkpoint_label(cell.checkpoint))}')
        parts.append(f' <span class="{_answer_class(resolution)}">{verdict}</span></div>')
        parts.append(f'<div>{html.escape(cell.checkpoint.checkpoint.question_text)}</div>')

        picked = "(no answer)"
        if resolution.is_answered:
            picked = resolution.picked_letter
            if resolution.picked_text:
                picked += f" ({resolution.picked_text})"
        parts.append(f'<div>Student answer: {html.escape(picked)}</div>')

        # correct answer only shown next to a wrong one
        if resolution.state == CellState.INCORRECT:
            correct = resolution.correct_letter or NO_CORRECT_ANSWER
            if resolution.correct_text:
                correct += f" ({resolution.correct_text})"
            parts.append(f'<div>Correct answer: {html.escape(correct)}</div>')
        parts.append('</div>')

    return ''.join(parts)

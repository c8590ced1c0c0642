"""
ReviewPack Viewer - Rendering components for the teacher review page.

This module provides:
- Student list and statistics rendering
- Question list rendering
- Answer matrix rendering
- Checkpoint breakdown and student detail rendering
"""

from .review import (
    get_review_css,
    status_css_class,
    render_status_badge,
    checkpoint_label,
    format_points,
    answer_summary,
    render_stats_bar,
    render_student_card,
    render_student_list,
    render_question_list,
    render_matrix,
    render_checkpoint_detail,
    render_student_detail,
    EMPTY_STUDENTS,
    EMPTY_CHECKPOINTS,
    EMPTY_SELECTION,
    NO_CORRECT_ANSWER,
)

__all__ = [
    "get_review_css",
    "status_css_class",
    "render_status_badge",
    "checkpoint_label",
    "format_points",
    "answer_summary",
    "render_stats_bar",
    "render_student_card",
    "render_student_list",
    "render_question_list",
    "render_matrix",
    "render_checkpoint_detail",
    "render_student_detail",
    "EMPTY_STUDENTS",
    "EMPTY_CHECKPOINTS",
    "EMPTY_SELECTION",
    "NO_CORRECT_ANSWER",
]

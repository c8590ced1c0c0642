"""
ReviewPack Schemas - Pydantic models for the checkpoint-video review engine.

This module exports all schema classes for:
- Package: checkpoints and the assignment container
- Results: student status, answers, results and the review snapshot
"""

# Package schemas
from .package import (
    Checkpoint,
    Package,
    ReviewModel,
    coerce_float,
    coerce_id,
    coerce_index,
    coerce_seconds,
)

# Result schemas
from .results import (
    StudentStatus,
    StudentAnswer,
    StudentResult,
    ReviewSnapshot,
    coerce_status,
    coerce_datetime,
)

__all__ = [
    # Package
    'Checkpoint',
    'Package',
    'ReviewModel',
    'coerce_float',
    'coerce_id',
    'coerce_index',
    'coerce_seconds',
    # Results
    'StudentStatus',
    'StudentAnswer',
    'StudentResult',
    'ReviewSnapshot',
    'coerce_status',
    'coerce_datetime',
]

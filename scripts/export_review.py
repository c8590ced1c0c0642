#!/usr/bin/env python3
"""
export_review.py - Export a review snapshot as spreadsheets.

Writes:
- matrix.csv: one row per student, one column per question (Q1, Q2, ...)
- answers.csv: long format, one row per (student, question)
- stats.json: class statistics

Usage:
  python scripts/export_review.py --snapshot data/snapshot.json
  python scripts/export_review.py --snapshot data/snapshot.json --output-dir data/export
"""

import argparse
import json
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import pandas as pd

from reviewpack.review import (
    AnswerMatrix,
    ReviewSession,
    SnapshotLoader,
    SnapshotLoadError,
    status_label,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def matrix_frame(matrix: AnswerMatrix) -> pd.DataFrame:
    """Wide table: student columns + one state column per question."""
    records = []
    for row in matrix.rows:
        record = {
            "student_id": row.result.student_id,
            "student_name": row.result.student_name,
            "class_name": row.result.class_name,
            "status": status_label(row.result.status),
            "score": row.result.score,
        }
        for cell in row.cells:
            record[f"Q{cell.checkpoint.position}"] = cell.state.value
        records.append(record)

    columns = ["student_id", "student_name", "class_name", "status", "score"]
    columns += [f"Q{item.position}" for item in matrix.ordering]
    return pd.DataFrame.from_records(records, columns=columns)


def answers_frame(matrix: AnswerMatrix) -> pd.DataFrame:
    """Long table: one row per (student, question)."""
    records = []
    for row in matrix.rows:
        for cell in row.cells:
            records.append({
                "student_id": row.result.student_id,
                "student_name": row.result.student_name,
                "class_name": row.result.class_name,
                "question": cell.checkpoint.position,
                "checkpoint_id": cell.checkpoint_id,
                "picked": cell.resolution.picked_letter,
                "correct": cell.resolution.correct_letter,
                "state": cell.state.value,
            })
    columns = [
        "student_id", "student_name", "class_name", "question",
        "checkpoint_id", "picked", "correct", "state",
    ]
    return pd.DataFrame.from_records(records, columns=columns)


def export_review(session: ReviewSession, output_dir: Path) -> dict[str, Path]:
    """Write matrix.csv, answers.csv and stats.json; return the paths written."""
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = {
        "matrix": output_dir / "matrix.csv",
        "answers": output_dir / "answers.csv",
        "stats": output_dir / "stats.json",
    }

    matrix_frame(session.matrix).to_csv(paths["matrix"], index=False, encoding="utf-8")
    answers_frame(session.matrix).to_csv(paths["answers"], index=False, encoding="utf-8")
    with open(paths["stats"], "w", encoding="utf-8") as f:
        json.dump(session.stats.to_dict(), f, ensure_ascii=False, indent=2)

    return paths


def main():
    parser = argparse.ArgumentParser(
        description="Export a review snapshot as CSV/JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--snapshot",
        type=Path,
        default=PROJECT_ROOT / "data" / "snapshot.json",
        help="Snapshot JSON file"
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=PROJECT_ROOT / "data" / "export",
        help="Output directory"
    )
    args = parser.parse_args()

    session = ReviewSession()
    try:
        session.replace_snapshot(SnapshotLoader(args.snapshot).load())
    except SnapshotLoadError as e:
        logger.error(e.message)
        sys.exit(1)

    logger.info(
        f"Exporting {session.matrix.row_count} students x "
        f"{session.matrix.column_count} questions"
    )
    paths = export_review(session, args.output_dir)
    for name, path in paths.items():
        logger.info(f"  {name}: {path}")


if __name__ == "__main__":
    main()

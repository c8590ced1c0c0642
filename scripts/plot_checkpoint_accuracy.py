#!/usr/bin/env python3
"""
plot_checkpoint_accuracy.py - Per-question answer chart for one package.

Stacked bars per question: correct / incorrect / unanswered student counts,
in the same question order the review page uses.

Usage:
  python scripts/plot_checkpoint_accuracy.py --snapshot data/snapshot.json
  python scripts/plot_checkpoint_accuracy.py --snapshot data/snapshot.json --output data/export/accuracy.png
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from reviewpack.review import (
    AnswerMatrix,
    ReviewSession,
    SnapshotLoader,
    SnapshotLoadError,
    checkpoint_breakdown,
)
from scripts.analysis_utils import save_figure, setup_plotting

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

STATE_COLORS = {
    "correct": "#81c784",
    "incorrect": "#e57373",
    "unanswered": "#bdbdbd",
}


def breakdown_counts(matrix: AnswerMatrix) -> dict[str, list[int]]:
    """Counts per state, one entry per question in canonical order."""
    counts = {state: [] for state in STATE_COLORS}
    for item in matrix.ordering:
        breakdown = checkpoint_breakdown(matrix, item.id)
        counts["correct"].append(breakdown.correct_count)
        counts["incorrect"].append(breakdown.incorrect_count)
        counts["unanswered"].append(breakdown.unanswered_count)
    return counts


def plot_accuracy(matrix: AnswerMatrix, title: str, output: Path):
    """Draw the stacked bar chart to `output`."""
    counts = breakdown_counts(matrix)
    labels = [f"Q{item.position}" for item in matrix.ordering]

    fig, ax = plt.subplots(figsize=(max(6, len(labels) * 0.8), 5))
    bottom = [0] * len(labels)
    for state, color in STATE_COLORS.items():
        ax.bar(labels, counts[state], bottom=bottom, color=color, label=state.capitalize())
        bottom = [b + c for b, c in zip(bottom, counts[state])]

    ax.set_xlabel("Question")
    ax.set_ylabel("Students")
    ax.set_title(title)
    ax.legend()

    save_figure(fig, output)


def main():
    parser = argparse.ArgumentParser(
        description="Plot correct/incorrect/unanswered counts per question",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--snapshot",
        type=Path,
        default=PROJECT_ROOT / "data" / "snapshot.json",
        help="Snapshot JSON file"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=PROJECT_ROOT / "data" / "export" / "accuracy.png",
        help="Output image"
    )
    args = parser.parse_args()

    session = ReviewSession()
    try:
        session.replace_snapshot(SnapshotLoader(args.snapshot).load())
    except SnapshotLoadError as e:
        logger.error(e.message)
        sys.exit(1)

    if session.ordering.is_empty:
        logger.warning("Package has no checkpoints, nothing to plot")
        return

    setup_plotting()
    plot_accuracy(session.matrix, session.package_title or "Answers per question", args.output)
    logger.info(f"Saved chart to {args.output}")


if __name__ == "__main__":
    main()

"""
SnapshotLoader - Load a review snapshot (package + student results) from JSON.

The fetch itself happens elsewhere; this reads what it produced:

    {"package": {...}, "results": [...]}

A precomputed "stats" key, if present, is ignored: statistics are always
derived from the results.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from reviewpack.schemas import ReviewSnapshot

logger = logging.getLogger(__name__)


class SnapshotLoadError(Exception):
    """A snapshot could not be read; `message` is safe to show to the teacher."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def parse_snapshot(data: Any) -> ReviewSnapshot:
    """
    Validate an in-memory snapshot payload.

    Raises:
        SnapshotLoadError: If the payload is not an object or fails validation
    """
    if not isinstance(data, dict):
        raise SnapshotLoadError("Snapshot must be a JSON object with 'package' and 'results'")
    try:
        return ReviewSnapshot.model_validate({
            "package": data.get("package"),
            "results": data.get("results"),
        })
    except ValidationError as e:
        raise SnapshotLoadError(f"Invalid snapshot: {e.error_count()} validation error(s)") from e


class SnapshotLoader:
    """Read snapshots from a JSON file. Each call re-reads the file."""

    def __init__(self, path: str | Path):
        """
        Initialize loader.

        Args:
            path: Path to the snapshot JSON file
        """
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> ReviewSnapshot:
        """
        Load and validate the snapshot.

        Raises:
            SnapshotLoadError: If the file is missing, unreadable or malformed
        """
        if not self.path.exists():
            raise SnapshotLoadError(f"Snapshot file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise SnapshotLoadError(f"Snapshot is not valid JSON: {e.msg} (line {e.lineno})") from e
        except UnicodeDecodeError as e:
            raise SnapshotLoadError(f"Snapshot is not UTF-8 text: {e.reason} at byte {e.start}") from e
        except OSError as e:
            raise SnapshotLoadError(f"Could not read snapshot: {e}") from e

        snapshot = parse_snapshot(data)
        checkpoint_count = len(snapshot.package.checkpoints) if snapshot.package else 0
        logger.info(
            f"Loaded snapshot {self.path.name}: package={snapshot.package_id!r}, "
            f"{checkpoint_count} checkpoints, {len(snapshot.results)} students"
        )
        return snapshot

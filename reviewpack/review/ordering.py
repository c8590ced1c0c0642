"""
Checkpoint ordering - canonical chronological sequence of a package's checkpoints.

Checkpoints are sorted by timestamp ascending; ties keep input order.
The 1-based position is the "Question N" label used everywhere.
"""

from dataclasses import dataclass
from typing import Iterator, Optional

from reviewpack.schemas import Checkpoint


@dataclass(frozen=True)
class OrderedCheckpoint:
    """Checkpoint with its display position."""
    position: int
    checkpoint: Checkpoint

    @property
    def id(self) -> str:
        return self.checkpoint.id


class CheckpointOrdering:
    """Ordered checkpoints plus an id lookup."""

    def __init__(self, items: list[OrderedCheckpoint]):
        self._items = items
        self._by_id = {item.id: item for item in items}

    def __iter__(self) -> Iterator[OrderedCheckpoint]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> list[OrderedCheckpoint]:
        return list(self._items)

    @property
    def checkpoints(self) -> list[Checkpoint]:
        return [item.checkpoint for item in self._items]

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def first_id(self) -> Optional[str]:
        return self._items[0].id if self._items else None

    def get(self, checkpoint_id: Optional[str]) -> Optional[OrderedCheckpoint]:
        """Look up by id; unknown or None ids return None."""
        if checkpoint_id is None:
            return None
        return self._by_id.get(str(checkpoint_id))

    def position_of(self, checkpoint_id: Optional[str]) -> int:
        """1-based position, or 0 if the id is not in this ordering."""
        item = self.get(checkpoint_id)
        return item.position if item else 0


def order_checkpoints(checkpoints: Optional[list[Checkpoint]]) -> CheckpointOrdering:
    """Sort checkpoints by timestamp (stable) and number them from 1."""
    ordered = sorted(checkpoints or [], key=lambda c: c.timestamp_sec)
    return CheckpointOrdering([
        OrderedCheckpoint(position=idx + 1, checkpoint=cp)
        for idx, cp in enumerate(ordered)
    ])

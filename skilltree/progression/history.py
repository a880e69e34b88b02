"""
Bounded unlock history.

Records are plain values. The log keeps the most recent `capacity`
records: appending past capacity drops the oldest from the front, and
undo always takes from the back, so the newest record is never the one
evicted.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterator, Optional

from skilltree.core.config import DEFAULT_HISTORY_CAPACITY


@dataclass(frozen=True)
class CommandRecord:
    """
    One unlock operation.

    Attributes:
        skill_id: The skill that was unlocked
        xp_before: Player XP observed immediately before the unlock
        cost: Skill cost at unlock time
        executed: False once the record has been undone
    """
    skill_id: str
    xp_before: int
    cost: int = 0
    executed: bool = True

    def describe(self) -> str:
        return f"Unlock {self.skill_id} for {self.cost} XP"


class CommandLog:
    """FIFO-evicting history of unlock records with pop-from-back undo."""

    def __init__(self, capacity: int = DEFAULT_HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._records: deque[CommandRecord] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._records.maxlen

    def append(self, record: CommandRecord) -> Optional[CommandRecord]:
        """
        Add a record.

        Returns:
            The evicted oldest record if the log was full, else None
        """
        evicted = None
        if len(self._records) == self._records.maxlen:
            evicted = self._records[0]
        self._records.append(record)
        return evicted

    def pop_latest(self) -> Optional[CommandRecord]:
        """Remove and return the most recently appended record."""
        if not self._records:
            return None
        return self._records.pop()

    def latest(self) -> Optional[CommandRecord]:
        return self._records[-1] if self._records else None

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CommandRecord]:
        """Oldest to newest."""
        return iter(self._records)

    def __repr__(self) -> str:
        return f"CommandLog({len(self._records)}/{self.capacity})"

"""Rolling window of the most recent stress classifications."""
from typing import List, Optional

import pandas as pd

from stress_detector.config import TREND_WINDOW_SIZE
from stress_detector.response_contract import ClassificationLevel


class TrendTracker:
    """
    Fixed-capacity window of classification levels, oldest evicted first.

    Backed by a fixed arena of slots and a write cursor. Owned by a single
    session; not safe for concurrent mutation.
    """

    def __init__(self, capacity: int = TREND_WINDOW_SIZE):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._slots: List[Optional[ClassificationLevel]] = [None] * capacity
        self._cursor = 0
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def append(self, level: ClassificationLevel) -> None:
        self._slots[self._cursor] = ClassificationLevel(level)
        self._cursor = (self._cursor + 1) % self.capacity
        self._count = min(self._count + 1, self.capacity)

    def snapshot(self) -> List[Optional[ClassificationLevel]]:
        """Exactly `capacity` slots, oldest to newest, left-padded with None."""
        start = (self._cursor - self._count) % self.capacity
        recent = [self._slots[(start + i) % self.capacity] for i in range(self._count)]
        return [None] * (self.capacity - self._count) + recent

    def to_frame(self) -> pd.DataFrame:
        """Snapshot as a table, one row per slot (empty slots included)."""
        rows = []
        for position, level in enumerate(self.snapshot(), start=1):
            rows.append({
                "position": position,
                "stress_level": level.value if level else "",
                "rank": level.rank if level else None,
            })
        return pd.DataFrame(rows, columns=["position", "stress_level", "rank"])

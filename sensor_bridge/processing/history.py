"""
Bounded per-metric sample history

Each tracked metric keeps its raw samples in a fixed-capacity, drop-oldest
buffer. Invalid readings are stored as they arrive and only filtered out
when a snapshot is taken for averaging.
"""

import math
from collections import deque
from numbers import Real
from typing import Any, Deque, List, Optional


def is_valid_sample(value: Any) -> bool:
    """Return True for finite real numbers (None, NaN and +/-inf are invalid)"""
    if value is None or isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


class RollingHistory:
    """
    Fixed-capacity, append-only sample history for one metric

    Appending beyond capacity evicts exactly one element, the oldest.
    Insertion order is chronological order; nothing is reordered or deduplicated.
    """

    def __init__(self, name: str, capacity: int):
        if capacity <= 0:
            raise ValueError(f"History capacity must be positive, got {capacity}")
        self.name = name
        self._capacity = capacity
        self._values: Deque[Any] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._values)

    def push(self, value: Any):
        """Append a raw sample, evicting the oldest one when full"""
        self._values.append(value)

    def last(self) -> Optional[Any]:
        """Most recently stored sample, or None if the history is empty"""
        return self._values[-1] if self._values else None

    def values(self) -> List[Any]:
        """All stored raw samples, oldest first"""
        return list(self._values)

    def snapshot(self, max_size: Optional[int] = None) -> List[float]:
        """
        Get the most recent valid samples

        Invalid entries are dropped first, then the newest ``max_size`` valid
        samples are returned (fewer if the history is shorter).

        Args:
            max_size: Maximum number of samples to return, None for all

        Returns:
            List[float]: Valid samples, oldest first
        """
        valid = [float(v) for v in self._values if is_valid_sample(v)]
        if max_size is not None:
            if max_size <= 0:
                return []
            valid = valid[-max_size:]
        return valid

    def clear(self):
        self._values.clear()

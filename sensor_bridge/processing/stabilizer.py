"""
Moving-average stabilization

Smooths noisy per-tick indices by averaging the most recent valid samples
of a metric's history, and repairs transient zero readings on metrics that
are prone to dropouts.
"""

import logging
from typing import Any, Optional, Sequence

import numpy as np

from ..core.data_types import StabilizedValue
from .history import RollingHistory, is_valid_sample


def moving_average(values: Sequence[float]) -> float:
    """Unweighted mean of ``values``, 0.0 when empty"""
    if len(values) == 0:
        return 0.0
    return float(np.mean(values))


def substitute_glitch(value: Any, history: RollingHistory, fallback: float = 0.0) -> float:
    """
    Replace a dropout reading with the last stored value

    A zero, None or NaN reading on a dropout-prone metric is replaced by the
    latest sample already in that metric's history. With an empty history
    the fallback is used instead.

    Args:
        value: Newly arriving raw reading
        history: History of the same metric
        fallback: Value stored when there is nothing to carry forward

    Returns:
        float: Value to append to the history
    """
    if not is_valid_sample(value) or value == 0:
        previous = history.last()
        if previous is not None:
            return previous
        return fallback
    return float(value)


class MovingAverageStabilizer:
    """
    Compute stabilized values over a bounded window of valid samples

    The mean is taken over the samples actually available, so the reported
    window can be smaller than the configured one on a young history.
    """

    def __init__(self, window: Optional[int] = None):
        if window is not None and window <= 0:
            raise ValueError(f"Averaging window must be positive, got {window}")
        self.window = window

    def stabilize(self, history: RollingHistory) -> StabilizedValue:
        """
        Stabilize a single metric history

        Args:
            history: Raw sample history

        Returns:
            StabilizedValue: Mean of the recent valid samples (0.0 if none)
        """
        recent = history.snapshot(self.window)
        value = moving_average(recent)
        logging.debug(f"Stabilized {history.name}: {value:.4f} over {len(recent)} samples")
        return StabilizedValue(value=value, window=len(recent))

"""
Composite index synthesis

Derives secondary EEG indices from the raw values of the current tick.
The results are treated downstream as ordinary metrics with their own
history and moving average.
"""

from typing import Callable, Dict, Mapping, Optional, Tuple

from ..core.config import (
    ATTENTION_WEIGHTS, MEDITATION_RELAXATION_WEIGHT, MEDITATION_CALM_WEIGHT,
)
from .history import is_valid_sample


def _raw(values: Mapping[str, Optional[float]], name: str) -> float:
    """Raw tick value with missing or invalid inputs read as 0"""
    value = values.get(name)
    return float(value) if is_valid_sample(value) else 0.0


def attention_level(values: Mapping[str, Optional[float]]) -> float:
    """AttentionLevel = 0.8 * focus_index + 0.2 * total_power"""
    return sum(weight * _raw(values, name) for name, weight in ATTENTION_WEIGHTS.items())


def meditation_level(values: Mapping[str, Optional[float]]) -> float:
    """MeditationLevel = 0.7 * relaxation_index + 0.3 * (1 - stress_index)"""
    return (MEDITATION_RELAXATION_WEIGHT * _raw(values, "relaxation_index")
            + MEDITATION_CALM_WEIGHT * (1 - _raw(values, "stress_index")))


# Composite name -> (formula, raw inputs it depends on)
DEFAULT_COMPOSITES: Dict[str, Tuple[Callable[[Mapping], float], Tuple[str, ...]]] = {
    "attention_level": (attention_level, tuple(ATTENTION_WEIGHTS)),
    "meditation_level": (meditation_level, ("relaxation_index", "stress_index")),
}


class CompositeIndexSynthesizer:
    """
    Compute composite indices from one tick's raw values

    A composite is only computed when at least one of its inputs is present
    in the tick, and only strictly positive results are kept since the
    indices are defined on (0, 1].
    """

    def __init__(self, composites=None):
        self.composites = dict(DEFAULT_COMPOSITES if composites is None else composites)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self.composites)

    def synthesize(self, values: Mapping[str, Optional[float]]) -> Tuple[Dict[str, float], int]:
        """
        Compute composites for a tick

        Args:
            values: Raw metric values of the current tick

        Returns:
            Tuple[accepted, dropped]: Positive composite values by name and the
            number of composites discarded for being zero or negative
        """
        accepted = {}
        dropped = 0
        for name, (formula, inputs) in self.composites.items():
            if not any(values.get(key) is not None for key in inputs):
                continue
            result = formula(values)
            if is_valid_sample(result) and result > 0:
                accepted[name] = result
            else:
                dropped += 1
        return accepted, dropped

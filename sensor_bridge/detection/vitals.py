"""
PPG vital-sign stabilization

Heart-rate and HRV indices from the PPG analysis engine are noisy and prone
to transient zero readings. This pipeline carries the last stored value
forward over such glitches before averaging.
"""

import logging
from typing import Dict, Iterable, Mapping, Optional

from ..core.data_types import DropCounters
from ..core.config import (
    PPG, PPG_FIELDS, PPG_HISTORY_SIZE, PPG_AVERAGE_WINDOW, MIN_SAMPLES_FOR_STATE,
    DROPOUT_SENSITIVE_PPG, PPG_NORMAL_RANGES,
)
from ..processing.history import is_valid_sample
from ..processing.modality import ModalityPipeline
from ..processing.stabilizer import substitute_glitch
from .classifier import RangeClassifier


class VitalSignsPipeline(ModalityPipeline):
    """Stabilize PPG indices with dropout substitution and range labels"""

    modality = PPG

    def __init__(self, history_size: int = PPG_HISTORY_SIZE, window: int = PPG_AVERAGE_WINDOW,
                 min_samples: int = MIN_SAMPLES_FOR_STATE,
                 dropout_sensitive: Iterable[str] = DROPOUT_SENSITIVE_PPG,
                 counters: Optional[DropCounters] = None):
        self.dropout_sensitive = frozenset(dropout_sensitive)
        self.range_classifiers = {
            name: RangeClassifier(normal_range) for name, normal_range in PPG_NORMAL_RANGES.items()
        }
        super().__init__(
            metrics=PPG_FIELDS,
            history_size=history_size,
            window=window,
            reference_metric="heart_rate",
            min_samples=min_samples,
            counters=counters,
        )

    def _store(self, name: str, raw) -> bool:
        """Append one reading, substituting glitches where configured"""
        history = self.history(name)

        if name in self.dropout_sensitive:
            glitch = not is_valid_sample(raw) or raw == 0
            value = substitute_glitch(raw, history)
            if glitch:
                if len(history) > 0:
                    self.counters.glitches_substituted += 1
                    logging.debug(f"ppg: {name} glitch {raw!r} replaced by {value}")
                else:
                    self.counters.invalid_samples += 1
            history.push(value)
            return True

        if raw is None:
            self.counters.missing_fields += 1
            return False
        if not is_valid_sample(raw):
            self.counters.invalid_samples += 1
        history.push(raw)
        return True

    def ingest(self, values: Mapping[str, Optional[float]]) -> bool:
        """
        Accumulate one PPG tick

        Args:
            values: Raw PPG indices of the tick; absent fields are skipped

        Returns:
            bool: True if stabilized values and states were refreshed
        """
        for name in PPG_FIELDS:
            if name in values:
                self._store(name, values[name])
        return self.recompute()

    def classify_states(self) -> Dict[str, str]:
        return {name: classifier.classify(self.value(name))
                for name, classifier in self.range_classifiers.items()}

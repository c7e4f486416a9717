"""
EEG brain-state stabilization

This module turns per-tick EEG indices into stable low/medium/high brain
state labels using moving averages over the recent tick history, including
the attention and meditation composites.
"""

from typing import Dict, Mapping, Optional

from ..core.data_types import DropCounters
from ..core.config import (
    EEG, EEG_FIELDS, EEG_HISTORY_SIZE, EEG_AVERAGE_WINDOW, MIN_SAMPLES_FOR_STATE,
    BRAIN_STATE_METRICS,
)
from ..processing.history import is_valid_sample
from ..processing.composite import CompositeIndexSynthesizer
from ..processing.modality import ModalityPipeline
from .classifier import level_classifier


class BrainStatePipeline(ModalityPipeline):
    """
    Stabilize EEG indices and classify brain states

    Each tick appends the present primary indices to their histories, then
    appends the attention/meditation composites computed from the same raw
    tick. Labels are refreshed once the focus history holds enough samples.
    """

    modality = EEG

    def __init__(self, history_size: int = EEG_HISTORY_SIZE, window: int = EEG_AVERAGE_WINDOW,
                 min_samples: int = MIN_SAMPLES_FOR_STATE,
                 synthesizer: Optional[CompositeIndexSynthesizer] = None,
                 counters: Optional[DropCounters] = None):
        self.synthesizer = synthesizer or CompositeIndexSynthesizer()
        self.state_metrics = dict(BRAIN_STATE_METRICS)
        super().__init__(
            metrics=EEG_FIELDS + self.synthesizer.names,
            history_size=history_size,
            window=window,
            reference_metric="focus_index",
            min_samples=min_samples,
            counters=counters,
        )

    def ingest(self, values: Mapping[str, Optional[float]]) -> bool:
        """
        Accumulate one EEG tick

        Args:
            values: Raw EEG indices of the tick (missing or None fields are skipped)

        Returns:
            bool: True if stabilized values and states were refreshed
        """
        for name in EEG_FIELDS:
            if name not in values:
                continue
            value = values[name]
            if value is None:
                self.counters.missing_fields += 1
                continue
            if not is_valid_sample(value):
                # Kept for audit, filtered out when averaging
                self.counters.invalid_samples += 1
            self.history(name).push(value)

        composites, dropped = self.synthesizer.synthesize(values)
        self.counters.composites_dropped += dropped
        for name, value in composites.items():
            self.history(name).push(value)

        return self.recompute()

    def classify_states(self) -> Dict[str, str]:
        return {
            label: level_classifier.classify(self.value(metric))
            for label, metric in self.state_metrics.items()
        }

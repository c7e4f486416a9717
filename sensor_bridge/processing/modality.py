"""
Shared machinery for per-modality stabilization pipelines

A modality pipeline owns one rolling history per metric, recomputes the
stabilized values once enough samples have accumulated, and classifies them
into display states. Subclasses decide how a tick is turned into samples and
how stabilized values map to labels.
"""

import logging
import time
from typing import Dict, Iterable, Optional

from ..core.data_types import StabilizedValue, DropCounters, ModalitySnapshot
from ..core.config import MIN_SAMPLES_FOR_STATE
from .history import RollingHistory
from .stabilizer import MovingAverageStabilizer


class ModalityPipeline:
    """
    Rolling histories, stabilized values and states for one modality

    Below ``min_samples`` samples in the reference metric's history the
    previously committed stabilized values and states are kept unchanged.
    """

    modality = "base"

    def __init__(self, metrics: Iterable[str], history_size: int, window: Optional[int],
                 reference_metric: str, min_samples: int = MIN_SAMPLES_FOR_STATE,
                 counters: Optional[DropCounters] = None):
        if history_size <= 0:
            raise ValueError(f"History size must be positive, got {history_size}")
        if min_samples < 0:
            raise ValueError(f"Minimum sample count must be >= 0, got {min_samples}")

        self.metrics = tuple(metrics)
        self.history_size = history_size
        self.reference_metric = reference_metric
        self.min_samples = min_samples
        self.stabilizer = MovingAverageStabilizer(window)
        self.counters = counters if counters is not None else DropCounters()

        self.histories: Dict[str, RollingHistory] = {}
        self.stabilized: Dict[str, StabilizedValue] = {}
        self.states: Dict[str, str] = {}
        self.extras: Dict[str, object] = {}
        self.last_updated = 0.0
        self._init_outputs()

    def _init_outputs(self):
        self.stabilized = {name: StabilizedValue() for name in self.metrics}
        self.states = self.classify_states()
        self.extras = {}
        self.last_updated = 0.0

    def history(self, name: str) -> RollingHistory:
        """History for ``name``, created on first use"""
        if name not in self.histories:
            self.histories[name] = RollingHistory(name, self.history_size)
        return self.histories[name]

    @property
    def sample_count(self) -> int:
        history = self.histories.get(self.reference_metric)
        return len(history) if history is not None else 0

    @property
    def ready(self) -> bool:
        return self.sample_count >= self.min_samples

    def value(self, name: str) -> float:
        """Committed stabilized value of ``name`` (0.0 if never computed)"""
        stabilized = self.stabilized.get(name)
        return stabilized.value if stabilized is not None else 0.0

    def classify_states(self) -> Dict[str, str]:
        """Map the committed stabilized values to labels"""
        return {}

    def update_extras(self):
        """Hook for modality-specific derived outputs, run after each recompute"""

    def recompute(self) -> bool:
        """
        Recompute stabilized values and states if the cold-start gate allows

        Returns:
            bool: True if outputs were updated
        """
        if not self.ready:
            self.counters.cold_start_holds += 1
            logging.debug(f"{self.modality}: holding outputs "
                          f"({self.sample_count}/{self.min_samples} samples)")
            return False

        for name in set(self.metrics) | set(self.histories):
            self.stabilized[name] = self.stabilizer.stabilize(self.history(name))
        self.states = self.classify_states()
        self.update_extras()
        self.last_updated = time.time()
        return True

    def reset(self):
        """Drop every history and return outputs to their initial values"""
        self.histories.clear()
        self._init_outputs()
        logging.info(f"{self.modality}: pipeline reset")

    def snapshot(self) -> ModalitySnapshot:
        return ModalitySnapshot(
            modality=self.modality,
            stabilized={name: sv.value for name, sv in self.stabilized.items()},
            states=dict(self.states),
            sample_count=self.sample_count,
            ready=self.ready,
            last_updated=self.last_updated,
            extras=dict(self.extras),
        )

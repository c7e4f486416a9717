"""
Accelerometer activity detection

Accelerometer batches are reduced to gravity-compensated magnitudes which
feed the rolling history, the moving average and the activity classifiers.
Movement and posture statistics are derived from a buffer of raw samples.
"""

from collections import deque
from typing import Deque, Dict, Optional, Sequence

from ..core.data_types import AccSample, DropCounters, MovementStats
from ..core.config import (
    ACC, ACC_HISTORY_SIZE, ACC_AVERAGE_WINDOW, MIN_SAMPLES_FOR_STATE, ACC_BUFFER_SIZE,
    ACC_RECENT_SAMPLES,
)
from ..processing.history import is_valid_sample
from ..processing.modality import ModalityPipeline
from ..processing.motion import (
    adjusted_magnitude, is_valid_acc_sample, analyze_movement, estimate_activity,
    analyze_posture, buffer_activity, lowpass_samples,
)
from .classifier import magnitude_activity_classifier, movement_activity_classifier

MAGNITUDE = "acc_magnitude"


def to_samples(batch) -> list:
    """Accept AccSample objects, (x, y, z) triples or dicts with x/y/z keys"""
    samples = []
    for item in batch:
        if isinstance(item, AccSample):
            samples.append(item)
        elif isinstance(item, dict):
            samples.append(AccSample(x=item.get("x"), y=item.get("y"), z=item.get("z"),
                                     magnitude=item.get("magnitude"),
                                     timestamp=item.get("timestamp", 0.0)))
        else:
            try:
                x, y, z = item[:3]
            except (TypeError, ValueError):
                # Malformed entries become invalid samples
                x = y = z = None
            samples.append(AccSample(x=x, y=y, z=z))
    return samples


class ActivityPipeline(ModalityPipeline):
    """
    Stabilize movement magnitude and classify activity

    States:
        activity: stabilized magnitude against 0.1 / 0.3 / 0.8 g
        instant_activity: latest sample magnitude against the same cutoffs
        movement: buffer average movement against 5 / 10 / 20
        estimate: combined average/peak rule with confidence and intensity
    """

    modality = ACC

    def __init__(self, history_size: int = ACC_HISTORY_SIZE, window: int = ACC_AVERAGE_WINDOW,
                 min_samples: int = MIN_SAMPLES_FOR_STATE, buffer_size: int = ACC_BUFFER_SIZE,
                 lowpass: bool = False, counters: Optional[DropCounters] = None):
        self.buffer: Deque[AccSample] = deque(maxlen=buffer_size)
        self.lowpass = lowpass
        self.latest_magnitude = 0.0
        self.movement = MovementStats()
        super().__init__(
            metrics=(MAGNITUDE,),
            history_size=history_size,
            window=window,
            reference_metric=MAGNITUDE,
            min_samples=min_samples,
            counters=counters,
        )

    def ingest(self, batch: Sequence) -> bool:
        """
        Accumulate a batch of accelerometer samples

        Args:
            batch: Samples in arrival order

        Returns:
            bool: True if stabilized values and states were refreshed
        """
        samples = to_samples(batch)
        if self.lowpass:
            samples = lowpass_samples(samples)

        for sample in samples:
            self.buffer.append(sample)
            magnitude = adjusted_magnitude(sample) if is_valid_acc_sample(sample) else float("nan")
            if is_valid_sample(magnitude):
                self.latest_magnitude = magnitude
            else:
                self.counters.invalid_samples += 1
            self.history(MAGNITUDE).push(magnitude)

        return self.recompute()

    def classify_states(self) -> Dict[str, str]:
        self.movement = analyze_movement(self.buffer)
        return {
            "activity": magnitude_activity_classifier.classify(self.value(MAGNITUDE)),
            "instant_activity": magnitude_activity_classifier.classify(self.latest_magnitude),
            "movement": movement_activity_classifier.classify(self.movement.avg_movement),
            "estimate": estimate_activity(self.movement).state,
        }

    def update_extras(self):
        stats = self.movement
        estimate = estimate_activity(stats)
        posture = analyze_posture(self.buffer)
        recent, total = buffer_activity(self.buffer, ACC_RECENT_SAMPLES)

        self.extras = {
            "avg_movement": stats.avg_movement,
            "std_movement": stats.std_movement,
            "max_movement": stats.max_movement,
            "total_movement": stats.total_movement,
            "confidence": estimate.confidence,
            "intensity": estimate.intensity,
            "tilt_angle": posture.tilt_angle,
            "stability": posture.stability,
            "balance": posture.balance,
            "recent_activity": recent,
            "total_activity": total,
            "buffer_count": len(self.buffer),
        }

    def reset(self):
        self.buffer.clear()
        self.latest_magnitude = 0.0
        super().reset()

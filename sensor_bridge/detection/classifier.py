"""
Threshold-based state classification

Maps a stabilized scalar onto a discrete label. Classification is stateless:
the same value always yields the same label.
"""

from typing import Sequence, Tuple

from ..core.config import (
    LEVEL_LABELS, BRAIN_STATE_THRESHOLDS, ACTIVITY_LABELS, MAGNITUDE_THRESHOLDS,
    MOVEMENT_THRESHOLDS, RANGE_LABELS,
)


class ThresholdClassifier:
    """
    Ordered threshold scan

    The first threshold the value is strictly below selects the matching
    label; values at or above every threshold get the last label.
    """

    def __init__(self, thresholds: Sequence[float], labels: Sequence[str]):
        thresholds = tuple(thresholds)
        labels = tuple(labels)
        if len(labels) != len(thresholds) + 1:
            raise ValueError(f"Expected {len(thresholds) + 1} labels for "
                             f"{len(thresholds)} thresholds, got {len(labels)}")
        if any(lo >= hi for lo, hi in zip(thresholds, thresholds[1:])):
            raise ValueError(f"Thresholds must be strictly increasing, got {thresholds}")
        self.thresholds = thresholds
        self.labels = labels

    def classify(self, value: float) -> str:
        for threshold, label in zip(self.thresholds, self.labels):
            if value < threshold:
                return label
        return self.labels[-1]

    __call__ = classify


class RangeClassifier:
    """Label a value as below, inside or above a normal range"""

    def __init__(self, normal_range: Tuple[float, float], labels: Sequence[str] = RANGE_LABELS):
        low, high = normal_range
        if low > high:
            raise ValueError(f"Invalid normal range {normal_range}")
        if len(labels) != 3:
            raise ValueError(f"Range classification needs 3 labels, got {len(labels)}")
        self.low = low
        self.high = high
        self.labels = tuple(labels)

    def classify(self, value: float) -> str:
        if value < self.low:
            return self.labels[0]
        if value > self.high:
            return self.labels[2]
        return self.labels[1]

    __call__ = classify


def classify(value: float, thresholds: Sequence[float], labels: Sequence[str] = LEVEL_LABELS) -> str:
    """Classify ``value`` with an ad-hoc threshold list"""
    return ThresholdClassifier(thresholds, labels).classify(value)


# Shared classifiers for the fixed threshold sets
level_classifier = ThresholdClassifier(BRAIN_STATE_THRESHOLDS, LEVEL_LABELS)
magnitude_activity_classifier = ThresholdClassifier(MAGNITUDE_THRESHOLDS, ACTIVITY_LABELS)
movement_activity_classifier = ThresholdClassifier(MOVEMENT_THRESHOLDS, ACTIVITY_LABELS)


def classify_level(value: float) -> str:
    """low / medium / high with cutoffs 0.3 and 0.7"""
    return level_classifier.classify(value)


def classify_magnitude_activity(adjusted_magnitude: float) -> str:
    """Activity from gravity-removed magnitude (0.1 / 0.3 / 0.8 g)"""
    return magnitude_activity_classifier.classify(adjusted_magnitude)


def classify_movement_activity(avg_movement: float) -> str:
    """Activity from scaled average movement (5 / 10 / 20)"""
    return movement_activity_classifier.classify(avg_movement)

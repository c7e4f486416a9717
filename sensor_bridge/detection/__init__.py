"""
State detection for each sensor modality

This module implements the threshold classifiers and the EEG, PPG and
accelerometer stabilization pipelines built on them.
"""

from .classifier import ThresholdClassifier, RangeClassifier, classify
from .brain_state import BrainStatePipeline
from .vitals import VitalSignsPipeline
from .activity import ActivityPipeline

__all__ = [
    'ThresholdClassifier', 'RangeClassifier', 'classify',
    'BrainStatePipeline', 'VitalSignsPipeline', 'ActivityPipeline',
]

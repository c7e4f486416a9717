"""
Sensor Bridge - Real-time biosignal stabilization for wearable dashboards

A modular Python package that turns noisy per-tick EEG, PPG and accelerometer
analysis indices into stable moving averages and discrete state labels for
live dashboard widgets.

Python: 3.10+
"""

__version__ = "1.0.0"

# Main package imports for easy access
from .core.data_types import AccSample, AnalysisTick, StabilizedValue, DeviceSnapshot
from .processing.history import RollingHistory
from .processing.stabilizer import MovingAverageStabilizer
from .processing.composite import CompositeIndexSynthesizer
from .detection.classifier import ThresholdClassifier, RangeClassifier
from .detection.brain_state import BrainStatePipeline
from .detection.vitals import VitalSignsPipeline
from .detection.activity import ActivityPipeline
from .pipeline.gate import ConnectionQualityGate
from .pipeline.context import PipelineContext
from .acquisition.sources import FakeTickSource, LSLTickSource
from .communication.udp_sender import SnapshotSender
from .communication.presentation import PresentationRefresher

__all__ = [
    'AccSample', 'AnalysisTick', 'StabilizedValue', 'DeviceSnapshot',
    'RollingHistory', 'MovingAverageStabilizer', 'CompositeIndexSynthesizer',
    'ThresholdClassifier', 'RangeClassifier',
    'BrainStatePipeline', 'VitalSignsPipeline', 'ActivityPipeline',
    'ConnectionQualityGate', 'PipelineContext',
    'FakeTickSource', 'LSLTickSource',
    'SnapshotSender', 'PresentationRefresher',
]

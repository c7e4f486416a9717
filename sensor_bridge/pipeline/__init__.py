"""
Per-device pipeline orchestration

This module gates incoming ticks on connection and sensor contact and
routes them to the EEG, PPG and accelerometer pipelines of one device.
"""

from .gate import ConnectionQualityGate
from .context import PipelineContext

__all__ = ['ConnectionQualityGate', 'PipelineContext']

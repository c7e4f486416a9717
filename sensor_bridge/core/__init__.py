"""
Core data types and configuration for Sensor Bridge

This module contains the fundamental data classes used throughout the system.
"""

from .data_types import (
    AccSample, AnalysisTick, StabilizedValue, MovementStats, ActivityEstimate,
    PostureStats, DropCounters, ModalitySnapshot, DeviceSnapshot,
)
from .config import *

__all__ = [
    'AccSample', 'AnalysisTick', 'StabilizedValue', 'MovementStats',
    'ActivityEstimate', 'PostureStats', 'DropCounters', 'ModalitySnapshot',
    'DeviceSnapshot',
]

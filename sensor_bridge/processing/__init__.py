"""
Sample history and stabilization components

This module contains the rolling histories, the moving-average stabilizer,
composite index synthesis and accelerometer preprocessing.
"""

from .history import RollingHistory, is_valid_sample
from .stabilizer import MovingAverageStabilizer, moving_average, substitute_glitch
from .composite import CompositeIndexSynthesizer, attention_level, meditation_level
from .modality import ModalityPipeline

__all__ = [
    'RollingHistory', 'is_valid_sample',
    'MovingAverageStabilizer', 'moving_average', 'substitute_glitch',
    'CompositeIndexSynthesizer', 'attention_level', 'meditation_level',
    'ModalityPipeline',
]

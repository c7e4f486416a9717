"""
Core data types for Sensor Bridge

This module defines the data structures exchanged between the tick sources,
the stabilization pipeline and the presentation layer.
"""

import time
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Sequence, Union


@dataclass
class AccSample:
    """Single 3-axis accelerometer sample in g"""
    x: float
    y: float
    z: float
    magnitude: Optional[float] = None  # As reported by the device; not used for activity
    timestamp: float = 0.0


@dataclass
class AnalysisTick:
    """
    One delivery of analysis values for a modality

    EEG and PPG ticks carry ``values`` (metric name -> raw scalar or None).
    ACC ticks carry a batch of ``samples`` instead.
    """
    modality: str
    values: Dict[str, Optional[float]] = field(default_factory=dict)
    samples: Sequence[AccSample] = field(default_factory=list)
    timestamp: float = field(default_factory=time.time)


@dataclass
class StabilizedValue:
    """Most recent moving average for one metric"""
    value: float = 0.0
    window: int = 0           # Number of valid samples the mean was taken over


@dataclass
class MovementStats:
    """Movement statistics over the accelerometer buffer"""
    avg_movement: float = 0.0
    std_movement: float = 0.0
    max_movement: float = 0.0
    total_movement: float = 0.0


@dataclass
class ActivityEstimate:
    """Activity class with confidence and 0-100 intensity"""
    state: str = "stationary"
    confidence: float = 0.0
    intensity: int = 0


@dataclass
class PostureStats:
    """Posture derived from the mean gravity vector"""
    tilt_angle: float = 0.0   # Degrees from vertical
    stability: float = 0.0    # 0-100
    balance: float = 0.0      # 0-100


@dataclass
class DropCounters:
    """Counts of samples and ticks the pipeline silently discarded or corrected"""
    gate_closed: Dict[str, int] = field(default_factory=dict)
    missing_fields: int = 0
    invalid_samples: int = 0
    glitches_substituted: int = 0
    composites_dropped: int = 0
    cold_start_holds: int = 0

    def count_gate_closed(self, modality: str):
        self.gate_closed[modality] = self.gate_closed.get(modality, 0) + 1

    def reset(self):
        self.gate_closed.clear()
        self.missing_fields = 0
        self.invalid_samples = 0
        self.glitches_substituted = 0
        self.composites_dropped = 0
        self.cold_start_holds = 0


@dataclass
class ModalitySnapshot:
    """Committed output of one modality pipeline"""
    modality: str
    stabilized: Dict[str, float]
    states: Dict[str, str]
    sample_count: int
    ready: bool
    last_updated: float
    extras: Dict[str, Union[float, int, str]] = field(default_factory=dict)


@dataclass
class DeviceSnapshot:
    """Read-only view of every modality for presentation consumers"""
    device_id: str
    connection_state: str
    gate_open: Dict[str, bool]
    modalities: Dict[str, ModalitySnapshot]
    counters: DropCounters
    timestamp: float

    def to_dict(self) -> Dict:
        """Convert to a JSON-serializable dictionary"""
        return asdict(self)


# Accepted shapes for a raw ACC batch: samples or (x, y, z) triples
AccBatch = Union[Sequence[AccSample], List[Sequence[float]]]

"""
Analysis tick sources

This module provides the feeds the pipeline consumes: a synthetic generator
producing EEG/PPG/accelerometer ticks with realistic glitches for
development, and an LSL reader for analysis engines that publish their
indices as LSL streams.
"""

import logging
import math
import time
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..core.data_types import AccSample, AnalysisTick
from ..core.config import (
    EEG, PPG, ACC, EEG_FIELDS, PPG_FIELDS, LEAD_OFF_CHANNELS, ACC_FS, TICK_INTERVAL_SEC,
)

# Optional import with fallback
try:
    import pylsl
    LSL_AVAILABLE = True
except ImportError:
    LSL_AVAILABLE = False
    logging.warning("pylsl not available - fake mode only")


class FakeTickSource:
    """
    Generate synthetic analysis ticks for testing dashboards

    Brain indices drift through focus/relax cycles, PPG indices carry
    occasional zero dropouts, the accelerometer alternates between rest and
    walking, and short lead-off episodes exercise the contact gate.
    """

    def __init__(self, tick_interval: float = TICK_INTERVAL_SEC, acc_fs: float = ACC_FS,
                 glitch_rate: float = 0.05, seed: Optional[int] = None):
        self.tick_interval = tick_interval
        self.acc_fs = acc_fs
        self.glitch_rate = glitch_rate
        self.rng = np.random.default_rng(seed)
        self.time = 0.0
        self.state_cycle_time = 30.0   # Focus/relax cycle length (s)
        self.motion_cycle_time = 20.0  # Rest/walk cycle length (s)
        self.lead_off_every = 45.0     # Seconds between lead-off episodes
        self.lead_off_duration = 3.0
        self.is_connected = True

    def connect(self) -> bool:
        self.is_connected = True
        return True

    def disconnect(self):
        self.is_connected = False

    def _noisy(self, center: float, spread: float, low: float = 0.0, high: float = 1.0) -> float:
        return float(np.clip(center + self.rng.normal(0, spread), low, high))

    def _eeg_values(self) -> Dict[str, Optional[float]]:
        phase = 2 * np.pi * self.time / self.state_cycle_time
        focus = 0.5 + 0.35 * math.sin(phase)
        values = {
            "focus_index": self._noisy(focus, 0.08),
            "relaxation_index": self._noisy(1 - focus, 0.08),
            "stress_index": self._noisy(0.3 + 0.2 * math.sin(phase / 2), 0.05),
            "cognitive_load": self._noisy(focus * 0.8, 0.1),
            "total_power": self._noisy(0.4, 0.1),
            "hemispheric_balance": self._noisy(0.0, 0.1, -1.0, 1.0),
            "emotional_stability": self._noisy(0.6, 0.1),
        }
        # Occasional missing or non-finite outputs from the analysis engine
        for name in EEG_FIELDS:
            roll = self.rng.random()
            if roll < self.glitch_rate / 2:
                values[name] = None
            elif roll < self.glitch_rate:
                values[name] = float("nan")
        return values

    def _ppg_values(self) -> Dict[str, Optional[float]]:
        hr = 72 + 8 * math.sin(2 * np.pi * self.time / self.state_cycle_time) + self.rng.normal(0, 2)
        rmssd = max(5.0, 40 + self.rng.normal(0, 6))
        lf, hf = abs(6 + self.rng.normal(0, 1.5)), abs(4 + self.rng.normal(0, 1.0)) + 0.1
        values = {
            "heart_rate": hr,
            "rmssd": rmssd,
            "sdnn": max(5.0, 55 + self.rng.normal(0, 8)),
            "pnn50": max(0.0, 18 + self.rng.normal(0, 4)),
            "lf_power": lf,
            "hf_power": hf,
            "lf_hf_ratio": lf / hf,
            "stress_index": self._noisy(0.45, 0.08),
            "spo2": self._noisy(97.5, 0.8, 85.0, 100.0),
            "avnn": 60000.0 / hr,
            "pnn20": max(0.0, 40 + self.rng.normal(0, 8)),
            "sdsd": max(1.0, rmssd * 0.9),
            "hr_max": hr + abs(self.rng.normal(12, 3)),
            "hr_min": hr - abs(self.rng.normal(10, 3)),
        }
        # Transient zero readings, typical for the frequency-domain HRV metrics
        for name in ("lf_power", "hf_power", "lf_hf_ratio"):
            if self.rng.random() < self.glitch_rate:
                values[name] = 0.0
        return values

    def _acc_samples(self) -> List[AccSample]:
        n_samples = max(1, int(self.tick_interval * self.acc_fs))
        t = self.time + np.arange(n_samples) / self.acc_fs
        walking = math.sin(2 * np.pi * self.time / self.motion_cycle_time) > 0
        amplitude = 0.4 if walking else 0.02

        x = self.rng.normal(0, 0.02, n_samples)
        y = amplitude * np.sin(2 * np.pi * 1.8 * t) + self.rng.normal(0, 0.02, n_samples)
        z = 1.0 + amplitude * np.cos(2 * np.pi * 1.8 * t) + self.rng.normal(0, 0.02, n_samples)
        return [AccSample(x=float(a), y=float(b), z=float(c), timestamp=float(ts))
                for a, b, c, ts in zip(x, y, z, t)]

    def contact_status(self) -> Tuple[bool, Dict[str, bool]]:
        """Sensor contact and lead-off flags at the current synthetic time"""
        in_episode = (self.time % self.lead_off_every) >= self.lead_off_every - self.lead_off_duration
        lead_off = {ch: in_episode for ch in LEAD_OFF_CHANNELS}
        return not in_episode, lead_off

    def get_ticks(self) -> List[AnalysisTick]:
        """
        Generate the ticks for one analysis interval

        Returns:
            List[AnalysisTick]: One EEG, one PPG and one ACC tick
        """
        timestamp = time.time()
        ticks = [
            AnalysisTick(modality=EEG, values=self._eeg_values(), timestamp=timestamp),
            AnalysisTick(modality=PPG, values=self._ppg_values(), timestamp=timestamp),
            AnalysisTick(modality=ACC, samples=self._acc_samples(), timestamp=timestamp),
        ]
        self.time += self.tick_interval
        return ticks


class LSLTickSource:
    """
    Read analysis ticks published as LSL streams

    Each modality is a separate stream. EEG and PPG streams carry one channel
    per field in the order of EEG_FIELDS / PPG_FIELDS; the accelerometer
    stream carries x, y, z channels.
    """

    DEFAULT_STREAMS = {EEG: "EEG_INDICES", PPG: "PPG_INDICES", ACC: "ACC"}

    def __init__(self, stream_names: Optional[Dict[str, str]] = None, resolve_timeout: float = 5.0):
        self.stream_names = dict(self.DEFAULT_STREAMS if stream_names is None else stream_names)
        self.resolve_timeout = resolve_timeout
        self.inlets: Dict[str, object] = {}
        self.is_connected = False

    def connect(self) -> bool:
        """
        Resolve and open an inlet for every configured stream

        Returns:
            bool: True if at least one stream was found
        """
        if not LSL_AVAILABLE:
            logging.error("pylsl not available. Install with: pip install pylsl")
            return False

        try:
            for modality, name in self.stream_names.items():
                logging.info(f"Looking for LSL stream: {name}")
                streams = pylsl.resolve_byprop('name', name, timeout=self.resolve_timeout)
                if not streams:
                    logging.warning(f"No LSL stream named {name} - {modality} disabled")
                    continue
                self.inlets[modality] = pylsl.StreamInlet(streams[0])
                logging.info(f"Connected to LSL stream: {name} ({streams[0].channel_count()} channels)")
        except Exception as e:
            logging.error(f"LSL connection failed: {e}")
            return False

        self.is_connected = bool(self.inlets)
        if not self.is_connected:
            logging.error("No LSL analysis streams found")
        return self.is_connected

    @staticmethod
    def row_to_values(row, fields) -> Dict[str, Optional[float]]:
        """Map a channel vector onto field names, NaN channels become None"""
        values = {}
        for name, raw in zip(fields, row):
            value = float(raw)
            values[name] = None if math.isnan(value) else value
        return values

    def get_ticks(self) -> List[AnalysisTick]:
        """Pull everything currently buffered on the inlets"""
        if not self.is_connected:
            return []

        ticks = []
        try:
            for modality, inlet in self.inlets.items():
                rows, stamps = inlet.pull_chunk(timeout=0.0)
                if not rows:
                    continue
                if modality == ACC:
                    samples = [AccSample(x=r[0], y=r[1], z=r[2], timestamp=ts)
                               for r, ts in zip(rows, stamps)]
                    ticks.append(AnalysisTick(modality=ACC, samples=samples, timestamp=stamps[-1]))
                else:
                    fields = EEG_FIELDS if modality == EEG else PPG_FIELDS
                    for row, ts in zip(rows, stamps):
                        ticks.append(AnalysisTick(modality=modality,
                                                  values=self.row_to_values(row, fields),
                                                  timestamp=ts))
        except Exception as e:
            logging.error(f"Failed to pull LSL data: {e}")
        return ticks

    def contact_status(self) -> Optional[Tuple[bool, Dict[str, bool]]]:
        """LSL analysis streams carry no contact information"""
        return None

    def disconnect(self):
        """Close every inlet"""
        try:
            for inlet in self.inlets.values():
                inlet.close_stream()
            if self.inlets:
                logging.info("LSL disconnected")
        except Exception as e:
            logging.error(f"Disconnect error: {e}")
        finally:
            self.inlets.clear()
            self.is_connected = False

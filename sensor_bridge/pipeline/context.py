"""
Per-device pipeline context

A PipelineContext is created when a device connects and owns everything the
stabilization pipeline mutates for that device: the admission gate, the
EEG/PPG/ACC modality pipelines and the drop counters. Passing the context
explicitly keeps several devices (or test harnesses) independent.
"""

import logging
import time
from threading import Lock
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from ..core.data_types import AnalysisTick, DropCounters, DeviceSnapshot
from ..core.config import EEG, PPG, ACC, CONNECTED, DISCONNECTED
from ..detection.brain_state import BrainStatePipeline
from ..detection.vitals import VitalSignsPipeline
from ..detection.activity import ActivityPipeline
from .gate import ConnectionQualityGate

# Called once per processed tick with (modality, context)
UpdateListener = Callable[[str, "PipelineContext"], None]


class PipelineContext:
    """
    Stabilization pipeline bound to one device connection

    Ticks are processed synchronously in arrival order. A lock serializes
    processing and snapshotting so a presentation thread can read committed
    values at its own cadence.
    """

    def __init__(self, device_id: str = "device", eeg: Optional[BrainStatePipeline] = None,
                 ppg: Optional[VitalSignsPipeline] = None, acc: Optional[ActivityPipeline] = None,
                 gate: Optional[ConnectionQualityGate] = None):
        self.device_id = device_id
        self.counters = DropCounters()
        self.gate = gate or ConnectionQualityGate()
        self.eeg = eeg or BrainStatePipeline()
        self.ppg = ppg or VitalSignsPipeline()
        self.acc = acc or ActivityPipeline()
        for pipeline in self.pipelines.values():
            pipeline.counters = self.counters
        self._listeners: List[UpdateListener] = []
        self._lock = Lock()

    @property
    def pipelines(self) -> Dict[str, object]:
        return {EEG: self.eeg, PPG: self.ppg, ACC: self.acc}

    # ------------------------------------------------------------------
    # Connection and contact state
    # ------------------------------------------------------------------

    def connect(self):
        self.set_connection_state(CONNECTED)

    def disconnect(self):
        """Mark the device disconnected and clear all pipeline state"""
        self.set_connection_state(DISCONNECTED)

    def set_connection_state(self, state: str):
        with self._lock:
            previous = self.gate.connection_state
            self.gate.set_connection_state(state)
            if state == DISCONNECTED and previous != DISCONNECTED:
                self._reset_locked()

    def update_contact(self, is_sensor_contacted: bool, lead_off: Optional[Mapping[str, bool]] = None):
        with self._lock:
            self.gate.update_contact(is_sensor_contacted, lead_off)

    def set_signal_quality(self, modality: str, ok: bool):
        with self._lock:
            self.gate.set_signal_quality(modality, ok)

    # ------------------------------------------------------------------
    # Tick processing
    # ------------------------------------------------------------------

    def add_listener(self, listener: UpdateListener):
        self._listeners.append(listener)

    def remove_listener(self, listener: UpdateListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _admit(self, modality: str) -> bool:
        if self.gate.is_open(modality):
            return True
        self.counters.count_gate_closed(modality)
        logging.debug(f"{modality}: gate closed, tick dropped")
        return False

    def _process(self, modality: str, payload) -> bool:
        with self._lock:
            if not self._admit(modality):
                return False
            updated = self.pipelines[modality].ingest(payload)
        self._notify(modality)
        return updated

    def process_eeg(self, values: Mapping[str, Optional[float]]) -> bool:
        """
        Feed one EEG tick

        Returns:
            bool: True if brain-state outputs were refreshed
        """
        return self._process(EEG, values)

    def process_ppg(self, values: Mapping[str, Optional[float]]) -> bool:
        """Feed one PPG tick"""
        return self._process(PPG, values)

    def process_acc(self, samples: Sequence) -> bool:
        """Feed one batch of accelerometer samples"""
        return self._process(ACC, samples)

    def process_tick(self, tick: AnalysisTick) -> bool:
        """Dispatch an AnalysisTick to the matching modality"""
        if tick.modality == EEG:
            return self.process_eeg(tick.values)
        if tick.modality == PPG:
            return self.process_ppg(tick.values)
        if tick.modality == ACC:
            return self.process_acc(tick.samples)
        raise ValueError(f"Unknown modality: {tick.modality}")

    def _notify(self, modality: str):
        for listener in list(self._listeners):
            try:
                listener(modality, self)
            except Exception as e:
                logging.error(f"Update listener failed: {e}")

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    def _reset_locked(self):
        for pipeline in self.pipelines.values():
            pipeline.reset()
        self.gate.reset()
        logging.info(f"Pipeline state reset for {self.device_id}")

    def reset(self):
        """Clear all histories and stabilized values, keeping counters"""
        with self._lock:
            self._reset_locked()

    def snapshot(self) -> DeviceSnapshot:
        """Committed stabilized values and states of every modality"""
        with self._lock:
            return DeviceSnapshot(
                device_id=self.device_id,
                connection_state=self.gate.connection_state,
                gate_open=self.gate.status(),
                modalities={name: p.snapshot() for name, p in self.pipelines.items()},
                counters=DropCounters(
                    gate_closed=dict(self.counters.gate_closed),
                    missing_fields=self.counters.missing_fields,
                    invalid_samples=self.counters.invalid_samples,
                    glitches_substituted=self.counters.glitches_substituted,
                    composites_dropped=self.counters.composites_dropped,
                    cold_start_holds=self.counters.cold_start_holds,
                ),
                timestamp=time.time(),
            )

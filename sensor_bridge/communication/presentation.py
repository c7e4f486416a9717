"""
Fixed-interval presentation refresh

Presentation consumers do not receive ticks directly. A refresher reads the
latest committed snapshot on its own timer and hands it to every registered
sink, independent of how fast analysis ticks arrive.
"""

import logging
from threading import Event, Thread
from typing import Callable, List, Optional

from ..core.data_types import DeviceSnapshot
from ..core.config import REFRESH_INTERVAL_SEC
from ..pipeline.context import PipelineContext

Sink = Callable[[DeviceSnapshot], object]


class PresentationRefresher:
    """Periodically publish PipelineContext snapshots to sinks"""

    def __init__(self, context: PipelineContext, interval: float = REFRESH_INTERVAL_SEC,
                 sinks: Optional[List[Sink]] = None):
        if interval <= 0:
            raise ValueError(f"Refresh interval must be positive, got {interval}")
        self.context = context
        self.interval = interval
        self.sinks: List[Sink] = list(sinks or [])
        self.refresh_count = 0
        self._stop_event = Event()
        self._thread: Optional[Thread] = None

    def add_sink(self, sink: Sink):
        self.sinks.append(sink)

    def refresh(self) -> DeviceSnapshot:
        """Publish one snapshot to every sink"""
        snapshot = self.context.snapshot()
        for sink in self.sinks:
            try:
                sink(snapshot)
            except Exception as e:
                logging.error(f"Presentation sink failed: {e}")
        self.refresh_count += 1
        return snapshot

    def _run(self):
        while not self._stop_event.wait(self.interval):
            self.refresh()

    def start(self):
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = Thread(target=self._run, name="presentation-refresh", daemon=True)
        self._thread.start()
        logging.info(f"Presentation refresh started ({self.interval:.2f}s interval)")

    def stop(self):
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=self.interval * 2)
            self._thread = None
        logging.info("Presentation refresh stopped")

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()


def format_status(snapshot: DeviceSnapshot) -> str:
    """One-line console summary of the brain and activity states"""
    eeg = snapshot.modalities["eeg"]
    ppg = snapshot.modalities["ppg"]
    acc = snapshot.modalities["acc"]
    return (f"Focus: {eeg.states.get('focus', '-'):>6} ({eeg.stabilized.get('focus_index', 0.0):.2f}) | "
            f"Relax: {eeg.states.get('relaxation', '-'):>6} | "
            f"Stress: {eeg.states.get('stress', '-'):>6} | "
            f"HR: {ppg.stabilized.get('heart_rate', 0.0):5.1f} | "
            f"Activity: {acc.states.get('activity', '-'):>10} | "
            f"Dropped: {sum(snapshot.counters.gate_closed.values())}")

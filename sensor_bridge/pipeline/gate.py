"""
Connection and sensor-contact gating

Ticks are only accepted while the device is connected and, for EEG, while
the electrodes have good skin contact. A closed gate silently drops ticks.
"""

import logging
from typing import Dict, Iterable, Mapping, Optional

from ..core.config import EEG, PPG, ACC, MODALITIES, CONNECTED, DISCONNECTED, LEAD_OFF_CHANNELS


class ConnectionQualityGate:
    """
    Per-device admission check for analysis ticks

    Conditions:
        all modalities: connection state is "connected"
        EEG: sensor contacted and no lead-off flag raised
        PPG: upstream signal quality flag is good
        ACC: connection only
    """

    def __init__(self, lead_off_channels: Iterable[str] = LEAD_OFF_CHANNELS):
        self.lead_off_channels = tuple(lead_off_channels)
        self.connection_state = DISCONNECTED
        self.is_sensor_contacted = False
        self.lead_off: Dict[str, bool] = {ch: True for ch in self.lead_off_channels}
        self.signal_quality: Dict[str, bool] = {modality: True for modality in MODALITIES}

    @property
    def is_connected(self) -> bool:
        return self.connection_state == CONNECTED

    def set_connection_state(self, state: str):
        if state != self.connection_state:
            logging.info(f"Connection state: {self.connection_state} -> {state}")
        self.connection_state = state

    def update_contact(self, is_sensor_contacted: bool, lead_off: Optional[Mapping[str, bool]] = None):
        """Record sensor contact and per-channel lead-off flags"""
        self.is_sensor_contacted = bool(is_sensor_contacted)
        if lead_off is not None:
            for channel, flag in lead_off.items():
                self.lead_off[channel] = bool(flag)

    def set_signal_quality(self, modality: str, ok: bool):
        if modality not in self.signal_quality:
            raise ValueError(f"Unknown modality: {modality}")
        self.signal_quality[modality] = bool(ok)

    @property
    def contact_ok(self) -> bool:
        channels_ok = not any(self.lead_off.get(ch, True) for ch in self.lead_off_channels)
        return self.is_sensor_contacted and channels_ok

    def is_open(self, modality: str) -> bool:
        """Whether ticks of ``modality`` may enter the pipeline"""
        if modality not in MODALITIES:
            raise ValueError(f"Unknown modality: {modality}")
        if not self.is_connected:
            return False
        if modality == EEG:
            return self.contact_ok and self.signal_quality[EEG]
        if modality == PPG:
            return self.signal_quality[PPG]
        if modality == ACC:
            return self.signal_quality[ACC]
        return False

    def status(self) -> Dict[str, bool]:
        return {modality: self.is_open(modality) for modality in MODALITIES}

    def reset(self):
        self.is_sensor_contacted = False
        self.lead_off = {ch: True for ch in self.lead_off_channels}
        self.signal_quality = {modality: True for modality in MODALITIES}

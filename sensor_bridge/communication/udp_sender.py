"""
Dashboard UDP interface

This module sends pipeline snapshots to a dashboard process as JSON
datagrams, one message per presentation refresh.
"""

import json
import logging
import socket
from typing import Any, Dict

from ..core.data_types import DeviceSnapshot
from ..core.config import UDP_HOST, UDP_PORT


def snapshot_message(snapshot: DeviceSnapshot) -> Dict[str, Any]:
    """Flatten a device snapshot into the dashboard message format"""
    message = {
        "t": snapshot.timestamp,
        "device": snapshot.device_id,
        "connection": snapshot.connection_state,
        "gate": dict(snapshot.gate_open),
        "dropped": sum(snapshot.counters.gate_closed.values()),
    }
    for modality, data in snapshot.modalities.items():
        message[modality] = {
            "ready": data.ready,
            "values": {name: float(value) for name, value in data.stabilized.items()},
            "states": dict(data.states),
            **({"extras": dict(data.extras)} if data.extras else {}),
        }
    return message


class SnapshotSender:
    """
    Send stabilized values and states to a dashboard via UDP JSON messages

    Transport failures are logged and reported through the return value;
    they never propagate into the pipeline.
    """

    def __init__(self, host: str = UDP_HOST, port: int = UDP_PORT):
        self.host = host
        self.port = port
        self.socket = None
        self._setup_socket()

    def _setup_socket(self):
        """Setup UDP socket for communication"""
        try:
            self.socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            logging.info(f"UDP sender initialized: {self.host}:{self.port}")
        except Exception as e:
            logging.error(f"Failed to setup UDP socket: {e}")

    def send_snapshot(self, snapshot: DeviceSnapshot) -> bool:
        """
        Send a snapshot to the dashboard

        Args:
            snapshot: Current committed pipeline outputs

        Returns:
            bool: True if sent successfully
        """
        if self.socket is None:
            return False

        try:
            json_str = json.dumps(snapshot_message(snapshot))
            self.socket.sendto(json_str.encode('utf-8'), (self.host, self.port))
            return True
        except Exception as e:
            logging.error(f"Failed to send UDP message: {e}")
            return False

    __call__ = send_snapshot

    def close(self):
        """Close UDP socket"""
        if self.socket:
            self.socket.close()
            self.socket = None

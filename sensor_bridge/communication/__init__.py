"""
Presentation interfaces

This module handles publishing committed pipeline outputs, including the
periodic refresher and UDP messaging to dashboards.
"""

from .udp_sender import SnapshotSender, snapshot_message
from .presentation import PresentationRefresher, format_status

__all__ = ['SnapshotSender', 'snapshot_message', 'PresentationRefresher', 'format_status']

"""
Analysis tick sources

This module handles the feeds of per-tick analysis values, including
LSL streams and synthetic data generation.
"""

from .sources import FakeTickSource, LSLTickSource

__all__ = ['FakeTickSource', 'LSLTickSource']

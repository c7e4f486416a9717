"""
Command-line interface

This module provides the command-line entry point for Sensor Bridge.
"""

from .main import main

__all__ = ['main']

"""
Main entry point for Sensor Bridge package

This allows running the package with: python -m sensor_bridge
"""

import sys

from .cli.main import main

if __name__ == "__main__":
    sys.exit(main())

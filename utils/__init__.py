"""
Utilities Module

Shared helpers used across the capture operation packages:
- Performance timing of remote calls
- Reading local image and source files
"""

from .timing import PerformanceTimer, TimingResult, OperationTimingStats
from .files import read_image_bytes

__all__ = [
    'PerformanceTimer',
    'TimingResult',
    'OperationTimingStats',
    'read_image_bytes'
]

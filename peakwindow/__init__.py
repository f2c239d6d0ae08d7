"""Sliding window max tracking.

``PeakDetector`` reports, after each new value of a stream, the largest of the
last N values without rescanning the window. ``FloatPeakDetector`` is the same
tracker over floats, made totally ordered by ``OrderedFloat``.
"""

from .core.floats import FloatPeakDetector, OrderedFloat
from .core.peak import BufferElement, PeakDetector, PeakwindowError, WindowSizeError
from .core.stream import brute_force_max, running_max

__all__ = [
    "BufferElement",
    "FloatPeakDetector",
    "OrderedFloat",
    "PeakDetector",
    "PeakwindowError",
    "WindowSizeError",
    "brute_force_max",
    "running_max",
]

__version__ = "0.1.0"

from __future__ import annotations

from collections import deque
from typing import Callable, Deque, Iterable, Iterator, TypeVar

from .peak import PeakDetector, validate_buffer_size


T = TypeVar("T")


def running_max(
    values: Iterable[T],
    buffer_size: int,
    detector_factory: Callable[[int], PeakDetector] = PeakDetector,
) -> Iterator[T]:
    """Yield the window max after each value of ``values``."""
    detector = detector_factory(buffer_size)
    for value in values:
        yield detector.advance(value)


def brute_force_max(values: Iterable[T], buffer_size: int) -> Iterator[T]:
    """Reference running max that rescans the whole window on every value.

    Ties resolve to the most recent value, same as PeakDetector.
    """
    window: Deque[T] = deque(maxlen=validate_buffer_size(buffer_size))
    for value in values:
        window.append(value)
        best = window[0]
        for item in window:
            if item >= best:
                best = item
        yield best

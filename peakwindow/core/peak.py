from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Generic, Iterable, Optional, Protocol, TypeVar


logger = logging.getLogger(__name__)


class SupportsOrdering(Protocol):
    def __le__(self, other: Any) -> bool: ...

    def __ge__(self, other: Any) -> bool: ...


T = TypeVar("T", bound=SupportsOrdering)


class PeakwindowError(Exception):
    """Base class for errors raised by peakwindow."""


class WindowSizeError(PeakwindowError, ValueError):
    """Raised when a tracker is built with a window that is not a positive int."""


@dataclass
class BufferElement(Generic[T]):
    index: int
    value: T


def validate_buffer_size(buffer_size: Any) -> int:
    # bool is an int subclass; True would silently mean a window of one
    if isinstance(buffer_size, bool) or not isinstance(buffer_size, int):
        raise WindowSizeError(f"buffer_size must be an int, got {buffer_size!r}")
    if buffer_size < 1:
        raise WindowSizeError(f"buffer_size must be >= 1, got {buffer_size}")
    return buffer_size


class PeakDetector(Generic[T]):
    """Track the max value over the last ``buffer_size`` values of a stream.

    The candidate deque is kept sorted so that the back always holds the
    current max. For each new value:

    - the back element is dropped if its slot is the one being reused,
    - every older element that is <= the new value is dropped,
    - the max (back of the deque) is returned.

    An element only survives until its slot is reused if it is the max, so
    checking the back is enough for expiry. Comparisons use the values' own
    ``<=``/``>=`` operators, and ties always favour the newer value.
    """

    def __init__(self, buffer_size: int) -> None:
        self._buffer_size: int = validate_buffer_size(buffer_size)
        self._deque: Deque[BufferElement[T]] = deque()
        self._next_index: int = 0
        logger.debug("peak detector created", extra={"buffer_size": self._buffer_size})

    @property
    def buffer_size(self) -> int:
        return self._buffer_size

    def advance(self, value: T) -> T:
        """Add a value to the window and return the current max."""
        dq = self._deque
        next_index = self._next_index

        if dq and dq[-1].index == next_index:
            expired = dq.pop()
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("max expired", extra={"slot": next_index, "value": repr(expired.value)})

        element = BufferElement(index=next_index, value=value)
        if not dq:
            dq.append(element)
        elif dq[-1].value <= value:
            # New max, nothing older can be reported again
            dq.clear()
            dq.append(element)
        else:
            # The back is larger than value, so this stops before emptying dq
            while value >= dq[0].value:
                dq.popleft()
            dq.appendleft(element)

        self._next_index = (next_index + 1) % self._buffer_size
        return dq[-1].value

    def extend(self, values: Iterable[T]) -> Optional[T]:
        """Advance over all ``values`` and return the max after the last one."""
        result = self.current()
        for value in values:
            result = self.advance(value)
        return result

    def current(self) -> Optional[T]:
        """Current max in the window, or None if nothing was added yet."""
        return self._deque[-1].value if self._deque else None

    def copy(self) -> "PeakDetector[T]":
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        clone._deque = deque(BufferElement(index=e.index, value=e.value) for e in self._deque)
        return clone

    __copy__ = copy

    def __len__(self) -> int:
        return len(self._deque)

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        elements = ", ".join(repr(e) for e in self._deque)
        return (
            f"{self.__class__.__name__}(buffer_size={self._buffer_size}, "
            f"next_index={self._next_index}, deque=[{elements}])"
        )

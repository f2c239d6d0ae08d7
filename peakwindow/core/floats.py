from __future__ import annotations

import math
from functools import total_ordering
from typing import Any, Optional, SupportsFloat, Union

from .peak import PeakDetector


@total_ordering
class OrderedFloat:
    """Float wrapper with a total order.

    Non-NaN values compare as usual. NaN is equal to every other NaN and
    greater than any other value, which keeps the detector's deque sorted
    even when NaNs show up in the stream.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Union[SupportsFloat, str]) -> None:
        try:
            self._value = float(value)
        except OverflowError as exc:
            raise ValueError(f"{value!r} is out of float range") from exc

    @property
    def value(self) -> float:
        return self._value

    def _key(self) -> tuple:
        # (is_nan, value) orders NaN last; 0.0 for NaN keeps the tuple comparable
        if math.isnan(self._value):
            return (1, 0.0)
        return (0, self._value)

    @staticmethod
    def _coerce(other: Any) -> Optional["OrderedFloat"]:
        if isinstance(other, OrderedFloat):
            return other
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return OrderedFloat(other)
        return None

    def __eq__(self, other: Any) -> bool:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self._key() == o._key()

    def __lt__(self, other: Any) -> bool:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self._key() < o._key()

    def __hash__(self) -> int:
        if math.isnan(self._value):
            return hash(self._key())
        return hash(self._value)

    def __float__(self) -> float:
        return self._value

    def __repr__(self) -> str:
        return f"OrderedFloat({self._value!r})"


class FloatPeakDetector(PeakDetector[OrderedFloat]):
    """PeakDetector taking and returning plain floats.

    ``current()`` returns 0.0 for an empty window; use ``current_or_none()``
    when an empty window has to be told apart from a real 0.0.
    """

    def advance(self, value: Union[SupportsFloat, OrderedFloat]) -> float:  # type: ignore[override]
        wrapped = value if isinstance(value, OrderedFloat) else OrderedFloat(value)
        return super().advance(wrapped).value

    def current_or_none(self) -> Optional[float]:
        peak = super().current()
        return None if peak is None else peak.value

    def current(self) -> float:  # type: ignore[override]
        peak = self.current_or_none()
        return 0.0 if peak is None else peak

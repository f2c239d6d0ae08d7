from __future__ import annotations

from functools import total_ordering
from typing import Any, Callable, Generic, TypeVar


V = TypeVar("V")


@total_ordering
class ByKey(Generic[V]):
    """Order a value by ``key(value)`` instead of by the value itself.

    Two wrappers with equal keys compare equal even when the wrapped values
    differ, e.g. ``by_length("abc") == by_length("def")``.
    """

    __slots__ = ("value", "key")

    def __init__(self, value: V, key: Callable[[V], Any]) -> None:
        self.value = value
        self.key = key

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ByKey):
            return NotImplemented
        return self.key(self.value) == other.key(other.value)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, ByKey):
            return NotImplemented
        return self.key(self.value) < other.key(other.value)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ByKey({self.value!r})"


def by_length(value: str) -> ByKey[str]:
    return ByKey(value, len)

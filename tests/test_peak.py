from __future__ import annotations

import copy
import logging
import random

import pytest

from peakwindow.core.ordering import by_length
from peakwindow.core.peak import BufferElement, PeakDetector, PeakwindowError, WindowSizeError
from peakwindow.core.stream import brute_force_max


def test_tracks_max_ascending_list() -> None:
    values = [0.0, 0.1, 0.2, 0.3, 0.4, 0.5]
    detector: PeakDetector[float] = PeakDetector(10)
    assert [detector.advance(v) for v in values] == values


def test_tracks_max_descending_list() -> None:
    values = [0.5, 0.4, 0.3, 0.2, 0.1]
    detector: PeakDetector[float] = PeakDetector(10)
    assert [detector.advance(v) for v in values] == [0.5] * 5


def test_max_outside_of_buffer_is_removed() -> None:
    detector: PeakDetector[float] = PeakDetector(4)
    for v in [0.5, 0.4, 0.3, 0.2, 0.1]:
        detector.advance(v)
    assert detector.current() == 0.4


def test_handles_stream_larger_than_buffer() -> None:
    detector: PeakDetector[float] = PeakDetector(4)
    for v in [0.8, 0.1, 0.3, 0.2, 0.1, 0.6, 0.2]:
        detector.advance(v)
    assert detector.current() == 0.6


def test_new_max_is_detected() -> None:
    detector: PeakDetector[float] = PeakDetector(10)
    for v in [0.5, 0.0, 0.1, 0.0, 0.8]:
        detector.advance(v)
    assert detector.current() == 0.8


def test_empty_detector_returns_none() -> None:
    detector: PeakDetector[int] = PeakDetector(10)
    assert detector.current() is None
    assert len(detector) == 0


def test_current_does_not_mutate() -> None:
    detector: PeakDetector[int] = PeakDetector(3)
    for v in [4, 1, 3]:
        detector.advance(v)
    before = repr(detector)
    assert detector.current() == 4
    assert detector.current() == 4
    assert repr(detector) == before
    # slot counter untouched: the next value still expires the 4
    assert detector.advance(0) == 3


def test_ties_favour_most_recent_value() -> None:
    detector = PeakDetector(5)
    for word in ["abc", "a", "def"]:
        detector.advance(by_length(word))
    assert detector.current().value == "def"


def test_equal_older_values_are_dropped_from_the_front() -> None:
    detector = PeakDetector(5)
    detector.advance(by_length("zzzz"))
    detector.advance(by_length("ab"))
    detector.advance(by_length("cd"))
    assert [e.value.value for e in detector._deque] == ["cd", "zzzz"]  # noqa: SLF001


def test_window_of_one_reports_last_value() -> None:
    detector: PeakDetector[int] = PeakDetector(1)
    assert [detector.advance(v) for v in [3, 1, 2, 0]] == [3, 1, 2, 0]


def test_deque_never_exceeds_buffer_size() -> None:
    detector: PeakDetector[int] = PeakDetector(4)
    for v in range(20, 0, -1):
        detector.advance(v)
        assert len(detector) <= 4


@pytest.mark.parametrize("window", [1, 2, 3, 5, 8])
def test_matches_brute_force(window: int) -> None:
    rng = random.Random(window)
    values = [rng.randint(0, 6) for _ in range(300)]
    detector: PeakDetector[int] = PeakDetector(window)
    got = [detector.advance(v) for v in values]
    assert got == list(brute_force_max(values, window))


def test_matches_brute_force_with_key_order() -> None:
    rng = random.Random(7)
    words = ["".join(rng.choice("xyz") for _ in range(rng.randint(1, 4))) for _ in range(200)]
    wrapped = [by_length(w) for w in words]
    detector = PeakDetector(6)
    got = [detector.advance(w).value for w in wrapped]
    assert got == [w.value for w in brute_force_max(wrapped, 6)]


@pytest.mark.parametrize("size", [0, -3, 2.5, "4", True, None])
def test_invalid_buffer_size_rejected(size: object) -> None:
    with pytest.raises(WindowSizeError):
        PeakDetector(size)  # type: ignore[arg-type]


def test_window_size_error_is_value_error() -> None:
    assert issubclass(WindowSizeError, ValueError)
    assert issubclass(WindowSizeError, PeakwindowError)


def test_extend_returns_last_max() -> None:
    detector: PeakDetector[int] = PeakDetector(2)
    assert detector.extend([]) is None
    assert detector.extend([5, 1, 2]) == 2
    assert detector.buffer_size == 2


def test_copy_is_independent() -> None:
    detector: PeakDetector[int] = PeakDetector(3)
    detector.extend([1, 5, 2])
    clone = copy.copy(detector)
    clone.extend([0, 0, 0])
    assert clone.current() == 0
    assert detector.current() == 5
    assert detector.advance(1) == 5


def test_repr_lists_elements() -> None:
    detector: PeakDetector[int] = PeakDetector(3)
    detector.extend([2, 1])
    text = repr(detector)
    assert "buffer_size=3" in text
    assert "next_index=2" in text
    assert repr(BufferElement(index=0, value=2)) in text


def test_expiry_logged_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    detector: PeakDetector[int] = PeakDetector(2)
    with caplog.at_level(logging.DEBUG, logger="peakwindow.core.peak"):
        detector.extend([9, 1, 0])
    assert any(r.getMessage() == "max expired" for r in caplog.records)


def test_empty_detector_is_truthy() -> None:
    detector: PeakDetector[int] = PeakDetector(3)
    assert detector
    assert len(detector) == 0


@pytest.mark.parametrize("window", [1, 3, 6])
def test_matches_builtin_max_over_slice(window: int) -> None:
    rng = random.Random(100 + window)
    values = [rng.randint(-5, 5) for _ in range(200)]
    detector: PeakDetector[int] = PeakDetector(window)
    for i, v in enumerate(values):
        assert detector.advance(v) == max(values[max(0, i - window + 1):i + 1])

"""A pausable millisecond clock that knows its tempo and beat grid."""

from __future__ import annotations

import math
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class Signature(Enum):
    """Time signature of a section; decides how many ticks make a bar."""

    ONE_FOUR = 0
    ONE_THREE = 1

    @property
    def division(self) -> int:
        """Number of ticks per beat unit for this signature."""
        return 3 if self is Signature.ONE_THREE else 4


@dataclass(frozen=True)
class Beat:
    """One tick of the beat grid."""

    signature: Signature
    timing_ms: int


def _round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value >= 0:
        return math.floor(value + 0.5)
    return -math.floor(-value + 0.5)


class Timeable(ABC):
    """Clock measuring elapsed milliseconds, with pause, seek and beat grid."""

    def __init__(
        self,
        bpm: int = 60,
        signature: Signature = Signature.ONE_FOUR,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.bpm = bpm
        self.signature = signature
        self._clock = clock
        self._start = clock()
        self._pause_time = self._start
        self._time_added = 0
        self._paused = False

    def _elapsed_ms(self, until: float) -> int:
        return int((until - self._start) * 1000)

    def _step_ms(self) -> float:
        return 60000.0 / self.bpm / self.signature.division

    def tick(self) -> int | None:
        """Return the elapsed time, or None while the clock is paused."""
        if self._paused:
            return None
        return self.time_passed()

    def time_passed(self) -> int:
        """Milliseconds elapsed since start, plus any manual adjustment."""
        until = self._pause_time if self._paused else self._clock()
        return self._elapsed_ms(until) + self._time_added

    def resume(self) -> None:
        """Continue counting; the paused interval is not counted."""
        if self._paused:
            self._start += self._clock() - self._pause_time
            self._paused = False

    def pause(self) -> None:
        """Freeze the elapsed time."""
        if not self._paused:
            self._pause_time = self._clock()
            self._paused = True

    def restart(self) -> None:
        """Start counting from zero again, running and without adjustment."""
        self._start = self._clock()
        self._paused = False
        self._time_added = 0

    def is_paused(self) -> bool:
        """Whether the clock is paused."""
        return self._paused

    def increment_time(self, ms: int) -> None:
        """Shift the elapsed time by ``ms`` milliseconds (may be negative)."""
        self._time_added += ms

    def beat_time(self) -> int:
        """Length of one grid tick in whole milliseconds."""
        return int(self._step_ms())

    def current_beats(self, timing_ms: int, distance_ms: int) -> list[Beat]:
        """Grid ticks lying within ``[timing_ms, timing_ms + distance_ms]``."""
        if distance_ms < 0:
            raise ValueError("distance_ms must not be negative")
        step = self._step_ms()
        first = math.ceil(timing_ms / step)
        last = math.floor((timing_ms + distance_ms) / step)
        return [
            Beat(self.signature, _round_half_away(index * step))
            for index in range(first, last + 1)
        ]

    @abstractmethod
    def on_beat(self) -> None:
        """Called for every beat."""
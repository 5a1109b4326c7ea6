"""Timeline editor: a running beat grid that can be paused and scrolled."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .timing import Beat, Signature, Timeable

SCREEN_WIDTH = 1024
SCREEN_HEIGHT = 600
TIMELINE_X = 20
TIMELINE_Y = 80
TIMELINE_WIDTH = SCREEN_WIDTH - 40
TIMELINE_HEIGHT = 100
PIXELS_PER_MS = 0.5
UI_TICK_HEIGHT_MAIN = 20
UI_TICK_HEIGHT_SUB = 10
BEAT_WINDOW_MS = 3000

_LINE_Y = int(TIMELINE_Y + TIMELINE_HEIGHT / 2)

_LABELS = {Signature.ONE_FOUR: "4/4", Signature.ONE_THREE: "3/4"}


@dataclass(frozen=True)
class TickMark:
    """A vertical tick on the timeline."""

    x: int
    top: int
    bottom: int


def signature_label(signature: Signature) -> str:
    """Human-readable signature, or ``"?"`` for an unknown one."""
    return _LABELS.get(signature, "?")


def timeline_ticks(beats: Iterable[Beat], time_passed_ms: int) -> list[TickMark]:
    """Tick marks for the beats, relative to the current time; bar starts are taller."""
    marks = []
    for index, beat in enumerate(beats):
        height = (
            UI_TICK_HEIGHT_MAIN
            if index % beat.signature.division == 0
            else UI_TICK_HEIGHT_SUB
        )
        x = int(beat.timing_ms * PIXELS_PER_MS - time_passed_ms * PIXELS_PER_MS)
        marks.append(TickMark(x, _LINE_Y - height, _LINE_Y + height))
    return marks


class Editor(Timeable):
    """Editor clock holding the currently visible beats."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        super().__init__(clock=clock)
        self.beats: list[Beat] = self.current_beats(self.time_passed(), BEAT_WINDOW_MS)

    def on_beat(self) -> None:
        """Beats need no handling in the editor."""
        return None

    def toggle_pause(self) -> None:
        """Pause a running clock, resume a paused one."""
        if self.is_paused():
            self.resume()
        else:
            self.pause()

    def scroll(self, wheel: float) -> None:
        """Move the time by ``wheel`` grid ticks and rebuild the beats."""
        if wheel == 0:
            return
        self.increment_time(int(wheel * self.beat_time()))
        self.beats = self.current_beats(self.time_passed(), BEAT_WINDOW_MS)

    def refresh_beats(self) -> list[Beat]:
        """Rebuild the beats once the clock has passed the last one."""
        now = self.time_passed()
        if not self.beats or self.beats[-1].timing_ms <= now:
            self.beats = self.current_beats(now, BEAT_WINDOW_MS)
        return self.beats

    def ticks(self) -> list[TickMark]:
        """Tick marks for the current beats at the current time."""
        return timeline_ticks(self.beats, self.time_passed())
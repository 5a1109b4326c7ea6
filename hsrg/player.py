"""Playing a beatmap: note scheduling, hit judgement and what to draw."""

from __future__ import annotations

import dataclasses
import time
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from os import PathLike

from . import settings
from .beatmap import BeatmapConstructor, Note

# Notes are brought onto the play field this long before they are due.
_LOOKAHEAD_MS = 15000

# Keys that count as hit keys (apostrophe through grave accent).
_FIRST_HIT_KEY = 39
_LAST_HIT_KEY = 96

KEY_EQUAL = 61
KEY_MINUS = 45
KEY_KP_SUBTRACT = 333
KEY_KP_ADD = 334

_APPROACH_RATE_STEP = 0.1

_INPUT_TOTAL_WIDTH = settings.HIT_WIDTH - 1
_INPUT_GAP = 2
_INPUT_PAD = 4


class InputColor(Enum):
    """Colour of the input indicators, reflecting the last judgement."""

    GRAY = "gray"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"


@dataclass(frozen=True)
class NoteRect:
    """Screen rectangle of one note on the play field."""

    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class InputSlot:
    """Screen rectangle showing one held key."""

    keycode: int
    label: str
    x: int
    y: int
    width: int
    height: int
    color: InputColor


class MapPlayer:
    """Runs a beatmap against the clock and judges key presses."""

    def __init__(
        self,
        path: str | PathLike[str] | None = "map.txt",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self._last_tick = clock()
        self.beatmap = BeatmapConstructor()
        self.loaded_notes: list[Note] = []
        self.rendered_notes: deque[Note] = deque()
        self.next_note_index = 0
        self.time_passed_ms = 0
        self.approach_rate = 1.0
        self.input_color = InputColor.GRAY
        self.keys_down: set[int] = set()
        if path is not None:
            self.load(path)

    def load(self, path: str | PathLike[str]) -> bool:
        """Read a map file and queue its notes for play."""
        beatmap = BeatmapConstructor()
        beatmap.read_from(path)
        self.beatmap = beatmap
        self.loaded_notes = [dataclasses.replace(note) for note in beatmap.entries]
        self.rendered_notes.clear()
        self.next_note_index = 0
        return True

    def press(self) -> None:
        """Judge a key press against the nearest pending note."""
        if not self.rendered_notes:
            return
        note = self.rendered_notes[0]
        if note.hit_offset_ms is not None:
            return
        now = self.time_passed_ms
        if note.timing_ms - now >= settings.NOTE_HIT_WINDOW_MS:
            self._on_invalid_press()
            return
        offset = now - note.timing_ms
        if now - settings.NOTE_HIT_WINDOW_MS >= note.timing_ms:
            note.hit_offset_ms = offset
            self._on_note_miss(note)
            return
        if abs(offset) >= settings.NOTE_HIT_WINDOW_GOOD_MS:
            note.hit_offset_ms = offset
            self._on_note_miss(note)
            return
        self._on_note_hit(note)
        note.hit_offset_ms = offset

    def release(self) -> None:
        """Judge a key release against the end of a held long note."""
        if not self.rendered_notes:
            return
        note = self.rendered_notes[0]
        if note.release_offset_ms is not None:
            return
        if note.hit_offset_ms is None:
            return
        if not note.length_ms:
            return
        offset = self.time_passed_ms - (note.timing_ms + note.length_ms)
        note.release_offset_ms = offset
        if abs(offset) >= settings.NOTE_HIT_WINDOW_GOOD_MS:
            self._on_note_miss(note)
        else:
            self._on_note_hit(note)

    def tick(self) -> None:
        """Advance the song time and move notes onto and off the field."""
        now = self._clock()
        self.time_passed_ms += int((now - self._last_tick) * 1000)
        self._last_tick = now

        while (
            self.next_note_index < len(self.loaded_notes)
            and self.loaded_notes[self.next_note_index].timing_ms
            < self.time_passed_ms + _LOOKAHEAD_MS
        ):
            self.rendered_notes.append(self.loaded_notes[self.next_note_index])
            self.next_note_index += 1

        while self.rendered_notes:
            front = self.rendered_notes[0]
            deadline = front.timing_ms + settings.NOTE_HIT_WINDOW_GOOD_MS + front.length_ms
            if deadline >= self.time_passed_ms:
                break
            self._on_note_miss(front)
            self.rendered_notes.popleft()

    def handle_keys(self, pressed: Iterable[int], released: Iterable[int]) -> None:
        """Apply this frame's key presses and releases."""
        pressed = set(pressed)
        released = set(released)
        for key in sorted(pressed):
            if _FIRST_HIT_KEY <= key <= _LAST_HIT_KEY:
                self.keys_down.add(key)
                self.press()
        for key in sorted(self.keys_down):
            if key in released:
                self.release()
                self.keys_down.discard(key)
        if KEY_EQUAL in pressed or KEY_KP_ADD in pressed:
            self.approach_rate += _APPROACH_RATE_STEP
        if KEY_MINUS in pressed or KEY_KP_SUBTRACT in pressed:
            self.approach_rate -= _APPROACH_RATE_STEP

    def note_rects(self) -> list[NoteRect]:
        """Rectangles of the notes on the field, nearest first."""
        travel = float(settings.WINDOW_WIDTH - settings.HIT_WIDTH)
        rects = []
        for note in self.rendered_notes:
            head = (note.timing_ms - self.time_passed_ms) * self.approach_rate
            tail = (note.timing_ms + note.length_ms - self.time_passed_ms) * self.approach_rate
            head = max(head, 0.0)
            start_x = settings.HIT_WIDTH + int(head / settings.NOTE_PREVIEW_TIME_MS * travel)
            end_x = settings.HIT_WIDTH + int(tail / settings.NOTE_PREVIEW_TIME_MS * travel)
            rects.append(
                NoteRect(
                    x=start_x,
                    y=0,
                    width=max(end_x - start_x, settings.BASE_NOTE_WIDTH),
                    height=settings.NOTE_HEIGHT,
                )
            )
        return rects

    def input_slots(self) -> list[InputSlot]:
        """One indicator per held key, laid out left of the hit line."""
        count = len(self.keys_down)
        if count == 0:
            return []
        slice_w = max(1, (_INPUT_TOTAL_WIDTH - (count - 1) * _INPUT_GAP) // count)
        slice_h = settings.WINDOW_HEIGHT - 2 * _INPUT_PAD
        return [
            InputSlot(
                keycode=key,
                label=chr(key),
                x=index * (slice_w + _INPUT_GAP) + _INPUT_PAD,
                y=_INPUT_PAD,
                width=slice_w - 2 * _INPUT_PAD,
                height=slice_h,
                color=self.input_color,
            )
            for index, key in enumerate(sorted(self.keys_down))
        ]

    def title(self) -> str:
        """Window title showing song time and approach rate."""
        return f"Time: {self.time_passed_ms} AR: {self.approach_rate:f}"

    def _on_invalid_press(self) -> None:
        self.input_color = InputColor.GRAY

    def _on_note_miss(self, note: Note) -> None:
        self.input_color = InputColor.RED

    def _on_note_hit(self, note: Note) -> None:
        self.input_color = InputColor.GREEN

    def _on_long_note_end_miss(self, note: Note) -> None:
        self.input_color = InputColor.RED

    def _on_long_note_end_hit(self, note: Note) -> None:
        self.input_color = InputColor.YELLOW
"""Beatmaps: tempo sections, notes on the tick grid, and the map file format."""

from __future__ import annotations

import math
import re
from collections import deque
from dataclasses import dataclass
from os import PathLike

from .timing import Signature, Timeable, _round_half_away

_SIGNATURE_NAMES = {
    Signature.ONE_FOUR: "4/4",
    Signature.ONE_THREE: "3/4",
}

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class Note:
    """A note to be hit; ``length_ms`` of zero means a plain tap note."""

    timing_ms: int
    length_ms: int
    hit_offset_ms: int | None = None
    release_offset_ms: int | None = None


@dataclass
class BpmSection:
    """A stretch of the song with one tempo and signature."""

    signature: Signature
    bpm: int
    timing_ms: int
    offset_ms: int


@dataclass
class TimedNote:
    """A note given by indices into the tick grid."""

    start_id: int
    end_id: int


def signature_from_string(text: str) -> Signature:
    """Parse ``"4/4"`` or ``"3/4"``."""
    for signature, name in _SIGNATURE_NAMES.items():
        if name == text:
            return signature
    raise ValueError(f"Unknown signature: {text}")


def signature_to_string(signature: Signature) -> str:
    """Format a signature as it appears in map files."""
    return _SIGNATURE_NAMES.get(signature, "4/4")


def _parse_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"Not an integer: {text!r}")
    return int(match.group(1))


class BeatmapConstructor(Timeable):
    """Builds a beatmap from tempo sections and notes placed on their grid."""

    def __init__(self) -> None:
        super().__init__()
        self.sections: list[BpmSection] = []
        self.song_length_ms = 100000
        self.entries: deque[Note] = deque()
        self.timed_entries: deque[TimedNote] = deque()

    def timings(self) -> list[int]:
        """All tick times of the song, section by section, offsets applied."""
        result: list[int] = []
        if self.song_length_ms <= 0:
            return result

        self.sections.sort(key=lambda sec: sec.timing_ms)
        ends = [sec.timing_ms for sec in self.sections[1:]] + [self.song_length_ms]

        for section, end in zip(self.sections, ends):
            start = section.timing_ms
            if end <= start:
                continue
            step = 60000.0 / section.bpm / section.signature.division
            count = math.ceil((end - start) / step)
            for i in range(count + 1):
                t = _round_half_away(start + i * step)
                if t < end:
                    result.append(t + section.offset_ms)
        return result

    def place_note(self, timings: list[int], start_id: int, end_id: int) -> None:
        """Add a note spanning the ticks ``start_id`` to ``end_id``."""
        start = timings[start_id]
        self.entries.append(Note(start, timings[end_id] - start))
        self.timed_entries.append(TimedNote(start_id, end_id))

    def add_section(self, section: BpmSection) -> None:
        """Append a tempo section."""
        self.sections.append(section)

    def remove_section(self, index: int) -> None:
        """Remove a section; the first section and bad indices are left alone."""
        if 0 < index < len(self.sections):
            del self.sections[index]

    def on_beat(self) -> None:
        """Beats need no handling while constructing a map."""
        return None

    def read_from(self, path: str | PathLike[str]) -> None:
        """Load sections and notes from a map file, then resolve note times."""
        with open(path, encoding="utf-8", newline="") as handle:
            lines = handle.read().split("\n")

        in_notes = False
        for number, line in enumerate(lines):
            if not line or line.startswith("#") or "," not in line:
                continue
            if not in_notes:
                parts = line.split(",", 3) + [""] * 3
                timing, offset, bpm, signature = parts[:4]
                self.sections.append(
                    BpmSection(
                        signature=signature_from_string(signature),
                        bpm=_parse_int(bpm),
                        timing_ms=_parse_int(timing),
                        offset_ms=_parse_int(offset),
                    )
                )
                # A blank line right after a section line starts the notes.
                if number + 2 < len(lines) and lines[number + 1] == "":
                    in_notes = True
            else:
                start, end = line.split(",", 1)
                self.timed_entries.append(
                    TimedNote(_parse_int(start), _parse_int(end))
                )

        timings = self.timings()
        for note in self.timed_entries:
            if not (0 <= note.start_id < len(timings) and 0 <= note.end_id < len(timings)):
                continue
            start = timings[note.start_id]
            self.entries.append(Note(start, timings[note.end_id] - start))

    def write_to(self, path: str | PathLike[str]) -> None:
        """Save sections and grid-indexed notes to a map file."""
        with open(path, "w", encoding="utf-8", newline="\n") as out:
            out.write("# Sections: timeMs,offsetMs,bpm,signature\n")
            for sec in self.sections:
                out.write(
                    f"{sec.timing_ms},{sec.offset_ms},{sec.bpm},"
                    f"{signature_to_string(sec.signature)}\n"
                )
            out.write("\n# Notes: startId,endId\n")
            for note in self.timed_entries:
                out.write(f"{note.start_id},{note.end_id}\n")
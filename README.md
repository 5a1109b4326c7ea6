# hsrg

The core of a single-lane rhythm game. It has four modules:

- **`hsrg.timing`**: `Timeable` is an abstract, pausable millisecond clock.
  It knows its tempo (`bpm`) and time `Signature` (`ONE_FOUR` for 4/4,
  `ONE_THREE` for 3/4). It can list the `Beat`s of its grid that fall inside
  a time window. Subclasses implement `on_beat()`.
- **`hsrg.beatmap`**: `BeatmapConstructor` reads and writes beatmap files. It
  turns `BpmSection`s into a list of tick timings and builds `Note`s from
  pairs of tick indices (`TimedNote`).
- **`hsrg.player`**: `MapPlayer` plays a loaded map. It moves notes onto the
  field as time passes and judges presses and releases against the hit
  windows. It also describes what should be drawn (`NoteRect`, `InputSlot`,
  `InputColor`).
- **`hsrg.editor`**: `Editor` is the model behind a beat timeline. You can
  pause it, scroll it by whole grid ticks and get the `TickMark`s to draw.

Hit windows, preview time and layout sizes are constants in
`hsrg.settings`.

The clocks in `Timeable`, `Editor` and `MapPlayer` take an optional `clock`
callable that returns seconds. It defaults to `time.monotonic`, and you can
pass your own clock to drive them in tests.

## Beatmap files

A beatmap is plain text. The reader skips lines that start with `#` and
lines that contain no comma. The file opens with tempo sections, one per
line:

```
# Sections: timeMs,offsetMs,bpm,signature
0,0,120,4/4
8000,0,90,3/4

# Notes: startId,endId
0,0
4,8
```

Notes start after the first section line that is immediately followed by a
blank line. Each note names a start index and an end index into the tick
list returned by `BeatmapConstructor.timings()`:

- Equal indices make a tap note.
- Different indices make a long note that is held until the end tick.
- A note whose indices fall outside the tick list is kept as a `TimedNote`,
  but no `Note` is made from it.

A signature other than `4/4` or `3/4` raises `ValueError`, and so does a
field that is not an integer.

## Usage

Building a map:

```python
from hsrg.beatmap import BeatmapConstructor

beatmap = BeatmapConstructor()
beatmap.read_from("map.txt")

timings = beatmap.timings()        # tick times in ms, section offsets applied
beatmap.place_note(timings, 0, 4)  # a long note from tick 0 to tick 4
beatmap.write_to("map.txt")
```

Playing a map. `MapPlayer()` loads `map.txt` from the current directory
straight away. Pass another path, or pass `None` and call `load()` later:

```python
from hsrg.player import MapPlayer

player = MapPlayer(None)
player.load("map.txt")

# once per frame:
player.tick()
player.handle_keys(pressed, released)  # key codes pressed / released this frame
for rect in player.note_rects():
    ...  # draw the note
for slot in player.input_slots():
    ...  # draw the held key, coloured slot.color
print(player.title())
```

Judgement rules:

- Key codes 39 to 96 are hit keys.
- `=` / keypad `+` raises the approach rate by 0.1, and `-` / keypad `-`
  lowers it by 0.1.
- A press that comes `NOTE_HIT_WINDOW_MS` or more before the next note is an
  invalid press, with no penalty.
- A press or a long-note release that is `NOTE_HIT_WINDOW_GOOD_MS` or more
  off the beat is a miss.
- A note that passes the hit line unplayed counts as a miss when it leaves
  the field.

The editor timeline:

```python
from hsrg.editor import Editor

editor = Editor()
editor.toggle_pause()
editor.scroll(1.0)        # one wheel step moves the clock by one grid tick
editor.refresh_beats()    # rebuild the beats once time has passed the last one
for tick in editor.ticks():
    ...                   # draw the tick mark
```

## What it does not do

The package opens no window, plays no audio and draws nothing. It has no
command to start the game or the editor. It computes the state and the
rectangles, and drawing them is left to the caller.
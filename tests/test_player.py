import pytest

from hsrg import settings
from hsrg.player import InputColor, MapPlayer

MAP_TEXT = (
    "# Sections: timeMs,offsetMs,bpm,signature\n"
    "0,0,60,4/4\n"
    "\n"
    "# Notes: startId,endId\n"
    "0,0\n"
    "4,8\n"
)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def player(tmp_path, clock):
    path = tmp_path / "map.txt"
    path.write_text(MAP_TEXT)
    p = MapPlayer(path, clock=clock)
    p.tick()
    return p


def test_load_copies_beatmap_entries(player):
    assert [(n.timing_ms, n.length_ms) for n in player.loaded_notes] == [
        (n.timing_ms, n.length_ms) for n in player.beatmap.entries
    ]
    assert len(player.loaded_notes) == 2


def test_tick_renders_upcoming_notes(player):
    assert len(player.rendered_notes) == 2
    assert player.next_note_index == 2


def test_tick_advances_time(player, clock):
    clock.now = 0.02
    player.tick()
    assert player.time_passed_ms == 20


def test_press_on_time_is_hit(player):
    player.press()
    assert player.input_color is InputColor.GREEN
    assert player.rendered_notes[0].hit_offset_ms == 0


def test_press_twice_ignored(player, clock):
    player.press()
    clock.now = 0.03
    player.tick()
    player.press()
    assert player.rendered_notes[0].hit_offset_ms == 0


def test_press_slightly_late_is_miss(player, clock):
    clock.now = 0.045
    player.tick()
    player.press()
    assert player.input_color is InputColor.GREEN
    assert player.rendered_notes[0].hit_offset_ms == 45


def test_press_outside_good_window_is_miss(tmp_path, clock):
    path = tmp_path / "map.txt"
    path.write_text("0,0,60,4/4\n\n4,8\n0,0\n")
    p = MapPlayer(path, clock=clock)
    p.tick()
    clock.now = 0.94
    p.tick()
    p.press()
    assert p.input_color is InputColor.RED
    assert p.rendered_notes[0].hit_offset_ms == p.time_passed_ms - 1000


def test_press_far_early_is_invalid(tmp_path, clock):
    path = tmp_path / "map.txt"
    path.write_text("0,0,60,4/4\n\n4,8\n0,0\n")
    p = MapPlayer(path, clock=clock)
    p.tick()
    p.input_color = InputColor.GREEN
    p.press()
    assert p.input_color is InputColor.GRAY
    assert p.rendered_notes[0].hit_offset_ms is None


def test_expired_note_is_missed_and_removed(player, clock):
    clock.now = (settings.NOTE_HIT_WINDOW_GOOD_MS + 1) / 1000
    player.tick()
    assert player.input_color is InputColor.RED
    assert len(player.rendered_notes) == 1
    assert player.rendered_notes[0].timing_ms == 1000


def test_release_without_press_does_nothing(player, clock):
    clock.now = 1.0
    player.tick()
    player.release()
    assert player.rendered_notes[0].release_offset_ms is None


def test_press_with_no_notes_keeps_colour(clock):
    p = MapPlayer(None, clock=clock)
    p.press()
    p.release()
    assert p.input_color is InputColor.GRAY
    assert p.note_rects() == []


def test_missing_file_raises(tmp_path, clock):
    with pytest.raises(OSError):
        MapPlayer(tmp_path / "absent.txt", clock=clock)


def test_handle_keys_tracks_held_keys(player):
    player.handle_keys([ord("A")], [])
    assert player.keys_down == {ord("A")}
    slots = player.input_slots()
    assert len(slots) == 1
    assert slots[0].label == "A"
    player.handle_keys([], [ord("A")])
    assert player.keys_down == set()
    assert player.input_slots() == []


def test_keys_outside_range_are_not_held(player):
    player.handle_keys([10, 200], [])
    assert player.keys_down == set()


def test_approach_rate_keys(player):
    before = player.approach_rate
    player.handle_keys([334], [])
    assert player.approach_rate == pytest.approx(before + 0.1)
    player.handle_keys([333], [])
    assert player.approach_rate == pytest.approx(before)


def test_input_slots_fit_left_of_hit_line(player):
    player.handle_keys([ord(c) for c in "ASDF"], [])
    slots = player.input_slots()
    assert [s.keycode for s in slots] == sorted(ord(c) for c in "ASDF")
    assert all(s.x + s.width < settings.HIT_WIDTH for s in slots)
    assert all(s.height == settings.WINDOW_HEIGHT - 2 * s.y for s in slots)


def test_note_rects(player):
    rects = player.note_rects()
    assert rects[0].x == settings.HIT_WIDTH
    assert rects[0].width == settings.BASE_NOTE_WIDTH
    assert rects[1].x > rects[0].x
    assert rects[1].width > settings.BASE_NOTE_WIDTH
    assert all(r.height == settings.NOTE_HEIGHT for r in rects)


def test_title(player):
    assert player.title() == "Time: 0 AR: 1.000000"
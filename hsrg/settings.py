"""Gameplay and window constants shared by the player and editor."""

NOTE_PREVIEW_TIME_MS = 2000
NOTE_HIT_WINDOW_GOOD_MS = 50
NOTE_HIT_WINDOW_MS = 150
HIT_WIDTH = 125
BASE_NOTE_WIDTH = 8
NOTE_HEIGHT = 80
COMBO_HEIGHT = 20
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 100
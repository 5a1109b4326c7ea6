"""Rhythm game core: beat timing, beatmaps, note judgement and a timeline editor model."""

__version__ = "0.1.0"
__all__ = ["beatmap", "editor", "player", "settings", "timing"]
"""Chordvery: live chord finder with MIDI input and progression suggestions."""
__version__ = "0.1.0"

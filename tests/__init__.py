"""Unit tests for chordvery."""

# theory/note.py
import re
from dataclasses import dataclass
from typing import Optional

NOTE_NAMES = ['C', 'C#', 'D', 'D#', 'E', 'F', 'F#', 'G', 'G#', 'A', 'A#', 'B']
LETTER_TO_PC = {'C': 0, 'D': 2, 'E': 4, 'F': 5, 'G': 7, 'A': 9, 'B': 11}

MIDDLE_C = 60
MIN_MIDI_NOTE = 0
MAX_MIDI_NOTE = 127

_NOTE_RE = re.compile(r'^([A-Ga-g])([#b]?)([+-]?\d+)$')
_PITCH_RE = re.compile(r'^([A-Ga-g])([#b]?)$')


def note_name(pitch_class: int) -> str:
    return NOTE_NAMES[pitch_class % 12]


def _accidental(marker: str) -> int:
    return {'#': 1, 'b': -1}.get(marker, 0)


def pitch_class_from_name(text: str) -> Optional[int]:
    """Parse a bare pitch name such as 'C', 'F#' or 'Bb' (no octave)."""
    m = _PITCH_RE.match(text.strip())
    if not m:
        return None
    letter, marker = m.groups()
    return (LETTER_TO_PC[letter.upper()] + _accidental(marker)) % 12


@dataclass(frozen=True)
class Note:
    midi: int   # MIDI note number, 0..127

    def __post_init__(self):
        if not (MIN_MIDI_NOTE <= self.midi <= MAX_MIDI_NOTE):
            raise ValueError(f"MIDI note out of range (0..127): {self.midi}")

    def pitch_class(self) -> int:
        return self.midi % 12

    def octave(self) -> int:
        # C-1 = 0, C4 = 60
        return self.midi // 12 - 1

    def name(self) -> str:
        return NOTE_NAMES[self.pitch_class()]

    def display(self) -> str:
        return f"{self.name()}{self.octave()}"

    @classmethod
    def from_name(cls, text: str) -> Optional['Note']:
        """Parse 'C4', 'F#3', 'Db5' or 'C-1'. Returns None for malformed text
        or when the result falls outside the MIDI range."""
        m = _NOTE_RE.match(text.strip())
        if not m:
            return None
        letter, marker, octave = m.groups()
        midi = (int(octave) + 1) * 12 + LETTER_TO_PC[letter.upper()] + _accidental(marker)
        if not (MIN_MIDI_NOTE <= midi <= MAX_MIDI_NOTE):
            return None
        return cls(midi)

    def __str__(self) -> str:
        return self.display()

# timeline/history.py
from dataclasses import dataclass
from typing import List

from chordvery.theory.chord import Chord


@dataclass
class ChordEntry:
    chord: Chord
    age: int = 0    # number of chords pushed after this one


class ChordHistory:
    """Bounded log of recently played chords, newest last.

    With fading on (Jam mode) entries older than ``fade_age`` drop out on the
    next ``tick``.
    """
    def __init__(self, max_entries: int = 16, fade_age: int = 8):
        self.max_entries = max_entries
        self.fade_age = fade_age
        self.fade = False
        self._entries: List[ChordEntry] = []

    def push(self, chord: Chord):
        if self._entries and self._entries[-1].chord.name() == chord.name():
            return
        for entry in self._entries:
            entry.age += 1
        self._entries.append(ChordEntry(chord))
        if len(self._entries) > self.max_entries:
            del self._entries[: len(self._entries) - self.max_entries]

    def set_fade(self, fade: bool):
        self.fade = fade

    def tick(self):
        if self.fade:
            self._entries = [e for e in self._entries if e.age < self.fade_age]

    def clear(self):
        self._entries.clear()

    def entries(self) -> List[ChordEntry]:
        return list(self._entries)

    def names(self) -> List[str]:
        return [e.chord.name() for e in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

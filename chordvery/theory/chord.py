# theory/chord.py
import re
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Tuple

from chordvery.theory.note import Note, note_name, pitch_class_from_name
from chordvery.theory.quality import Quality, lookup, quality_from_symbol

# semitone offset from the key -> numeral; chromatic offsets borrow the upper neighbour
NUMERALS = {
    0: 'I', 1: 'bII', 2: 'II', 3: 'bIII', 4: 'III', 5: 'IV',
    6: 'bV', 7: 'V', 8: 'bVI', 9: 'VI', 10: 'bVII', 11: 'VII',
}

NUMERAL_SUFFIX = {
    Quality.MAJOR: '',
    Quality.MINOR: '',
    Quality.DIMINISHED: '°',
    Quality.AUGMENTED: '+',
    Quality.MAJOR7: 'maj7',
    Quality.MINOR7: '7',
    Quality.DOMINANT7: '7',
    Quality.DIMINISHED7: '°7',
    Quality.HALF_DIM7: 'ø7',
    Quality.MINOR_MAJOR7: 'maj7',
    Quality.AUGMENTED7: '+7',
}

_SYMBOL_RE = re.compile(r'^([A-Ga-g][#b]?)([^/]*)(?:/([A-Ga-g][#b]?))?$')


@dataclass(frozen=True)
class Chord:
    root: int                    # pitch class 0..11
    quality: Quality
    bass: Optional[int] = None   # lowest sounding pitch class when inverted

    def __post_init__(self):
        if not (0 <= self.root <= 11):
            raise ValueError(f"root must be a pitch class (0..11): {self.root}")
        if self.bass is not None and not (0 <= self.bass <= 11):
            raise ValueError(f"bass must be a pitch class (0..11): {self.bass}")

    def name(self) -> str:
        base = f"{note_name(self.root)}{self.quality.symbol}"
        if self.bass is not None and self.bass != self.root:
            return f"{base}/{note_name(self.bass)}"
        return base

    def roman_numeral(self, key: Optional[Note] = None) -> str:
        """Scale-degree label relative to ``key`` (the chord's own root when absent)."""
        tonic = self.root if key is None else key.pitch_class()
        numeral = NUMERALS[(self.root - tonic) % 12]
        if self.quality.is_minor or self.quality.is_diminished:
            numeral = numeral.lower()
        suffix = NUMERAL_SUFFIX.get(self.quality, self.quality.symbol)
        return numeral + suffix

    def pitch_classes(self) -> List[int]:
        return [(self.root + i) % 12 for i in self.quality.intervals]

    def with_bass(self, bass: Optional[int]) -> 'Chord':
        if bass is not None and bass % 12 == self.root:
            bass = None
        return Chord(self.root, self.quality, None if bass is None else bass % 12)

    @classmethod
    def from_name(cls, symbol: str) -> Optional['Chord']:
        """Parse a chord symbol like 'C', 'Am', 'F#m7', 'Bbmaj7' or 'C/E'."""
        m = _SYMBOL_RE.match(symbol.strip())
        if not m:
            return None
        root_txt, quality_txt, bass_txt = m.groups()
        root = pitch_class_from_name(root_txt)
        quality = quality_from_symbol(quality_txt)
        if root is None or quality is None:
            return None
        chord = cls(root, quality)
        if bass_txt is not None:
            chord = chord.with_bass(pitch_class_from_name(bass_txt))
        return chord

    def __str__(self) -> str:
        return self.name()


def _candidates(pitch_classes: FrozenSet[int]) -> List[Tuple[int, Quality]]:
    out = []
    for root in sorted(pitch_classes):
        quality = lookup((pc - root) % 12 for pc in pitch_classes)
        if quality is not None:
            out.append((root, quality))
    return out


def detect(notes: Iterable[int]) -> Optional[Chord]:
    """Identify the chord sounded by a snapshot of held MIDI notes.

    Every distinct pitch class is tried as root. Among the roots whose
    interval set is in the catalog the winner is the one matching the lowest
    held note, then the quality with fewer intervals, then the lowest pitch
    class. Returns None for fewer than three pitch classes or when nothing
    in the catalog fits.
    """
    notes = frozenset(notes)
    pitch_classes = frozenset(n % 12 for n in notes)
    if len(pitch_classes) < 3:
        return None

    matches = _candidates(pitch_classes)
    if not matches:
        return None

    lowest_pc = min(notes) % 12
    root, quality = min(
        matches,
        key=lambda m: (m[0] != lowest_pc, len(m[1].intervals), m[0]),
    )
    return Chord(root, quality, None if root == lowest_pc else lowest_pc)

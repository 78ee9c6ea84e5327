# theory/progression.py
import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from chordvery.theory.chord import Chord
from chordvery.theory.note import Note
from chordvery.theory.quality import Quality

PERFECT_FIFTH = 7
TRITONE = 6

# semitone offset from the key -> diatonic degree of the major scale
DEGREES = {0: 'I', 2: 'ii', 4: 'iii', 5: 'IV', 7: 'V', 9: 'vi', 11: 'vii°'}
DEGREE_OFFSETS = {d: off for off, d in DEGREES.items()}

# standard major-scale harmonization
DEGREE_QUALITY = {
    'I': Quality.MAJOR,
    'ii': Quality.MINOR,
    'iii': Quality.MINOR,
    'IV': Quality.MAJOR,
    'V': Quality.MAJOR,
    'vi': Quality.MINOR,
    'vii°': Quality.DIMINISHED,
}

# degree -> (expected, surprising)
RULES = {
    'I': ('IV', 'vi'),
    'ii': ('V', 'IV'),
    'iii': ('vi', 'IV'),
    'IV': ('V', 'I'),
    'V': ('I', 'vi'),
    'vi': ('ii', 'IV'),
    'vii°': ('I', 'iii'),
}

# qualities that can stand on a degree; anything else takes the fifths fallback
DIATONIC_QUALITIES = frozenset({
    Quality.MAJOR, Quality.MINOR, Quality.DIMINISHED,
    Quality.MAJOR7, Quality.MINOR7, Quality.DOMINANT7,
    Quality.SUS2, Quality.SUS4, Quality.ADD9,
})


@dataclass
class ProgressionNode:
    chord: Chord
    left: Optional['ProgressionNode'] = None    # expected
    right: Optional['ProgressionNode'] = None   # surprising

    def with_children(self, left: 'ProgressionNode', right: 'ProgressionNode') -> 'ProgressionNode':
        self.left, self.right = left, right
        return self

    def children(self) -> List['ProgressionNode']:
        return [n for n in (self.left, self.right) if n is not None]

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def walk(self) -> Iterator['ProgressionNode']:
        """Pre-order traversal: node, left subtree, right subtree."""
        yield self
        for child in self.children():
            yield from child.walk()

    def size(self) -> int:
        return sum(1 for _ in self.walk())

    def height(self) -> int:
        return 1 + max((c.height() for c in self.children()), default=-1)


def _degree(chord: Chord, tonic: int) -> Optional[str]:
    if chord.quality not in DIATONIC_QUALITIES:
        return None
    return DEGREES.get((chord.root - tonic) % 12)


def degree_of(chord: Chord, key: Optional[Note] = None) -> Optional[str]:
    """Diatonic degree of ``chord`` in the major key ``key``, or None when the
    root is off the scale or the quality has no diatonic reading."""
    return _degree(chord, chord.root if key is None else key.pitch_class())


def _diatonic_chord(degree: str, tonic: int) -> Chord:
    return Chord((tonic + DEGREE_OFFSETS[degree]) % 12, DEGREE_QUALITY[degree])


def _next_chords(chord: Chord, tonic: int, extended: bool) -> Tuple[Chord, Chord]:
    degree = _degree(chord, tonic)
    if degree is None:
        logging.debug("fifths fallback for %s (tonic %d)", chord.name(), tonic)
        return (Chord((chord.root - PERFECT_FIFTH) % 12, chord.quality),
                Chord((chord.root + PERFECT_FIFTH) % 12, chord.quality))

    expected, surprising = RULES[degree]
    left = _diatonic_chord(expected, tonic)
    if extended and degree == 'V':
        right = Chord((chord.root + TRITONE) % 12, Quality.DOMINANT7)
    else:
        right = _diatonic_chord(surprising, tonic)
    return left, right


def _grow(chord: Chord, tonic: int, extended: bool, depth: int) -> ProgressionNode:
    node = ProgressionNode(chord)
    if depth == 0:
        return node
    left, right = _next_chords(chord, tonic, extended)
    return node.with_children(
        _grow(left, tonic, extended, depth - 1),
        _grow(right, tonic, extended, depth - 1),
    )


def suggest(chord: Chord, key: Optional[Note] = None, extended: bool = False,
            depth: int = 2) -> ProgressionNode:
    """Build the full binary tree of next-chord suggestions rooted at ``chord``.

    Left children are the expected continuation, right children the
    surprising one. Without a key the chord's own root is the tonic for the
    whole tree. The result always holds 2**(depth+1) - 1 nodes.
    """
    if depth < 0:
        raise ValueError(f"depth must be >= 0, got {depth}")
    tonic = chord.root if key is None else key.pitch_class()
    return _grow(chord, tonic, extended, depth)


class ProgressionTree:
    """Suggestion settings owned by the application (extended mode, depth)."""
    def __init__(self, extended: bool = False, depth: int = 2):
        if depth < 0:
            raise ValueError(f"depth must be >= 0, got {depth}")
        self.extended = extended
        self.depth = depth

    def set_extended(self, extended: bool):
        self.extended = extended

    def suggest(self, chord: Chord, key: Optional[Note] = None) -> ProgressionNode:
        return suggest(chord, key, extended=self.extended, depth=self.depth)

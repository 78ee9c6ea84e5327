# theory/quality.py
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple


class Quality(Enum):
    MAJOR = 'major'
    MINOR = 'minor'
    DIMINISHED = 'diminished'
    AUGMENTED = 'augmented'
    MAJOR7 = 'major7'
    MINOR7 = 'minor7'
    DOMINANT7 = 'dominant7'
    DIMINISHED7 = 'diminished7'
    HALF_DIM7 = 'half_dim7'
    MINOR_MAJOR7 = 'minor_major7'
    AUGMENTED7 = 'augmented7'
    SUS2 = 'sus2'
    SUS4 = 'sus4'
    ADD9 = 'add9'
    UNKNOWN = 'unknown'

    @property
    def intervals(self) -> Tuple[int, ...]:
        return QUALITY_TABLE[self][0]

    @property
    def symbol(self) -> str:
        return QUALITY_TABLE[self][1]

    @property
    def is_minor(self) -> bool:
        return self in MINOR_FAMILY

    @property
    def is_diminished(self) -> bool:
        return self in DIMINISHED_FAMILY


# quality -> (ascending intervals from the root, display symbol)
QUALITY_TABLE: Dict[Quality, Tuple[Tuple[int, ...], str]] = {
    Quality.MAJOR:        ((0, 4, 7), ''),
    Quality.MINOR:        ((0, 3, 7), 'm'),
    Quality.DIMINISHED:   ((0, 3, 6), 'dim'),
    Quality.AUGMENTED:    ((0, 4, 8), '+'),
    Quality.SUS2:         ((0, 2, 7), 'sus2'),
    Quality.SUS4:         ((0, 5, 7), 'sus4'),
    Quality.MAJOR7:       ((0, 4, 7, 11), 'maj7'),
    Quality.MINOR7:       ((0, 3, 7, 10), 'm7'),
    Quality.DOMINANT7:    ((0, 4, 7, 10), '7'),
    Quality.DIMINISHED7:  ((0, 3, 6, 9), 'dim7'),
    Quality.HALF_DIM7:    ((0, 3, 6, 10), 'm7b5'),
    Quality.MINOR_MAJOR7: ((0, 3, 7, 11), 'mMaj7'),
    Quality.AUGMENTED7:   ((0, 4, 8, 10), '+7'),
    Quality.ADD9:         ((0, 4, 7, 14), 'add9'),
    Quality.UNKNOWN:      ((), '?'),
}

TRIADS: List[Quality] = [
    Quality.MAJOR, Quality.MINOR, Quality.DIMINISHED,
    Quality.AUGMENTED, Quality.SUS2, Quality.SUS4,
]
SEVENTHS: List[Quality] = [
    Quality.MAJOR7, Quality.MINOR7, Quality.DOMINANT7, Quality.DIMINISHED7,
    Quality.HALF_DIM7, Quality.MINOR_MAJOR7, Quality.AUGMENTED7,
]
EXTENDED: List[Quality] = [Quality.ADD9]

# lookup order: simplest explanation first
LOOKUP_ORDER: List[Quality] = TRIADS + SEVENTHS + EXTENDED

MINOR_FAMILY = frozenset({Quality.MINOR, Quality.MINOR7, Quality.MINOR_MAJOR7})
DIMINISHED_FAMILY = frozenset({Quality.DIMINISHED, Quality.DIMINISHED7, Quality.HALF_DIM7})

SYMBOL_ALIASES: Dict[str, Quality] = {
    '': Quality.MAJOR,
    'maj': Quality.MAJOR,
    'm': Quality.MINOR,
    'min': Quality.MINOR,
    'dim': Quality.DIMINISHED,
    '°': Quality.DIMINISHED,
    '+': Quality.AUGMENTED,
    'aug': Quality.AUGMENTED,
    'maj7': Quality.MAJOR7,
    'M7': Quality.MAJOR7,
    'm7': Quality.MINOR7,
    'min7': Quality.MINOR7,
    '7': Quality.DOMINANT7,
    'dom7': Quality.DOMINANT7,
    'dim7': Quality.DIMINISHED7,
    '°7': Quality.DIMINISHED7,
    'm7b5': Quality.HALF_DIM7,
    'ø7': Quality.HALF_DIM7,
    'ø': Quality.HALF_DIM7,
    'mMaj7': Quality.MINOR_MAJOR7,
    'mM7': Quality.MINOR_MAJOR7,
    '+7': Quality.AUGMENTED7,
    'aug7': Quality.AUGMENTED7,
    'sus2': Quality.SUS2,
    'sus4': Quality.SUS4,
    'sus': Quality.SUS4,
    'add9': Quality.ADD9,
}


def interval_set(intervals: Iterable[int]) -> FrozenSet[int]:
    return frozenset(i % 12 for i in intervals)


_CATALOG: List[Tuple[Quality, FrozenSet[int]]] = [
    (q, interval_set(q.intervals)) for q in LOOKUP_ORDER
]


def lookup(intervals: Iterable[int]) -> Optional[Quality]:
    """Exact, order-independent match of an interval set against the catalog.

    Intervals are reduced mod 12 and duplicates collapse, so (0, 4, 7, 14)
    and (0, 2, 4, 7) both find ADD9. Returns the first match in LOOKUP_ORDER.
    """
    wanted = interval_set(intervals)
    for quality, pcs in _CATALOG:
        if pcs == wanted:
            return quality
    return None


def quality_from_symbol(symbol: str) -> Optional[Quality]:
    return SYMBOL_ALIASES.get(symbol)

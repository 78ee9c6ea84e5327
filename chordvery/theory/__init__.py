from chordvery.theory.note import Note, NOTE_NAMES, MIDDLE_C, note_name, pitch_class_from_name
from chordvery.theory.quality import Quality, lookup
from chordvery.theory.chord import Chord, detect
from chordvery.theory.progression import ProgressionNode, ProgressionTree, degree_of, suggest

__all__ = [
    'Note', 'NOTE_NAMES', 'MIDDLE_C', 'note_name', 'pitch_class_from_name',
    'Quality', 'lookup',
    'Chord', 'detect',
    'ProgressionNode', 'ProgressionTree', 'degree_of', 'suggest',
]

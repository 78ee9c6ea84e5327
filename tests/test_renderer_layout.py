"""Pure layout helpers of chordvery.render.renderer."""
import unittest

from chordvery.render.renderer import DEFAULT_RANGE, key_role, keyboard_range, tree_layout
from chordvery.theory.chord import Chord
from chordvery.theory.note import Note
from chordvery.theory.progression import suggest
from chordvery.theory.quality import Quality


class TestKeyboardRange(unittest.TestCase):
    def test_empty(self):
        self.assertEqual(keyboard_range([]), DEFAULT_RANGE)

    def test_covers_notes(self):
        for pressed in ([60, 64, 67], [36, 84], [0, 5], [120, 127]):
            first, last = keyboard_range(pressed)
            self.assertLessEqual(first, min(pressed))
            self.assertGreaterEqual(last, max(pressed))
            self.assertEqual(first % 12, 0)
            self.assertLessEqual(last, 127)

    def test_min_width(self):
        first, last = keyboard_range([60], min_keys=25)
        self.assertGreaterEqual(last - first + 1, 25)


class TestKeyRole(unittest.TestCase):
    def test_roles(self):
        pressed = {52, 55, 60}   # C/E
        self.assertEqual(key_role(60, pressed, root=0, bass=4), 'root')
        self.assertEqual(key_role(52, pressed, root=0, bass=4), 'bass')
        self.assertEqual(key_role(55, pressed, root=0, bass=4), 'pressed')
        self.assertEqual(key_role(62, pressed, root=0, bass=4), 'idle')

    def test_bass_follows_chord_not_lowest_key(self):
        # C/E kept as the current chord while an unrelated dyad is held
        pressed = {50, 51}
        self.assertEqual(key_role(50, pressed, root=0, bass=4), 'pressed')
        self.assertEqual(key_role(51, pressed, root=0, bass=4), 'pressed')

    def test_no_chord(self):
        self.assertEqual(key_role(50, {50}), 'pressed')


class TestTreeLayout(unittest.TestCase):
    def test_slots(self):
        root = suggest(Chord(0, Quality.MAJOR), Note(60), depth=2)
        slots = tree_layout(root, 0, 0, 600, 400)
        self.assertEqual(len(slots), 7)
        self.assertEqual(slots[0].branch, 'current')
        self.assertIsNone(slots[0].parent_pos)
        self.assertEqual([s.branch for s in slots[1:]].count('expected'), 3)
        self.assertEqual([s.branch for s in slots[1:]].count('surprising'), 3)
        for s in slots[1:]:
            self.assertLess(s.parent_pos[0], s.pos[0])

    def test_children_straddle_parent(self):
        root = suggest(Chord(0, Quality.MAJOR), Note(60), depth=1)
        top, left, right = tree_layout(root, 0, 0, 600, 400)
        self.assertLess(left.pos[1], top.pos[1])
        self.assertGreater(right.pos[1], top.pos[1])


if __name__ == '__main__':
    unittest.main()

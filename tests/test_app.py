"""State handling of chordvery.app.App, driven without a window or device."""
import unittest

import pygame

from chordvery.app import App, Mode, key_from_name
from chordvery.config import AppConfig, TheoryConfig
from chordvery.theory.chord import Chord
from chordvery.theory.quality import Quality

C_MAJOR = [60, 64, 67]
A_MINOR = [57, 60, 64]


class TestKeyFromName(unittest.TestCase):
    def test_names(self):
        self.assertEqual(key_from_name("C").pitch_class(), 0)
        self.assertEqual(key_from_name("Bb").pitch_class(), 10)
        self.assertIsNone(key_from_name(None))

    def test_bad_name(self):
        self.assertRaises(ValueError, key_from_name, "H")


class TestApp(unittest.TestCase):
    def setUp(self):
        self.app = App(AppConfig())

    def test_initial_state(self):
        self.assertEqual(self.app.mode, Mode.DISCOVERY)
        self.assertIsNone(self.app.current_chord)
        self.assertIsNone(self.app.suggestions)
        self.assertIsNone(self.app.key)
        self.assertFalse(self.app.extended)

    def test_detects_and_suggests(self):
        self.app.tick(C_MAJOR)
        self.assertEqual(self.app.current_chord, Chord(0, Quality.MAJOR))
        self.assertEqual(self.app.history.names(), ["C"])
        self.assertEqual(self.app.suggestions.size(), 7)
        self.assertEqual(self.app.suggestions.left.chord.name(), "F")

    def test_first_chord_sets_key(self):
        self.app.tick(A_MINOR)
        self.app.tick(C_MAJOR)
        self.assertEqual(self.app.key.pitch_class(), 9)
        self.assertEqual(self.app.suggestions.chord.roman_numeral(self.app.key), "bIII")

    def test_release_keeps_chord(self):
        self.app.tick(C_MAJOR)
        self.app.tick([])
        self.assertEqual(self.app.current_chord.name(), "C")
        self.assertEqual(self.app.history.names(), ["C"])

    def test_unrecognised_keeps_chord(self):
        self.app.tick(C_MAJOR)
        self.app.tick([60, 61, 62])
        self.assertEqual(self.app.current_chord.name(), "C")

    def test_same_chord_again_not_logged(self):
        self.app.tick(C_MAJOR)
        self.app.tick([])
        self.app.tick([48, 64, 67])
        self.assertEqual(self.app.history.names(), ["C"])

    def test_progression(self):
        for notes in (C_MAJOR, A_MINOR, [53, 57, 60], [55, 59, 62]):
            self.app.tick(notes)
        self.assertEqual(self.app.history.names(), ["C", "Am", "F", "G"])
        self.assertEqual(self.app.suggestions.left.chord.name(), "C")

    def test_fixed_key(self):
        app = App(AppConfig(theory=TheoryConfig(key="G")))
        app.tick(C_MAJOR)
        self.assertEqual(app.key.pitch_class(), 7)
        # IV in G
        self.assertEqual(app.suggestions.left.chord.name(), "D")

    def test_clear_resets_key(self):
        self.app.tick(C_MAJOR)
        self.app.clear()
        self.assertEqual(len(self.app.history), 0)
        self.assertIsNone(self.app.key)

    def test_toggle_mode_fades(self):
        self.app.toggle_mode()
        self.assertEqual(self.app.mode, Mode.JAM)
        self.assertTrue(self.app.history.fade)
        self.app.toggle_mode()
        self.assertEqual(self.app.mode, Mode.DISCOVERY)
        self.assertFalse(self.app.history.fade)

    def test_toggle_extended_refreshes(self):
        app = App(AppConfig(theory=TheoryConfig(key="C")))
        app.tick([55, 59, 62])
        self.assertEqual(app.suggestions.right.chord.name(), "Am")
        app.toggle_extended()
        self.assertTrue(app.extended)
        self.assertEqual(app.suggestions.right.chord.name(), "C#7")

    def test_keys(self):
        self.app.handle_key(pygame.K_TAB)
        self.assertEqual(self.app.mode, Mode.JAM)
        self.app.handle_key(pygame.K_SLASH)
        self.assertTrue(self.app.show_help)
        # any key closes help and does nothing else
        self.app.handle_key(pygame.K_q)
        self.assertFalse(self.app.show_help)
        self.assertFalse(self.app.should_quit)
        self.app.handle_key(pygame.K_q)
        self.assertTrue(self.app.should_quit)

    def test_unbound_key(self):
        self.app.handle_key(pygame.K_z)
        self.assertFalse(self.app.should_quit)

    def test_unknown_action(self):
        with self.assertLogs(level='WARNING'):
            self.app.handle_action('explode')


if __name__ == '__main__':
    unittest.main()

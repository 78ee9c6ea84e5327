"""Held-note tracking in chordvery.midi.input, fed with mido messages
directly so no device is needed."""
import threading
import unittest

import mido

from chordvery.midi.input import MidiInput


class TestHeldNotes(unittest.TestCase):
    def setUp(self):
        self.midi = MidiInput()

    def test_empty(self):
        self.assertEqual(self.midi.held_notes(), frozenset())

    def test_note_on_off(self):
        for note in (60, 64, 67):
            self.midi.on_message(mido.Message('note_on', note=note, velocity=100))
        self.assertEqual(self.midi.held_notes(), frozenset({60, 64, 67}))
        self.midi.on_message(mido.Message('note_off', note=64, velocity=0))
        self.assertEqual(self.midi.held_notes(), frozenset({60, 67}))

    def test_zero_velocity_note_on_releases(self):
        self.midi.on_message(mido.Message('note_on', note=60, velocity=90))
        self.midi.on_message(mido.Message('note_on', note=60, velocity=0))
        self.assertEqual(self.midi.held_notes(), frozenset())

    def test_release_unknown_note(self):
        self.midi.on_message(mido.Message('note_off', note=10))
        self.assertEqual(self.midi.held_notes(), frozenset())

    def test_other_messages_ignored(self):
        self.midi.on_message(mido.Message('note_on', note=60, velocity=90))
        self.midi.on_message(mido.Message('control_change', control=64, value=127))
        self.midi.on_message(mido.Message('pitchwheel', pitch=100))
        self.assertEqual(self.midi.held_notes(), frozenset({60}))

    def test_snapshot_is_frozen(self):
        self.midi.on_message(mido.Message('note_on', note=60, velocity=90))
        snap = self.midi.held_notes()
        self.midi.on_message(mido.Message('note_on', note=62, velocity=90))
        self.assertEqual(snap, frozenset({60}))

    def test_disconnect_without_port(self):
        self.midi.on_message(mido.Message('note_on', note=60, velocity=90))
        self.midi.disconnect()
        self.assertEqual(self.midi.held_notes(), frozenset())
        self.assertIsNone(self.midi.port)

    def test_concurrent_writers(self):
        def play(base):
            for i in range(200):
                self.midi.on_message(mido.Message('note_on', note=base, velocity=80))
                self.midi.on_message(mido.Message('note_off', note=base))
            self.midi.on_message(mido.Message('note_on', note=base, velocity=80))

        threads = [threading.Thread(target=play, args=(n,)) for n in (48, 52, 55)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(self.midi.held_notes(), frozenset({48, 52, 55}))


if __name__ == '__main__':
    unittest.main()

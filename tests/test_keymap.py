"""Key binding (de)serialisation in chordvery.input.keymap."""
import json
import os
import tempfile
import unittest

import pygame

from chordvery.input.keymap import (
    ACTIONS, DEFAULT_BINDINGS, deserialize_bindings, load_bindings, name_to_keycode,
    save_bindings, serialize_bindings,
)


class TestBindings(unittest.TestCase):
    def test_defaults_cover_actions(self):
        self.assertEqual(set(DEFAULT_BINDINGS.values()), set(ACTIONS))
        self.assertEqual(DEFAULT_BINDINGS[pygame.K_TAB], 'toggle_mode')
        self.assertEqual(DEFAULT_BINDINGS[pygame.K_q], 'quit')

    def test_numeric_keycodes(self):
        self.assertEqual(name_to_keycode("113"), 113)
        self.assertEqual(deserialize_bindings({"113": "quit", "9": "toggle_mode"}),
                         {113: "quit", 9: "toggle_mode"})

    def test_unknown_action(self):
        self.assertRaises(ValueError, deserialize_bindings, {"113": "explode"})

    def test_key_names(self):
        self.assertEqual(deserialize_bindings({"x": "clear", "tab": "toggle_mode"}),
                         {pygame.K_x: "clear", pygame.K_TAB: "toggle_mode"})

    def test_serialize_uses_names(self):
        names = serialize_bindings(DEFAULT_BINDINGS)
        self.assertEqual(names["tab"], "toggle_mode")
        self.assertEqual(names["escape"], "quit")

    def test_round_trip(self):
        self.assertEqual(deserialize_bindings(serialize_bindings(DEFAULT_BINDINGS)),
                         DEFAULT_BINDINGS)

    def test_save_then_load(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "keys.json")
            save_bindings(path, {pygame.K_x: "clear", pygame.K_q: "quit"})
            self.assertEqual(load_bindings(path), {pygame.K_x: "clear", pygame.K_q: "quit"})

    def test_load(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "keys.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump({str(pygame.K_x): "clear"}, f)
            self.assertEqual(load_bindings(path), {pygame.K_x: "clear"})


if __name__ == '__main__':
    unittest.main()

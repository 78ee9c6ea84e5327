# app.py
import logging
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional

import pygame

from chordvery.config import AppConfig
from chordvery.input.keymap import ACTIONS, DEFAULT_BINDINGS, load_bindings
from chordvery.midi.input import MidiInput
from chordvery.render.renderer import Renderer
from chordvery.theory.chord import Chord, detect
from chordvery.theory.note import MIDDLE_C, Note, note_name, pitch_class_from_name
from chordvery.theory.progression import ProgressionNode, ProgressionTree
from chordvery.timeline.history import ChordHistory
from chordvery.utils.crashlog import log_exception


class Mode(Enum):
    DISCOVERY = "Discovery"
    JAM = "Jam"


def key_from_name(name: Optional[str]) -> Optional[Note]:
    """'C', 'F#', 'Bb' -> the note of that pitch class in the middle octave."""
    if name is None:
        return None
    pc = pitch_class_from_name(name)
    if pc is None:
        raise ValueError(f"Not a key name: {name!r}")
    return Note(MIDDLE_C + pc)


class App:
    def __init__(self, cfg: AppConfig, midi: Optional[MidiInput] = None):
        self.cfg = cfg
        self.midi = midi
        self.renderer = None

        self.bindings: Dict[int, str] = dict(DEFAULT_BINDINGS)
        if cfg.bindings_path:
            self.bindings.update(load_bindings(cfg.bindings_path))

        # state
        self.mode = Mode.DISCOVERY
        self.history = ChordHistory(cfg.history.max_entries, cfg.history.fade_age)
        self.tree = ProgressionTree(cfg.theory.extended, cfg.theory.depth)
        self.fixed_key: Optional[Note] = key_from_name(cfg.theory.key)
        self.key: Optional[Note] = self.fixed_key
        self.current_chord: Optional[Chord] = None
        self.suggestions: Optional[ProgressionNode] = None
        self.last_notes: FrozenSet[int] = frozenset()
        self.show_help = False
        self.should_quit = False

    @property
    def extended(self) -> bool:
        return self.tree.extended

    # ---------- actions ----------
    def toggle_mode(self):
        self.mode = Mode.JAM if self.mode == Mode.DISCOVERY else Mode.DISCOVERY
        self.history.set_fade(self.mode == Mode.JAM)

    def toggle_extended(self):
        self.tree.set_extended(not self.tree.extended)
        self._refresh_suggestions()

    def toggle_help(self):
        self.show_help = not self.show_help

    def clear(self):
        self.history.clear()
        self.key = self.fixed_key
        self._refresh_suggestions()

    def quit(self):
        self.should_quit = True

    def handle_action(self, action: str):
        handler = getattr(self, action, None)
        if action not in ACTIONS or handler is None:
            logging.warning("Ignoring unknown action %r", action)
            return
        handler()

    def handle_key(self, keycode: int):
        if self.show_help:
            self.show_help = False
            return
        action = self.bindings.get(keycode)
        if action:
            self.handle_action(action)

    # ---------- state ----------
    def _refresh_suggestions(self):
        if self.current_chord is None:
            self.suggestions = None
            return
        self.suggestions = self.tree.suggest(self.current_chord, self.key)

    def tick(self, notes: Optional[Iterable[int]] = None):
        if notes is None:
            notes = self.midi.held_notes() if self.midi else frozenset()
        notes = frozenset(notes)

        if notes != self.last_notes:
            self.last_notes = notes
            chord = detect(notes)
            if chord is not None:
                if self.current_chord is None or self.current_chord.name() != chord.name():
                    logging.debug("Detected %s from %s", chord.name(), sorted(notes))
                    self.history.push(chord)
                    if self.key is None:
                        self.key = Note(MIDDLE_C + chord.root)
                        logging.info("Key set to %s", note_name(chord.root))
                # a released chord stays current until the next one
                if chord != self.current_chord:
                    self.current_chord = chord
                    self._refresh_suggestions()

        self.history.tick()

    # ---------- Main loop ----------
    def _draw(self):
        r = self.renderer
        r.begin_frame()
        r.draw_status_bar(
            mode=self.mode.value,
            jam=self.mode == Mode.JAM,
            chord_text=self.current_chord.name() if self.current_chord else "-",
            extended=self.extended,
            key_text=self.key.name() if self.key else "auto",
        )
        r.draw_tree(self.suggestions, self.key)
        r.draw_history(self.history)
        chord = self.current_chord
        r.draw_keyboard(self.last_notes,
                        root=chord.root if chord else None,
                        bass=chord.bass if chord else None)
        if self.show_help:
            r.draw_help()
        r.end_frame()

    def run(self):
        self.renderer = Renderer(self.cfg.render)
        try:
            while not self.should_quit:
                self.renderer.tick()
                for e in pygame.event.get():
                    if e.type == pygame.QUIT:
                        self.quit()
                    elif e.type == pygame.KEYDOWN:
                        self.handle_key(e.key)
                self.tick()
                self._draw()
        except Exception as e:
            log_exception("main loop", e)
            raise
        finally:
            if self.midi:
                self.midi.disconnect()
            self.renderer.close()

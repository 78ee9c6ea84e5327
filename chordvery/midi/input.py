# midi/input.py
import logging
import threading
from typing import FrozenSet, List, Optional, Set

import mido


class MidiInputError(RuntimeError):
    pass


class MidiInput:
    """Tracks the set of currently held notes from a live MIDI input port.

    mido calls ``on_message`` from its own thread; readers only ever get a
    frozen snapshot through ``held_notes``.
    """
    def __init__(self):
        self.port = None
        self.port_name: Optional[str] = None
        self._held: Set[int] = set()
        self._lock = threading.Lock()

    # ---------- ports ----------
    @staticmethod
    def list_ports() -> List[str]:
        try:
            return list(mido.get_input_names())
        except Exception as e:
            raise MidiInputError(f"Cannot query MIDI inputs: {e}") from e

    @classmethod
    def connect(cls, port_index: int) -> 'MidiInput':
        ports = cls.list_ports()
        if not (0 <= port_index < len(ports)):
            raise MidiInputError(f"Port index {port_index} out of range ({len(ports)} available)")
        midi = cls()
        name = ports[port_index]
        try:
            midi.port = mido.open_input(name, callback=midi.on_message)
        except Exception as e:
            raise MidiInputError(f"Cannot open MIDI port {name!r}: {e}") from e
        midi.port_name = name
        logging.info("Connected to MIDI port: %s", name)
        return midi

    @classmethod
    def connect_first(cls) -> 'MidiInput':
        if not cls.list_ports():
            raise MidiInputError("No MIDI ports available")
        return cls.connect(0)

    def disconnect(self):
        if self.port is not None:
            try:
                self.port.close()
            finally:
                logging.info("Disconnected from MIDI port: %s", self.port_name)
                self.port = None
                self.port_name = None
        with self._lock:
            self._held.clear()

    # ---------- events ----------
    def on_message(self, msg: mido.Message):
        if msg.type == 'note_on' and msg.velocity > 0:
            with self._lock:
                self._held.add(msg.note)
        elif msg.type == 'note_off' or msg.type == 'note_on':
            with self._lock:
                self._held.discard(msg.note)

    def held_notes(self) -> FrozenSet[int]:
        with self._lock:
            return frozenset(self._held)

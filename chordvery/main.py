# main.py
import argparse
import logging
import os
import sys
import traceback
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from chordvery import __version__
from chordvery.app import App, key_from_name
from chordvery.config import AppConfig, HistoryConfig, MidiConfig, RenderConfig, TheoryConfig
from chordvery.input.keymap import DEFAULT_BINDINGS, load_bindings, save_bindings
from chordvery.midi.input import MidiInput, MidiInputError
from chordvery.theory.chord import Chord
from chordvery.theory.note import Note, pitch_class_from_name
from chordvery.theory.progression import ProgressionNode, suggest
from chordvery.utils.crashlog import log_dir, log_exception, setup_crashlog

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _init_logging(level: str = "INFO"):
    if logging.getLogger().handlers:
        return

    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
    try:
        fh = RotatingFileHandler(os.path.join(log_dir(), "chordvery.log"),
                                 maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(fh)
    except OSError as e:
        logging.warning("File logging disabled: %s", e)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="chordvery",
        description="Chord finder with MIDI input and progression suggestions",
    )
    ap.add_argument('-p', '--port', type=int, default=None, help="MIDI port index (default: first available)")
    ap.add_argument('-l', '--list', action='store_true', help="list available MIDI ports and exit")
    ap.add_argument('--no-midi', action='store_true', help="start without connecting to MIDI")
    ap.add_argument('-k', '--key', default=None, help="fix the key, e.g. C, F#, Bb (default: first chord played)")
    ap.add_argument('-e', '--extended', action='store_true', help="start in extended (tritone substitution) mode")
    ap.add_argument('-d', '--depth', type=int, default=2, help="suggestion tree depth")
    ap.add_argument('--bindings', default=None, help="JSON file of key name -> action")
    ap.add_argument('--save-bindings', default=None, metavar='PATH',
                    help="write the effective key bindings (defaults plus --bindings) as JSON and exit")
    ap.add_argument('--chord', default=None, help="print suggestions for a chord symbol and exit")
    ap.add_argument('--width', type=int, default=1280)
    ap.add_argument('--height', type=int, default=720)
    ap.add_argument('--fps', type=int, default=30)
    ap.add_argument('--log-level', default='INFO', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    ap.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    return ap


def format_tree(node: ProgressionNode, key: Optional[Note] = None) -> List[str]:
    """Indented text rendering of a suggestion tree, expected branch first."""
    lines = [f"{node.chord.name()} ({node.chord.roman_numeral(key)})"]

    def walk(n: ProgressionNode, prefix: str):
        kids = n.children()
        for i, child in enumerate(kids):
            last = i == len(kids) - 1
            lines.append(f"{prefix}{'└─ ' if last else '├─ '}"
                         f"{child.chord.name()} ({child.chord.roman_numeral(key)})")
            walk(child, prefix + ('   ' if last else '│  '))

    walk(node, "")
    return lines


def list_ports() -> int:
    try:
        ports = MidiInput.list_ports()
    except MidiInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if not ports:
        print("No MIDI input ports available.")
    else:
        print("Available MIDI input ports:")
        for i, name in enumerate(ports):
            print(f"  {i}: {name}")
    return 0


def print_chord(symbol: str, key_name: Optional[str], extended: bool, depth: int) -> int:
    chord = Chord.from_name(symbol)
    if chord is None:
        print(f"Error: cannot parse chord symbol {symbol!r}", file=sys.stderr)
        return 2
    key = key_from_name(key_name)
    for line in format_tree(suggest(chord, key, extended=extended, depth=depth), key):
        print(line)
    return 0


def write_bindings(out_path: str, bindings_path: Optional[str] = None) -> int:
    bindings = dict(DEFAULT_BINDINGS)
    try:
        if bindings_path:
            bindings.update(load_bindings(bindings_path))
        save_bindings(out_path, bindings)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    print(f"Key bindings written to {out_path}")
    return 0


def connect_midi(cfg: MidiConfig) -> Optional[MidiInput]:
    if not cfg.enabled:
        return None
    try:
        if cfg.port is None:
            return MidiInput.connect_first()
        return MidiInput.connect(cfg.port)
    except MidiInputError as e:
        logging.warning("Could not connect to MIDI: %s", e)
        print(f"Warning: could not connect to MIDI: {e}", file=sys.stderr)
        print("Continuing without MIDI input...", file=sys.stderr)
        return None


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _init_logging(args.log_level)

    if args.depth < 0:
        print("Error: --depth must be >= 0", file=sys.stderr)
        return 2
    if args.key is not None:
        if pitch_class_from_name(args.key) is None:
            print(f"Error: not a key name: {args.key!r}", file=sys.stderr)
            return 2

    if args.list:
        return list_ports()
    if args.chord:
        return print_chord(args.chord, args.key, args.extended, args.depth)
    if args.save_bindings:
        return write_bindings(args.save_bindings, args.bindings)

    cfg = AppConfig(
        render=RenderConfig(window_w=args.width, window_h=args.height, fps=args.fps),
        midi=MidiConfig(port=args.port, enabled=not args.no_midi),
        theory=TheoryConfig(key=args.key, extended=args.extended, depth=args.depth),
        history=HistoryConfig(),
        bindings_path=args.bindings,
    )

    logging.info("Chordvery %s starting", __version__)
    App(cfg, midi=connect_midi(cfg.midi)).run()
    return 0


def run():
    setup_crashlog()
    try:
        sys.exit(main())
    except Exception as e:
        try:
            path = log_exception("Top-level exception", e)
        except OSError:
            path = log_dir()
        logging.error("Uncaught exception: %s", e, exc_info=True)
        print(f"Chordvery crashed, see {path}", file=sys.stderr)
        traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    run()

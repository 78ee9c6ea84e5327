# ========================= input/keymap.py =========================
import json
from typing import Dict

import pygame

ACTIONS = ('quit', 'toggle_mode', 'toggle_extended', 'toggle_help', 'clear')

DEFAULT_BINDINGS: Dict[int, str] = {
    pygame.K_q: 'quit',
    pygame.K_ESCAPE: 'quit',
    pygame.K_TAB: 'toggle_mode',
    pygame.K_e: 'toggle_extended',
    pygame.K_QUESTION: 'toggle_help',
    pygame.K_SLASH: 'toggle_help',   # '?' arrives as shift+slash on most layouts
    pygame.K_c: 'clear',
}

HELP_LINES = [
    ("Tab", "Toggle Discovery/Jam mode"),
    ("e", "Toggle extended chords"),
    ("c", "Clear history"),
    ("?", "Toggle this help"),
    ("q/Esc", "Quit"),
]


def keycode_to_name(k: int) -> str:
    try:
        return pygame.key.name(k)
    except Exception:
        return str(k)


def name_to_keycode(name: str) -> int:
    """Turn 'e', 'tab', 'escape' back into a pygame keycode; plain integers pass through."""
    if name.strip().isdigit():
        return int(name)
    try:
        return pygame.key.key_code(name)
    except Exception as e:
        raise ValueError(f"Unknown key name: {name}") from e


def serialize_bindings(bindings: Dict[int, str]) -> dict:
    """Key names rather than keycodes, so the JSON stays readable."""
    return {keycode_to_name(k): action for k, action in bindings.items()}


def deserialize_bindings(obj: dict) -> Dict[int, str]:
    out: Dict[int, str] = {}
    for kname, action in obj.items():
        if action not in ACTIONS:
            raise ValueError(f"Unknown action {action!r} for key {kname!r}")
        out[name_to_keycode(str(kname))] = action
    return out


def load_bindings(path: str) -> Dict[int, str]:
    with open(path, "r", encoding="utf-8") as f:
        return deserialize_bindings(json.load(f))


def save_bindings(path: str, bindings: Dict[int, str]):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(serialize_bindings(bindings), f, ensure_ascii=False, indent=2)

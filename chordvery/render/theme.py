# render/theme.py
BACKGROUND = (12, 12, 14)
PANEL = (24, 24, 28)
BORDER = (60, 60, 66)
BORDER_FOCUSED = (90, 200, 220)

TEXT = (220, 220, 230)
TEXT_DIM = (120, 120, 130)
TITLE = (90, 200, 220)
CHORD_NAME = (250, 210, 90)
HELP_KEY = (250, 210, 90)

WHITE_KEY = (230, 230, 230)
WHITE_KEY_PRESSED = (90, 140, 255)
WHITE_KEY_ROOT = (200, 90, 200)
WHITE_KEY_BASS = (80, 200, 120)
BLACK_KEY = (18, 18, 20)
BLACK_KEY_PRESSED = (90, 200, 220)
BLACK_KEY_ROOT = (200, 90, 200)
BLACK_KEY_BASS = (80, 200, 120)

TREE_CURRENT = (250, 210, 90)
TREE_EXPECTED = (110, 210, 120)
TREE_SURPRISING = (220, 100, 220)
TREE_CONNECTOR = (80, 80, 90)

MODE_DISCOVERY = (90, 200, 220)
MODE_JAM = (220, 100, 220)

# newest first; anything older uses the last colour
HISTORY_AGE = [(250, 210, 90), (230, 230, 235), (170, 170, 180), (110, 110, 120)]


def history_color(age: int):
    return HISTORY_AGE[min(age, len(HISTORY_AGE) - 1)]


def tree_color(branch: str):
    return {
        'current': TREE_CURRENT,
        'expected': TREE_EXPECTED,
        'surprising': TREE_SURPRISING,
    }[branch]


def key_color(role: str, black: bool):
    white_key, black_key = {
        'idle': (WHITE_KEY, BLACK_KEY),
        'root': (WHITE_KEY_ROOT, BLACK_KEY_ROOT),
        'bass': (WHITE_KEY_BASS, BLACK_KEY_BASS),
        'pressed': (WHITE_KEY_PRESSED, BLACK_KEY_PRESSED),
    }[role]
    return black_key if black else white_key

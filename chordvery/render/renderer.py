# render/renderer.py
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import pygame

from chordvery.config import RenderConfig
from chordvery.input.keymap import HELP_LINES
from chordvery.render import theme
from chordvery.theory.note import Note
from chordvery.theory.progression import ProgressionNode
from chordvery.timeline.history import ChordHistory

STATUS_H = 36
PAD = 12
WHITE_SET = {0, 2, 4, 5, 7, 9, 11}
DEFAULT_RANGE = (48, 72)   # C3..C5


@dataclass
class TreeSlot:
    node: ProgressionNode
    level: int
    branch: str                              # 'current', 'expected' or 'surprising'
    pos: Tuple[int, int]
    parent_pos: Optional[Tuple[int, int]] = None


def keyboard_range(pressed: Iterable[int], min_keys: int = 25) -> Tuple[int, int]:
    """Inclusive (first, last) MIDI range to draw: octave aligned, padded
    around the held notes and never narrower than ``min_keys``."""
    pressed = list(pressed)
    if not pressed:
        return DEFAULT_RANGE
    lo, hi = min(pressed), max(pressed)
    start = (max(lo - 5, 0) // 12) * 12
    end = ((hi + 7) // 12 + 1) * 12
    num_keys = max(end - start, min_keys)
    return start, min(start + num_keys - 1, 127)


def key_role(p: int, pressed, root: Optional[int] = None, bass: Optional[int] = None) -> str:
    """'idle', 'root', 'bass' or 'pressed'. Root and bass match on pitch class."""
    if p not in pressed:
        return 'idle'
    if root is not None and p % 12 == root:
        return 'root'
    if bass is not None and p % 12 == bass:
        return 'bass'
    return 'pressed'


def tree_layout(root: ProgressionNode, x: int, y: int, w: int, h: int) -> List[TreeSlot]:
    """Place every node of a full binary tree: one column per level, each
    node centred vertically in its share of the column."""
    columns = root.height() + 1
    col_w = w / columns
    slots: List[TreeSlot] = []

    def place(node, level, index, branch, parent_pos):
        rows = 2 ** level
        pos = (int(x + col_w * level + PAD), int(y + h * (2 * index + 1) / (2 * rows)))
        slots.append(TreeSlot(node, level, branch, pos, parent_pos))
        if node.left is not None:
            place(node.left, level + 1, index * 2, 'expected', pos)
        if node.right is not None:
            place(node.right, level + 1, index * 2 + 1, 'surprising', pos)

    place(root, 0, 0, 'current', None)
    return slots


class Renderer:
    def __init__(self, cfg: RenderConfig):
        pygame.init()
        self.cfg = cfg
        self.screen = pygame.display.set_mode((cfg.window_w, cfg.window_h))
        pygame.display.set_caption("Chordvery")
        self.font = pygame.font.SysFont("consolas", 18)
        self.font_big = pygame.font.SysFont("consolas", 26, bold=True)
        self.font_small = pygame.font.SysFont("consolas", 14)
        self.clock = pygame.time.Clock()
        logging.debug("Renderer ready: %dx%d", cfg.window_w, cfg.window_h)

    def tick(self, fps=None) -> float:
        return self.clock.tick(fps or self.cfg.fps) / 1000.0

    def begin_frame(self):
        self.screen.fill(theme.BACKGROUND)

    def end_frame(self):
        pygame.display.flip()

    def close(self):
        pygame.quit()

    # ------- layout -------
    def content_rects(self) -> Tuple[pygame.Rect, pygame.Rect]:
        w, h = self.cfg.window_w, self.cfg.window_h
        body_h = h - STATUS_H - self.cfg.piano_h - PAD * 2
        tree_w = int(w * 0.6)
        tree = pygame.Rect(PAD, STATUS_H + PAD, tree_w - PAD * 2, body_h)
        history = pygame.Rect(tree_w, STATUS_H + PAD, w - tree_w - PAD, body_h)
        return tree, history

    def _panel(self, rect: pygame.Rect, title: str, focused: bool = False):
        pygame.draw.rect(self.screen, theme.PANEL, rect, border_radius=8)
        pygame.draw.rect(self.screen, theme.BORDER_FOCUSED if focused else theme.BORDER,
                         rect, 1, border_radius=8)
        label = self.font_small.render(f" {title} ", True, theme.TEXT_DIM)
        self.screen.blit(label, (rect.x + 10, rect.y + 4))

    def _text(self, text: str, pos, color, font=None, center=False):
        surf = (font or self.font).render(text, True, color)
        r = surf.get_rect()
        if center:
            r.center = pos
        else:
            r.midleft = pos
        self.screen.blit(surf, r)
        return r

    # ------- status bar -------
    def draw_status_bar(self, mode: str, jam: bool, chord_text: str, extended: bool, key_text: str):
        w = self.cfg.window_w
        pygame.draw.rect(self.screen, theme.PANEL, (0, 0, w, STATUS_H))
        pygame.draw.line(self.screen, theme.BORDER, (0, STATUS_H), (w, STATUS_H), 1)

        y = STATUS_H // 2
        x = self._text("Chordvery", (10, y), theme.TITLE, self.font).right + 16
        fields = [
            ("[Tab] Mode: ", mode, theme.MODE_JAM if jam else theme.MODE_DISCOVERY),
            ("Playing: ", chord_text, theme.CHORD_NAME),
            ("Key: ", key_text, theme.TEXT),
            ("[e] Extended: ", "ON" if extended else "OFF", theme.TEXT),
            ("[?] ", "Help", theme.TEXT_DIM),
        ]
        for label, value, color in fields:
            x = self._text(label, (x, y), theme.TEXT_DIM, self.font_small).right
            x = self._text(value, (x, y), color, self.font_small).right + 18

    # ------- suggestion tree -------
    def draw_tree(self, root: Optional[ProgressionNode], key: Optional[Note]):
        rect, _ = self.content_rects()
        self._panel(rect, "Suggestions")
        if root is None:
            self._text("Play a chord...", rect.center, theme.TEXT_DIM, center=True)
            return

        inner = rect.inflate(-PAD * 2, -PAD * 4)
        for slot in tree_layout(root, inner.x, inner.y, inner.w, inner.h):
            if slot.parent_pos is not None:
                start = (slot.parent_pos[0] + 70, slot.parent_pos[1])
                pygame.draw.line(self.screen, theme.TREE_CONNECTOR, start,
                                 (slot.pos[0] - 6, slot.pos[1]), 1)
            font = self.font_big if slot.level == 0 else self.font
            r = self._text(slot.node.chord.name(), slot.pos, theme.tree_color(slot.branch), font)
            numeral = slot.node.chord.roman_numeral(key)
            self._text(numeral, (r.x, r.bottom + 8), theme.TEXT_DIM, self.font_small)

    # ------- history -------
    def draw_history(self, history: ChordHistory):
        _, rect = self.content_rects()
        self._panel(rect, "History")
        entries = history.entries()
        if not entries:
            self._text("No chords yet...", rect.center, theme.TEXT_DIM, center=True)
            return

        line_h = self.font.get_linesize() + 4
        visible = max(1, (rect.h - PAD * 3) // line_h)
        y = rect.y + PAD * 2 + line_h // 2
        for entry in reversed(entries[-visible:]):
            color = theme.history_color(entry.age) if history.fade else theme.CHORD_NAME
            self._text(entry.chord.name(), (rect.x + PAD, y), color)
            y += line_h

    # ------- piano -------
    def draw_keyboard(self, pressed: Iterable[int], root: Optional[int] = None,
                      bass: Optional[int] = None):
        """Held notes light up; held notes on the chord root and bass pitch
        classes get their own colours."""
        pressed = set(pressed)
        first, last = keyboard_range(pressed, self.cfg.min_keys)
        w, h, ph = self.cfg.window_w, self.cfg.window_h, self.cfg.piano_h
        top = h - ph
        pygame.draw.rect(self.screen, theme.PANEL, (0, top, w, ph))

        whites = [p for p in range(first, last + 1) if (p % 12) in WHITE_SET]
        white_w = float(w) / max(1, len(whites))

        def fill_for(p, black):
            return theme.key_color(key_role(p, pressed, root, bass), black)

        x = 0.0
        for p in whites:
            pygame.draw.rect(self.screen, fill_for(p, False), (x, top, white_w - 1, ph))
            pygame.draw.rect(self.screen, theme.BORDER, (x, top, white_w - 1, ph), 1)
            if p % 12 == 0:
                label = Note(p).display()
                self._text(label, (x + white_w / 2, h - 12), theme.TEXT_DIM, self.font_small, center=True)
            x += white_w

        idx_white = 0
        for p in range(first, last + 1):
            pc = p % 12
            if pc in WHITE_SET:
                if pc in {0, 2, 5, 7, 9} and p + 1 <= last:
                    bx = idx_white * white_w + white_w * 0.7
                    bw, bh = white_w * 0.6, ph * 0.6
                    pygame.draw.rect(self.screen, fill_for(p + 1, True), (bx, top, bw, bh))
                    pygame.draw.rect(self.screen, theme.BORDER, (bx, top, bw, bh), 1)
                idx_white += 1

    # ------- help overlay -------
    def draw_help(self):
        w, h = self.cfg.window_w, self.cfg.window_h
        mask = pygame.Surface((w, h), pygame.SRCALPHA)
        mask.fill((0, 0, 0, 140))
        self.screen.blit(mask, (0, 0))

        line_h = self.font.get_linesize() + 6
        panel = pygame.Rect(0, 0, 420, line_h * (len(HELP_LINES) + 3))
        panel.center = (w // 2, h // 2)
        self._panel(panel, "Help", focused=True)

        y = panel.y + line_h * 1.5
        for key, text in HELP_LINES:
            self._text(key, (panel.x + 24, y), theme.HELP_KEY)
            self._text(text, (panel.x + 120, y), theme.TEXT)
            y += line_h
        self._text("Press any key to close", (panel.x + 24, y), theme.TEXT_DIM, self.font_small)

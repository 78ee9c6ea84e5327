# ========================= config.py =========================
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class RenderConfig:
    window_w: int = 1280
    window_h: int = 720
    piano_h: int = 150
    fps: int = 30
    min_keys: int = 25      # narrowest keyboard shown


@dataclass
class MidiConfig:
    port: Optional[int] = None   # None = first available
    enabled: bool = True


@dataclass
class TheoryConfig:
    key: Optional[str] = None    # pitch name such as "C" or "Bb"; None = follow first chord
    extended: bool = False
    depth: int = 2


@dataclass
class HistoryConfig:
    max_entries: int = 16
    fade_age: int = 8


@dataclass
class AppConfig:
    render: RenderConfig = field(default_factory=RenderConfig)
    midi: MidiConfig = field(default_factory=MidiConfig)
    theory: TheoryConfig = field(default_factory=TheoryConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    bindings_path: Optional[str] = None

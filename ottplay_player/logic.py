import logging

from .utils import NORMAL_RATE, RATE_STEPS, clamp

PANEL_NONE = ""
PANEL_VOLUME = "volume"
PANEL_QUALITY = "quality"
PANEL_SPEED = "speed"
PANELS = (PANEL_VOLUME, PANEL_QUALITY, PANEL_SPEED)

QUALITY_AUTO = "auto"
HD_MIN_HEIGHT = 1080


class PlaybackSession:
    """Playback state of one mounted player. Mutated only from engine
    callbacks or explicit commands."""

    def __init__(self, source_url: str = ""):
        self.source_url = source_url
        self.current_time = 0.0
        self.duration = 0.0
        self.is_playing = False
        self.volume = 1.0
        self.is_muted = False
        self.playback_rate = NORMAL_RATE
        self.is_fullscreen = False
        self.quality = QUALITY_AUTO

    def reset(self, source_url: str):
        # Window state and audio level survive a source switch.
        self.source_url = source_url
        self.current_time = 0.0
        self.duration = 0.0
        self.is_playing = False
        self.playback_rate = NORMAL_RATE
        self.quality = QUALITY_AUTO

    def set_duration(self, seconds):
        try:
            value = float(seconds or 0.0)
        except (TypeError, ValueError):
            value = 0.0
        self.duration = max(0.0, value)
        self.current_time = self.clamp_time(self.current_time)

    def set_current_time(self, seconds):
        try:
            value = float(seconds or 0.0)
        except (TypeError, ValueError):
            return
        self.current_time = self.clamp_time(value)

    def set_volume(self, volume: float, muted: bool):
        self.is_muted = bool(muted)
        value = clamp(float(volume), 0.0, 1.0)
        # Keep the last audible level so unmuting can restore it.
        if value > 0:
            self.volume = value
        elif not self.is_muted:
            self.volume = 0.0

    def clamp_time(self, seconds: float) -> float:
        if self.duration <= 0:
            return max(0.0, seconds)
        return clamp(seconds, 0.0, self.duration)

    @property
    def effective_volume(self) -> float:
        return 0.0 if self.is_muted else self.volume

    @property
    def progress_percent(self) -> float:
        if self.duration <= 0:
            return 0.0
        return clamp(self.current_time / self.duration * 100.0, 0.0, 100.0)


class PanelState:
    """At most one popover is open at a time."""

    def __init__(self):
        self.active = PANEL_NONE

    @property
    def is_open(self) -> bool:
        return self.active != PANEL_NONE

    def toggle(self, name: str) -> str:
        if name not in PANELS:
            raise ValueError(f"unknown panel: {name!r}")
        self.active = PANEL_NONE if self.active == name else name
        return self.active

    def close(self) -> bool:
        was_open = self.is_open
        self.active = PANEL_NONE
        return was_open


class SpeedSelection:
    """Pending vs applied playback rate for the speed panel."""

    def __init__(self, applied: float = NORMAL_RATE):
        self.applied = applied
        self.pending = applied

    def open(self):
        self.pending = self.applied

    def choose(self, rate: float) -> bool:
        if rate not in RATE_STEPS:
            logging.debug("Ignoring unsupported playback rate %s", rate)
            return False
        self.pending = rate
        return True

    def apply(self) -> float:
        self.applied = self.pending
        return self.applied

    def cancel(self):
        self.pending = self.applied


class QualityLevel:
    def __init__(self, height: int):
        self.height = int(height)
        self.label = f"{self.height}p"
        self.value = self.label

    @property
    def is_hd(self) -> bool:
        return self.height >= HD_MIN_HEIGHT

    def __eq__(self, other):
        return isinstance(other, QualityLevel) and other.height == self.height

    def __hash__(self):
        return hash(self.height)

    def __repr__(self):
        return f"QualityLevel({self.height})"


def build_quality_levels(heights) -> list[QualityLevel]:
    seen = set()
    levels = []
    for raw in heights:
        try:
            height = int(raw or 0)
        except (TypeError, ValueError):
            continue
        if height <= 0 or height in seen:
            continue
        seen.add(height)
        levels.append(QualityLevel(height))
    levels.sort(key=lambda level: level.height, reverse=True)
    return levels


def quality_options(levels) -> list[tuple[str, str]]:
    """(value, label) pairs for display, with Auto always first."""
    return [(QUALITY_AUTO, "Auto")] + [(level.value, level.label) for level in levels]


def quality_height(value: str) -> int:
    token = str(value or "").strip().lower()
    if token.endswith("p"):
        token = token[:-1]
    return int(token) if token.isdigit() else 0


def is_hd_quality(value: str) -> bool:
    return value != QUALITY_AUTO and quality_height(value) >= HD_MIN_HEIGHT


def ratio_from_position(x: float, width: float) -> float:
    if width <= 0:
        return 0.0
    return clamp(float(x) / float(width), 0.0, 1.0)


class SeekDrag:
    """Pointer session on the seek bar: begin, any number of moves, end."""

    def __init__(self):
        self.active = False
        self.ratio = None

    def begin(self, x: float, width: float) -> float:
        self.active = True
        self.ratio = ratio_from_position(x, width)
        return self.ratio

    def move(self, x: float, width: float):
        if not self.active:
            return None
        self.ratio = ratio_from_position(x, width)
        return self.ratio

    def end(self):
        if not self.active:
            return None
        self.active = False
        return self.ratio

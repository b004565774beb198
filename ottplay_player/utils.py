import math
import os
import sys
from pathlib import Path
from urllib.parse import urlparse

RATE_STEPS = (0.5, 0.75, 1.0, 1.25, 1.5, 1.75, 2.0)
NORMAL_RATE = 1.0
APP_DIR_NAME = "OTTplayPlayer"


def get_resource_path(relative_path: str) -> Path:
    """Get absolute path to resource, works for dev and for PyInstaller."""
    if getattr(sys, "frozen", False):
        base_path = Path(sys._MEIPASS)
    else:
        base_path = Path(__file__).parent
    return base_path / relative_path


def get_user_data_dir() -> Path:
    """Get writable base directory for settings and logs."""
    override = os.getenv("OTTPLAY_PLAYER_HOME", "").strip()
    if override:
        base = Path(override)
    elif os.name == "nt" and os.getenv("APPDATA"):
        base = Path(os.getenv("APPDATA")) / APP_DIR_NAME
    else:
        base = Path.home() / ".ottplay-player"
    base.mkdir(parents=True, exist_ok=True)
    return base


def get_user_data_path(filename: str) -> str:
    return str(get_user_data_dir() / filename)


def is_stream_url(value: str) -> bool:
    parsed = urlparse(str(value or ""))
    return bool(parsed.scheme and parsed.netloc)


def looks_like_hls_url(url: str) -> bool:
    lower = str(url or "").split("?", 1)[0].split("#", 1)[0].lower()
    return lower.endswith(".m3u8")


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def format_time(seconds) -> str:
    """Format a playback position as ``H:MM:SS`` or ``M:SS``.

    Missing, non-numeric and non-finite values render as ``0:00``.
    """
    try:
        value = float(seconds)
    except (TypeError, ValueError):
        return "0:00"
    if not math.isfinite(value) or value <= 0:
        return "0:00"

    total_seconds = int(math.floor(value))
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    secs = total_seconds % 60
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_rate(rate: float) -> str:
    value = float(rate)
    if value.is_integer():
        return f"{int(value)}x"
    return f"{value:g}x"

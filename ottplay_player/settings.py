from PySide6.QtCore import QSettings

from .utils import get_user_data_path

HIDE_DELAY_KEY = "player/hide_delay_ms"
SKIP_SECONDS_KEY = "player/skip_seconds"
LANGUAGE_KEY = "player/language"
VIDEO_HWDEC_KEY = "video/hwdec"
VIDEO_RENDERER_KEY = "video/renderer"
NETWORK_TIMEOUT_KEY = "network/timeout"

HWDEC_CHOICES = {"auto", "auto-safe", "auto-copy", "no"}
RENDERER_CHOICES = {"gpu", "gpu-next"}

DEFAULT_PLAYER_SETTINGS = {
    "hide_delay_ms": 3500,
    "skip_seconds": 10,
    "hwdec": "auto-safe",
    "renderer": "gpu",
    "network_timeout": 30,
}


def _to_int(value, default: int, min_value: int | None = None, max_value: int | None = None) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = int(default)
    if min_value is not None:
        number = max(min_value, number)
    if max_value is not None:
        number = min(max_value, number)
    return number


def _to_choice(value, default: str, allowed: set[str]) -> str:
    token = str(value or "").strip()
    if token in allowed:
        return token
    return default


def get_settings() -> QSettings:
    """Returns a QSettings object pointing to a visible .ini file."""
    path = get_user_data_path("settings.ini")
    return QSettings(path, QSettings.IniFormat)


def load_player_settings() -> dict:
    settings = get_settings()
    defaults = DEFAULT_PLAYER_SETTINGS
    return {
        "hide_delay_ms": _to_int(
            settings.value(HIDE_DELAY_KEY, defaults["hide_delay_ms"]),
            defaults["hide_delay_ms"], 500, 60000,
        ),
        "skip_seconds": _to_int(
            settings.value(SKIP_SECONDS_KEY, defaults["skip_seconds"]),
            defaults["skip_seconds"], 1, 600,
        ),
        "hwdec": _to_choice(
            settings.value(VIDEO_HWDEC_KEY, defaults["hwdec"]),
            defaults["hwdec"], HWDEC_CHOICES,
        ),
        "renderer": _to_choice(
            settings.value(VIDEO_RENDERER_KEY, defaults["renderer"]),
            defaults["renderer"], RENDERER_CHOICES,
        ),
        "network_timeout": _to_int(
            settings.value(NETWORK_TIMEOUT_KEY, defaults["network_timeout"]),
            defaults["network_timeout"], 1, 600,
        ),
    }


def save_player_settings(config: dict):
    settings = get_settings()
    if "hide_delay_ms" in config: settings.setValue(HIDE_DELAY_KEY, int(config["hide_delay_ms"]))
    if "skip_seconds" in config: settings.setValue(SKIP_SECONDS_KEY, int(config["skip_seconds"]))
    if "hwdec" in config: settings.setValue(VIDEO_HWDEC_KEY, str(config["hwdec"]))
    if "renderer" in config: settings.setValue(VIDEO_RENDERER_KEY, str(config["renderer"]))
    if "network_timeout" in config: settings.setValue(NETWORK_TIMEOUT_KEY, int(config["network_timeout"]))
    settings.sync()


def load_language_setting(default: str = "") -> str:
    settings = get_settings()
    return str(settings.value(LANGUAGE_KEY, default) or default)


def save_language_setting(lang_code: str) -> None:
    settings = get_settings()
    settings.setValue(LANGUAGE_KEY, str(lang_code or ""))
    settings.sync()

import json
import locale
import logging

from .utils import get_resource_path

# Fallback English dictionary
_default_en = {
    # Top bar
    "Back": "Back",

    # Control bar
    "Volume": "Volume",
    "Settings": "Settings",
    "Speed": "Speed",
    "Full Screen": "Full Screen",
    "Exit": "Exit",
    "Play / Pause": "Play / Pause",
    "Skip back {} seconds": "Skip back {} seconds",
    "Skip forward {} seconds": "Skip forward {} seconds",

    # Panels
    "Quality": "Quality",
    "Auto": "Auto",
    "HD": "HD",
    "Playback Speed": "Playback Speed",
    "{}x (Normal)": "{}x (Normal)",
    "Cancel": "Cancel",
    "Apply": "Apply",
    "Close": "Close",

    # Status Overlays
    "Playing": "Playing",
    "Paused": "Paused",
    "Muted": "Muted",
    "Unmuted": "Unmuted",
    "Volume: {}%": "Volume: {}%",
    "Speed: {}": "Speed: {}",
    "Quality: {}": "Quality: {}",
    "Seek {}s": "Seek {}s",
    "Playback failed: {}": "Playback failed: {}",

    # Launcher
    "Video Player": "Video Player",
    "Video playback is not available: {}": "Video playback is not available: {}",
}

_translations = {}


def get_system_language():
    try:
        lang, _ = locale.getlocale()
        if lang:
            return lang.split("_")[0].lower()
    except (TypeError, ValueError):
        pass
    return "en"


def load_language(lang_code):
    global _translations
    lang_file = get_resource_path("locales") / f"{lang_code}.json"
    if not lang_file.exists():
        _translations = {}
        return
    try:
        with open(lang_file, "r", encoding="utf-8") as f:
            _translations = json.load(f)
    except Exception as e:
        logging.warning("Failed to load language '%s': %s", lang_code, e)
        _translations = {}


def setup_i18n(lang_code=None):
    if not lang_code:
        lang_code = get_system_language()
    load_language(lang_code)
    logging.info("Language: %s (%d overrides)", lang_code, len(_translations))


def tr(text, *args):
    """Translate function. Takes a format string and optional positional arguments."""
    translated = _translations.get(text, _default_en.get(text, text))
    if args:
        try:
            return translated.format(*args)
        except Exception:
            return translated
    return translated

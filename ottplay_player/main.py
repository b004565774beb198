import argparse
import logging
import os
import sys
from pathlib import Path

from .bootstrap import configure_windows_dlls

if os.name == "nt":
    import ctypes
    ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID("ottplay.player.1.0")

from PySide6.QtWidgets import QApplication

_HERE = Path(__file__).resolve().parent

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _runtime_base_dir() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return _HERE


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ottplay-player",
        description="Play an HLS stream in the OTTplay player window.",
    )
    parser.add_argument("url", help="manifest URL (.m3u8) or any source mpv can open")
    parser.add_argument("--title", default="", help="title shown in the top bar")
    parser.add_argument("--certification", default="", help="age rating badge, e.g. U/A 13+")
    parser.add_argument("--fullscreen", action="store_true", help="start in fullscreen")
    parser.add_argument("--log-level", default="INFO", choices=LOG_LEVELS, type=str.upper)
    return parser


def run(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # libmpv must be discoverable before python-mpv is imported by the engine.
    configure_windows_dlls(_runtime_base_dir())

    from .app_logging import setup_app_logging
    from .engine import MPV_AVAILABLE, MPV_IMPORT_ERROR
    from .i18n import setup_i18n, tr
    from .player_window import PlayerDialog
    from .settings import load_language_setting, load_player_settings
    from .ui.icons import get_app_icon
    from .utils import is_stream_url, looks_like_hls_url

    log_path = setup_app_logging(getattr(logging, args.log_level))
    logging.info("Log file: %s", log_path)
    setup_i18n(load_language_setting())

    if not MPV_AVAILABLE:
        logging.error("mpv backend unavailable: %s", MPV_IMPORT_ERROR)
        print(tr("Video playback is not available: {}", MPV_IMPORT_ERROR), file=sys.stderr)
        return 2

    if not is_stream_url(args.url):
        logging.warning("Source is not a network URL: %s", args.url)
    elif not looks_like_hls_url(args.url):
        logging.warning("Source does not look like an HLS manifest: %s", args.url)

    config = load_player_settings()
    logging.info("Player settings: %s", config)

    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setWindowIcon(get_app_icon())

    dialog = PlayerDialog(
        args.url,
        title=args.title,
        certification=args.certification,
        config=config,
    )
    if args.fullscreen:
        dialog.showFullScreen()
    else:
        dialog.show()
    exit_code = dialog.exec()
    logging.info("Player closed: result=%s", exit_code)
    return 0


if __name__ == "__main__":
    raise SystemExit(run())

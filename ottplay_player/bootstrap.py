import ctypes
import logging
import os
import sys
from pathlib import Path

MPV_DLL_NAMES = ("libmpv-2.dll", "mpv-2.dll", "mpv-1.dll")


def configure_windows_dlls(project_dir: Path) -> list[str]:
    """Make a bundled libmpv discoverable before python-mpv is imported.

    Returns the directories that were added to the DLL search path.
    """
    if os.name != "nt":
        return []

    candidates = [project_dir.resolve(), (project_dir / "vendor").resolve(), Path.cwd().resolve()]
    if getattr(sys, "frozen", False):
        candidates.insert(0, Path(sys.executable).parent.resolve())
    env_override = os.getenv("OTTPLAY_MPV_DIR", "").strip()
    if env_override:
        candidates.insert(0, Path(env_override).resolve())

    added = []
    seen = set()
    for directory in candidates:
        key = str(directory).lower()
        if key in seen or not directory.is_dir():
            continue
        seen.add(key)
        if not any((directory / name).exists() for name in MPV_DLL_NAMES):
            continue
        if hasattr(os, "add_dll_directory"):
            os.add_dll_directory(str(directory))
        added.append(str(directory))

    if added:
        os.environ["PATH"] = os.pathsep.join([*added, os.environ.get("PATH", "")])
        logging.info("libmpv search dirs: %s", added)

    # python-mpv looks the library up by name; preloading pins the bundled copy.
    for directory in added:
        for dll_name in MPV_DLL_NAMES:
            dll_path = Path(directory) / dll_name
            if not dll_path.exists():
                continue
            try:
                ctypes.CDLL(str(dll_path))
                return added
            except OSError as e:
                logging.warning("Could not preload %s: %s", dll_path, e)
    return added
